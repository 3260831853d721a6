from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Formation used when none is given or the given one is unknown
DEFAULT_FORMATION = "4-3-3"

# Player rating bounds
MIN_RATING = 1
MAX_RATING = 99

# Whether overrides for injured/ill/suspended players are dropped by default
EVICT_UNAVAILABLE_OVERRIDES_DEFAULT = False
