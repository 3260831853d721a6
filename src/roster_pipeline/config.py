from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
ROSTERS_DIR = DATA_DIR / "rosters"

# Roster CSV layout
REQUIRED_COLUMNS = ["player_id", "name", "position", "rating"]
OPTIONAL_COLUMNS = ["injury", "illness", "suspension_games"]

# Spellings seen in exported squads -> canonical position
POSITION_ALIASES = {
    "GKP": "GK",
    "G": "GK",
    "DM": "CDM",
    "DMF": "CDM",
    "AM": "CAM",
    "AMF": "CAM",
    "CMF": "CM",
    "LF": "LW",
    "RF": "RW",
    "LWF": "LW",
    "RWF": "RW",
    "FW": "ST",
    "STR": "ST",
    "CFW": "CF",
}
