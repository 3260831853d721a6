from src.lineup_engine.config import PROJECT_ROOT

# Saved tactics boards, one JSON file per team
BOARDS_DIR = PROJECT_ROOT / "data" / "boards"
