from src.tactics_board.board import OverrideError, TacticsBoard
from src.tactics_board.persistence import BoardPersistence

__all__ = ["BoardPersistence", "OverrideError", "TacticsBoard"]
