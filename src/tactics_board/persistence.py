"""Board persistence - save and load tactics boards to/from JSON files."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from src.lineup_engine.assignment_engine import AssignmentEngine
from src.lineup_engine.config import DEFAULT_FORMATION
from src.lineup_engine.models import Player
from src.lineup_engine.views import LINEUP_BOARD, VIEWS
from src.tactics_board.board import OverrideError, TacticsBoard
from src.tactics_board.config import BOARDS_DIR

logger = logging.getLogger(__name__)


class BoardPersistence:
    """Handles saving and loading tactics boards to/from JSON files.

    Only the formation, the view name and the manual placements are stored.
    The roster is supplied again on load, since it changes between sessions.
    """

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or BOARDS_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def save_board(self, team_id, board: TacticsBoard) -> Path:
        """Save a team's board to JSON.

        Args:
            team_id: Identifier of the team owning the board.
            board: The board to persist.

        Returns:
            Path to the saved file.
        """
        filepath = self._path_for(team_id)

        data = {
            "team_id": team_id,
            "formation_id": board.formation_id,
            "view": board.view.name,
            "saved_at": datetime.now().isoformat(),
            "overrides": [
                {
                    "player_id": player_id,
                    "line": ref.line.value,
                    "slot_index": ref.slot_index,
                }
                for player_id, ref in board.overrides.items()
            ],
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        logger.info(
            "Saved board for team %s (%s, %d placements) to %s",
            team_id,
            board.formation_id,
            len(data["overrides"]),
            filepath,
        )
        return filepath

    def load_board(
        self,
        team_id,
        roster: Iterable[Player],
        engine: Optional[AssignmentEngine] = None,
    ) -> Optional[TacticsBoard]:
        """Load a team's board against the current roster.

        Every saved placement is applied again through the board, so a
        placement that no longer fits (player gone, slot out of range) is
        skipped with a warning instead of failing the load.

        Returns:
            TacticsBoard if found and readable, None otherwise.
        """
        filepath = self._path_for(team_id)

        if not filepath.exists():
            logger.warning("Board file not found: %s", filepath)
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt board file %s: %s", filepath, e)
            return None

        view = VIEWS.get(data.get("view"), LINEUP_BOARD)
        board = TacticsBoard(
            roster,
            data.get("formation_id", DEFAULT_FORMATION),
            engine=engine,
            view=view,
        )

        skipped = 0
        for entry in data.get("overrides", []):
            try:
                board.place_player(
                    entry["player_id"], entry["line"], entry["slot_index"]
                )
            except (OverrideError, KeyError, TypeError) as e:
                skipped += 1
                logger.warning("Skipping saved placement %s: %s", entry, e)

        logger.info(
            "Loaded board for team %s from %s (%d placements skipped)",
            team_id,
            filepath,
            skipped,
        )
        return board

    def list_saved_boards(self) -> List[Dict]:
        """List all saved boards with metadata.

        Returns:
            List of dicts with team_id, formation_id, view, saved_at and
            placements. Sorted by saved_at descending (most recent first).
        """
        boards = []

        for filepath in self.storage_dir.glob("board_*.json"):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)

                boards.append(
                    {
                        "team_id": data["team_id"],
                        "formation_id": data.get("formation_id", DEFAULT_FORMATION),
                        "view": data.get("view", LINEUP_BOARD.name),
                        "saved_at": data.get("saved_at", ""),
                        "placements": len(data.get("overrides", [])),
                    }
                )
            except (json.JSONDecodeError, OSError, KeyError) as e:
                logger.warning("Skipping corrupt board file %s: %s", filepath, e)
                continue

        return sorted(boards, key=lambda x: x["saved_at"], reverse=True)

    def delete_board(self, team_id) -> bool:
        """Delete a saved board.

        Returns:
            True if deleted, False if not found.
        """
        filepath = self._path_for(team_id)
        if not filepath.exists():
            return False

        filepath.unlink()
        logger.info("Deleted board for team %s", team_id)
        return True

    def _path_for(self, team_id) -> Path:
        return self.storage_dir / f"board_{team_id}.json"
