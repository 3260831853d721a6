"""Tactics board - a team's formation and manual placements for a session."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from src.lineup_engine.assignment_engine import AssignmentEngine
from src.lineup_engine.config import DEFAULT_FORMATION
from src.lineup_engine.models import (
    Assignment,
    LineRatings,
    Player,
    PositionLine,
    SlotRef,
)
from src.lineup_engine.rating_aggregator import RatingAggregator
from src.lineup_engine.roster_filter import is_available
from src.lineup_engine.views import LINEUP_BOARD, LineupView, build_lineup

logger = logging.getLogger(__name__)


class OverrideError(ValueError):
    """Raised when a manual placement cannot be applied to the board."""

    pass


class TacticsBoard:
    """Holds the manual override map and validates every write to it.

    The board is the only long-lived mutable lineup state. Placements are
    checked when they are made, so the lineup computed from them never has
    to reject anything.
    """

    def __init__(
        self,
        roster: Iterable[Player],
        formation_id: str = DEFAULT_FORMATION,
        engine: Optional[AssignmentEngine] = None,
        view: LineupView = LINEUP_BOARD,
    ):
        self.engine = engine or AssignmentEngine()
        self.view = view
        self.roster: List[Player] = list(roster)
        self.formation_id = formation_id
        self.template = self.engine.registry.template_for(formation_id)
        self._overrides: Dict[str, SlotRef] = {}

    @property
    def overrides(self) -> Dict[str, SlotRef]:
        """Copy of the current placements, oldest first."""
        return dict(self._overrides)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def validate_placement(
        self, player_id: str, line, slot_index: int
    ) -> Tuple[bool, Optional[str]]:
        """
        Check whether a placement can be applied.

        Returns:
            (is_valid, error_message) - (True, None) if valid
        """
        if player_id not in self._roster_ids():
            return False, f"Player {player_id} is not in the roster"

        try:
            line = PositionLine(line)
        except ValueError:
            return False, f"Unknown line {line!r}"

        if not isinstance(slot_index, int) or isinstance(slot_index, bool):
            return False, f"Slot index {slot_index!r} is not an integer"

        count = self.template.count_for(line)
        if not 0 <= slot_index < count:
            return (
                False,
                f"{line.value} slot {slot_index} is out of range for "
                f"{self.template.id} ({count} slots)",
            )

        return True, None

    def place_player(self, player_id: str, line, slot_index: int) -> SlotRef:
        """Pin a player to a slot.

        A player already pinned to that slot is replaced. Moving a player
        makes that placement the most recent one.

        Raises:
            OverrideError: unknown player, line or slot index.
        """
        is_valid, error_msg = self.validate_placement(player_id, line, slot_index)
        if not is_valid:
            logger.warning("Invalid placement attempted: %s", error_msg)
            raise OverrideError(error_msg)

        ref = SlotRef(PositionLine(line), slot_index)
        for other_id, other_ref in list(self._overrides.items()):
            if other_ref == ref and other_id != player_id:
                del self._overrides[other_id]
                logger.info("%s replaced in %s slot %d", other_id, ref.line.value, slot_index)

        self._overrides.pop(player_id, None)
        self._overrides[player_id] = ref

        logger.info("Placed %s in %s slot %d", player_id, ref.line.value, slot_index)
        return ref

    def remove_player(self, player_id: str) -> bool:
        """Drop a player's placement; the slot goes back to auto-fill.

        Returns:
            True if a placement was removed, False if there was none.
        """
        if self._overrides.pop(player_id, None) is None:
            return False
        logger.info("Removed placement for %s", player_id)
        return True

    def clear(self) -> None:
        self._overrides.clear()

    def change_formation(self, formation_id: str) -> List[str]:
        """Switch formation, dropping placements the new layout cannot hold.

        Returns:
            Ids of the players whose placements were dropped.
        """
        self.formation_id = formation_id
        self.template = self.engine.registry.template_for(formation_id)

        dropped = [
            player_id
            for player_id, ref in self._overrides.items()
            if ref.slot_index >= self.template.count_for(ref.line)
        ]
        for player_id in dropped:
            del self._overrides[player_id]

        if dropped:
            logger.info(
                "Formation %s dropped %d placement(s): %s",
                self.template.id,
                len(dropped),
                ", ".join(dropped),
            )
        return dropped

    def update_roster(self, roster: Iterable[Player]) -> List[str]:
        """Replace the roster snapshot, dropping placements of departed players.

        Returns:
            Ids of the players whose placements were dropped.
        """
        self.roster = list(roster)
        ids = self._roster_ids()

        dropped = [player_id for player_id in self._overrides if player_id not in ids]
        for player_id in dropped:
            del self._overrides[player_id]
            logger.info("Dropped placement for departed player %s", player_id)
        return dropped

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def lineup(self) -> Assignment:
        return build_lineup(
            self.view,
            self.roster,
            self.formation_id,
            self._overrides,
            engine=self.engine,
        )

    def ratings(self) -> LineRatings:
        return RatingAggregator().aggregate(self.lineup())

    def starting_xi(self) -> List[Player]:
        return self.lineup().players()

    def bench(self) -> List[Player]:
        return self.lineup().bench(self.roster)

    def candidates_for_slot(self, line, slot_index: int) -> List[Player]:
        """Available bench players suited to a slot, highest rating first.

        Raises:
            OverrideError: if the slot does not exist in the formation.
        """
        try:
            slot = self.template.slot(PositionLine(line), slot_index)
        except ValueError:
            slot = None
        if slot is None:
            raise OverrideError(
                f"{self.template.id} has no {line} slot {slot_index}"
            )

        candidates = [
            p for p in self.bench() if is_available(p) and slot.accepts(p.position)
        ]
        return sorted(candidates, key=lambda p: -p.rating)

    def _roster_ids(self) -> set:
        return {p.id for p in self.roster}
