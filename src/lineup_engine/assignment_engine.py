"""Squad-to-formation assignment engine.

Maps a roster onto the slots of a formation template:

1. seed slots from manual overrides (all lines, in the order supplied);
2. rank the remaining available players by rating (stable, so ties keep
   roster order);
3. fill each line's empty slots tier by tier from the slots' role
   preferences, then fall back to the best remaining player of the line;
4. optionally backfill still-empty slots from anyone left on the roster.

The "already placed" set is threaded explicitly through every step and the
result is checked for duplicate players before it is returned.
"""

import logging
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set

from src.lineup_engine.config import EVICT_UNAVAILABLE_OVERRIDES_DEFAULT
from src.lineup_engine.formations import DEFAULT_REGISTRY, FormationRegistry
from src.lineup_engine.models import (
    LINE_ORDER,
    Assignment,
    AssignmentNotice,
    FormationTemplate,
    NoticeCode,
    Player,
    PositionLine,
    SlotAssignment,
    SlotRef,
)
from src.lineup_engine.roster_filter import available_players, is_available, unavailable_reason
from src.lineup_engine.taxonomy import line_of

logger = logging.getLogger(__name__)

# Lines drawing only on their own personnel go first; midfield is the one
# line whose wide slots may take leftover wingers or full-backs.
FILL_LINE_ORDER = (
    PositionLine.GOALKEEPER,
    PositionLine.DEFENSE,
    PositionLine.ATTACK,
    PositionLine.MIDFIELD,
)

Board = Dict[PositionLine, List[Optional[Player]]]


class AssignmentIntegrityError(RuntimeError):
    """Raised when a computed assignment fields the same player twice."""


class AssignmentEngine:
    """Builds Starting XI assignments from a roster and a formation id.

    The engine holds no per-call state: ``assign`` never mutates the roster,
    the overrides or the registry, and identical inputs give identical
    output.
    """

    def __init__(self, registry: Optional[FormationRegistry] = None):
        self.registry = registry or DEFAULT_REGISTRY

    def assign(
        self,
        roster: Iterable[Player],
        formation_id: str,
        manual_overrides: Optional[Mapping[str, SlotRef]] = None,
        show_empty_slots: bool = False,
        *,
        backfill_from_roster: bool = False,
        evict_unavailable_overrides: bool = EVICT_UNAVAILABLE_OVERRIDES_DEFAULT,
    ) -> Assignment:
        """Compute the slot -> player assignment.

        Args:
            roster: The team's players (available or not).
            formation_id: Formation string, e.g. "4-3-3". Unknown ids use
                the default template and add a FORMATION_UNKNOWN notice.
            manual_overrides: Ordered mapping of player id to the slot the
                user placed them in. Later entries win a contested slot.
            show_empty_slots: Keep unfilled slots as EMPTY entries instead of
                returning dense, possibly shorter lines.
            backfill_from_roster: Fill slots left empty after line-based
                filling with the best remaining player of any line.
            evict_unavailable_overrides: Drop overrides for injured, ill or
                suspended players instead of honouring them.

        Returns:
            The completed :class:`Assignment`.
        """
        notices: List[AssignmentNotice] = []

        template, known = self.registry.resolve(formation_id)
        if not known:
            notices.append(
                AssignmentNotice(
                    NoticeCode.FORMATION_UNKNOWN,
                    f"Unknown formation {formation_id!r}, using {template.id}",
                )
            )

        squad = _unique_players(roster)
        board: Board = {
            line: [None] * template.count_for(line) for line in LINE_ORDER
        }

        used = self._seed_overrides(
            template,
            squad,
            manual_overrides or {},
            board,
            notices,
            evict_unavailable_overrides,
        )

        ranked = sorted(available_players(squad.values()), key=lambda p: -p.rating)
        for line in FILL_LINE_ORDER:
            used = used | self._fill_line(template, line, board, ranked, used)

        if backfill_from_roster:
            used = used | self._backfill(board, ranked, used, notices)

        self._verify_unique(board)

        assignment = self._build(template, board, show_empty_slots, notices)
        logger.debug(
            "Assigned %d/%d slots for %s (%d players, %d notices)",
            len(used),
            template.total_slots,
            template.id,
            len(squad),
            len(notices),
        )
        return assignment

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _seed_overrides(
        self,
        template: FormationTemplate,
        squad: Dict[str, Player],
        overrides: Mapping[str, SlotRef],
        board: Board,
        notices: List[AssignmentNotice],
        evict_unavailable: bool,
    ) -> FrozenSet[str]:
        """Place manually assigned players; return the ids placed."""
        placed: Dict[tuple, str] = {}

        for player_id, ref in overrides.items():
            player = squad.get(player_id)
            if player is None:
                _reject(notices, player_id, f"Player {player_id} is not in the roster")
                continue

            try:
                line = PositionLine(ref.line)
            except ValueError:
                _reject(notices, player_id, f"Unknown line {ref.line!r}")
                continue

            if not isinstance(ref.slot_index, int) or isinstance(ref.slot_index, bool):
                _reject(
                    notices, player_id, f"Slot index {ref.slot_index!r} is not an integer"
                )
                continue

            count = template.count_for(line)
            if not 0 <= ref.slot_index < count:
                _reject(
                    notices,
                    player_id,
                    f"{line.value} slot {ref.slot_index} is out of range "
                    f"for {template.id} ({count} slots)",
                )
                continue

            if evict_unavailable and not is_available(player):
                message = (
                    f"{player.name} is {unavailable_reason(player)}, "
                    f"removed from {line.value} slot {ref.slot_index}"
                )
                logger.warning("Override evicted: %s", message)
                notices.append(
                    AssignmentNotice(NoticeCode.OVERRIDE_EVICTED, message, player_id)
                )
                continue

            key = (line, ref.slot_index)
            previous = placed.get(key)
            if previous is not None:
                message = (
                    f"{squad[previous].name} replaced by {player.name} in "
                    f"{line.value} slot {ref.slot_index}"
                )
                logger.info("Override superseded: %s", message)
                notices.append(
                    AssignmentNotice(NoticeCode.OVERRIDE_SUPERSEDED, message, previous)
                )

            placed[key] = player_id
            board[line][ref.slot_index] = player

        return frozenset(placed.values())

    def _fill_line(
        self,
        template: FormationTemplate,
        line: PositionLine,
        board: Board,
        ranked: List[Player],
        used: FrozenSet[str],
    ) -> FrozenSet[str]:
        """Fill the empty slots of one line; return the ids placed.

        Filling is tier-major rather than slot by slot: each slot takes its
        first-choice tier before any slot takes a fallback tier. In 4-3-3 a
        second right winger therefore only reaches the LW slot once the RW
        slot has claimed the best RW, and the centre slot gets its striker
        before either wing falls back.
        """
        slots = [s for s in template.fill_order(line) if board[line][s.index] is None]
        if not slots:
            return frozenset()

        taken: Set[str] = set(used)
        slot_tiers = {s.index: s.tiers() for s in slots}
        depth = max(len(tiers) for tiers in slot_tiers.values())

        # Every slot gets a shot at its first choice before any slot
        # settles for its second.
        for level in range(depth):
            for slot in slots:
                tiers = slot_tiers[slot.index]
                if board[line][slot.index] is not None or level >= len(tiers):
                    continue
                tier = tiers[level]
                player = _best(ranked, taken, lambda p: p.position in tier)
                if player is not None:
                    board[line][slot.index] = player
                    taken.add(player.id)

        for slot in slots:
            if board[line][slot.index] is not None:
                continue
            player = _best(ranked, taken, lambda p: line_of(p.position) == line)
            if player is None:
                break
            board[line][slot.index] = player
            taken.add(player.id)

        return frozenset(taken) - used

    def _backfill(
        self,
        board: Board,
        ranked: List[Player],
        used: FrozenSet[str],
        notices: List[AssignmentNotice],
    ) -> FrozenSet[str]:
        """Fill leftover empty slots from any line; return the ids placed."""
        taken: Set[str] = set(used)

        for line in LINE_ORDER:
            for index, occupant in enumerate(board[line]):
                if occupant is not None:
                    continue
                player = _best(ranked, taken, lambda p: True)
                if player is None:
                    return frozenset(taken) - used
                board[line][index] = player
                taken.add(player.id)

                message = (
                    f"{player.name} ({player.position.value}) backfilled into "
                    f"{line.value} slot {index}"
                )
                logger.warning("Roster backfill: %s", message)
                notices.append(
                    AssignmentNotice(NoticeCode.ROSTER_BACKFILL, message, player.id)
                )

        return frozenset(taken) - used

    @staticmethod
    def _verify_unique(board: Board) -> None:
        seen: Dict[str, str] = {}
        for line in LINE_ORDER:
            for index, player in enumerate(board[line]):
                if player is None:
                    continue
                where = f"{line.value}[{index}]"
                if player.id in seen:
                    raise AssignmentIntegrityError(
                        f"Player {player.id} fielded at both {seen[player.id]} "
                        f"and {where}"
                    )
                seen[player.id] = where

    @staticmethod
    def _build(
        template: FormationTemplate,
        board: Board,
        show_empty_slots: bool,
        notices: List[AssignmentNotice],
    ) -> Assignment:
        lines: Dict[PositionLine, List[SlotAssignment]] = {}
        for line in LINE_ORDER:
            entries = [
                SlotAssignment(slot, board[line][slot.index])
                for slot in template.slots_for(line)
            ]
            if not show_empty_slots:
                entries = [e for e in entries if not e.is_empty]
            lines[line] = entries

        return Assignment(
            formation=template,
            lines=lines,
            show_empty_slots=show_empty_slots,
            notices=notices,
        )


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _unique_players(roster: Iterable[Player]) -> Dict[str, Player]:
    """Index players by id, keeping the first occurrence of a repeated id."""
    squad: Dict[str, Player] = {}
    for player in roster:
        if player.id in squad:
            logger.debug("Ignoring repeated roster entry for %s", player.id)
            continue
        squad[player.id] = player
    return squad


def _best(
    ranked: List[Player], taken: Set[str], predicate: Callable[[Player], bool]
) -> Optional[Player]:
    """Highest-rated player not yet taken that satisfies *predicate*."""
    for player in ranked:
        if player.id not in taken and predicate(player):
            return player
    return None


def _reject(notices: List[AssignmentNotice], player_id: str, reason: str) -> None:
    logger.warning("Override rejected for %s: %s", player_id, reason)
    notices.append(AssignmentNotice(NoticeCode.OVERRIDE_REJECTED, reason, player_id))


_DEFAULT_ENGINE = AssignmentEngine()


def assign(
    roster: Iterable[Player],
    formation_id: str,
    manual_overrides: Optional[Mapping[str, SlotRef]] = None,
    show_empty_slots: bool = False,
    **options,
) -> Assignment:
    """Run the default engine; see :meth:`AssignmentEngine.assign`."""
    return _DEFAULT_ENGINE.assign(
        roster, formation_id, manual_overrides, show_empty_slots, **options
    )
