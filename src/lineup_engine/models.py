"""Lineup data models - players, formation slots and computed assignments."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple


class Position(str, Enum):
    """Every position a player can be registered at."""

    GK = "GK"
    LB = "LB"
    CB = "CB"
    RB = "RB"
    LWB = "LWB"
    RWB = "RWB"
    CDM = "CDM"
    CM = "CM"
    CAM = "CAM"
    LM = "LM"
    RM = "RM"
    LW = "LW"
    RW = "RW"
    CF = "CF"
    ST = "ST"


class PositionLine(str, Enum):
    """Coarse tactical band a position belongs to."""

    GOALKEEPER = "GOALKEEPER"
    DEFENSE = "DEFENSE"
    MIDFIELD = "MIDFIELD"
    ATTACK = "ATTACK"


# Order lines are listed in a Starting XI (back to front)
LINE_ORDER = (
    PositionLine.GOALKEEPER,
    PositionLine.DEFENSE,
    PositionLine.MIDFIELD,
    PositionLine.ATTACK,
)


class LateralRole(str, Enum):
    """Left/centre/right tag used to bias slot filling."""

    LEFT = "LEFT"
    CENTRAL_DEFENSIVE = "CENTRAL_DEFENSIVE"
    CENTRAL = "CENTRAL"
    CENTRAL_ATTACKING = "CENTRAL_ATTACKING"
    RIGHT = "RIGHT"


class NoticeCode(str, Enum):
    """Non-fatal conditions raised while computing an assignment."""

    FORMATION_UNKNOWN = "FORMATION_UNKNOWN"
    OVERRIDE_REJECTED = "OVERRIDE_REJECTED"
    OVERRIDE_SUPERSEDED = "OVERRIDE_SUPERSEDED"
    OVERRIDE_EVICTED = "OVERRIDE_EVICTED"
    ROSTER_BACKFILL = "ROSTER_BACKFILL"


@dataclass(frozen=True)
class Player:
    """A squad member as seen by the lineup engine."""

    id: str
    name: str
    position: Position
    rating: int  # 1-99
    injury: Optional[str] = None
    illness: Optional[str] = None
    suspension_games: int = 0


@dataclass(frozen=True)
class SlotSpec:
    """One numbered position within a formation's line.

    ``role_candidates`` pairs each preferred position with its priority
    (0 = most preferred). Positions sharing a priority form one tier.
    """

    index: int
    line: PositionLine
    label: Position  # shown on the slot while it is empty
    role_candidates: Tuple[Tuple[Position, int], ...] = ()
    row: str = "front"  # "front" or "back"

    def tiers(self) -> List[FrozenSet[Position]]:
        """Role candidates grouped by ascending priority."""
        grouped: Dict[int, set] = {}
        for position, priority in self.role_candidates:
            grouped.setdefault(priority, set()).add(position)
        return [frozenset(grouped[p]) for p in sorted(grouped)]

    def accepts(self, position: Position) -> bool:
        """Whether *position* appears in any of this slot's tiers."""
        return any(position == candidate for candidate, _ in self.role_candidates)


@dataclass(frozen=True)
class FormationTemplate:
    """Static slot layout for a named formation."""

    id: str
    defense_count: int
    midfield_count: int
    forward_count: int
    slots: Tuple[SlotSpec, ...]

    def __post_init__(self):
        expected = 1 + self.defense_count + self.midfield_count + self.forward_count
        if len(self.slots) != expected:
            raise ValueError(
                f"Formation {self.id} has {len(self.slots)} slots, "
                f"expected {expected}"
            )
        for line in LINE_ORDER:
            indices = sorted(s.index for s in self.slots if s.line == line)
            if indices != list(range(self.count_for(line))):
                raise ValueError(
                    f"Formation {self.id} {line.value} slot indices {indices} "
                    f"are not contiguous from 0"
                )

    def count_for(self, line: PositionLine) -> int:
        """Number of slots the formation has in *line*."""
        return {
            PositionLine.GOALKEEPER: 1,
            PositionLine.DEFENSE: self.defense_count,
            PositionLine.MIDFIELD: self.midfield_count,
            PositionLine.ATTACK: self.forward_count,
        }[line]

    def slots_for(self, line: PositionLine) -> List[SlotSpec]:
        """Slots of *line* in index (left-to-right) order."""
        return sorted(
            (s for s in self.slots if s.line == line), key=lambda s: s.index
        )

    def slot(self, line: PositionLine, index: int) -> Optional[SlotSpec]:
        """Look up a single slot, or None if out of range."""
        for s in self.slots:
            if s.line == line and s.index == index:
                return s
        return None

    def fill_order(self, line: PositionLine) -> List[SlotSpec]:
        """Front-row slots left-to-right, then back-row slots left-to-right."""
        line_slots = self.slots_for(line)
        front = [s for s in line_slots if s.row == "front"]
        back = [s for s in line_slots if s.row != "front"]
        return front + back

    @property
    def total_slots(self) -> int:
        return len(self.slots)


@dataclass(frozen=True)
class SlotRef:
    """Target of a manual placement: a line and a slot index within it."""

    line: PositionLine
    slot_index: int


@dataclass(frozen=True)
class SlotAssignment:
    """A slot and whoever fills it. ``player`` is None for an EMPTY slot."""

    slot: SlotSpec
    player: Optional[Player] = None

    @property
    def is_empty(self) -> bool:
        return self.player is None


@dataclass(frozen=True)
class AssignmentNotice:
    """Something the caller may want to surface or log."""

    code: NoticeCode
    message: str
    player_id: Optional[str] = None


@dataclass
class Assignment:
    """Completed slot -> player mapping for one formation."""

    formation: FormationTemplate
    lines: Dict[PositionLine, List[SlotAssignment]]
    show_empty_slots: bool = False
    notices: List[AssignmentNotice] = field(default_factory=list)

    def line(self, line: PositionLine) -> List[SlotAssignment]:
        """Slots of one line (EMPTY slots only present in show-empty mode)."""
        return list(self.lines.get(line, []))

    def players(self) -> List[Player]:
        """Starting XI ordered GK, defense, midfield, attack."""
        return [
            sa.player
            for line in LINE_ORDER
            for sa in self.lines.get(line, [])
            if sa.player is not None
        ]

    def player_ids(self) -> List[str]:
        return [p.id for p in self.players()]

    def slot_of(self, player_id: str) -> Optional[SlotRef]:
        """Where *player_id* is fielded, or None if not in the XI."""
        for line in LINE_ORDER:
            for sa in self.lines.get(line, []):
                if sa.player is not None and sa.player.id == player_id:
                    return SlotRef(line, sa.slot.index)
        return None

    def bench(self, roster: Iterable[Player]) -> List[Player]:
        """Roster players not in the XI, in roster order."""
        selected = set(self.player_ids())
        return [p for p in roster if p.id not in selected]

    def empty_slots(self) -> List[SlotSpec]:
        return [
            sa.slot
            for line in LINE_ORDER
            for sa in self.lines.get(line, [])
            if sa.player is None
        ]

    def has_notice(self, code: NoticeCode) -> bool:
        return any(n.code == code for n in self.notices)

    @property
    def formation_unknown(self) -> bool:
        """True when the requested formation fell back to the default."""
        return self.has_notice(NoticeCode.FORMATION_UNKNOWN)


@dataclass(frozen=True)
class LineRatings:
    """Per-line mean ratings of a lineup."""

    attack: float
    defense: float
    midfield: float
    overall: float

    def rounded(self) -> Dict[str, int]:
        """Half-up integer ratings, overall taken from the rounded lines."""
        attack = _round_half_up(self.attack)
        defense = _round_half_up(self.defense)
        midfield = _round_half_up(self.midfield)
        nonzero = [r for r in (attack, defense, midfield) if r > 0]
        overall = _round_half_up(sum(nonzero) / len(nonzero)) if nonzero else 0
        return {
            "attack": attack,
            "defense": defense,
            "midfield": midfield,
            "overall": overall,
        }


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
