"""Formation template registry.

Each formation is pure data: an ordered list of slots per line, every slot
carrying a prioritized list of the positions it prefers. Adding a formation
means adding an entry to ``_BUILTIN_TEMPLATES`` (or calling
:meth:`FormationRegistry.register`), not writing a new code path.

Slot order within a line is the visual left-to-right order used by the
lineup board. Midfield lines with a front/back split mark the deeper slots
``row="back"``; the engine fills front-row slots first.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.lineup_engine.config import DEFAULT_FORMATION
from src.lineup_engine.models import (
    FormationTemplate,
    LateralRole,
    Position,
    PositionLine,
    SlotSpec,
)
from src.lineup_engine.taxonomy import lateral_role_of, positions_in_line

logger = logging.getLogger(__name__)

GK = PositionLine.GOALKEEPER
DEF = PositionLine.DEFENSE
MID = PositionLine.MIDFIELD
ATT = PositionLine.ATTACK

P = Position


def parse_formation(formation_id: str) -> Tuple[int, int, int]:
    """Parse a formation string into (defense, midfield, forward) counts.

    Examples:
        "4-3-3"   -> (4, 3, 3)
        "4-2-3-1" -> (4, 5, 1)   # the two midfield bands are summed

    Raises:
        ValueError: if the string is not 3 or 4 dash-separated integers.
    """
    parts = str(formation_id).strip().split("-")
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        raise ValueError(f"Formation {formation_id!r} is not numeric") from None

    if any(n < 0 for n in numbers):
        raise ValueError(f"Formation {formation_id!r} has a negative line count")
    if len(numbers) == 3:
        return numbers[0], numbers[1], numbers[2]
    if len(numbers) == 4:
        return numbers[0], numbers[1] + numbers[2], numbers[3]
    raise ValueError(
        f"Formation {formation_id!r} must have 3 or 4 parts, got {len(numbers)}"
    )


def _side(role: LateralRole, line: PositionLine) -> Tuple[Position, ...]:
    """Positions of *line* that play on the given side."""
    return tuple(p for p in positions_in_line(line) if lateral_role_of(p) == role)


def _slot(
    index: int,
    line: PositionLine,
    label: Position,
    *tiers: Sequence[Position],
    row: str = "front",
) -> SlotSpec:
    candidates = tuple(
        (position, priority)
        for priority, tier in enumerate(tiers)
        for position in tier
    )
    return SlotSpec(
        index=index, line=line, label=label, role_candidates=candidates, row=row
    )


def _template(formation_id: str, *line_slots: Iterable[SlotSpec]) -> FormationTemplate:
    defense, midfield, forward = parse_formation(formation_id)
    slots = [_slot(0, GK, P.GK, (P.GK,))]
    for group in line_slots:
        slots.extend(group)
    return FormationTemplate(
        id=formation_id,
        defense_count=defense,
        midfield_count=midfield,
        forward_count=forward,
        slots=tuple(slots),
    )


# ------------------------------------------------------------------
# Defensive lines
# ------------------------------------------------------------------

BACK_FOUR = (
    _slot(0, DEF, P.LB, (P.LB, P.LWB)),
    _slot(1, DEF, P.CB, (P.CB,)),
    _slot(2, DEF, P.CB, (P.CB,)),
    _slot(3, DEF, P.RB, (P.RB, P.RWB)),
)

BACK_THREE = (
    _slot(0, DEF, P.CB, (P.CB,), _side(LateralRole.LEFT, DEF)),
    _slot(1, DEF, P.CB, (P.CB,)),
    _slot(2, DEF, P.CB, (P.CB,), _side(LateralRole.RIGHT, DEF)),
)

BACK_FIVE = (
    _slot(0, DEF, P.LWB, (P.LWB, P.LB)),
    _slot(1, DEF, P.CB, (P.CB,)),
    _slot(2, DEF, P.CB, (P.CB,)),
    _slot(3, DEF, P.CB, (P.CB,)),
    _slot(4, DEF, P.RWB, (P.RWB, P.RB)),
)

# ------------------------------------------------------------------
# Attacking lines
# ------------------------------------------------------------------

# Centre slot is reserved for strikers; wingers only reach it via the
# line fallback once no ST/CF is left.
FRONT_THREE = (
    _slot(0, ATT, P.LW, (P.LW,), (P.RW,)),
    _slot(1, ATT, P.ST, (P.ST, P.CF)),
    _slot(2, ATT, P.RW, (P.RW,), (P.LW,)),
)

# Striker plus a second forward who prefers to come from a wing.
STRIKER_AND_WIDE_FORWARD = (
    _slot(0, ATT, P.ST, (P.ST, P.CF)),
    _slot(1, ATT, P.ST, (P.LW, P.RW), (P.ST, P.CF)),
)

STRIKER_PARTNERSHIP = (
    _slot(0, ATT, P.ST, (P.ST, P.CF)),
    _slot(1, ATT, P.ST, (P.ST, P.CF)),
)

LONE_STRIKER = (_slot(0, ATT, P.ST, (P.ST, P.CF)),)

# ------------------------------------------------------------------
# Midfield building blocks
# ------------------------------------------------------------------


def _left_mid(index: int, *extra: Sequence[Position], row: str = "front") -> SlotSpec:
    return _slot(index, MID, P.LM, (P.LM,), (P.LW,), *extra, row=row)


def _right_mid(index: int, *extra: Sequence[Position], row: str = "front") -> SlotSpec:
    return _slot(index, MID, P.RM, (P.RM,), (P.RW,), *extra, row=row)


def _attacking_mid(index: int) -> SlotSpec:
    return _slot(index, MID, P.CAM, (P.CAM,), (P.CM,))


def _holding_pair_mid(index: int) -> SlotSpec:
    return _slot(index, MID, P.CM, (P.CM, P.CDM), row="back")


_BUILTIN_TEMPLATES = (
    _template(
        "4-3-3",
        BACK_FOUR,
        (
            _slot(0, MID, P.CM, (P.CM, P.CAM), (P.LM, P.RM)),
            _slot(1, MID, P.CDM, (P.CDM,), (P.CM,), row="back"),
            _slot(2, MID, P.CM, (P.CM, P.CAM), (P.LM, P.RM)),
        ),
        FRONT_THREE,
    ),
    _template(
        "4-4-2",
        BACK_FOUR,
        (
            _left_mid(0),
            _slot(1, MID, P.CM, (P.CM, P.CAM), (P.CDM,)),
            _slot(2, MID, P.CM, (P.CM, P.CAM), (P.CDM,)),
            _right_mid(3),
        ),
        STRIKER_AND_WIDE_FORWARD,
    ),
    _template(
        "3-5-2",
        BACK_THREE,
        (
            _left_mid(0),
            _slot(1, MID, P.CDM, (P.CDM,), (P.CM,), row="back"),
            _attacking_mid(2),
            _slot(3, MID, P.CDM, (P.CDM,), (P.CM,), row="back"),
            _right_mid(4),
        ),
        STRIKER_AND_WIDE_FORWARD,
    ),
    _template(
        "4-2-3-1",
        BACK_FOUR,
        (
            _slot(0, MID, P.CDM, (P.CDM, P.CM), row="back"),
            _slot(1, MID, P.CDM, (P.CDM, P.CM), row="back"),
            _left_mid(2),
            _attacking_mid(3),
            _right_mid(4),
        ),
        LONE_STRIKER,
    ),
    _template(
        "4-1-4-1",
        BACK_FOUR,
        (
            _slot(0, MID, P.CDM, (P.CDM,), (P.CM,), row="back"),
            _attacking_mid(1),
            _attacking_mid(2),
            _left_mid(3),
            _right_mid(4),
        ),
        LONE_STRIKER,
    ),
    _template(
        "5-4-1",
        BACK_FIVE,
        (_holding_pair_mid(0), _holding_pair_mid(1), _left_mid(2), _right_mid(3)),
        LONE_STRIKER,
    ),
    _template(
        "3-4-3",
        BACK_THREE,
        (_holding_pair_mid(0), _holding_pair_mid(1), _left_mid(2), _right_mid(3)),
        FRONT_THREE,
    ),
    _template(
        "3-4-2-1",
        BACK_THREE,
        (
            _holding_pair_mid(0),
            _holding_pair_mid(1),
            _left_mid(2, _side(LateralRole.LEFT, DEF), row="back"),
            _right_mid(3, _side(LateralRole.RIGHT, DEF), row="back"),
            _attacking_mid(4),
            _attacking_mid(5),
        ),
        LONE_STRIKER,
    ),
    _template(
        "5-3-2",
        BACK_FIVE,
        (_holding_pair_mid(0), _holding_pair_mid(1), _attacking_mid(2)),
        STRIKER_PARTNERSHIP,
    ),
)


class FormationRegistry:
    """Lookup of formation templates by identifier.

    Unknown identifiers resolve to the default template; the condition is
    logged and reported back so callers can surface malformed input.
    """

    def __init__(
        self,
        templates: Optional[Iterable[FormationTemplate]] = None,
        default_formation: str = DEFAULT_FORMATION,
    ):
        self._templates: Dict[str, FormationTemplate] = {}
        for template in templates if templates is not None else _BUILTIN_TEMPLATES:
            self.register(template)
        if default_formation not in self._templates:
            raise ValueError(
                f"Default formation {default_formation!r} is not registered"
            )
        self.default_formation = default_formation

    def register(self, template: FormationTemplate) -> None:
        """Add (or replace) a formation template."""
        counts = parse_formation(template.id)
        actual = (
            template.defense_count,
            template.midfield_count,
            template.forward_count,
        )
        if counts != actual:
            raise ValueError(
                f"Template {template.id} declares counts {actual}, "
                f"identifier implies {counts}"
            )
        self._templates[template.id] = template

    def is_known(self, formation_id: str) -> bool:
        return self._normalize(formation_id) in self._templates

    def resolve(self, formation_id: str) -> Tuple[FormationTemplate, bool]:
        """Return ``(template, known)``; unknown ids give the default template."""
        key = self._normalize(formation_id)
        template = self._templates.get(key)
        if template is not None:
            return template, True

        logger.warning(
            "FormationUnknown: %r is not a registered formation, using %s",
            formation_id,
            self.default_formation,
        )
        return self._templates[self.default_formation], False

    def template_for(self, formation_id: str) -> FormationTemplate:
        """Template for *formation_id*, falling back to the default."""
        template, _ = self.resolve(formation_id)
        return template

    def available_formations(self) -> List[str]:
        """Registered formation ids in registration order."""
        return list(self._templates)

    @staticmethod
    def _normalize(formation_id) -> str:
        return str(formation_id).strip() if formation_id is not None else ""


DEFAULT_REGISTRY = FormationRegistry()


def template_for(formation_id: str) -> FormationTemplate:
    """Template lookup against the built-in registry."""
    return DEFAULT_REGISTRY.template_for(formation_id)
