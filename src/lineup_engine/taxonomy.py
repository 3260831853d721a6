"""Static classification of positions into lines and lateral roles."""

from typing import List

from src.lineup_engine.models import LateralRole, Position, PositionLine

POSITION_LINES = {
    Position.GK: PositionLine.GOALKEEPER,
    Position.LB: PositionLine.DEFENSE,
    Position.CB: PositionLine.DEFENSE,
    Position.RB: PositionLine.DEFENSE,
    Position.LWB: PositionLine.DEFENSE,
    Position.RWB: PositionLine.DEFENSE,
    Position.CDM: PositionLine.MIDFIELD,
    Position.CM: PositionLine.MIDFIELD,
    Position.CAM: PositionLine.MIDFIELD,
    Position.LM: PositionLine.MIDFIELD,
    Position.RM: PositionLine.MIDFIELD,
    Position.LW: PositionLine.ATTACK,
    Position.RW: PositionLine.ATTACK,
    Position.CF: PositionLine.ATTACK,
    Position.ST: PositionLine.ATTACK,
}

LATERAL_ROLES = {
    Position.GK: LateralRole.CENTRAL,
    Position.LB: LateralRole.LEFT,
    Position.CB: LateralRole.CENTRAL_DEFENSIVE,
    Position.RB: LateralRole.RIGHT,
    Position.LWB: LateralRole.LEFT,
    Position.RWB: LateralRole.RIGHT,
    Position.CDM: LateralRole.CENTRAL_DEFENSIVE,
    Position.CM: LateralRole.CENTRAL,
    Position.CAM: LateralRole.CENTRAL_ATTACKING,
    Position.LM: LateralRole.LEFT,
    Position.RM: LateralRole.RIGHT,
    Position.LW: LateralRole.LEFT,
    Position.RW: LateralRole.RIGHT,
    Position.CF: LateralRole.CENTRAL_ATTACKING,
    Position.ST: LateralRole.CENTRAL_ATTACKING,
}

# Both tables must cover every position; fail at import, not mid-match.
for _table_name, _table in (("line", POSITION_LINES), ("lateral role", LATERAL_ROLES)):
    _missing = set(Position) - set(_table)
    if _missing:
        raise RuntimeError(
            f"Positions without a {_table_name}: "
            f"{sorted(p.value for p in _missing)}"
        )


def line_of(position: Position) -> PositionLine:
    """Line a position belongs to."""
    return POSITION_LINES[Position(position)]


def lateral_role_of(position: Position) -> LateralRole:
    """Lateral role of a position."""
    return LATERAL_ROLES[Position(position)]


def positions_in_line(line: PositionLine) -> List[Position]:
    """All positions of *line*, in enum order."""
    return [pos for pos in Position if POSITION_LINES[pos] == line]
