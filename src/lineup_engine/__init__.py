from src.lineup_engine.assignment_engine import (
    AssignmentEngine,
    AssignmentIntegrityError,
    assign,
)
from src.lineup_engine.formations import (
    DEFAULT_REGISTRY,
    FormationRegistry,
    parse_formation,
    template_for,
)
from src.lineup_engine.models import (
    Assignment,
    AssignmentNotice,
    FormationTemplate,
    LateralRole,
    LineRatings,
    NoticeCode,
    Player,
    Position,
    PositionLine,
    SlotAssignment,
    SlotRef,
    SlotSpec,
)
from src.lineup_engine.rating_aggregator import RatingAggregator
from src.lineup_engine.roster_filter import available_players, is_available
from src.lineup_engine.taxonomy import lateral_role_of, line_of
from src.lineup_engine.views import (
    LINEUP_BOARD,
    OPPONENT_INSPECTOR,
    PRE_MATCH,
    TEAM_PREVIEW,
    LineupView,
    build_lineup,
    team_ratings,
)

__all__ = [
    "Assignment",
    "AssignmentEngine",
    "AssignmentIntegrityError",
    "AssignmentNotice",
    "DEFAULT_REGISTRY",
    "FormationRegistry",
    "FormationTemplate",
    "LINEUP_BOARD",
    "LateralRole",
    "LineRatings",
    "LineupView",
    "NoticeCode",
    "OPPONENT_INSPECTOR",
    "PRE_MATCH",
    "Player",
    "Position",
    "PositionLine",
    "RatingAggregator",
    "SlotAssignment",
    "SlotRef",
    "SlotSpec",
    "TEAM_PREVIEW",
    "assign",
    "available_players",
    "build_lineup",
    "is_available",
    "lateral_role_of",
    "line_of",
    "parse_formation",
    "team_ratings",
    "template_for",
]
