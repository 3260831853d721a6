"""Named lineup policies for the screens that consume the engine.

Every screen runs the same engine; they differ only in how an incomplete
lineup is presented and whether stale manual placements are honoured.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from src.lineup_engine.assignment_engine import AssignmentEngine
from src.lineup_engine.models import Assignment, LineRatings, Player, SlotRef
from src.lineup_engine.rating_aggregator import RatingAggregator


@dataclass(frozen=True)
class LineupView:
    """Policy flags passed through to :meth:`AssignmentEngine.assign`."""

    name: str
    show_empty_slots: bool = False
    backfill_from_roster: bool = False
    evict_unavailable_overrides: bool = False


# Drag/drop board: render every slot as a drop target, never improvise
LINEUP_BOARD = LineupView("lineup_board", show_empty_slots=True)

# Team about to play: always field eleven, injured picks are benched
PRE_MATCH = LineupView(
    "pre_match", backfill_from_roster=True, evict_unavailable_overrides=True
)

OPPONENT_INSPECTOR = LineupView("opponent_inspector", backfill_from_roster=True)

TEAM_PREVIEW = LineupView("team_preview", backfill_from_roster=True)

VIEWS: Dict[str, LineupView] = {
    view.name: view
    for view in (LINEUP_BOARD, PRE_MATCH, OPPONENT_INSPECTOR, TEAM_PREVIEW)
}


def view_named(name: str) -> LineupView:
    """Look up a preset by name; raises KeyError for an unknown view."""
    try:
        return VIEWS[name.strip().lower()]
    except KeyError:
        raise KeyError(
            f"Unknown lineup view {name!r}, expected one of {sorted(VIEWS)}"
        ) from None


def build_lineup(
    view: LineupView,
    roster: Iterable[Player],
    formation_id: str,
    manual_overrides: Optional[Mapping[str, SlotRef]] = None,
    engine: Optional[AssignmentEngine] = None,
) -> Assignment:
    """Assign *roster* to *formation_id* under the policy of *view*."""
    engine = engine or AssignmentEngine()
    return engine.assign(
        roster,
        formation_id,
        manual_overrides,
        view.show_empty_slots,
        backfill_from_roster=view.backfill_from_roster,
        evict_unavailable_overrides=view.evict_unavailable_overrides,
    )


def team_ratings(
    roster: Iterable[Player],
    formation_id: str,
    view: LineupView = PRE_MATCH,
) -> LineRatings:
    """Ratings of the lineup *view* would field."""
    return RatingAggregator().aggregate(build_lineup(view, roster, formation_id))
