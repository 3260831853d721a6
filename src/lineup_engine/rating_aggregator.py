"""Per-line team ratings from a computed assignment."""

import logging
from typing import Dict, List

from src.lineup_engine.models import Assignment, LineRatings, PositionLine

logger = logging.getLogger(__name__)

# The goalkeeper counts toward the defensive rating
RATING_BUCKETS = {
    PositionLine.GOALKEEPER: "defense",
    PositionLine.DEFENSE: "defense",
    PositionLine.MIDFIELD: "midfield",
    PositionLine.ATTACK: "attack",
}


class RatingAggregator:
    """Collapses an assignment into attack/defense/midfield/overall means.

    Players are grouped by the line of the slot they fill, not by their own
    position. EMPTY slots are left out of the means, and a line with no
    players is left out of the overall average instead of counting as zero.
    """

    def aggregate(self, assignment: Assignment) -> LineRatings:
        buckets: Dict[str, List[int]] = {"attack": [], "defense": [], "midfield": []}

        for line, entries in assignment.lines.items():
            bucket = buckets[RATING_BUCKETS[PositionLine(line)]]
            bucket.extend(sa.player.rating for sa in entries if sa.player is not None)

        means = {name: _mean(values) for name, values in buckets.items()}
        nonzero = [value for value in means.values() if value > 0]
        overall = _mean(nonzero)

        logger.debug(
            "Ratings for %s: attack=%.2f defense=%.2f midfield=%.2f overall=%.2f",
            assignment.formation.id,
            means["attack"],
            means["defense"],
            means["midfield"],
            overall,
        )
        return LineRatings(
            attack=means["attack"],
            defense=means["defense"],
            midfield=means["midfield"],
            overall=overall,
        )


def _mean(values) -> float:
    return sum(values) / len(values) if values else 0.0


def aggregate(assignment: Assignment) -> LineRatings:
    """Module-level shortcut for :meth:`RatingAggregator.aggregate`."""
    return RatingAggregator().aggregate(assignment)
