"""Pick a Starting XI from a roster CSV and print it.

Usage:
    python -m src.roster_pipeline.run_lineup ROSTER_CSV [formation] [view]

ROSTER_CSV is a path, or the name of a file under data/rosters/.

Examples:
    python -m src.roster_pipeline.run_lineup home
    python -m src.roster_pipeline.run_lineup data/rosters/home.csv 4-4-2 team_preview
"""

import logging
import sys
from pathlib import Path
from typing import List, Union

from src.lineup_engine.config import DEFAULT_FORMATION
from src.lineup_engine.models import Player, PositionLine
from src.lineup_engine.rating_aggregator import RatingAggregator
from src.lineup_engine.views import PRE_MATCH, LineupView, build_lineup, view_named
from src.logging_config import setup_logging
from src.roster_pipeline.cleaning import RosterCleaner
from src.roster_pipeline.config import ROSTERS_DIR
from src.roster_pipeline.ingestion import RosterIngester

logger = logging.getLogger(__name__)


def resolve_roster_path(roster: Union[str, Path]) -> Path:
    """Locate a roster file as given, else by name under ``data/rosters/``.

    ``home`` and ``home.csv`` both find ``data/rosters/home.csv``. A roster
    found in neither place is returned unchanged so that reading it raises
    ``FileNotFoundError`` for the name the user gave.
    """
    path = Path(roster)
    if path.exists():
        return path

    candidate = ROSTERS_DIR / (path if path.suffix else path.with_suffix(".csv"))
    return candidate if candidate.exists() else path


def load_roster(roster_path: Union[str, Path]) -> List[Player]:
    """Ingest and clean a roster CSV into Player records."""
    raw = RosterIngester(resolve_roster_path(roster_path)).read_roster()
    cleaner = RosterCleaner()
    return cleaner.to_players(cleaner.clean(raw))


def _describe(player: Player) -> str:
    return f"{player.name} ({player.position.value}, {player.rating})"


def build_lineup_report(
    roster_path: Union[str, Path],
    formation_id: str = DEFAULT_FORMATION,
    view: Union[LineupView, str] = PRE_MATCH,
) -> str:
    """Build the printable lineup report for a roster file.

    Args:
        roster_path: Roster CSV, or a roster name under ``data/rosters/``.
        formation_id: Formation to line up in.
        view: A :class:`LineupView` or the name of a preset view.

    Returns:
        Multi-line text: the XI line by line, the bench, the line ratings
        and any notices raised while picking the side.
    """
    if isinstance(view, str):
        view = view_named(view)

    roster = load_roster(roster_path)
    logger.info(
        "Building %s lineup for %d players in %s", view.name, len(roster), formation_id
    )

    assignment = build_lineup(view, roster, formation_id)
    ratings = RatingAggregator().aggregate(assignment).rounded()

    lines = [f"Formation: {assignment.formation.id} ({view.name})"]
    for line in (
        PositionLine.GOALKEEPER,
        PositionLine.DEFENSE,
        PositionLine.MIDFIELD,
        PositionLine.ATTACK,
    ):
        lines.append(line.value)
        for sa in assignment.line(line):
            occupant = _describe(sa.player) if sa.player else "-- empty --"
            lines.append(f"  {sa.slot.label.value:<4}{occupant}")

    bench = assignment.bench(roster)
    lines.append(f"Bench ({len(bench)}):")
    for player in bench:
        lines.append(f"  {_describe(player)}")

    lines.append(
        "Ratings: attack {attack} | defense {defense} | "
        "midfield {midfield} | overall {overall}".format(**ratings)
    )

    if assignment.notices:
        lines.append("Notices:")
        for notice in assignment.notices:
            lines.append(f"  {notice.code.value}: {notice.message}")

    return "\n".join(lines)


if __name__ == "__main__":
    setup_logging(console_level="WARNING")

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    roster_path = sys.argv[1]
    formation_id = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_FORMATION
    view_name = sys.argv[3] if len(sys.argv) > 3 else PRE_MATCH.name

    try:
        print(build_lineup_report(roster_path, formation_id, view_name))
    except Exception:
        logger.exception("Lineup build failed")
        sys.exit(1)
