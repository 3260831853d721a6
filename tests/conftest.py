"""Shared fixtures for the lineup test suite."""

import pytest

from src.lineup_engine.assignment_engine import AssignmentEngine
from src.lineup_engine.models import Player, Position


def _p(pid, position, rating, **kwargs):
    return Player(
        id=pid,
        name=f"Player {pid}",
        position=Position(position),
        rating=rating,
        **kwargs,
    )


# ------------------------------------------------------------------
# Rosters
# ------------------------------------------------------------------

@pytest.fixture
def squad():
    """18-player squad, everyone available.

    In 4-3-3 the XI is gk1 / lb1 cb1 cb2 rb1 / cm1 cdm1 cam1 / lw1 st1 rw1.
    """
    return [
        _p("gk1", "GK", 82),
        _p("lb1", "LB", 78),
        _p("cb1", "CB", 84),
        _p("cb2", "CB", 80),
        _p("cb3", "CB", 72),
        _p("rb1", "RB", 76),
        _p("cdm1", "CDM", 79),
        _p("cm1", "CM", 83),
        _p("cm2", "CM", 77),
        _p("cam1", "CAM", 81),
        _p("lm1", "LM", 68),
        _p("rm1", "RM", 67),
        _p("lw1", "LW", 85),
        _p("rw1", "RW", 82),
        _p("rw2", "RW", 66),
        _p("st1", "ST", 88),
        _p("st2", "ST", 74),
        _p("cf1", "CF", 71),
    ]


@pytest.fixture
def short_squad():
    """GK plus 11 outfield players, two of them injured (9 fit outfield)."""
    return [
        _p("gk1", "GK", 75),
        _p("lb1", "LB", 70),
        _p("cb1", "CB", 74),
        _p("cb2", "CB", 72),
        _p("rb1", "RB", 69),
        _p("lm1", "LM", 71),
        _p("cm1", "CM", 76),
        _p("cm2", "CM", 78, injury="Hamstring"),
        _p("rm1", "RM", 68),
        _p("st1", "ST", 80),
        _p("st2", "ST", 73),
        _p("st3", "ST", 79, injury="Ankle"),
    ]


# ------------------------------------------------------------------
# Engine
# ------------------------------------------------------------------

@pytest.fixture
def engine():
    return AssignmentEngine()
