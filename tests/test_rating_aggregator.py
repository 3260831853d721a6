"""Tests for per-line rating aggregation."""

import pytest

from src.lineup_engine.models import LineRatings, Player, Position, PositionLine, SlotRef
from src.lineup_engine.rating_aggregator import RatingAggregator, aggregate


def _make_player(pid, position, rating):
    return Player(id=pid, name=pid, position=Position(position), rating=rating)


@pytest.fixture
def aggregator():
    return RatingAggregator()


class TestAggregate:
    def test_full_squad(self, engine, aggregator, squad):
        ratings = aggregator.aggregate(engine.assign(squad, "4-3-3"))
        assert ratings == LineRatings(
            attack=85.0, defense=80.0, midfield=81.0, overall=82.0
        )

    def test_goalkeeper_counts_toward_defense(self, engine, aggregator):
        roster = [_make_player("gk", "GK", 90), _make_player("cb", "CB", 70)]
        ratings = aggregator.aggregate(engine.assign(roster, "4-3-3"))
        assert ratings.defense == 80.0

    def test_empty_lines_excluded_from_overall(self, engine, aggregator):
        roster = [_make_player("gk", "GK", 90), _make_player("cb", "CB", 70)]
        ratings = aggregator.aggregate(engine.assign(roster, "4-3-3"))
        assert ratings.attack == 0.0
        assert ratings.midfield == 0.0
        assert ratings.overall == 80.0

    def test_empty_slots_not_counted_as_zero(self, engine, aggregator, short_squad):
        ratings = aggregator.aggregate(
            engine.assign(short_squad, "4-4-2", show_empty_slots=True)
        )
        assert ratings.midfield == pytest.approx((71 + 76 + 68) / 3)
        assert ratings.defense == 72.0
        assert ratings.attack == 76.5

    def test_dense_and_sparse_agree(self, engine, aggregator, short_squad):
        dense = aggregator.aggregate(engine.assign(short_squad, "4-4-2"))
        sparse = aggregator.aggregate(
            engine.assign(short_squad, "4-4-2", show_empty_slots=True)
        )
        assert dense == sparse

    def test_grouped_by_slot_line(self, engine, aggregator, squad):
        result = engine.assign(squad, "4-3-3", {"st1": SlotRef(PositionLine.DEFENSE, 0)})
        ratings = aggregator.aggregate(result)
        assert ratings.defense == (82 + 88 + 84 + 80 + 76) / 5
        assert ratings.attack == pytest.approx((85 + 74 + 82) / 3)

    def test_empty_assignment(self, engine, aggregator):
        ratings = aggregator.aggregate(engine.assign([], "4-3-3", show_empty_slots=True))
        assert ratings == LineRatings(0.0, 0.0, 0.0, 0.0)

    def test_module_level_shortcut(self, engine, squad):
        result = engine.assign(squad, "4-3-3")
        assert aggregate(result) == RatingAggregator().aggregate(result)


class TestRounded:
    def test_half_rounds_up(self):
        rounded = LineRatings(80.5, 72.5, 0.0, 76.5).rounded()
        assert rounded == {"attack": 81, "defense": 73, "midfield": 0, "overall": 77}

    def test_overall_from_rounded_lines(self, engine, aggregator, short_squad):
        rounded = aggregator.aggregate(engine.assign(short_squad, "4-4-2")).rounded()
        assert rounded == {"attack": 77, "defense": 72, "midfield": 72, "overall": 74}

    def test_all_zero(self):
        assert LineRatings(0.0, 0.0, 0.0, 0.0).rounded()["overall"] == 0
