"""Tests for roster cleaning and Player conversion."""

import pandas as pd
import pytest

from src.lineup_engine.models import Player, Position
from src.roster_pipeline.cleaning import RosterCleaner


@pytest.fixture(scope="module")
def cleaner():
    return RosterCleaner()


def _make_raw(rows):
    columns = [
        "player_id", "name", "position", "rating",
        "injury", "illness", "suspension_games",
    ]
    return pd.DataFrame(rows, columns=columns)


# ── Field helpers ────────────────────────────────────────────────────


class TestNormalizePosition:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("ST", "ST"),
            ("st", "ST"),
            (" cb ", "CB"),
            ("DM", "CDM"),
            ("AM", "CAM"),
            ("LF", "LW"),
            ("RF", "RW"),
            ("FW", "ST"),
            ("STR", "ST"),
            ("GKP", "GK"),
        ],
    )
    def test_known(self, raw, expected):
        assert RosterCleaner.normalize_position(raw) == expected

    @pytest.mark.parametrize("raw", ["SW", "", None, float("nan")])
    def test_unknown(self, raw):
        assert RosterCleaner.normalize_position(raw) is None


class TestClampRating:
    @pytest.mark.parametrize(
        "raw,expected",
        [("75", 75), ("0", 1), ("150", 99), ("-4", 1), ("82.6", 83), (64, 64)],
    )
    def test_values(self, raw, expected):
        assert RosterCleaner.clamp_rating(raw) == expected

    @pytest.mark.parametrize("raw", ["", "good", None])
    def test_not_numeric(self, raw):
        assert RosterCleaner.clamp_rating(raw) is None


class TestSuspensionGames:
    @pytest.mark.parametrize(
        "raw,expected", [("2", 2), ("", 0), ("-1", 0), ("x", 0), (None, 0), ("3.0", 3)]
    )
    def test_values(self, raw, expected):
        assert RosterCleaner.suspension_games(raw) == expected


# ── DataFrame cleaning ───────────────────────────────────────────────


class TestClean:
    def test_clean_rows(self, cleaner):
        df = _make_raw([
            ["p1", "Alex", "gkp", "81", "", "", ""],
            ["p2", "Sam", "DM", "120", "Knee", "", "1"],
        ])
        out = cleaner.clean(df)
        assert out["position"].tolist() == ["GK", "CDM"]
        assert out["rating"].tolist() == [81, 99]
        assert pd.isna(out.loc[0, "injury"])
        assert out.loc[1, "injury"] == "Knee"
        assert out["suspension_games"].tolist() == [0, 1]

    def test_drops_unusable_rows(self, cleaner, caplog):
        df = _make_raw([
            ["p1", "Alex", "GK", "81", "", "", ""],
            ["", "NoId", "CB", "70", "", "", ""],
            ["p3", "", "CB", "70", "", "", ""],
            ["p4", "Sweeper", "SW", "70", "", "", ""],
            ["p5", "Unrated", "CB", "n/a", "", "", ""],
        ])
        out = cleaner.clean(df)
        assert out["player_id"].tolist() == ["p1"]
        assert "Dropping 4 unusable roster rows" in caplog.text

    def test_keeps_first_repeated_id(self, cleaner):
        df = _make_raw([
            ["p1", "Alex", "GK", "81", "", "", ""],
            ["p1", "Alex Again", "ST", "90", "", "", ""],
        ])
        out = cleaner.clean(df)
        assert len(out) == 1
        assert out.loc[0, "name"] == "Alex"

    def test_missing_optional_columns(self, cleaner):
        df = pd.DataFrame(
            [["p1", "Alex", "CB", "70"]],
            columns=["player_id", "name", "position", "rating"],
        )
        out = cleaner.clean(df)
        assert out.loc[0, "suspension_games"] == 0
        assert pd.isna(out.loc[0, "illness"])

    def test_input_not_modified(self, cleaner):
        df = _make_raw([["p1", "Alex", "dm", "81", "", "", ""]])
        cleaner.clean(df)
        assert df.loc[0, "position"] == "dm"

    def test_empty_frame(self, cleaner):
        assert cleaner.clean(_make_raw([])).empty


class TestToPlayers:
    def test_builds_players(self, cleaner):
        df = cleaner.clean(_make_raw([
            ["p1", "Alex", "GK", "81", "", "", ""],
            ["p2", "Sam", "ST", "77", "", "Flu", "2"],
        ]))
        players = cleaner.to_players(df)
        assert players == [
            Player("p1", "Alex", Position.GK, 81),
            Player("p2", "Sam", Position.ST, 77, illness="Flu", suspension_games=2),
        ]

    def test_rating_is_int(self, cleaner):
        df = cleaner.clean(_make_raw([["p1", "Alex", "GK", "81", "", "", ""]]))
        assert isinstance(cleaner.to_players(df)[0].rating, int)

    def test_empty(self, cleaner):
        assert cleaner.to_players(cleaner.clean(_make_raw([]))) == []
