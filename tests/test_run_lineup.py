"""Tests for the run_lineup report builder."""

from pathlib import Path

import pytest

from src.lineup_engine.views import LINEUP_BOARD
from src.roster_pipeline import run_lineup
from src.roster_pipeline.ingestion import IngestionError
from src.roster_pipeline.run_lineup import (
    build_lineup_report,
    load_roster,
    resolve_roster_path,
)

ROSTER_CSV = """player_id,name,position,rating,injury,illness,suspension_games
gk1,Alex Keeper,GK,82,,,
lb1,Ben Left,LB,78,,,
cb1,Carl Centre,CB,84,,,
cb2,Dan Centre,CB,80,,,
rb1,Eli Right,RB,76,,,
dm1,Finn Anchor,DM,79,,,
cm1,Gus Engine,CM,83,,,
am1,Hal Creator,AM,81,,,
lw1,Ivo Wing,LW,85,,,
st1,Jon Striker,ST,88,,,
rw1,Kai Wing,RW,82,,,
st2,Leo Backup,FW,74,Hamstring,,
"""


@pytest.fixture
def roster_path(tmp_path):
    path = tmp_path / "home.csv"
    path.write_text(ROSTER_CSV, encoding="utf-8")
    return path


@pytest.fixture
def rosters_dir(tmp_path, monkeypatch):
    directory = tmp_path / "rosters"
    directory.mkdir()
    (directory / "away.csv").write_text(ROSTER_CSV, encoding="utf-8")
    monkeypatch.setattr(run_lineup, "ROSTERS_DIR", directory)
    return directory


class TestResolveRosterPath:
    def test_existing_path_used_as_is(self, roster_path, rosters_dir):
        assert resolve_roster_path(roster_path) == roster_path

    @pytest.mark.parametrize("name", ["away", "away.csv"])
    def test_name_found_in_rosters_dir(self, rosters_dir, name):
        assert resolve_roster_path(name) == rosters_dir / "away.csv"

    def test_unknown_name_returned_unchanged(self, rosters_dir):
        assert resolve_roster_path("reserves") == Path("reserves")


class TestLoadRoster:
    def test_players_loaded(self, roster_path):
        players = load_roster(roster_path)
        assert len(players) == 12
        assert players[5].position.value == "CDM"
        assert players[11].injury == "Hamstring"

    def test_loaded_by_name(self, rosters_dir):
        assert len(load_roster("away")) == 12


class TestBuildLineupReport:
    def test_full_report(self, roster_path):
        report = build_lineup_report(roster_path)
        lines = report.splitlines()
        assert lines[0] == "Formation: 4-3-3 (pre_match)"
        assert "  CDM Finn Anchor (CDM, 79)" in lines
        assert "  ST  Jon Striker (ST, 88)" in lines
        assert "Bench (1):" in lines
        assert "  Leo Backup (ST, 74)" in lines
        assert "Ratings: attack 85 | defense 80 | midfield 81 | overall 82" in lines
        assert "Notices:" not in lines

    def test_view_by_name(self, roster_path):
        report = build_lineup_report(roster_path, "4-4-2", "lineup_board")
        assert report.splitlines()[0] == "Formation: 4-4-2 (lineup_board)"

    def test_empty_slots_on_board(self, roster_path):
        report = build_lineup_report(roster_path, "5-4-1", LINEUP_BOARD)
        assert "-- empty --" in report

    def test_unknown_formation_noticed(self, roster_path):
        report = build_lineup_report(roster_path, "2-2-2")
        assert report.splitlines()[0] == "Formation: 4-3-3 (pre_match)"
        assert "FORMATION_UNKNOWN" in report

    def test_unknown_view(self, roster_path):
        with pytest.raises(KeyError):
            build_lineup_report(roster_path, "4-3-3", "locker_room")

    def test_missing_roster(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            build_lineup_report(tmp_path / "missing.csv")

    def test_bad_roster(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("id,who\n1,x\n", encoding="utf-8")
        with pytest.raises(IngestionError):
            build_lineup_report(path)
