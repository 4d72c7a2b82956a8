"""
End-to-end tests for the command-line driver.  Each test runs in its own
temporary working directory so the state file and logs never leak.
"""

from __future__ import annotations

import pytest

import tournament_main
from kickerturnier.tournament.base import MatchPhase
from kickerturnier.tournament.state import TournamentState


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def load_saved(workdir) -> TournamentState:
    state = TournamentState()
    state.deserialize_state((workdir / "kickerturnier_state.json").read_text(encoding="utf-8"))
    return state


class TestCommands:
    def test_demo_schedule_and_result(self, workdir):
        assert tournament_main.main(["demo"]) == 0
        assert tournament_main.main(["schedule"]) == 0
        assert tournament_main.main(["result", "group", "1", "4", "2"]) == 0

        state = load_saved(workdir)
        assert len(state.teams) == 5
        assert len(state.matches) == 10
        first = state.find_match(MatchPhase.GROUP_STAGE, 1)
        assert (first.goals_team_a, first.goals_team_b) == (4, 2)

    def test_add_update_and_remove_team(self, workdir):
        assert tournament_main.main(["add-team", "Alpha", "Ann", "Ben"]) == 0
        assert tournament_main.main(["add-team", "Bravo", "Cid", "Dee"]) == 0
        assert tournament_main.main(["update-team", "2", "--name", "Bravo II"]) == 0
        assert tournament_main.main(["remove-team", "1"]) == 0

        state = load_saved(workdir)
        assert [t.name for t in state.teams] == ["Bravo II"]

    def test_engine_errors_return_exit_status_one(self, workdir):
        assert tournament_main.main(["add-team", "Alpha", "Ann", "Ben"]) == 0
        assert tournament_main.main(["schedule"]) == 1          # one team only
        assert tournament_main.main(["finals"]) == 1            # no group stage

    def test_remove_after_schedule_is_refused(self, workdir):
        tournament_main.main(["demo"])
        tournament_main.main(["schedule"])
        assert tournament_main.main(["remove-team", "1"]) == 1
        assert len(load_saved(workdir).teams) == 5

    def test_unknown_match_number(self, workdir):
        tournament_main.main(["demo"])
        tournament_main.main(["schedule"])
        assert tournament_main.main(["result", "final", "1", "1", "0"]) == 1

    def test_full_tournament_show(self, workdir):
        tournament_main.main(["demo"])
        tournament_main.main(["schedule"])
        for number in range(1, 11):
            assert tournament_main.main(["result", "group", str(number), "1", "0"]) == 0
        assert tournament_main.main(["result", "final", "1", "3", "1"]) == 0
        assert tournament_main.main(["show"]) == 0
        assert tournament_main.main(["standings"]) == 0

        state = load_saved(workdir)
        assert state.champion().name == "FC Tornado"

    def test_corrupt_state_file(self, workdir):
        (workdir / "kickerturnier_state.json").write_text("{oops", encoding="utf-8")
        assert tournament_main.main(["show"]) == 1
        assert (workdir / "kickerturnier_state.json").read_text(encoding="utf-8") == "{oops"

    def test_reset_and_clear(self, workdir):
        tournament_main.main(["demo"])
        tournament_main.main(["schedule"])
        assert tournament_main.main(["reset"]) == 0
        state = load_saved(workdir)
        assert state.matches == []
        assert len(state.teams) == 5

        assert tournament_main.main(["clear"]) == 0
        assert load_saved(workdir).teams == []

    def test_invalid_config(self, workdir):
        (workdir / "config.yaml").write_text("logging:\n  level: loud\n", encoding="utf-8")
        assert tournament_main.main(["show"]) == 1
