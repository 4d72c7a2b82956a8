"""
Tests for the round-robin scheduler: fixture count, pair coverage, numbering
and deterministic ordering.
"""

from __future__ import annotations

import unittest
from itertools import combinations

from kickerturnier.errors import InsufficientTeams
from kickerturnier.tournament.base import MatchPhase, Team
from kickerturnier.tournament.round_robin import generate_group_stage


# --------------------------------------------------------------------------- #
# Helpers                                                                      #
# --------------------------------------------------------------------------- #

def make_team(name: str) -> Team:
    return Team(name=name, player1_name=f"{name} One", player2_name=f"{name} Two")


def make_teams(n: int) -> list[Team]:
    names = [
        "Alpha", "Bravo", "Charlie", "Delta",
        "Echo", "Foxtrot", "Golf", "Hotel",
    ]
    return [make_team(names[i]) for i in range(n)]


class TestGroupStageGeneration:
    def test_match_count_is_n_choose_2(self):
        for n in range(2, 9):
            matches = generate_group_stage(make_teams(n))
            assert len(matches) == n * (n - 1) // 2

    def test_every_pair_exactly_once(self):
        teams = make_teams(6)
        matches = generate_group_stage(teams)
        pairs = [frozenset((m.team_a.id, m.team_b.id)) for m in matches]
        expected = {frozenset((a.id, b.id)) for a, b in combinations(teams, 2)}
        assert len(pairs) == len(set(pairs))
        assert set(pairs) == expected

    def test_no_team_plays_itself(self):
        for m in generate_group_stage(make_teams(5)):
            assert m.team_a.id != m.team_b.id

    def test_match_numbers_are_contiguous_from_one(self):
        matches = generate_group_stage(make_teams(5))
        assert [m.match_number for m in matches] == list(range(1, 11))

    def test_all_matches_are_group_stage_and_unplayed(self):
        for m in generate_group_stage(make_teams(4)):
            assert m.phase == MatchPhase.GROUP_STAGE
            assert m.goals_team_a is None
            assert m.goals_team_b is None
            assert not m.is_finished

    def test_order_follows_roster_pairs(self):
        teams = make_teams(4)
        matches = generate_group_stage(teams)
        order = [(m.team_a.name, m.team_b.name) for m in matches]
        assert order == [
            ("Alpha", "Bravo"),
            ("Alpha", "Charlie"),
            ("Alpha", "Delta"),
            ("Bravo", "Charlie"),
            ("Bravo", "Delta"),
            ("Charlie", "Delta"),
        ]

    def test_match_ids_are_unique(self):
        matches = generate_group_stage(make_teams(5))
        assert len({m.id for m in matches}) == len(matches)

    def test_two_teams_single_match(self):
        teams = make_teams(2)
        matches = generate_group_stage(teams)
        assert len(matches) == 1
        assert matches[0].team_a is teams[0]
        assert matches[0].team_b is teams[1]


class TestValidation(unittest.TestCase):
    def test_single_team_raises(self):
        with self.assertRaisesRegex(InsufficientTeams, "at least 2"):
            generate_group_stage(make_teams(1))

    def test_empty_roster_raises(self):
        with self.assertRaises(InsufficientTeams) as ctx:
            generate_group_stage([])
        self.assertEqual(ctx.exception.team_count, 0)

    def test_insufficient_teams_is_a_value_error(self):
        with self.assertRaises(ValueError):
            generate_group_stage([])
