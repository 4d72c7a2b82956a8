"""
Group-stage standings.

Ranking policy, in priority order:
  1. points
  2. goal difference
  3. goals scored
  4. head-to-head: among teams still level on 1-3, a mini-table built only
     from the matches those teams played against each other (points, then
     goal difference).

Teams level on everything keep their roster order.  Positions are always
1..n with no shared places.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from itertools import groupby
from typing import Iterable, Sequence

from kickerturnier.tournament.base import Match, MatchPhase, Standing, Team


@dataclass(frozen=True)
class ScoringSystem:
    """Points awarded per match outcome."""

    win_points: int = 3
    draw_points: int = 1
    loss_points: int = 0

    def match_points(self, goals_for: int, goals_against: int) -> int:
        if goals_for > goals_against:
            return self.win_points
        if goals_for == goals_against:
            return self.draw_points
        return self.loss_points


STANDARD_SCORING = ScoringSystem()


def finished_group_matches(matches: Iterable[Match]) -> list[Match]:
    return [m for m in matches if m.phase == MatchPhase.GROUP_STAGE and m.is_finished]


def compute_standings(
    teams: Sequence[Team],
    matches: Sequence[Match],
    scoring: ScoringSystem = STANDARD_SCORING,
) -> list[Standing]:
    """
    Rank every team in the roster.  Pure: matches are only read.

    Unplayed and knockout matches are ignored, so this can be called at any
    point of the tournament.
    """
    played = finished_group_matches(matches)
    table = [_aggregate(team, played, scoring) for team in teams]

    # sorted() is stable: equal keys keep roster order
    table.sort(key=lambda s: s.sort_key, reverse=True)
    ranked = _apply_head_to_head(table, played, scoring)

    for position, standing in enumerate(ranked, 1):
        standing.position = position
    return ranked


# ------------------------------------------------------------------ #
# Internal helpers                                                     #
# ------------------------------------------------------------------ #

def _aggregate(team: Team, played: list[Match], scoring: ScoringSystem) -> Standing:
    standing = Standing(team=team)
    for match in played:
        if not match.involves(team.id):
            continue
        if match.team_a.id == team.id:
            goals_for, goals_against = match.goals_team_a, match.goals_team_b
        else:
            goals_for, goals_against = match.goals_team_b, match.goals_team_a

        standing.matches_played += 1
        standing.goals_for += goals_for
        standing.goals_against += goals_against
        standing.points += scoring.match_points(goals_for, goals_against)
        if goals_for > goals_against:
            standing.wins += 1
        elif goals_for == goals_against:
            standing.draws += 1
        else:
            standing.losses += 1
    return standing


def _apply_head_to_head(
    table: list[Standing], played: list[Match], scoring: ScoringSystem
) -> list[Standing]:
    """Re-sort each contiguous run of fully level teams by their mutual results."""
    result: list[Standing] = []
    for _, run in groupby(table, key=lambda s: s.sort_key):
        tied = list(run)
        if len(tied) > 1:
            tied = _head_to_head(tied, played, scoring)
        result.extend(tied)
    return result


def _head_to_head(
    tied: list[Standing], played: list[Match], scoring: ScoringSystem
) -> list[Standing]:
    ids = {s.team.id for s in tied}
    points: dict[uuid.UUID, int] = dict.fromkeys(ids, 0)
    goal_diff: dict[uuid.UUID, int] = dict.fromkeys(ids, 0)

    for match in played:
        a, b = match.team_a.id, match.team_b.id
        if a not in ids or b not in ids:
            continue
        goals_a, goals_b = match.goals_team_a, match.goals_team_b
        goal_diff[a] += goals_a - goals_b
        goal_diff[b] += goals_b - goals_a
        points[a] += scoring.match_points(goals_a, goals_b)
        points[b] += scoring.match_points(goals_b, goals_a)

    return sorted(
        tied,
        key=lambda s: (points[s.team.id], goal_diff[s.team.id]),
        reverse=True,
    )
