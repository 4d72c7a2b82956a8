"""Round-robin group stage: every team plays every other team exactly once."""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Sequence

from kickerturnier.errors import InsufficientTeams
from kickerturnier.tournament.base import Match, MatchPhase, Team

logger = logging.getLogger(__name__)


def generate_group_stage(teams: Sequence[Team]) -> list[Match]:
    """
    Build the group-stage fixture list.

    Pairs are taken as (i, j) with i < j in roster order, and match numbers
    follow that order, so the same roster always yields the same schedule.

    Raises:
        InsufficientTeams: fewer than two teams.
    """
    if len(teams) < 2:
        raise InsufficientTeams(len(teams))

    matches = [
        Match(team_a=a, team_b=b, phase=MatchPhase.GROUP_STAGE, match_number=number)
        for number, (a, b) in enumerate(combinations(teams, 2), 1)
    ]
    logger.info("Scheduled %d group matches for %d teams", len(matches), len(teams))
    return matches
