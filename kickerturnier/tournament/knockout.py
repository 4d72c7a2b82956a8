"""
Top-4 knockout derived from the final group table.

Rules:
- Final:        1st vs 2nd, match number 1.
- Third place:  3rd vs 4th, match number 2, only with at least 4 teams.
- 5th place and below play no further match.
- Deriving again replaces the previous knockout matches, so a corrected group
  result can be followed by a fresh derivation.
- A drawn knockout match decides nothing: champion, runner-up and third place
  stay None until a decisive result is entered.
"""

from __future__ import annotations

import logging
from typing import Sequence

from kickerturnier.errors import GroupStageIncomplete
from kickerturnier.tournament.base import KNOCKOUT_PHASES, Match, MatchPhase, Team
from kickerturnier.tournament.standings import (
    STANDARD_SCORING,
    ScoringSystem,
    compute_standings,
)

logger = logging.getLogger(__name__)

FINAL_MATCH_NUMBER = 1
THIRD_PLACE_MATCH_NUMBER = 2


def is_group_stage_complete(matches: Sequence[Match]) -> bool:
    """True once at least one group match exists and all of them are finished."""
    group = [m for m in matches if m.phase == MatchPhase.GROUP_STAGE]
    return bool(group) and all(m.is_finished for m in group)


def has_final_matches(matches: Sequence[Match]) -> bool:
    return any(m.phase in KNOCKOUT_PHASES for m in matches)


def derive_finals(
    teams: Sequence[Team],
    matches: Sequence[Match],
    scoring: ScoringSystem = STANDARD_SCORING,
) -> list[Match]:
    """
    Return a new match list with the knockout matches (re)built from standings.

    Group matches are passed through untouched.  With fewer than two ranked
    teams the input is returned unchanged.

    Raises:
        GroupStageIncomplete: no group matches, or some are unplayed.
    """
    group = [m for m in matches if m.phase == MatchPhase.GROUP_STAGE]
    unfinished = sum(1 for m in group if not m.is_finished)
    if not group or unfinished:
        raise GroupStageIncomplete(unfinished)

    standings = compute_standings(teams, matches, scoring)
    if len(standings) < 2:
        return list(matches)

    updated = [m for m in matches if m.phase not in KNOCKOUT_PHASES]
    updated.append(
        Match(
            team_a=standings[0].team,
            team_b=standings[1].team,
            phase=MatchPhase.FINAL,
            match_number=FINAL_MATCH_NUMBER,
        )
    )
    if len(standings) >= 4:
        updated.append(
            Match(
                team_a=standings[2].team,
                team_b=standings[3].team,
                phase=MatchPhase.THIRD_PLACE,
                match_number=THIRD_PLACE_MATCH_NUMBER,
            )
        )

    logger.info(
        "Derived finals: %s vs %s%s",
        standings[0].team.name,
        standings[1].team.name,
        f"; third place {standings[2].team.name} vs {standings[3].team.name}"
        if len(standings) >= 4
        else "",
    )
    return updated


# ------------------------------------------------------------------ #
# Podium queries                                                       #
# ------------------------------------------------------------------ #

def find_phase_match(matches: Sequence[Match], phase: MatchPhase) -> Match | None:
    return next((m for m in matches if m.phase == phase), None)


def champion(matches: Sequence[Match]) -> Team | None:
    final = find_phase_match(matches, MatchPhase.FINAL)
    return final.winner() if final else None


def runner_up(matches: Sequence[Match]) -> Team | None:
    final = find_phase_match(matches, MatchPhase.FINAL)
    return final.loser() if final else None


def third_place(matches: Sequence[Match]) -> Team | None:
    match = find_phase_match(matches, MatchPhase.THIRD_PLACE)
    return match.winner() if match else None
