"""
Tournament state <-> plain JSON document.

Document layout (field names are part of the persisted format):

    {
      "Teams":   [{"Id", "Name", "Player1Name", "Player2Name"}],
      "Matches": [{"Id", "TeamAId", "TeamBId", "GoalsTeamA", "GoalsTeamB",
                   "Phase", "MatchNumber"}]
    }

Ids are UUID strings, Phase is the integer MatchPhase value, and a null or
missing goal field means the match is unplayed.  Matches whose team ids do
not resolve against the loaded roster are dropped.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Sequence

from kickerturnier.errors import DeserializationFailure
from kickerturnier.tournament.base import Match, MatchPhase, Team

logger = logging.getLogger(__name__)


def state_to_document(teams: Sequence[Team], matches: Sequence[Match]) -> dict[str, Any]:
    return {
        "Teams": [
            {
                "Id": str(t.id),
                "Name": t.name,
                "Player1Name": t.player1_name,
                "Player2Name": t.player2_name,
            }
            for t in teams
        ],
        "Matches": [
            {
                "Id": str(m.id),
                "TeamAId": str(m.team_a.id),
                "TeamBId": str(m.team_b.id),
                "GoalsTeamA": m.goals_team_a,
                "GoalsTeamB": m.goals_team_b,
                "Phase": int(m.phase),
                "MatchNumber": m.match_number,
            }
            for m in matches
        ],
    }


def dumps_state(teams: Sequence[Team], matches: Sequence[Match]) -> str:
    return json.dumps(state_to_document(teams, matches), ensure_ascii=False)


def loads_state(text: str) -> tuple[list[Team], list[Match]]:
    """
    Parse a JSON document into (teams, matches).

    Raises:
        DeserializationFailure: invalid JSON or an invalid document.
    """
    try:
        doc = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise DeserializationFailure(f"State is not valid JSON: {exc}") from exc
    return state_from_document(doc)


def state_from_document(doc: Any) -> tuple[list[Team], list[Match]]:
    """
    Build (teams, matches) from an already-decoded document.

    Nothing is returned on failure, so callers never see a partial load.

    Raises:
        DeserializationFailure: the document structure or a field is invalid.
    """
    if not isinstance(doc, dict):
        raise DeserializationFailure(
            f"State document must be an object, got {type(doc).__name__}"
        )

    try:
        teams = [_parse_team(raw) for raw in _array(doc, "Teams")]
        roster = {t.id: t for t in teams}

        matches: list[Match] = []
        slots: set[tuple[MatchPhase, int]] = set()
        dropped = 0
        for raw in _array(doc, "Matches"):
            match = _parse_match(raw, roster)
            if match is None:
                dropped += 1
                continue
            slot = (match.phase, match.match_number)
            if slot in slots:
                raise ValueError(f"duplicate {match.phase.name} match #{match.match_number}")
            slots.add(slot)
            matches.append(match)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise DeserializationFailure(f"Invalid state document: {exc!r}") from exc

    if dropped:
        logger.warning("Dropped %d match(es) referencing unknown teams", dropped)
    return teams, matches


# ------------------------------------------------------------------ #
# Field parsers                                                        #
# ------------------------------------------------------------------ #

def _array(doc: dict[str, Any], key: str) -> list[Any]:
    value = doc.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{key} must be an array")
    return value


def _parse_team(raw: dict[str, Any]) -> Team:
    return Team(
        id=uuid.UUID(raw["Id"]),
        name=_string(raw["Name"]),
        player1_name=_string(raw.get("Player1Name")),
        player2_name=_string(raw.get("Player2Name")),
    )


def _parse_match(raw: dict[str, Any], roster: dict[uuid.UUID, Team]) -> Match | None:
    team_a = roster.get(uuid.UUID(raw["TeamAId"]))
    team_b = roster.get(uuid.UUID(raw["TeamBId"]))
    if team_a is None or team_b is None:
        return None
    if team_a is team_b:
        raise ValueError(f"team {team_a.id} cannot play itself")

    match = Match(
        id=uuid.UUID(raw["Id"]),
        team_a=team_a,
        team_b=team_b,
        phase=MatchPhase(_integer(raw["Phase"])),
        match_number=_integer(raw["MatchNumber"]),
    )

    goals_a = _goals(raw.get("GoalsTeamA"))
    goals_b = _goals(raw.get("GoalsTeamB"))
    if goals_a is not None and goals_b is not None:
        match.record_result(goals_a, goals_b)
    elif goals_a is not None or goals_b is not None:
        logger.warning("Match %s has only one goal count; loading it as unplayed", match.id)
    return match


def _string(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _integer(value: Any) -> int:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    return value


def _goals(value: Any) -> int | None:
    if value is None:
        return None
    goals = _integer(value)
    if goals < 0:
        raise ValueError(f"goal count cannot be negative: {goals}")
    return goals
