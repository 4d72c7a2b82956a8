"""
Tournament package.

TournamentState is the single entry point for an embedding application; the
scheduler, standings engine and bracket deriver are plain functions that can
also be called directly on team and match lists.
"""

from __future__ import annotations

from kickerturnier.tournament.base import (
    Match,
    MatchPhase,
    Standing,
    Team,
    TournamentPhase,
)
from kickerturnier.tournament.events import ChangeSignal
from kickerturnier.tournament.knockout import (
    champion,
    derive_finals,
    has_final_matches,
    is_group_stage_complete,
    runner_up,
    third_place,
)
from kickerturnier.tournament.round_robin import generate_group_stage
from kickerturnier.tournament.serialization import (
    dumps_state,
    loads_state,
    state_from_document,
    state_to_document,
)
from kickerturnier.tournament.standings import (
    STANDARD_SCORING,
    ScoringSystem,
    compute_standings,
)
from kickerturnier.tournament.state import TournamentState, tournament_phase

__all__ = [
    # Entities
    "Match",
    "MatchPhase",
    "Standing",
    "Team",
    "TournamentPhase",
    # Signal
    "ChangeSignal",
    # Engine
    "generate_group_stage",
    "compute_standings",
    "ScoringSystem",
    "STANDARD_SCORING",
    "derive_finals",
    "is_group_stage_complete",
    "has_final_matches",
    "champion",
    "runner_up",
    "third_place",
    # Serialization
    "state_to_document",
    "state_from_document",
    "dumps_state",
    "loads_state",
    # Aggregate
    "TournamentState",
    "tournament_phase",
]
