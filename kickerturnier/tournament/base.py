"""
Tournament entities: teams, matches, standings and phase tags.

Plain dataclasses shared by the scheduler, the standings engine, the bracket
deriver and the aggregate.  The only behaviour here is Match.record_result(),
the single place where goal counts change.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from kickerturnier.errors import InvalidGoals, NegativeGoals


class MatchPhase(IntEnum):
    """Which part of the tournament a match belongs to.  Values are persisted."""

    GROUP_STAGE = 0
    FINAL = 1
    THIRD_PLACE = 2


KNOCKOUT_PHASES = frozenset({MatchPhase.FINAL, MatchPhase.THIRD_PLACE})


class TournamentPhase(Enum):
    """Aggregate phase, always derived from the match list and never stored."""

    SETUP = "setup"
    GROUP_STAGE = "group_stage"
    GROUP_COMPLETE = "group_complete"
    FINALS = "finals"


@dataclass
class Team:
    """A team of two players."""

    name: str = ""
    player1_name: str = ""
    player2_name: str = ""
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __repr__(self) -> str:
        return f"Team({self.name!r}, id={str(self.id)[:8]})"


@dataclass
class Match:
    """
    One fixture between team_a and team_b.

    The side order matters for the goal fields: goals_team_a always belongs to
    team_a.  Both goal fields are None until a result is recorded.
    """

    team_a: Team
    team_b: Team
    phase: MatchPhase = MatchPhase.GROUP_STAGE
    match_number: int = 1   # 1-based, unique within the phase
    goals_team_a: int | None = None
    goals_team_b: int | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def is_finished(self) -> bool:
        return self.goals_team_a is not None and self.goals_team_b is not None

    def involves(self, team_id: uuid.UUID) -> bool:
        return self.team_a.id == team_id or self.team_b.id == team_id

    def record_result(self, goals_a: int, goals_b: int) -> None:
        """Set both goal counts together.  Nothing changes if either is invalid."""
        # bool is an int subclass but never a valid count
        if any(isinstance(g, bool) or not isinstance(g, int) for g in (goals_a, goals_b)):
            raise InvalidGoals(goals_a, goals_b)
        if goals_a < 0 or goals_b < 0:
            raise NegativeGoals(goals_a, goals_b)
        self.goals_team_a = goals_a
        self.goals_team_b = goals_b

    def winner(self) -> Team | None:
        """Side with more goals; None while unplayed or when level."""
        if not self.is_finished or self.goals_team_a == self.goals_team_b:
            return None
        return self.team_a if self.goals_team_a > self.goals_team_b else self.team_b

    def loser(self) -> Team | None:
        winner = self.winner()
        if winner is None:
            return None
        return self.team_b if winner is self.team_a else self.team_a

    def __repr__(self) -> str:
        score = f"{self.goals_team_a}:{self.goals_team_b}" if self.is_finished else "-:-"
        return (
            f"Match({self.phase.name} #{self.match_number}, "
            f"{self.team_a.name!r} {score} {self.team_b.name!r})"
        )


@dataclass
class Standing:
    """A team's group-stage record.  Derived on demand, never persisted."""

    team: Team
    matches_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    position: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def sort_key(self) -> tuple[int, int, int]:
        """Primary ranking key: points, goal difference, goals scored."""
        return (self.points, self.goal_difference, self.goals_for)
