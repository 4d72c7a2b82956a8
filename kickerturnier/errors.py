"""
Exceptions raised by the tournament engine.

Every error derives from TournamentError so an embedding application can catch
the whole family at once.  Input problems additionally derive from ValueError
(TypeError for wrongly typed goals) and state problems from RuntimeError.
"""

from __future__ import annotations


class TournamentError(Exception):
    """Base class for all tournament engine errors."""


class InsufficientTeams(TournamentError, ValueError):
    """Scheduling was requested with fewer than two teams."""

    def __init__(self, team_count: int) -> None:
        super().__init__(f"Need at least 2 teams to start a tournament, got {team_count}.")
        self.team_count = team_count


class TournamentAlreadyStarted(TournamentError, RuntimeError):
    """A roster change was attempted after matches were generated."""

    def __init__(self) -> None:
        super().__init__("Cannot remove teams after the tournament has started.")


class NegativeGoals(TournamentError, ValueError):
    """A result was entered with a negative goal count."""

    def __init__(self, goals_a: int, goals_b: int) -> None:
        super().__init__(f"Goals cannot be negative (got {goals_a}:{goals_b}).")
        self.goals_a = goals_a
        self.goals_b = goals_b


class InvalidGoals(TournamentError, TypeError):
    """A result was entered with a goal count that is not a plain integer."""

    def __init__(self, goals_a: object, goals_b: object) -> None:
        super().__init__(f"Goals must be integers (got {goals_a!r}:{goals_b!r}).")
        self.goals_a = goals_a
        self.goals_b = goals_b


class GroupStageIncomplete(TournamentError, RuntimeError):
    """Finals were requested before every group match had a result."""

    def __init__(self, unfinished: int) -> None:
        if unfinished:
            msg = f"Cannot generate final matches: {unfinished} group match(es) still unplayed."
        else:
            msg = "Cannot generate final matches: no group stage has been played."
        super().__init__(msg)
        self.unfinished = unfinished


class DeserializationFailure(TournamentError, ValueError):
    """A persisted state document could not be parsed."""
