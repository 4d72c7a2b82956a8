"""
TournamentState, the aggregate holding the roster and the match list.

All mutations go through this class.  Each successful mutation fires
`changed` once (recording the last group result fires it twice: once for the
result, once for the derived finals).  The aggregate phase is never stored;
it is read off the match list by tournament_phase().

The instance is owned by the embedding application.  It does no locking and
no I/O; persistence hooks in through the change signal (see store.py).
"""

from __future__ import annotations

import logging
import uuid
from typing import Sequence

from kickerturnier.errors import DeserializationFailure, TournamentAlreadyStarted
from kickerturnier.tournament import knockout, round_robin, serialization
from kickerturnier.tournament.base import (
    KNOCKOUT_PHASES,
    Match,
    MatchPhase,
    Standing,
    Team,
    TournamentPhase,
)
from kickerturnier.tournament.events import ChangeSignal
from kickerturnier.tournament.standings import (
    STANDARD_SCORING,
    ScoringSystem,
    compute_standings,
)

logger = logging.getLogger(__name__)

EXAMPLE_TEAMS: list[tuple[str, str, str]] = [
    ("FC Tornado", "Max Mustermann", "Anna Schmidt"),
    ("Die Kicker", "Tom Müller", "Lisa Weber"),
    ("Tischmeister", "Jan Becker", "Sarah Klein"),
    ("Ballmagier", "Lukas Wagner", "Emma Hoffmann"),
    ("Torjäger", "Felix Schulz", "Nina Fischer"),
]


def tournament_phase(matches: Sequence[Match]) -> TournamentPhase:
    """Derive the aggregate phase from the match list alone."""
    if not matches:
        return TournamentPhase.SETUP
    if knockout.has_final_matches(matches):
        return TournamentPhase.FINALS
    if knockout.is_group_stage_complete(matches):
        return TournamentPhase.GROUP_COMPLETE
    return TournamentPhase.GROUP_STAGE


class TournamentState:
    """Roster + matches, with the operations that keep them consistent."""

    def __init__(self, scoring: ScoringSystem = STANDARD_SCORING) -> None:
        self.scoring = scoring
        self.changed = ChangeSignal()
        self.last_load_error: DeserializationFailure | None = None
        self._teams: list[Team] = []
        self._matches: list[Match] = []

    # ------------------------------------------------------------------ #
    # Read access                                                          #
    # ------------------------------------------------------------------ #

    @property
    def teams(self) -> list[Team]:
        return list(self._teams)

    @property
    def matches(self) -> list[Match]:
        return list(self._matches)

    @property
    def phase(self) -> TournamentPhase:
        return tournament_phase(self._matches)

    def get_team(self, team_id: uuid.UUID) -> Team | None:
        return next((t for t in self._teams if t.id == team_id), None)

    def get_match(self, match_id: uuid.UUID) -> Match | None:
        return next((m for m in self._matches if m.id == match_id), None)

    def find_match(self, phase: MatchPhase, match_number: int) -> Match | None:
        return next(
            (m for m in self._matches if m.phase == phase and m.match_number == match_number),
            None,
        )

    def group_matches(self) -> list[Match]:
        return [m for m in self._matches if m.phase == MatchPhase.GROUP_STAGE]

    def standings(self) -> list[Standing]:
        """Current group table, recomputed from the match list on every call."""
        return compute_standings(self._teams, self._matches, self.scoring)

    def is_group_stage_complete(self) -> bool:
        return knockout.is_group_stage_complete(self._matches)

    def has_final_matches(self) -> bool:
        return knockout.has_final_matches(self._matches)

    def final_match(self) -> Match | None:
        return knockout.find_phase_match(self._matches, MatchPhase.FINAL)

    def third_place_match(self) -> Match | None:
        return knockout.find_phase_match(self._matches, MatchPhase.THIRD_PLACE)

    def champion(self) -> Team | None:
        return knockout.champion(self._matches)

    def runner_up(self) -> Team | None:
        return knockout.runner_up(self._matches)

    def third_place(self) -> Team | None:
        return knockout.third_place(self._matches)

    # ------------------------------------------------------------------ #
    # Roster                                                               #
    # ------------------------------------------------------------------ #

    def add_team(self, team: Team) -> None:
        self._teams.append(team)
        self._notify()

    def update_team(
        self,
        team_id: uuid.UUID,
        *,
        name: str | None = None,
        player1_name: str | None = None,
        player2_name: str | None = None,
    ) -> None:
        """Overwrite the given name fields.  Unknown ids are ignored."""
        team = self.get_team(team_id)
        if team is None:
            return
        if name is not None:
            team.name = name
        if player1_name is not None:
            team.player1_name = player1_name
        if player2_name is not None:
            team.player2_name = player2_name
        self._notify()

    def remove_team(self, team_id: uuid.UUID) -> None:
        """
        Raises:
            TournamentAlreadyStarted: matches exist; every match references
                roster teams, so the roster is frozen until a reset.
        """
        if self._matches:
            raise TournamentAlreadyStarted()
        self._teams = [t for t in self._teams if t.id != team_id]
        self._notify()

    def load_example_teams(self) -> None:
        """Fill an empty roster with five demo teams.  Existing teams are kept."""
        if self._teams:
            return
        self._teams = [Team(name=n, player1_name=p1, player2_name=p2) for n, p1, p2 in EXAMPLE_TEAMS]
        self._notify()

    # ------------------------------------------------------------------ #
    # Matches                                                              #
    # ------------------------------------------------------------------ #

    def generate_group_stage(self) -> None:
        """
        Replace the whole match list with a fresh round-robin schedule.

        Recorded results (and any finals) are discarded.

        Raises:
            InsufficientTeams: fewer than two teams.
        """
        matches = round_robin.generate_group_stage(self._teams)
        played = sum(1 for m in self._matches if m.is_finished)
        if played:
            logger.warning("Re-scheduling discards %d recorded result(s)", played)
        self._matches = matches
        self._notify()

    def record_result(self, match_id: uuid.UUID, goals_a: int, goals_b: int) -> None:
        """
        Enter a result and, when it completes the group stage, derive finals.

        Unknown match ids are ignored.  Finals are only derived automatically
        the first time; after correcting a group result once finals exist,
        call generate_finals() to rebuild them.

        Raises:
            NegativeGoals: either count is negative; the match is unchanged.
        """
        match = self.get_match(match_id)
        if match is None:
            logger.debug("Ignoring result for unknown match %s", match_id)
            return

        match.record_result(goals_a, goals_b)
        logger.info("Recorded %r", match)
        self._notify()

        if self.is_group_stage_complete() and not self.has_final_matches():
            self.generate_finals()

    def generate_finals(self) -> None:
        """
        (Re)build the Final and Third-Place matches from the group table.

        Raises:
            GroupStageIncomplete: the group stage is missing or unfinished.
        """
        updated = knockout.derive_finals(self._teams, self._matches, self.scoring)
        if any(m.phase in KNOCKOUT_PHASES for m in updated):
            self._matches = updated
            self._notify()

    def reset_tournament(self) -> None:
        """Drop all matches, keep the roster."""
        self._matches = []
        self._notify()

    def clear_all(self) -> None:
        self._teams = []
        self._matches = []
        self._notify()

    # ------------------------------------------------------------------ #
    # Persistence                                                          #
    # ------------------------------------------------------------------ #

    def serialize_state(self) -> str:
        return serialization.dumps_state(self._teams, self._matches)

    def deserialize_state(self, text: str) -> bool:
        """
        Replace the current state with the one in text.

        Returns False when the document cannot be parsed.  In that case the
        error is logged and kept in last_load_error, and the state is left
        empty rather than half-loaded.  Observers are only notified after a
        successful load, so an attached store never overwrites the unreadable
        document with an empty one.
        """
        self._teams = []
        self._matches = []
        try:
            teams, matches = serialization.loads_state(text)
        except DeserializationFailure as exc:
            logger.error("Error deserializing state: %s", exc)
            self.last_load_error = exc
            return False

        self._teams = teams
        self._matches = matches
        self.last_load_error = None
        logger.info("Loaded %d team(s) and %d match(es)", len(teams), len(matches))
        self._notify()
        return True

    # ------------------------------------------------------------------ #
    # Internal                                                             #
    # ------------------------------------------------------------------ #

    def _notify(self) -> None:
        self.changed.emit()
