"""Local JSON file store for the serialized tournament state."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from kickerturnier.tournament.state import TournamentState

logger = logging.getLogger(__name__)

DEFAULT_STATE_PATH = Path("kickerturnier_state.json")


class StateStore:
    def __init__(self, path: str | Path = DEFAULT_STATE_PATH) -> None:
        self.path = Path(path)

    def load(self) -> str | None:
        """Return the stored document, or None when nothing has been saved yet."""
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def save(self, document: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(document, encoding="utf-8")

    def restore(self, state: TournamentState) -> bool:
        """Load the stored document into state.  False if missing or unreadable."""
        document = self.load()
        if document is None:
            logger.info("No saved state at %s", self.path)
            return False
        return state.deserialize_state(document)

    def attach(self, state: TournamentState) -> Callable[[], None]:
        """Save state after every change.  Returns the unsubscribe callable."""
        return state.changed.subscribe(lambda: self.save(state.serialize_state()))
