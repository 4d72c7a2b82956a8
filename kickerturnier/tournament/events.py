"""
Change notification for the tournament aggregate.

Listeners are zero-argument callables.  The signal carries no payload:
subscribers re-read teams, matches and standings from the aggregate.
Delivery is synchronous, in subscription order, on the caller's thread.
"""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChangeSignal:
    """A list of listeners fired after every successful mutation."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener and return a callable that unsubscribes it."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass  # already removed

    def emit(self) -> None:
        # Iterate a snapshot so a listener may unsubscribe itself mid-delivery
        for listener in list(self._listeners):
            listener()

    def __len__(self) -> int:
        return len(self._listeners)
