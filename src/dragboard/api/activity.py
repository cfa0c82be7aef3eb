"""In-flight request counter for progress indicators.

Every API call increments the counter when it starts and decrements it when
it finishes, successfully or not. Listeners receive the new count, so a
view can show a progress bar while the count is above zero.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class RequestTracker:
    """Counts requests currently in flight and notifies listeners."""

    def __init__(self) -> None:
        self._in_flight = 0
        self._listeners: list[Callable[[int], None]] = []

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    def subscribe(self, listener: Callable[[int], None]) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        self._in_flight += 1
        self._notify()

    def finish(self) -> None:
        if self._in_flight == 0:
            logger.warning("RequestTracker.finish() called with nothing in flight")
            return
        self._in_flight -= 1
        self._notify()

    def _notify(self) -> None:
        # Iterate over a copy: listeners may unsubscribe themselves.
        for listener in list(self._listeners):
            listener(self._in_flight)
