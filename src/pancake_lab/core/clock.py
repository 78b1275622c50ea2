"""Time sources for order timestamps.

Orders never read the wall clock themselves; every factory and transition
takes an optional ``IClock`` and falls back to ``DEFAULT_CLOCK``.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Protocol

from .ids import utc_now

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class IClock(Protocol):
    def now(self) -> datetime:
        """Timezone-aware UTC time."""
        ...


class WallClock:
    """System time in UTC."""

    def now(self) -> datetime:
        return utc_now()


class SimClock:
    """Deterministic clock for tests and replays.

    Frozen unless moved with ``set`` / ``advance``.  With *step*, every
    ``now()`` call also moves the clock forward by *step* after reading it,
    so consecutive order revisions get distinct, evenly spaced timestamps.
    """

    def __init__(
        self, start: datetime | None = None, *, step: timedelta | None = None
    ) -> None:
        if step is not None and step < timedelta(0):
            raise ValueError("SimClock step must not be negative")
        self._current = start or EPOCH
        self._step = step
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            current = self._current
            if self._step:
                self._current = current + self._step
            return current

    def set(self, moment: datetime) -> None:
        """Jump to *moment*; the clock never moves backwards."""
        with self._lock:
            if moment < self._current:
                raise ValueError(
                    f"SimClock cannot go backwards: {moment.isoformat()} "
                    f"is before {self._current.isoformat()}"
                )
            self._current = moment

    def advance(self, delta: timedelta) -> datetime:
        """Move forward by *delta* and return the new time."""
        if delta < timedelta(0):
            raise ValueError("SimClock cannot go backwards")
        with self._lock:
            self._current += delta
            return self._current


DEFAULT_CLOCK: IClock = WallClock()
