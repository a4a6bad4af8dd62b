"""Thread-safe event feed for the game session, exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass

from geocoin.core.enums import EventCategory


@dataclass(frozen=True, slots=True)
class GameEvent:
    """One entry in the session's event feed."""

    step: int
    category: EventCategory
    message: str
    cell: tuple[int, int] | None = None  # cell the event happened at, if any


class EventLog:
    """Bounded event log. Oldest entries fall off once *capacity* is reached.

    Guarded by a lock because API handlers read it from worker threads.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, capacity: int | None = None) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, event: GameEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def since_step(self, step: int) -> list[GameEvent]:
        """Return all retained events with step >= *step*."""
        with self._lock:
            return [e for e in self._buffer if e.step >= step]

    def latest(self, count: int = 20) -> list[GameEvent]:
        """Return the *count* most recent events, oldest first."""
        if count <= 0:
            return []
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
