"""Bounded recency buffer used to keep affirmations from repeating."""

from __future__ import annotations

import threading
from collections import deque

DEFAULT_CAPACITY = 10
_PREFIX_LENGTH = 20


class RepetitionTracker:
    """Remembers the last ``capacity`` affirmation texts, oldest evicted first.

    One instance is shared by every affirmation call in the process; all
    access goes through a lock so concurrent callers never lose an append.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._texts: deque[str] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._texts.maxlen or 0

    def record(self, text: str) -> None:
        with self._lock:
            self._texts.append(text)

    def recent_texts(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._texts)

    def is_recent(self, text: str, prefix_length: int = _PREFIX_LENGTH) -> bool:
        """True when the opening of ``text`` appears in any remembered text."""

        prefix = text[:prefix_length]
        with self._lock:
            return any(prefix in recent for recent in self._texts)

    def clear(self) -> None:
        with self._lock:
            self._texts.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._texts)
