from __future__ import annotations

import threading
import time
from typing import Callable


class SearchSequencer:
    """Latest-request-wins bookkeeping for debounced searches.

    Each scope (typically a user plus an input field) holds the newest sequence
    number seen. A response is stale once a higher number has been registered
    for its scope. Scopes untouched for ``ttl_seconds`` are forgotten on the
    next write, so an idle scope starts again from zero.
    """

    def __init__(self, ttl_seconds: float = 900, clock: Callable[[], float] | None = None) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = float(ttl_seconds)
        self._clock = clock or time.monotonic
        self._latest: dict[str, tuple[int, float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)

    def _prune(self, now: float) -> None:
        cutoff = now - self._ttl
        stale = [scope for scope, (_, seen_at) in self._latest.items() if seen_at <= cutoff]
        for scope in stale:
            del self._latest[scope]

    def _current(self, scope: str) -> int:
        entry = self._latest.get(scope)
        return entry[0] if entry else 0

    def issue(self, scope: str) -> int:
        with self._lock:
            now = self._clock()
            self._prune(now)
            seq = self._current(scope) + 1
            self._latest[scope] = (seq, now)
            return seq

    def register(self, scope: str, seq: int) -> bool:
        """Record a client-chosen ``seq``; return False if it is already stale."""
        with self._lock:
            now = self._clock()
            self._prune(now)
            if seq < self._current(scope):
                return False
            self._latest[scope] = (seq, now)
            return True

    def is_latest(self, scope: str, seq: int) -> bool:
        with self._lock:
            return self._current(scope) == seq

    def latest(self, scope: str) -> int:
        with self._lock:
            return self._current(scope)
