"""Generation tokens used to detect results that arrive for abandoned work."""

import threading


class Epoch:
    """A thread-safe, monotonically increasing generation counter.

    Work is tagged with the token returned by ``advance``; once the epoch has
    moved on, ``is_current`` reports the tagged work as stale.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0

    @property
    def current(self) -> int:
        with self._lock:
            return self._current

    def advance(self) -> int:
        """Start a new generation and return its token."""
        with self._lock:
            self._current += 1
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current
