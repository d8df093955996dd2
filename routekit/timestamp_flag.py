"""Flags over a fixed id range that can all be cleared in constant time."""

from __future__ import annotations

__all__ = ["TimestampFlags"]

_TIMESTAMP_RANGE = 1 << 16


class TimestampFlags:
    """A flag per id; an id is set when its stamp equals the current timestamp.

    Timestamps are 16-bit; when they wrap, all stamps are wiped once.
    """

    def __init__(self, id_count: int) -> None:
        self._last_seen = [0] * id_count
        self._current = 1

    def is_set(self, node_id: int) -> bool:
        """Return True if the flag of ``node_id`` is set."""
        return self._last_seen[node_id] == self._current

    def set(self, node_id: int) -> None:
        """Set the flag of ``node_id``."""
        self._last_seen[node_id] = self._current

    def reset_one(self, node_id: int) -> None:
        """Clear the flag of ``node_id``."""
        self._last_seen[node_id] = self._current - 1

    def reset_all(self) -> None:
        """Clear every flag."""
        self._current += 1
        if self._current == _TIMESTAMP_RANGE:
            self._last_seen = [0] * len(self._last_seen)
            self._current = 1