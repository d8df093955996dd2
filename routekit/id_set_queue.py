"""A min-queue holding a set of ids from ``range(n)``, ordered by id value."""

from __future__ import annotations

__all__ = ["IDSetMinQueue"]

_ROOT = 1


def _smallest_power_of_two_at_least(x: int) -> int:
    y = 1
    while y < x:
        y <<= 1
    return y


class IDSetMinQueue:
    """A set of ids that can hand out its smallest member.

    The ids are the leaves of an implicit binary tree; an inner node is marked
    whenever some leaf below it is. Nodes are numbered from 1, leaves start at
    ``offset``, a power of two not smaller than ``n``. For odd ``n`` a padding
    leaf keeps every leaf paired with a sibling.
    """

    def __init__(self, n: int) -> None:
        self._id_count = n
        self._min_id: int | None = None
        self._offset = _smallest_power_of_two_at_least(n)
        self._data = [False] * (n + self._offset + (n & 1))

    @property
    def id_count(self) -> int:
        """The number of distinct ids the queue can hold."""
        return self._id_count

    def _check_id(self, node_id: int) -> None:
        if not 0 <= node_id < self._id_count:
            raise IndexError(f"id {node_id} is outside of [0, {self._id_count})")

    def push(self, node_id: int) -> None:
        """Add an id; adding an id already present does nothing."""
        self._check_id(node_id)
        if self._min_id is None or node_id < self._min_id:
            self._min_id = node_id

        data = self._data
        x = node_id + self._offset
        if data[x]:
            return
        while True:
            data[x] = True
            if x == _ROOT:
                break
            x >>= 1
            if data[x]:
                break

    def __contains__(self, node_id: int) -> bool:
        self._check_id(node_id)
        return self._data[self._offset + node_id]

    def __bool__(self) -> bool:
        return self._min_id is not None

    def peek(self) -> int | None:
        """Return the smallest id without removing it, or None if the queue is empty."""
        return self._min_id

    def pop(self) -> int:
        """Remove and return the smallest id."""
        if self._min_id is None:
            raise IndexError("pop from an empty queue")
        data = self._data
        result = self._min_id
        x = result + self._offset

        while True:
            data[x] = False
            if x == _ROOT:
                self._min_id = None
                return result
            if not x & 1 and data[x ^ 1]:
                break
            x >>= 1

        x ^= 1
        while x < self._offset:
            x <<= 1
            if not data[x]:
                x ^= 1
        self._min_id = x - self._offset
        return result

    def clear(self) -> None:
        """Remove all ids."""
        while self:
            self.pop()