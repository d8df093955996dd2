"""An addressable min-priority queue over the ids ``0 .. id_count-1``."""

from __future__ import annotations

from dataclasses import dataclass

from routekit.constants import INVALID_ID

__all__ = ["IDKeyPair", "MinIDQueue"]


@dataclass(frozen=True)
class IDKeyPair:
    """An element id together with its priority key."""

    id: int
    key: int


class MinIDQueue:
    """A 4-ary heap whose elements are ids in ``range(id_count)``, ordered by integer keys.

    Every id can be in the queue at most once; its key can be changed while it is queued.
    """

    _ARITY = 4

    def __init__(self, id_count: int) -> None:
        self._id_pos = [INVALID_ID] * id_count
        self._ids: list[int] = []
        self._keys: list[int] = []

    @property
    def id_count(self) -> int:
        """The number of distinct ids the queue can hold."""
        return len(self._id_pos)

    def __len__(self) -> int:
        return len(self._ids)

    def _check_id(self, node_id: int) -> None:
        if not 0 <= node_id < len(self._id_pos):
            raise IndexError(f"id {node_id} is outside of [0, {len(self._id_pos)})")

    def contains_id(self, node_id: int) -> bool:
        """Return True if ``node_id`` is currently in the queue."""
        self._check_id(node_id)
        return self._id_pos[node_id] != INVALID_ID

    def clear(self) -> None:
        """Remove all elements."""
        for node_id in self._ids:
            self._id_pos[node_id] = INVALID_ID
        self._ids.clear()
        self._keys.clear()

    def get_key(self, node_id: int) -> int:
        """Return the current key of a queued id."""
        if not self.contains_id(node_id):
            raise KeyError(node_id)
        return self._keys[self._id_pos[node_id]]

    def peek(self) -> IDKeyPair:
        """Return the element with the smallest key without removing it."""
        if not self._ids:
            raise IndexError("peek from an empty queue")
        return IDKeyPair(self._ids[0], self._keys[0])

    def pop(self) -> IDKeyPair:
        """Remove and return the element with the smallest key."""
        if not self._ids:
            raise IndexError("pop from an empty queue")
        self._swap(0, len(self._ids) - 1)
        top_id = self._ids.pop()
        top_key = self._keys.pop()
        self._id_pos[top_id] = INVALID_ID
        if self._ids:
            self._move_down(0)
        return IDKeyPair(top_id, top_key)

    def push(self, pair: IDKeyPair) -> None:
        """Insert an id that is not yet in the queue."""
        if self.contains_id(pair.id):
            raise ValueError(f"id {pair.id} is already in the queue")
        pos = len(self._ids)
        self._ids.append(pair.id)
        self._keys.append(pair.key)
        self._id_pos[pair.id] = pos
        self._move_up(pos)

    def decrease_key(self, pair: IDKeyPair) -> bool:
        """Lower the key of a queued id; return False and do nothing if the new key is not smaller."""
        if not self.contains_id(pair.id):
            raise KeyError(pair.id)
        pos = self._id_pos[pair.id]
        if self._keys[pos] > pair.key:
            self._keys[pos] = pair.key
            self._move_up(pos)
            return True
        return False

    def increase_key(self, pair: IDKeyPair) -> bool:
        """Raise the key of a queued id; return False and do nothing if the new key is not larger."""
        if not self.contains_id(pair.id):
            raise KeyError(pair.id)
        pos = self._id_pos[pair.id]
        if self._keys[pos] < pair.key:
            self._keys[pos] = pair.key
            self._move_down(pos)
            return True
        return False

    def _swap(self, i: int, j: int) -> None:
        ids, keys = self._ids, self._keys
        ids[i], ids[j] = ids[j], ids[i]
        keys[i], keys[j] = keys[j], keys[i]
        self._id_pos[ids[i]] = i
        self._id_pos[ids[j]] = j

    def _move_up(self, pos: int) -> None:
        keys = self._keys
        while pos:
            parent = (pos - 1) // self._ARITY
            if keys[parent] <= keys[pos]:
                return
            self._swap(pos, parent)
            pos = parent

    def _move_down(self, pos: int) -> None:
        keys = self._keys
        size = len(keys)
        while True:
            first_child = self._ARITY * pos + 1
            if first_child >= size:
                return
            end = min(first_child + self._ARITY, size)
            smallest = min(range(first_child, end), key=keys.__getitem__)
            if keys[smallest] >= keys[pos]:
                return
            self._swap(pos, smallest)
            pos = smallest