"""A small string-to-string map tuned for the tags of map objects."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

__all__ = ["TagMap"]

_CHAR_HASH_COUNT = 16
_MAX_ENTRY_COUNT = 1 << 16

_FREQUENT_CHAR_HASH = {
    ord(char): value
    for chars, value in (
        ("eE", 7),
        ("tT", 8),
        ("aA", 9),
        ("oO", 10),
        ("iI", 11),
        ("nN", 12),
        ("sS", 13),
        ("hH", 14),
        ("rR", 15),
    )
    for char in chars
}


def _char_hash(byte: int) -> int:
    return _FREQUENT_CHAR_HASH.get(byte, byte % 7)


def _key_hash(key: str) -> int:
    """Hash a key from its first, last and middle byte."""
    data = key.encode("utf-8")
    if not data:
        return 0
    last = len(data) - 1
    return (
        _char_hash(data[0]) * _CHAR_HASH_COUNT + _char_hash(data[last])
    ) * _CHAR_HASH_COUNT + _char_hash(data[last // 2])


class TagMap:
    """Maps tag keys to values; built once from a list of pairs, then queried.

    Entries are grouped by a cheap hash of the key. When a key occurs several
    times, the pair given first wins.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[str, str]] = []
        self._buckets: dict[int, tuple[int, int]] = {}

    def build(self, items: Iterable[tuple[str, str]]) -> None:
        """Replace the content with the given ``(key, value)`` pairs."""
        pairs = list(items)
        if len(pairs) > _MAX_ENTRY_COUNT:
            raise ValueError(f"a tag map holds at most {_MAX_ENTRY_COUNT} entries")

        hashes = [_key_hash(key) for key, _ in pairs]
        order = sorted(range(len(pairs)), key=lambda i: (hashes[i], i))

        self._entries = [pairs[i] for i in order]
        self._buckets = {}
        for position, i in enumerate(order):
            h = hashes[i]
            begin, _ = self._buckets.get(h, (position, position))
            self._buckets[h] = (begin, position + 1)

    def get(self, key: str) -> str | None:
        """Return the value stored for ``key``, or None if there is none."""
        begin, end = self._buckets.get(_key_hash(key), (0, 0))
        for entry_key, value in self._entries[begin:end]:
            if entry_key == key:
                return value
        return None

    def clear(self) -> None:
        """Remove all entries."""
        self._entries = []
        self._buckets = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._entries)