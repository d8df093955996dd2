"""Sort permutations and sorting helpers.

A sort permutation ``p`` of ``v`` satisfies ``v[p[0]] <= v[p[1]] <= ...``.
Functions ending in ``_using_comparator`` take a strict less-than predicate,
``_using_key`` take a key count and a function mapping each element into
``range(key_count)``, and ``_using_less`` use ``<``. All sorts are stable.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import cmp_to_key
from typing import TypeVar

from routekit.permutation import invert_permutation

T = TypeVar("T")

__all__ = [
    "compute_sort_permutation_using_comparator",
    "compute_stable_sort_permutation_using_comparator",
    "compute_inverse_sort_permutation_using_comparator",
    "sort_using_comparator",
    "is_sorted_using_comparator",
    "compute_sort_permutation_using_key",
    "compute_inverse_sort_permutation_using_key",
    "sort_using_key",
    "is_sorted_using_key",
    "compute_sort_permutation_using_less",
    "compute_inverse_sort_permutation_using_less",
    "sort_using_less",
    "is_sorted_using_less",
]


def _comparison(is_less: Callable[[T, T], bool]) -> Callable[[T, T], int]:
    def compare(left: T, right: T) -> int:
        if is_less(left, right):
            return -1
        if is_less(right, left):
            return 1
        return 0

    return compare


def compute_stable_sort_permutation_using_comparator(v: Sequence[T], is_less: Callable[[T, T], bool]) -> list[int]:
    """Return a stable sort permutation of ``v`` ordered by ``is_less``."""
    element_key = cmp_to_key(_comparison(is_less))
    return sorted(range(len(v)), key=lambda i: element_key(v[i]))


def compute_sort_permutation_using_comparator(v: Sequence[T], is_less: Callable[[T, T], bool]) -> list[int]:
    """Return a sort permutation of ``v`` ordered by ``is_less``."""
    return compute_stable_sort_permutation_using_comparator(v, is_less)


def compute_inverse_sort_permutation_using_comparator(v: Sequence[T], is_less: Callable[[T, T], bool]) -> list[int]:
    """Return the inverse of the sort permutation of ``v``."""
    return invert_permutation(compute_sort_permutation_using_comparator(v, is_less))


def sort_using_comparator(v: Sequence[T], is_less: Callable[[T, T], bool]) -> list[T]:
    """Return a sorted copy of ``v``."""
    return sorted(v, key=cmp_to_key(_comparison(is_less)))


def is_sorted_using_comparator(v: Sequence[T], is_less: Callable[[T, T], bool]) -> bool:
    """Return True if no element is less than its predecessor."""
    return not any(is_less(b, a) for a, b in zip(v, v[1:]))


def _checked_keys(v: Sequence[T], key_count: int, get_key: Callable[[T], int]) -> list[int]:
    keys = [get_key(x) for x in v]
    for k in keys:
        if not 0 <= k < key_count:
            raise ValueError(f"key {k} is outside of [0, {key_count})")
    return keys


def compute_sort_permutation_using_key(v: Sequence[T], key_count: int, get_key: Callable[[T], int]) -> list[int]:
    """Return a stable sort permutation of ``v`` computed by bucket sort on ``get_key``."""
    keys = _checked_keys(v, key_count, get_key)
    buckets: list[list[int]] = [[] for _ in range(key_count)]
    for i, k in enumerate(keys):
        buckets[k].append(i)
    return [i for bucket in buckets for i in bucket]


def compute_inverse_sort_permutation_using_key(v: Sequence[T], key_count: int, get_key: Callable[[T], int]) -> list[int]:
    """Return the inverse of :func:`compute_sort_permutation_using_key`."""
    return invert_permutation(compute_sort_permutation_using_key(v, key_count, get_key))


def sort_using_key(v: Sequence[T], key_count: int, get_key: Callable[[T], int]) -> list[T]:
    """Return a copy of ``v`` stably sorted by ``get_key``."""
    return [v[i] for i in compute_sort_permutation_using_key(v, key_count, get_key)]


def is_sorted_using_key(v: Sequence[T], get_key: Callable[[T], int]) -> bool:
    """Return True if the keys of ``v`` never decrease."""
    keys = [get_key(x) for x in v]
    return all(a <= b for a, b in zip(keys, keys[1:]))


def compute_sort_permutation_using_less(v: Sequence[T]) -> list[int]:
    """Return a stable sort permutation of ``v`` under ``<``."""
    return sorted(range(len(v)), key=v.__getitem__)


def compute_inverse_sort_permutation_using_less(v: Sequence[T]) -> list[int]:
    """Return the inverse of :func:`compute_sort_permutation_using_less`."""
    return invert_permutation(compute_sort_permutation_using_less(v))


def sort_using_less(v: Sequence[T]) -> list[T]:
    """Return a sorted copy of ``v``."""
    return sorted(v)


def is_sorted_using_less(v: Sequence[T]) -> bool:
    """Return True if ``v`` is sorted under ``<``."""
    return not any(b < a for a, b in zip(v, v[1:]))