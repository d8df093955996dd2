"""Inverse vectors (CSR offsets) of sorted id sequences.

For a sorted ``v``, its inverse vector ``p`` satisfies: ``v[p[i]:p[i+1]]`` are
exactly the elements equal to ``i``.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence

__all__ = ["invert_vector", "invert_inverse_vector"]


def invert_vector(v: Sequence[int], element_count: int) -> list[int]:
    """Return the ``element_count + 1`` offsets of the sorted sequence ``v``."""
    if not v:
        return [0] * (element_count + 1)
    if any(b < a for a, b in zip(v, v[1:])):
        raise ValueError("v must be sorted")
    if max(v) >= element_count:
        raise ValueError("v has an element not smaller than element_count")
    index = [bisect_left(v, i) for i in range(element_count)]
    index.append(len(v))
    return index


def invert_inverse_vector(sorted_index: Sequence[int]) -> list[int]:
    """Return the sorted sequence whose inverse vector is ``sorted_index``."""
    if not sorted_index:
        raise ValueError("sorted_index must not be empty")
    result: list[int] = []
    for i, (begin, end) in enumerate(zip(sorted_index, sorted_index[1:])):
        result.extend([i] * (end - begin))
    return result