"""Selecting elements of a sequence by a boolean mask."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

__all__ = ["keep_element_of_vector_if", "remove_element_from_vector_if"]


def _check_sizes(mask: Sequence[bool], vec: Sequence[object]) -> None:
    if len(mask) != len(vec):
        raise ValueError("filter and vector must have the same size")


def keep_element_of_vector_if(keep_filter: Sequence[bool], vec: Sequence[T]) -> list[T]:
    """Return the elements of ``vec`` whose mask entry is true, in order."""
    _check_sizes(keep_filter, vec)
    return [x for keep, x in zip(keep_filter, vec) if keep]


def remove_element_from_vector_if(remove_filter: Sequence[bool], vec: Sequence[T]) -> list[T]:
    """Return the elements of ``vec`` whose mask entry is false, in order."""
    _check_sizes(remove_filter, vec)
    return [x for remove, x in zip(remove_filter, vec) if not remove]