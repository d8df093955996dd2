"""Sentinel values shared across the package."""

INVALID_ID = 4294967295
"""Marks a missing node or arc identifier."""

INF_WEIGHT = 2147483647
"""Weight of an arc that cannot be used; also the distance of unreached nodes."""

__all__ = ["INVALID_ID", "INF_WEIGHT"]