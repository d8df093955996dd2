"""Planar tests of points, edges and polygons.

A polygon is a flat sequence of coordinates ``[x0, y0, x1, y1, ...]``; its
last vertex connects back to the first.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

__all__ = ["point_in_polygon", "edge_crosses_polygon", "segments_intersect"]


def _check_polygon(poly: Sequence[float]) -> int:
    if len(poly) % 2:
        raise ValueError("a polygon needs an even number of coordinates")
    return len(poly) // 2


def _div(a: float, b: float) -> float:
    """Divide following IEEE rules, giving inf or nan instead of raising."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _edges(poly: Sequence[float], vertex_count: int):
    """Yield ``(prev_x, prev_y, curr_x, curr_y)`` for every polygon edge."""
    for curr in range(vertex_count):
        prev = curr - 1 if curr else vertex_count - 1
        yield poly[2 * prev], poly[2 * prev + 1], poly[2 * curr], poly[2 * curr + 1]


def point_in_polygon(query_x: float, query_y: float, poly: Sequence[float]) -> bool:
    """Return True if the point lies inside the polygon, by casting a ray to the right."""
    vertex_count = _check_polygon(poly)
    inside = False
    for prev_x, prev_y, curr_x, curr_y in _edges(poly, vertex_count):
        if (curr_y > query_y) != (prev_y > query_y):
            crossing_x = (query_y - curr_y) * (prev_x - curr_x) / (prev_y - curr_y) + curr_x
            if query_x < crossing_x:
                inside = not inside
    return inside


def edge_crosses_polygon(x_a: float, y_a: float, x_b: float, y_b: float, poly: Sequence[float]) -> bool:
    """Return True if the segment from a to b crosses an edge of the polygon.

    Edges parallel to the segment and both horizontal or both vertical are ignored.
    """
    vertex_count = _check_polygon(poly)

    m1 = _div(y_b - y_a, x_b - x_a)
    c1 = y_a - m1 * x_a

    for x_c, y_c, x_d, y_d in _edges(poly, vertex_count):
        if (x_a == x_b and x_c == x_d) or (y_a == y_b and y_c == y_d):
            continue

        m2 = _div(y_d - y_c, x_d - x_c)
        c2 = y_c - m2 * x_c

        if x_a == x_b:
            x = x_a
            y = m2 * x + c2
        elif x_c == x_d:
            x = x_c
            y = m1 * x + c1
        elif y_a == y_b:
            y = y_a
            x = (y - y_c) * (x_d - x_c) / (y_d - y_c) + x_c
        elif y_c == y_d:
            y = y_c
            x = (y - y_a) * (x_b - x_a) / (y_b - y_a) + x_a
        else:
            x = _div(c2 - c1, m1 - m2)
            y = m1 * x + c1

        if (
            ((x_a > x) != (x_b > x) or x_a == x_b)
            and ((x_c > x) != (x_d > x) or x_c == x_d)
            and ((y_a > y) != (y_b > y) or y_a == y_b)
            and ((y_c > y) != (y_d > y) or y_c == y_d)
        ):
            return True
    return False


def segments_intersect(
    x1: float, y1: float, x2: float, y2: float,
    x3: float, y3: float, x4: float, y4: float,
) -> bool:
    """Return True if segment 1-2 and segment 3-4 intersect; shared endpoints count."""
    if (
        (x1 == x3 and y1 == y3)
        or (x1 == x4 and y1 == y4)
        or (x2 == x3 and y2 == y3)
        or (x2 == x4 and y2 == y4)
    ):
        return True

    dx12 = x1 - x2
    dx13 = x1 - x3
    dx34 = x3 - x4
    dy12 = y1 - y2
    dy13 = y1 - y3
    dy34 = y3 - y4
    denominator = dx12 * dy34 - dy12 * dx34
    numerator1 = dx13 * dy34 - dy13 * dx34
    numerator2 = dx13 * dy12 - dy13 * dx12

    if denominator >= 0:
        return 0 <= numerator1 <= denominator and 0 <= numerator2 <= denominator
    return denominator <= numerator1 <= 0 and denominator <= numerator2 <= 0