"""Reading polygons from text files."""

from __future__ import annotations

import os

__all__ = ["load_polygons"]


def load_polygons(file_name: str | os.PathLike[str]) -> list[list[float]]:
    """Read one polygon per non-empty line.

    Each line holds whitespace-separated ``latitude longitude`` pairs; the
    polygon is returned as a flat list ``[lat0, lon0, lat1, lon1, ...]``.
    Raises ValueError for a line that cannot be parsed.
    """
    polygons: list[list[float]] = []
    with open(file_name, encoding="utf-8") as f:
        for line_number, raw_line in enumerate(f, start=1):
            line = raw_line.rstrip("\n")
            if not line:
                continue
            try:
                values = [float(token) for token in line.split()]
            except ValueError:
                values = []
            if not values or len(values) % 2:
                raise ValueError(
                    f'Cannot parse line number {line_number} "{line}" in polygon file.'
                )
            polygons.append(values)
    return polygons