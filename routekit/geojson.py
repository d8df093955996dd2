"""GeoJSON text for paths, points and line strings."""

from __future__ import annotations

from collections.abc import Sequence

__all__ = ["path_to_geojson", "geojson_point", "geojson_linestring"]


def _number(x: float) -> str:
    """Format a coordinate with six significant digits."""
    return format(float(x), "g")


def path_to_geojson(node_path: Sequence[int], latitude: Sequence[float], longitude: Sequence[float]) -> str:
    """Return a LineString geometry through the positions of the nodes of ``node_path``."""
    coordinates = ",".join(
        f"[{_number(longitude[node])},{_number(latitude[node])}]" for node in node_path
    )
    return '{"type":"LineString","coordinates":[' + coordinates + "]}"


def geojson_point(longitude: float, latitude: float, node_id: int, avoid: bool, settled: bool) -> str:
    """Return a Point feature with id, avoid and settled properties (flags as 0 or 1)."""
    return (
        '{"type":"Feature","geometry":'
        f'{{"type":"Point","coordinates":[{_number(longitude)},{_number(latitude)}]}}'
        f',"properties":{{"id":{int(node_id)},"avoid":{int(bool(avoid))},"settled":{int(bool(settled))}}}'
        "}"
    )


def geojson_linestring(coordinates: Sequence[float], arc_id: int, weight: int, avoid: bool) -> str:
    """Return a LineString feature from flat ``[lon0, lat0, lon1, lat1, ...]`` coordinates."""
    if len(coordinates) % 2:
        raise ValueError("coordinates must come in pairs")
    points = ",".join(
        f"[{_number(x)},{_number(y)}]" for x, y in zip(coordinates[::2], coordinates[1::2])
    )
    return (
        '{"type":"Feature","geometry":'
        '{"type":"LineString","coordinates":[' + points + "]}"
        f',"properties":{{"id":{int(arc_id)},"weight":{int(weight)},"avoid":{int(bool(avoid))}}}'
        "}"
    )