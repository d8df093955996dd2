"""Visibility graphs between the vertices of polygonal obstacles.

Polygons are flat sequences ``[lat0, lon0, lat1, lon1, ...]``. Every polygon
vertex becomes a node; an arc joins two nodes that can see each other, that
is, whose connecting segment crosses no polygon edge and does not run through
the inside of a polygon. Arc weights are rounded geographic distances in meters.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from routekit.dijkstra import Dijkstra, ScalarGetWeight
from routekit.geo_dist import geo_dist
from routekit.geometry import segments_intersect
from routekit.inverse_vector import invert_vector
from routekit.permutation import apply_inverse_permutation
from routekit.sort import compute_inverse_sort_permutation_using_less, sort_using_comparator
from routekit.vector_io import save_vector

__all__ = ["VisibilityGraph"]


def _edges(vertices: range) -> Iterator[tuple[int, int]]:
    """Yield ``(i, j)`` for every polygon edge, ``j`` being the vertex before ``i``."""
    if not vertices:
        return
    yield from zip(vertices, [vertices[-1], *vertices[:-1]])


def _format_list(values: Sequence[object]) -> str:
    parts = []
    for value in values:
        parts.append(format(value, "g") if isinstance(value, float) else str(value))
    return "{" + "".join(f"{part}, " for part in parts) + "}"


class VisibilityGraph:
    """The visibility graph of a set of polygons, with optional extra target nodes."""

    def __init__(self, polygons: Sequence[Sequence[float]]) -> None:
        self.latitudes: list[float] = []
        self.longitudes: list[float] = []
        self._first_vertex = [0]
        for poly in polygons:
            if len(poly) % 2:
                raise ValueError("a polygon needs an even number of coordinates")
            self.latitudes.extend(float(x) for x in poly[0::2])
            self.longitudes.extend(float(x) for x in poly[1::2])
            self._first_vertex.append(len(self.latitudes))
        self._num_nodes = len(self.latitudes)
        # Room for one target node.
        self.latitudes.append(0.0)
        self.longitudes.append(0.0)

        self.weights: list[int] = []
        self._tails: list[int] = []
        self._heads: list[int] = []
        self._first_out: list[int] = []
        self._permutation: list[int] = []

    def _polygon_ranges(self) -> list[range]:
        fv = self._first_vertex
        return [range(begin, end) for begin, end in zip(fv, fv[1:])]

    def _add_arc(self, tail: int, head: int, distance: float) -> None:
        self._tails.append(tail)
        self._heads.append(head)
        self.weights.append(int(0.5 + distance))

    def _place(self, index: int, lat: float, lon: float) -> None:
        if index < len(self.latitudes):
            self.latitudes[index] = lat
            self.longitudes[index] = lon
        else:
            self.latitudes.append(lat)
            self.longitudes.append(lon)

    def _is_diagonal_outside(self, vertices: range, v: int, w: int) -> bool:
        """Decide whether the segment from ``v`` to ``w`` of one polygon leaves through its inside."""
        lat, lon = self.latitudes, self.longitudes
        pred_v = v - 1 if v > vertices.start else vertices.stop - 1
        succ_v = v + 1 if v < vertices.stop - 1 else vertices.start
        a_x = lat[succ_v] - lat[v]
        a_y = lon[succ_v] - lon[v]
        b_x = lat[pred_v] - lat[v]
        b_y = lon[pred_v] - lon[v]
        c_x = lat[w] - lat[v]
        c_y = lon[w] - lon[v]
        ab = a_x * b_y - b_x * a_y
        ac = a_x * c_y - c_x * a_y
        cb = c_x * b_y - b_x * c_y
        return (ab < 0 and ac < 0 and cb < 0) or (ab >= 0 and (ac < 0 or cb < 0))

    def _is_pair_blocked(self, ranges: list[range], p_id: int, v: int, q_id: int, w: int) -> bool:
        lat, lon = self.latitudes, self.longitudes
        first = (lon[v], lat[v])
        second = (lon[w], lat[w])
        for poly, vertices in enumerate(ranges):
            for i, j in _edges(vertices):
                third = (lon[i], lat[i])
                fourth = (lon[j], lat[j])
                if first != third and first != fourth and second != third and second != fourth:
                    if segments_intersect(*first, *second, *third, *fourth):
                        return True
                elif p_id == poly == q_id and w not in (v + 1, v - 1):
                    if self._is_diagonal_outside(vertices, v, w):
                        return True
        return False

    def visibility_naive(self) -> None:
        """Add an arc for every ordered pair of mutually visible polygon vertices."""
        ranges = self._polygon_ranges()
        lat, lon = self.latitudes, self.longitudes
        for p_id, p_vertices in enumerate(ranges):
            for v in p_vertices:
                for q_id, q_vertices in enumerate(ranges):
                    for w in q_vertices:
                        if v == w:
                            continue
                        if not self._is_pair_blocked(ranges, p_id, v, q_id, w):
                            self._add_arc(v, w, geo_dist(lat[v], lon[v], lat[w], lon[w]))

    def add_target(self, lat: float, lon: float) -> None:
        """Add a node at the position with arcs from every vertex visible from it."""
        for vertex in self.visible_vertices_naive(lat, lon):
            self._add_arc(
                vertex, self._num_nodes,
                geo_dist(lat, lon, self.latitudes[vertex], self.longitudes[vertex]),
            )
        self._place(self._num_nodes, lat, lon)
        self._num_nodes += 1

    def add_target_bw(self, lat: float, lon: float) -> None:
        """Add a node at the position with arcs to every vertex visible from it."""
        for vertex in self.visible_vertices_naive(lat, lon):
            self._add_arc(
                self._num_nodes, vertex,
                geo_dist(lat, lon, self.latitudes[vertex], self.longitudes[vertex]),
            )
        self._place(self._num_nodes, lat, lon)
        self._num_nodes += 1

    def _require_sorted(self) -> None:
        if not self._first_out:
            raise RuntimeError("the graph must be sorted for routing first")

    def get_distance_table(self) -> list[int]:
        """Return the distance from the target node to every node (0 where unreached).

        Call after adding a target and sorting the graph for routing.
        """
        self._require_sorted()
        table = [0] * self._num_nodes
        search = Dijkstra(self._first_out, self._tails, self._heads)
        search.add_source(self.target())
        get_weight = ScalarGetWeight(self.weights)
        while not search.is_finished():
            result = search.settle(get_weight)
            table[result.node] = result.distance
        return table

    def node_count(self) -> int:
        """The number of nodes, targets included."""
        return self._num_nodes

    def arc_count(self) -> int:
        """The number of arcs."""
        return len(self._heads)

    def sort_graph_for_routing(self) -> None:
        """Order the arcs by tail, then head, and build the adjacency offsets."""
        n = self._num_nodes
        perm = compute_inverse_sort_permutation_using_less(list(zip(self._tails, self._heads)))
        self._permutation = perm
        self._tails = apply_inverse_permutation(perm, self._tails)
        self._heads = apply_inverse_permutation(perm, self._heads)
        self.weights = apply_inverse_permutation(perm, self.weights)
        self._first_out = invert_vector(self._tails, n)
        self._first_out.append(self._first_out[n])

    def has_arc(self, tail: int, head: int) -> bool:
        """Return True if an arc from ``tail`` to ``head`` exists; needs a sorted graph."""
        self._require_sorted()
        fo = self._first_out
        return any(
            self._tails[i] == tail and self._heads[i] == head
            for i in range(fo[tail], fo[tail + 1])
        )

    def target(self) -> int:
        """The id of the most recently added node."""
        if self._num_nodes == 0:
            raise ValueError("the graph has no nodes")
        return self._num_nodes - 1

    def is_visible_from(self, lat: float, lon: float, vertex: int) -> bool:
        """Return True if no polygon edge blocks the segment from the position to ``vertex``.

        Edges sharing an endpoint with the segment are not considered; if no
        edge is left to consider, the vertex counts as not visible.
        """
        first = (lon, lat)
        second = (self.longitudes[vertex], self.latitudes[vertex])
        visible = False
        for vertices in self._polygon_ranges():
            for i, j in _edges(vertices):
                third = (self.longitudes[i], self.latitudes[i])
                fourth = (self.longitudes[j], self.latitudes[j])
                if first != third and first != fourth and second != third and second != fourth:
                    if segments_intersect(*first, *second, *third, *fourth):
                        return False
                    visible = True
        return visible

    def visible_vertices_naive(self, lat: float, lon: float) -> list[int]:
        """Return the ids of all nodes visible from the position, in increasing order."""
        return [v for v in range(self._num_nodes) if self.is_visible_from(lat, lon, v)]

    def vertices_by_angle_and_distance(self, lat: float, lon: float) -> list[int]:
        """Return all node ids ordered by their angle relative to the line towards the target."""
        target = self.target()
        lats, lons = self.latitudes, self.longitudes

        def is_less(a: int, b: int) -> bool:
            st_x = lons[target] - lon
            st_y = lats[target] - lat
            sa_x = lons[target] - lon
            sa_y = lats[target] - lat
            sb_x = lons[b] - lon
            sb_y = lats[target] - lat
            ta = st_x * sa_y - sa_x * st_y
            tb = st_x * sb_y - sb_x * st_y
            ab = sa_x * sb_y - sb_x * sa_y
            if ab == 0 and ta * tb > 0:
                return abs(tb) > abs(ta)
            return (ta <= 0 and tb <= 0 and ab <= 0) or (tb >= 0 and (ta <= 0 or ab <= 0))

        return sort_using_comparator(list(range(self._num_nodes)), is_less)

    def visible_vertices_plane_sweep(self, lat: float, lon: float) -> list[int]:
        """Return the node ids in angular order around the position."""
        return self.vertices_by_angle_and_distance(lat, lon)

    def format_graph(self, show_all: bool) -> str:
        """Return a text dump of the graph; ``show_all`` adds tails, weights and positions."""
        lines = [
            f"n = {self._num_nodes}",
            "first_out = " + _format_list(self._first_out),
            "heads = " + _format_list(self._heads),
        ]
        if show_all:
            lines += [
                "tails = " + _format_list(self._tails),
                "weights = " + _format_list(self.weights),
                "latitudes = " + _format_list(self.latitudes),
                "longitudes = " + _format_list(self.longitudes),
            ]
        return "".join(line + "\n" for line in lines)

    def save_graph(self, directory: str | os.PathLike[str]) -> None:
        """Write the graph as binary vectors into ``directory``."""
        base = Path(directory)
        save_vector(base / "vg_first_out", self._first_out, "I")
        save_vector(base / "vg_head", self._heads, "I")
        save_vector(base / "vg_tail", self._tails, "I")
        save_vector(base / "vg_lat", self.latitudes, "f")
        save_vector(base / "vg_lon", self.longitudes, "f")