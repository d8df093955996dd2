"""Dijkstra's shortest path search on graphs in adjacency-array form."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from routekit.constants import INF_WEIGHT, INVALID_ID
from routekit.geometry import edge_crosses_polygon, point_in_polygon
from routekit.id_queue import IDKeyPair, MinIDQueue
from routekit.timestamp_flag import TimestampFlags

__all__ = ["SettleResult", "Dijkstra", "ScalarGetWeight", "AvoidPolygonsGetWeight"]

GetWeight = Callable[[int, int], int]


@dataclass(frozen=True)
class SettleResult:
    """The node removed from the queue and its final distance."""

    node: int
    distance: int


def _check_graph(first_out: Sequence[int], tail: Sequence[int], head: Sequence[int]) -> None:
    if not first_out:
        raise ValueError("first_out must not be empty")
    if first_out[0] != 0:
        raise ValueError("first_out must start with 0")
    if first_out[-1] != len(tail) or first_out[-1] != len(head):
        raise ValueError("first_out must end with the number of arcs")


class Dijkstra:
    """A resumable Dijkstra search; nodes are settled one at a time with :meth:`settle`."""

    def __init__(self, first_out: Sequence[int], tail: Sequence[int], head: Sequence[int]) -> None:
        _check_graph(first_out, tail, head)
        self._attach(first_out, tail, head)
        self._allocate()

    def _attach(self, first_out: Sequence[int], tail: Sequence[int], head: Sequence[int]) -> None:
        self._first_out = first_out
        self._tail = tail
        self._head = head
        self.settle_count = 0

    def _allocate(self) -> None:
        n = self.node_count
        self._tentative_distance = [0] * n
        self._predecessor_arc = [INVALID_ID] * n
        self._was_popped = TimestampFlags(n)
        self._queue = MinIDQueue(n)

    @property
    def node_count(self) -> int:
        """The number of nodes of the attached graph."""
        return len(self._first_out) - 1

    def reset(
        self,
        first_out: Sequence[int] | None = None,
        tail: Sequence[int] | None = None,
        head: Sequence[int] | None = None,
    ) -> Dijkstra:
        """Forget all sources and reached nodes, optionally switching to another graph."""
        given = [x is not None for x in (first_out, tail, head)]
        if any(given):
            if not all(given):
                raise ValueError("first_out, tail and head must be given together")
            _check_graph(first_out, tail, head)
            same_size = len(first_out) == len(self._first_out)
            self._attach(first_out, tail, head)
            if not same_size:
                self._allocate()
                return self
        self._queue.clear()
        self._was_popped.reset_all()
        self.settle_count = 0
        return self

    def _check_node(self, node: int) -> None:
        if not 0 <= node < self.node_count:
            raise IndexError(f"node {node} is outside of [0, {self.node_count})")

    def add_source(self, node_id: int, departure_time: int = 0) -> Dijkstra:
        """Start the search at ``node_id`` with the given initial distance."""
        self._check_node(node_id)
        self._tentative_distance[node_id] = departure_time
        self._predecessor_arc[node_id] = INVALID_ID
        self._queue.push(IDKeyPair(node_id, departure_time))
        return self

    def is_finished(self) -> bool:
        """Return True once no node is left in the queue."""
        return len(self._queue) == 0

    def was_node_reached(self, node: int) -> bool:
        """Return True if ``node`` has been settled."""
        self._check_node(node)
        return self._was_popped.is_set(node)

    def settle(self, get_weight: GetWeight) -> SettleResult:
        """Settle the closest queued node and relax its outgoing arcs.

        ``get_weight(arc, departure_time)`` gives the arc weight; a weight of
        ``INF_WEIGHT`` or more means the arc cannot be used.
        """
        if self.is_finished():
            raise RuntimeError("there is no node left to settle")

        popped = self._queue.pop()
        node, distance = popped.id, popped.key
        self._tentative_distance[node] = distance
        self._was_popped.set(node)

        for arc in range(self._first_out[node], self._first_out[node + 1]):
            y = self._head[arc]
            if self._was_popped.is_set(y):
                continue
            weight = get_weight(arc, distance)
            if weight >= INF_WEIGHT:
                continue
            candidate = IDKeyPair(y, distance + weight)
            if self._queue.contains_id(y):
                if self._queue.decrease_key(candidate):
                    self._predecessor_arc[y] = arc
            else:
                self._queue.push(candidate)
                self._predecessor_arc[y] = arc

        self.settle_count += 1
        return SettleResult(node, distance)

    def get_distance_to(self, node: int) -> int:
        """Return the distance of a settled node, or ``INF_WEIGHT`` if it was not reached."""
        if self.was_node_reached(node):
            return self._tentative_distance[node]
        return INF_WEIGHT

    def get_node_path_to(self, node: int) -> list[int]:
        """Return the nodes of the shortest path from a source to ``node``; empty if unreached."""
        if not self.was_node_reached(node):
            return []
        path = [node]
        while (arc := self._predecessor_arc[node]) != INVALID_ID:
            node = self._tail[arc]
            path.append(node)
        path.reverse()
        return path

    def get_arc_path_to(self, node: int) -> list[int]:
        """Return the arcs of the shortest path from a source to ``node``; empty if unreached."""
        if not self.was_node_reached(node):
            return []
        path = []
        while (arc := self._predecessor_arc[node]) != INVALID_ID:
            path.append(arc)
            node = self._tail[arc]
        path.reverse()
        return path


class ScalarGetWeight:
    """Arc weights that do not depend on the departure time."""

    def __init__(self, weight: Sequence[int]) -> None:
        self._weight = weight

    def __call__(self, arc: int, departure_time: int) -> int:
        return self._weight[arc]


class AvoidPolygonsGetWeight:
    """Arc weights that block every arc touching or crossing one of the polygons.

    Node positions and polygons use (latitude, longitude) coordinates; a polygon
    is a flat sequence ``[lat0, lon0, lat1, lon1, ...]``.
    """

    def __init__(
        self,
        weight: Sequence[int],
        tail: Sequence[int],
        head: Sequence[int],
        lat: Sequence[float],
        lon: Sequence[float],
        polys: Sequence[Sequence[float]],
    ) -> None:
        self._weight = weight
        self._tail = tail
        self._head = head
        self._lat = lat
        self._lon = lon
        self._polys = polys

    def __call__(self, arc: int, departure_time: int) -> int:
        x, y = self._tail[arc], self._head[arc]
        lat_x, lon_x = self._lat[x], self._lon[x]
        lat_y, lon_y = self._lat[y], self._lon[y]
        for poly in self._polys:
            if (
                point_in_polygon(lat_x, lon_x, poly)
                or point_in_polygon(lat_y, lon_y, poly)
                or edge_crosses_polygon(lat_x, lon_x, lat_y, lon_y, poly)
            ):
                return INF_WEIGHT
        return self._weight[arc]