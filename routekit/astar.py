"""A* search on graphs in adjacency-array form, with a few heuristics."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

from routekit.constants import INF_WEIGHT, INVALID_ID
from routekit.dijkstra import SettleResult
from routekit.geo_dist import geo_dist
from routekit.id_queue import IDKeyPair, MinIDQueue
from routekit.timestamp_flag import TimestampFlags
from routekit.visibility_graph import VisibilityGraph

__all__ = ["Astar", "ZeroHeuristic", "BeelineDistanceHeuristic", "EspHeuristic"]

GetWeight = Callable[[int, int], int]
Heuristic = Callable[[int], int]


def _micro_time() -> int:
    return time.perf_counter_ns() // 1000


def _check_graph(first_out: Sequence[int], tail: Sequence[int], head: Sequence[int]) -> None:
    if not first_out:
        raise ValueError("first_out must not be empty")
    if first_out[0] != 0:
        raise ValueError("first_out must start with 0")
    if first_out[-1] != len(tail) or first_out[-1] != len(head):
        raise ValueError("first_out must end with the number of arcs")


class Astar:
    """A resumable A* search; nodes are settled one at a time with :meth:`settle`."""

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
        self._tentative_distance = [INF_WEIGHT] * n
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
    ) -> Astar:
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
        self._tentative_distance = [INF_WEIGHT] * self.node_count
        self._queue.clear()
        self._was_popped.reset_all()
        self.settle_count = 0
        return self

    def _check_node(self, node: int) -> None:
        if not 0 <= node < self.node_count:
            raise IndexError(f"node {node} is outside of [0, {self.node_count})")

    def add_source(self, node_id: int, departure_time: int = 0) -> Astar:
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

    def settle(self, get_weight: GetWeight, heuristic: Heuristic) -> SettleResult:
        """Settle the queued node with the smallest distance plus heuristic.

        ``get_weight(arc, key)`` gives the arc weight, ``heuristic(node)`` a
        lower bound on the remaining distance from ``node``.
        """
        if self.is_finished():
            raise RuntimeError("there is no node left to settle")

        popped = self._queue.pop()
        node = popped.id
        self._was_popped.set(node)
        distance = self._tentative_distance[node]

        for arc in range(self._first_out[node], self._first_out[node + 1]):
            y = self._head[arc]
            if self._was_popped.is_set(y):
                continue
            weight = get_weight(arc, popped.key)
            if weight >= INF_WEIGHT:
                continue
            score = distance + weight
            if score < self._tentative_distance[y]:
                candidate = IDKeyPair(y, score + heuristic(y))
                if self._queue.contains_id(y):
                    self._queue.decrease_key(candidate)
                else:
                    self._queue.push(candidate)
                self._predecessor_arc[y] = arc
                self._tentative_distance[y] = score

        self.settle_count += 1
        return SettleResult(node, distance)

    def get_distance_to(self, node: int) -> int:
        """Return the distance of a settled node, or ``INF_WEIGHT`` if it was not reached."""
        if self.was_node_reached(node):
            return self._tentative_distance[node]
        return INF_WEIGHT

    def get_node_path_to(self, node: int) -> list[int]:
        """Return the nodes of the found path from a source to ``node``; empty if unreached."""
        if not self.was_node_reached(node):
            return []
        path = [node]
        while (arc := self._predecessor_arc[node]) != INVALID_ID:
            node = self._tail[arc]
            path.append(node)
        path.reverse()
        return path

    def get_arc_path_to(self, node: int) -> list[int]:
        """Return the arcs of the found path from a source to ``node``; empty if unreached."""
        if not self.was_node_reached(node):
            return []
        path = []
        while (arc := self._predecessor_arc[node]) != INVALID_ID:
            path.append(arc)
            node = self._tail[arc]
        path.reverse()
        return path


class ZeroHeuristic:
    """The heuristic that estimates 0 everywhere, turning A* into Dijkstra's algorithm."""

    def __call__(self, node_id: int) -> int:
        return 0


class BeelineDistanceHeuristic:
    """Estimates the remaining distance as the rounded straight-line distance to the target."""

    def __init__(self, latitude: Sequence[float], longitude: Sequence[float], target_id: int) -> None:
        self._latitude = latitude
        self._longitude = longitude
        self._target_id = target_id

    def __call__(self, node_id: int) -> int:
        lat, lon, t = self._latitude, self._longitude, self._target_id
        return int(0.5 + geo_dist(lat[node_id], lon[node_id], lat[t], lon[t]))


class EspHeuristic:
    """Estimates the remaining distance as the shortest obstacle-avoiding path to the target.

    The visibility graph must already hold the target, added with
    ``add_target_bw``, and be sorted for routing. The time spent finding
    visible vertices and combining distances is summed up in microseconds.
    """

    def __init__(
        self,
        latitude: Sequence[float],
        longitude: Sequence[float],
        target_id: int,
        visibility: VisibilityGraph,
    ) -> None:
        self._latitude = list(latitude)
        self._longitude = list(longitude)
        self._target_id = target_id
        self._visibility = visibility
        self._table = visibility.get_distance_table()
        self.time_set_source = 0
        self.time_solve_esp = 0

    def __call__(self, node_id: int) -> int:
        lat, lon = self._latitude[node_id], self._longitude[node_id]
        vg = self._visibility

        start = _micro_time()
        visibles = vg.visible_vertices_naive(lat, lon)
        self.time_set_source += _micro_time() - start

        start = _micro_time()
        min_distance = INVALID_ID
        for vertex in visibles:
            distance = self._table[vertex] + int(
                0.5 + geo_dist(lat, lon, vg.latitudes[vertex], vg.longitudes[vertex])
            )
            min_distance = min(min_distance, distance)
        self.time_solve_esp += _micro_time() - start
        return min_distance