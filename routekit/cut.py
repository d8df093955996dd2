"""Minimum cuts between node sets of a graph fragment, found with blocking flows."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from routekit.fragment import GraphFragment

__all__ = ["CutSide", "pick_smaller_side", "BlockingFlow"]


@dataclass
class CutSide:
    """One side of a cut: its node count, the number of cut arcs and a flag per node."""

    node_on_side_count: int
    cut_size: int
    is_node_on_side: list[bool]


def pick_smaller_side(cut: CutSide) -> None:
    """Switch ``cut`` in place to the other side if its side holds at least half the nodes."""
    node_count = len(cut.is_node_on_side)
    if cut.node_on_side_count >= (node_count + 1) // 2:
        cut.node_on_side_count = node_count - cut.node_on_side_count
        cut.is_node_on_side = [not x for x in cut.is_node_on_side]


class BlockingFlow:
    """Unit-capacity maximum flow from a source set to a target set, one phase per :meth:`advance`.

    Once finished, the flow intensity is the size of a minimum cut and the
    ``get_*_cut`` methods return sides of such a cut.
    """

    def __init__(self, fragment: GraphFragment, is_source: Sequence[bool], is_target: Sequence[bool]) -> None:
        n = fragment.node_count
        if len(is_source) != n or len(is_target) != n:
            raise ValueError("source and target flags need one entry per node")
        if not any(is_source):
            raise ValueError("there must be at least one source node")
        if not any(is_target):
            raise ValueError("there must be at least one target node")
        if any(s and t for s, t in zip(is_source, is_target)):
            raise ValueError("a source node can not also be a target node")

        self._fragment = fragment
        self._is_source = [bool(x) for x in is_source]
        self._is_target = [bool(x) for x in is_target]
        self._flow_intensity = 0
        self._is_arc_saturated = [False] * fragment.arc_count
        self._finished = False

    @property
    def flow_intensity(self) -> int:
        """The number of unit paths routed so far."""
        return self._flow_intensity

    def is_finished(self) -> bool:
        """Return True once the flow is maximal."""
        return self._finished

    def _arcs(self, x: int) -> range:
        first_out = self._fragment.first_out
        return range(first_out[x], first_out[x + 1])

    def _compute_blocking(self) -> tuple[bool, list[bool]]:
        """Build the level graph; return whether a target is reachable and the blocked arcs."""
        n = self._fragment.node_count
        head = self._fragment.head
        saturated = self._is_arc_saturated
        is_lower = [False] * n
        was_pushed = [False] * n
        blocked = [False] * self._fragment.arc_count
        target_reachable = False

        level = [x for x in range(n) if self._is_source[x]]
        while level:
            for x in level:
                is_lower[x] = True
            next_level = []
            for x in level:
                for xy in self._arcs(x):
                    if saturated[xy]:
                        blocked[xy] = True
                        continue
                    y = head[xy]
                    if is_lower[y]:
                        blocked[xy] = True
                    elif self._is_target[y]:
                        target_reachable = True
                    elif not was_pushed[y]:
                        next_level.append(y)
                        was_pushed[y] = True
            level = next_level
        return target_reachable, blocked

    def _augment(self, blocked: list[bool]) -> int:
        """Route flow along all non-blocked paths; return the number of paths found."""
        head = self._fragment.head
        back_arc = self._fragment.back_arc
        saturated = self._is_arc_saturated
        augmented = 0

        for s in range(self._fragment.node_count):
            if not self._is_source[s]:
                continue
            path_nodes = [s]
            path_arcs: list[int] = []
            while True:
                x = path_nodes[-1]
                xy = next((a for a in self._arcs(x) if not blocked[a]), None)
                if xy is None:
                    if not path_arcs:
                        break
                    path_nodes.pop()
                    blocked[path_arcs.pop()] = True
                    continue
                y = head[xy]
                path_arcs.append(xy)
                path_nodes.append(y)
                if self._is_target[y]:
                    for a in path_arcs:
                        blocked[a] = True
                        b = back_arc[a]
                        if saturated[b]:
                            saturated[b] = False
                        else:
                            saturated[a] = True
                    path_nodes = [s]
                    path_arcs = []
                    augmented += 1
        return augmented

    def advance(self) -> None:
        """Run one blocking-flow phase, or mark the flow finished if no target is reachable."""
        if self._finished:
            return
        reachable, blocked = self._compute_blocking()
        if reachable:
            self._flow_intensity += self._augment(blocked)
        else:
            self._finished = True

    def _require_finished(self) -> None:
        if not self._finished:
            raise RuntimeError("the flow is not finished yet")

    def _grow(self, start: list[bool], can_use) -> tuple[list[bool], int]:
        head = self._fragment.head
        side = list(start)
        stack = [x for x, flag in enumerate(side) if flag]
        count = len(stack)
        while stack:
            x = stack.pop()
            for xy in self._arcs(x):
                if can_use(xy):
                    y = head[xy]
                    if not side[y]:
                        side[y] = True
                        stack.append(y)
                        count += 1
        return side, count

    def get_source_cut(self) -> CutSide:
        """Return the nodes reachable from the sources in the residual graph."""
        self._require_finished()
        saturated = self._is_arc_saturated
        side, count = self._grow(self._is_source, lambda xy: not saturated[xy])
        return CutSide(count, self._flow_intensity, side)

    def get_target_cut(self) -> CutSide:
        """Return the nodes that can reach a target in the residual graph."""
        self._require_finished()
        saturated = self._is_arc_saturated
        back_arc = self._fragment.back_arc
        side, count = self._grow(self._is_target, lambda xy: not saturated[back_arc[xy]])
        return CutSide(count, self._flow_intensity, side)

    def get_balanced_cut(self) -> CutSide:
        """Return the side of a minimum cut that is grown to be as balanced as possible.

        The smaller of the source and target sides is repeatedly enlarged by
        piercing a saturated arc to a node on neither side, until no such
        node remains for it.
        """
        self._require_finished()
        head = self._fragment.head
        back_arc = self._fragment.back_arc
        saturated = self._is_arc_saturated

        source_side = list(self._is_source)
        target_side = list(self._is_target)
        source_count = 0
        target_count = 0
        source_piercing: list[int] = []
        target_piercing: list[int] = []

        def enlarge_source(stack: list[int]) -> None:
            nonlocal source_count
            while stack:
                source_count += 1
                x = stack.pop()
                for xy in self._arcs(x):
                    y = head[xy]
                    if saturated[xy]:
                        source_piercing.append(y)
                    elif not source_side[y]:
                        source_side[y] = True
                        stack.append(y)

        def enlarge_target(stack: list[int]) -> None:
            nonlocal target_count
            while stack:
                target_count += 1
                x = stack.pop()
                for xy in self._arcs(x):
                    y = head[xy]
                    if saturated[back_arc[xy]]:
                        target_piercing.append(y)
                    elif not target_side[y]:
                        target_side[y] = True
                        stack.append(y)

        enlarge_source([x for x, flag in enumerate(self._is_source) if flag])
        enlarge_target([x for x, flag in enumerate(self._is_target) if flag])

        def next_pierce_node(candidates: list[int]) -> int | None:
            while candidates:
                y = candidates.pop()
                if not source_side[y] and not target_side[y]:
                    return y
            return None

        while True:
            if source_count <= target_count:
                pierce = next_pierce_node(source_piercing)
                if pierce is None:
                    return CutSide(source_count, self._flow_intensity, source_side)
                source_side[pierce] = True
                enlarge_source([pierce])
            else:
                pierce = next_pierce_node(target_piercing)
                if pierce is None:
                    return CutSide(target_count, self._flow_intensity, target_side)
                target_side[pierce] = True
                enlarge_target([pierce])