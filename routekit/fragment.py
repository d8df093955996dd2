"""Symmetric graph fragments and their split into connected components.

A fragment stores every undirected edge as two arcs, one per direction, each
knowing its reverse (``back_arc``). Arcs are sorted by tail, then by head, and
``first_out`` holds the adjacency offsets. ``global_node_id`` maps the local
node ids of the fragment to the ids of the graph it was cut from.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from routekit.inverse_vector import invert_vector
from routekit.permutation import apply_inverse_permutation, identity_permutation
from routekit.sort import compute_inverse_sort_permutation_using_less

__all__ = [
    "GraphFragment",
    "make_graph_fragment",
    "decompose_graph_fragment_into_connected_components",
]


@dataclass
class GraphFragment:
    """A symmetric graph in adjacency-array form with reverse arc links."""

    global_node_id: list[int] = field(default_factory=list)
    first_out: list[int] = field(default_factory=lambda: [0])
    tail: list[int] = field(default_factory=list)
    head: list[int] = field(default_factory=list)
    back_arc: list[int] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        """The number of nodes."""
        return len(self.global_node_id)

    @property
    def arc_count(self) -> int:
        """The number of arcs; twice the number of undirected edges."""
        return len(self.tail)


def _sort_arcs(
    node_count: int, tail: Sequence[int], head: Sequence[int], back_arc: Sequence[int]
) -> tuple[list[int], list[int], list[int], list[int]]:
    """Order arcs by tail, then head; return tail, head, back_arc and first_out."""
    p = compute_inverse_sort_permutation_using_less(list(zip(tail, head)))
    sorted_tail = apply_inverse_permutation(p, tail)
    sorted_head = apply_inverse_permutation(p, head)
    sorted_back = [p[b] for b in apply_inverse_permutation(p, back_arc)]
    return sorted_tail, sorted_head, sorted_back, invert_vector(sorted_tail, node_count)


def make_graph_fragment(node_count: int, tail: Sequence[int], head: Sequence[int]) -> GraphFragment:
    """Build a fragment from the arcs ``tail[i] -> head[i]``.

    Loops are dropped and every other arc is stored in both directions.
    """
    if len(tail) != len(head):
        raise ValueError("tail and head must have the same length")
    for x in (*tail, *head):
        if not 0 <= x < node_count:
            raise ValueError(f"node {x} is outside of [0, {node_count})")

    edges = [(x, y) for x, y in zip(tail, head) if x != y]
    k = len(edges)
    forward_tail = [x for x, _ in edges]
    forward_head = [y for _, y in edges]

    all_tail = forward_tail + forward_head
    all_head = forward_head + forward_tail
    back_arc = [i + k for i in range(k)] + list(range(k))

    sorted_tail, sorted_head, sorted_back, first_out = _sort_arcs(
        node_count, all_tail, all_head, back_arc
    )
    return GraphFragment(
        global_node_id=identity_permutation(node_count),
        first_out=first_out,
        tail=sorted_tail,
        head=sorted_head,
        back_arc=sorted_back,
    )


def decompose_graph_fragment_into_connected_components(fragment: GraphFragment) -> list[GraphFragment]:
    """Split a fragment into one fragment per connected component.

    Components come in the order of their smallest node id; within a
    component, nodes are numbered in depth-first discovery order.
    """
    n = fragment.node_count
    if n == 0:
        return []

    component: list[int | None] = [None] * n
    new_position = [0] * n
    position = 0
    component_count = 0
    for root in range(n):
        if component[root] is not None:
            continue
        component[root] = component_count
        stack = [root]
        while stack:
            x = stack.pop()
            new_position[x] = position
            position += 1
            for xy in range(fragment.first_out[x], fragment.first_out[x + 1]):
                y = fragment.head[xy]
                if component[y] is None:
                    stack.append(y)
                    component[y] = component_count
        component_count += 1

    tail = [new_position[x] for x in fragment.tail]
    head = [new_position[x] for x in fragment.head]
    global_node_id = apply_inverse_permutation(new_position, fragment.global_node_id)
    component = apply_inverse_permutation(new_position, component)

    tail, head, back_arc, first_out = _sort_arcs(n, tail, head, fragment.back_arc)

    def make_part(node_begin: int, node_end: int) -> GraphFragment:
        arc_begin, arc_end = first_out[node_begin], first_out[node_end]
        part_tail = [x - node_begin for x in tail[arc_begin:arc_end]]
        return GraphFragment(
            global_node_id=global_node_id[node_begin:node_end],
            first_out=invert_vector(part_tail, node_end - node_begin),
            tail=part_tail,
            head=[x - node_begin for x in head[arc_begin:arc_end]],
            back_arc=[a - arc_begin for a in back_arc[arc_begin:arc_end]],
        )

    parts = []
    node_begin = 0
    for node in range(1, n):
        if component[node] != component[node_begin]:
            parts.append(make_part(node_begin, node))
            node_begin = node
    parts.append(make_part(node_begin, n))
    return parts