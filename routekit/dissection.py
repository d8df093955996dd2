"""Nested dissection orders computed with inertial flow separators.

A separator decomposition repeatedly removes a small set of separator nodes
from each connected component and recurses on what is left. The nodes are
ordered so that every component comes before its separator. Such an order is
a good contraction order for hierarchies built on road graphs.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from routekit.cut import BlockingFlow, CutSide, pick_smaller_side
from routekit.fragment import (
    GraphFragment,
    decompose_graph_fragment_into_connected_components,
    make_graph_fragment,
)
from routekit.inverse_vector import invert_vector

__all__ = [
    "inertial_flow_with_balance",
    "inertial_flow",
    "derive_separator_from_cut",
    "SeparatorNode",
    "SeparatorDecomposition",
    "compute_separator_decomposition",
    "compute_nested_node_dissection_order",
    "compute_nested_node_dissection_order_using_inertial_flow",
]

LogMessage = Callable[[str], None]
ComputeSeparator = Callable[[GraphFragment], Sequence[bool]]

_REPORT_INTERVAL = 1_000_000


def _micro_time() -> int:
    return time.perf_counter_ns() // 1000


def _select_source_and_target(
    side_size: int, node_count: int, key: Callable[[int], float]
) -> tuple[list[bool], list[bool]]:
    """Mark the ``side_size`` nodes with the smallest keys as sources and those with the largest as targets."""
    if side_size > node_count // 2:
        raise ValueError(
            f"cannot pick {side_size} source and {side_size} target nodes among {node_count} nodes"
        )
    ranked = sorted(range(node_count), key=lambda x: (key(x), x))
    is_source = [False] * node_count
    is_target = [False] * node_count
    for x in ranked[:side_size]:
        is_source[x] = True
    for x in ranked[node_count - side_size:]:
        is_target[x] = True
    return is_source, is_target


def inertial_flow_with_balance(
    fragment: GraphFragment,
    min_balance: int,
    latitude: Sequence[float],
    longitude: Sequence[float],
    log_message: LogMessage | None = None,
) -> CutSide:
    """Find a small balanced cut by running flows along four geographic directions.

    ``min_balance`` is the percentage of nodes placed as sources and as
    targets along each direction. The flow that first becomes maximal wins;
    the side returned is its balanced cut.
    """
    node_count = fragment.node_count
    gid = fragment.global_node_id

    side_size = max(1, node_count * min_balance // 100)

    keys: list[Callable[[int], float]] = [
        lambda x: latitude[gid[x]],
        lambda x: longitude[gid[x]],
        lambda x: latitude[gid[x]] + longitude[gid[x]],
        lambda x: latitude[gid[x]] - longitude[gid[x]],
    ]
    cutters = [
        BlockingFlow(fragment, *_select_source_and_target(side_size, node_count, key))
        for key in keys
    ]

    start_time = _micro_time() if log_message else 0
    last_report = start_time
    first_report = True

    while True:
        # min() keeps the first of equally small flows, which fixes the tie order.
        cutter = min(cutters, key=lambda c: c.flow_intensity)
        if cutter.is_finished():
            cut = cutter.get_balanced_cut()
            if log_message and not first_report:
                log_message(
                    f"Inertial Flow is finished and needed {_micro_time() - start_time}musec. "
                    f"The cut has {cut.cut_size} arcs and the smaller side has "
                    f"{cut.node_on_side_count} nodes."
                )
            return cut

        if log_message:
            now = _micro_time()
            if now - last_report > _REPORT_INTERVAL:
                if first_report:
                    first_report = False
                    log_message(
                        f"Start running Inertial Flow with imbalance {min_balance}% on graph with "
                        f"{fragment.node_count} nodes and {fragment.arc_count} arcs."
                    )
                last_report = now
                log_message(
                    f"Smallest cutter has reached a cut of {cutter.flow_intensity} arcs."
                )
        cutter.advance()


def inertial_flow(
    fragment: GraphFragment,
    latitude: Sequence[float],
    longitude: Sequence[float],
    log_message: LogMessage | None = None,
) -> CutSide:
    """Run inertial flow with balances of 25, 33 and 40 percent and keep the best cut.

    The best cut has the smallest ratio of cut arcs to nodes on its side.
    """
    c25 = inertial_flow_with_balance(fragment, 25, latitude, longitude, log_message)
    c33 = inertial_flow_with_balance(fragment, 33, latitude, longitude, log_message)
    c40 = inertial_flow_with_balance(fragment, 40, latitude, longitude, log_message)

    def better(a: CutSide, b: CutSide) -> bool:
        return a.cut_size * b.node_on_side_count < b.cut_size * a.node_on_side_count

    if better(c25, c33) and better(c25, c40):
        return c25
    if better(c33, c40):
        return c33
    return c40


def derive_separator_from_cut(fragment: GraphFragment, cut: Sequence[bool]) -> list[bool]:
    """Turn a cut into a node separator.

    The separator holds the nodes of the larger side that have a neighbour on
    the smaller side.
    """
    if len(cut) != fragment.node_count:
        raise ValueError("the cut needs one entry per node")
    small_side = sum(bool(x) for x in cut) <= fragment.node_count // 2
    is_separator_node = [False] * fragment.node_count
    for x, y in zip(fragment.tail, fragment.head):
        if bool(cut[x]) == small_side and bool(cut[y]) != small_side:
            is_separator_node[y] = True
    return is_separator_node


@dataclass
class SeparatorNode:
    """A node of the separator tree.

    Child and sibling links are indices into the tree, 0 meaning none. The
    separator occupies ``order[first_separator_vertex:last_separator_vertex]``.
    """

    left_child: int
    right_sibling: int
    first_separator_vertex: int
    last_separator_vertex: int


@dataclass
class SeparatorDecomposition:
    """A separator tree together with the node order it induces."""

    tree: list[SeparatorNode] = field(default_factory=list)
    order: list[int] = field(default_factory=list)


def _remove_separator(part: GraphFragment, is_separator_node: Sequence[bool]) -> GraphFragment:
    """Drop every arc touching a separator node; the nodes themselves stay."""
    keep = [
        not is_separator_node[x] and not is_separator_node[y]
        for x, y in zip(part.tail, part.head)
    ]
    new_arc_id = []
    count = 0
    for flag in keep:
        new_arc_id.append(count)
        count += flag
    tail = [x for x, flag in zip(part.tail, keep) if flag]
    head = [y for y, flag in zip(part.head, keep) if flag]
    back_arc = [new_arc_id[b] for b, flag in zip(part.back_arc, keep) if flag]
    return replace(
        part,
        tail=tail,
        head=head,
        back_arc=back_arc,
        first_out=invert_vector(tail, part.node_count),
    )


def compute_separator_decomposition(
    fragment: GraphFragment,
    compute_separator: ComputeSeparator,
    log_message: LogMessage | None = None,
) -> SeparatorDecomposition:
    """Recursively split the fragment with ``compute_separator`` into a separator tree.

    ``compute_separator(part)`` gets a connected fragment with at least two
    nodes and returns a flag per node that marks a non-empty separator.
    """
    node_count = fragment.node_count
    if node_count == 1:
        return SeparatorDecomposition(
            tree=[SeparatorNode(0, 0, 0, 1)], order=list(fragment.global_node_id)
        )

    order = [0] * node_count
    tree = [SeparatorNode(0, 0, 0, node_count)]
    pred = 0
    order_begin = 0
    order_end = node_count

    if log_message:
        timer = -_micro_time()
        log_message("Start decomposing top-level graph")
    part_list = decompose_graph_fragment_into_connected_components(fragment)
    if log_message:
        timer += _micro_time()
        log_message(
            f"Finished decomposing top-level graph, needed {timer}musec and found "
            f"{len(part_list)} connected components"
        )

    for part in part_list:
        if part.node_count == 1:
            order_end -= 1
            order[order_end] = part.global_node_id[0]
            continue

        verbose = bool(log_message) and part.node_count > 1000
        if verbose:
            log_message(
                f"Computing decomposition for top level component with {part.node_count} nodes"
            )
            timer = -_micro_time()
            log_message("Start computing top level separator")
        is_separator_node = compute_separator(part)
        if len(is_separator_node) != part.node_count:
            raise ValueError("the separator needs one entry per node")
        if verbose:
            timer += _micro_time()
            separator_size = sum(bool(x) for x in is_separator_node)
            log_message(
                f"Finished computing top level separator, its size is {separator_size} "
                f"nodes needed {timer}musec"
            )

        part = _remove_separator(part, is_separator_node)

        if verbose:
            timer = -_micro_time()
            log_message("Start computing remaining separator decomposition using recursion")
        sub = compute_separator_decomposition(part, compute_separator)
        if verbose:
            timer += _micro_time()
            log_message(f"Finished recursion, needed {timer}musec")

        shift = len(tree)
        for node in sub.tree:
            if node.left_child != 0:
                node.left_child += shift
            if node.right_sibling != 0:
                node.right_sibling += shift
            node.first_separator_vertex += order_begin
            node.last_separator_vertex += order_begin

        if pred == 0:
            tree[pred].left_child = shift
        else:
            tree[pred].right_sibling = shift
        pred = shift
        tree.extend(sub.tree)
        order[order_begin:order_begin + len(sub.order)] = sub.order
        order_begin += len(sub.order)

    tree[0].first_separator_vertex = order_begin
    return SeparatorDecomposition(tree=tree, order=order)


def compute_nested_node_dissection_order(
    fragment: GraphFragment,
    compute_separator: ComputeSeparator,
    log_message: LogMessage | None = None,
) -> list[int]:
    """Return the node order of the separator decomposition of ``fragment``."""
    return compute_separator_decomposition(fragment, compute_separator, log_message).order


def compute_nested_node_dissection_order_using_inertial_flow(
    node_count: int,
    tail: Sequence[int],
    head: Sequence[int],
    latitude: Sequence[float],
    longitude: Sequence[float],
    log_message: LogMessage | None = None,
) -> list[int]:
    """Return a nested dissection order of a graph using inertial flow separators.

    Arc directions are ignored; ``latitude`` and ``longitude`` give the
    position of every node.
    """
    if log_message:
        timer = -_micro_time()
        log_message("Start making graph fragment")
    graph = make_graph_fragment(node_count, tail, head)
    if log_message:
        timer += _micro_time()
        log_message(f"Finished making graph fragment, needed {timer}musec")

    def compute_separator(fragment: GraphFragment) -> list[bool]:
        cut = inertial_flow(fragment, latitude, longitude, log_message)
        pick_smaller_side(cut)
        return derive_separator_from_cut(fragment, cut.is_node_on_side)

    return compute_nested_node_dissection_order(graph, compute_separator, log_message)