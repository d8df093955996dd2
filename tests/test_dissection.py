import pytest

from routekit.cut import pick_smaller_side
from routekit.dissection import (
    SeparatorDecomposition,
    SeparatorNode,
    compute_nested_node_dissection_order,
    compute_nested_node_dissection_order_using_inertial_flow,
    compute_separator_decomposition,
    derive_separator_from_cut,
    inertial_flow,
    inertial_flow_with_balance,
)
from routekit.fragment import make_graph_fragment


def grid(rows, cols):
    tail, head, lat, lon = [], [], [], []
    for r in range(rows):
        for c in range(cols):
            x = r * cols + c
            lat.append(float(r))
            lon.append(float(c))
            if c + 1 < cols:
                tail.append(x)
                head.append(x + 1)
            if r + 1 < rows:
                tail.append(x)
                head.append(x + cols)
    return rows * cols, tail, head, lat, lon


def crossing_arcs(fragment, side):
    return sum(1 for x, y in zip(fragment.tail, fragment.head) if side[x] and not side[y])


def test_inertial_flow_cut_size_matches_crossing_arcs():
    n, tail, head, lat, lon = grid(5, 6)
    fragment = make_graph_fragment(n, tail, head)
    cut = inertial_flow(fragment, lat, lon)
    assert cut.cut_size == crossing_arcs(fragment, cut.is_node_on_side)
    assert cut.node_on_side_count == sum(cut.is_node_on_side)
    assert 0 < cut.node_on_side_count < n


def test_inertial_flow_with_balance_respects_side_size():
    n, tail, head, lat, lon = grid(6, 6)
    fragment = make_graph_fragment(n, tail, head)
    cut = inertial_flow_with_balance(fragment, 25, lat, lon)
    assert cut.node_on_side_count >= n * 25 // 100
    assert cut.cut_size == crossing_arcs(fragment, cut.is_node_on_side)


def test_inertial_flow_on_path_cuts_one_edge():
    n = 10
    tail = list(range(n - 1))
    head = list(range(1, n))
    lat = [float(i) for i in range(n)]
    lon = [0.0] * n
    fragment = make_graph_fragment(n, tail, head)
    cut = inertial_flow(fragment, lat, lon)
    assert cut.cut_size == crossing_arcs(fragment, cut.is_node_on_side)
    assert cut.cut_size == 1


def test_inertial_flow_with_balance_rejects_single_node():
    fragment = make_graph_fragment(1, [], [])
    with pytest.raises(ValueError):
        inertial_flow_with_balance(fragment, 25, [0.0], [0.0])


def test_inertial_flow_with_balance_rejects_too_large_balance():
    n, tail, head, lat, lon = grid(2, 3)
    fragment = make_graph_fragment(n, tail, head)
    with pytest.raises(ValueError):
        inertial_flow_with_balance(fragment, 90, lat, lon)


def test_derive_separator_on_path():
    fragment = make_graph_fragment(4, [0, 1, 2], [1, 2, 3])
    separator = derive_separator_from_cut(fragment, [True, True, False, False])
    assert separator == [False, False, True, False]


def test_derive_separator_rejects_wrong_length():
    fragment = make_graph_fragment(3, [0, 1], [1, 2])
    with pytest.raises(ValueError):
        derive_separator_from_cut(fragment, [True, False])


def test_derived_separator_separates_the_cut():
    n, tail, head, lat, lon = grid(5, 5)
    fragment = make_graph_fragment(n, tail, head)
    cut = inertial_flow(fragment, lat, lon)
    pick_smaller_side(cut)
    separator = derive_separator_from_cut(fragment, cut.is_node_on_side)
    assert any(separator)
    for x, y in zip(fragment.tail, fragment.head):
        if not separator[x] and not separator[y]:
            assert cut.is_node_on_side[x] == cut.is_node_on_side[y]


def test_single_node_decomposition():
    fragment = make_graph_fragment(1, [], [])
    decomp = compute_separator_decomposition(fragment, lambda part: [True] * part.node_count)
    assert decomp == SeparatorDecomposition(tree=[SeparatorNode(0, 0, 0, 1)], order=[0])


def test_isolated_nodes_are_ordered_from_the_end():
    fragment = make_graph_fragment(3, [], [])
    decomp = compute_separator_decomposition(fragment, lambda part: [True] * part.node_count)
    assert decomp.order == [2, 1, 0]
    assert decomp.tree[0].first_separator_vertex == 0
    assert decomp.tree[0].last_separator_vertex == 3


def middle_separator(part):
    return [gid == 1 for gid in part.global_node_id]


def test_decomposition_with_custom_separator():
    fragment = make_graph_fragment(3, [0, 1], [1, 2])
    decomp = compute_separator_decomposition(fragment, middle_separator)
    assert sorted(decomp.order) == [0, 1, 2]
    assert decomp.tree[0].left_child == 1
    assert decomp.tree[0].first_separator_vertex == decomp.tree[0].last_separator_vertex
    for node in decomp.tree:
        assert 0 <= node.first_separator_vertex <= node.last_separator_vertex <= 3
        assert node.left_child < len(decomp.tree)
        assert node.right_sibling < len(decomp.tree)


def test_nested_order_matches_decomposition_order():
    fragment = make_graph_fragment(3, [0, 1], [1, 2])
    order = compute_nested_node_dissection_order(fragment, middle_separator)
    decomp = compute_separator_decomposition(fragment, middle_separator)
    assert order == decomp.order


def test_separator_nodes_come_after_their_components():
    n, tail, head, lat, lon = grid(4, 4)
    fragment = make_graph_fragment(n, tail, head)
    seen_separators = []

    def compute_separator(part):
        cut = inertial_flow(part, lat, lon)
        pick_smaller_side(cut)
        separator = derive_separator_from_cut(part, cut.is_node_on_side)
        seen_separators.append({g for g, s in zip(part.global_node_id, separator) if s})
        return separator

    order = compute_nested_node_dissection_order(fragment, compute_separator)
    assert sorted(order) == list(range(n))
    rank = {node: i for i, node in enumerate(order)}
    top = seen_separators[0]
    others = set(range(n)) - top
    assert max(rank[x] for x in others) < min(rank[x] for x in top)


def test_inertial_flow_order_is_permutation_of_grid():
    n, tail, head, lat, lon = grid(6, 7)
    order = compute_nested_node_dissection_order_using_inertial_flow(n, tail, head, lat, lon)
    assert sorted(order) == list(range(n))


def test_inertial_flow_order_handles_several_components():
    n1, tail1, head1, lat1, lon1 = grid(3, 3)
    tail = tail1 + [x + n1 for x in tail1]
    head = head1 + [x + n1 for x in head1]
    lat = lat1 + [x + 10.0 for x in lat1]
    lon = lon1 + lon1
    order = compute_nested_node_dissection_order_using_inertial_flow(2 * n1, tail, head, lat, lon)
    assert sorted(order) == list(range(2 * n1))


def test_inertial_flow_order_logs_messages():
    n, tail, head, lat, lon = grid(3, 4)
    messages = []
    order = compute_nested_node_dissection_order_using_inertial_flow(
        n, tail, head, lat, lon, messages.append
    )
    assert sorted(order) == list(range(n))
    assert messages[0] == "Start making graph fragment"
    assert messages[1].startswith("Finished making graph fragment")
    assert "Start decomposing top-level graph" in messages