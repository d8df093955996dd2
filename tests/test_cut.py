import pytest

from routekit.cut import BlockingFlow, CutSide, pick_smaller_side
from routekit.fragment import GraphFragment, make_graph_fragment


def run(flow: BlockingFlow) -> BlockingFlow:
    for _ in range(1000):
        if flow.is_finished():
            return flow
        flow.advance()
    raise AssertionError("flow did not finish")


def flags(n, members):
    return [i in members for i in range(n)]


def leaving_arcs(fragment: GraphFragment, side):
    return sum(1 for t, h in zip(fragment.tail, fragment.head) if side[t] and not side[h])


def bridge_graph():
    # Two triangles joined by the edge 2-3.
    return make_graph_fragment(6, [0, 1, 2, 2, 3, 4, 5], [1, 2, 0, 3, 4, 5, 3])


def grid_graph(width, height):
    tail, head = [], []
    for r in range(height):
        for c in range(width):
            x = r * width + c
            if c + 1 < width:
                tail.append(x)
                head.append(x + 1)
            if r + 1 < height:
                tail.append(x)
                head.append(x + width)
    return make_graph_fragment(width * height, tail, head)


def test_bridge_cut():
    fragment = bridge_graph()
    flow = run(BlockingFlow(fragment, flags(6, {0}), flags(6, {5})))
    assert flow.flow_intensity == 1

    source_cut = flow.get_source_cut()
    assert source_cut.is_node_on_side == flags(6, {0, 1, 2})
    assert source_cut.node_on_side_count == 3
    assert source_cut.cut_size == flow.flow_intensity

    target_cut = flow.get_target_cut()
    assert target_cut.is_node_on_side == flags(6, {3, 4, 5})
    assert target_cut.node_on_side_count == 3

    balanced = flow.get_balanced_cut()
    assert balanced.is_node_on_side == flags(6, {0, 1, 2})


def test_two_disjoint_paths():
    fragment = make_graph_fragment(4, [0, 0, 1, 2], [1, 2, 3, 3])
    flow = run(BlockingFlow(fragment, flags(4, {0}), flags(4, {3})))
    assert flow.flow_intensity == 2
    assert leaving_arcs(fragment, flow.get_source_cut().is_node_on_side) == 2


def test_grid_cuts_match_flow():
    width, height = 4, 3
    fragment = grid_graph(width, height)
    n = fragment.node_count
    sources = {r * width for r in range(height)}
    targets = {r * width + width - 1 for r in range(height)}
    flow = run(BlockingFlow(fragment, flags(n, sources), flags(n, targets)))

    assert 0 < flow.flow_intensity <= len(sources)
    for cut in (flow.get_source_cut(), flow.get_target_cut(), flow.get_balanced_cut()):
        assert cut.cut_size == flow.flow_intensity
        assert leaving_arcs(fragment, cut.is_node_on_side) == flow.flow_intensity
        assert cut.node_on_side_count == sum(cut.is_node_on_side)

    balanced = flow.get_balanced_cut().is_node_on_side
    assert all(balanced[s] for s in sources) or all(balanced[t] for t in targets)
    assert not (all(balanced[s] for s in sources) and any(balanced[t] for t in targets))


def test_disconnected_source_and_target():
    fragment = make_graph_fragment(4, [0, 2], [1, 3])
    flow = BlockingFlow(fragment, flags(4, {0}), flags(4, {3}))
    flow.advance()
    assert flow.is_finished()
    assert flow.flow_intensity == 0
    assert flow.get_source_cut().is_node_on_side == flags(4, {0, 1})
    flow.advance()
    assert flow.flow_intensity == 0


def test_cut_requires_finished_flow():
    flow = BlockingFlow(bridge_graph(), flags(6, {0}), flags(6, {5}))
    assert not flow.is_finished()
    with pytest.raises(RuntimeError):
        flow.get_source_cut()
    with pytest.raises(RuntimeError):
        flow.get_balanced_cut()


def test_constructor_validation():
    fragment = bridge_graph()
    with pytest.raises(ValueError):
        BlockingFlow(fragment, flags(6, {0}), flags(6, {0, 5}))
    with pytest.raises(ValueError):
        BlockingFlow(fragment, flags(6, set()), flags(6, {5}))
    with pytest.raises(ValueError):
        BlockingFlow(fragment, flags(6, {0}), flags(6, set()))
    with pytest.raises(ValueError):
        BlockingFlow(fragment, flags(5, {0}), flags(6, {5}))


def test_pick_smaller_side_switches_large_side():
    cut = CutSide(3, 1, [True, True, True, False])
    pick_smaller_side(cut)
    assert cut.node_on_side_count == 1
    assert cut.is_node_on_side == [False, False, False, True]
    assert cut.cut_size == 1


def test_pick_smaller_side_keeps_small_side():
    cut = CutSide(1, 2, [True, False, False])
    pick_smaller_side(cut)
    assert cut.node_on_side_count == 1
    assert cut.is_node_on_side == [True, False, False]


def test_pick_smaller_side_switches_half():
    cut = CutSide(2, 0, [True, False, True, False])
    pick_smaller_side(cut)
    assert cut.is_node_on_side == [False, True, False, True]
    assert cut.node_on_side_count == 2