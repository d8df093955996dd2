import pytest

from routekit.geometry import edge_crosses_polygon, point_in_polygon, segments_intersect

SQUARE = [0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 1.0]
# A "U" shape with a notch cut in from the top between x=1 and x=2.
U_SHAPE = [0.0, 0.0, 3.0, 0.0, 3.0, 3.0, 2.0, 3.0, 2.0, 1.0, 1.0, 1.0, 1.0, 3.0, 0.0, 3.0]


def _rotations(poly):
    vertex_count = len(poly) // 2
    return [poly[2 * k:] + poly[:2 * k] for k in range(vertex_count)]


def test_point_in_square():
    assert point_in_polygon(0.5, 0.5, SQUARE)
    assert not point_in_polygon(1.5, 0.5, SQUARE)
    assert not point_in_polygon(0.5, -0.5, SQUARE)
    assert not point_in_polygon(-0.5, 0.5, SQUARE)


def test_point_in_concave_polygon():
    assert point_in_polygon(0.5, 2.0, U_SHAPE)
    assert point_in_polygon(2.5, 2.0, U_SHAPE)
    assert point_in_polygon(1.5, 0.5, U_SHAPE)
    assert not point_in_polygon(1.5, 2.0, U_SHAPE)


@pytest.mark.parametrize("point", [(0.5, 2.0), (1.5, 2.0), (1.5, 0.5), (4.0, 1.0), (2.5, 2.5)])
def test_point_in_polygon_ignores_starting_vertex(point):
    results = {point_in_polygon(*point, rotated) for rotated in _rotations(U_SHAPE)}
    assert len(results) == 1


def test_point_in_empty_polygon():
    assert not point_in_polygon(0.0, 0.0, [])


def test_odd_coordinate_count_is_rejected():
    with pytest.raises(ValueError):
        point_in_polygon(0.0, 0.0, [0.0, 1.0, 2.0])
    with pytest.raises(ValueError):
        edge_crosses_polygon(0.0, 0.0, 1.0, 1.0, [0.0, 1.0, 2.0])


def test_horizontal_edge_through_square_crosses():
    assert edge_crosses_polygon(-1.0, 0.5, 2.0, 0.5, SQUARE)


def test_vertical_edge_through_square_crosses():
    assert edge_crosses_polygon(0.5, -1.0, 0.5, 2.0, SQUARE)


def test_diagonal_edge_through_square_crosses():
    assert edge_crosses_polygon(-1.0, -0.5, 2.0, 1.5, SQUARE)


def test_edge_far_from_square_does_not_cross():
    assert not edge_crosses_polygon(5.0, 5.0, 6.0, 7.0, SQUARE)


def test_edge_inside_square_does_not_cross():
    assert not edge_crosses_polygon(0.2, 0.3, 0.7, 0.6, SQUARE)


def test_crossing_segments_intersect():
    assert segments_intersect(0.0, 0.0, 1.0, 1.0, 0.0, 1.0, 1.0, 0.0)
    assert segments_intersect(0.0, 1.0, 1.0, 0.0, 0.0, 0.0, 1.0, 1.0)


def test_segments_with_shared_endpoint_intersect():
    assert segments_intersect(0.0, 0.0, 1.0, 0.0, 1.0, 0.0, 5.0, 5.0)
    assert segments_intersect(0.0, 0.0, 1.0, 0.0, 7.0, 3.0, 0.0, 0.0)


def test_parallel_segments_do_not_intersect():
    assert not segments_intersect(0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 1.0)


def test_disjoint_segments_on_crossing_lines_do_not_intersect():
    assert not segments_intersect(0.0, 0.0, 1.0, 1.0, 3.0, 0.0, 2.0, 1.0)
    assert not segments_intersect(0.0, 0.0, 0.4, 0.4, 0.0, 1.0, 1.0, 0.0)