import pytest

from routekit.geometry import point_in_polygon
from routekit.polygon_io import load_polygons


def write(tmp_path, text):
    path = tmp_path / "polygons.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_reads_one_polygon_per_line(tmp_path):
    path = write(tmp_path, "1 2 3 4\n5.5 6 7 8 9 -10\n")
    assert load_polygons(path) == [[1.0, 2.0, 3.0, 4.0], [5.5, 6.0, 7.0, 8.0, 9.0, -10.0]]


def test_empty_lines_are_skipped(tmp_path):
    path = write(tmp_path, "\n0 0 0 1\n\n\n1 1 1 0\n")
    assert load_polygons(path) == [[0.0, 0.0, 0.0, 1.0], [1.0, 1.0, 1.0, 0.0]]


def test_empty_file_has_no_polygons(tmp_path):
    assert load_polygons(write(tmp_path, "")) == []


def test_odd_number_of_coordinates_is_rejected(tmp_path):
    path = write(tmp_path, "1 2 3 4\n1 2 3\n")
    with pytest.raises(ValueError, match="line number 2"):
        load_polygons(path)


def test_non_numeric_value_is_rejected(tmp_path):
    path = write(tmp_path, "1 2 north 4\n")
    with pytest.raises(ValueError, match="Cannot parse"):
        load_polygons(path)


def test_whitespace_only_line_is_rejected(tmp_path):
    path = write(tmp_path, "1 2 3 4\n   \n")
    with pytest.raises(ValueError):
        load_polygons(path)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_polygons(tmp_path / "absent.txt")


def test_loaded_polygon_works_with_geometry(tmp_path):
    path = write(tmp_path, "0 0 0 4 4 4 4 0\n")
    (square,) = load_polygons(path)
    assert point_in_polygon(2.0, 2.0, square)
    assert not point_in_polygon(5.0, 2.0, square)