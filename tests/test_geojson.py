import json

import pytest

from routekit.geojson import geojson_linestring, geojson_point, path_to_geojson


def test_path_text_is_compact():
    text = path_to_geojson([0, 1], [1.5, 2.5], [3.0, 4.0])
    assert text == '{"type":"LineString","coordinates":[[3,1.5],[4,2.5]]}'


def test_path_follows_node_order():
    latitude = [10.0, 20.0, 30.0]
    longitude = [1.0, 2.0, 3.0]
    path = [2, 0, 1]
    data = json.loads(path_to_geojson(path, latitude, longitude))
    assert data["type"] == "LineString"
    assert data["coordinates"] == [[longitude[n], latitude[n]] for n in path]


def test_empty_path():
    data = json.loads(path_to_geojson([], [], []))
    assert data["coordinates"] == []


def test_coordinates_use_six_significant_digits():
    data = json.loads(path_to_geojson([0], [0.1234567], [2.0]))
    assert data["coordinates"] == [[2.0, 0.123457]]


@pytest.mark.parametrize("avoid, settled", [(True, False), (False, True), (False, False)])
def test_point_feature(avoid, settled):
    data = json.loads(geojson_point(8.25, 49.5, 17, avoid, settled))
    assert data["type"] == "Feature"
    assert data["geometry"] == {"type": "Point", "coordinates": [8.25, 49.5]}
    assert data["properties"] == {"id": 17, "avoid": int(avoid), "settled": int(settled)}


def test_linestring_feature():
    coordinates = [8.0, 49.0, 8.5, 49.25, 9.0, 49.75]
    data = json.loads(geojson_linestring(coordinates, 3, 120, True))
    assert data["geometry"]["type"] == "LineString"
    assert data["geometry"]["coordinates"] == [[8.0, 49.0], [8.5, 49.25], [9.0, 49.75]]
    assert data["properties"] == {"id": 3, "weight": 120, "avoid": 1}


def test_linestring_needs_coordinate_pairs():
    with pytest.raises(ValueError):
        geojson_linestring([1.0, 2.0, 3.0], 0, 0, False)