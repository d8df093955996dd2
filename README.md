# routekit

Building blocks for road-network routing, written in pure Python with no dependencies.

Graphs use the adjacency-array (forward-star) layout. Nodes are numbered `0..n-1` and arcs are sorted by tail. The outgoing arcs of node `x` are `range(first_out[x], first_out[x+1])`, and `tail[a]` and `head[a]` give the ends of arc `a`. `routekit.inverse_vector.invert_vector(tail, node_count)` builds `first_out` from a sorted `tail` list.

## Modules

- `routekit.dijkstra`
  - `Dijkstra` is a resumable shortest-path search. Call `add_source`, then call `settle(get_weight)` until `is_finished()`.
  - Results come from `get_distance_to`, `get_node_path_to` and `get_arc_path_to`.
  - `ScalarGetWeight` reads fixed arc weights.
  - `AvoidPolygonsGetWeight` returns `INF_WEIGHT` for every arc whose end lies inside one of the given polygons, or that crosses one of them. Such arcs are not used.
- `routekit.astar`
  - `Astar` is the same interface as `Dijkstra`, except that `settle(get_weight, heuristic)` also takes a heuristic.
  - `ZeroHeuristic` estimates 0 everywhere.
  - `BeelineDistanceHeuristic` estimates the rounded great-circle distance to a target node.
  - `EspHeuristic` estimates the shortest path around polygon obstacles, using a `VisibilityGraph`. The target must have been added to that graph with `add_target_bw`, and the graph must have been sorted with `sort_graph_for_routing` before the heuristic is created.
- `routekit.visibility_graph`
  - `VisibilityGraph` connects the vertices of polygon obstacles that can see each other. Build the arcs with `visibility_naive()`.
  - `add_target` / `add_target_bw` add an extra node.
  - `sort_graph_for_routing()` sorts the arcs, after which `has_arc` and `get_distance_table` can be used.
  - `format_graph(show_all)` returns a text dump.
  - `save_graph(directory)` writes the arrays as binary files.
- `routekit.id_queue`: `MinIDQueue` is an addressable 4-ary min-heap of `IDKeyPair(id, key)`. It supports `decrease_key` and `increase_key`.
- `routekit.id_set_queue`: `IDSetMinQueue` is a set of ids that pops its smallest member.
- `routekit.timestamp_flag`: `TimestampFlags` is a set of per-id flags. `reset_all()` clears all of them.
- `routekit.permutation`, `routekit.sort`, `routekit.inverse_vector`, `routekit.filter`: helpers for applying, inverting and chaining permutations, computing sort permutations, building adjacency offsets and selecting elements by a mask.
- `routekit.geo_dist`: `geo_dist(lat_a, lon_a, lat_b, lon_b)` returns the great-circle distance in metres.
- `routekit.geometry`: `point_in_polygon`, `edge_crosses_polygon` and `segments_intersect`. A polygon is a flat list `[x0, y0, x1, y1, ...]`.
- `routekit.fragment`
  - `GraphFragment` is a symmetric graph in which every edge is stored in both directions, with reverse-arc links.
  - `make_graph_fragment` builds one from arc lists.
  - `decompose_graph_fragment_into_connected_components` splits a fragment into its connected components.
- `routekit.cut`: `BlockingFlow` is a unit-capacity max-flow between a source set and a target set. It gives `get_source_cut`, `get_target_cut` and `get_balanced_cut`, each returning a `CutSide`. `pick_smaller_side` switches a `CutSide` to its smaller side.
- `routekit.dissection`
  - `inertial_flow` / `inertial_flow_with_balance` find geographic balanced cuts.
  - `derive_separator_from_cut` turns a cut into a node separator.
  - `compute_separator_decomposition` returns a `SeparatorDecomposition`, which holds a tree of `SeparatorNode` and a node order.
  - `compute_nested_node_dissection_order` and `compute_nested_node_dissection_order_using_inertial_flow` return that node order.
- `routekit.tag_map`: `TagMap` is a string-to-string lookup built from `(key, value)` pairs. If a key occurs more than once, the first pair given is kept.
- `routekit.polygon_io`: `load_polygons(path)` reads one polygon per line, as `lat lon` pairs.
- `routekit.vector_io`: reads and writes flat little-endian binary arrays, to files or to streams, using `struct` type codes such as `"I"` and `"f"`.
- `routekit.geojson`: returns GeoJSON text for a node path, a point feature or a line-string feature.
- `routekit.constants`: `INVALID_ID` and `INF_WEIGHT`.

## Example

```python
from routekit.dijkstra import Dijkstra, ScalarGetWeight
from routekit.inverse_vector import invert_vector

tail = [0, 0, 1]
head = [1, 2, 2]
weight = [4, 10, 3]
first_out = invert_vector(tail, 3)

search = Dijkstra(first_out, tail, head)
search.add_source(0, 0)
get_weight = ScalarGetWeight(weight)
while not search.is_finished():
    search.settle(get_weight)

print(search.get_distance_to(2))    # 7
print(search.get_node_path_to(2))   # [0, 1, 2]
```

A nested dissection order for a graph whose nodes have coordinates:

```python
from routekit.dissection import compute_nested_node_dissection_order_using_inertial_flow

order = compute_nested_node_dissection_order_using_inertial_flow(
    node_count, tail, head, latitude, longitude, print
)
```

The last argument receives progress messages. Pass `None` to get no messages.

## What it does not do

routekit works on arrays that you supply:

- It does not read map data such as OpenStreetMap extracts.
- It does not build contraction hierarchies. The nested dissection order is only the contraction order that such a hierarchy would use.
- It has no command-line tool.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```