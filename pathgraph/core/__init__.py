"""Core geodesic math and pure graph algorithms.

- GeoCalculator: Haversine distance, bounding boxes, polyline length
- shortest_path: Dijkstra queries (also are_points_connected, path_distance)
- connectivity: Iterative depth-first component discovery
- proximity: Bounded-radius reachability
- statistics: Degree and weight aggregates

Algorithms are pure functions over a Graph built for the current query.
"""

from pathgraph.core.geo_calculator import GeoCalculator

# Algorithm modules import model.graph, which imports model.path_point, which
# imports GeoCalculator from here. Import them directly:
#     from pathgraph.core.shortest_path import shortest_path

__all__ = [
    "GeoCalculator",
]
