"""Shortest path search over a materialized Graph (Dijkstra).

Uses a binary heap frontier with lazy deletion: stale heap entries are
skipped when popped. The search stops as soon as the target is popped or the
frontier is empty. Ties between equal-distance candidates are broken by
vertex id and callers must not rely on any particular tie-break.

"No route" is a normal result (found=False), not an error.
"""

import heapq
import logging
from dataclasses import dataclass, field
from math import inf
from typing import Any, Sequence

from pathgraph.core.geo_calculator import GeoCalculator
from pathgraph.errors import NotFoundError
from pathgraph.model.graph import Graph
from pathgraph.model.path_point import PathPoint

logger = logging.getLogger(__name__)

VERTEX_KIND = "path point"


@dataclass
class ShortestPathResult:
    """Result of a shortest path query.

    Attributes:
        found: True if end is reachable from start
        distance: Sum of edge weights along the path (meters), inf if not found
        path: Vertex ids from start to end, empty if not found
        waypoints: Vertices of the path with coordinates, in path order
    """

    found: bool
    distance: float
    path: list[str]
    waypoints: list[PathPoint] = field(default_factory=list)

    @classmethod
    def not_found(cls) -> "ShortestPathResult":
        return cls(found=False, distance=inf, path=[])

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": self.found,
            "distance": self.distance,
            "path": list(self.path),
            "waypoints": [
                {"id": p.id, "latitude": p.latitude, "longitude": p.longitude} for p in self.waypoints
            ],
        }


def _require_vertex(graph: Graph, vertex_id: str) -> None:
    if not graph.has_vertex(vertex_id):
        raise NotFoundError(kind=VERTEX_KIND, id=vertex_id)


def shortest_path(graph: Graph, start_id: str, end_id: str) -> ShortestPathResult:
    """Find the minimum-weight path between two vertices.

    Args:
        graph: Graph built for this query
        start_id: Source vertex id
        end_id: Target vertex id

    Returns:
        ShortestPathResult; found=False with distance=inf and an empty path
        when end is unreachable.

    Raises:
        NotFoundError: If start or end is not a vertex of the graph.
    """
    _require_vertex(graph=graph, vertex_id=start_id)
    _require_vertex(graph=graph, vertex_id=end_id)

    distances: dict[str, float] = {start_id: 0.0}
    previous: dict[str, str] = {}
    visited: set[str] = set()
    heap: list[tuple[float, str]] = [(0.0, start_id)]

    while heap:
        dist, current = heapq.heappop(heap)
        if current in visited:
            continue
        if current == end_id:
            break
        visited.add(current)

        for neighbor in graph.adjacency[current]:
            # Dangling entries point at deleted vertices
            if neighbor.to in visited or not graph.has_vertex(neighbor.to):
                continue
            candidate = dist + neighbor.weight
            if candidate < distances.get(neighbor.to, inf):
                distances[neighbor.to] = candidate
                previous[neighbor.to] = current
                heapq.heappush(heap, (candidate, neighbor.to))

    path = [end_id]
    while path[-1] in previous:
        path.append(previous[path[-1]])
    path.reverse()

    if path[0] != start_id:
        logger.debug(f"No path from {start_id} to {end_id} ({len(visited)} vertices settled)")
        return ShortestPathResult.not_found()

    return ShortestPathResult(
        found=True,
        distance=distances[end_id],
        path=path,
        waypoints=[graph.vertex(vid) for vid in path],
    )


def are_points_connected(graph: Graph, point_a_id: str, point_b_id: str) -> bool:
    """True if a path exists between the two vertices."""
    return shortest_path(graph=graph, start_id=point_a_id, end_id=point_b_id).found


def path_distance(graph: Graph, point_ids: Sequence[str]) -> float:
    """Great-circle length of a route through the given vertices, in meters.

    Uses coordinates only; the vertices need not be connected by edges.
    Fewer than two ids give 0 without any lookup.

    Raises:
        NotFoundError: If any id of a route of two or more is not a vertex.
    """
    point_ids = list(point_ids)
    if len(point_ids) < 2:
        return 0.0
    for vid in point_ids:
        _require_vertex(graph=graph, vertex_id=vid)
    return GeoCalculator.polyline_length_m(graph.vertex(vid).lat_lon for vid in point_ids)
