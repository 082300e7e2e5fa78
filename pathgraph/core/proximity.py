"""Bounded-radius reachability: vertices within a network distance of a source.

A single-source Dijkstra variant. A settled vertex whose distance exceeds the
budget is still marked visited but does not relax its edges, so the search
never grows past the ceiling.
"""

import heapq
from dataclasses import dataclass
from typing import Any

from pathgraph.errors import NotFoundError
from pathgraph.model.graph import Graph
from pathgraph.model.validation import raise_if_invalid, validate_max_distance


@dataclass(frozen=True)
class ReachablePoint:
    """A vertex reachable from the source with its network distance."""

    id: str
    distance: float
    latitude: float
    longitude: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "distance": self.distance,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


def within_distance(graph: Graph, start_id: str, max_distance: float) -> list[ReachablePoint]:
    """All vertices whose shortest network distance from start is <= max_distance.

    Args:
        graph: Graph built for this query
        start_id: Source vertex id (excluded from the result)
        max_distance: Distance budget in meters

    Returns:
        Reachable vertices sorted by ascending distance.

    Raises:
        NotFoundError: If start is not a vertex of the graph.
        ValidationError: If max_distance is negative or not a finite number.
    """
    raise_if_invalid(validate_max_distance(max_distance=max_distance))
    if not graph.has_vertex(start_id):
        raise NotFoundError(kind="path point", id=start_id)

    settled: dict[str, float] = {}
    frontier: list[tuple[float, str]] = [(0.0, start_id)]

    while frontier:
        dist, current = heapq.heappop(frontier)
        if current in settled:
            continue
        settled[current] = dist

        if dist > max_distance:
            continue

        for neighbor in graph.adjacency[current]:
            if neighbor.to not in settled and graph.has_vertex(neighbor.to):
                heapq.heappush(frontier, (dist + neighbor.weight, neighbor.to))

    reachable = []
    for vid, dist in settled.items():
        if vid == start_id or dist > max_distance:
            continue
        vertex = graph.vertex(vid)
        reachable.append(ReachablePoint(id=vid, distance=dist, latitude=vertex.latitude, longitude=vertex.longitude))

    reachable.sort(key=lambda p: p.distance)
    return reachable
