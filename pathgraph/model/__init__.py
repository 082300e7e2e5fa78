"""Data model classes for the waypoint graph.

- PathPoint: Geolocated vertex record
- PathEdge: Undirected weighted edge record (normalized endpoint pair)
- Graph: Adjacency structure materialized per query
- Neighbor / NeighborInfo: Adjacency entries
- ValidationFailure: Structured validation problem
"""

from pathgraph.model.graph import DeleteResult, Graph, Neighbor, NeighborInfo
from pathgraph.model.path_edge import PathEdge, normalize_pair
from pathgraph.model.path_point import PathPoint
from pathgraph.model.validation import ValidationFailure

__all__ = [
    "PathPoint",
    "PathEdge",
    "normalize_pair",
    "Graph",
    "Neighbor",
    "NeighborInfo",
    "DeleteResult",
    "ValidationFailure",
]
