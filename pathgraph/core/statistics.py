"""Aggregate degree and edge-weight statistics of a Graph."""

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from pathgraph.core.connectivity import connected_components
from pathgraph.model.graph import Graph


@dataclass(frozen=True)
class GraphStatistics:
    """Summary of a graph.

    Min/max/avg fields are 0 when there are no vertices (degree fields) or no
    edges (weight fields), never NaN or infinite.
    """

    vertex_count: int
    edge_count: int
    component_count: int
    avg_degree: float
    max_degree: int
    min_degree: int
    avg_edge_weight: float
    max_edge_weight: float
    min_edge_weight: float
    is_connected: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def graph_statistics(graph: Graph) -> GraphStatistics:
    """Compute vertex/edge counts, components, degree and weight distributions.

    Degree is the length of a vertex's adjacency list. Edge weights cover
    every fetched edge, dangling ones included, matching edge_count.
    """
    degrees = np.array([len(neighbors) for neighbors in graph.adjacency.values()], dtype=int)
    weights = np.array([edge.weight for edge in graph.edges], dtype=float)
    component_count = len(connected_components(graph=graph))

    has_degrees = degrees.size > 0
    has_weights = weights.size > 0

    return GraphStatistics(
        vertex_count=len(graph.vertices),
        edge_count=len(graph.edges),
        component_count=component_count,
        avg_degree=float(degrees.mean()) if has_degrees else 0.0,
        max_degree=int(degrees.max()) if has_degrees else 0,
        min_degree=int(degrees.min()) if has_degrees else 0,
        avg_edge_weight=float(weights.mean()) if has_weights else 0.0,
        max_edge_weight=float(weights.max()) if has_weights else 0.0,
        min_edge_weight=float(weights.min()) if has_weights else 0.0,
        is_connected=component_count == 1,
    )
