"""Graph - In-memory adjacency structure materialized for a single query.

A Graph is built fresh by GraphBuilder for every algorithmic query and is
never cached. Each undirected edge appears in the adjacency list of both
endpoints.
"""

from dataclasses import dataclass, field
from typing import Any

from pathgraph.model.path_edge import PathEdge
from pathgraph.model.path_point import PathPoint


@dataclass(frozen=True)
class Neighbor:
    """One adjacency entry: the vertex reached, the edge weight and the edge id."""

    to: str
    weight: float
    edge_id: str


@dataclass(frozen=True)
class NeighborInfo:
    """A neighbor of a point as reported by PathEdgeStore.neighbors()."""

    neighbor_id: str
    weight: float
    edge_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"neighbor_id": self.neighbor_id, "weight": self.weight, "edge_id": self.edge_id}


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete call."""

    id: str
    deleted: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "deleted": self.deleted}


@dataclass
class Graph:
    """Undirected weighted graph over path points.

    Attributes:
        vertices: All path points, in store scan order
        edges: All path edges, including dangling ones
        adjacency: Vertex id -> neighbor entries (both directions per edge)
        dangling_edge_ids: Edges with an endpoint that no longer exists; only
            the surviving side appears in the adjacency
    """

    vertices: list[PathPoint]
    edges: list[PathEdge]
    adjacency: dict[str, list[Neighbor]]
    dangling_edge_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._vertex_index = {v.id: v for v in self.vertices}

    def has_vertex(self, vertex_id: str) -> bool:
        return vertex_id in self.adjacency

    def vertex(self, vertex_id: str) -> PathPoint:
        """Look up a vertex by id.

        Raises:
            KeyError: If the vertex is not part of the graph.
        """
        return self._vertex_index[vertex_id]

    def degree(self, vertex_id: str) -> int:
        """Number of adjacency entries of a vertex."""
        return len(self.adjacency[vertex_id])

    def to_dict(self) -> dict[str, Any]:
        """Serialize graph to a JSON-compatible dict."""
        return {
            "vertices": [v.to_dict() for v in self.vertices],
            "edges": [e.to_dict() for e in self.edges],
            "adjacency": {
                vid: [{"to": n.to, "weight": n.weight, "edge_id": n.edge_id} for n in neighbors]
                for vid, neighbors in self.adjacency.items()
            },
            "dangling_edge_ids": list(self.dangling_edge_ids),
        }
