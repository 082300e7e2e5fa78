"""GraphBuilder - Materializes the adjacency structure from the stores.

Every algorithmic query builds its own Graph from a fresh scan of both
collections; nothing is cached between calls.
"""

import logging

from pathgraph.model.graph import Graph, Neighbor
from pathgraph.store.path_edge_store import PathEdgeStore
from pathgraph.store.path_point_store import PathPointStore

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Builds an undirected Graph from PathPointStore and PathEdgeStore."""

    def __init__(self, points: PathPointStore, edges: PathEdgeStore) -> None:
        self.points = points
        self.edges = edges

    def build(self) -> Graph:
        """Read all vertices and edges and build the adjacency lists.

        Each edge is added to both endpoints' lists. When an endpoint was
        deleted, only that side is skipped: the surviving endpoint keeps an
        entry pointing at the missing id, and the edge is reported in
        Graph.dangling_edge_ids. Algorithms never step onto such an entry.
        """
        vertices = self.points.list()
        edges = self.edges.list()

        adjacency: dict[str, list[Neighbor]] = {v.id: [] for v in vertices}
        dangling: list[str] = []

        for edge in edges:
            if edge.point_a_id not in adjacency or edge.point_b_id not in adjacency:
                dangling.append(edge.id)
            if edge.point_a_id in adjacency:
                adjacency[edge.point_a_id].append(Neighbor(to=edge.point_b_id, weight=edge.weight, edge_id=edge.id))
            if edge.point_b_id in adjacency:
                adjacency[edge.point_b_id].append(Neighbor(to=edge.point_a_id, weight=edge.weight, edge_id=edge.id))

        if dangling:
            logger.warning(f"Found {len(dangling)} dangling edge(s) with missing endpoints: {dangling}")
        logger.debug(f"Built graph: {len(vertices)} vertices, {len(edges)} edges")

        return Graph(vertices=vertices, edges=edges, adjacency=adjacency, dangling_edge_ids=dangling)
