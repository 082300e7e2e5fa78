"""PathGraphService - Entry point for a transport layer.

Wires PathPointStore, PathEdgeStore and GraphBuilder around one injected
RecordStore and exposes every operation with plain arguments and dataclass
results (each with to_dict()). Algorithmic queries build a fresh Graph per
call, so concurrent queries share no graph state.

The service owns the store's lifecycle: open() at process start, close() at
shutdown, or use it as a context manager.
"""

import logging
from typing import Any, Optional, Sequence

from pathgraph.core.connectivity import connected_components
from pathgraph.core.geo_calculator import BoundingBox
from pathgraph.core.proximity import ReachablePoint, within_distance
from pathgraph.core.shortest_path import (
    ShortestPathResult,
    are_points_connected,
    path_distance,
    shortest_path,
)
from pathgraph.core.statistics import GraphStatistics, graph_statistics
from pathgraph.model.graph import DeleteResult, Graph, NeighborInfo
from pathgraph.model.path_edge import PathEdge
from pathgraph.model.path_point import PathPoint
from pathgraph.model.timestamps import Clock, utc_now
from pathgraph.store.graph_builder import GraphBuilder
from pathgraph.store.path_edge_store import PathEdgeStore
from pathgraph.store.path_point_store import PathPointStore
from pathgraph.store.record_store import RecordStore

logger = logging.getLogger(__name__)


class PathGraphService:
    """Facade over the waypoint graph.

    Example:
        with PathGraphService(store=JsonFileRecordStore(path=path)) as service:
            a = service.create_point(latitude=40.7128, longitude=-74.0060)
            b = service.create_point(latitude=41.8781, longitude=-87.6298)
            service.create_edge(point_a_id=a.id, point_b_id=b.id, weight=1000.0)
            print(service.shortest_path(start_id=a.id, end_id=b.id).to_dict())
    """

    def __init__(self, store: RecordStore, clock: Clock = utc_now) -> None:
        self.store = store
        self.points = PathPointStore(store=store, clock=clock)
        self.edges = PathEdgeStore(store=store, points=self.points, clock=clock)
        self.builder = GraphBuilder(points=self.points, edges=self.edges)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self) -> None:
        self.store.open()
        logger.info(f"PathGraphService opened with {type(self.store).__name__}")

    def close(self) -> None:
        self.store.close()
        logger.info("PathGraphService closed")

    def __enter__(self) -> "PathGraphService":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # Path Points
    # =========================================================================

    def create_point(self, latitude: float, longitude: float, creator_id: Optional[str] = None) -> PathPoint:
        return self.points.create(fields={"latitude": latitude, "longitude": longitude}, creator_id=creator_id)

    def get_point(self, point_id: str) -> PathPoint:
        return self.points.get(point_id=point_id)

    def list_points(self, bbox: Optional[BoundingBox] = None) -> list[PathPoint]:
        return self.points.list(bbox=bbox)

    def update_point(self, point_id: str, fields: dict[str, Any]) -> PathPoint:
        return self.points.update(point_id=point_id, fields=fields)

    def delete_point(self, point_id: str) -> DeleteResult:
        return self.points.delete(point_id=point_id)

    # =========================================================================
    # Path Edges
    # =========================================================================

    def create_edge(
        self,
        point_a_id: str,
        point_b_id: str,
        weight: Optional[float] = None,
        creator_id: Optional[str] = None,
    ) -> PathEdge:
        return self.edges.create(point_a_id=point_a_id, point_b_id=point_b_id, weight=weight, creator_id=creator_id)

    def get_edge(self, edge_id: str) -> PathEdge:
        return self.edges.get(edge_id=edge_id)

    def find_edge_between(self, point_a_id: str, point_b_id: str) -> Optional[PathEdge]:
        return self.edges.find_between(point_a_id=point_a_id, point_b_id=point_b_id)

    def list_edges(self, point_id: Optional[str] = None) -> list[PathEdge]:
        return self.edges.list(point_id=point_id)

    def neighbors(self, point_id: str) -> list[NeighborInfo]:
        return self.edges.neighbors(point_id=point_id)

    def update_edge(self, edge_id: str, fields: dict[str, Any]) -> PathEdge:
        return self.edges.update(edge_id=edge_id, fields=fields)

    def delete_edge(self, edge_id: str) -> DeleteResult:
        return self.edges.delete(edge_id=edge_id)

    # =========================================================================
    # Graph Queries (fresh Graph per call)
    # =========================================================================

    def graph(self) -> Graph:
        return self.builder.build()

    def shortest_path(self, start_id: str, end_id: str) -> ShortestPathResult:
        return shortest_path(graph=self.builder.build(), start_id=start_id, end_id=end_id)

    def are_points_connected(self, point_a_id: str, point_b_id: str) -> bool:
        return are_points_connected(graph=self.builder.build(), point_a_id=point_a_id, point_b_id=point_b_id)

    def path_distance(self, point_ids: Sequence[str]) -> float:
        return path_distance(graph=self.builder.build(), point_ids=point_ids)

    def connected_components(self) -> list[list[str]]:
        return connected_components(graph=self.builder.build())

    def within_distance(self, start_id: str, max_distance: float) -> list[ReachablePoint]:
        return within_distance(graph=self.builder.build(), start_id=start_id, max_distance=max_distance)

    def statistics(self) -> GraphStatistics:
        return graph_statistics(graph=self.builder.build())
