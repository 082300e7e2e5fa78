"""Shared pytest fixtures for pathgraph tests.

Provides opened in-memory stores, a deterministic clock, the three-city
scenario points and a factory for building small graphs through the real
stores.

COORDINATE SYSTEM:
    Synthetic graphs place vertex i at (lat=i * 0.01, lon=0.0). Edge weights are
    always passed explicitly so algorithm tests do not depend on haversine.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator

import pytest

from pathgraph.model.graph import Graph
from pathgraph.model.path_point import PathPoint
from pathgraph.service import PathGraphService
from pathgraph.store.graph_builder import GraphBuilder
from pathgraph.store.path_edge_store import PathEdgeStore
from pathgraph.store.path_point_store import PathPointStore
from pathgraph.store.record_store import InMemoryRecordStore

# (point index a, point index b, weight)
EdgeSpec = tuple[int, int, float]
GraphFactory = Callable[[int, list[EdgeSpec]], tuple[Graph, list[str]]]


# =============================================================================
# CLOCK
# =============================================================================


class StepClock:
    """Clock advancing one second per call, starting 2024-01-01T00:00:00Z."""

    def __init__(self) -> None:
        self.current = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        return now


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()


# =============================================================================
# STORE FIXTURES
# =============================================================================


@pytest.fixture
def record_store() -> Iterator[InMemoryRecordStore]:
    """Opened, empty in-memory record store; closed after the test."""
    store = InMemoryRecordStore()
    store.open()
    yield store
    store.close()


@pytest.fixture
def point_store(record_store: InMemoryRecordStore, step_clock: StepClock) -> PathPointStore:
    return PathPointStore(store=record_store, clock=step_clock)


@pytest.fixture
def edge_store(record_store: InMemoryRecordStore, point_store: PathPointStore, step_clock: StepClock) -> PathEdgeStore:
    return PathEdgeStore(store=record_store, points=point_store, clock=step_clock)


@pytest.fixture
def graph_builder(point_store: PathPointStore, edge_store: PathEdgeStore) -> GraphBuilder:
    return GraphBuilder(points=point_store, edges=edge_store)


@pytest.fixture
def service() -> Iterator[PathGraphService]:
    """Opened service over a fresh in-memory store."""
    with PathGraphService(store=InMemoryRecordStore()) as svc:
        yield svc


# =============================================================================
# SCENARIO POINTS
# =============================================================================


@pytest.fixture
def city_points(point_store: PathPointStore) -> tuple[PathPoint, PathPoint, PathPoint]:
    """New York (A), Los Angeles (B) and Chicago (C), created in that order.

    Store ids are P000001, P000002, P000003, so A < B < C lexicographically.
    """
    new_york = point_store.create(fields={"latitude": 40.7128, "longitude": -74.0060}, creator_id="test-user")
    los_angeles = point_store.create(fields={"latitude": 34.0522, "longitude": -118.2437}, creator_id="test-user")
    chicago = point_store.create(fields={"latitude": 41.8781, "longitude": -87.6298}, creator_id="test-user")
    return new_york, los_angeles, chicago


# =============================================================================
# GRAPH FACTORY
# =============================================================================


def _build_graph(vertex_count: int, edges: list[EdgeSpec]) -> tuple[Graph, list[str]]:
    store = InMemoryRecordStore()
    store.open()
    points = PathPointStore(store=store)
    edge_store = PathEdgeStore(store=store, points=points)

    ids = [points.create(fields={"latitude": i * 0.01, "longitude": 0.0}).id for i in range(vertex_count)]
    for a, b, weight in edges:
        edge_store.create(point_a_id=ids[a], point_b_id=ids[b], weight=weight)

    graph = GraphBuilder(points=points, edges=edge_store).build()
    store.close()
    return graph, ids


@pytest.fixture(scope="session")
def graph_factory() -> GraphFactory:
    """Build a Graph from a vertex count and (a, b, weight) index triples.

    Session scoped so hypothesis tests can use it. Returns (graph, ids) where
    ids[i] is the store id of vertex i.
    """
    return _build_graph


@pytest.fixture
def line_graph(graph_factory: GraphFactory) -> tuple[Graph, list[str]]:
    """Path graph v0 -100- v1 -200- v2 -300- v3."""
    return graph_factory(4, [(0, 1, 100.0), (1, 2, 200.0), (2, 3, 300.0)])


@pytest.fixture
def two_islands_graph(graph_factory: GraphFactory) -> tuple[Graph, list[str]]:
    """Two components: triangle v0-v1-v2 and pair v3-v4, plus isolated v5."""
    return graph_factory(
        6,
        [(0, 1, 10.0), (1, 2, 10.0), (0, 2, 25.0), (3, 4, 5.0)],
    )
