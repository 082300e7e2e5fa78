"""Integration and smoke tests for the service facade.

These tests verify:
1. All modules import without errors
2. Configuration constants are consistent
3. The three-city scenario works end-to-end through PathGraphService
4. Deleting points leaves dangling edges that queries tolerate
5. A JSON-file store survives a restart and feeds the report script
"""

import importlib
import importlib.util
from pathlib import Path
from typing import get_type_hints

import pytest

from pathgraph.constants import GeoConfig, RecordFields, StoreConfig
from pathgraph.errors import DuplicateEdgeError, NotFoundError, StoreError, ValidationError
from pathgraph.model.graph import NeighborInfo
from pathgraph.model.path_edge import PathEdge
from pathgraph.model.path_point import PathPoint
from pathgraph.service import PathGraphService
from pathgraph.store.path_edge_store import PathEdgeStore
from pathgraph.store.path_point_store import PathPointStore
from pathgraph.store.record_store import InMemoryRecordStore, JsonFileRecordStore

PROJECT_ROOT = Path(__file__).parent.parent


# =============================================================================
# IMPORT SMOKE TESTS
# =============================================================================


class TestImportSmoke:
    """Verify all modules import and expose their entry points."""

    @pytest.mark.parametrize(
        "module_name, attribute",
        [
            pytest.param("pathgraph.core.geo_calculator", "GeoCalculator", id="core_geo"),
            pytest.param("pathgraph.core.shortest_path", "shortest_path", id="core_dijkstra"),
            pytest.param("pathgraph.core.connectivity", "connected_components", id="core_components"),
            pytest.param("pathgraph.core.proximity", "within_distance", id="core_proximity"),
            pytest.param("pathgraph.core.statistics", "graph_statistics", id="core_stats"),
            pytest.param("pathgraph.model", "PathEdge", id="model"),
            pytest.param("pathgraph.store", "GraphBuilder", id="store"),
            pytest.param("pathgraph.service", "PathGraphService", id="service"),
        ],
    )
    def test_module_imports(self, module_name: str, attribute: str) -> None:
        module = importlib.import_module(module_name)
        assert hasattr(module, attribute)

    def test_store_annotations_resolve(self) -> None:
        """Store methods named like builtins must not shadow their own return annotations."""
        assert get_type_hints(PathEdgeStore.neighbors)["return"] == list[NeighborInfo]
        assert get_type_hints(PathEdgeStore.list)["return"] == list[PathEdge]
        assert get_type_hints(PathPointStore.list)["return"] == list[PathPoint]


class TestConfiguration:
    """Constants are internally consistent."""

    def test_geo_bounds(self) -> None:
        assert GeoConfig.MIN_LATITUDE == -GeoConfig.MAX_LATITUDE == -90.0
        assert GeoConfig.MIN_LONGITUDE == -GeoConfig.MAX_LONGITUDE == -180.0
        assert GeoConfig.EARTH_RADIUS_M == 6_371_000

    def test_collections_have_distinct_prefixes(self) -> None:
        prefixes = StoreConfig.ID_PREFIXES
        assert set(prefixes) == {StoreConfig.POINTS_COLLECTION, StoreConfig.EDGES_COLLECTION}
        assert len(set(prefixes.values())) == len(prefixes)
        assert StoreConfig.DEFAULT_ID_PREFIX not in prefixes.values()

    def test_protected_fields_are_not_updatable(self) -> None:
        for field in RecordFields.PROTECTED:
            assert field not in RecordFields.POINT_UPDATABLE
            assert field not in RecordFields.EDGE_UPDATABLE


# =============================================================================
# END-TO-END SCENARIO
# =============================================================================


class TestThreeCityScenario:
    """New York (A), Los Angeles (B), Chicago (C) through the service."""

    @pytest.fixture
    def cities(self, service: PathGraphService) -> tuple[str, str, str]:
        a = service.create_point(latitude=40.7128, longitude=-74.0060, creator_id="test-user")
        b = service.create_point(latitude=34.0522, longitude=-118.2437, creator_id="test-user")
        c = service.create_point(latitude=41.8781, longitude=-87.6298, creator_id="test-user")
        return a.id, b.id, c.id

    def test_auto_weighted_edge(self, service: PathGraphService, cities: tuple[str, str, str]) -> None:
        a, b, _ = cities
        edge = service.create_edge(point_a_id=a, point_b_id=b)
        assert 3_935_000 < edge.weight < 3_945_000
        assert service.find_edge_between(point_a_id=b, point_b_id=a) == edge
        with pytest.raises(DuplicateEdgeError):
            service.create_edge(point_a_id=b, point_b_id=a)

    def test_direct_edge_is_the_shortest_path(self, service: PathGraphService, cities: tuple[str, str, str]) -> None:
        a, _, c = cities
        service.create_edge(point_a_id=a, point_b_id=c, weight=1000)
        result = service.shortest_path(start_id=a, end_id=c)
        assert result.found
        assert result.distance == 1000.0
        assert result.path == [a, c]

    def test_connectivity_follows_edges(self, service: PathGraphService, cities: tuple[str, str, str]) -> None:
        a, b, c = cities
        service.create_edge(point_a_id=a, point_b_id=c, weight=1000)
        assert len(service.connected_components()) == 2
        assert not service.are_points_connected(point_a_id=a, point_b_id=b)
        assert not service.statistics().is_connected

        service.create_edge(point_a_id=b, point_b_id=c)
        assert service.connected_components() == [[a, c, b]]
        assert service.are_points_connected(point_a_id=a, point_b_id=b)

        stats = service.statistics()
        assert stats.is_connected
        assert stats.vertex_count == 3 and stats.edge_count == 2

    def test_route_through_hub(self, service: PathGraphService, cities: tuple[str, str, str]) -> None:
        """Without A-B, the only route from A to B goes through Chicago."""
        a, b, c = cities
        ac = service.create_edge(point_a_id=a, point_b_id=c)
        bc = service.create_edge(point_a_id=b, point_b_id=c)

        result = service.shortest_path(start_id=a, end_id=b)
        assert result.path == [a, c, b]
        assert result.distance == pytest.approx(ac.weight + bc.weight)
        assert service.path_distance(point_ids=[a, c, b]) == pytest.approx(result.distance)

        reachable = service.within_distance(start_id=c, max_distance=bc.weight)
        assert [p.id for p in reachable] == [a, b]

    def test_neighbors_and_listing(self, service: PathGraphService, cities: tuple[str, str, str]) -> None:
        a, b, c = cities
        service.create_edge(point_a_id=a, point_b_id=b)
        service.create_edge(point_a_id=a, point_b_id=c, weight=1000)
        assert {n.neighbor_id for n in service.neighbors(point_id=a)} == {b, c}
        assert len(service.list_edges(point_id=a)) == 2
        assert len(service.list_edges(point_id=b)) == 1

        # Bbox around the eastern cities only
        east = service.list_points(bbox=(40.0, -90.0, 42.0, -70.0))
        assert {p.id for p in east} == {a, c}

    def test_updates(self, service: PathGraphService, cities: tuple[str, str, str]) -> None:
        a, b, c = cities
        edge = service.create_edge(point_a_id=a, point_b_id=b, weight=10)
        moved = service.update_edge(edge_id=edge.id, fields={"point_b_id": c})
        assert moved.pair == (a, c)
        assert service.find_edge_between(point_a_id=a, point_b_id=b) is None
        assert service.shortest_path(start_id=c, end_id=a).distance == 10.0

        point = service.update_point(point_id=b, fields={"latitude": 34.0})
        assert point.latitude == 34.0 and point.created_by == "test-user"

    def test_errors_surface_as_typed_exceptions(self, service: PathGraphService, cities: tuple[str, str, str]) -> None:
        a, _, _ = cities
        with pytest.raises(ValidationError):
            service.create_point(latitude=95.0, longitude=0.0)
        with pytest.raises(ValidationError):
            service.create_edge(point_a_id=a, point_b_id=a)
        with pytest.raises(NotFoundError):
            service.create_edge(point_a_id=a, point_b_id="P999999")
        with pytest.raises(NotFoundError):
            service.shortest_path(start_id=a, end_id="P999999")
        with pytest.raises(NotFoundError):
            service.get_edge(edge_id="E999999")

    def test_deleted_point_leaves_dangling_edge(
        self, service: PathGraphService, cities: tuple[str, str, str]
    ) -> None:
        a, b, c = cities
        ab = service.create_edge(point_a_id=a, point_b_id=b)
        service.create_edge(point_a_id=b, point_b_id=c)
        assert service.delete_point(point_id=a).to_dict() == {"id": a, "deleted": True}

        graph = service.graph()
        assert graph.dangling_edge_ids == [ab.id]
        assert service.connected_components() == [[b, c]]
        assert service.statistics().edge_count == 2
        assert graph.degree(b) == 2
        assert service.statistics().max_degree == 2
        reachable = service.within_distance(start_id=b, max_distance=GeoConfig.EARTH_RADIUS_M * 4)
        assert [p.id for p in reachable] == [c]
        with pytest.raises(NotFoundError):
            service.shortest_path(start_id=a, end_id=b)

        # Cleaning up the dangling edge is the caller's job
        service.delete_edge(edge_id=ab.id)
        assert service.graph().dangling_edge_ids == []

    def test_results_serialize(self, service: PathGraphService, cities: tuple[str, str, str]) -> None:
        a, _, c = cities
        edge = service.create_edge(point_a_id=a, point_b_id=c, weight=1000)
        assert service.get_edge(edge_id=edge.id).to_dict()["weight"] == 1000.0
        assert service.shortest_path(start_id=a, end_id=c).to_dict()["path"] == [a, c]
        assert set(service.statistics().to_dict()) >= {"vertex_count", "edge_count", "is_connected"}
        graph_dict = service.graph().to_dict()
        assert len(graph_dict["vertices"]) == 3
        assert graph_dict["adjacency"][a][0]["to"] == c


# =============================================================================
# LIFECYCLE AND PERSISTENCE
# =============================================================================


class TestServiceLifecycle:
    """Store lifecycle is owned by the service."""

    def test_closed_service_refuses_work(self) -> None:
        service = PathGraphService(store=InMemoryRecordStore())
        with pytest.raises(StoreError):
            service.list_points()
        with service:
            service.create_point(latitude=0.0, longitude=0.0)
        with pytest.raises(StoreError):
            service.statistics()

    def test_json_store_survives_restart(self, tmp_path: Path) -> None:
        path = tmp_path / "graph.json"
        with PathGraphService(store=JsonFileRecordStore(path=path)) as service:
            a = service.create_point(latitude=40.7128, longitude=-74.0060)
            c = service.create_point(latitude=41.8781, longitude=-87.6298)
            service.create_edge(point_a_id=a.id, point_b_id=c.id, weight=1000)

        with PathGraphService(store=JsonFileRecordStore(path=path)) as service:
            assert service.shortest_path(start_id=a.id, end_id=c.id).distance == 1000.0
            with pytest.raises(DuplicateEdgeError):
                service.create_edge(point_a_id=c.id, point_b_id=a.id)


class TestGraphReportScript:
    """scripts/graph_report.py prints a summary of a JSON store."""

    @pytest.fixture
    def report_module(self):
        spec = importlib.util.spec_from_file_location("graph_report", PROJECT_ROOT / "scripts" / "graph_report.py")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    def test_prints_summary(self, report_module, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        path = tmp_path / "graph.json"
        with PathGraphService(store=JsonFileRecordStore(path=path)) as service:
            a = service.create_point(latitude=0.0, longitude=0.0)
            b = service.create_point(latitude=0.0, longitude=0.01)
            service.create_point(latitude=1.0, longitude=1.0)
            service.create_edge(point_a_id=a.id, point_b_id=b.id, weight=50)

        report_module.print_graph_report(store_path=path)
        out = capsys.readouterr().out
        assert "Vertices: 3, edges: 1, components: 2" in out
        assert f"Component 1: {a.id}, {b.id}" in out
        assert "Connected: False" in out

    def test_missing_store_file(self, report_module, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            report_module.print_graph_report(store_path=tmp_path / "missing.json")
