"""Print a summary of a JSON-file waypoint graph.

Developer utility for inspecting a store written by JsonFileRecordStore:
vertex/edge counts, degree and weight statistics, connected components and
dangling edges left behind by deleted points.

Usage:
    python scripts/graph_report.py [path/to/store.json]

Defaults to StoreConfig.JSON_STORE_PATH.
"""

import logging
import sys
from pathlib import Path

from pathgraph.constants import StoreConfig
from pathgraph.core.connectivity import connected_components
from pathgraph.core.statistics import graph_statistics
from pathgraph.service import PathGraphService
from pathgraph.store.record_store import JsonFileRecordStore

logging.basicConfig(level=logging.INFO)

# Components larger than this are printed as a count only
MAX_LISTED_COMPONENT_SIZE = 10


def print_graph_report(store_path: Path) -> None:
    """Load the store, build the graph once and print its summary."""
    if not store_path.exists():
        raise FileNotFoundError(f"Store file not found: {store_path}")

    with PathGraphService(store=JsonFileRecordStore(path=store_path)) as service:
        graph = service.graph()

    stats = graph_statistics(graph=graph)
    print(f"Store: {store_path}")
    print(f"Vertices: {stats.vertex_count}, edges: {stats.edge_count}, components: {stats.component_count}")
    print(f"Degree: min={stats.min_degree}, avg={stats.avg_degree:.2f}, max={stats.max_degree}")
    print(
        f"Edge weight: min={stats.min_edge_weight:.1f}m, "
        f"avg={stats.avg_edge_weight:.1f}m, max={stats.max_edge_weight:.1f}m"
    )
    print(f"Connected: {stats.is_connected}")

    for index, component in enumerate(connected_components(graph=graph), start=1):
        if len(component) <= MAX_LISTED_COMPONENT_SIZE:
            print(f"  Component {index}: {', '.join(component)}")
        else:
            print(f"  Component {index}: {len(component)} vertices")

    if graph.dangling_edge_ids:
        print(f"Dangling edges: {', '.join(graph.dangling_edge_ids)}")


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else StoreConfig.JSON_STORE_PATH
    print_graph_report(store_path=path)
