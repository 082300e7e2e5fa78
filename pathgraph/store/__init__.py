"""Record stores and the vertex/edge stores built on them.

- RecordStore: Abstract document collection interface
- InMemoryRecordStore / JsonFileRecordStore: Concrete stores
- PathPointStore: Vertex CRUD with coordinate validation
- PathEdgeStore: Edge CRUD with normalization, deduplication and auto weights
- GraphBuilder: Materializes a Graph from both stores per query
"""

from pathgraph.store.graph_builder import GraphBuilder
from pathgraph.store.path_edge_store import PathEdgeStore
from pathgraph.store.path_point_store import PathPointStore
from pathgraph.store.record_store import InMemoryRecordStore, JsonFileRecordStore, RecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "PathPointStore",
    "PathEdgeStore",
    "GraphBuilder",
]
