"""PathGraph - Geospatial waypoint graph with shortest-path and proximity queries.

Maintains path points (geolocated vertices) and weighted undirected path edges
in a record store, and answers graph queries over them:
- Shortest path between two points (Dijkstra)
- Connected components
- Points reachable within a distance budget
- Aggregate degree and weight statistics

Modules:
    core: Geodesic math and pure graph algorithms
    model: Data structures (PathPoint, PathEdge, Graph) and validation
    store: Record stores, vertex/edge stores and the graph builder
    service: Facade exposing every operation to a transport layer

Example:
    from pathgraph.service import PathGraphService
    from pathgraph.store import InMemoryRecordStore

    with PathGraphService(store=InMemoryRecordStore()) as service:
        a = service.create_point(latitude=40.7128, longitude=-74.0060)
        b = service.create_point(latitude=41.8781, longitude=-87.6298)
        service.create_edge(point_a_id=a.id, point_b_id=b.id)
        result = service.shortest_path(start_id=a.id, end_id=b.id)
"""
