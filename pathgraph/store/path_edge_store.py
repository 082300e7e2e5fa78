"""PathEdgeStore - CRUD over undirected path edge records.

Invariants held for every stored edge:
- point_a_id < point_b_id (normalized pair, order-independent identity)
- point_a_id != point_b_id (no self-loops)
- weight > 0, in meters; auto-computed by haversine when not supplied and
  never recomputed afterwards
- at most one edge per normalized pair
- both endpoints existed when the edge was created or re-pointed

Duplicate protection is two-step: a find_between() lookup gives the caller the
existing edge id, and the write itself is a compare-and-insert (create) or
compare-and-update (re-pointing update) on the normalized pair so a
concurrent writer cannot slip a second edge in.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pathgraph.constants import RecordFields, StoreConfig
from pathgraph.errors import DuplicateEdgeError, NotFoundError
from pathgraph.model.graph import DeleteResult, NeighborInfo
from pathgraph.model.path_edge import PathEdge, normalize_pair
from pathgraph.model.timestamps import Clock, stamp_created, stamp_updated, utc_now
from pathgraph.model.validation import (
    raise_if_invalid,
    validate_edge_ids,
    validate_path_edge,
    validate_unknown_fields,
)
from pathgraph.store.path_point_store import PathPointStore
from pathgraph.store.record_store import RecordStore

logger = logging.getLogger(__name__)


class PathEdgeStore:
    """Edge records on top of a RecordStore collection.

    Endpoint existence is checked through the PathPointStore sharing the
    same record store.

    Example:
        edges = PathEdgeStore(store=record_store, points=point_store)
        edge = edges.create(point_a_id="P000002", point_b_id="P000001")
        assert edge.pair == ("P000001", "P000002")
    """

    KIND = "path edge"

    def __init__(
        self,
        store: RecordStore,
        points: PathPointStore,
        collection: str = StoreConfig.EDGES_COLLECTION,
        clock: Clock = utc_now,
    ) -> None:
        self.store = store
        self.points = points
        self.collection = collection
        self.clock = clock

    # =========================================================================
    # Create
    # =========================================================================

    def create(
        self,
        point_a_id: str,
        point_b_id: str,
        weight: Optional[float] = None,
        creator_id: Optional[str] = None,
    ) -> PathEdge:
        """Create an edge between two existing points.

        Args:
            point_a_id, point_b_id: Endpoint ids, in any order
            weight: Edge weight in meters; haversine distance between the
                endpoints when None
            creator_id: Principal creating the edge

        Returns:
            The stored edge with its normalized pair.

        Raises:
            NotFoundError: If either endpoint does not exist.
            ValidationError: Self-loop, malformed ids or non-positive weight.
            DuplicateEdgeError: If the pair is already connected.
        """
        endpoint_ids = {RecordFields.POINT_A_ID: point_a_id, RecordFields.POINT_B_ID: point_b_id}
        raise_if_invalid(validate_edge_ids(fields=endpoint_ids))

        point_a = self.points.get(point_id=point_a_id)
        point_b = self.points.get(point_id=point_b_id)

        if weight is None:
            weight = point_a.distance_to(other=point_b)

        min_id, max_id = normalize_pair(point_a_id=point_a_id, point_b_id=point_b_id)
        record = {
            RecordFields.POINT_A_ID: min_id,
            RecordFields.POINT_B_ID: max_id,
            RecordFields.WEIGHT: weight,
        }
        raise_if_invalid(validate_path_edge(fields=record))
        record[RecordFields.WEIGHT] = float(weight)

        existing = self.find_between(point_a_id=min_id, point_b_id=max_id)
        if existing is not None:
            raise DuplicateEdgeError(point_a_id=min_id, point_b_id=max_id, existing_edge_id=existing.id)

        record = stamp_created(fields=record, creator_id=creator_id, clock=self.clock)
        edge_id = self.store.insert_if_absent(
            collection=self.collection,
            record=record,
            match={RecordFields.POINT_A_ID: min_id, RecordFields.POINT_B_ID: max_id},
        )
        if edge_id is None:
            # Lost a race against a concurrent create for the same pair
            raise DuplicateEdgeError(point_a_id=min_id, point_b_id=max_id)

        logger.info(f"Created path edge {edge_id}: {min_id}-{max_id}, weight={record[RecordFields.WEIGHT]:.1f}m")
        return PathEdge.from_record({**record, RecordFields.ID: edge_id})

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, edge_id: str) -> PathEdge:
        """Fetch an edge.

        Raises:
            NotFoundError: If no edge has this id.
        """
        record = self.store.get_by_id(collection=self.collection, record_id=edge_id)
        if record is None:
            raise NotFoundError(kind=self.KIND, id=edge_id)
        return PathEdge.from_record(record)

    def find_between(self, point_a_id: str, point_b_id: str) -> Optional[PathEdge]:
        """Edge connecting two points in either order, or None."""
        min_id, max_id = normalize_pair(point_a_id=point_a_id, point_b_id=point_b_id)
        for record in self.store.query_equals(collection=self.collection, field=RecordFields.POINT_A_ID, value=min_id):
            if record.get(RecordFields.POINT_B_ID) == max_id:
                return PathEdge.from_record(record)
        return None

    def list(self, point_id: Optional[str] = None) -> list[PathEdge]:
        """All edges, or only those touching point_id.

        The store has no OR query, so edges touching a point are the union of
        two equality queries, deduplicated by edge id.
        """
        if point_id is None:
            return [PathEdge.from_record(r) for r in self.store.scan_all(collection=self.collection)]

        by_id: dict[str, PathEdge] = {}
        for field in (RecordFields.POINT_A_ID, RecordFields.POINT_B_ID):
            for record in self.store.query_equals(collection=self.collection, field=field, value=point_id):
                edge = PathEdge.from_record(record)
                by_id[edge.id] = edge
        return list(by_id.values())

    def neighbors(self, point_id: str) -> list[NeighborInfo]:
        """Neighbors of a point with the weight and id of the connecting edge."""
        return [
            NeighborInfo(
                neighbor_id=edge.other_endpoint(point_id=point_id),
                weight=edge.weight,
                edge_id=edge.id,
            )
            for edge in self.list(point_id=point_id)
        ]

    # =========================================================================
    # Update / Delete
    # =========================================================================

    def update(self, edge_id: str, fields: dict[str, Any]) -> PathEdge:
        """Merge fields onto an existing edge and re-validate.

        Changed endpoints must exist. The merged pair is re-normalized and must
        not collide with another edge. Weight is not recomputed when endpoints
        change; pass a new weight explicitly if needed.

        Raises:
            NotFoundError: If the edge or a new endpoint does not exist.
            ValidationError: Self-loop, malformed fields or non-positive weight.
            DuplicateEdgeError: If the new pair is already connected by another edge.
        """
        existing = self.get(edge_id=edge_id)
        raise_if_invalid(validate_unknown_fields(fields=fields, allowed=RecordFields.EDGE_UPDATABLE))

        updates = {k: v for k, v in fields.items() if k in RecordFields.EDGE_UPDATABLE and v is not None}
        merged = {
            RecordFields.POINT_A_ID: existing.point_a_id,
            RecordFields.POINT_B_ID: existing.point_b_id,
            RecordFields.WEIGHT: existing.weight,
            **updates,
        }
        raise_if_invalid(validate_edge_ids(fields=merged))

        for field in (RecordFields.POINT_A_ID, RecordFields.POINT_B_ID):
            if merged[field] not in existing.pair:
                self.points.get(point_id=merged[field])

        raise_if_invalid(validate_path_edge(fields=merged))

        min_id, max_id = normalize_pair(
            point_a_id=merged[RecordFields.POINT_A_ID],
            point_b_id=merged[RecordFields.POINT_B_ID],
        )
        merged[RecordFields.POINT_A_ID] = min_id
        merged[RecordFields.POINT_B_ID] = max_id
        merged[RecordFields.WEIGHT] = float(merged[RecordFields.WEIGHT])

        merged = stamp_updated(fields=merged, clock=self.clock)
        if (min_id, max_id) == existing.pair:
            self.store.merge_update(collection=self.collection, record_id=edge_id, fields=merged)
        else:
            clash = self.find_between(point_a_id=min_id, point_b_id=max_id)
            if clash is not None and clash.id != edge_id:
                raise DuplicateEdgeError(point_a_id=min_id, point_b_id=max_id, existing_edge_id=clash.id)
            applied = self.store.merge_update_if_absent(
                collection=self.collection,
                record_id=edge_id,
                fields=merged,
                match={RecordFields.POINT_A_ID: min_id, RecordFields.POINT_B_ID: max_id},
            )
            if not applied:
                # Lost a race against a concurrent write for the same pair
                raise DuplicateEdgeError(point_a_id=min_id, point_b_id=max_id)
        logger.info(f"Updated path edge {edge_id}: {min_id}-{max_id}, weight={merged[RecordFields.WEIGHT]:.1f}m")
        return PathEdge.from_record(
            {
                **merged,
                RecordFields.ID: edge_id,
                RecordFields.CREATED_BY: existing.created_by,
                RecordFields.CREATED_AT: existing.created_at,
            }
        )

    def delete(self, edge_id: str) -> DeleteResult:
        """Remove an edge unconditionally."""
        self.store.delete(collection=self.collection, record_id=edge_id)
        logger.info(f"Deleted path edge {edge_id}")
        return DeleteResult(id=edge_id)
