"""PathPointStore - CRUD over path point (vertex) records.

Enforces coordinate bounds on every write. Deleting a point does not cascade
to edges; edges that referenced it become dangling and GraphBuilder keeps
only their surviving side.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pathgraph.constants import RecordFields, StoreConfig
from pathgraph.core.geo_calculator import BoundingBox, GeoCalculator
from pathgraph.errors import NotFoundError
from pathgraph.model.graph import DeleteResult
from pathgraph.model.path_point import PathPoint
from pathgraph.model.timestamps import Clock, stamp_created, stamp_updated, utc_now
from pathgraph.model.validation import (
    raise_if_invalid,
    validate_bounding_box,
    validate_path_point,
    validate_unknown_fields,
)
from pathgraph.store.record_store import RecordStore

logger = logging.getLogger(__name__)


class PathPointStore:
    """Vertex records on top of a RecordStore collection.

    Example:
        points = PathPointStore(store=record_store)
        point = points.create(fields={"latitude": 40.71, "longitude": -74.0}, creator_id="u1")
    """

    KIND = "path point"

    def __init__(
        self,
        store: RecordStore,
        collection: str = StoreConfig.POINTS_COLLECTION,
        clock: Clock = utc_now,
    ) -> None:
        self.store = store
        self.collection = collection
        self.clock = clock

    def create(self, fields: dict[str, Any], creator_id: Optional[str] = None) -> PathPoint:
        """Validate and persist a new point.

        Args:
            fields: Must contain latitude and longitude
            creator_id: Principal creating the point

        Raises:
            ValidationError: Missing, non-numeric or out-of-range coordinates.
        """
        record = {
            RecordFields.LATITUDE: fields.get(RecordFields.LATITUDE),
            RecordFields.LONGITUDE: fields.get(RecordFields.LONGITUDE),
        }
        raise_if_invalid(validate_path_point(fields=record))

        record = stamp_created(fields=record, creator_id=creator_id, clock=self.clock)
        point_id = self.store.insert(collection=self.collection, record=record)
        logger.info(f"Created path point {point_id} at ({record[RecordFields.LATITUDE]}, {record[RecordFields.LONGITUDE]})")
        return PathPoint.from_record({**record, RecordFields.ID: point_id})

    def get(self, point_id: str) -> PathPoint:
        """Fetch a point.

        Raises:
            NotFoundError: If no point has this id.
        """
        record = self.store.get_by_id(collection=self.collection, record_id=point_id)
        if record is None:
            raise NotFoundError(kind=self.KIND, id=point_id)
        return PathPoint.from_record(record)

    def exists(self, point_id: str) -> bool:
        return self.store.get_by_id(collection=self.collection, record_id=point_id) is not None

    def list(self, bbox: Optional[BoundingBox] = None) -> list[PathPoint]:
        """All points, optionally filtered by (min_lat, min_lng, max_lat, max_lng).

        The filter runs after a full collection scan; bounds are inclusive.
        """
        if bbox is not None:
            raise_if_invalid(validate_bounding_box(bbox=bbox))

        points = [PathPoint.from_record(r) for r in self.store.scan_all(collection=self.collection)]
        if bbox is None:
            return points
        return [p for p in points if GeoCalculator.in_bounding_box(lat=p.latitude, lon=p.longitude, bbox=bbox)]

    def update(self, point_id: str, fields: dict[str, Any]) -> PathPoint:
        """Merge fields onto an existing point and re-validate.

        created_by and created_at of the stored record are always kept. None
        values leave the stored field unchanged.

        Raises:
            NotFoundError: If no point has this id.
            ValidationError: If the merged record is invalid.
        """
        existing = self.get(point_id=point_id)
        raise_if_invalid(validate_unknown_fields(fields=fields, allowed=RecordFields.POINT_UPDATABLE))

        updates = {k: v for k, v in fields.items() if k in RecordFields.POINT_UPDATABLE and v is not None}
        merged = {
            RecordFields.LATITUDE: existing.latitude,
            RecordFields.LONGITUDE: existing.longitude,
            **updates,
        }
        raise_if_invalid(validate_path_point(fields=merged))

        merged = stamp_updated(fields=merged, clock=self.clock)
        self.store.merge_update(collection=self.collection, record_id=point_id, fields=merged)
        logger.info(f"Updated path point {point_id}: {sorted(updates)}")
        return PathPoint.from_record(
            {
                **merged,
                RecordFields.ID: point_id,
                RecordFields.CREATED_BY: existing.created_by,
                RecordFields.CREATED_AT: existing.created_at,
            }
        )

    def delete(self, point_id: str) -> DeleteResult:
        """Remove a point unconditionally. Edges touching it are left in place."""
        self.store.delete(collection=self.collection, record_id=point_id)
        logger.info(f"Deleted path point {point_id}")
        return DeleteResult(id=point_id)
