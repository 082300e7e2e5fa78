"""PathPoint - A geolocated vertex of the waypoint graph.

A PathPoint is a stored record with a store-assigned id and WGS84 coordinates.
It has no relationship to edges at the vertex level; a point may have none.

Used by:
- PathPointStore (CRUD and bounding-box listing)
- PathEdgeStore (endpoint existence and auto-computed weights)
- Graph (vertex list and waypoint coordinates)
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional

from pathgraph.constants import RecordFields
from pathgraph.core.geo_calculator import GeoCalculator


@dataclass
class PathPoint:
    """A vertex with GPS coordinates.

    Attributes:
        id: Store-assigned identifier (opaque, ordered string)
        latitude: Latitude in decimal degrees, [-90, 90]
        longitude: Longitude in decimal degrees, [-180, 180]
        created_by: Principal id of the creator, if known
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 timestamp of the last write

    Example:
        point = PathPoint(id="P000001", latitude=40.7128, longitude=-74.0060)
    """

    id: str
    latitude: float
    longitude: float
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.latitude, self.longitude)

    def distance_to(self, other: "PathPoint") -> float:
        """Great-circle distance to another point in meters."""
        return GeoCalculator.haversine_distance_m(
            lat1=self.latitude,
            lon1=self.longitude,
            lat2=other.latitude,
            lon2=other.longitude,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return asdict(self)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "PathPoint":
        """Create PathPoint from a stored record."""
        return cls(
            id=record[RecordFields.ID],
            latitude=float(record[RecordFields.LATITUDE]),
            longitude=float(record[RecordFields.LONGITUDE]),
            created_by=record.get(RecordFields.CREATED_BY),
            created_at=record.get(RecordFields.CREATED_AT),
            updated_at=record.get(RecordFields.UPDATED_AT),
        )

    def __repr__(self) -> str:
        return f"PathPoint({self.id}, lat={self.latitude:.5f}, lon={self.longitude:.5f})"
