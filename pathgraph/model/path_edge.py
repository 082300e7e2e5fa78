"""PathEdge - An undirected, weighted connection between two path points.

Edges are stored normalized: point_a_id < point_b_id (lexicographic), so the
same pair always produces the same stored record regardless of the order the
caller named the endpoints in. Weight is in meters.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional

from pathgraph.constants import RecordFields


def normalize_pair(point_a_id: str, point_b_id: str) -> tuple[str, str]:
    """Order two point ids so the smaller one comes first."""
    if point_a_id <= point_b_id:
        return point_a_id, point_b_id
    return point_b_id, point_a_id


@dataclass
class PathEdge:
    """An undirected edge between two path points.

    Attributes:
        id: Store-assigned identifier
        point_a_id: Smaller endpoint id of the normalized pair
        point_b_id: Larger endpoint id of the normalized pair
        weight: Positive edge weight in meters
        created_by: Principal id of the creator, if known
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 timestamp of the last write
    """

    id: str
    point_a_id: str
    point_b_id: str
    weight: float
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def pair(self) -> tuple[str, str]:
        """Normalized (point_a_id, point_b_id) pair."""
        return (self.point_a_id, self.point_b_id)

    def touches(self, point_id: str) -> bool:
        """True if point_id is one of the endpoints."""
        return point_id in (self.point_a_id, self.point_b_id)

    def other_endpoint(self, point_id: str) -> str:
        """Return the endpoint that is not point_id.

        Raises:
            ValueError: If point_id is not an endpoint of this edge.
        """
        if point_id == self.point_a_id:
            return self.point_b_id
        if point_id == self.point_b_id:
            return self.point_a_id
        raise ValueError(f"Point {point_id} is not an endpoint of edge {self.id}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return asdict(self)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "PathEdge":
        """Create PathEdge from a stored record."""
        return cls(
            id=record[RecordFields.ID],
            point_a_id=record[RecordFields.POINT_A_ID],
            point_b_id=record[RecordFields.POINT_B_ID],
            weight=float(record[RecordFields.WEIGHT]),
            created_by=record.get(RecordFields.CREATED_BY),
            created_at=record.get(RecordFields.CREATED_AT),
            updated_at=record.get(RecordFields.UPDATED_AT),
        )

    def __repr__(self) -> str:
        return f"PathEdge({self.id}, {self.point_a_id}-{self.point_b_id}, {self.weight:.1f}m)"
