"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for the waypoint graph:
- Distance calculation (Haversine formula), used for auto-computed edge weights
- Bounding box containment for point listing
- Polyline length along a sequence of coordinates

All calculations use WGS84 spherical Earth approximation (R = 6,371 km).
"""

from math import atan2, cos, radians, sin, sqrt
from typing import Iterable

from pathgraph.constants import GeoConfig

# Earth's radius in meters (WGS84 spherical approximation)
EARTH_RADIUS_M = GeoConfig.EARTH_RADIUS_M

# (min_lat, min_lng, max_lat, max_lng)
BoundingBox = tuple[float, float, float, float]


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    All methods use WGS84 spherical Earth model (R = 6,371 km).
    Coordinates are in decimal degrees (WGS84).
    Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters. 0 for identical coordinates.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        # Rounding can push a marginally above 1 for antipodal points
        a = min(1.0, a)
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def in_bounding_box(lat: float, lon: float, bbox: BoundingBox) -> bool:
        """Check whether a coordinate lies inside a bounding box (inclusive).

        Args:
            lat: Latitude (decimal degrees)
            lon: Longitude (decimal degrees)
            bbox: (min_lat, min_lng, max_lat, max_lng)
        """
        min_lat, min_lng, max_lat, max_lng = bbox
        return min_lat <= lat <= max_lat and min_lng <= lon <= max_lng

    @staticmethod
    def polyline_length_m(coords: Iterable[tuple[float, float]]) -> float:
        """Sum of haversine distances between consecutive (lat, lon) pairs.

        Returns:
            Total length in meters, 0 for fewer than two coordinates.
        """
        total = 0.0
        previous = None
        for lat, lon in coords:
            if previous is not None:
                total += GeoCalculator.haversine_distance_m(
                    lat1=previous[0],
                    lon1=previous[1],
                    lat2=lat,
                    lon2=lon,
                )
            previous = (lat, lon)
        return total
