"""Configuration constants for PathGraph.

All configurable parameters are centralized here.

Classes:
    GeoConfig: Earth model and coordinate bounds
    StoreConfig: Collection names, id generation, default file store location
    RecordFields: Field names used in stored records
"""

from pathlib import Path

# Package root directory (where pathgraph/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of pathgraph/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Data directory for file-backed stores (not shipped with package)
DATA_DIR = PROJECT_ROOT / "data"


class GeoConfig:
    """Earth model and valid coordinate ranges."""

    # WGS84 spherical approximation
    EARTH_RADIUS_M = 6_371_000

    MIN_LATITUDE = -90.0
    MAX_LATITUDE = 90.0
    MIN_LONGITUDE = -180.0
    MAX_LONGITUDE = 180.0


class StoreConfig:
    """Record store collections and id generation."""

    POINTS_COLLECTION = "pathPoints"
    EDGES_COLLECTION = "pathEdges"

    # Prefix per collection for store-assigned ids ("P000001", "E000001", ...)
    ID_PREFIXES = {
        POINTS_COLLECTION: "P",
        EDGES_COLLECTION: "E",
    }
    DEFAULT_ID_PREFIX = "R"
    # Zero padding keeps lexicographic order equal to creation order
    ID_DIGITS = 6

    JSON_STORE_PATH = DATA_DIR / "pathgraph_store.json"
    JSON_INDENT = 2


class RecordFields:
    """Field names of stored path point and path edge records."""

    ID = "id"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    POINT_A_ID = "point_a_id"
    POINT_B_ID = "point_b_id"
    WEIGHT = "weight"
    CREATED_BY = "created_by"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    # Set once at creation, never overwritten by partial updates
    PROTECTED = (ID, CREATED_BY, CREATED_AT, UPDATED_AT)
    POINT_UPDATABLE = (LATITUDE, LONGITUDE)
    EDGE_UPDATABLE = (POINT_A_ID, POINT_B_ID, WEIGHT)
