"""Record timestamping, kept apart from validation.

created_at is stamped once; updated_at on every write. Timestamps are
ISO-8601 strings in UTC.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pathgraph.constants import RecordFields

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def stamp_created(fields: dict[str, Any], creator_id: Optional[str], clock: Clock = utc_now) -> dict[str, Any]:
    """Return a copy of fields with created_by, created_at and updated_at set."""
    now = clock().isoformat()
    return {
        **fields,
        RecordFields.CREATED_BY: creator_id,
        RecordFields.CREATED_AT: now,
        RecordFields.UPDATED_AT: now,
    }


def stamp_updated(fields: dict[str, Any], clock: Clock = utc_now) -> dict[str, Any]:
    """Return a copy of fields with a fresh updated_at."""
    return {**fields, RecordFields.UPDATED_AT: clock().isoformat()}
