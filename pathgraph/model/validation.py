"""Validation - Pure input validation for path points, path edges and queries.

Validators never raise. They return a list of ValidationFailure:
- empty list if valid
- one entry per problem otherwise (caller decides how to surface them)

Stores turn failures into ValidationError via raise_if_invalid().

No coercion happens here: numbers must already be int or float (bool is
rejected), ids must already be non-empty strings.
"""

from dataclasses import dataclass
from math import isfinite
from typing import Any, Iterable, Mapping, Optional

from pathgraph.constants import GeoConfig, RecordFields
from pathgraph.errors import ValidationError


@dataclass(frozen=True)
class ValidationFailure:
    """A single validation problem.

    Attributes:
        field: Name of the offending input field
        message: Human-readable reason
    """

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def is_number(value: Any) -> bool:
    """True for finite int/float values (bool excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and isfinite(value)


def _validate_number_in_range(
    fields: Mapping[str, Any],
    field: str,
    low: float,
    high: float,
) -> Optional[ValidationFailure]:
    if field not in fields or fields[field] is None:
        return ValidationFailure(field=field, message="is required")
    value = fields[field]
    if not is_number(value):
        return ValidationFailure(field=field, message=f"must be a finite number, got {value!r}")
    if not low <= value <= high:
        return ValidationFailure(field=field, message=f"must be between {low:g} and {high:g}, got {value}")
    return None


def _validate_id(fields: Mapping[str, Any], field: str) -> Optional[ValidationFailure]:
    value = fields.get(field)
    if not isinstance(value, str) or not value:
        return ValidationFailure(field=field, message="must be a non-empty string id")
    return None


def validate_unknown_fields(fields: Mapping[str, Any], allowed: Iterable[str]) -> list[ValidationFailure]:
    """Reject update fields that are neither updatable nor protected."""
    accepted = set(allowed) | set(RecordFields.PROTECTED)
    return [ValidationFailure(field=key, message="is not a recognized field") for key in fields if key not in accepted]


def validate_path_point(fields: Mapping[str, Any]) -> list[ValidationFailure]:
    """Validate latitude/longitude of a complete path point record.

    Returns:
        Empty list if latitude is in [-90, 90] and longitude in [-180, 180].
    """
    failures = [
        _validate_number_in_range(
            fields=fields,
            field=RecordFields.LATITUDE,
            low=GeoConfig.MIN_LATITUDE,
            high=GeoConfig.MAX_LATITUDE,
        ),
        _validate_number_in_range(
            fields=fields,
            field=RecordFields.LONGITUDE,
            low=GeoConfig.MIN_LONGITUDE,
            high=GeoConfig.MAX_LONGITUDE,
        ),
    ]
    return [f for f in failures if f is not None]


def validate_edge_ids(fields: Mapping[str, Any]) -> list[ValidationFailure]:
    """Check that both endpoint ids are non-empty strings."""
    failures = (
        _validate_id(fields=fields, field=RecordFields.POINT_A_ID),
        _validate_id(fields=fields, field=RecordFields.POINT_B_ID),
    )
    return [f for f in failures if f is not None]


def validate_path_edge(fields: Mapping[str, Any]) -> list[ValidationFailure]:
    """Validate a complete path edge record.

    Checks both endpoint ids, that they differ (no self-loops), and that the
    weight is a positive finite number. The self-loop check comes first so a
    same-point edge is reported as such rather than as a zero weight.
    """
    failures = validate_edge_ids(fields=fields)
    if failures:
        return failures

    if fields[RecordFields.POINT_A_ID] == fields[RecordFields.POINT_B_ID]:
        return [ValidationFailure(field=RecordFields.POINT_B_ID, message="point_a_id and point_b_id must be different")]

    weight = fields.get(RecordFields.WEIGHT)
    if not is_number(weight):
        failures.append(ValidationFailure(field=RecordFields.WEIGHT, message=f"must be a finite number, got {weight!r}"))
    elif weight <= 0:
        failures.append(ValidationFailure(field=RecordFields.WEIGHT, message=f"must be a positive number, got {weight}"))
    return failures


def validate_bounding_box(bbox: Any) -> list[ValidationFailure]:
    """Validate a (min_lat, min_lng, max_lat, max_lng) filter."""
    if not isinstance(bbox, (tuple, list)) or len(bbox) != 4:
        return [ValidationFailure(field="bbox", message="must be (min_lat, min_lng, max_lat, max_lng)")]
    if not all(is_number(v) for v in bbox):
        return [ValidationFailure(field="bbox", message=f"must contain four finite numbers, got {bbox!r}")]
    return []


def validate_max_distance(max_distance: Any) -> list[ValidationFailure]:
    """Validate the distance budget of a proximity query."""
    if not is_number(max_distance):
        return [ValidationFailure(field="max_distance", message=f"must be a finite number, got {max_distance!r}")]
    if max_distance < 0:
        return [ValidationFailure(field="max_distance", message=f"must not be negative, got {max_distance}")]
    return []


def raise_if_invalid(failures: list[ValidationFailure]) -> None:
    """Raise ValidationError when any failure was reported."""
    if failures:
        raise ValidationError(failures=failures)
