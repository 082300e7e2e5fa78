"""Error kinds raised by PathGraph stores and algorithms.

- ValidationError: caller-fixable input problem (bad coordinate, weight, self-loop)
- NotFoundError: a vertex, edge or record does not exist
- DuplicateEdgeError: an edge already connects the two points
- StoreError: the record store failed; propagated as-is, never retried

"No path between two points" is not an error; shortest_path reports it
through ShortestPathResult.found.
"""

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from pathgraph.model.validation import ValidationFailure


class PathGraphError(Exception):
    """Base class for all PathGraph errors."""


class ValidationError(PathGraphError, ValueError):
    """Input failed validation.

    Attributes:
        failures: Structured failures produced by the validators
    """

    def __init__(self, failures: Sequence["ValidationFailure"]) -> None:
        self.failures = list(failures)
        super().__init__("; ".join(str(f) for f in self.failures))

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        """Build an error carrying one failure."""
        from pathgraph.model.validation import ValidationFailure

        return cls(failures=[ValidationFailure(field=field, message=message)])


class NotFoundError(PathGraphError, LookupError):
    """A requested resource does not exist.

    Attributes:
        kind: Resource kind ("path point", "path edge", ...)
        id: Identifier that was looked up
    """

    def __init__(self, kind: str, id: str) -> None:
        self.kind = kind
        self.id = id
        super().__init__(f"{kind.capitalize()} not found: {id}")


class DuplicateEdgeError(PathGraphError):
    """An edge already exists for the normalized point pair.

    Attributes:
        point_a_id: Smaller endpoint id of the pair
        point_b_id: Larger endpoint id of the pair
        existing_edge_id: Id of the edge already stored, if known
    """

    def __init__(self, point_a_id: str, point_b_id: str, existing_edge_id: Optional[str] = None) -> None:
        self.point_a_id = point_a_id
        self.point_b_id = point_b_id
        self.existing_edge_id = existing_edge_id
        super().__init__(f"Edge already exists between {point_a_id} and {point_b_id}")


class StoreError(PathGraphError):
    """The record store failed to read or write."""
