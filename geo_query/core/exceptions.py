"""Error types shared by shape construction and query evaluation.

``GeoError`` is the root. Two branches hang off it:

- ``ValidationError`` for shapes that cannot exist (a coordinate out of
  range, a negative distance, a short or open ring). Failed
  ``Construction`` results carry one of these.
- ``QueryError`` for queries the evaluator refuses (stored data in the
  wrong shape, a region with bad geometry).

Callers get the error back and decide what to do; nothing here aborts
the process. ``to_error_dict()`` gives a flat payload for logs.
"""

from __future__ import annotations


class GeoError(Exception):
    """Root of the geo_query error tree.

    Attributes:
        message: What went wrong, for people.
        stage: ``"construction"``, ``"geo_within"`` or ``"config"``.
        code: Stable identifier such as ``"GEOMETRY_INVALID"``.
    """

    default_stage: str = ""
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, QueryError):
            return "query"
        return "internal"

    def to_error_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


class ValidationError(GeoError):
    """A shape was given values it cannot hold."""

    default_stage = "construction"


class QueryError(GeoError):
    """The evaluator rejected a geoWithin query."""

    default_stage = "geo_within"
