"""Validation helpers for geoWithin queries.

Responsibilities:
- Resolving the queried key path to an embedded location class
- Checking the location class has the fields a stored point needs
- Shapely geometry checks on polygon regions (ring simplicity, hole
  containment, hole overlap)
"""

from __future__ import annotations

import logging
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin

from geo_query.core.exceptions import QueryError
from geo_query.store.records import StoredObject

if TYPE_CHECKING:
    from geo_query.core.config import EvaluatorConfig
    from geo_query.models.canonical import CanonicalPoint, CanonicalShape

logger = logging.getLogger("geo_query.evaluator")

LOCATION_FIELDS = frozenset({"type", "coordinates"})


# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class SchemaMismatchError(QueryError):
    """Raised when the queried property cannot hold a stored point."""

    default_code = "GEO_SCHEMA_MISMATCH"


class InvalidRegionError(QueryError):
    """Raised when a query region fails geometric validation."""

    default_code = "GEO_REGION_INVALID"


# ---------------------------------------------------------------------------
# Key path / schema validation
# ---------------------------------------------------------------------------


def resolve_location_class(
    model: type[StoredObject],
    key_path: str,
    shape_text: str,
    config: EvaluatorConfig,
) -> type[StoredObject]:
    """Follow ``key_path`` from ``model`` to the class holding the point.

    Raises:
        SchemaMismatchError: If the path is too deep, does not follow
            links, ends at a top-level class, or ends at a class without
            ``type`` and ``coordinates`` fields.
    """
    parts = key_path.split(".")
    if len(parts) > config.max_link_depth:
        msg = (
            f"Query '{key_path} GEOWITHIN {shape_text}' follows {len(parts)} links, "
            f"but a location can be at most {config.max_link_depth} link(s) "
            f"from the queried object"
        )
        raise SchemaMismatchError(msg)

    current = model
    for part in parts:
        current = _link_target(current, part)

    if not current.embedded:
        msg = (
            "A GEOWITHIN query can only operate on a link to an embedded class "
            f"but '{current.__name__}' is at the top level"
        )
        raise SchemaMismatchError(msg)

    if not LOCATION_FIELDS <= set(current.model_fields):
        msg = (
            f"Query '{key_path} GEOWITHIN {shape_text}' links to data in the wrong "
            "format for a geoWithin query"
        )
        raise SchemaMismatchError(msg)

    return current


def _link_target(model: type[StoredObject], name: str) -> type[StoredObject]:
    info = model.model_fields.get(name)
    if info is None:
        msg = f"Property '{name}' not found on '{model.__name__}'"
        raise SchemaMismatchError(msg)

    annotation = _strip_optional(info.annotation)
    if (
        get_origin(annotation) is None
        and isinstance(annotation, type)
        and issubclass(annotation, StoredObject)
    ):
        return annotation

    # list[Location], dict[str, Location] and the like are not single links.
    msg = f"Property '{model.__name__}.{name}' is not a link to an object"
    raise SchemaMismatchError(msg)


def _strip_optional(annotation: Any) -> Any:
    """Unwrap ``X | None`` to ``X``; leave every other annotation alone."""
    if get_origin(annotation) not in (Union, UnionType):
        return annotation
    members = [arg for arg in get_args(annotation) if arg is not NoneType]
    if len(members) == 1:
        return members[0]
    return annotation


# ---------------------------------------------------------------------------
# Region validation
# ---------------------------------------------------------------------------


def validate_region(shape: CanonicalShape, shape_text: str) -> None:
    """Validate the geometry of a polygon region using shapely.

    Boxes and circles have no geometry to check beyond construction.

    Raises:
        InvalidRegionError: If a ring is not simple, a hole is not
            strictly inside the outer ring, or two holes overlap.
    """
    if shape["type"] != "polygon":
        return

    reason = _polygon_problem(shape["outer_ring"], shape["holes"] or [])
    if reason:
        logger.warning("Rejected GEOWITHIN region %s: %s", shape_text, reason)
        msg = f"Invalid region in GEOWITHIN query for parameter '{shape_text}': '{reason}'"
        raise InvalidRegionError(msg)


def _polygon_problem(
    outer_ring: list[CanonicalPoint], holes: list[list[CanonicalPoint]]
) -> str:
    from shapely.geometry import Polygon
    from shapely.validation import explain_validity

    rings = [Polygon(lon_lat(ring)) for ring in (outer_ring, *holes)]

    for index, ring in enumerate(rings):
        if not ring.is_valid:
            return f"Ring {index} is not valid: '{explain_validity(ring)}'"

    exterior = rings[0]
    for index, hole in enumerate(rings[1:], start=1):
        if not exterior.contains_properly(hole):
            return (
                f"Secondary ring {index} not contained by first exterior ring - "
                "secondary rings must be holes in the first ring"
            )

    for index, hole in enumerate(rings[1:], start=1):
        for other_index, other in enumerate(rings[index + 1 :], start=index + 1):
            # Interiors intersect: the holes share area, not just an edge.
            if hole.relate_pattern(other, "T********"):
                return f"Secondary rings {index} and {other_index} overlap"

    return ""


def lon_lat(ring: list[CanonicalPoint]) -> list[tuple[float, float]]:
    """Convert canonical points to shapely ``(x, y)`` order."""
    return [(point["longitude"], point["latitude"]) for point in ring]
