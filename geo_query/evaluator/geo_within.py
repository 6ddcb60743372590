"""Reference ``geoWithin`` evaluator.

Filters stored records to those whose embedded point location lies
inside a query shape. The evaluator owns the expensive half of shape
validation (ring simplicity, hole containment) and the structural checks
that depend on how locations are stored.

Record handling:
- A missing location excludes the record.
- A location whose discriminator is not the configured point type
  (``"Point"``) is excluded silently. It is not an error.
- A location whose coordinates are not a ``[longitude, latitude]`` pair
  is excluded.

Containment:
- Boxes and polygons are planar in longitude/latitude (shapely
  ``covers``, or ``contains`` when boundaries are excluded).
- Circles compare the geodesic distance on a sphere of radius
  ``EARTH_RADIUS_M`` (pyproj) against the radius in radians.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeVar

from geo_query.core.config import EvaluatorConfig
from geo_query.core.constants import EARTH_RADIUS_M
from geo_query.evaluator._validation import lon_lat, resolve_location_class, validate_region
from geo_query.models.canonical import describe_canonical
from geo_query.models.shapes import to_canonical

if TYPE_CHECKING:
    from geo_query.models.canonical import CanonicalShape
    from geo_query.models.shapes import GeoShape
    from geo_query.store.records import StoredObject

logger = logging.getLogger("geo_query.evaluator")

R = TypeVar("R", bound="StoredObject")

PointMatcher = Callable[[float, float], bool]


def geo_within(
    model: type[R],
    records: Iterable[R],
    key_path: str,
    shape: GeoShape,
    *,
    config: EvaluatorConfig | None = None,
) -> list[R]:
    """Return the records whose location at ``key_path`` lies within ``shape``.

    Args:
        model: Class of the queried records.
        records: Records to filter, returned in input order.
        key_path: Dotted path from ``model`` to the embedded location.
        shape: Query shape.
        config: Evaluator settings (defaults to ``EvaluatorConfig()``).

    Raises:
        SchemaMismatchError: If ``key_path`` does not lead to an embedded
            location class with ``type`` and ``coordinates`` fields.
        InvalidRegionError: If the shape fails geometric validation.
    """
    config = config or EvaluatorConfig()
    canonical = to_canonical(shape)
    shape_text = describe_canonical(canonical)

    resolve_location_class(model, key_path, shape_text, config)
    validate_region(canonical, shape_text)
    matches_point = build_matcher(canonical, config)

    parts = key_path.split(".")
    matched: list[R] = []
    for record in records:
        point = _stored_point(record, parts, config)
        if point is not None and matches_point(*point):
            matched.append(record)

    logger.info(
        "GEOWITHIN evaluated | model=%s | path=%s | shape=%s | matched=%d",
        model.__name__,
        key_path,
        shape_text,
        len(matched),
    )
    return matched


def build_matcher(shape: CanonicalShape, config: EvaluatorConfig) -> PointMatcher:
    """Prepare a ``(longitude, latitude) -> bool`` test for a canonical shape.

    Raises:
        ValueError: If the ``type`` tag is unknown.
    """
    if shape["type"] == "circle":
        return _circle_matcher(
            shape["center"]["longitude"], shape["center"]["latitude"], shape["radians"]
        )

    from shapely.geometry import Point, Polygon, box

    if shape["type"] == "box":
        region = box(
            shape["bottom_left"]["longitude"],
            shape["bottom_left"]["latitude"],
            shape["top_right"]["longitude"],
            shape["top_right"]["latitude"],
        )
    elif shape["type"] == "polygon":
        region = Polygon(
            lon_lat(shape["outer_ring"]),
            holes=[lon_lat(hole) for hole in shape["holes"] or []],
        )
    else:
        msg = f"Unknown canonical shape type {shape['type']!r}"
        raise ValueError(msg)

    test = region.covers if config.boundary_inclusive else region.contains
    return lambda lon, lat: bool(test(Point(lon, lat)))


def _circle_matcher(center_lon: float, center_lat: float, radians: float) -> PointMatcher:
    from pyproj import Geod

    geod = Geod(a=EARTH_RADIUS_M, b=EARTH_RADIUS_M)
    limit_m = radians * EARTH_RADIUS_M

    def matches(lon: float, lat: float) -> bool:
        _fwd, _back, distance_m = geod.inv(center_lon, center_lat, lon, lat)
        return distance_m <= limit_m

    return matches


def _stored_point(
    record: StoredObject, parts: list[str], config: EvaluatorConfig
) -> tuple[float, float] | None:
    """Return the record's ``(longitude, latitude)``, or ``None`` to exclude it."""
    value: object = record
    for part in parts:
        value = getattr(value, part, None)
        if value is None:
            return None

    point_type = getattr(value, "type", None)
    if point_type != config.point_type:
        logger.debug("Excluding record with location type %r", point_type)
        return None

    coordinates = getattr(value, "coordinates", None)
    if not coordinates or len(coordinates) != 2:
        logger.debug("Excluding record with malformed coordinates %r", coordinates)
        return None

    lon, lat = coordinates
    return (lon, lat)
