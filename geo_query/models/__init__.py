"""Data models.

Defines the values callers build queries from:
- GeoPoint: Validated latitude/longitude pair
- Distance: Non-negative distance held in radians of arc
- GeoBox, GeoPolygon, GeoCircle: The query shapes (``GeoShape``)
- Construction: Success-or-reason result of every fallible constructor
- Canonical records: Evaluator-facing ``TypedDict`` contracts
"""

from geo_query.models.canonical import (
    CanonicalBox,
    CanonicalCircle,
    CanonicalPoint,
    CanonicalPolygon,
    CanonicalShape,
    describe_canonical,
)
from geo_query.models.distance import Distance
from geo_query.models.point import GeoPoint
from geo_query.models.result import Construction, InvalidGeometryError, attempt
from geo_query.models.shapes import GeoBox, GeoCircle, GeoPolygon, GeoShape, to_canonical

__all__ = [
    "CanonicalBox",
    "CanonicalCircle",
    "CanonicalPoint",
    "CanonicalPolygon",
    "CanonicalShape",
    "Construction",
    "Distance",
    "GeoBox",
    "GeoCircle",
    "GeoPoint",
    "GeoPolygon",
    "GeoShape",
    "InvalidGeometryError",
    "attempt",
    "describe_canonical",
    "to_canonical",
]
