"""Query shapes: box, polygon and circle.

The three shapes form a closed union, ``GeoShape``. Each one validates
its cheap structural invariants at construction and converts to a
canonical record with ``to_canonical()``.

Validation is split in two phases:
- Here: coordinate ranges, ring point count and closure, radius sign.
- In the evaluator: hole containment and ring simplicity. Those need
  real geometry and are reported as query failures.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from geo_query.core.constants import MIN_RING_POINTS
from geo_query.models.canonical import (
    CanonicalBox,
    CanonicalCircle,
    CanonicalPoint,
    CanonicalPolygon,
    CanonicalShape,
)
from geo_query.models.point import GeoPoint, check_coordinates
from geo_query.models.result import Construction, InvalidGeometryError, attempt

if TYPE_CHECKING:
    from geo_query.models.distance import Distance

Ring = tuple[GeoPoint, ...]


# ---------------------------------------------------------------------------
# Box
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GeoBox:
    """An axis-aligned box given by two corners.

    Only each corner's own range is checked. A box whose bottom is above
    its top, or whose left is east of its right, still constructs.

    Attributes:
        bottom_left: South-west corner.
        top_right: North-east corner.
    """

    bottom_left: GeoPoint
    top_right: GeoPoint

    def __post_init__(self) -> None:
        check_coordinates(
            "GeoBox", "bottom_left.", self.bottom_left.latitude, self.bottom_left.longitude
        )
        check_coordinates(
            "GeoBox", "top_right.", self.top_right.latitude, self.top_right.longitude
        )

    @classmethod
    def create(cls, bottom_left: GeoPoint, top_right: GeoPoint) -> Construction[GeoBox]:
        return attempt(cls, bottom_left, top_right)

    @classmethod
    def from_bounds(
        cls, bottom: float, left: float, top: float, right: float
    ) -> Construction[GeoBox]:
        """Build a box from raw edges in degrees."""
        try:
            check_coordinates("GeoBox", "bottom_left.", bottom, left)
            check_coordinates("GeoBox", "top_right.", top, right)
        except InvalidGeometryError as exc:
            return Construction.failure(exc)
        return cls.create(GeoPoint(bottom, left), GeoPoint(top, right))

    def to_canonical(self) -> CanonicalBox:
        return {
            "type": "box",
            "bottom_left": self.bottom_left.to_canonical(),
            "top_right": self.top_right.to_canonical(),
        }


# ---------------------------------------------------------------------------
# Polygon
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GeoPolygon:
    """A polygon with one outer ring and optional holes.

    Every ring must hold more than 3 points and repeat its first point as
    its last. Whether the holes lie inside the outer ring, overlap each
    other, or whether any ring crosses itself is left to the evaluator.

    Attributes:
        outer_ring: The exterior boundary.
        holes: Interior boundaries, or ``None`` when none were given.
    """

    outer_ring: Ring
    holes: tuple[Ring, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "outer_ring", tuple(self.outer_ring))
        if self.holes is not None:
            object.__setattr__(self, "holes", tuple(tuple(hole) for hole in self.holes))

        _check_ring("outer_ring", self.outer_ring)
        for index, hole in enumerate(self.holes or ()):
            _check_ring(f"holes[{index}]", hole)

    @classmethod
    def create(
        cls,
        outer_ring: Sequence[GeoPoint],
        holes: Sequence[Sequence[GeoPoint]] | None = None,
    ) -> Construction[GeoPolygon]:
        return attempt(cls, outer_ring, holes)

    @classmethod
    def of(
        cls, *outer_ring: GeoPoint, holes: Sequence[Sequence[GeoPoint]] | None = None
    ) -> Construction[GeoPolygon]:
        """Build a polygon from outer ring points given as arguments.

        ``GeoPolygon.of(a, b, c, a)`` is ``GeoPolygon.create([a, b, c, a])``.
        """
        return cls.create(outer_ring, holes)

    def to_canonical(self) -> CanonicalPolygon:
        holes: list[list[CanonicalPoint]] | None = None
        if self.holes is not None:
            holes = [[point.to_canonical() for point in hole] for hole in self.holes]
        return {
            "type": "polygon",
            "outer_ring": [point.to_canonical() for point in self.outer_ring],
            "holes": holes,
        }


def _check_ring(field_name: str, ring: Ring) -> None:
    if len(ring) < MIN_RING_POINTS:
        raise InvalidGeometryError(
            "GeoPolygon",
            field_name,
            len(ring),
            f"a ring needs at least {MIN_RING_POINTS} points (got {len(ring)})",
        )
    if ring[0] != ring[-1]:
        raise InvalidGeometryError(
            "GeoPolygon",
            field_name,
            (ring[0], ring[-1]),
            "ring is not closed: the first point must be repeated as the last",
        )


# ---------------------------------------------------------------------------
# Circle
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GeoCircle:
    """A spherical cap around a center point.

    Attributes:
        center: Center of the circle.
        radius: Radius in radians of arc, ``>= 0``.
    """

    center: GeoPoint
    radius: float

    def __post_init__(self) -> None:
        if not self.radius >= 0:
            raise InvalidGeometryError("GeoCircle", "radius", self.radius, "must be >= 0")

    @classmethod
    def create(cls, center: GeoPoint, radius_in_radians: float) -> Construction[GeoCircle]:
        return attempt(cls, center, radius_in_radians)

    @classmethod
    def from_distance(cls, center: GeoPoint, radius: Distance) -> Construction[GeoCircle]:
        return attempt(cls, center, radius.radians)

    def to_canonical(self) -> CanonicalCircle:
        return {
            "type": "circle",
            "center": self.center.to_canonical(),
            "radians": self.radius,
        }


# ---------------------------------------------------------------------------
# Union
# ---------------------------------------------------------------------------

GeoShape = GeoBox | GeoPolygon | GeoCircle


def to_canonical(shape: GeoShape) -> CanonicalShape:
    """Convert any query shape to its canonical evaluator record."""
    return shape.to_canonical()
