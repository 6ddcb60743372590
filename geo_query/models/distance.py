"""Non-negative distance on the query sphere.

Distances are held as radians of arc on a sphere of radius
``EARTH_RADIUS_M`` (6,378,100 m). Kilometres and statute miles convert
through that radius; radians are passed through unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass

from geo_query.core.constants import EARTH_RADIUS_M, METRES_PER_KILOMETRE, METRES_PER_MILE
from geo_query.models.result import Construction, InvalidGeometryError, attempt


@dataclass(frozen=True, slots=True)
class Distance:
    """A distance stored as radians of arc.

    Use the ``from_*`` class methods; they reject negative and NaN input
    and return a ``Construction``. ``+inf`` is accepted.

    Attributes:
        radians: Angular distance, always ``>= 0``.
    """

    radians: float

    def __post_init__(self) -> None:
        _check_magnitude("radians", self.radians)

    @classmethod
    def from_kilometers(cls, kilometers: float) -> Construction[Distance]:
        return cls._from_metres("kilometers", kilometers, METRES_PER_KILOMETRE)

    @classmethod
    def from_miles(cls, miles: float) -> Construction[Distance]:
        return cls._from_metres("miles", miles, METRES_PER_MILE)

    @classmethod
    def from_radians(cls, radians: float) -> Construction[Distance]:
        return attempt(cls, radians)

    @classmethod
    def _from_metres(cls, unit: str, value: float, metres_per_unit: float) -> Construction[Distance]:
        # The source value is checked, not the derived radians.
        try:
            _check_magnitude(unit, value)
        except InvalidGeometryError as exc:
            return Construction.failure(exc)
        return Construction.success(cls((value * metres_per_unit) / EARTH_RADIUS_M))

    @property
    def as_kilometers(self) -> float:
        return (self.radians * EARTH_RADIUS_M) / METRES_PER_KILOMETRE

    @property
    def as_miles(self) -> float:
        return (self.radians * EARTH_RADIUS_M) / METRES_PER_MILE


def _check_magnitude(field_name: str, value: float) -> None:
    # NaN >= 0 is false, so NaN is rejected here.
    if not value >= 0:
        raise InvalidGeometryError("Distance", field_name, value, "must be >= 0")
