"""Validated geographic coordinate pair."""

from __future__ import annotations

from dataclasses import dataclass

from geo_query.core.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from geo_query.models.canonical import CanonicalPoint
from geo_query.models.result import Construction, InvalidGeometryError, attempt


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude/longitude pair in degrees.

    Building block for query shapes; not a queryable shape itself.
    Instances are always in range: direct construction raises
    ``InvalidGeometryError``, ``create`` returns a failed ``Construction``.

    Attributes:
        latitude: Degrees in ``[-90, 90]``.
        longitude: Degrees in ``[-180, 180]``.
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        check_coordinates("GeoPoint", "", self.latitude, self.longitude)

    @classmethod
    def create(cls, latitude: float, longitude: float) -> Construction[GeoPoint]:
        return attempt(cls, latitude, longitude)

    def to_canonical(self) -> CanonicalPoint:
        return {"latitude": self.latitude, "longitude": self.longitude}


def check_coordinates(model: str, prefix: str, latitude: float, longitude: float) -> None:
    """Raise ``InvalidGeometryError`` unless both coordinates are in range.

    NaN fails both range checks.

    Args:
        model: Model name reported in the error.
        prefix: Field path prefix (e.g. ``"bottom_left."``).
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
    """
    if not MIN_LATITUDE <= latitude <= MAX_LATITUDE:
        raise InvalidGeometryError(
            model,
            f"{prefix}latitude",
            latitude,
            f"must be between {MIN_LATITUDE:g} and {MAX_LATITUDE:g} degrees",
        )
    if not MIN_LONGITUDE <= longitude <= MAX_LONGITUDE:
        raise InvalidGeometryError(
            model,
            f"{prefix}longitude",
            longitude,
            f"must be between {MIN_LONGITUDE:g} and {MAX_LONGITUDE:g} degrees",
        )
