"""Pydantic models for stored records.

The evaluator queries collections of ``StoredObject`` instances. A
location is queryable only when it lives in an *embedded* object (no
identity of its own, owned by its parent record) that carries both a
``coordinates`` list stored ``[longitude, latitude]`` and a ``type``
discriminator equal to ``"Point"``.

Models that break those rules can still be declared and stored; the
evaluator rejects queries against them with a descriptive error.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from geo_query.core.constants import POINT_TYPE


class StoredObject(BaseModel):
    """A top-level stored record.

    Attributes:
        embedded: Class-level flag; ``True`` for objects owned by a parent.
    """

    model_config = ConfigDict(validate_assignment=True)

    embedded: ClassVar[bool] = False


class EmbeddedObject(StoredObject):
    """A stored record whose lifetime is bound to its parent."""

    embedded: ClassVar[bool] = True


class Location(EmbeddedObject):
    """The standard embedded point location.

    Attributes:
        type: Discriminator, ``"Point"`` for a queryable location.
        coordinates: ``[longitude, latitude]`` in degrees.
    """

    type: str = POINT_TYPE
    coordinates: list[float] = Field(default_factory=list)

    @classmethod
    def at(cls, latitude: float, longitude: float) -> Location:
        return cls(coordinates=[longitude, latitude])

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    @property
    def longitude(self) -> float:
        return self.coordinates[0]
