"""Canonical shape records handed to the spatial evaluator.

Every query shape converts to one of the ``TypedDict`` records below,
tagged by its ``"type"`` key. This module is the single source of truth
for their field names; drift-detection tests compare each shape's
``to_canonical()`` output against these contracts.

Design notes:
- ``TypedDict`` keeps the records plain dicts the evaluator can consume
  or encode without conversion.
- Conversion is a straight transcription of already-validated fields.
  Nothing is re-validated here.
"""

from __future__ import annotations

from typing import Literal, TypedDict

# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class CanonicalPoint(TypedDict):
    """A point in degrees."""

    latitude: float
    longitude: float


class CanonicalBox(TypedDict):
    """Serialised ``GeoBox``."""

    type: Literal["box"]
    bottom_left: CanonicalPoint
    top_right: CanonicalPoint


class CanonicalPolygon(TypedDict):
    """Serialised ``GeoPolygon``. ``holes`` is ``None`` when none were given."""

    type: Literal["polygon"]
    outer_ring: list[CanonicalPoint]
    holes: list[list[CanonicalPoint]] | None


class CanonicalCircle(TypedDict):
    """Serialised ``GeoCircle``. The radius is in radians of arc."""

    type: Literal["circle"]
    center: CanonicalPoint
    radians: float


CanonicalShape = CanonicalBox | CanonicalPolygon | CanonicalCircle


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


def describe_canonical(shape: CanonicalShape) -> str:
    """Render a canonical shape the way query diagnostics quote it.

    Points are written ``[longitude, latitude]``, e.g.
    ``GeoCircle([0, 0], 10)`` or ``GeoBox([12.0826, 55.6281], [12.5684, 55.6762])``.

    Raises:
        ValueError: If the ``type`` tag is unknown.
    """
    if shape["type"] == "box":
        return f"GeoBox({_point(shape['bottom_left'])}, {_point(shape['top_right'])})"
    if shape["type"] == "circle":
        return f"GeoCircle({_point(shape['center'])}, {_number(shape['radians'])})"
    if shape["type"] == "polygon":
        rings = [shape["outer_ring"], *(shape["holes"] or [])]
        body = ", ".join("{" + ", ".join(_point(p) for p in ring) + "}" for ring in rings)
        return f"GeoPolygon({body})"
    msg = f"Unknown canonical shape type {shape['type']!r}"
    raise ValueError(msg)


def _point(point: CanonicalPoint) -> str:
    return f"[{_number(point['longitude'])}, {_number(point['latitude'])}]"


def _number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
