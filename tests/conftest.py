"""Shared pytest fixtures for the geo_query test suite."""

from __future__ import annotations

import pytest

from geo_query.models.point import GeoPoint

# ---------------------------------------------------------------------------
# Ring fixtures
# ---------------------------------------------------------------------------


def ring(*coords: tuple[float, float]) -> list[GeoPoint]:
    """Build a ring from ``(latitude, longitude)`` pairs.

    Imported by test modules that need rings inside ``parametrize`` lists,
    where fixtures are not available.
    """
    return [GeoPoint(lat, lon) for lat, lon in coords]


@pytest.fixture()
def unit_square() -> list[GeoPoint]:
    """Closed ring around the one-degree square at the origin."""
    return ring((0, 0), (0, 1), (1, 1), (1, 0), (0, 0))


@pytest.fixture()
def inner_square() -> list[GeoPoint]:
    """Closed ring strictly inside ``unit_square``."""
    return ring((0.25, 0.25), (0.25, 0.75), (0.75, 0.75), (0.75, 0.25), (0.25, 0.25))


@pytest.fixture()
def copenhagen_ring() -> list[GeoPoint]:
    """Closed ring around central Copenhagen (excludes Roskilde)."""
    return ring(
        (55.6281, 12.0826),
        (55.6761, 12.0826),
        (55.6761, 12.5684),
        (55.6281, 12.5684),
        (55.6281, 12.0826),
    )
