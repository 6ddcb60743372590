"""Shared constants, single source of truth.

Centralises coordinate bounds, unit conversion factors and ring limits
used by the shape models and the evaluator.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Coordinate bounds (degrees, inclusive)
# ---------------------------------------------------------------------------

MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0
MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0

# ---------------------------------------------------------------------------
# Distance conversion
# ---------------------------------------------------------------------------

EARTH_RADIUS_M: float = 6_378_100.0
"""Radius of the sphere distances are measured on, in metres."""

METRES_PER_KILOMETRE: float = 1000.0

METRES_PER_MILE: float = 1609.344
"""Statute (US) mile."""

# ---------------------------------------------------------------------------
# Rings
# ---------------------------------------------------------------------------

MIN_RING_POINTS: int = 4
"""A ring needs more than 3 points, the last repeating the first."""

# ---------------------------------------------------------------------------
# Stored points
# ---------------------------------------------------------------------------

POINT_TYPE: str = "Point"
"""Discriminator value a stored location must carry to be queryable."""
