"""Reference geoWithin evaluator.

Consumes canonical shapes and filters stored records by location.

Public API:
- geo_within: Filter records whose embedded location lies in a shape
- SchemaMismatchError: The queried property cannot hold a stored point
- InvalidRegionError: The query region fails geometric validation
"""

from geo_query.evaluator._validation import InvalidRegionError, SchemaMismatchError
from geo_query.evaluator.geo_within import build_matcher, geo_within

__all__ = [
    "InvalidRegionError",
    "SchemaMismatchError",
    "build_matcher",
    "geo_within",
]
