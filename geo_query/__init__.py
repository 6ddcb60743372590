"""Geospatial query shapes.

Validated building blocks (points, distances) and query shapes (box,
polygon, circle) that convert to a canonical representation for a
spatial ``geoWithin`` evaluator.
"""

__version__ = "0.1.0"
