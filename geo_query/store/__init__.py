"""Stored record models consumed by the evaluator."""

from geo_query.store.records import EmbeddedObject, Location, StoredObject

__all__ = ["EmbeddedObject", "Location", "StoredObject"]
