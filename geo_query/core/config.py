"""Evaluator configuration loaded from environment variables.

All configuration values have defaults matching the stored-record
conventions (``"Point"`` discriminator, a single embedded link).

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, so bad configuration surfaces before the first
    query instead of as silently empty results.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from geo_query.core.constants import POINT_TYPE
from geo_query.core.exceptions import GeoError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(GeoError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class EvaluatorConfig:
    """Immutable evaluator configuration.

    Attributes:
        point_type: Discriminator value a stored location must carry.
            Records with any other value are excluded from results.
        max_link_depth: Maximum number of links between the queried
            record and the stored location.
        boundary_inclusive: Whether points on a box or polygon edge match.
    """

    point_type: str = POINT_TYPE
    max_link_depth: int = 1
    boundary_inclusive: bool = True

    @classmethod
    def from_env(cls) -> EvaluatorConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                boolean flag is not recognised.
            ValueError: If ``GEO_MAX_LINK_DEPTH`` is not an integer.
        """
        config = cls(
            point_type=os.getenv("GEO_POINT_TYPE", POINT_TYPE),
            max_link_depth=int(os.getenv("GEO_MAX_LINK_DEPTH", "1")),
            boundary_inclusive=_parse_bool(
                "GEO_BOUNDARY_INCLUSIVE", os.getenv("GEO_BOUNDARY_INCLUSIVE", "true")
            ),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be one of true/false, yes/no, on/off, 1/0")


def _validate(config: EvaluatorConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.point_type:
        raise ConfigValidationError(
            "GEO_POINT_TYPE",
            config.point_type,
            "must not be empty",
        )

    if config.max_link_depth < 1:
        raise ConfigValidationError(
            "GEO_MAX_LINK_DEPTH",
            config.max_link_depth,
            "must be >= 1",
        )
