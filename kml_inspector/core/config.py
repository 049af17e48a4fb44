"""Inspector configuration loaded from environment variables.

All values have defaults that reproduce the plain spherical behaviour,
so library callers can use ``InspectorConfig()`` directly. Azure
Functions app settings (or ``local.settings.json`` for local dev) feed
``from_env()`` when running behind the HTTP boundary.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, so bad configuration is caught at startup rather
    than on the first request.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from kml_inspector.core.constants import (
    DEFAULT_MAX_DOCUMENT_BYTES,
    DEFAULT_MAX_ELEMENT_DEPTH,
    LENGTH_MODEL_HAVERSINE,
    LENGTH_MODELS,
    PARSER_MAX_ELEMENT_DEPTH,
)
from kml_inspector.core.exceptions import InspectorError


class ConfigValidationError(InspectorError):
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
class InspectorConfig:
    """Immutable inspector configuration.

    Attributes:
        max_document_bytes: Largest accepted KML document, in bytes.
        max_element_depth: Deepest accepted element nesting (root = 1).
        length_model: ``"haversine"`` (sphere, R = 6371 km) or
            ``"wgs84"`` (ellipsoidal geodesic via pyproj).
    """

    max_document_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES
    max_element_depth: int = DEFAULT_MAX_ELEMENT_DEPTH
    length_model: str = LENGTH_MODEL_HAVERSINE

    @classmethod
    def from_env(cls) -> InspectorConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or unknown.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``KML_MAX_ELEMENT_DEPTH=abc``).
        """
        config = cls(
            max_document_bytes=int(
                os.getenv("KML_MAX_DOCUMENT_BYTES", str(DEFAULT_MAX_DOCUMENT_BYTES))
            ),
            max_element_depth=int(
                os.getenv("KML_MAX_ELEMENT_DEPTH", str(DEFAULT_MAX_ELEMENT_DEPTH))
            ),
            length_model=os.getenv("KML_LENGTH_MODEL", LENGTH_MODEL_HAVERSINE).strip().lower(),
        )
        _validate(config)
        return config


def _validate(config: InspectorConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.max_document_bytes <= 0:
        raise ConfigValidationError(
            "KML_MAX_DOCUMENT_BYTES",
            config.max_document_bytes,
            "must be > 0 (bytes)",
        )

    if config.max_element_depth <= 0:
        raise ConfigValidationError(
            "KML_MAX_ELEMENT_DEPTH",
            config.max_element_depth,
            "must be > 0 (levels)",
        )

    if config.max_element_depth > PARSER_MAX_ELEMENT_DEPTH:
        raise ConfigValidationError(
            "KML_MAX_ELEMENT_DEPTH",
            config.max_element_depth,
            f"must be <= {PARSER_MAX_ELEMENT_DEPTH} (the XML parser nesting ceiling)",
        )

    if config.length_model not in LENGTH_MODELS:
        raise ConfigValidationError(
            "KML_LENGTH_MODEL",
            config.length_model,
            f"must be one of {sorted(LENGTH_MODELS)}",
        )
