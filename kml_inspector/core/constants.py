"""Shared constants — single source of truth.

Centralises the recognized KML vocabulary, the Earth model used for
path lengths, and parser limits that would otherwise be repeated across
activities and the HTTP boundary.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Recognized KML vocabulary
# ---------------------------------------------------------------------------

RECOGNIZED_TAGS: tuple[str, ...] = (
    "Placemark",
    "Folder",
    "Document",
    "Style",
    "LookAt",
    "LineString",
    "MultiGeometry",
)
"""Element names tallied by the summary, in report order. Case-sensitive."""

PLACEMARK_TAG: str = "Placemark"
LINESTRING_TAG: str = "LineString"
COORDINATES_TAG: str = "coordinates"

# ---------------------------------------------------------------------------
# Earth model
# ---------------------------------------------------------------------------

EARTH_RADIUS_KM: float = 6371.0
"""Mean Earth radius for haversine distances."""

METRES_PER_KILOMETRE: float = 1000.0

LENGTH_MODEL_HAVERSINE: str = "haversine"
LENGTH_MODEL_WGS84: str = "wgs84"
LENGTH_MODELS: frozenset[str] = frozenset({LENGTH_MODEL_HAVERSINE, LENGTH_MODEL_WGS84})

# ---------------------------------------------------------------------------
# Input limits
# ---------------------------------------------------------------------------

DEFAULT_MAX_DOCUMENT_BYTES: int = 10 * 1024 * 1024
"""Largest KML document accepted (10 MiB)."""

DEFAULT_MAX_ELEMENT_DEPTH: int = 256
"""Deepest element nesting accepted, root at depth 1."""

PARSER_MAX_ELEMENT_DEPTH: int = 256
"""Nesting ceiling libxml2 enforces without ``XML_PARSE_HUGE``."""
