"""Geometry extraction activity.

Walks every ``<Placemark>`` of a parsed KML document in document order,
extracts each descendant ``<LineString>`` as an ordered list of
``(lat, lon)`` tuples and measures its great-circle length.

Coordinate handling:
- KML writes ``lon,lat[,alt]`` tuples separated by whitespace; each
  valid token becomes ``(lat, lon)`` and the altitude is dropped.
- A token without two finite decimal numbers up front is dropped, logged
  and reported as a ``CoordinateWarning``; the rest of the text and the
  rest of the document are still processed.
- A ``<LineString>`` with no ``<coordinates>`` text contributes nothing.

Two parallel lists come out: ``DetailRecord`` (kind + length in km) and
``GeometryRecord`` (kind + coordinates), index ``i`` of each describing
the same ``<LineString>``.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from kml_inspector.activities.parse_kml import parse_document
from kml_inspector.core.config import InspectorConfig
from kml_inspector.core.constants import COORDINATES_TAG, LINESTRING_TAG, PLACEMARK_TAG
from kml_inspector.core.exceptions import ValidationError
from kml_inspector.models.geometry import (
    CoordinateTuple,
    CoordinateWarning,
    DetailRecord,
    ExtractionResult,
    GeometryRecord,
    GeometryType,
)
from kml_inspector.utils.geodesy import measure_length_km

if TYPE_CHECKING:
    from kml_inspector.activities.parse_kml import KmlDocument

logger = logging.getLogger("kml_inspector.activities.extract_geometry")

WarningCallback = Callable[[CoordinateWarning], None]

# Plain decimal or scientific notation; no hex, underscores or inf/nan words.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class CoordinateFormatError(ValidationError):
    """Raised for a coordinate token that is not ``lon,lat[,alt]``.

    Never escapes ``extract_geometry``: the token is dropped and reported
    as a ``CoordinateWarning`` instead.

    Attributes:
        token: The offending whitespace-delimited token.
        reason: Why it was rejected.
    """

    default_stage = "extract_geometry"
    default_code = "KML_COORDINATE_FORMAT"

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid coordinate {token!r}: {reason}")


# ---------------------------------------------------------------------------
# Coordinate parsing
# ---------------------------------------------------------------------------


def parse_coordinate_token(token: str) -> CoordinateTuple:
    """Parse one ``lon,lat[,alt]`` token into a ``(lat, lon)`` tuple.

    Only the first two components are interpreted; anything after the
    latitude is ignored.

    Raises:
        CoordinateFormatError: If the token has fewer than two components
            or either leading component is not a finite number.
    """
    parts = token.split(",")
    if len(parts) < 2:
        raise CoordinateFormatError(token, "expected at least 'lon,lat'")
    lon = _parse_component(token, parts[0], "longitude")
    lat = _parse_component(token, parts[1], "latitude")
    return (lat, lon)


def parse_coordinates_text(
    text: str,
    *,
    on_invalid: Callable[[CoordinateFormatError], None] | None = None,
) -> list[CoordinateTuple]:
    """Parse KML coordinate text (``lon,lat,alt lon,lat,alt ...``) to ``(lat, lon)`` tuples.

    Invalid tokens are logged, handed to ``on_invalid`` when given, and
    dropped; parsing continues with the next token.
    """
    coords: list[CoordinateTuple] = []
    for token in text.split():
        try:
            coords.append(parse_coordinate_token(token))
        except CoordinateFormatError as exc:
            logger.warning("Dropping invalid coordinate | token=%r | reason=%s", token, exc.reason)
            if on_invalid is not None:
                on_invalid(exc)
    return coords


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def extract_from_document(
    document: KmlDocument,
    *,
    config: InspectorConfig | None = None,
    on_warning: WarningCallback | None = None,
) -> ExtractionResult:
    """Extract and measure every ``<LineString>`` inside a ``<Placemark>``.

    Args:
        document: A parsed KML document.
        config: Selects the Earth model for lengths.
        on_warning: Called once per dropped coordinate token.

    Returns:
        Parallel detail and geometry lists plus the dropped-token warnings.
    """
    config = config or InspectorConfig()

    details: list[DetailRecord] = []
    geometries: list[GeometryRecord] = []
    warnings: list[CoordinateWarning] = []

    for pm_idx, placemark in enumerate(document.iter_elements(PLACEMARK_TAG)):
        for geom_idx, line in enumerate(placemark.iter_descendants(LINESTRING_TAG)):
            coords_elem = line.first_descendant(COORDINATES_TAG)
            coord_text = coords_elem.text if coords_elem is not None else ""
            if not coord_text:
                logger.debug(
                    "Skipping LineString without coordinates | placemark=%d | linestring=%d | line=%s",
                    pm_idx,
                    geom_idx,
                    line.line,
                )
                continue

            rejected: list[CoordinateFormatError] = []
            coords = parse_coordinates_text(coord_text, on_invalid=rejected.append)
            for exc in rejected:
                warning = CoordinateWarning(
                    token=exc.token,
                    reason=exc.reason,
                    placemark_index=pm_idx,
                    geometry_index=geom_idx,
                )
                warnings.append(warning)
                if on_warning is not None:
                    on_warning(warning)

            geometries.append(GeometryRecord(GeometryType.LINE_STRING, tuple(coords)))
            details.append(
                DetailRecord(
                    GeometryType.LINE_STRING,
                    measure_length_km(coords, model=config.length_model),
                )
            )

    result = ExtractionResult(details=details, geometries=geometries, warnings=warnings)
    logger.info(
        "Extracted geometry | linestrings=%d | total_km=%.3f | dropped_tokens=%d | model=%s",
        len(geometries),
        result.total_length_km,
        len(warnings),
        config.length_model,
    )
    return result


def extract_geometry(
    text: str | bytes,
    *,
    config: InspectorConfig | None = None,
    on_warning: WarningCallback | None = None,
) -> tuple[list[DetailRecord], list[GeometryRecord]]:
    """Parse KML text and return its measured details and map-ready geometries.

    Raises:
        KmlParseError: If the text is not well-formed XML.
    """
    document = parse_document(text, config=config)
    result = extract_from_document(document, config=config, on_warning=on_warning)
    return result.details, result.geometries


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_component(token: str, raw: str, label: str) -> float:
    if not _DECIMAL_RE.fullmatch(raw):
        raise CoordinateFormatError(token, f"{label} {raw!r} is not a number")
    value = float(raw)
    if not math.isfinite(value):
        raise CoordinateFormatError(token, f"{label} {raw!r} is not finite")
    return value
