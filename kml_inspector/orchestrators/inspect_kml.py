"""KML inspection orchestrator.

Parses a document once and runs both read-only activities over the same
tree:

1. **Summary** — ``count_elements``
2. **Geometry** — ``extract_from_document``

and assembles the results into an ``InspectionReport``. The two
activities do not depend on each other; they share nothing but the
immutable document.
"""

from __future__ import annotations

import logging

from kml_inspector.activities.extract_geometry import extract_from_document
from kml_inspector.activities.parse_kml import parse_document
from kml_inspector.activities.summarize import count_elements
from kml_inspector.core.config import InspectorConfig
from kml_inspector.models.report import (
    DetailEntry,
    GeometryEntry,
    InspectionReport,
    WarningEntry,
)

logger = logging.getLogger("kml_inspector.orchestrators.inspect_kml")


def inspect_kml(
    text: str | bytes,
    *,
    source_name: str = "",
    config: InspectorConfig | None = None,
) -> InspectionReport:
    """Summarise and extract a KML document in one pass.

    Args:
        text: The raw KML document.
        source_name: Name to echo in the report and logs (e.g. a filename).
        config: Limits and Earth model (defaults to ``InspectorConfig()``).

    Raises:
        KmlParseError: If the text is not well-formed XML.
    """
    config = config or InspectorConfig()

    document = parse_document(text, config=config)
    summary = count_elements(document)
    extraction = extract_from_document(document, config=config)

    report = InspectionReport(
        source_name=source_name,
        length_model=config.length_model,
        summary=summary.to_dict(),
        details=[
            DetailEntry(type=d.geometry_type.value, length_km=d.length_km)
            for d in extraction.details
        ],
        geometries=[GeometryEntry(**g.to_dict()) for g in extraction.geometries],
        warnings=[WarningEntry(**w.to_dict()) for w in extraction.warnings],
    )

    logger.info(
        "KML inspected | source=%s | placemarks=%d | linestrings=%d | total_km=%.3f | warnings=%d",
        source_name or "<unnamed>",
        summary["Placemark"],
        len(report.details),
        report.total_length_km,
        len(report.warnings),
    )
    return report
