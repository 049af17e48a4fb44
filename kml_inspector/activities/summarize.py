"""Element summary activity.

Counts how often each recognized KML element name occurs anywhere in a
parsed document, the root included. Matching is exact and
case-sensitive on the element name as written in the source.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_inspector.activities.parse_kml import parse_document
from kml_inspector.core.constants import RECOGNIZED_TAGS
from kml_inspector.models.summary import ElementSummary

if TYPE_CHECKING:
    from kml_inspector.activities.parse_kml import KmlDocument
    from kml_inspector.core.config import InspectorConfig

logger = logging.getLogger("kml_inspector.activities.summarize")


def count_elements(document: KmlDocument) -> ElementSummary:
    """Count every recognized element name in ``document``."""
    summary = ElementSummary({tag: document.count(tag) for tag in RECOGNIZED_TAGS})
    logger.info(
        "Summarised KML | %s",
        " | ".join(f"{tag}={count}" for tag, count in summary.items()),
    )
    return summary


def summarize(text: str | bytes, *, config: InspectorConfig | None = None) -> ElementSummary:
    """Parse KML text and count its recognized elements.

    Raises:
        KmlParseError: If the text is not well-formed XML.
    """
    return count_elements(parse_document(text, config=config))
