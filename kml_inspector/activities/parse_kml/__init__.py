"""KML document parsing activity.

Turns raw KML text into a ``KmlDocument``: a typed, read-only view over
an lxml element tree that the summary and geometry activities query.

The parsing pipeline is split into focused stages:
- **_validation**: parse-failure exceptions, size and depth ceilings
- **_document**: the typed tree (``KmlDocument`` / ``KmlElement``)

Malformed XML always surfaces as ``KmlParseError``; a document that
could not be parsed is never reported as an empty one. Callers that
prefer a result value over an exception use ``try_parse_document``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from kml_inspector.activities.parse_kml._document import (
    KmlDocument,
    KmlElement,
    qualified_name,
)
from kml_inspector.activities.parse_kml._validation import (
    DocumentLimitError,
    KmlParseError,
    measure_depth,
    validate_depth,
    validate_size,
)
from kml_inspector.core.config import InspectorConfig
from kml_inspector.core.constants import PARSER_MAX_ELEMENT_DEPTH

logger = logging.getLogger("kml_inspector.activities.parse_kml")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "DocumentLimitError",
    "KmlDocument",
    "KmlElement",
    "KmlParseError",
    "ParseOutcome",
    "measure_depth",
    "parse_document",
    "qualified_name",
    "try_parse_document",
]

_UTF8_BOM = "\ufeff"

# libxml2 stops at PARSER_MAX_ELEMENT_DEPTH unless XML_PARSE_HUGE is set.
_EXCESSIVE_DEPTH = "Excessive depth"


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    """Either a parsed document or the reason parsing failed.

    Exactly one of ``document`` and ``error`` is set.
    """

    document: KmlDocument | None = None
    error: KmlParseError | None = None

    def __post_init__(self) -> None:
        if (self.document is None) == (self.error is None):
            msg = "ParseOutcome needs exactly one of document or error"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        """Whether parsing succeeded."""
        return self.document is not None


def parse_document(text: str | bytes, *, config: InspectorConfig | None = None) -> KmlDocument:
    """Parse KML text into a ``KmlDocument``.

    ``str`` input is treated as already-decoded text and parsed as UTF-8
    whatever its XML declaration says; ``bytes`` input honours the
    declared encoding.

    Args:
        text: The raw KML document.
        config: Size and depth limits (defaults to ``InspectorConfig()``).

    Returns:
        The parsed document.

    Raises:
        KmlParseError: If the input is empty or not well-formed XML.
        DocumentLimitError: If the input exceeds the size or depth limit.
    """
    from lxml import etree  # type: ignore[attr-defined]

    config = config or InspectorConfig()

    if isinstance(text, str):
        try:
            content = text.lstrip(_UTF8_BOM).encode("utf-8")
        except UnicodeEncodeError as exc:
            msg = f"KML text cannot be encoded as UTF-8: {exc}"
            raise KmlParseError(msg) from exc
        encoding: str | None = "utf-8"
    else:
        content = bytes(text)
        encoding = None

    if not content.strip():
        msg = "KML document is empty"
        raise KmlParseError(msg)

    validate_size(len(content), config.max_document_bytes)

    parser = etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )
    try:
        root = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        if _EXCESSIVE_DEPTH in str(exc):
            msg = (
                f"KML document nests elements more than {PARSER_MAX_ELEMENT_DEPTH} levels deep, "
                f"beyond the limit of {config.max_element_depth}"
            )
            raise DocumentLimitError(msg) from exc
        msg = f"Not valid XML: {exc}"
        raise KmlParseError(msg) from exc

    depth = validate_depth(root, config.max_element_depth)

    logger.debug(
        "Parsed KML document | root=%s | bytes=%d | depth=%d",
        qualified_name(root),
        len(content),
        depth,
    )
    return KmlDocument(root, source_bytes=len(content), depth=depth)


def try_parse_document(
    text: str | bytes, *, config: InspectorConfig | None = None
) -> ParseOutcome:
    """Parse KML text, returning failure as a value instead of raising."""
    try:
        return ParseOutcome(document=parse_document(text, config=config))
    except KmlParseError as exc:
        logger.info("KML document rejected | code=%s | %s", exc.code, exc.message)
        return ParseOutcome(error=exc)
