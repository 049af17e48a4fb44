"""Validation helpers for KML document parsing.

Responsibilities:
- Parse-failure exceptions (public API, re-exported from __init__)
- Input size ceiling
- Element nesting depth ceiling
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kml_inspector.core.exceptions import ValidationError

if TYPE_CHECKING:
    from lxml.etree import _Element


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class KmlParseError(ValidationError):
    """Raised when a KML document is not well-formed XML."""

    default_stage = "parse_kml"
    default_code = "KML_PARSE_FAILED"


class DocumentLimitError(KmlParseError):
    """Raised when a KML document exceeds the configured size or depth."""

    default_code = "KML_LIMIT_EXCEEDED"


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------


def validate_size(size_bytes: int, max_bytes: int) -> None:
    """Reject documents larger than ``max_bytes``.

    Raises:
        DocumentLimitError: If the document is too large.
    """
    if size_bytes > max_bytes:
        msg = f"KML document is {size_bytes} bytes, larger than the {max_bytes}-byte limit"
        raise DocumentLimitError(msg)


def measure_depth(root: _Element) -> int:
    """Return the deepest element nesting under ``root`` (root = 1).

    Walks iteratively so arbitrarily deep trees cannot exhaust the
    interpreter stack.
    """
    from lxml import etree  # type: ignore[attr-defined]

    depth = 0
    deepest = 0
    for event, node in etree.iterwalk(root, events=("start", "end")):
        if not isinstance(node.tag, str):
            continue
        if event == "start":
            depth += 1
            deepest = max(deepest, depth)
        else:
            depth -= 1
    return deepest


def validate_depth(root: _Element, max_depth: int) -> int:
    """Reject documents nested deeper than ``max_depth``.

    Returns:
        The measured depth.

    Raises:
        DocumentLimitError: If the document is nested too deeply.
    """
    depth = measure_depth(root)
    if depth > max_depth:
        msg = f"KML document nests elements {depth} levels deep, beyond the limit of {max_depth}"
        raise DocumentLimitError(msg)
    return depth
