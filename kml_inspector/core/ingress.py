"""Thin ingress boundary helpers for the Azure Functions HTTP entrypoints.

Keeps ``function_app.py`` down to trigger bindings and handoff:

- **decode_request_body** — rejects empty and oversize request bodies
  before any XML parsing happens.
- **handle_request** — runs one inspection operation on a request body
  and turns the outcome (result or domain error) into an HTTP status and
  a JSON body.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from kml_inspector.activities.extract_geometry import extract_from_document
from kml_inspector.activities.parse_kml import KmlParseError, parse_document
from kml_inspector.activities.summarize import count_elements
from kml_inspector.core.config import InspectorConfig
from kml_inspector.core.exceptions import ContractError
from kml_inspector.orchestrators.inspect_kml import inspect_kml
from kml_inspector.utils.geojson import to_feature_collection

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("kml_inspector.core.ingress")

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404
HTTP_PAYLOAD_TOO_LARGE = 413
HTTP_UNPROCESSABLE = 422

OPERATIONS: tuple[str, ...] = ("summary", "details", "inspect", "geojson")


# ---------------------------------------------------------------------------
# Body decoding
# ---------------------------------------------------------------------------


def decode_request_body(body: bytes | None, *, max_bytes: int) -> bytes:
    """Validate a raw request body before it reaches the parser.

    Raises:
        ContractError: If the body is empty (``REQUEST_BODY_EMPTY``) or
            larger than ``max_bytes`` (``REQUEST_BODY_TOO_LARGE``).
    """
    if not body or not body.strip():
        msg = "Request body is empty; POST the KML document as the body"
        raise ContractError(msg, code="REQUEST_BODY_EMPTY")
    if len(body) > max_bytes:
        msg = f"Request body is {len(body)} bytes, larger than the {max_bytes}-byte limit"
        raise ContractError(msg, code="REQUEST_BODY_TOO_LARGE")
    return body


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def _summary(body: bytes, source_name: str, config: InspectorConfig) -> dict[str, Any]:
    return count_elements(parse_document(body, config=config)).to_dict()


def _details(body: bytes, source_name: str, config: InspectorConfig) -> dict[str, Any]:
    result = extract_from_document(parse_document(body, config=config), config=config)
    return {
        "details": [d.to_dict() for d in result.details],
        "geometries": [g.to_dict() for g in result.geometries],
        "warnings": [w.to_dict() for w in result.warnings],
    }


def _inspect(body: bytes, source_name: str, config: InspectorConfig) -> dict[str, Any]:
    return inspect_kml(body, source_name=source_name, config=config).model_dump()


def _geojson(body: bytes, source_name: str, config: InspectorConfig) -> dict[str, Any]:
    result = extract_from_document(parse_document(body, config=config), config=config)
    return to_feature_collection(result.geometries, result.details)


_HANDLERS: dict[str, Callable[[bytes, str, InspectorConfig], dict[str, Any]]] = {
    "summary": _summary,
    "details": _details,
    "inspect": _inspect,
    "geojson": _geojson,
}


def handle_request(
    operation: str,
    body: bytes | None,
    *,
    source_name: str = "",
    correlation_id: str = "",
    config: InspectorConfig | None = None,
) -> tuple[int, str]:
    """Run one inspection operation on a request body.

    Args:
        operation: One of ``OPERATIONS``.
        body: The raw request body (the KML document).
        source_name: Optional document name echoed in reports and logs.
        correlation_id: Request identifier attached to error payloads.
        config: Limits and Earth model (defaults to ``InspectorConfig()``).

    Returns:
        ``(status_code, json_body)``. Domain errors are mapped to
        4xx statuses with a ``to_error_dict()`` payload; unexpected
        errors propagate to the Functions host.
    """
    config = config or InspectorConfig()

    handler = _HANDLERS.get(operation)
    if handler is None:
        err = ContractError(
            f"Unknown operation {operation!r}; expected one of {list(OPERATIONS)}",
            code="UNKNOWN_OPERATION",
            correlation_id=correlation_id,
        )
        return HTTP_NOT_FOUND, json.dumps(err.to_error_dict())

    try:
        payload = decode_request_body(body, max_bytes=config.max_document_bytes)
        result = handler(payload, source_name, config)
    except ContractError as exc:
        exc.correlation_id = exc.correlation_id or correlation_id
        status = HTTP_PAYLOAD_TOO_LARGE if exc.code == "REQUEST_BODY_TOO_LARGE" else HTTP_BAD_REQUEST
        logger.warning(
            "Request rejected | operation=%s | code=%s | correlation_id=%s",
            operation,
            exc.code,
            correlation_id,
        )
        return status, json.dumps(exc.to_error_dict())
    except KmlParseError as exc:
        exc.correlation_id = exc.correlation_id or correlation_id
        logger.warning(
            "KML rejected | operation=%s | source=%s | code=%s | correlation_id=%s | %s",
            operation,
            source_name,
            exc.code,
            correlation_id,
            exc.message,
        )
        return HTTP_UNPROCESSABLE, json.dumps(exc.to_error_dict())

    return HTTP_OK, json.dumps(result)
