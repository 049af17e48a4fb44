"""Azure Functions entry point — KML Inspector.

This module registers the HTTP triggers using the Python v2 programming
model. All business logic lives in the kml_inspector package; this file
is purely the wiring layer between Azure Functions bindings and
application code.

Routes (POST, KML document as the request body):
- ``/api/kml/summary``  — recognized element counts
- ``/api/kml/details``  — measured LineStrings + map-ready coordinates
- ``/api/kml/inspect``  — full inspection report
- ``/api/kml/geojson``  — GeoJSON FeatureCollection of extracted paths
"""

from __future__ import annotations

import logging

import azure.functions as func

from kml_inspector.core.config import InspectorConfig
from kml_inspector.core.ingress import handle_request

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

logger = logging.getLogger("kml_inspector.function_app")

# Fail fast on bad app settings at cold start.
CONFIG = InspectorConfig.from_env()


@app.function_name("kml_inspect_http")
@app.route(route="kml/{operation}", methods=["POST"])
def kml_inspect_http(req: func.HttpRequest) -> func.HttpResponse:
    """HTTP trigger that runs one inspection operation on the posted KML.

    The optional ``name`` query parameter is echoed as the report's
    source name; ``x-correlation-id`` (or ``x-ms-client-request-id``)
    is attached to error payloads.
    """
    operation = req.route_params.get("operation", "")
    source_name = req.params.get("name", "")
    correlation_id = req.headers.get("x-correlation-id", "") or req.headers.get(
        "x-ms-client-request-id", ""
    )

    logger.info(
        "HTTP trigger fired | operation=%s | source=%s | correlation_id=%s",
        operation,
        source_name,
        correlation_id,
    )

    try:
        status, body = handle_request(
            operation,
            req.get_body(),
            source_name=source_name,
            correlation_id=correlation_id,
            config=CONFIG,
        )
    except Exception:
        logger.exception(
            "Inspection failed | operation=%s | source=%s",
            operation,
            source_name,
        )
        raise

    return func.HttpResponse(body, status_code=status, mimetype="application/json")
