"""GeoJSON export for extracted geometry.

Map clients that speak GeoJSON expect ``[lon, lat]`` positions, the
reverse of the ``(lat, lon)`` tuples held by ``GeometryRecord``.
Geometries go through shapely so the output is standard GeoJSON.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kml_inspector.models.geometry import DetailRecord, GeometryRecord

logger = logging.getLogger("kml_inspector.utils.geojson")


def to_feature_collection(
    geometries: Sequence[GeometryRecord],
    details: Sequence[DetailRecord] | None = None,
) -> dict[str, Any]:
    """Build a GeoJSON ``FeatureCollection`` from extracted geometries.

    A geometry with a single surviving coordinate becomes a ``Point``;
    one with none is left out.

    Args:
        geometries: Extracted geometries.
        details: Optional parallel detail records; adds ``length_km``.

    Raises:
        ValueError: If ``details`` is given and its length differs from
            ``geometries``.
    """
    from shapely.geometry import mapping

    if details is not None and len(details) != len(geometries):
        msg = f"details ({len(details)}) and geometries ({len(geometries)}) must be parallel"
        raise ValueError(msg)

    features: list[dict[str, Any]] = []
    for idx, record in enumerate(geometries):
        shape = record.to_shapely()
        if shape is None:
            logger.debug("Leaving empty geometry out of GeoJSON | index=%d", idx)
            continue
        properties: dict[str, Any] = {
            "geometry_type": record.geometry_type.value,
            "index": idx,
        }
        if details is not None:
            properties["length_km"] = details[idx].length_km
        features.append(
            {
                "type": "Feature",
                "geometry": _plain(mapping(shape)),
                "properties": properties,
            }
        )

    return {"type": "FeatureCollection", "features": features}


def _plain(value: Any) -> Any:
    """Convert shapely's nested tuples to lists for JSON round-trips."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_plain(v) for v in value]
    return value
