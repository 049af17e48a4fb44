"""Pydantic report model for a full KML inspection.

The report is the JSON document returned by the ``inspect`` HTTP route:
the element summary, the measured details, the map-ready geometries,
and any coordinate tokens that were dropped along the way.

Coordinates are ``[lat, lon]`` pairs, the order map renderers such as
Leaflet expect. Lengths are kilometres.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field

from kml_inspector.core.constants import LENGTH_MODEL_HAVERSINE

# Schema version for forward compatibility
SCHEMA_VERSION = "kml-inspection-v1"


class DetailEntry(BaseModel):
    """One row of the detailed analysis.

    Attributes:
        type: Geometry kind (``"LineString"``).
        length_km: Cumulative path length in kilometres.
    """

    type: str = "LineString"
    length_km: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_length(self) -> str:
        """Length rounded to two decimals for tabular display."""
        return f"{self.length_km:.2f}"


class GeometryEntry(BaseModel):
    """One map-ready geometry.

    Attributes:
        type: Geometry kind (``"LineString"``).
        coordinates: Ordered ``[lat, lon]`` pairs.
    """

    type: str = "LineString"
    coordinates: list[list[float]] = Field(default_factory=list)


class WarningEntry(BaseModel):
    """A coordinate token dropped during extraction."""

    token: str
    reason: str
    placemark_index: int = -1
    geometry_index: int = -1


class InspectionReport(BaseModel):
    """Complete inspection result for one KML document.

    Attributes:
        schema_version: Report schema identifier.
        source_name: Caller-supplied name of the document (may be empty).
        length_model: Earth model used for lengths.
        summary: Recognized tag name to occurrence count.
        details: Measured geometries, parallel to ``geometries``.
        geometries: Map-ready geometries, parallel to ``details``.
        warnings: Dropped coordinate tokens.
    """

    schema_version: str = SCHEMA_VERSION
    source_name: str = ""
    length_model: str = LENGTH_MODEL_HAVERSINE
    summary: dict[str, int] = Field(default_factory=dict)
    details: list[DetailEntry] = Field(default_factory=list)
    geometries: list[GeometryEntry] = Field(default_factory=list)
    warnings: list[WarningEntry] = Field(default_factory=list)

    @property
    def total_length_km(self) -> float:
        """Sum of all detail lengths."""
        return sum(d.length_km for d in self.details)
