"""Data models and schemas.

Defines the data structures produced by inspection:
- ElementSummary: Recognized tag name to occurrence count
- GeometryRecord / DetailRecord: Extracted paths and their lengths
- CoordinateWarning / ExtractionResult: Extraction output with dropped tokens
- InspectionReport: Pydantic JSON schema for a full inspection
"""

from kml_inspector.models.geometry import (
    CoordinateTuple,
    CoordinateWarning,
    DetailRecord,
    ExtractionResult,
    GeometryRecord,
    GeometryType,
)
from kml_inspector.models.report import InspectionReport
from kml_inspector.models.summary import ElementSummary

__all__ = [
    "CoordinateTuple",
    "CoordinateWarning",
    "DetailRecord",
    "ElementSummary",
    "ExtractionResult",
    "GeometryRecord",
    "GeometryType",
    "InspectionReport",
]
