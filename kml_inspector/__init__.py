"""KML Inspector.

Extracts structured information from KML documents: counts of the
recognized element categories, LineString paths as ``(lat, lon)``
sequences, and their great-circle lengths in kilometres.

Entry points:
- ``summarize(text)`` — recognized element counts
- ``extract_geometry(text)`` — ``(details, geometries)`` parallel lists
- ``inspect_kml(text)`` — both, as a JSON-ready report
"""

from kml_inspector.activities.extract_geometry import extract_geometry
from kml_inspector.activities.parse_kml import KmlParseError
from kml_inspector.activities.summarize import summarize
from kml_inspector.orchestrators.inspect_kml import inspect_kml

__version__ = "0.1.0"

__all__ = [
    "KmlParseError",
    "extract_geometry",
    "inspect_kml",
    "summarize",
]
