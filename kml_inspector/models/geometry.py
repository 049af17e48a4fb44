"""Data models for geometry extracted from a KML document.

A ``GeometryRecord`` is the map-ready form of one ``<LineString>``:
its kind plus an ordered list of ``(lat, lon)`` tuples. A
``DetailRecord`` is the measured form of the same geometry: its kind
plus the cumulative path length in kilometres. Both are produced in
parallel by the extract_geometry activity and share list positions.

A ``CoordinateWarning`` records a coordinate token that was dropped
during extraction.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

CoordinateTuple = tuple[float, float]
"""A ``(latitude, longitude)`` pair in decimal degrees."""


class GeometryType(str, enum.Enum):
    """Kinds of geometry extracted from KML."""

    LINE_STRING = "LineString"


@dataclass(frozen=True, slots=True)
class GeometryRecord:
    """A single geometry extracted from a KML Placemark.

    Attributes:
        geometry_type: Geometry kind (currently always ``LineString``).
        coordinates: Ordered ``(lat, lon)`` tuples in document order. Any
            sequence is accepted and stored as a tuple.
    """

    geometry_type: GeometryType = GeometryType.LINE_STRING
    coordinates: tuple[CoordinateTuple, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", tuple(tuple(c) for c in self.coordinates))

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-ready dict."""
        return {
            "type": self.geometry_type.value,
            "coordinates": [list(c) for c in self.coordinates],
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> GeometryRecord:
        """Deserialise from a dict payload.

        Raises:
            TypeError: If ``coordinates`` is not a list.
            ValueError: If ``type`` is not a known geometry type.
        """
        coords_raw = data.get("coordinates", [])
        if not isinstance(coords_raw, list):
            msg = f"coordinates must be a list, got {type(coords_raw).__name__}"
            raise TypeError(msg)
        return cls(
            geometry_type=GeometryType(str(data.get("type", GeometryType.LINE_STRING.value))),
            coordinates=tuple((float(c[0]), float(c[1])) for c in coords_raw),
        )

    @property
    def point_count(self) -> int:
        """Number of coordinates in the geometry."""
        return len(self.coordinates)

    def to_shapely(self) -> BaseGeometry | None:
        """Build a shapely geometry in ``(lon, lat)`` axis order.

        Returns ``None`` for an empty geometry and a ``Point`` when only
        one coordinate survived parsing.
        """
        from shapely.geometry import LineString, Point

        xy = [(lon, lat) for lat, lon in self.coordinates]
        if not xy:
            return None
        if len(xy) == 1:
            return Point(xy[0])
        return LineString(xy)


@dataclass(frozen=True, slots=True)
class DetailRecord:
    """The measured length of one extracted geometry.

    Attributes:
        geometry_type: Geometry kind, matching the parallel ``GeometryRecord``.
        length_km: Cumulative great-circle length in kilometres.
    """

    geometry_type: GeometryType = GeometryType.LINE_STRING
    length_km: float = 0.0

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-ready dict."""
        return {
            "type": self.geometry_type.value,
            "length_km": self.length_km,
            "display_length": self.display_length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> DetailRecord:
        """Deserialise from a dict payload."""
        return cls(
            geometry_type=GeometryType(str(data.get("type", GeometryType.LINE_STRING.value))),
            length_km=float(data.get("length_km", 0.0)),  # type: ignore[arg-type]
        )

    @property
    def display_length(self) -> str:
        """Length rounded to two decimals for tabular display."""
        return f"{self.length_km:.2f}"


@dataclass(frozen=True, slots=True)
class CoordinateWarning:
    """A coordinate token dropped during extraction.

    Attributes:
        token: The raw whitespace-delimited token.
        reason: Why the token was rejected.
        placemark_index: Zero-based index of the Placemark in document order.
        geometry_index: Zero-based index of the LineString within the Placemark.
    """

    token: str
    reason: str
    placemark_index: int = -1
    geometry_index: int = -1

    def to_dict(self) -> dict[str, object]:
        return {
            "token": self.token,
            "reason": self.reason,
            "placemark_index": self.placemark_index,
            "geometry_index": self.geometry_index,
        }


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Everything the extract_geometry activity produces for one document.

    ``details`` and ``geometries`` are parallel: index ``i`` of each
    describes the same ``<LineString>``.
    """

    details: list[DetailRecord] = field(default_factory=list)
    geometries: list[GeometryRecord] = field(default_factory=list)
    warnings: list[CoordinateWarning] = field(default_factory=list)

    @property
    def total_length_km(self) -> float:
        """Sum of all measured lengths."""
        return sum(d.length_km for d in self.details)
