"""Tests for the extract_geometry activity.

Covers:
- Coordinate token parsing: axis swap, altitude dropped, invalid tokens
- Coordinate text parsing: whitespace runs, partial failure tolerance
- LineString extraction per Placemark in document order
- Length measurement (haversine default, WGS 84 option)
- Skipping LineStrings without coordinate text
- Warnings: collected, logged, delivered to callbacks
- Idempotence and malformed-XML rejection
"""

from __future__ import annotations

import logging

import pytest

from kml_inspector.activities.extract_geometry import (
    CoordinateFormatError,
    extract_from_document,
    extract_geometry,
    parse_coordinate_token,
    parse_coordinates_text,
)
from kml_inspector.activities.parse_kml import KmlParseError, parse_document
from kml_inspector.core.config import InspectorConfig
from kml_inspector.models.geometry import (
    CoordinateWarning,
    DetailRecord,
    GeometryRecord,
    GeometryType,
)

ONE_DEGREE_KM = 111.19


def _placemark(coordinates: str) -> str:
    return (
        "<kml><Placemark><LineString><coordinates>"
        f"{coordinates}"
        "</coordinates></LineString></Placemark></kml>"
    )


class TestParseCoordinateToken:
    """Single ``lon,lat[,alt]`` tokens."""

    def test_swaps_axes_and_drops_altitude(self) -> None:
        assert parse_coordinate_token("10.0,20.0,5.0") == (20.0, 10.0)

    def test_two_components(self) -> None:
        assert parse_coordinate_token("-122.5,37.25") == (37.25, -122.5)

    def test_signs_and_exponents(self) -> None:
        assert parse_coordinate_token("+1.5,-.5") == (-0.5, 1.5)
        assert parse_coordinate_token("1e1,2E0") == (2.0, 10.0)

    def test_trailing_components_ignored(self) -> None:
        assert parse_coordinate_token("1,2,abc") == (2.0, 1.0)
        assert parse_coordinate_token("1,2,") == (2.0, 1.0)

    @pytest.mark.parametrize(
        "token",
        ["abc,def", "10", "10;20", ",5", "5,", "nan,1", "1,NaN", "inf,1", "1e999,0", "0x10,1", "1_0,2"],
    )
    def test_invalid_tokens_raise(self, token: str) -> None:
        with pytest.raises(CoordinateFormatError) as exc_info:
            parse_coordinate_token(token)
        assert exc_info.value.token == token
        assert exc_info.value.code == "KML_COORDINATE_FORMAT"

    def test_unbounded_values_accepted(self) -> None:
        """Range checking is out of scope; out-of-range numbers still parse."""
        assert parse_coordinate_token("200,95") == (95.0, 200.0)


class TestParseCoordinatesText:
    """Whitespace-separated coordinate text."""

    def test_invalid_token_dropped_rest_kept(self) -> None:
        assert parse_coordinates_text("10,20 abc,def 30,40") == [(20.0, 10.0), (40.0, 30.0)]

    def test_any_whitespace_run_separates(self) -> None:
        text = "\n   0,0,0\t\t0,1,0\n\n  0,2,0  \n"
        assert parse_coordinates_text(text) == [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)]

    def test_empty_text(self) -> None:
        assert parse_coordinates_text("") == []

    def test_on_invalid_callback(self) -> None:
        rejected: list[CoordinateFormatError] = []
        parse_coordinates_text("1,2 x 3,4 y,z", on_invalid=rejected.append)
        assert [exc.token for exc in rejected] == ["x", "y,z"]

    def test_invalid_token_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="kml_inspector.activities.extract_geometry"):
            parse_coordinates_text("10,20 abc,def 30,40")
        assert "abc,def" in caplog.text


class TestExtraction:
    """End-to-end extraction from sample documents."""

    def test_single_linestring(self, single_linestring_kml: str) -> None:
        details, geometries = extract_geometry(single_linestring_kml)
        assert len(details) == 1
        assert details[0].geometry_type is GeometryType.LINE_STRING
        assert details[0].length_km == pytest.approx(222.39, abs=0.5)
        assert geometries == [
            GeometryRecord(GeometryType.LINE_STRING, [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)])
        ]

    def test_nested_folders_document_order(self, nested_folders_kml: str) -> None:
        details, geometries = extract_geometry(nested_folders_kml)
        assert [g.coordinates for g in geometries] == [
            ((37.0, -122.0), (37.1, -122.0)),
            ((0.0, 10.0), (0.0, 11.0)),
            ((0.0, 20.0), (1.0, 20.0)),
        ]
        assert [d.length_km for d in details] == pytest.approx(
            [ONE_DEGREE_KM / 10, ONE_DEGREE_KM, ONE_DEGREE_KM], abs=0.05
        )

    def test_point_placemarks_not_extracted(self, nested_folders_kml: str) -> None:
        details, geometries = extract_geometry(nested_folders_kml)
        assert len(details) == len(geometries) == 3
        assert all(g.geometry_type is GeometryType.LINE_STRING for g in geometries)

    def test_invalid_tokens_do_not_abort(self, invalid_tokens_kml: str) -> None:
        details, geometries = extract_geometry(invalid_tokens_kml)
        assert geometries[0].coordinates == ((20.0, 10.0), (40.0, 30.0))
        assert geometries[1].coordinates == ((0.0, 0.0), (1.0, 0.0))
        assert details[1].length_km == pytest.approx(ONE_DEGREE_KM, abs=0.5)

    def test_missing_and_blank_coordinates_skipped(self, empty_coordinates_kml: str) -> None:
        details, geometries = extract_geometry(empty_coordinates_kml)
        assert geometries == [GeometryRecord(GeometryType.LINE_STRING, [(5.0, 5.0)])]
        assert details == [DetailRecord(GeometryType.LINE_STRING, 0.0)]

    def test_all_tokens_invalid_still_yields_empty_record(self) -> None:
        details, geometries = extract_geometry(_placemark("abc def"))
        assert geometries == [GeometryRecord(GeometryType.LINE_STRING, [])]
        assert details[0].length_km == 0.0

    def test_linestring_outside_placemark_ignored(self) -> None:
        text = "<kml><LineString><coordinates>0,0 0,1</coordinates></LineString></kml>"
        assert extract_geometry(text) == ([], [])

    def test_prefixed_namespace_not_extracted(self, prefixed_namespace_kml: str) -> None:
        assert extract_geometry(prefixed_namespace_kml) == ([], [])

    def test_details_and_geometries_are_parallel(self, nested_folders_kml: str) -> None:
        details, geometries = extract_geometry(nested_folders_kml)
        for detail, geometry in zip(details, geometries, strict=True):
            assert detail.geometry_type == geometry.geometry_type

    def test_idempotent(self, nested_folders_kml: str) -> None:
        assert extract_geometry(nested_folders_kml) == extract_geometry(nested_folders_kml)

    def test_malformed_raises(self, unclosed_tags_kml: str) -> None:
        with pytest.raises(KmlParseError):
            extract_geometry(unclosed_tags_kml)


class TestWarnings:
    """Dropped tokens are reported outside the primary result."""

    def test_warnings_collected_with_position(self, invalid_tokens_kml: str) -> None:
        result = extract_from_document(parse_document(invalid_tokens_kml))
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.token == "abc,def"
        assert warning.placemark_index == 0
        assert warning.geometry_index == 0
        assert "longitude" in warning.reason

    def test_on_warning_callback(self, invalid_tokens_kml: str) -> None:
        received: list[CoordinateWarning] = []
        extract_geometry(invalid_tokens_kml, on_warning=received.append)
        assert [w.token for w in received] == ["abc,def"]

    def test_no_warnings_for_clean_document(self, nested_folders_kml: str) -> None:
        result = extract_from_document(parse_document(nested_folders_kml))
        assert result.warnings == []

    def test_total_length(self, nested_folders_kml: str) -> None:
        result = extract_from_document(parse_document(nested_folders_kml))
        assert result.total_length_km == pytest.approx(sum(d.length_km for d in result.details))


class TestLengthModels:
    """Earth model selection."""

    def test_wgs84_model(self) -> None:
        config = InspectorConfig(length_model="wgs84")
        details, _ = extract_geometry(_placemark("0,0 1,0"), config=config)
        # One degree of longitude on the WGS 84 equator.
        assert details[0].length_km == pytest.approx(111.32, abs=0.01)

    def test_haversine_default(self) -> None:
        details, _ = extract_geometry(_placemark("0,0 1,0"))
        assert details[0].length_km == pytest.approx(111.195, abs=0.001)
