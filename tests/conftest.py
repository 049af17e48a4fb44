"""Shared pytest fixtures for the KML Inspector test suite."""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample KML text fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def single_linestring_kml(data_dir: Path) -> str:
    """One Placemark with one LineString along the equator (0,0 0,1 0,2)."""
    return (data_dir / "01_single_linestring.kml").read_text(encoding="utf-8")


@pytest.fixture()
def nested_folders_kml(data_dir: Path) -> str:
    """Document with nested Folders, Style, LookAt, MultiGeometry and a Point."""
    return (data_dir / "02_nested_folders_route.kml").read_text(encoding="utf-8")


@pytest.fixture()
def invalid_tokens_kml(data_dir: Path) -> str:
    """Two Placemarks, the first with an unparseable coordinate token."""
    return (data_dir / "03_invalid_coordinate_tokens.kml").read_text(encoding="utf-8")


@pytest.fixture()
def empty_coordinates_kml(data_dir: Path) -> str:
    """LineStrings with missing, blank and single-point coordinates."""
    return (data_dir / "04_empty_coordinates.kml").read_text(encoding="utf-8")


@pytest.fixture()
def no_recognized_kml(data_dir: Path) -> str:
    """Well-formed KML containing none of the recognized elements."""
    return (data_dir / "05_no_recognized_elements.kml").read_text(encoding="utf-8")


@pytest.fixture()
def prefixed_namespace_kml(data_dir: Path) -> str:
    """KML written with an explicit ``kml:`` prefix on every element."""
    return (data_dir / "06_prefixed_namespace.kml").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Edge-case KML fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> str:
    """Text that is not XML at all."""
    return (edge_cases_dir / "11_malformed_not_xml.kml").read_text(encoding="utf-8")


@pytest.fixture()
def unclosed_tags_kml(edge_cases_dir: Path) -> str:
    """XML with an unclosed ``<Placemark>``."""
    return (edge_cases_dir / "12_malformed_unclosed_tags.kml").read_text(encoding="utf-8")


@pytest.fixture()
def empty_file_kml(edge_cases_dir: Path) -> str:
    """A whitespace-only file."""
    return (edge_cases_dir / "13_empty_file.kml").read_text(encoding="utf-8")
