"""Shared pytest fixtures for the tile registry test suite."""

from pathlib import Path

import pytest

from tile_registry.registry.landsat8 import Landsat8TileRegistry
from tile_registry.registry.sentinel2 import Sentinel2TileRegistry

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
# Sample file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def s2_grid_kml(data_dir: Path) -> Path:
    """Sentinel-2 grid sample: 31TGM, 32TLR, 01CCV (two polygons) and a label point."""
    return data_dir / "s2_tiling_grid_sample.kml"


@pytest.fixture()
def wrs2_grid_kml(data_dir: Path) -> Path:
    """WRS-2 grid sample: 198/30 via SchemaData, 13/33 via placemark name."""
    return data_dir / "wrs2_grid_sample.kml"


@pytest.fixture()
def s2_tile_map(data_dir: Path) -> Path:
    """Persisted Sentinel-2 tile map with three tiles."""
    return data_dir / "s2_tiles_sample.txt"


@pytest.fixture()
def invalid_tile_name_kml(edge_cases_dir: Path) -> Path:
    """One valid MGRS placemark followed by one with a non-MGRS name."""
    return edge_cases_dir / "s2_invalid_tile_name.kml"


@pytest.fixture()
def out_of_bounds_kml(edge_cases_dir: Path) -> Path:
    """MGRS placemark with a longitude beyond 180 degrees."""
    return edge_cases_dir / "s2_out_of_bounds.kml"


@pytest.fixture()
def degenerate_ring_kml(edge_cases_dir: Path) -> Path:
    """MGRS placemark whose ring has only two distinct points."""
    return edge_cases_dir / "s2_degenerate_ring.kml"


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "malformed_not_xml.kml"


@pytest.fixture()
def not_kml_xml(edge_cases_dir: Path) -> Path:
    """Well-formed XML whose root is not <kml>."""
    return edge_cases_dir / "not_kml_root.xml"


@pytest.fixture()
def empty_kml(edge_cases_dir: Path) -> Path:
    """Path to a valid KML with no placemarks."""
    return edge_cases_dir / "empty_no_placemarks.kml"


# ---------------------------------------------------------------------------
# Registry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def s2_registry() -> Sentinel2TileRegistry:
    """An empty Sentinel-2 registry with default configuration."""
    return Sentinel2TileRegistry()


@pytest.fixture()
def l8_registry() -> Landsat8TileRegistry:
    """An empty Landsat-8 registry with default configuration."""
    return Landsat8TileRegistry()
