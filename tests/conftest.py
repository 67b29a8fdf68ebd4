"""Shared pytest fixtures for the wkt_layers test suite."""

from pathlib import Path

import pytest

from wkt_layers.models.entity import RawEntity

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def sample_entities_json(data_dir: Path) -> Path:
    """Path to a JSON export with valid, empty, null and malformed records."""
    return data_dir / "countries_sample.json"


# ---------------------------------------------------------------------------
# Geometry text fixtures
# ---------------------------------------------------------------------------

POLYGON_TEXT = "POLYGON ((1 2, 3 4, 5 6))"
MULTIPOLYGON_TEXT = "MULTIPOLYGON (((1 2, 3 4, 5 6), (7 8, 9 10, 11 12)))"
BAD_POINT_TEXT = "POLYGON ((1 2, a b, 5 6))"


@pytest.fixture()
def polygon_text() -> str:
    return POLYGON_TEXT


@pytest.fixture()
def multipolygon_text() -> str:
    return MULTIPOLYGON_TEXT


# ---------------------------------------------------------------------------
# Raw entity collections
# ---------------------------------------------------------------------------


@pytest.fixture()
def mixed_entities() -> list[RawEntity]:
    """Valid, missing, empty and malformed entities, in a fixed order."""
    return [
        RawEntity(id=1, geometry_text=POLYGON_TEXT),
        RawEntity(id=2, geometry_text=None),
        RawEntity(id=3, geometry_text=MULTIPOLYGON_TEXT),
        RawEntity(id=4, geometry_text=""),
        RawEntity(id=5, geometry_text=BAD_POINT_TEXT),
        RawEntity(id=6, geometry_text="POLYGON ((10 20, 30 40, 50 60))"),
    ]


@pytest.fixture()
def large_entities() -> list[RawEntity]:
    """A collection big enough that a stream is still running after the first event."""
    ring = ", ".join(f"{i} {i + 1}" for i in range(200))
    return [RawEntity(id=i, geometry_text=f"POLYGON (({ring}))") for i in range(2_000)]
