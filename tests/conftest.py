"""Root-level pytest fixtures for the gridfilter test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture, plus reusable regions. Tests use these fixtures instead of
creating raw dict configs.
"""

import pytest
from pathlib import Path
import tempfile
import shutil

import geopandas as gpd
from shapely.geometry import Polygon, box

from gridfilter.schemas import ParamConfig, UserConfig, resolve_config


# Exemplary projection from the package docs: LAEA over central Europe
LAEA_EUROPE = (
    "+proj=laea +lat_0=52 +lon_0=10 +x_0=4321000 +y_0=3210000 "
    "+ellps=GRS80 +towgs84=0,0,0,0,0,0,0 +units=m +no_defs"
)


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_custom_resolution(make_config):
    ...     config = make_config(RESOLUTION=200, PROP=0.5)
    ...     assert config.grid.resolution == 200.0
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


# =============================================================================
# Region Fixtures
# =============================================================================

@pytest.fixture
def square_region():
    """2 km x 2 km square in an equal-area CRS (ETRS89-LAEA)."""
    return gpd.GeoDataFrame(geometry=[box(0, 0, 2000, 2000)], crs="EPSG:3035")


@pytest.fixture
def irregular_region():
    """Irregular quadrilateral in a proj4 LAEA CRS with datum shift."""
    polygon = Polygon([(0, 20), (0, 200), (2000, 2000), (3000, 0)])
    return gpd.GeoDataFrame(geometry=[polygon], crs=LAEA_EUROPE)


@pytest.fixture
def tiny_region():
    """10 m x 10 m square, far smaller than a default cell."""
    return gpd.GeoDataFrame(geometry=[box(0, 0, 10, 10)], crs="EPSG:3035")


@pytest.fixture
def geographic_region():
    """Small lon/lat box in central Europe (about 7 km x 5.5 km)."""
    return gpd.GeoDataFrame(geometry=[box(10.0, 50.0, 10.1, 50.05)], crs="EPSG:4326")


@pytest.fixture
def utm_region():
    """5 km x 4 km box in UTM zone 32N (projected, not equal-area)."""
    return gpd.GeoDataFrame(
        geometry=[box(500000, 5540000, 505000, 5544000)], crs="EPSG:32632"
    )
