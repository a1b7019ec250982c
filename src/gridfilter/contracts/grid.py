"""Raster and polygonization stage contracts.

Enforces that the raster covers the region with a dense cell index, and
that polygonization produced exactly one polygon per raster cell.
"""

import numpy as np
import xarray as xr
import geopandas as gpd
from gridfilter.contracts.base import require


def assert_rastered(ds: xr.Dataset) -> None:
    """Enforce raster stage contract.

    Parameters
    ----------
    ds : xr.Dataset
        Dataset from raster.build_raster()

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require("x" in ds.coords, "Raster contract violated: missing 'x' coordinate")
    require("y" in ds.coords, "Raster contract violated: missing 'y' coordinate")
    require(
        "cell_index" in ds.data_vars,
        "Raster contract violated: missing 'cell_index' variable"
    )

    index = ds["cell_index"]
    require(
        index.ndim == 2,
        f"Raster contract violated: 'cell_index' has {index.ndim} dims, expected 2"
    )
    require(
        np.issubdtype(index.dtype, np.integer),
        f"Raster contract violated: 'cell_index' dtype is {index.dtype}, expected integer"
    )

    values = np.sort(index.values.ravel())
    require(
        np.array_equal(values, np.arange(1, values.size + 1)),
        "Raster contract violated: 'cell_index' is not exactly 1..N"
    )


def assert_polygonized(cells: gpd.GeoDataFrame, n_expected: int) -> None:
    """Enforce polygonization stage contract.

    Parameters
    ----------
    cells : gpd.GeoDataFrame
        Cell polygons from raster.raster_to_polygons()

    n_expected : int
        Number of raster cells

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        "cell_index" in cells.columns,
        "Polygon contract violated: missing 'cell_index' column"
    )
    require(
        len(cells) == n_expected,
        f"Polygon contract violated: {len(cells)} polygons for {n_expected} raster cells"
    )
    require(
        cells["cell_index"].is_unique,
        "Polygon contract violated: 'cell_index' is not unique"
    )
    require(
        not cells.geometry.is_empty.any(),
        "Polygon contract violated: empty cell geometry"
    )
