"""Build a regular raster over a region's extent and polygonize its cells.

The raster is an ``xarray.Dataset`` on cell-centre ``x``/``y`` coordinates
with a 2-D ``cell_index`` variable. It is north-up: anchored at the extent's
top-left corner (xmin, ymax), with ``y`` descending and cells numbered
1..N in row-major order from that corner. Column and row counts are
rounded up, so the raster always covers the extent; border cells may
reach past it and overlap filtering takes care of them.
"""

import logging
import math
from typing import Optional, Tuple, Union

import numpy as np
import geopandas as gpd
import shapely
import xarray as xr
from pyproj import CRS

__all__ = ['compute_extent', 'build_raster', 'raster_to_polygons']

logger = logging.getLogger(__name__)

Extent = Tuple[float, float, float, float]

# Spans within this relative distance of a whole number of cells are not rounded up
_CELL_COUNT_TOLERANCE = 1e-9


def compute_extent(region: gpd.GeoSeries) -> Extent:
    """Bounding rectangle (xmin, ymin, xmax, ymax) of the region.

    Raises
    ------
    ValueError
        If the extent is not finite or has zero width or height.
    """
    xmin, ymin, xmax, ymax = (float(v) for v in region.total_bounds)
    if not all(math.isfinite(v) for v in (xmin, ymin, xmax, ymax)):
        raise ValueError("Region extent is not finite")
    if xmax <= xmin or ymax <= ymin:
        raise ValueError(
            f"Region extent is degenerate: width={xmax - xmin}, height={ymax - ymin}"
        )
    return xmin, ymin, xmax, ymax


def _cell_count(span: float, resolution: float) -> int:
    n = span / resolution
    return max(1, math.ceil(n - _CELL_COUNT_TOLERANCE * max(1.0, n)))


def build_raster(
    extent: Extent,
    resolution: float,
    crs: Optional[Union[CRS, str]] = None,
) -> xr.Dataset:
    """Lay out an empty square-cell raster covering ``extent``.

    Parameters
    ----------
    extent : tuple of float
        (xmin, ymin, xmax, ymax) in the grid CRS.
    resolution : float
        Cell side length, in grid CRS units. Must be strictly positive.
    crs : pyproj.CRS or str, optional
        Grid CRS, stored as WKT in ``attrs['crs']``.

    Returns
    -------
    xr.Dataset
        Dims (y, x); data variable ``cell_index`` (int64, 1..N).

    Raises
    ------
    ValueError
        If resolution is not a finite positive number.
    """
    resolution = float(resolution)
    if not math.isfinite(resolution) or resolution <= 0:
        raise ValueError(f"Resolution must be positive, got: {resolution}")

    xmin, ymin, xmax, ymax = extent
    nx = _cell_count(xmax - xmin, resolution)
    ny = _cell_count(ymax - ymin, resolution)

    x = xmin + (np.arange(nx) + 0.5) * resolution
    y = ymax - (np.arange(ny) + 0.5) * resolution
    cell_index = np.arange(1, nx * ny + 1, dtype=np.int64).reshape(ny, nx)

    attrs = {
        "resolution": resolution,
        "xmin": xmin,
        "ymax": ymax,
    }
    if crs is not None:
        attrs["crs"] = CRS.from_user_input(crs).to_wkt()

    logger.info("Raster: %d x %d = %d cells at resolution %s", nx, ny, nx * ny, resolution)

    return xr.Dataset(
        {"cell_index": (("y", "x"), cell_index)},
        coords={"y": y, "x": x},
        attrs=attrs,
    )


def raster_to_polygons(
    ds: xr.Dataset,
    crs: Optional[Union[CRS, str]] = None,
) -> gpd.GeoDataFrame:
    """Convert every raster cell into a square polygon.

    Rows follow ``cell_index`` order (row-major from the top-left cell).

    Parameters
    ----------
    ds : xr.Dataset
        Raster from ``build_raster``.
    crs : pyproj.CRS or str, optional
        CRS for the polygons. Defaults to the WKT in ``attrs['crs']``.

    Returns
    -------
    gpd.GeoDataFrame
        Columns ``cell_index`` and ``geometry``, in the raster CRS.
    """
    half = ds.attrs["resolution"] / 2
    xx, yy = np.meshgrid(ds["x"].values, ds["y"].values)
    xx = xx.ravel()
    yy = yy.ravel()

    boxes = shapely.box(xx - half, yy - half, xx + half, yy + half)
    cells = gpd.GeoDataFrame(
        {"cell_index": ds["cell_index"].values.ravel()},
        geometry=boxes,
        crs=crs if crs is not None else ds.attrs.get("crs"),
    )
    logger.debug("Polygonized %d cells", len(cells))
    return cells
