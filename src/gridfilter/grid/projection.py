"""Equal-area CRS selection and reprojection helpers.

Planar area is only a valid proxy for true area under an equal-area
projection, so overlap ratios are computed in one. The choice is
configurable: ``"auto"`` keeps a region CRS that is already equal-area,
and otherwise centres a Lambert azimuthal equal-area projection on the
region.
"""

import logging
from typing import Optional, TypeVar, Union

import geopandas as gpd
from pyproj import CRS

__all__ = [
    'is_equal_area',
    'laea_for_region',
    'select_equal_area_crs',
    'select_grid_crs',
    'to_crs_if_needed',
]

logger = logging.getLogger(__name__)

# Substrings of PROJ method names for projections that preserve area
EQUAL_AREA_METHODS = ("equal area", "mollweide", "sinusoidal")

GeoT = TypeVar("GeoT", gpd.GeoSeries, gpd.GeoDataFrame)


def is_equal_area(crs: Optional[CRS]) -> bool:
    """Whether ``crs`` is a projected equal-area CRS."""
    if crs is None:
        return False
    if crs.is_bound:
        crs = crs.source_crs
    if not crs.is_projected or crs.coordinate_operation is None:
        return False
    method = crs.coordinate_operation.method_name.lower()
    return any(token in method for token in EQUAL_AREA_METHODS)


def laea_for_region(region: gpd.GeoSeries) -> CRS:
    """Lambert azimuthal equal-area CRS centred on the region's bounding box.

    Parameters
    ----------
    region : gpd.GeoSeries
        Region with a defined CRS.

    Returns
    -------
    pyproj.CRS
        Metric LAEA projection on the WGS84 datum.
    """
    lon_min, lat_min, lon_max, lat_max = region.to_crs(epsg=4326).total_bounds
    lat_0 = (lat_min + lat_max) / 2
    lon_0 = (lon_min + lon_max) / 2
    return CRS.from_proj4(
        f"+proj=laea +lat_0={lat_0:.6f} +lon_0={lon_0:.6f} "
        "+x_0=0 +y_0=0 +datum=WGS84 +units=m +no_defs"
    )


def select_equal_area_crs(region: gpd.GeoSeries, setting: str = "auto") -> Optional[CRS]:
    """Choose the CRS in which cell and overlap areas are measured.

    Parameters
    ----------
    region : gpd.GeoSeries
        Normalized region (see ``as_region``).
    setting : str
        ``"auto"`` or any CRS definition accepted by pyproj.

    Returns
    -------
    pyproj.CRS or None
        None when the region has no CRS; its coordinates are then used
        as planar coordinates directly.
    """
    if region.crs is None:
        if setting != "auto":
            logger.warning(
                "Region has no CRS; ignoring configured area CRS %s", setting
            )
        return None

    if setting != "auto":
        crs = CRS.from_user_input(setting)
        if not is_equal_area(crs):
            logger.warning("Configured area CRS is not recognised as equal-area: %s", setting)
        return crs

    if is_equal_area(region.crs):
        logger.debug("Region CRS is equal-area; measuring areas in place")
        return region.crs

    crs = laea_for_region(region)
    logger.info("Measuring areas in %s", crs.srs)
    return crs


def select_grid_crs(region_crs: Optional[CRS], equal_area_crs: Optional[CRS]) -> Optional[CRS]:
    """CRS in which the raster is laid out.

    Projected (and CRS-less) regions are gridded in their own coordinates,
    so the resolution is in the region's linear units. Geographic regions
    are gridded in the equal-area CRS, so the resolution is in metres.
    """
    if region_crs is not None and region_crs.is_geographic:
        return equal_area_crs
    return region_crs


def to_crs_if_needed(data: GeoT, crs: Optional[Union[CRS, str]]) -> GeoT:
    """Reproject a copy of ``data`` to ``crs``, skipping identity transforms."""
    if crs is None or data.crs is None or data.crs == crs:
        return data.copy()
    return data.to_crs(crs)
