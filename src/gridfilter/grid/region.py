"""Normalize caller-supplied regions into a single dissolved geometry."""

import logging
from typing import Optional, Union

import geopandas as gpd
from pyproj import CRS
from shapely.geometry.base import BaseGeometry

__all__ = ['as_region']

logger = logging.getLogger(__name__)

RegionLike = Union[gpd.GeoDataFrame, gpd.GeoSeries, BaseGeometry]

_POLYGONAL = ("Polygon", "MultiPolygon")


def as_region(region: RegionLike, crs: Optional[Union[str, int, CRS]] = None) -> gpd.GeoSeries:
    """Return the region as a one-row GeoSeries carrying its CRS.

    Multi-row inputs are dissolved so overlapping parts are not counted
    twice. The caller's object is never modified.

    Parameters
    ----------
    region : GeoDataFrame, GeoSeries or shapely geometry
        Polygon(s) defining the area of interest.
    crs : str, int or pyproj.CRS, optional
        CRS for a bare shapely geometry, or for a GeoSeries/GeoDataFrame
        that has none. Must match the region's own CRS if both are set.

    Returns
    -------
    gpd.GeoSeries
        Single dissolved (Multi)Polygon.

    Raises
    ------
    ValueError
        Empty region, non-polygonal geometry, or conflicting CRS.
    TypeError
        Unsupported region type.
    """
    if isinstance(region, gpd.GeoDataFrame):
        series = region.geometry
    elif isinstance(region, gpd.GeoSeries):
        series = region
    elif isinstance(region, BaseGeometry):
        series = gpd.GeoSeries([region])
    else:
        raise TypeError(
            f"Region must be a GeoDataFrame, GeoSeries or shapely geometry, got {type(region).__name__}"
        )

    region_crs = series.crs
    if crs is not None:
        crs = CRS.from_user_input(crs)
        if region_crs is not None and region_crs != crs:
            raise ValueError(
                f"Region CRS {region_crs.to_string()} conflicts with crs argument {crs.to_string()}"
            )
        region_crs = crs

    if len(series) == 0 or series.is_empty.all():
        raise ValueError("Region is empty")

    geometry = series.union_all()
    if geometry.geom_type not in _POLYGONAL:
        raise ValueError(f"Region must be polygonal, got {geometry.geom_type}")

    if region_crs is None:
        logger.warning("Region has no CRS; treating coordinates as planar equal-area")

    return gpd.GeoSeries([geometry], crs=region_crs)
