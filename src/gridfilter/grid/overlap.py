"""Per-cell overlap ratios and threshold filtering.

The intersection of the region with the cell polygons does not keep a 1:1
row correspondence with the input cells (non-overlapping cells drop out,
row order is not preserved), so every value is keyed by ``cell_index``
and the full cell area is looked up by index, never by position.
"""

import logging
from typing import Tuple

import numpy as np
import pandas as pd
import geopandas as gpd

from gridfilter.grid.exceptions import GridConfigurationError

__all__ = ['compute_overlap', 'filter_cells', 'RATIO_TOLERANCE']

logger = logging.getLogger(__name__)

# Ratios within this distance below the threshold still pass (float noise at ratio 1)
RATIO_TOLERANCE = 1e-9


def compute_overlap(
    region: gpd.GeoSeries,
    cells: gpd.GeoDataFrame,
) -> Tuple[pd.DataFrame, gpd.GeoDataFrame]:
    """Compute the fraction of each cell that lies inside the region.

    Both inputs must be in the same (equal-area) CRS.

    Parameters
    ----------
    region : gpd.GeoSeries
        Dissolved region.
    cells : gpd.GeoDataFrame
        Cell polygons with a ``cell_index`` column.

    Returns
    -------
    table : pd.DataFrame
        One row per cell, sorted by ``cell_index``, with columns
        ``cell_index``, ``cell_area``, ``overlap_area`` and ``ratio``.
        Cells outside the region have ``overlap_area`` 0 and ``ratio`` 0.
    pieces : gpd.GeoDataFrame
        Intersection geometry (cell ∩ region) for every cell that
        overlaps the region, indexed by ``cell_index``.
    """
    region_df = gpd.GeoDataFrame(geometry=region.reset_index(drop=True))
    pieces = gpd.overlay(
        cells[["cell_index", "geometry"]],
        region_df,
        how="intersection",
        keep_geom_type=True,
    )
    if not pieces["cell_index"].is_unique:
        pieces = pieces.dissolve(by="cell_index", as_index=False)
    pieces = pieces.set_index("cell_index").sort_index()

    table = pd.DataFrame({
        "cell_index": cells["cell_index"].to_numpy(),
        "cell_area": cells.geometry.area.to_numpy(),
    }).sort_values("cell_index", ignore_index=True)

    overlap_area = pieces.geometry.area
    table["overlap_area"] = table["cell_index"].map(overlap_area).fillna(0.0)
    table["ratio"] = np.clip(table["overlap_area"] / table["cell_area"], 0.0, 1.0)

    logger.debug(
        "Overlap: %d of %d cells intersect the region", len(pieces), len(table)
    )
    return table, pieces


def filter_cells(table: pd.DataFrame, threshold: float) -> pd.DataFrame:
    """Keep cells whose ratio meets ``threshold``.

    Checked once, after every ratio is known.

    Parameters
    ----------
    table : pd.DataFrame
        Output of ``compute_overlap``.
    threshold : float
        Effective (already clamped) overlap threshold.

    Returns
    -------
    pd.DataFrame
        Retained rows in ascending ``cell_index`` order.

    Raises
    ------
    GridConfigurationError
        If no cell meets the threshold.
    """
    keep = table["ratio"] >= threshold - RATIO_TOLERANCE
    if not keep.any():
        logger.error(
            "No cell reaches overlap %.3f (best ratio %.3f)",
            threshold, float(table["ratio"].max()),
        )
        raise GridConfigurationError()

    retained = table.loc[keep].sort_values("cell_index", ignore_index=True)
    logger.info("Retained %d of %d cells at overlap >= %s", len(retained), len(table), threshold)
    return retained
