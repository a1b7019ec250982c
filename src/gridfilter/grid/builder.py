"""Build a filtered grid of candidate sites over a region.

GridBuilder lays a regular square raster over the region's extent,
measures how much of every cell falls inside the region under an
equal-area projection, keeps the cells whose share meets the overlap
threshold, and returns their centroids as candidate points together with
their geometry. The centroids are the search space for a downstream
placement optimizer.

Stages:
1. Raster over the region's bounding box (grid CRS)
2. Polygonization with a stable cell_index 1..N
3. Copies of region and cells reprojected to the equal-area CRS
4. Overlap ratio per cell, keyed by cell_index
5. Threshold filter; GridConfigurationError if nothing survives
6. Retained geometry back in the region's CRS
7. Centroids and dense IDs 1..M in cell_index order
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Union, TYPE_CHECKING

import numpy as np
import pandas as pd
import geopandas as gpd
from pyproj import CRS

from gridfilter.contracts import (
    assert_rastered,
    assert_polygonized,
    assert_overlap_ratios,
    assert_candidates,
)
from gridfilter.grid.grid_utils import compute_centroids, to_km2
from gridfilter.grid.overlap import compute_overlap, filter_cells
from gridfilter.grid.projection import select_equal_area_crs, select_grid_crs, to_crs_if_needed
from gridfilter.grid.raster import build_raster, compute_extent, raster_to_polygons
from gridfilter.grid.region import RegionLike, as_region

if TYPE_CHECKING:
    from matplotlib.figure import Figure
    from gridfilter.schemas import InternalConfig

__all__ = ['GridBuilder', 'GridResult', 'build_grid']

logger = logging.getLogger(__name__)

Renderer = Callable[[gpd.GeoSeries, "GridResult"], Any]


@dataclass(frozen=True, eq=False)
class GridResult:
    """Candidate points and retained cell geometry.

    Unpacks as ``points, cells = result``. Row ``i`` of ``cells`` is the
    geometry whose centroid is row ``i`` of ``points``.

    Attributes
    ----------
    points : pd.DataFrame
        Columns ``ID`` (1..M), ``X``, ``Y`` in the region's CRS.
    cells : gpd.GeoDataFrame
        Columns ``ID``, ``cell_index``, ``ratio`` and geometry, in the
        region's CRS.
    resolution : float
        Cell side length used.
    overlap_threshold : float
        Effective (clamped) threshold.
    n_cells_total : int
        Number of raster cells before filtering.
    overlap_area_km2 : float
        Area of the region covered by the raster, in km².
    retained_area_km2 : float
        Summed area of the retained geometry, in km².
    equal_area_crs : pyproj.CRS or None
        CRS the areas were measured in.
    figure : matplotlib.figure.Figure or None
        Plot drawn by ``GridPlotter`` when plotting was requested without
        a custom renderer.
    """
    points: pd.DataFrame
    cells: gpd.GeoDataFrame
    resolution: float
    overlap_threshold: float
    n_cells_total: int
    overlap_area_km2: float
    retained_area_km2: float
    equal_area_crs: Optional[CRS] = None
    figure: Optional["Figure"] = field(default=None, repr=False)

    def __iter__(self):
        return iter((self.points, self.cells))

    def __len__(self) -> int:
        return len(self.points)

    def summary(self) -> Dict[str, Any]:
        """Scalar facts about the grid, for logging and plot titles."""
        return {
            "resolution": self.resolution,
            "overlap_threshold": self.overlap_threshold,
            "n_cells_total": self.n_cells_total,
            "n_candidates": len(self.points),
            "overlap_area_km2": self.overlap_area_km2,
            "retained_area_km2": self.retained_area_km2,
        }


class GridBuilder:
    """Config-driven candidate grid construction.

    Stateless apart from its configuration: one ``build`` call produces
    one ``GridResult`` and nothing carries over between calls.

    Examples
    --------
    >>> from gridfilter.schemas import resolve_config, UserConfig
    >>> config = resolve_config(None, UserConfig(RESOLUTION=200, PROP=0.5))
    >>> points, cells = GridBuilder(config).build(region_gdf)
    """

    def __init__(self, config: "InternalConfig"):
        """Store config.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration. The overlap threshold
            is already clamped by ``resolve_config``.
        """
        self.config = config
        self.resolution = config.grid.resolution
        self.overlap_threshold = config.grid.overlap_threshold
        self.cell_geometry = config.grid.cell_geometry
        self.equal_area_setting = config.grid.equal_area_crs
        self.plot_enabled = config.visualization.enabled

        logger.debug(
            "GridBuilder initialized: resolution=%s, overlap_threshold=%s, cell_geometry=%s",
            self.resolution, self.overlap_threshold, self.cell_geometry,
        )

    def build(
        self,
        region: RegionLike,
        crs: Optional[Union[str, int, CRS]] = None,
        plot: Optional[bool] = None,
        renderer: Optional[Renderer] = None,
    ) -> GridResult:
        """Build the candidate grid for ``region``.

        Parameters
        ----------
        region : GeoDataFrame, GeoSeries or shapely geometry
            Area of interest. Not modified.
        crs : str, int or pyproj.CRS, optional
            CRS for a region that carries none (e.g. a bare shapely polygon).
        plot : bool, optional
            Render the result. Defaults to ``config.visualization.enabled``.
            The default ``GridPlotter`` figure is attached as ``result.figure``
            and saved to ``config.visualization.output_path`` when set.
        renderer : callable, optional
            ``renderer(region, result)`` used instead of ``GridPlotter``
            when plotting. Its return value is ignored.

        Returns
        -------
        GridResult

        Raises
        ------
        GridConfigurationError
            If no cell meets the overlap threshold.
        ValueError
            If the region is empty, non-polygonal or has a degenerate extent.
        """
        region_gs = as_region(region, crs)
        original_crs = region_gs.crs

        ea_crs = select_equal_area_crs(region_gs, self.equal_area_setting)
        grid_crs = select_grid_crs(original_crs, ea_crs)
        region_grid = to_crs_if_needed(region_gs, grid_crs)

        ds = build_raster(compute_extent(region_grid), self.resolution, crs=grid_crs)
        assert_rastered(ds)

        cells = raster_to_polygons(ds, crs=grid_crs)
        assert_polygonized(cells, int(ds["cell_index"].size))

        region_ea = to_crs_if_needed(region_grid, ea_crs)
        cells_ea = to_crs_if_needed(cells, ea_crs)

        table, pieces = compute_overlap(region_ea, cells_ea)
        assert_overlap_ratios(table)

        retained = filter_cells(table, self.overlap_threshold)
        index = retained["cell_index"].to_numpy()

        if self.cell_geometry == "clipped":
            geometry = pieces.geometry.loc[index]
            retained_area = float(geometry.area.sum())
        else:
            geometry = cells.set_index("cell_index").geometry.loc[index]
            retained_area = float(retained["cell_area"].sum())
        geometry = to_crs_if_needed(geometry.reset_index(drop=True), original_crs)

        x, y = compute_centroids(geometry.values)
        ids = np.arange(1, len(index) + 1)

        points = pd.DataFrame({"ID": ids, "X": x, "Y": y})
        cells_out = gpd.GeoDataFrame(
            {
                "ID": ids,
                "cell_index": index,
                "ratio": retained["ratio"].to_numpy(),
            },
            geometry=geometry.values,
            crs=original_crs,
        )
        assert_candidates(points, cells_out)

        result = GridResult(
            points=points,
            cells=cells_out,
            resolution=self.resolution,
            overlap_threshold=self.overlap_threshold,
            n_cells_total=len(table),
            overlap_area_km2=to_km2(table["overlap_area"].sum()),
            retained_area_km2=to_km2(retained_area),
            equal_area_crs=ea_crs,
        )
        logger.info("Grid built: %s", result.summary())

        if plot is None:
            plot = self.plot_enabled
        if plot:
            figure = self._render(region_gs, result, renderer)
            if figure is not None:
                result = replace(result, figure=figure)

        return result

    def _render(
        self,
        region: gpd.GeoSeries,
        result: GridResult,
        renderer: Optional[Renderer],
    ) -> Optional["Figure"]:
        """Hand the finished result to the rendering collaborator.

        Returns the ``GridPlotter`` figure (saved to
        ``visualization.output_path`` when set), or None for a custom
        renderer.
        """
        if renderer is not None:
            renderer(region, result)
            return None

        from gridfilter.visualization import GridPlotter
        return GridPlotter(self.config).plot(
            region, result, output_path=self.config.visualization.output_path
        )


def build_grid(
    region: RegionLike,
    resolution: float = 500.0,
    overlap_threshold: float = 1.0,
    plot: bool = False,
    crs: Optional[Union[str, int, CRS]] = None,
    renderer: Optional[Renderer] = None,
    config: Optional["InternalConfig"] = None,
    plot_path: Optional[str] = None,
) -> GridResult:
    """Build a candidate grid with explicit parameters.

    Convenience wrapper around ``GridBuilder``. The explicit arguments
    override the matching values of ``config`` (or of the defaults).

    Parameters
    ----------
    region : GeoDataFrame, GeoSeries or shapely geometry
        Area of interest.
    resolution : float, default 500
        Cell side length, in the region's linear units (metres when the
        region is geographic).
    overlap_threshold : float, default 1
        Minimum share of a cell inside the region; clamped to [0.01, 1].
    plot : bool, default False
        Render the result with ``renderer`` or ``GridPlotter``. Without a
        renderer the figure is returned as ``result.figure``.
    crs : str, int or pyproj.CRS, optional
        CRS for a region that carries none.
    renderer : callable, optional
        ``renderer(region, result)``.
    config : InternalConfig, optional
        Base configuration for the remaining settings.
    plot_path : str, optional
        Also save the ``GridPlotter`` figure here.

    Returns
    -------
    GridResult

    Raises
    ------
    GridConfigurationError
        If no cell meets the overlap threshold.
    ValueError
        On a non-positive resolution, a non-finite threshold or an invalid region.

    Examples
    --------
    >>> from shapely.geometry import box
    >>> points, cells = build_grid(box(0, 0, 2000, 2000), 1000, 0.5, crs="EPSG:3035")
    >>> points["ID"].tolist()
    [1, 2, 3, 4]
    """
    from gridfilter.schemas import CLIConfig, ParamConfig, resolve_config

    param = ParamConfig() if config is None else ParamConfig.model_validate(config.model_dump())
    cli = CLIConfig(
        resolution=resolution,
        overlap_threshold=overlap_threshold,
        plot=plot,
        plot_path=None if plot_path is None else str(plot_path),
    )
    internal = resolve_config(param, None, cli)
    return GridBuilder(internal).build(region, crs=crs, renderer=renderer)
