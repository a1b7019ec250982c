"""Candidate grid visualization.

Renders the region, the retained grid cells and their centroid IDs.
Figures are built on ``matplotlib.figure.Figure`` directly, so no pyplot
or display state is touched; callers save or embed the returned figure.
"""

import logging
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

import geopandas as gpd
from matplotlib.axes import Axes
from matplotlib.figure import Figure

try:
    import contextily as ctx
    CONTEXTILY_AVAILABLE = True
except ImportError:
    CONTEXTILY_AVAILABLE = False

if TYPE_CHECKING:
    from gridfilter.grid import GridResult
    from gridfilter.schemas import InternalConfig

__all__ = ['GridPlotter']

logger = logging.getLogger(__name__)


class GridPlotter:
    """Plot a region with its filtered candidate grid.

    **Layers** (bottom to top):

    - Optional basemap tiles (contextily), for regions with a CRS
    - Region polygon(s)
    - Retained cell geometry
    - Centroids, optionally labelled with their IDs

    The title carries the resolution, the effective overlap threshold,
    the region area covered by the raster, the number of cells and their
    summed area.

    Example usage::

        plotter = GridPlotter(config)
        fig = plotter.plot(region, result, output_path="plots/grid.png")
    """

    def __init__(self, config: "InternalConfig"):
        """Initialize plotter.

        Parameters
        ----------
        config : InternalConfig
            Runtime configuration; only the visualization section is read.
        """
        viz = config.visualization

        self.dpi = viz.dpi
        self.figsize = tuple(viz.figsize)
        self.output_format = viz.output_format

        self.region_color = viz.region_color
        self.cell_color = viz.cell_color
        self.cell_edgecolor = viz.cell_edgecolor
        self.point_color = viz.point_color
        self.label_points = viz.label_points

        self.use_basemap = viz.use_basemap
        self.basemap_alpha = viz.basemap_alpha

        if self.use_basemap and not CONTEXTILY_AVAILABLE:
            logger.warning("Basemap requested but contextily not installed")
            self.use_basemap = False

        logger.debug("GridPlotter initialized (format=%s, dpi=%s)", self.output_format, self.dpi)

    def _title(self, result: "GridResult") -> str:
        summary = result.summary()
        return (
            f"Resolution: {summary['resolution']:g} and prop: {summary['overlap_threshold']:g}\n"
            f"Total Area: {summary['overlap_area_km2']} km²\n"
            f"Number Grids: {summary['n_candidates']}\n"
            f"Sum Grid size: {summary['retained_area_km2']} km²"
        )

    def _add_basemap(self, ax: Axes, region: gpd.GeoSeries) -> None:
        """Add web tiles under the region."""
        if not self.use_basemap or region.crs is None:
            return
        try:
            ctx.add_basemap(
                ax,
                crs=region.crs.to_string(),
                source=ctx.providers.OpenStreetMap.Mapnik,
                alpha=self.basemap_alpha,
                attribution=False,
                zoom="auto",
            )
        except Exception as e:
            logger.warning("Could not add basemap: %s", e)

    def _add_points(self, ax: Axes, result: "GridResult") -> None:
        points = result.points
        ax.scatter(points["X"], points["Y"], color=self.point_color, s=12, zorder=3)
        if self.label_points:
            for pid, x, y in points[["ID", "X", "Y"]].itertuples(index=False):
                ax.annotate(
                    str(pid), (x, y),
                    xytext=(-3, 0), textcoords="offset points",
                    ha="right", va="center", fontsize=7,
                )

    def plot(
        self,
        region: gpd.GeoSeries,
        result: "GridResult",
        output_path: Optional[Union[str, Path]] = None,
    ) -> Figure:
        """Render the region and its candidate grid.

        Parameters
        ----------
        region : gpd.GeoSeries or gpd.GeoDataFrame
            Region in the same CRS as ``result.cells``.
        result : GridResult
            Output of ``GridBuilder.build``.
        output_path : str or Path, optional
            Save the figure here. The suffix defaults to ``output_format``.

        Returns
        -------
        matplotlib.figure.Figure
        """
        fig = Figure(figsize=self.figsize, dpi=self.dpi)
        ax = fig.subplots()

        region.plot(ax=ax, color=self.region_color, zorder=1)
        result.cells.plot(
            ax=ax, color=self.cell_color, edgecolor=self.cell_edgecolor,
            linewidth=0.5, zorder=2,
        )
        self._add_points(ax, result)
        self._add_basemap(ax, region)

        ax.set_title(self._title(result), fontsize=9)
        fig.tight_layout()

        if output_path is not None:
            path = Path(output_path)
            if not path.suffix:
                path = path.with_suffix(f".{self.output_format}")
            path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(path, dpi=self.dpi)
            logger.info("Plot saved: %s", path)

        return fig
