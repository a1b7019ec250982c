"""Grid construction modules.

- raster: Extent, raster layout, polygonization
- projection: Equal-area CRS selection and reprojection
- overlap: Per-cell overlap ratios and threshold filtering
- builder: GridBuilder and build_grid
"""

from gridfilter.grid.exceptions import GridConfigurationError
from gridfilter.grid.grid_utils import clamp_overlap_threshold
from gridfilter.grid.builder import GridBuilder, GridResult, build_grid

__all__ = [
    "GridBuilder",
    "GridResult",
    "GridConfigurationError",
    "build_grid",
    "clamp_overlap_threshold",
]
