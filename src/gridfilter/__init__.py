"""`gridfilter` - regular-grid candidate sites filtered by region overlap.

Subpackages:
- grid: Raster construction, equal-area overlap, filtering, centroids
- schemas: Pydantic configuration layers
- contracts: Stage invariants
- visualization: Plotting
- cli: Command-line runner
"""

from gridfilter.grid import (
    GridBuilder,
    GridConfigurationError,
    GridResult,
    build_grid,
    clamp_overlap_threshold,
)

__version__ = "0.1.0"

__all__ = [
    "GridBuilder",
    "GridConfigurationError",
    "GridResult",
    "build_grid",
    "clamp_overlap_threshold",
]
