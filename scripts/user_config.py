"""gridfilter user configuration.

This is the user-facing configuration file. Modify settings here to customize
grid construction. Expert defaults live in gridfilter/schemas/param.py

Usage:
    python scripts/run_grid_filter.py region.geojson --config scripts/user_config.py
    python scripts/run_grid_filter.py region.geojson --config scripts/user_config.py --prop 0.8
"""

CONFIG = {
    # ========================================================================
    # GRID SETTINGS
    # ========================================================================
    "RESOLUTION": 200,          # Cell size; metres when the region is in lon/lat
    "PROP": 0.5,                # Minimum share of a cell inside the region (0.01-1)
    "CELL_GEOMETRY": "clipped", # "clipped" (part inside region) or "full" (whole square)
    "EQUAL_AREA_CRS": "auto",   # "auto" or any CRS string, e.g. "EPSG:3035"

    # ========================================================================
    # OUTPUT
    # ========================================================================
    "PLOT_GRID": False,
    "PLOT_PATH": None,          # Image file for the plot; required when PLOT_GRID is on
    "LOG_LEVEL": "INFO",
}
