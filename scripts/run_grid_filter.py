#!/usr/bin/env python3
"""``gridfilter`` candidate grid runner.

Usage:
    python scripts/run_grid_filter.py region.geojson
    python scripts/run_grid_filter.py region.geojson --config scripts/user_config.py
    python scripts/run_grid_filter.py region.geojson --resolution 200 --prop 0.5 -o points.csv --plot grid.png

Note: User config in scripts/user_config.py, expert defaults in gridfilter.schemas.param
"""

import sys

from gridfilter.cli.run_grid import main


if __name__ == "__main__":
    sys.exit(main())
