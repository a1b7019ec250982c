"""Command-line interface modules for gridfilter.

This package contains the core execution logic, making scripts/ optional.
"""

from gridfilter.cli.run_grid import run_grid_filter, main

__all__ = ['run_grid_filter', 'main']
