"""Visualization and plotting module for candidate grids."""

from .plotter import GridPlotter

__all__ = ['GridPlotter']
