"""Utility functions for grid cell geometry.

Centralized helpers for:
- Overlap threshold clamping
- Cell centroid calculation
- Area unit conversion
"""

import logging
import math
from typing import Tuple

import numpy as np
import shapely

__all__ = [
    'MIN_OVERLAP_THRESHOLD',
    'MAX_OVERLAP_THRESHOLD',
    'clamp_overlap_threshold',
    'compute_centroids',
    'to_km2',
]

logger = logging.getLogger(__name__)

MIN_OVERLAP_THRESHOLD = 0.01
MAX_OVERLAP_THRESHOLD = 1.0


def clamp_overlap_threshold(threshold: float) -> float:
    """Clamp a requested overlap threshold into [0.01, 1.0].

    Values outside the range are coerced silently to the nearest bound;
    this is a usability guard, not a validation step.

    Parameters
    ----------
    threshold : float
        Requested minimum fraction of a cell that must lie in the region.

    Returns
    -------
    float
        ``max(0.01, min(1.0, threshold))``

    Raises
    ------
    ValueError
        If threshold is NaN, for which no bound is nearest.

    Examples
    --------
    >>> clamp_overlap_threshold(2)
    1.0
    >>> clamp_overlap_threshold(0.005)
    0.01
    """
    threshold = float(threshold)
    if math.isnan(threshold):
        raise ValueError("Overlap threshold must be a number, got NaN")
    return max(MIN_OVERLAP_THRESHOLD, min(MAX_OVERLAP_THRESHOLD, threshold))


def compute_centroids(geometries) -> Tuple[np.ndarray, np.ndarray]:
    """Compute planar centroids for a sequence of geometries.

    Centroids are taken in whatever coordinates the geometries carry;
    shapely does not look at the CRS.

    Parameters
    ----------
    geometries : array-like of shapely geometries
        For example ``GeoSeries.values``.

    Returns
    -------
    tuple of np.ndarray
        (x, y) centroid coordinates, one entry per geometry, in input order.
    """
    centroids = shapely.centroid(np.asarray(geometries, dtype=object))
    coords = shapely.get_coordinates(centroids)
    if len(coords) != len(centroids):
        raise ValueError("Cannot take the centroid of an empty geometry")
    return coords[:, 0], coords[:, 1]


def to_km2(area: float) -> float:
    """Square metres to square kilometres, rounded to 3 decimals."""
    return round(float(area) / 1e6, 3)
