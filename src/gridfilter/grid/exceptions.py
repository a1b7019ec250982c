"""Errors raised by grid construction."""

GRID_CANNOT_BE_DRAWN = (
    "A grid cannot be drawn. Reduce the resolution or define a projection in meters."
)


class GridConfigurationError(ValueError):
    """No grid cell meets the overlap threshold.

    An empty search space is always a caller configuration error: the
    resolution is too coarse for the region, or the region is in angular
    units that the resolution was not meant for.
    """

    def __init__(self, message: str = GRID_CANNOT_BE_DRAWN):
        super().__init__(message)
