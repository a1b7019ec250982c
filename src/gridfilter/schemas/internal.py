"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict
from gridfilter.schemas.base import GridFilterBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalGridConfig(GridFilterBaseModel):
    """Runtime grid configuration.

    overlap_threshold is already clamped to [0.01, 1.0] by resolve_config().
    """
    resolution: float = Field(gt=0, allow_inf_nan=False)
    overlap_threshold: float = Field(ge=0.01, le=1.0)
    cell_geometry: Literal["clipped", "full"]
    equal_area_crs: str


class InternalVisualizationConfig(GridFilterBaseModel):
    """Runtime visualization settings."""
    enabled: bool
    dpi: int
    figsize: tuple[float, float]
    output_format: Literal["png", "pdf", "jpeg", "svg"]
    output_path: Optional[str]
    region_color: str
    cell_color: str
    cell_edgecolor: str
    point_color: str
    label_points: bool
    use_basemap: bool
    basemap_alpha: float


class InternalOutputConfig(GridFilterBaseModel):
    """Runtime output configuration."""
    float_format: str
    cells_driver: Literal["GeoJSON", "GPKG", "ESRI Shapefile"]


class InternalLoggingConfig(GridFilterBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(GridFilterBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that processing code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.resolution = config.grid.resolution  # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    grid: InternalGridConfig
    visualization: InternalVisualizationConfig
    output: InternalOutputConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
