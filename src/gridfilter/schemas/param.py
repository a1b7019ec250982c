"""ParamConfig: Expert defaults for gridfilter.

This module defines the complete default configuration. ALL tunable
parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from gridfilter.schemas.base import GridFilterBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class GridConfig(GridFilterBaseModel):
    """Grid construction and overlap filtering configuration."""
    resolution: float = Field(
        500.0, gt=0, allow_inf_nan=False,
        description="Cell side length in grid CRS units (metres for geographic regions)",
    )
    overlap_threshold: float = Field(
        1.0, allow_inf_nan=False,
        description="Minimum fraction of a cell inside the region; clamped to [0.01, 1]",
    )
    cell_geometry: Literal["clipped", "full"] = "clipped"
    equal_area_crs: str = Field(
        "auto", description="'auto' or any CRS string understood by pyproj"
    )

    @field_validator("resolution", "overlap_threshold", mode="before")
    @classmethod
    def coerce_to_float(cls, v):
        """Allow int or float."""
        return float(v)


class VisualizationConfig(GridFilterBaseModel):
    """Visualization settings."""
    enabled: bool = False
    dpi: int = Field(150, ge=50)
    figsize: tuple[float, float] = (8.0, 8.0)
    output_format: Literal["png", "pdf", "jpeg", "svg"] = "png"
    output_path: Optional[str] = Field(
        None, description="Save plots here; the suffix defaults to output_format"
    )
    region_color: str = "orange"
    cell_color: str = "lightgreen"
    cell_edgecolor: str = "grey"
    point_color: str = "blue"
    label_points: bool = True
    use_basemap: bool = False
    basemap_alpha: float = Field(0.6, ge=0, le=1.0)


class OutputConfig(GridFilterBaseModel):
    """Output file configuration (CLI only)."""
    float_format: str = "%.3f"
    cells_driver: Literal["GeoJSON", "GPKG", "ESRI Shapefile"] = "GeoJSON"


class LoggingConfig(GridFilterBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(GridFilterBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    grid: GridConfig = Field(default_factory=GridConfig)
    visualization: VisualizationConfig = Field(default_factory=VisualizationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
