"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., RESOLUTION → resolution, PROP →
overlap_threshold). The short names ``resol``, ``prop`` and ``plotGrid``
are accepted as well, since many existing scripts use them.

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults.
"""

from typing import Literal, Optional
from pydantic import AliasChoices, Field, field_validator
from gridfilter.schemas.base import GridFilterBaseModel


class UserGridConfig(GridFilterBaseModel):
    """User-facing grid config."""
    resolution: Optional[float] = None
    overlap_threshold: Optional[float] = None
    cell_geometry: Optional[str] = None
    equal_area_crs: Optional[str] = None

    @field_validator("resolution", "overlap_threshold", mode="before")
    @classmethod
    def coerce_numeric(cls, v):
        """Accept int or float."""
        if v is not None:
            return float(v)
        return v

    @field_validator("cell_geometry", mode="before")
    @classmethod
    def normalize_cell_geometry(cls, v):
        """Normalize to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserVisualizationConfig(GridFilterBaseModel):
    """User-facing visualization config."""
    enabled: Optional[bool] = None
    dpi: Optional[int] = None
    figsize: Optional[tuple[float, float]] = None
    output_format: Optional[str] = None
    output_path: Optional[str] = None
    region_color: Optional[str] = None
    cell_color: Optional[str] = None
    cell_edgecolor: Optional[str] = None
    point_color: Optional[str] = None
    label_points: Optional[bool] = None
    use_basemap: Optional[bool] = None
    basemap_alpha: Optional[float] = None


class UserConfig(GridFilterBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(RESOLUTION=200, PROP=0.5, PLOT_GRID=True)
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Flat aliases
    resolution: Optional[float] = Field(
        None, validation_alias=AliasChoices("resolution", "RESOLUTION", "resol", "RESOL")
    )
    overlap_threshold: Optional[float] = Field(
        None,
        validation_alias=AliasChoices(
            "overlap_threshold", "OVERLAP_THRESHOLD", "prop", "PROP"
        ),
    )
    plot_grid: Optional[bool] = Field(
        None, validation_alias=AliasChoices("plot_grid", "PLOT_GRID", "plotGrid")
    )
    plot_path: Optional[str] = Field(
        None, validation_alias=AliasChoices("plot_path", "PLOT_PATH")
    )
    cell_geometry: Optional[Literal["clipped", "full"]] = Field(
        None, validation_alias=AliasChoices("cell_geometry", "CELL_GEOMETRY")
    )
    equal_area_crs: Optional[str] = Field(
        None, validation_alias=AliasChoices("equal_area_crs", "EQUAL_AREA_CRS")
    )
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, validation_alias=AliasChoices("log_level", "LOG_LEVEL")
    )

    # Nested overrides (advanced users)
    grid: Optional[UserGridConfig] = None
    visualization: Optional[UserVisualizationConfig] = None

    model_config = GridFilterBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("resolution", "overlap_threshold", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("cell_geometry", mode="before")
    @classmethod
    def normalize_cell_geometry(cls, v):
        """Normalize to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Normalize to uppercase."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        # Grid section
        grid = {}
        if self.resolution is not None:
            grid["resolution"] = self.resolution
        if self.overlap_threshold is not None:
            grid["overlap_threshold"] = self.overlap_threshold
        if self.cell_geometry is not None:
            grid["cell_geometry"] = self.cell_geometry
        if self.equal_area_crs is not None:
            grid["equal_area_crs"] = self.equal_area_crs

        # Merge with explicit grid config
        if self.grid is not None:
            grid.update(self.grid.model_dump(exclude_none=True))

        if grid:
            overrides["grid"] = grid

        # Visualization section
        visualization = {}
        if self.plot_grid is not None:
            visualization["enabled"] = self.plot_grid
        if self.plot_path is not None:
            visualization["output_path"] = self.plot_path
        if self.visualization is not None:
            visualization.update(self.visualization.model_dump(exclude_none=True))

        if visualization:
            overrides["visualization"] = visualization

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
