"""CLIConfig: Command-line operational overrides.

Minimal configuration for parameters that commonly change between runs:
resolution, overlap threshold, plotting and plot path, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import Field
from gridfilter.schemas.base import GridFilterBaseModel


class CLIConfig(GridFilterBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(resolution=250, overlap_threshold=0.5, plot=True)
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    resolution: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    overlap_threshold: Optional[float] = Field(None, allow_inf_nan=False)
    plot: Optional[bool] = None
    plot_path: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        grid_overrides = {}
        if self.resolution is not None:
            grid_overrides["resolution"] = self.resolution
        if self.overlap_threshold is not None:
            grid_overrides["overlap_threshold"] = self.overlap_threshold

        if grid_overrides:
            overrides["grid"] = grid_overrides

        visualization_overrides = {}
        if self.plot is not None:
            visualization_overrides["enabled"] = self.plot
        if self.plot_path is not None:
            visualization_overrides["output_path"] = self.plot_path

        if visualization_overrides:
            overrides["visualization"] = visualization_overrides

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
