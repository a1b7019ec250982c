"""Core grid-filter execution logic.

This module contains the actual runner, separated from argument parsing.
``scripts/run_grid_filter.py`` and the ``gridfilter`` console script are
thin wrappers around ``run_grid_filter``.
"""

import sys
import json
import argparse
import logging
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any, List

import geopandas as gpd

from gridfilter.grid import GridBuilder, GridConfigurationError, GridResult
from gridfilter.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig


logger = logging.getLogger(__name__)

EXIT_CONFIGURATION_ERROR = 2


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the root logger with console and optional file handlers.

    Only the command-line entry points call this; library code never
    touches handlers.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    root.addHandler(ch)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    logger.debug("Logging: level=%s, file=%s", level, log_file)


def run_grid_filter(
    region_path: str,
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    output: Optional[str] = None,
    cells_output: Optional[str] = None,
    plot_path: Optional[str] = None,
    verbose: bool = False,
) -> GridResult:
    """Build a candidate grid for a region file.

    1. Loads and resolves configuration (Param < User < CLI)
    2. Reads the region with geopandas
    3. Builds the grid, rendering the plot when enabled
    4. Writes the point table (CSV) and cells, if asked

    Parameters
    ----------
    region_path : str
        Any vector file geopandas can read (GeoJSON, GPKG, Shapefile...).
    user_config_path : str, optional
        Python file with a CONFIG dict.
    cli_args : dict, optional
        CLI overrides. Keys: resolution, overlap_threshold, plot, log_level.
    output : str, optional
        CSV path for the ID, X, Y table.
    cells_output : str, optional
        Vector file path for the retained cells.
    plot_path : str, optional
        Image path; implies plotting. Overrides ``visualization.output_path``.
    verbose : bool, optional
        Log the full resolved configuration.

    Returns
    -------
    GridResult

    Raises
    ------
    GridConfigurationError
        If no cell meets the overlap threshold.
    ValueError
        If plotting is enabled without a plot path.
    """
    user_cfg = None
    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_dict = {k: v for k, v in (cli_args or {}).items() if v is not None}
    if plot_path is not None:
        cli_dict["plot"] = True
        cli_dict["plot_path"] = str(plot_path)
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    config = resolve_config(ParamConfig(), user_cfg, cli_cfg)
    if config.visualization.enabled and config.visualization.output_path is None:
        raise ValueError(
            "Plotting is enabled but no plot path is set; pass --plot PATH or set PLOT_PATH"
        )
    logging.getLogger("gridfilter").setLevel(config.logging.level)
    if verbose:
        logger.debug("Full internal configuration:\n%s", json.dumps(config.model_dump(), indent=2))

    region = gpd.read_file(region_path)
    logger.info("Region: %s (%d features, crs=%s)", region_path, len(region), region.crs)

    builder = GridBuilder(config)
    result = builder.build(region)

    if output is not None:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        result.points.to_csv(output, index=False, float_format=config.output.float_format)
        logger.info("Points written: %s", output)

    if cells_output is not None:
        Path(cells_output).parent.mkdir(parents=True, exist_ok=True)
        result.cells.to_file(cells_output, driver=config.output.cells_driver)
        logger.info("Cells written: %s", cells_output)

    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a grid of candidate sites filtered by overlap with a region"
    )
    parser.add_argument("region", help="Region vector file (GeoJSON, GPKG, Shapefile...)")
    parser.add_argument("--config", help="Path to user config file (Python, CONFIG dict)")
    parser.add_argument("--resolution", type=float, help="Cell size (metres for geographic regions)")
    parser.add_argument("--prop", type=float, dest="overlap_threshold",
                        help="Minimum share of a cell inside the region (0.01-1)")
    parser.add_argument("-o", "--output", help="CSV file for candidate points (ID, X, Y)")
    parser.add_argument("--cells-output", help="Vector file for retained cells")
    parser.add_argument("--plot", metavar="PATH", help="Save a plot of the grid")
    parser.add_argument("--log-file", help="Also log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging("INFO", args.log_file)

    try:
        result = run_grid_filter(
            args.region,
            user_config_path=args.config,
            cli_args={
                "resolution": args.resolution,
                "overlap_threshold": args.overlap_threshold,
                "log_level": "DEBUG" if args.verbose else None,
            },
            output=args.output,
            cells_output=args.cells_output,
            plot_path=args.plot,
            verbose=args.verbose,
        )
    except GridConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIGURATION_ERROR

    if args.output is None:
        result.points.to_csv(sys.stdout, index=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
