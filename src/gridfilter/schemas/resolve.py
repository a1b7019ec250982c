"""Merge the config layers into one frozen InternalConfig.

Layers, lowest to highest priority: ParamConfig defaults, the user's
CONFIG dict, command-line overrides. The overlap threshold is clamped
here, so runtime code only ever sees an effective value.
"""

from typing import Union, Optional
from gridfilter.schemas.param import ParamConfig
from gridfilter.schemas.user import UserConfig
from gridfilter.schemas.cli import CLIConfig
from gridfilter.schemas.internal import InternalConfig


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Recursively merge ``overrides`` into a copy of ``base``.

    Nested dicts merge key by key; any other value replaces the old one.

    >>> deep_merge({"grid": {"resolution": 500, "overlap_threshold": 1}},
    ...            {"grid": {"resolution": 200}})
    {'grid': {'resolution': 200, 'overlap_threshold': 1}}
    """
    merged = base.copy()
    for override in overrides:
        for key, value in override.items():
            if isinstance(merged.get(key), dict) and isinstance(value, dict):
                merged[key] = deep_merge(merged[key], value)
            else:
                merged[key] = value
    return merged


def _validated(cfg, model):
    if cfg is None or (isinstance(cfg, dict) and not cfg):
        return model()
    if isinstance(cfg, model):
        return cfg
    return model.model_validate(cfg)


def resolve_config(
    param_cfg: Union[dict, ParamConfig, None] = None,
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Build the runtime configuration for a grid run.

    Each layer may be a model, a plain dict or None (no overrides).

    Raises
    ------
    ValidationError
        If a layer, or the merged result, is invalid.
    ValueError
        If the overlap threshold is NaN.

    Examples
    --------
    >>> config = resolve_config(None, UserConfig(RESOLUTION=200, PROP=5))
    >>> config.grid.resolution, config.grid.overlap_threshold
    (200.0, 1.0)
    """
    from gridfilter.grid.grid_utils import clamp_overlap_threshold

    param = _validated(param_cfg, ParamConfig)
    user = _validated(user_cfg, UserConfig)
    cli = _validated(cli_cfg, CLIConfig)

    merged = deep_merge(
        param.model_dump(),
        user.to_internal_overrides(),
        cli.to_internal_overrides(),
    )
    merged["grid"]["overlap_threshold"] = clamp_overlap_threshold(
        merged["grid"]["overlap_threshold"]
    )
    return InternalConfig.model_validate(merged)
