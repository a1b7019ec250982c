"""Pydantic configuration schemas for gridfilter.

All configuration validation, coercion, and normalization happens at
schema validation time via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from gridfilter.schemas.resolve import resolve_config
from gridfilter.schemas.internal import InternalConfig
from gridfilter.schemas.param import ParamConfig
from gridfilter.schemas.user import UserConfig
from gridfilter.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
