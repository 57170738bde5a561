"""Pydantic configuration schemas for the nutrecon pipeline.

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

from nutrecon.schemas.resolve import resolve_config
from nutrecon.schemas.internal import InternalConfig
from nutrecon.schemas.param import ParamConfig
from nutrecon.schemas.user import UserConfig
from nutrecon.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
