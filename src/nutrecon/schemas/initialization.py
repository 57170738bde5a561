"""Complete runtime initialization for the nutrecon pipeline.

This module handles ALL initialization responsibilities:
- Loading the user config file
- Configuration resolution (CLI > User > Param)
- Output directory setup
- Configuration persistence with run ID

Runtime code receives the resulting InternalConfig and output directories.
"""

import importlib.util
import json
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from datetime import datetime, timezone

from nutrecon.schemas.resolve import resolve_config
from nutrecon.schemas.param import ParamConfig
from nutrecon.schemas.user import UserConfig
from nutrecon.schemas.cli import CLIConfig
from nutrecon.schemas.internal import InternalConfig
from nutrecon.setup_directories import setup_output_directories


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

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
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load config module from {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def generate_run_id() -> str:
    """Return a sortable run identifier: UTC timestamp plus random suffix."""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return f"{stamp}_{uuid.uuid4().hex[:8]}"


def persist_runtime_config(config: InternalConfig, run_id: str, output_dirs: Dict[str, Path]) -> Path:
    """Persist the resolved configuration next to the outputs.

    Saves the complete resolved configuration for reproducibility.

    Returns
    -------
    Path
        Path of the written JSON file.
    """
    config_output_dir = Path(output_dirs["base"])
    config_output_dir.mkdir(parents=True, exist_ok=True)

    config_file = config_output_dir / f"runtime_config_{run_id}.json"

    config_dict = config.model_dump()
    config_dict["run_id"] = run_id
    config_dict["created_at"] = datetime.now(timezone.utc).isoformat()

    with open(config_file, 'w') as f:
        json.dump(config_dict, f, indent=2, default=str)

    return config_file


def init_runtime_config(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
) -> Tuple[InternalConfig, Dict[str, Path], str]:
    """Complete runtime initialization - single entry point for nutrecon.

    1. Configuration resolution (CLI > User > Param)
    2. Output directory setup
    3. Configuration persistence with run ID

    Parameters
    ----------
    user_config_path : str, optional
        Path to a Python file exposing a CONFIG dict. If None, only
        CLI overrides are applied on top of the expert defaults.
    cli_args : dict, optional
        CLIConfig-compatible overrides; None values are ignored.

    Returns
    -------
    tuple
        (InternalConfig, output directory dict, run ID)

    Examples
    --------
    >>> config, output_dirs, run_id = init_runtime_config("scripts/user_config.py")
    >>> HarmonizationPipeline(config, output_dirs).run()
    """
    param_cfg = ParamConfig()

    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))
    else:
        user_cfg = UserConfig()

    cli_dict = {k: v for k, v in (cli_args or {}).items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict)

    config = resolve_config(param_cfg, user_cfg, cli_cfg)
    output_dirs = setup_output_directories(config.base_dir)

    run_id = generate_run_id()
    if config.output.persist_config:
        persist_runtime_config(config, run_id, output_dirs)

    return config, output_dirs, run_id


__all__ = [
    'init_runtime_config',
    'load_user_config_dict',
    'generate_run_id',
    'persist_runtime_config',
]
