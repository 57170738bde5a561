"""Core harmonization pipeline execution logic.

This module contains the actual pipeline runner, separated from argument
parsing. Scripts are thin wrappers; this is the real implementation.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from nutrecon.pipeline.orchestrator import HarmonizationPipeline
from nutrecon.schemas.initialization import init_runtime_config


logger = logging.getLogger(__name__)


def run_harmonize_pipeline(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
    configure_logging: bool = True,
) -> Dict[str, Path]:
    """Execute the nutrient harmonization pipeline.

    1. Loads and resolves configuration (Param < User < CLI)
    2. Sets up output directories and persists the resolved config
    3. Runs the pipeline and writes the output tables

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict).
    cli_args : dict, optional
        CLI argument overrides. Keys: source_a, source_b, base_dir,
        log_level, no_prevalence. All optional; None values are ignored.
    verbose : bool, optional
        If True, enable DEBUG logging and print full resolved config.
    configure_logging : bool, optional
        Passed to ``HarmonizationPipeline.run``.

    Returns
    -------
    dict
        Written artifact paths.

    Raises
    ------
    FileNotFoundError
        If the user config or a source table does not exist.
    pydantic.ValidationError
        If configuration validation fails.
    SchemaError
        If a source table violates its schema.

    Examples
    --------
    Run with CLI overrides only::

        run_harmonize_pipeline(cli_args={
            "source_a": "data/org_a.csv",
            "source_b": "data/org_b.csv",
            "base_dir": "output",
        })
    """
    cli_args = dict(cli_args or {})
    if verbose and not cli_args.get("log_level"):
        cli_args["log_level"] = "DEBUG"

    config, output_dirs, run_id = init_runtime_config(user_config_path, cli_args)

    print(f"\n{'='*60}")
    print("Nutrient Dataset Harmonization")
    print('='*60)
    print(f"Config:   {user_config_path or '(defaults)'}")
    print(f"Source A: {config.sources.source_a}")
    print(f"Source B: {config.sources.source_b}")
    print(f"Output:   {output_dirs['outputs']}")
    print(f"Run ID:   {run_id}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('='*60)

    pipeline = HarmonizationPipeline(config, output_dirs, run_id=run_id)
    return pipeline.run(configure_logging=configure_logging)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Harmonize ORG_A and ORG_B nutrient datasets")
    parser.add_argument("config", nargs="?", help="Path to user config file")
    parser.add_argument("--source-a", help="ORG_A table (CSV)")
    parser.add_argument("--source-b", help="ORG_B table (CSV)")
    parser.add_argument("--base-dir", help="Output directory")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper, help="Override logging level")
    parser.add_argument("--no-prevalence", action="store_true",
                        help="Skip writing the site x year prevalence table")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    run_harmonize_pipeline(
        args.config,
        cli_args={
            "source_a": args.source_a,
            "source_b": args.source_b,
            "base_dir": args.base_dir,
            "log_level": args.log_level,
            "no_prevalence": args.no_prevalence or None,
        },
        verbose=args.verbose,
    )
