"""CLIConfig: Command-line operational overrides.

Minimal configuration for parameters that commonly change between runs:
input tables, output directory, verbosity.
"""

from typing import Literal, Optional
from nutrecon.schemas.base import NutreconBaseModel


class CLIConfig(NutreconBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(
            source_a="data/org_a.csv",
            base_dir="/scratch/nutrecon_output",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    source_a: Optional[str] = None
    source_b: Optional[str] = None
    base_dir: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    no_prevalence: bool = False

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)

        sources = {}
        if self.source_a is not None:
            sources["source_a"] = self.source_a
        if self.source_b is not None:
            sources["source_b"] = self.source_b
        if sources:
            overrides["sources"] = sources

        if self.no_prevalence:
            overrides["output"] = {"write_prevalence": False}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
