"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs with aliases for common naming patterns
(e.g., SOURCE_A -> source_a, BASE_DIR -> base_dir). Users only specify
what they want to override from the expert defaults.
"""

from pathlib import Path
from typing import Literal, Optional, Union
from pydantic import Field, field_validator
from nutrecon.schemas.base import NutreconBaseModel


class UserOutputFilesConfig(NutreconBaseModel):
    """User-facing output file names."""
    combined: Optional[str] = None
    summary: Optional[str] = None
    prevalence: Optional[str] = None


class UserOutputConfig(NutreconBaseModel):
    """User-facing output config."""
    files: Optional[UserOutputFilesConfig] = None
    write_prevalence: Optional[bool] = None
    persist_config: Optional[bool] = None


class UserCsvConfig(NutreconBaseModel):
    """User-facing CSV config."""
    date_format: Optional[str] = None
    na_rep: Optional[str] = None


class UserConfig(NutreconBaseModel):
    """User-facing configuration schema.

    Usage
    -----
        user_cfg = UserConfig(
            SOURCE_A="data/org_a_nutrients.csv",
            SOURCE_B="data/org_b_nutrients.csv",
            BASE_DIR="output",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Top-level operational settings
    source_a: Optional[str] = Field(None, alias="SOURCE_A")
    source_b: Optional[str] = Field(None, alias="SOURCE_B")
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Output settings (flat aliases)
    write_prevalence: Optional[bool] = Field(None, alias="WRITE_PREVALENCE")
    date_format: Optional[str] = Field(None, alias="DATE_FORMAT")

    # Nested overrides (advanced users)
    output: Optional[UserOutputConfig] = None
    csv: Optional[UserCsvConfig] = None

    model_config = NutreconBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("source_a", "source_b", "base_dir", mode="before")
    @classmethod
    def coerce_paths(cls, v: Union[str, Path, None]):
        """Accept Path objects for path fields."""
        if isinstance(v, Path):
            return str(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log level in any case."""
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

        if self.base_dir is not None:
            overrides["base_dir"] = self.base_dir

        sources = {}
        if self.source_a is not None:
            sources["source_a"] = self.source_a
        if self.source_b is not None:
            sources["source_b"] = self.source_b
        if sources:
            overrides["sources"] = sources

        # Output section
        output = {}
        if self.write_prevalence is not None:
            output["write_prevalence"] = self.write_prevalence
        if self.output is not None:
            output.update(self.output.model_dump(exclude_none=True))
        if output:
            overrides["output"] = output

        # CSV section
        csv = {}
        if self.date_format is not None:
            csv["date_format"] = self.date_format
        if self.csv is not None:
            csv.update(self.csv.model_dump(exclude_none=True))
        if csv:
            overrides["csv"] = csv

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
