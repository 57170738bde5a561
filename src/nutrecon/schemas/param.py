"""ParamConfig: Expert defaults for the harmonization pipeline.

Defines file names, CSV conventions, output switches and logging. The
reconciliation rules themselves (depth and year cutoffs, minimum sample
count, statistic set) are fixed in ``nutrecon.nutrients.categories`` and
are not configurable.

Runtime code NEVER reads from ParamConfig directly - it only receives
InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from nutrecon.schemas.base import NutreconBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class SourcesConfig(NutreconBaseModel):
    """Input table locations."""
    source_a: Optional[str] = None
    source_b: Optional[str] = None


class OutputFilesConfig(NutreconBaseModel):
    """Output artifact file names (written under outputs/)."""
    combined: str = "combined_surface_nutrients.csv"
    summary: str = "site_summary.csv"
    prevalence: str = "site_year_prevalence.csv"

    @field_validator("combined", "summary", "prevalence")
    @classmethod
    def require_csv_suffix(cls, v):
        """Output tables are always CSV."""
        if not v.lower().endswith(".csv"):
            raise ValueError(f"Output file name must end with .csv: {v}")
        return v


class CsvConfig(NutreconBaseModel):
    """CSV conventions for reading and writing tables."""
    date_format: str = "%Y-%m-%d"
    na_rep: str = ""


class OutputConfig(NutreconBaseModel):
    """Output configuration."""
    files: OutputFilesConfig = Field(default_factory=OutputFilesConfig)
    write_prevalence: bool = True
    persist_config: bool = True


class LoggingConfig(NutreconBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    filename: str = "nutrecon_pipeline.log"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(NutreconBaseModel):
    """Complete expert configuration with all defaults.

    Usage
    -----
    This config is the base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    base_dir: Optional[str] = None
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    csv: CsvConfig = Field(default_factory=CsvConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
