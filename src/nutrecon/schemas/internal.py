"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully
validated and immutable, and the fields the pipeline depends on (both
source paths and the output base directory) are required.
"""

from typing import Literal
from pydantic import ConfigDict
from nutrecon.schemas.base import NutreconBaseModel


class InternalSourcesConfig(NutreconBaseModel):
    """Runtime input locations."""
    source_a: str
    source_b: str


class InternalOutputFilesConfig(NutreconBaseModel):
    """Runtime output file names."""
    combined: str
    summary: str
    prevalence: str


class InternalCsvConfig(NutreconBaseModel):
    """Runtime CSV conventions."""
    date_format: str
    na_rep: str


class InternalOutputConfig(NutreconBaseModel):
    """Runtime output configuration."""
    files: InternalOutputFilesConfig
    write_prevalence: bool
    persist_config: bool


class InternalLoggingConfig(NutreconBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    filename: str


class InternalConfig(NutreconBaseModel):
    """Authoritative runtime configuration.

    Runtime modules receive InternalConfig and access fields directly:

        path = config.sources.source_a  # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation in runtime code
    """

    base_dir: str
    sources: InternalSourcesConfig
    csv: InternalCsvConfig
    output: InternalOutputConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
