"""Pipeline execution: in-memory stage runner, orchestration, table I/O."""

from nutrecon.pipeline.processor import HarmonizedTables, harmonize
from nutrecon.pipeline.orchestrator import HarmonizationPipeline
from nutrecon.pipeline.io import read_source_table, write_table

__all__ = [
    'HarmonizedTables',
    'harmonize',
    'HarmonizationPipeline',
    'read_source_table',
    'write_table',
]
