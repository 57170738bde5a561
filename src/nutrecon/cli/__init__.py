"""Command-line interface modules for nutrecon pipeline execution.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from nutrecon.cli.run_harmonize import run_harmonize_pipeline, main

__all__ = ['run_harmonize_pipeline', 'main']
