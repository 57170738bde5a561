"""`nutrecon` - reconciliation of two nutrient monitoring datasets.

Subpackages:
- nutrients: Normalization, merging, filtering, summary statistics
- pipeline: Stage runner, orchestrator, table I/O
- contracts: Fail-fast checks between pipeline stages
- schemas: Pydantic configuration models
"""

__version__ = "0.1.0"
