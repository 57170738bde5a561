"""Pipeline contracts - fail-fast enforcement of stage invariants.

Key principle:
- Pydantic validates config correctness
- Input contracts validate source tables (SchemaError)
- Stage contracts validate pipeline correctness (ContractViolation)
- Data-shaping rules (dropping, nulling) never raise
"""

from nutrecon.contracts.failure import ContractViolation, SchemaError
from nutrecon.contracts.base import require
from nutrecon.contracts.inputs import validate_source_a, validate_source_b
from nutrecon.contracts.observations import (
    assert_normalized,
    assert_surface,
    assert_sparse_support,
)
from nutrecon.contracts.summary import (
    assert_collapsed,
    assert_site_summary,
    assert_prevalence,
)

__all__ = [
    "ContractViolation",
    "SchemaError",
    "require",
    "validate_source_a",
    "validate_source_b",
    "assert_normalized",
    "assert_surface",
    "assert_sparse_support",
    "assert_collapsed",
    "assert_site_summary",
    "assert_prevalence",
]
