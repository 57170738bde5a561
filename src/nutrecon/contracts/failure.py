"""Centralized failure types for the harmonization pipeline.

Two kinds of failure abort a run:
- SchemaError: an input table cannot be read as the expected source schema
- ContractViolation: a pipeline stage broke the invariant it promised
"""


class SchemaError(ValueError):
    """Raised when an input table does not match its source schema.

    Missing required columns, unparseable dates and non-numeric or
    infinite measurement values all land here. This is bad input, not
    a pipeline bug, and it is raised before any output is written.
    """

    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"{table}: {message}")


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic, not bad user input or a
    silent data-shaping rule. It means a stage did not produce the
    invariants it promised.

    Key distinction:
    - SchemaError: input error (bad source table)
    - ValidationError: config error (handled by Pydantic)
    - ContractViolation: pipeline bug (programmer error)
    """
    pass
