"""Input schema contracts.

Enforces that each raw source table can be read as its documented schema
before normalization starts. Violations raise SchemaError, not
ContractViolation: a bad input file is not a pipeline bug.
"""

import numpy as np
import pandas as pd

from nutrecon.contracts.failure import SchemaError

__all__ = [
    'SOURCE_A_COLUMNS',
    'SOURCE_B_COLUMNS',
    'validate_source_a',
    'validate_source_b',
]

SOURCE_A_COLUMNS = {
    "site": "string",
    "date": "date",
    "depth": "numeric",
    "nitrate_nitrite_n": "numeric",
    "ammonium_n": "numeric",
    "total_n": "numeric",
}

SOURCE_B_COLUMNS = {
    "station": "string",
    "date": "date",
    "tn_depth": "numeric",
    "din_depth": "numeric",
    "din_n": "numeric",
    "total_n": "numeric",
}


def _coerce_table(df: pd.DataFrame, columns: dict, table: str) -> pd.DataFrame:
    """Select and coerce the required columns of a raw source table.

    Parameters
    ----------
    df : pd.DataFrame
        Raw table as read from disk or passed in memory.
    columns : dict
        Mapping of required column name to kind ("string", "date", "numeric").
    table : str
        Table label used in error messages.

    Returns
    -------
    pd.DataFrame
        New frame restricted to the required columns, with parsed dates,
        float measurement columns and string identifiers.

    Raises
    ------
    SchemaError
        If a column is missing or cannot be coerced to its kind.
    """
    if not isinstance(df, pd.DataFrame):
        raise SchemaError(table, f"expected DataFrame, got {type(df).__name__}")

    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise SchemaError(table, f"missing required column(s) {missing}")

    out = pd.DataFrame(index=df.index)
    for col, kind in columns.items():
        values = df[col]
        if kind == "date":
            if values.isna().any():
                raise SchemaError(table, f"column '{col}' contains empty dates")
            # to_datetime reads numbers as epoch offsets, e.g. 20200101 -> 1970-01-01
            if pd.api.types.is_numeric_dtype(values):
                raise SchemaError(table, f"column '{col}' has numeric type {values.dtype}, expected dates")
            try:
                out[col] = pd.to_datetime(values).dt.normalize()
            except (ValueError, TypeError) as e:
                raise SchemaError(table, f"column '{col}' has unparseable dates: {e}") from e
        elif kind == "numeric":
            try:
                parsed = pd.to_numeric(values).astype(float)
            except (ValueError, TypeError) as e:
                raise SchemaError(table, f"column '{col}' is not numeric: {e}") from e
            if np.isinf(parsed).any():
                raise SchemaError(table, f"column '{col}' contains infinite values")
            out[col] = parsed
        else:
            if values.isna().any():
                raise SchemaError(table, f"column '{col}' contains empty identifiers")
            out[col] = values.astype(str).str.strip()

    return out.reset_index(drop=True)


def validate_source_a(df: pd.DataFrame) -> pd.DataFrame:
    """Validate and coerce the ORG_A table.

    Required columns: site, date, depth, nitrate_nitrite_n, ammonium_n, total_n.
    """
    return _coerce_table(df, SOURCE_A_COLUMNS, "source A")


def validate_source_b(df: pd.DataFrame) -> pd.DataFrame:
    """Validate and coerce the ORG_B table.

    Required columns: station, date, tn_depth, din_depth, din_n, total_n.
    """
    return _coerce_table(df, SOURCE_B_COLUMNS, "source B")
