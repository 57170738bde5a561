"""Tabular input/output for the harmonization pipeline.

Tables are plain CSV files read and written with pandas. Writing is
deterministic: same frame, same bytes.
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from nutrecon.contracts import SchemaError

__all__ = ['read_source_table', 'write_table']

logger = logging.getLogger(__name__)

# Identifier columns are read as text so codes like "0042" keep their zeros
_ID_COLUMNS = {"site": str, "station": str}


def read_source_table(path: Union[str, Path], label: str = "source") -> pd.DataFrame:
    """Read one raw source table from CSV.

    Parameters
    ----------
    path : str or Path
        CSV file with a header row.
    label : str, optional
        Table label used in error messages.

    Returns
    -------
    pd.DataFrame
        Raw table; schema validation happens in the contracts layer.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    SchemaError
        If the file cannot be parsed as CSV.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{label} table not found: {path}")

    try:
        df = pd.read_csv(path, dtype=_ID_COLUMNS)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise SchemaError(label, f"could not parse {path}: {e}") from e

    logger.info("Read %s table: %s (%d rows)", label, path, len(df))
    return df


def write_table(df: pd.DataFrame, path: Union[str, Path],
                date_format: str = "%Y-%m-%d", na_rep: str = "") -> Path:
    """Write a table to CSV without index.

    Parameters
    ----------
    df : pd.DataFrame
        Table to write.
    path : str or Path
        Destination file. Parent directories are created.
    date_format : str, optional
        strftime format for datetime columns.
    na_rep : str, optional
        Representation of missing values.

    Returns
    -------
    Path
        The written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, date_format=date_format, na_rep=na_rep)
    logger.info("Wrote %s (%d rows)", path, len(df))
    return path
