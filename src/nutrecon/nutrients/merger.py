"""Merge normalized source tables and derive calendar fields."""

import logging

import pandas as pd

from nutrecon.nutrients.categories import MONTH_DTYPE, MONTH_LEVELS, OBSERVATION_COLUMNS

__all__ = ['merge_sources', 'add_calendar_fields']

logger = logging.getLogger(__name__)


def add_calendar_fields(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with year, month and day_of_year from ``date``.

    ``month`` is an ordered categorical with the twelve calendar
    abbreviations as levels, whether or not every month occurs.
    """
    out = df.copy()
    dates = pd.to_datetime(out["date"])
    out["year"] = dates.dt.year.astype(int)
    out["month"] = pd.Categorical(
        [MONTH_LEVELS[m - 1] for m in dates.dt.month],
        dtype=MONTH_DTYPE,
    )
    out["day_of_year"] = dates.dt.dayofyear.astype(int)
    return out


def merge_sources(*tables: pd.DataFrame) -> pd.DataFrame:
    """Concatenate normalized long-format tables into one unified table.

    No filtering and no deduplication happen here: a site sampled by
    both organizations on the same day keeps both sets of rows.

    Parameters
    ----------
    *tables : pd.DataFrame
        Normalized tables sharing OBSERVATION_COLUMNS.

    Returns
    -------
    pd.DataFrame
        Unified table with OBSERVATION_COLUMNS followed by year, month
        and day_of_year, in input order.

    Raises
    ------
    ValueError
        If a table does not carry the common observation schema.
    """
    for i, table in enumerate(tables):
        missing = [col for col in OBSERVATION_COLUMNS if col not in table.columns]
        if missing:
            raise ValueError(f"Table {i} is not normalized: missing {missing}")

    merged = pd.concat([t[OBSERVATION_COLUMNS] for t in tables], ignore_index=True)
    merged = add_calendar_fields(merged)
    logger.info("Merged %d tables: %d observations", len(tables), len(merged))
    return merged[OBSERVATION_COLUMNS + ["year", "month", "day_of_year"]]
