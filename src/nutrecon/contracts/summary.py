"""Summary stage contracts.

Enforce the structure of the collapsed table, the per-site summary and
the prevalence matrix. Scientific correctness of the statistics is the
summarizer's job; only structure and ordering are checked here.
"""

import pandas as pd

from nutrecon.contracts.base import require
from nutrecon.nutrients.categories import PARAMETER_ORDER, PREVALENCE_COLUMNS, SUMMARY_COLUMNS
from nutrecon.nutrients.summarizer import COLLAPSE_KEYS


def assert_collapsed(df: pd.DataFrame) -> None:
    """Enforce replicate collapse contract.

    One row per (source, site, date) with one column per parameter.
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Collapse contract violated: output is {type(df)}, expected DataFrame"
    )
    for col in COLLAPSE_KEYS + PARAMETER_ORDER:
        require(
            col in df.columns,
            f"Collapse contract violated: missing required column '{col}'"
        )
    require(
        not df.duplicated(["source", "site", "date"]).any(),
        "Collapse contract violated: duplicate (source, site, date) rows remain"
    )


def assert_site_summary(df: pd.DataFrame) -> None:
    """Enforce site summary contract.

    Exact column order, one row per site, sorted by TN median with null
    medians last.
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Summary contract violated: output is {type(df)}, expected DataFrame"
    )
    require(
        list(df.columns) == SUMMARY_COLUMNS,
        f"Summary contract violated: columns {list(df.columns)} != {SUMMARY_COLUMNS}"
    )
    require(
        df["site"].is_unique,
        "Summary contract violated: site must be unique"
    )

    medians = df["TN_median"]
    known = medians.dropna()
    require(
        known.is_monotonic_increasing,
        "Summary contract violated: rows must be sorted ascending by TN_median"
    )
    if medians.isna().any():
        first_null = int(medians.isna().to_numpy().argmax())
        require(
            bool(medians.iloc[first_null:].isna().all()),
            "Summary contract violated: sites without a TN median must sort last"
        )


def assert_prevalence(df: pd.DataFrame) -> None:
    """Enforce prevalence matrix contract."""
    require(
        list(df.columns) == PREVALENCE_COLUMNS,
        f"Prevalence contract violated: columns {list(df.columns)} != {PREVALENCE_COLUMNS}"
    )
    require(
        not df.duplicated(["site", "year"]).any(),
        "Prevalence contract violated: duplicate (site, year) rows"
    )
    require(
        bool(((df["n_TN"] > 0) == df["sampled_TN"]).all()),
        "Prevalence contract violated: sampled_TN disagrees with n_TN"
    )
    require(
        bool(((df["n_DIN"] > 0) == df["sampled_DIN"]).all()),
        "Prevalence contract violated: sampled_DIN disagrees with n_DIN"
    )
