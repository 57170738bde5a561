"""Quality filters applied to the merged observation table.

- Surface filter: shallow, recent samples only.
- Sparsity filter: drop a parameter at a site that has too few samples of it.

Both are data-shaping rules. They drop rows and never raise.
"""

import logging

import numpy as np
import pandas as pd

from nutrecon.nutrients.categories import (
    COMBINED_COLUMNS,
    MAX_SURFACE_DEPTH,
    MIN_OBSERVATIONS,
    MIN_YEAR_EXCLUSIVE,
)

__all__ = ['surface_filter', 'sparsity_filter']

logger = logging.getLogger(__name__)


def surface_filter(df: pd.DataFrame, keep_depth: bool = False) -> pd.DataFrame:
    """Keep rows with ``depth <= 1`` and ``year > 2014``.

    A null depth fails the predicate, so those rows are dropped too.

    Parameters
    ----------
    df : pd.DataFrame
        Merged observations with depth and year.
    keep_depth : bool, optional
        Keep the depth column on the result (default False). Depth is not
        used downstream; keeping it lets callers check the result.

    Returns
    -------
    pd.DataFrame
        Filtered copy with a fresh index.
    """
    mask = (df["depth"] <= MAX_SURFACE_DEPTH) & (df["year"] > MIN_YEAR_EXCLUSIVE)
    out = df.loc[mask].reset_index(drop=True)
    logger.info(
        "Surface filter (depth <= %s, year > %d): kept %d of %d rows",
        MAX_SURFACE_DEPTH, MIN_YEAR_EXCLUSIVE, len(out), len(df),
    )
    if not keep_depth:
        out = out.drop(columns="depth")
    return out


def sparsity_filter(df: pd.DataFrame, min_observations: int = MIN_OBSERVATIONS) -> pd.DataFrame:
    """Remove parameter values for sites with too few observations of them.

    Counts non-null concentrations per (site, parameter), pooling both
    sources. Pairs below ``min_observations`` are nulled, then all null
    rows are dropped. Nulling is per parameter: a site with plenty of TN
    but sparse DIN keeps its TN rows.

    Parameters
    ----------
    df : pd.DataFrame
        Surface-filtered observations.
    min_observations : int, optional
        Minimum count for a (site, parameter) pair to survive.

    Returns
    -------
    pd.DataFrame
        Combined surface dataset with COMBINED_COLUMNS.
    """
    counts = df.groupby(["site", "parameter"], observed=True)["concentration"].transform("count")
    sparse = counts < min_observations

    out = df.copy()
    out["concentration"] = out["concentration"].where(~sparse, np.nan)

    if sparse.any():
        nulled = (
            df.loc[sparse, ["site", "parameter"]]
            .drop_duplicates()
            .sort_values(["site", "parameter"])
        )
        for site, parameter in nulled.itertuples(index=False):
            logger.info(
                "Site %s: fewer than %d %s observations, %s values removed",
                site, min_observations, parameter, parameter,
            )

    out = out.dropna(subset=["concentration"]).reset_index(drop=True)
    logger.info("Sparsity filter: kept %d of %d rows", len(out), len(df))
    return out[COMBINED_COLUMNS]
