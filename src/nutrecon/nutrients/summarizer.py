# src/nutrecon/nutrients/summarizer.py
"""Collapse replicate readings and compute per-site summary statistics.

Step 1 averages every reading that shares (source, site, date) for a
parameter, giving one wide row per sampling visit with a DIN and a TN
column. Multiple readings come chiefly from ORG_B sub-samples taken at
different depths that all passed the surface filter.

Step 2 drops the source distinction and summarizes each site:

- mean, sample standard deviation (ddof=1), count of non-null values
- median, interquartile range (Q3 - Q1), 90th percentile
- geometric mean, exp(mean(log(x)))

Quantiles use linear interpolation between order statistics, so for
[1, 2, 3, 4, 5] the quartiles are 2 and 4.

Geometric mean is only defined for positive values. Non-positive values
are excluded from the geometric mean (and only from it); if no positive
value remains the geometric mean is NaN.
"""

import logging
from typing import NamedTuple

import numpy as np
import pandas as pd
from scipy.stats import gmean

from nutrecon.nutrients.categories import PARAMETER_ORDER, STATISTIC_NAMES, SUMMARY_COLUMNS

__all__ = [
    'COLLAPSE_KEYS',
    'SiteStatistics',
    'site_statistics',
    'collapse_replicates',
    'summarize_sites',
]

logger = logging.getLogger(__name__)

COLLAPSE_KEYS = ["source", "site", "date", "year", "month", "day_of_year"]


class SiteStatistics(NamedTuple):
    """Descriptive statistics of one parameter at one site."""
    mean: float
    sd: float
    n: int
    median: float
    iqr: float
    p90: float
    gm: float


def site_statistics(values) -> SiteStatistics:
    """Compute the fixed statistic set for a sequence of concentrations.

    Nulls are ignored. An empty input gives n=0 and NaN elsewhere; a
    single value gives NaN standard deviation.

    Parameters
    ----------
    values : array-like
        Concentrations, possibly containing NaN.

    Returns
    -------
    SiteStatistics

    Examples
    --------
    >>> stats = site_statistics([1, 2, 3, 4, 5])
    >>> stats.median, stats.iqr, stats.mean, stats.n
    (3.0, 2.0, 3.0, 5)
    """
    x = np.asarray(values, dtype=float)
    x = x[~np.isnan(x)]
    n = int(x.size)
    if n == 0:
        return SiteStatistics(np.nan, np.nan, 0, np.nan, np.nan, np.nan, np.nan)

    q1, median, q3, p90 = np.quantile(x, [0.25, 0.5, 0.75, 0.9])
    sd = float(np.std(x, ddof=1)) if n > 1 else np.nan

    positive = x[x > 0]
    gm = float(gmean(positive)) if positive.size else np.nan

    return SiteStatistics(
        mean=float(np.mean(x)),
        sd=sd,
        n=n,
        median=float(median),
        iqr=float(q3 - q1),
        p90=float(p90),
        gm=gm,
    )


def collapse_replicates(df: pd.DataFrame) -> pd.DataFrame:
    """Average same-visit readings into one wide row per (source, site, date).

    Parameters
    ----------
    df : pd.DataFrame
        Long-format observations with COLLAPSE_KEYS, ``parameter`` and
        ``concentration`` (the combined surface dataset).

    Returns
    -------
    pd.DataFrame
        COLLAPSE_KEYS followed by one column per parameter (DIN, TN),
        NaN where a parameter was not sampled on that visit. Rows are
        sorted by source, site and date.
    """
    means = (
        df.groupby(COLLAPSE_KEYS + ["parameter"], observed=True, sort=True)["concentration"]
        .mean()
        .unstack("parameter")
    )
    means = means.reindex(columns=PARAMETER_ORDER)
    means.columns = list(PARAMETER_ORDER)
    collapsed = means.reset_index()

    collapsed = collapsed.sort_values(["source", "site", "date"], kind="mergesort")
    collapsed = collapsed.reset_index(drop=True)

    replicates = len(df) - int(collapsed[PARAMETER_ORDER].notna().sum().sum())
    logger.info(
        "Collapsed %d observations into %d visits (%d replicate readings averaged)",
        len(df), len(collapsed), replicates,
    )
    return collapsed


def summarize_sites(collapsed: pd.DataFrame) -> pd.DataFrame:
    """Compute per-site statistics for each parameter.

    Sources are pooled: a site's summary covers every visit from either
    organization.

    Ordering: ascending ``TN_median``; sites with no TN median go last;
    ties (including all the null medians) are broken by site identifier.

    Parameters
    ----------
    collapsed : pd.DataFrame
        Output of ``collapse_replicates``.

    Returns
    -------
    pd.DataFrame
        One row per site with SUMMARY_COLUMNS.
    """
    rows = []
    for site, group in collapsed.groupby("site", sort=True):
        row = {"site": site}
        for param in PARAMETER_ORDER:
            stats = site_statistics(group[param].to_numpy(dtype=float))
            for stat in STATISTIC_NAMES:
                row[f"{param}_{stat}"] = getattr(stats, stat)

            values = group[param].dropna()
            excluded = int((values <= 0).sum())
            if excluded:
                logger.warning(
                    "Site %s: %d non-positive %s value(s) excluded from geometric mean",
                    site, excluded, param,
                )
        rows.append(row)

    summary = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    for param in PARAMETER_ORDER:
        summary[f"{param}_n"] = summary[f"{param}_n"].astype(int)

    summary = summary.sort_values(
        ["TN_median", "site"], na_position="last", kind="mergesort"
    ).reset_index(drop=True)
    logger.info("Summarized %d sites", len(summary))
    return summary
