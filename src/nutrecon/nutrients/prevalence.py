"""Site x year prevalence of sampled parameters.

Diagnostic only: feeds the sampling-coverage tile chart and is not part
of the harmonized output. Rows are the (site, year) pairs present in the
combined dataset; a year in which a site was never visited has no row.
A visited pair lacking one parameter gets a zero count for it.
"""

import logging

import pandas as pd

from nutrecon.nutrients.categories import PREVALENCE_COLUMNS, Parameter

__all__ = ['prevalence_table']

logger = logging.getLogger(__name__)


def prevalence_table(df: pd.DataFrame) -> pd.DataFrame:
    """Count TN and DIN observations per (site, year).

    Parameters
    ----------
    df : pd.DataFrame
        Combined surface dataset (sparsity filter output).

    Returns
    -------
    pd.DataFrame
        PREVALENCE_COLUMNS, one row per observed (site, year), ordered by
        site then year.
    """
    counts = (
        df.groupby(["site", "year", "parameter"], observed=True)
        .size()
        .unstack("parameter", fill_value=0)
        .reindex(columns=[Parameter.TN.value, Parameter.DIN.value], fill_value=0)
        .sort_index()
    )

    out = pd.DataFrame({
        "site": counts.index.get_level_values("site"),
        "year": counts.index.get_level_values("year").astype(int),
        "n_TN": counts[Parameter.TN.value].to_numpy(dtype=int),
        "n_DIN": counts[Parameter.DIN.value].to_numpy(dtype=int),
    })
    out["sampled_TN"] = out["n_TN"] > 0
    out["sampled_DIN"] = out["n_DIN"] > 0

    logger.info("Prevalence matrix: %d site-year rows", len(out))
    return out[PREVALENCE_COLUMNS]
