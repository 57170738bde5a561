"""In-memory harmonization of the two source tables.

Runs every stage in order, enforcing each stage's contract at its
boundary:

1. Validate input schemas (SchemaError on bad input)
2. Normalize both sources to long format
3. Merge and derive calendar fields
4. Surface filter (depth <= 1, year > 2014)
5. Sparsity filter (>= 5 observations per site and parameter)
6. Collapse replicates and summarize per site
7. Prevalence matrix (diagnostic)

Nothing here touches the filesystem; the orchestrator does the reading
and writing around it.
"""

import logging
from typing import NamedTuple

import pandas as pd

from nutrecon.contracts import (
    validate_source_a,
    validate_source_b,
    assert_normalized,
    assert_surface,
    assert_sparse_support,
    assert_collapsed,
    assert_site_summary,
    assert_prevalence,
)
from nutrecon.nutrients import (
    normalize_source_a,
    normalize_source_b,
    merge_sources,
    surface_filter,
    sparsity_filter,
    collapse_replicates,
    summarize_sites,
    prevalence_table,
)

__all__ = ['HarmonizedTables', 'harmonize']

logger = logging.getLogger(__name__)


class HarmonizedTables(NamedTuple):
    """All tables produced by one harmonization run."""
    combined: pd.DataFrame    # combined surface dataset, long format
    collapsed: pd.DataFrame   # one wide row per (source, site, date)
    summary: pd.DataFrame     # per-site statistics, sorted by TN median
    prevalence: pd.DataFrame  # site x year sampling matrix


def harmonize(table_a: pd.DataFrame, table_b: pd.DataFrame) -> HarmonizedTables:
    """Run the full harmonization on two raw source tables.

    Parameters
    ----------
    table_a : pd.DataFrame
        ORG_A table: site, date, depth, nitrate_nitrite_n, ammonium_n, total_n.
    table_b : pd.DataFrame
        ORG_B table: station, date, tn_depth, din_depth, din_n, total_n.

    Returns
    -------
    HarmonizedTables

    Raises
    ------
    SchemaError
        If either input table violates its schema.
    ContractViolation
        If a stage breaks its output invariant (pipeline bug).

    Examples
    --------
    >>> tables = harmonize(table_a, table_b)
    >>> tables.summary[["site", "TN_median"]]
    """
    raw_a = validate_source_a(table_a)
    raw_b = validate_source_b(table_b)

    long_a = normalize_source_a(raw_a)
    assert_normalized(long_a)
    long_b = normalize_source_b(raw_b)
    assert_normalized(long_b)

    merged = merge_sources(long_a, long_b)

    surface = surface_filter(merged, keep_depth=True)
    assert_surface(surface)

    combined = sparsity_filter(surface.drop(columns="depth"))
    assert_sparse_support(combined)

    collapsed = collapse_replicates(combined)
    assert_collapsed(collapsed)

    summary = summarize_sites(collapsed)
    assert_site_summary(summary)

    prevalence = prevalence_table(combined)
    assert_prevalence(prevalence)

    logger.info(
        "Harmonized %d + %d samples into %d observations at %d sites",
        len(raw_a), len(raw_b), len(combined), len(summary),
    )
    return HarmonizedTables(combined, collapsed, summary, prevalence)
