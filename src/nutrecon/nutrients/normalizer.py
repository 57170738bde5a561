"""Map each organization's table onto the common long-format observation.

Both sources arrive wide (one row per sample, one column per nutrient).
The reshape to long format is driven by an explicit mapping table per
source, ``{parameter: (value column, depth column)}``, so each source row
expands into exactly one row per parameter.

ORG_A reports nitrate+nitrite and ammonium separately; DIN is their sum.
ORG_B reports DIN directly, and samples DIN and TN at their own depths
within a visit, so each long row takes the depth column of its parameter.
"""

import logging

import pandas as pd

from nutrecon.nutrients.categories import OBSERVATION_COLUMNS, Parameter, Source

__all__ = [
    'SOURCE_A_LAYOUT',
    'SOURCE_B_LAYOUT',
    'normalize_source_a',
    'normalize_source_b',
    'reshape_long',
]

logger = logging.getLogger(__name__)

# parameter -> (value column, depth column), after source-specific renames
SOURCE_A_LAYOUT = {
    Parameter.DIN: ("din", "depth"),
    Parameter.TN: ("total_n", "depth"),
}

SOURCE_B_LAYOUT = {
    Parameter.DIN: ("din_n", "din_depth"),
    Parameter.TN: ("total_n", "tn_depth"),
}


def reshape_long(wide: pd.DataFrame, source: Source, layout: dict) -> pd.DataFrame:
    """Expand wide sample rows into one row per parameter.

    Parameters
    ----------
    wide : pd.DataFrame
        One row per sample with ``site`` and ``date`` plus the value and
        depth columns named in ``layout``.
    source : Source
        Provenance tag written to every output row.
    layout : dict
        Mapping of Parameter to (value column, depth column).

    Returns
    -------
    pd.DataFrame
        Long-format frame with OBSERVATION_COLUMNS. Rows are ordered by
        input sample, then by parameter in declared order.
    """
    parts = []
    for parameter, (value_col, depth_col) in layout.items():
        part = pd.DataFrame({
            "source": source.value,
            "site": wide["site"].to_numpy(),
            "date": wide["date"].to_numpy(),
            "depth": wide[depth_col].to_numpy(dtype=float),
            "parameter": parameter.value,
            "concentration": wide[value_col].to_numpy(dtype=float),
            "_row": range(len(wide)),
            "_param": list(layout).index(parameter),
        })
        parts.append(part)

    long = pd.concat(parts, ignore_index=True)
    long = long.sort_values(["_row", "_param"], kind="mergesort")
    return long[OBSERVATION_COLUMNS].reset_index(drop=True)


def _drop_incomplete(wide: pd.DataFrame, required: list, label: str) -> pd.DataFrame:
    complete = wide.dropna(subset=required)
    dropped = len(wide) - len(complete)
    if dropped:
        logger.debug("%s: dropped %d of %d rows missing %s", label, dropped, len(wide), required)
    return complete.reset_index(drop=True)


def normalize_source_a(table_a: pd.DataFrame) -> pd.DataFrame:
    """Normalize the ORG_A table into long-format observations.

    DIN is derived as ``nitrate_nitrite_n + ammonium_n``; a missing part
    makes DIN missing. Rows lacking TN or DIN are dropped, then each
    remaining sample becomes a DIN row and a TN row sharing site, date
    and depth.

    Parameters
    ----------
    table_a : pd.DataFrame
        Validated ORG_A table (see ``contracts.validate_source_a``).

    Returns
    -------
    pd.DataFrame
        Long-format observations tagged ``ORG_A``.
    """
    wide = table_a[["site", "date", "depth", "total_n"]].copy()
    wide["din"] = table_a["nitrate_nitrite_n"] + table_a["ammonium_n"]
    wide = _drop_incomplete(wide, ["total_n", "din"], "ORG_A")

    long = reshape_long(wide, Source.ORG_A, SOURCE_A_LAYOUT)
    logger.info("ORG_A normalized: %d samples -> %d observations", len(wide), len(long))
    return long


def normalize_source_b(table_b: pd.DataFrame) -> pd.DataFrame:
    """Normalize the ORG_B table into long-format observations.

    ``station`` becomes ``site``. Rows lacking TN or DIN are dropped; each
    remaining sample becomes a DIN row at ``din_depth`` and a TN row at
    ``tn_depth``. Differing depths are kept as they are.

    Parameters
    ----------
    table_b : pd.DataFrame
        Validated ORG_B table (see ``contracts.validate_source_b``).

    Returns
    -------
    pd.DataFrame
        Long-format observations tagged ``ORG_B``.
    """
    wide = table_b.rename(columns={"station": "site"})
    wide = wide[["site", "date", "din_depth", "tn_depth", "din_n", "total_n"]]
    wide = _drop_incomplete(wide, ["total_n", "din_n"], "ORG_B")

    long = reshape_long(wide, Source.ORG_B, SOURCE_B_LAYOUT)
    logger.info("ORG_B normalized: %d samples -> %d observations", len(wide), len(long))
    return long
