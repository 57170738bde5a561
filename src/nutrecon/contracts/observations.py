"""Observation stage contracts.

Enforce the guarantees of the long-format tables flowing between the
normalizer, merger, surface filter and sparsity filter.
"""

import numpy as np
import pandas as pd

from nutrecon.contracts.base import require
from nutrecon.nutrients.categories import (
    COMBINED_COLUMNS,
    MAX_SURFACE_DEPTH,
    MIN_OBSERVATIONS,
    MIN_YEAR_EXCLUSIVE,
    OBSERVATION_COLUMNS,
    PARAMETER_ORDER,
)


def _require_columns(df: pd.DataFrame, columns: list, stage: str) -> None:
    require(
        isinstance(df, pd.DataFrame),
        f"{stage} contract violated: output is {type(df)}, expected DataFrame"
    )
    for col in columns:
        require(
            col in df.columns,
            f"{stage} contract violated: missing required column '{col}'"
        )


def _require_valid_measurements(df: pd.DataFrame, stage: str) -> None:
    unknown = set(df["parameter"].unique()) - set(PARAMETER_ORDER)
    require(
        not unknown,
        f"{stage} contract violated: unknown parameter(s) {sorted(unknown)}"
    )
    values = df["concentration"].to_numpy(dtype=float)
    require(
        bool(np.isfinite(values).all()),
        f"{stage} contract violated: concentration must be non-null and finite"
    )


def assert_normalized(df: pd.DataFrame) -> None:
    """Enforce normalizer contract.

    Every row carries one of the known parameters and a finite
    concentration. Depth may still be null.

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    _require_columns(df, OBSERVATION_COLUMNS, "Normalizer")
    _require_valid_measurements(df, "Normalizer")


def assert_surface(df: pd.DataFrame) -> None:
    """Enforce surface filter contract.

    Called on the filtered frame while depth is still present: every row
    is shallow and newer than the cutoff year.
    """
    _require_columns(df, OBSERVATION_COLUMNS + ["year"], "Surface")
    require(
        bool((df["depth"] <= MAX_SURFACE_DEPTH).all()),
        f"Surface contract violated: depth must be <= {MAX_SURFACE_DEPTH}"
    )
    require(
        bool((df["year"] > MIN_YEAR_EXCLUSIVE).all()),
        f"Surface contract violated: year must be > {MIN_YEAR_EXCLUSIVE}"
    )


def assert_sparse_support(df: pd.DataFrame) -> None:
    """Enforce sparsity filter contract.

    The output is the combined surface dataset: exact column set, valid
    measurements, and at least MIN_OBSERVATIONS rows for each
    (site, parameter) pair present.
    """
    _require_columns(df, COMBINED_COLUMNS, "Sparsity")
    require(
        "depth" not in df.columns,
        "Sparsity contract violated: 'depth' must be dropped after the surface filter"
    )
    _require_valid_measurements(df, "Sparsity")

    if len(df) > 0:
        counts = df.groupby(["site", "parameter"], observed=True).size()
        require(
            bool((counts >= MIN_OBSERVATIONS).all()),
            f"Sparsity contract violated: (site, parameter) pairs with fewer than "
            f"{MIN_OBSERVATIONS} observations: {counts[counts < MIN_OBSERVATIONS].to_dict()}"
        )
