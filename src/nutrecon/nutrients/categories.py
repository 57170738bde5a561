"""Fixed enumerations and business rules for the nutrient reconciliation.

Category orders here are declared, never derived from data, so that
groupings, column orders and sorts come out the same on every run.
"""

from enum import Enum

import pandas as pd

__all__ = [
    'Source',
    'Parameter',
    'PARAMETER_ORDER',
    'SOURCE_ORDER',
    'MONTH_LEVELS',
    'MONTH_DTYPE',
    'MAX_SURFACE_DEPTH',
    'MIN_YEAR_EXCLUSIVE',
    'MIN_OBSERVATIONS',
    'OBSERVATION_COLUMNS',
    'COMBINED_COLUMNS',
    'STATISTIC_NAMES',
    'SUMMARY_COLUMNS',
    'PREVALENCE_COLUMNS',
]


class Source(str, Enum):
    """Organization that collected a sample."""
    ORG_A = "ORG_A"
    ORG_B = "ORG_B"


class Parameter(str, Enum):
    """Nutrient parameter measured."""
    DIN = "DIN"  # dissolved inorganic nitrogen
    TN = "TN"    # total nitrogen


SOURCE_ORDER = [s.value for s in Source]
PARAMETER_ORDER = [p.value for p in Parameter]

MONTH_LEVELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]
MONTH_DTYPE = pd.CategoricalDtype(categories=MONTH_LEVELS, ordered=True)

# Business rules for this reconciliation
MAX_SURFACE_DEPTH = 1.0
MIN_YEAR_EXCLUSIVE = 2014
MIN_OBSERVATIONS = 5

# Normalized long-format record, before calendar fields
OBSERVATION_COLUMNS = ["source", "site", "date", "depth", "parameter", "concentration"]

# Combined surface dataset (output artifact)
COMBINED_COLUMNS = [
    "source", "site", "date", "year", "month", "day_of_year",
    "parameter", "concentration",
]

STATISTIC_NAMES = ["mean", "sd", "n", "median", "iqr", "p90", "gm"]

SUMMARY_COLUMNS = ["site"] + [
    f"{param}_{stat}" for param in PARAMETER_ORDER for stat in STATISTIC_NAMES
]

PREVALENCE_COLUMNS = ["site", "year", "n_TN", "n_DIN", "sampled_TN", "sampled_DIN"]
