"""Root-level pytest fixtures for the nutrecon test suite.

Provides shared configuration fixtures and small, hand-checkable source
tables. Tests build raw tables through the factories here instead of
hand-assembling DataFrames with ad hoc column names.
"""

import pytest
import numpy as np
import pandas as pd
from pathlib import Path
import tempfile
import shutil

from nutrecon.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def make_config(param_config, temp_dir):
    """Factory fixture for creating custom test configs.

    Source paths and base_dir default to locations under temp_dir;
    any UserConfig-compatible kwarg overrides them.

    Examples
    --------
    >>> def test_no_prevalence(make_config):
    ...     config = make_config(WRITE_PREVALENCE=False)
    ...     assert config.output.write_prevalence is False
    """
    def _make(**user_overrides):
        values = {
            "SOURCE_A": str(temp_dir / "org_a.csv"),
            "SOURCE_B": str(temp_dir / "org_b.csv"),
            "BASE_DIR": str(temp_dir / "out"),
        }
        values.update(user_overrides)
        return resolve_config(param_config, UserConfig(**values), None)

    return _make


@pytest.fixture
def internal_config(make_config):
    """Fully validated runtime configuration (no overrides beyond paths)."""
    return make_config()


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


# =============================================================================
# Source Table Fixtures
# =============================================================================

SOURCE_A_FIELDS = ["site", "date", "depth", "nitrate_nitrite_n", "ammonium_n", "total_n"]
SOURCE_B_FIELDS = ["station", "date", "tn_depth", "din_depth", "din_n", "total_n"]


def _table_a(rows):
    return pd.DataFrame(rows, columns=SOURCE_A_FIELDS)


def _table_b(rows):
    return pd.DataFrame(rows, columns=SOURCE_B_FIELDS)


@pytest.fixture
def make_table_a():
    """Factory for ORG_A tables from (site, date, depth, no23, nh4, tn) tuples."""
    return _table_a


@pytest.fixture
def make_table_b():
    """Factory for ORG_B tables from (station, date, tn_depth, din_depth, din, tn) tuples."""
    return _table_b


@pytest.fixture
def sample_table_a():
    """ORG_A table exercising every normalization and filter rule.

    - A1: 6 surface samples 2016-2019, DIN 0.15, TN 0.5..1.0; plus one
      deep sample and one 2013 sample that the surface filter removes
    - A2: only 3 samples, removed by the sparsity filter
    - A3: ammonium missing, removed at normalization
    """
    rows = [
        ("A1", "2016-03-01", 0.5, 0.10, 0.05, 0.5),
        ("A1", "2016-07-01", 0.5, 0.10, 0.05, 0.6),
        ("A1", "2017-03-01", 0.5, 0.10, 0.05, 0.7),
        ("A1", "2017-07-01", 0.5, 0.10, 0.05, 0.8),
        ("A1", "2018-03-01", 0.5, 0.10, 0.05, 0.9),
        ("A1", "2019-03-01", 0.5, 0.10, 0.05, 1.0),
        ("A1", "2018-05-01", 3.0, 0.10, 0.05, 4.0),
        ("A1", "2013-05-01", 0.5, 0.10, 0.05, 4.0),
        ("A2", "2016-03-01", 0.0, 0.20, 0.10, 0.9),
        ("A2", "2017-03-01", 0.0, 0.20, 0.10, 0.9),
        ("A2", "2018-03-01", 0.0, 0.20, 0.10, 0.9),
        ("A3", "2018-03-01", 0.5, 0.20, np.nan, 0.9),
    ]
    return _table_a(rows)


@pytest.fixture
def sample_table_b():
    """ORG_B table exercising per-parameter depths and replicates.

    - B1: 6 visits 2015-2019 plus two replicate rows on 2020-06-01
      (DIN 1.0 and 3.0, TN 2.0 and 2.0)
    - B2: TN at the surface but DIN at 2 m, so only TN survives
    - B3: TN missing, removed at normalization
    """
    rows = [
        ("B1", "2015-05-01", 0.5, 0.5, 0.20, 1.1),
        ("B1", "2016-05-01", 0.5, 0.5, 0.30, 1.2),
        ("B1", "2017-05-01", 0.5, 0.5, 0.40, 1.3),
        ("B1", "2018-05-01", 0.5, 0.5, 0.50, 1.4),
        ("B1", "2019-05-01", 0.5, 0.5, 0.60, 1.5),
        ("B1", "2019-08-01", 0.5, 0.5, 0.70, 1.6),
        ("B1", "2020-06-01", 0.0, 0.0, 1.00, 2.0),
        ("B1", "2020-06-01", 1.0, 1.0, 3.00, 2.0),
        ("B2", "2016-05-01", 0.5, 2.0, 0.10, 0.2),
        ("B2", "2016-08-01", 0.5, 2.0, 0.10, 0.3),
        ("B2", "2017-05-01", 0.5, 2.0, 0.10, 0.4),
        ("B2", "2017-08-01", 0.5, 2.0, 0.10, 0.5),
        ("B2", "2018-05-01", 0.5, 2.0, 0.10, 0.6),
        ("B2", "2018-08-01", 0.5, 2.0, 0.10, 0.7),
        ("B3", "2018-05-01", 0.5, 0.5, 0.10, np.nan),
    ]
    return _table_b(rows)


@pytest.fixture
def sample_csvs(internal_config, sample_table_a, sample_table_b):
    """Write the sample tables to the source paths of internal_config."""
    path_a = Path(internal_config.sources.source_a)
    path_b = Path(internal_config.sources.source_b)
    sample_table_a.to_csv(path_a, index=False)
    sample_table_b.to_csv(path_b, index=False)
    return path_a, path_b
