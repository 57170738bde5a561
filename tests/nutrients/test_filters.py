import pytest
import numpy as np
import pandas as pd

from nutrecon.nutrients.categories import COMBINED_COLUMNS
from nutrecon.nutrients.filters import sparsity_filter, surface_filter
from nutrecon.nutrients.merger import add_calendar_fields

pytestmark = pytest.mark.unit


def _observations(site, parameter, n, start="2016-01-01", depth=0.5, source="ORG_A"):
    df = pd.DataFrame({
        "source": source,
        "site": site,
        "date": pd.date_range(start, periods=n, freq="MS"),
        "depth": depth,
        "parameter": parameter,
        "concentration": np.arange(1, n + 1, dtype=float),
    })
    return add_calendar_fields(df)


class TestSurfaceFilter:

    def test_keeps_depth_at_threshold_and_drops_deeper(self):
        df = pd.concat([
            _observations("S1", "TN", 1, depth=1.0),
            _observations("S1", "TN", 1, depth=1.01),
            _observations("S1", "TN", 1, depth=0.0),
        ], ignore_index=True)
        out = surface_filter(df)

        assert len(out) == 2

    def test_drops_null_depth(self):
        df = _observations("S1", "TN", 3, depth=np.nan)
        assert surface_filter(df).empty

    def test_year_cutoff_is_exclusive(self):
        df = pd.concat([
            _observations("S1", "TN", 1, start="2014-12-01"),
            _observations("S1", "TN", 1, start="2015-01-01"),
        ], ignore_index=True)
        out = surface_filter(df)

        assert out["year"].tolist() == [2015]

    def test_drops_depth_column_by_default(self):
        out = surface_filter(_observations("S1", "TN", 2))
        assert "depth" not in out.columns

    def test_keep_depth(self):
        out = surface_filter(_observations("S1", "TN", 2), keep_depth=True)
        assert "depth" in out.columns

    def test_does_not_mutate_input(self):
        df = _observations("S1", "TN", 2, depth=3.0)
        surface_filter(df)
        assert len(df) == 2 and "depth" in df.columns


class TestSparsityFilter:

    def test_four_tn_ten_din_keeps_only_din(self):
        """A site with 4 TN and 10 DIN observations loses all of its TN rows."""
        df = pd.concat([
            _observations("S1", "TN", 4),
            _observations("S1", "DIN", 10),
        ], ignore_index=True).drop(columns="depth")
        out = sparsity_filter(df)

        assert (out["parameter"] == "TN").sum() == 0
        assert (out["parameter"] == "DIN").sum() == 10

    def test_exactly_five_survives(self):
        df = _observations("S1", "TN", 5).drop(columns="depth")
        assert len(sparsity_filter(df)) == 5

    def test_other_sites_unaffected(self):
        df = pd.concat([
            _observations("S1", "TN", 3),
            _observations("S2", "TN", 6),
        ], ignore_index=True).drop(columns="depth")
        out = sparsity_filter(df)

        assert out["site"].unique().tolist() == ["S2"]

    def test_counts_pool_both_sources(self):
        df = pd.concat([
            _observations("S1", "TN", 3, source="ORG_A"),
            _observations("S1", "TN", 2, start="2019-01-01", source="ORG_B"),
        ], ignore_index=True).drop(columns="depth")
        out = sparsity_filter(df)

        assert len(out) == 5
        assert set(out["source"]) == {"ORG_A", "ORG_B"}

    def test_output_is_combined_schema(self):
        out = sparsity_filter(_observations("S1", "TN", 5).drop(columns="depth"))
        assert list(out.columns) == COMBINED_COLUMNS

    def test_does_not_mutate_input(self):
        df = _observations("S1", "TN", 2).drop(columns="depth")
        sparsity_filter(df)
        assert df["concentration"].notna().all()
