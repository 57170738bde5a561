import pytest
import numpy as np
import pandas as pd

from nutrecon.contracts import validate_source_a, validate_source_b
from nutrecon.nutrients.categories import OBSERVATION_COLUMNS
from nutrecon.nutrients.normalizer import normalize_source_a, normalize_source_b

pytestmark = pytest.mark.unit


def test_source_a_derives_din_and_goes_long(make_table_a):
    raw = validate_source_a(make_table_a([("S1", "2020-01-01", 0.5, 0.1, 0.05, 0.5)]))
    long = normalize_source_a(raw)

    assert list(long.columns) == OBSERVATION_COLUMNS
    assert list(long["parameter"]) == ["DIN", "TN"]
    assert (long["source"] == "ORG_A").all()
    assert (long["depth"] == 0.5).all()
    assert long["concentration"].tolist() == pytest.approx([0.15, 0.5])


def test_source_a_drops_rows_missing_any_din_part(make_table_a):
    raw = validate_source_a(make_table_a([
        ("S1", "2020-01-01", 0.5, np.nan, 0.05, 0.5),
        ("S1", "2020-02-01", 0.5, 0.1, np.nan, 0.5),
        ("S1", "2020-03-01", 0.5, 0.1, 0.05, np.nan),
        ("S1", "2020-04-01", 0.5, 0.1, 0.05, 0.7),
    ]))
    long = normalize_source_a(raw)

    assert len(long) == 2
    assert (long["date"] == pd.Timestamp("2020-04-01")).all()


def test_source_a_keeps_null_depth(make_table_a):
    """Null depth is not a normalization concern; the surface filter drops it."""
    raw = validate_source_a(make_table_a([("S1", "2020-01-01", np.nan, 0.1, 0.05, 0.5)]))
    long = normalize_source_a(raw)

    assert len(long) == 2
    assert long["depth"].isna().all()


def test_source_b_renames_station_and_uses_parameter_depth(make_table_b):
    raw = validate_source_b(make_table_b([("S9", "2020-01-01", 0.8, 0.2, 0.3, 0.9)]))
    long = normalize_source_b(raw)

    assert list(long.columns) == OBSERVATION_COLUMNS
    assert (long["site"] == "S9").all()
    din = long[long["parameter"] == "DIN"].iloc[0]
    tn = long[long["parameter"] == "TN"].iloc[0]
    assert din["depth"] == 0.2 and din["concentration"] == 0.3
    assert tn["depth"] == 0.8 and tn["concentration"] == 0.9


def test_source_b_drops_rows_missing_tn_or_din(make_table_b):
    raw = validate_source_b(make_table_b([
        ("S1", "2020-01-01", 0.5, 0.5, np.nan, 0.6),
        ("S1", "2020-02-01", 0.5, 0.5, 0.2, np.nan),
        ("S1", "2020-03-01", 0.5, 0.5, 0.2, 0.6),
    ]))
    long = normalize_source_b(raw)

    assert len(long) == 2
    assert long["concentration"].notna().all()


def test_rows_stay_in_sample_order(make_table_b):
    raw = validate_source_b(make_table_b([
        ("S2", "2020-02-01", 0.5, 0.5, 0.2, 0.6),
        ("S1", "2020-01-01", 0.5, 0.5, 0.3, 0.7),
    ]))
    long = normalize_source_b(raw)

    assert long["site"].tolist() == ["S2", "S2", "S1", "S1"]
    assert long["parameter"].tolist() == ["DIN", "TN", "DIN", "TN"]


def test_empty_table_normalizes_to_empty(make_table_a):
    raw = validate_source_a(make_table_a([]))
    long = normalize_source_a(raw)

    assert long.empty
    assert list(long.columns) == OBSERVATION_COLUMNS
