"""Tests for HarmonizationPipeline batch runs."""

import logging

import pytest
import pandas as pd

from nutrecon.contracts import SchemaError
from nutrecon.pipeline import orchestrator
from nutrecon.pipeline.orchestrator import HarmonizationPipeline
from nutrecon.setup_directories import setup_output_directories

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


@pytest.fixture
def output_dirs(internal_config):
    return setup_output_directories(internal_config.base_dir)


def test_run_writes_all_artifacts(internal_config, output_dirs, sample_csvs):
    pipeline = HarmonizationPipeline(internal_config, output_dirs, run_id="test")
    written = pipeline.run(configure_logging=False)

    assert set(written) == {"combined", "summary", "prevalence"}
    for path in written.values():
        assert path.exists()
        assert path.parent == output_dirs["outputs"]

    summary = pd.read_csv(written["summary"])
    assert summary["site"].tolist() == ["B2", "A1", "B1"]
    assert pipeline.results is not None


def test_combined_csv_layout(internal_config, output_dirs, sample_csvs):
    written = HarmonizationPipeline(internal_config, output_dirs).run(configure_logging=False)

    combined = pd.read_csv(written["combined"])
    assert list(combined.columns) == [
        "source", "site", "date", "year", "month", "day_of_year", "parameter", "concentration",
    ]
    assert len(combined) == 34
    assert combined["date"].iloc[0].count("-") == 2


def test_empty_statistics_written_as_blank(internal_config, output_dirs, sample_csvs):
    written = HarmonizationPipeline(internal_config, output_dirs).run(configure_logging=False)

    text = written["summary"].read_text().splitlines()
    b2 = next(line for line in text if line.startswith("B2,"))
    assert b2.startswith("B2,,,0,")


def test_rerun_is_byte_identical(internal_config, output_dirs, sample_csvs):
    first = HarmonizationPipeline(internal_config, output_dirs).run(configure_logging=False)
    first_bytes = {key: path.read_bytes() for key, path in first.items()}

    second = HarmonizationPipeline(internal_config, output_dirs).run(configure_logging=False)
    second_bytes = {key: path.read_bytes() for key, path in second.items()}

    assert first_bytes == second_bytes


def test_prevalence_can_be_disabled(make_config, sample_table_a, sample_table_b):
    config = make_config(WRITE_PREVALENCE=False)
    sample_table_a.to_csv(config.sources.source_a, index=False)
    sample_table_b.to_csv(config.sources.source_b, index=False)
    output_dirs = setup_output_directories(config.base_dir)

    written = HarmonizationPipeline(config, output_dirs).run(configure_logging=False)

    assert set(written) == {"combined", "summary"}
    assert not (output_dirs["outputs"] / config.output.files.prevalence).exists()


def test_schema_error_writes_nothing(internal_config, output_dirs, sample_table_a, sample_table_b):
    sample_table_a.drop(columns="total_n").to_csv(internal_config.sources.source_a, index=False)
    sample_table_b.to_csv(internal_config.sources.source_b, index=False)

    with pytest.raises(SchemaError, match="total_n"):
        HarmonizationPipeline(internal_config, output_dirs).run(configure_logging=False)

    assert list(output_dirs["outputs"].iterdir()) == []


def test_failed_write_leaves_no_outputs(internal_config, output_dirs, sample_csvs, monkeypatch):
    real_write = orchestrator.write_table
    calls = []

    def failing_write(df, path, **kwargs):
        calls.append(path)
        if len(calls) == 2:
            raise OSError("disk full")
        return real_write(df, path, **kwargs)

    monkeypatch.setattr(orchestrator, "write_table", failing_write)

    with pytest.raises(OSError, match="disk full"):
        HarmonizationPipeline(internal_config, output_dirs).run(configure_logging=False)

    assert len(calls) == 2
    assert list(output_dirs["outputs"].iterdir()) == []


def test_missing_source_raises(internal_config, output_dirs):
    with pytest.raises(FileNotFoundError, match="source A"):
        HarmonizationPipeline(internal_config, output_dirs).run(configure_logging=False)


def test_setup_logging_writes_log_file(internal_config, output_dirs, sample_csvs):
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    try:
        HarmonizationPipeline(internal_config, output_dirs, run_id="logtest").run()
        for handler in root.handlers:
            handler.flush()

        log_file = output_dirs["logs"] / internal_config.logging.filename
        assert log_file.exists()
        assert "Run logtest complete" in log_file.read_text()
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
