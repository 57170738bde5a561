"""Batch orchestration of the harmonization pipeline.

Reads both source tables, runs the in-memory stages, and writes the
output artifacts. All tables are computed before the first file is
written, so a failing run leaves no partial outputs behind.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, TYPE_CHECKING

from nutrecon.pipeline.io import read_source_table, write_table
from nutrecon.pipeline.processor import HarmonizedTables, harmonize
from nutrecon.setup_directories import get_output_path

if TYPE_CHECKING:
    from nutrecon.schemas import InternalConfig

__all__ = ['HarmonizationPipeline']

logger = logging.getLogger(__name__)


class HarmonizationPipeline:
    """Runs one reconciliation of the ORG_A and ORG_B nutrient tables.

    **Outputs** (under ``outputs/``, names from config):

    - Combined surface dataset: long format, one row per retained
      observation
    - Site summary: one row per site, sorted by TN median
    - Prevalence table: site x year sampling matrix (optional)

    **Logging:**

    Console and file (``logs/<logging.filename>``), level from config.

    Example usage::

        config, output_dirs, run_id = init_runtime_config("scripts/user_config.py")
        pipeline = HarmonizationPipeline(config, output_dirs, run_id=run_id)
        written = pipeline.run()
    """

    def __init__(self, config: "InternalConfig", output_dirs: Dict[str, Path],
                 run_id: Optional[str] = None):
        """Initialize pipeline with validated configuration.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        output_dirs : dict
            Output directory paths from ``setup_output_directories``:
            base, outputs, logs.
        run_id : str, optional
            Identifier of this run, used in log messages.
        """
        self.config = config
        self.output_dirs = output_dirs
        self.run_id = run_id
        self.results: Optional[HarmonizedTables] = None

    def _setup_logging(self):
        """Configure root logger with file and console handlers.

        Log level and log file name come from config.
        """
        log_level = getattr(logging, self.config.logging.level.upper(), logging.INFO)

        log_dir = Path(self.output_dirs["logs"])
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / self.config.logging.filename

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Clear existing handlers and add new ones
        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

        # File handler
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

        # Console handler
        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        logger.info("Logging: level=%s, file=%s", self.config.logging.level, log_path)

    def run(self, configure_logging: bool = True) -> Dict[str, Path]:
        """Read inputs, harmonize, and write output artifacts.

        Parameters
        ----------
        configure_logging : bool, optional
            Install file and console handlers on the root logger
            (default True). Tests and embedding applications pass False
            to keep their own logging setup.

        Returns
        -------
        dict
            Written artifact paths keyed by ``combined``, ``summary`` and,
            when enabled, ``prevalence``.

        Raises
        ------
        FileNotFoundError
            If a source table does not exist.
        SchemaError
            If a source table violates its schema.
        ContractViolation
            If a stage breaks its output invariant.
        """
        if configure_logging:
            self._setup_logging()

        logger.info("Run %s: harmonizing %s and %s",
                    self.run_id or "-", self.config.sources.source_a, self.config.sources.source_b)

        table_a = read_source_table(self.config.sources.source_a, label="source A")
        table_b = read_source_table(self.config.sources.source_b, label="source B")

        try:
            self.results = harmonize(table_a, table_b)
        except Exception:
            logger.exception("Harmonization failed; no outputs written")
            raise

        return self._write_outputs(self.results)

    def _write_outputs(self, results: HarmonizedTables) -> Dict[str, Path]:
        """Write the computed tables to ``outputs/``.

        Each table is first written to ``<name>.tmp``; the final names only
        appear once every table has been written. A failed write removes
        the temporary files and re-raises.
        """
        files = self.config.output.files
        csv = self.config.csv

        tables = {
            "combined": (results.combined, files.combined),
            "summary": (results.summary, files.summary),
        }
        if self.config.output.write_prevalence:
            tables["prevalence"] = (results.prevalence, files.prevalence)

        staged = {}
        try:
            for key, (df, filename) in tables.items():
                path = get_output_path(self.output_dirs, filename)
                tmp_path = path.with_name(path.name + ".tmp")
                staged[key] = (tmp_path, path)
                write_table(df, tmp_path, date_format=csv.date_format, na_rep=csv.na_rep)
        except Exception:
            logger.exception("Writing outputs failed; no outputs written")
            for tmp_path, _ in staged.values():
                tmp_path.unlink(missing_ok=True)
            raise

        written = {}
        for key, (tmp_path, path) in staged.items():
            written[key] = tmp_path.replace(path)

        logger.info("Run %s complete: %d artifacts written", self.run_id or "-", len(written))
        return written
