#!/usr/bin/env python3
"""Nutrient dataset harmonization runner.

Usage:
    python scripts/run_harmonize_pipeline.py scripts/user_config.py
    python scripts/run_harmonize_pipeline.py scripts/user_config.py --base-dir /tmp/nutrecon
    python scripts/run_harmonize_pipeline.py --source-a a.csv --source-b b.csv --base-dir out
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from nutrecon.cli.run_harmonize import main


if __name__ == "__main__":
    main()
