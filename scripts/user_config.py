"""nutrecon User Configuration.

This is the user-facing configuration file. Modify settings here to point
the pipeline at your data. Expert defaults live in nutrecon.schemas.param.

Usage:
    python scripts/run_harmonize_pipeline.py scripts/user_config.py
    python scripts/run_harmonize_pipeline.py scripts/user_config.py --base-dir /tmp/out
"""

CONFIG = {
    # ========================================================================
    # INPUT TABLES
    # ========================================================================
    "SOURCE_A": "data/org_a_nutrients.csv",  # site, date, depth, nitrate_nitrite_n, ammonium_n, total_n
    "SOURCE_B": "data/org_b_nutrients.csv",  # station, date, tn_depth, din_depth, din_n, total_n

    # ========================================================================
    # OUTPUT
    # ========================================================================
    "BASE_DIR": "output",     # outputs/ and logs/ are created here
    "WRITE_PREVALENCE": True, # site x year sampling matrix for the tile chart
    "LOG_LEVEL": "INFO",
}
