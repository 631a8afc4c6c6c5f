"""
Runtime settings shared by both pipelines.
Edit the constants here or set SIMREC_VERBOSE=1 for progress output.
"""

import os

# -------------------------------------------------------------------
# Utility matrix file format
# -------------------------------------------------------------------
UNRATED_TOKEN = "-"

# -------------------------------------------------------------------
# Collaborative filtering defaults
# -------------------------------------------------------------------
DEFAULT_K = 2
DEFAULT_METRIC = "pearson"
DEFAULT_PREDICTION = "simple"

# -------------------------------------------------------------------
# Output
# -------------------------------------------------------------------
OUTPUT_DECIMALS = 4
VERBOSE = os.environ.get("SIMREC_VERBOSE", "0").lower() in ("1", "true", "yes")
