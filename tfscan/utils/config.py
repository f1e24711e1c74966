"""Configuration and constants for tfscan."""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.environ.get("TFSCAN_DATA_DIR", PROJECT_ROOT / "data"))
RESULTS_DIR = DATA_DIR / "results"
LOG_DIR = PROJECT_ROOT / "logs"

# Nucleotide alphabet (column order of every PWM and background)
NUCLEOTIDES = "ACGT"

# Full scanning alphabet: the four bases followed by the IUPAC ambiguity codes
IUPAC_SYMBOLS = "ACGTNVHDBMKWSYR"

# Substituted for a PWM frequency of exactly zero to avoid log(0)
PSEUDOCOUNT = 0.0001

# Background nucleotide frequencies (A, C, G, T)
UNIFORM_BACKGROUND = (0.25, 0.25, 0.25, 0.25)

# Spacing analysis
TOP_SPACING_BINS = 10
DEFAULT_PVALUE = 1e-4

# Grid step (LLR units) of the score distribution used for p-value thresholds
SCORE_RESOLUTION = 0.001

# Random seed for reproducibility
RANDOM_SEED = 42
