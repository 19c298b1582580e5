"""Global settings for the puzzle generation benchmarks.

This module centralizes tunable constants used across the analysis code.
Values can be overridden at runtime via the configuration loader in
`queens_puzzle.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

from queens_puzzle.board import VALID_SIZES
from queens_puzzle.generator import MAX_ATTEMPTS as DEFAULT_MAX_ATTEMPTS

# Board sizes to benchmark (in ascending order)
SIZES: List[int] = list(VALID_SIZES)

# Number of independent puzzles generated per size
RUNS_PER_SIZE: int = 50

# Attempt budget handed to the generator for every puzzle
MAX_ATTEMPTS: int = DEFAULT_MAX_ATTEMPTS

# Base seed for reproducible benchmarks (None = fresh randomness each run)
SEED: Optional[int] = None

# Re-check every generated puzzle with the standalone validators
VALIDATE: bool = False

# Output directory for CSV, JSON and charts
OUT_DIR: str = "results_queens_puzzle"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots include a datestamp suffix (e.g., _20251113-142530)
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to filenames
RUN_TAG: Optional[str] = None


def filename_suffix() -> str:
    """Return the ``_<tag>_<run id>`` suffix configured for output files."""
    parts: List[str] = []
    if RUN_TAG:
        parts.append(str(RUN_TAG))
    if DATE_IN_FILENAMES and RUN_ID:
        parts.append(str(RUN_ID))
    return ("_" + "_".join(parts)) if parts else ""
