"""
Benchmark and tooling package for the Queens puzzle generator.

This package contains:
- settings: global knobs, overridable from config.json
- stats: typed records, summaries and progress reporting
- experiments: batch generation runners (sequential and parallel)
- reporting: CSV and JSON exports
- plots: charts of generator behaviour
- cli: top-level command-line entry point
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    BenchmarkResults,
    GenerationRecord,
    ProgressPrinter,
    SizeSummary,
    StatsSummary,
    compute_detailed_statistics,
    summarize_runs,
)

__all__ = [
    # types
    "StatsSummary",
    "GenerationRecord",
    "SizeSummary",
    "BenchmarkResults",
    # utils
    "compute_detailed_statistics",
    "summarize_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
