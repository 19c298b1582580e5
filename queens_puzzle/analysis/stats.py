"""Typed result shapes and statistics helpers for generation benchmarks.

Defines ``TypedDict`` structures for benchmark outputs and provides utilities
to compute aggregate statistics across per-puzzle records.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, TypedDict

import numpy as np


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class GenerationRecord(TypedDict):
    size: int
    run: int
    success: bool
    attempts: int
    time: float
    placement_failures: int
    partition_failures: int
    validation_failures: int
    region_sizes: List[int]
    singletons: int


class SizeSummary(TypedDict, total=False):
    total_runs: int
    successes: int
    failures: int
    success_rate: float
    attempts: StatsSummary
    time: StatsSummary
    largest_region: StatsSummary
    smallest_region: StatsSummary
    singleton_rate: float
    placement_failures: int
    partition_failures: int
    validation_failures: int


BenchmarkResults = Dict[int, SizeSummary]

_STAT_FIELDS = ("mean", "median", "std", "min", "max", "q25", "q75", "range")


class ProgressPrinter:
    """Print one line per finished step of a batch, e.g. one board size.

    ``total`` below 1 is treated as 1 so the percentage stays defined.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label
        self.width = len(str(self.total))

    def update(self, index: int, detail: str = "") -> None:
        line = f"[{self.label}] {index:>{self.width}}/{self.total} {100 * index // self.total:3d}%"
        print(f"{line}  {detail}" if detail else line)


def compute_detailed_statistics(values: Sequence[float]) -> StatsSummary:
    """Count, mean, median, population std, extremes, quartiles and range.

    Quartiles use numpy's linear interpolation. An empty input yields
    ``count == 0`` and ``None`` everywhere else, so CSV rows keep their shape.
    """
    if len(values) == 0:
        summary: StatsSummary = {"count": 0}
        for name in _STAT_FIELDS:
            summary[name] = None  # type: ignore[literal-required]
        return summary

    data = np.asarray(values, dtype=float)
    q25, median, q75 = np.percentile(data, [25, 50, 75])
    return {
        "count": int(data.size),
        "mean": float(data.mean()),
        "median": float(median),
        "std": float(data.std()),
        "min": float(data.min()),
        "max": float(data.max()),
        "q25": float(q25),
        "q75": float(q75),
        "range": float(np.ptp(data)),
    }


def summarize_runs(records: List[GenerationRecord]) -> SizeSummary:
    """Aggregate the records of one board size.

    Timing and attempt statistics cover successful runs only; failure counts
    are summed over all runs.
    """
    successes = [r for r in records if r["success"]]
    total = len(records)
    shapes = [r["region_sizes"] for r in successes if r["region_sizes"]]

    return {
        "total_runs": total,
        "successes": len(successes),
        "failures": total - len(successes),
        "success_rate": len(successes) / total if total else 0.0,
        "attempts": compute_detailed_statistics([float(r["attempts"]) for r in successes]),
        "time": compute_detailed_statistics([r["time"] for r in successes]),
        "largest_region": compute_detailed_statistics([float(max(s)) for s in shapes]),
        "smallest_region": compute_detailed_statistics([float(min(s)) for s in shapes]),
        "singleton_rate": (
            sum(1 for r in successes if r["singletons"]) / len(successes) if successes else 0.0
        ),
        "placement_failures": sum(r["placement_failures"] for r in records),
        "partition_failures": sum(r["partition_failures"] for r in records),
        "validation_failures": sum(r["validation_failures"] for r in records),
    }
