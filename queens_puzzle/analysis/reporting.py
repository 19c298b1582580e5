"""Export utilities for benchmark outputs and generated puzzles.

These helpers materialize concise CSV summaries, full per-run raw data for
spreadsheet inspection, and JSON dumps of individual puzzles. Filenames
carry the suffix configured in ``settings`` (run tag and/or run id).
"""
from __future__ import annotations

import csv
import json
import os
from typing import List

import pandas as pd

from queens_puzzle.generator import Puzzle

from . import settings
from .stats import BenchmarkResults, GenerationRecord

SUMMARY_COLUMNS = [
    "n",
    "total_runs",
    "successes",
    "failures",
    "success_rate",
    "attempts_mean",
    "attempts_median",
    "attempts_max",
    "time_mean",
    "time_median",
    "time_max",
    "largest_region_mean",
    "largest_region_max",
    "smallest_region_mean",
    "singleton_rate",
    "placement_failures",
    "partition_failures",
    "validation_failures",
]


def save_summary_to_csv(results: BenchmarkResults, sizes: List[int], out_dir: str) -> str:
    """Write one row of aggregate metrics per board size; return the path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"generation_summary{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(SUMMARY_COLUMNS)
        for size in sizes:
            entry = results[size]
            attempts = entry.get("attempts", {})
            time_stats = entry.get("time", {})
            largest = entry.get("largest_region", {})
            smallest = entry.get("smallest_region", {})
            writer.writerow([
                size,
                entry.get("total_runs", 0),
                entry.get("successes", 0),
                entry.get("failures", 0),
                entry.get("success_rate", 0.0),
                attempts.get("mean"),
                attempts.get("median"),
                attempts.get("max"),
                time_stats.get("mean"),
                time_stats.get("median"),
                time_stats.get("max"),
                largest.get("mean"),
                largest.get("max"),
                smallest.get("mean"),
                entry.get("singleton_rate", 0.0),
                entry.get("placement_failures", 0),
                entry.get("partition_failures", 0),
                entry.get("validation_failures", 0),
            ])

    print(f"Saved generation summary: {filename}")
    return filename


def records_to_frame(records: List[GenerationRecord]) -> pd.DataFrame:
    """Flatten raw run records into a DataFrame (region sizes as a string)."""
    frame = pd.DataFrame.from_records(records)
    if frame.empty:
        return frame
    frame["region_count"] = frame["region_sizes"].apply(len)
    frame["region_sizes"] = frame["region_sizes"].apply(lambda sizes: " ".join(str(s) for s in sizes))
    return frame.sort_values(["size", "run"]).reset_index(drop=True)


def save_raw_runs_to_csv(records: List[GenerationRecord], out_dir: str) -> str:
    """Write every run record to CSV; return the path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"generation_raw_runs{settings.filename_suffix()}.csv")
    records_to_frame(records).to_csv(filename, index=False)
    print(f"Saved raw run data: {filename}")
    return filename


def save_puzzle_json(puzzle: Puzzle, path: str) -> str:
    """Dump one puzzle (regions, queens, marks, diagnostics) as JSON."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w") as f:
        json.dump(puzzle.as_dict(), f, indent=2)
    return path
