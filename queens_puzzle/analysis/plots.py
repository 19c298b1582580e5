"""Charts describing generator behaviour across board sizes.

Generated files (suffix from ``settings.filename_suffix()``):

- 01_attempts_vs_N.png: Mean attempts per accepted puzzle (±1σ)
    - X: N (board size). Y: attempts.
- 02_time_vs_N.png: Mean generation time per accepted puzzle (log scale)
    - X: N (board size). Y: time [s].
- 03_failure_breakdown.png: Discarded attempts by cause
    - Stacked bars per N: placement dead ends, partition errors, failed validation.
- 04_region_sizes_N{N}.png: Distribution of region sizes for accepted puzzles
    - Histogram of cells per region; the dashed line marks the size ceiling.
"""
from __future__ import annotations

import os
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402

from queens_puzzle.validation import max_region_size  # noqa: E402

from . import settings  # noqa: E402
from .stats import BenchmarkResults, GenerationRecord  # noqa: E402


def _stat(results: BenchmarkResults, size: int, key: str, field: str) -> float:
    value = results[size].get(key, {}).get(field)  # type: ignore[union-attr]
    return float(value) if value is not None else 0.0


def plot_attempts_vs_size(results: BenchmarkResults, sizes: List[int], out_dir: str) -> str:
    means = np.array([_stat(results, n, "attempts", "mean") for n in sizes])
    stds = np.array([_stat(results, n, "attempts", "std") for n in sizes])

    plt.figure(figsize=(12, 8))
    plt.errorbar(sizes, means, yerr=stds, marker="o", linewidth=2, markersize=8, capsize=5, label="Attempts per puzzle")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Attempts", fontsize=12)
    plt.title("Generation Attempts vs Board Size\n(Accepted puzzles, mean ± 1σ)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(sizes)

    fname = os.path.join(out_dir, f"01_attempts_vs_N{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    print(f"Saved attempts chart: {fname}")
    return fname


def plot_time_vs_size(results: BenchmarkResults, sizes: List[int], out_dir: str) -> str:
    means = [max(_stat(results, n, "time", "mean"), 1e-6) for n in sizes]

    plt.figure(figsize=(12, 8))
    plt.semilogy(sizes, means, marker="s", linewidth=2, markersize=8, label="Mean generation time")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Time [s] (log scale)", fontsize=12)
    plt.title("Generation Time vs Board Size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(sizes)

    fname = os.path.join(out_dir, f"02_time_vs_N{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    print(f"Saved time chart: {fname}")
    return fname


def plot_failure_breakdown(results: BenchmarkResults, sizes: List[int], out_dir: str) -> str:
    x = np.arange(len(sizes))
    placement = np.array([results[n].get("placement_failures", 0) for n in sizes])
    partition = np.array([results[n].get("partition_failures", 0) for n in sizes])
    validation = np.array([results[n].get("validation_failures", 0) for n in sizes])

    plt.figure(figsize=(12, 8))
    plt.bar(x, placement, label="Placement dead end")
    plt.bar(x, partition, bottom=placement, label="Partition error")
    plt.bar(x, validation, bottom=placement + partition, label="Failed validation")
    plt.xticks(x, [str(n) for n in sizes])
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Discarded attempts", fontsize=12)
    plt.title("Discarded Attempts by Cause", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, axis="y", alpha=0.7)

    fname = os.path.join(out_dir, f"03_failure_breakdown{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    print(f"Saved failure breakdown chart: {fname}")
    return fname


def plot_region_size_distribution(records: List[GenerationRecord], size: int, out_dir: str) -> str:
    cell_counts = [count for r in records if r["size"] == size for count in r["region_sizes"]]

    plt.figure(figsize=(12, 8))
    if cell_counts:
        sns.histplot(cell_counts, discrete=True, stat="count")
    plt.axvline(max_region_size(size), color="red", linestyle="--", label="Size ceiling")
    plt.xlabel("Cells per region", fontsize=12)
    plt.ylabel("Regions", fontsize=12)
    plt.title(f"Region Size Distribution (N={size})", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.5)

    fname = os.path.join(out_dir, f"04_region_sizes_N{size}{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    print(f"Saved region size chart: {fname}")
    return fname


def plot_generation_analysis(
    results: BenchmarkResults,
    records: List[GenerationRecord],
    sizes: List[int],
    out_dir: str,
) -> List[str]:
    """Generate the full chart set; return the written paths."""
    os.makedirs(out_dir, exist_ok=True)
    paths = [
        plot_attempts_vs_size(results, sizes, out_dir),
        plot_time_vs_size(results, sizes, out_dir),
        plot_failure_breakdown(results, sizes, out_dir),
    ]
    for size in sizes:
        paths.append(plot_region_size_distribution(records, size, out_dir))
    return paths
