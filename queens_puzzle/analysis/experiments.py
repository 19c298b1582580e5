"""Benchmark runners for the puzzle generator (sequential and parallel).

These routines generate batches of puzzles for a set of board sizes and
record how many attempts, how much time and which kinds of discarded
attempts each puzzle needed, plus the shape of the accepted region grids.

Outputs are per-run records and per-size summaries suitable for CSV export
and plotting. Validation hooks optionally re-check every generated puzzle
with the standalone validators.
"""
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Dict, List, Optional, Tuple

from queens_puzzle.errors import GenerationExhaustedError
from queens_puzzle.generator import generate_puzzle
from queens_puzzle.validation import region_sizes, validate_puzzle

from .stats import BenchmarkResults, GenerationRecord, ProgressPrinter, summarize_runs

RunParams = Tuple[int, int, int, Optional[int], bool]


def run_seed(base_seed: Optional[int], size: int, run: int) -> Optional[int]:
    """Derive a per-run seed so parallel and sequential runs match."""
    if base_seed is None:
        return None
    return base_seed * 1_000_003 + size * 1_009 + run


def run_single_generation(params: RunParams) -> GenerationRecord:
    """Worker wrapper generating one puzzle (for parallel mapping).

    ``params`` is ``(size, run, max_attempts, base_seed, validate)``.
    Exhaustion is recorded as an unsuccessful run rather than raised.
    """
    size, run, max_attempts, base_seed, validate = params
    seed = run_seed(base_seed, size, run)
    rng = random.Random(seed)

    start = perf_counter()
    try:
        puzzle = generate_puzzle(size, max_attempts=max_attempts, rng=rng)
    except GenerationExhaustedError as exc:
        return {
            "size": size,
            "run": run,
            "success": False,
            "attempts": exc.attempts,
            "time": perf_counter() - start,
            "placement_failures": exc.reasons.get("placement", 0),
            "partition_failures": exc.reasons.get("partition", 0),
            "validation_failures": exc.reasons.get("validation", 0),
            "region_sizes": [],
            "singletons": 0,
        }

    if validate:
        issues = validate_puzzle(puzzle.regions, puzzle.marks)
        if issues:
            raise AssertionError(f"Invalid puzzle produced for N={size} run {run}: {issues}")

    sizes = sorted(region_sizes(puzzle.regions).values())
    return {
        "size": size,
        "run": run,
        "success": True,
        "attempts": puzzle.attempts,
        "time": puzzle.elapsed,
        "placement_failures": puzzle.failures.get("placement", 0),
        "partition_failures": puzzle.failures.get("partition", 0),
        "validation_failures": puzzle.failures.get("validation", 0),
        "region_sizes": sizes,
        "singletons": sum(1 for s in sizes if s == 1),
    }


def _build_params(
    sizes: List[int], runs: int, max_attempts: int, seed: Optional[int], validate: bool
) -> List[RunParams]:
    return [(size, run, max_attempts, seed, validate) for size in sizes for run in range(runs)]


def _group(records: List[GenerationRecord], sizes: List[int]) -> Dict[int, List[GenerationRecord]]:
    grouped: Dict[int, List[GenerationRecord]] = {size: [] for size in sizes}
    for record in records:
        grouped[record["size"]].append(record)
    return grouped


def run_generation_experiments(
    sizes: List[int],
    runs: int,
    max_attempts: int,
    seed: Optional[int] = None,
    validate: bool = False,
    progress_label: Optional[str] = None,
) -> Tuple[BenchmarkResults, List[GenerationRecord]]:
    """Generate ``runs`` puzzles per size in the current process.

    Returns
    -------
    (summaries, records)
        Per-size summaries keyed by N and the flat list of raw run records.
    """
    progress = ProgressPrinter(len(sizes), progress_label) if progress_label else None
    records: List[GenerationRecord] = []

    for index, size in enumerate(sizes, start=1):
        if progress:
            progress.update(index, f"N={size}")
        for params in _build_params([size], runs, max_attempts, seed, validate):
            records.append(run_single_generation(params))

    grouped = _group(records, sizes)
    return {size: summarize_runs(grouped[size]) for size in sizes}, records


def run_generation_experiments_parallel(
    sizes: List[int],
    runs: int,
    max_attempts: int,
    seed: Optional[int] = None,
    validate: bool = False,
    num_processes: int = 1,
) -> Tuple[BenchmarkResults, List[GenerationRecord]]:
    """Same as :func:`run_generation_experiments`, spread over worker processes."""
    params = _build_params(sizes, runs, max_attempts, seed, validate)
    print(f"  Generating {len(params)} puzzles on {num_processes} processes...")

    with ProcessPoolExecutor(max_workers=num_processes) as executor:
        records = list(executor.map(run_single_generation, params))

    grouped = _group(records, sizes)
    return {size: summarize_runs(grouped[size]) for size in sizes}, records
