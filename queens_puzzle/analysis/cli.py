"""Command-line interface for generating and benchmarking Queens puzzles.

This module wires together configuration loading, single-puzzle generation
and benchmark pipelines (sequential or process-parallel). It isolates I/O,
argument parsing, and progress reporting from the core generator modules so
that the rest of the codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import json
import logging
import random
import tempfile
from pathlib import Path
from typing import List, Optional

from config_manager import ConfigManager
from queens_puzzle.board import VALID_SIZES
from queens_puzzle.errors import GenerationExhaustedError, InvalidBoardSizeError
from queens_puzzle.generator import generate_puzzle
from queens_puzzle.validation import validate_puzzle

from . import settings
from .experiments import run_generation_experiments, run_generation_experiments_parallel
from .reporting import save_puzzle_json, save_raw_runs_to_csv, save_summary_to_csv

DEFAULT_CONFIG = "config.json"


# ------------- Utils --------------------------------------------------------

def parse_size_filters(size_args: Optional[List[str]]) -> Optional[List[int]]:
    """Normalize size CLI inputs into a sorted list of valid board sizes.

    Accepts repeated flags (e.g., ``-n 8 -n 10``) and comma-separated lists
    (e.g., ``-n 8,10``). Returns ``None`` when no filter is provided so that
    callers can fall back to the configured default set.
    """
    if not size_args:
        return None
    selected: List[int] = []
    for entry in size_args:
        for token in entry.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                size = int(token)
            except ValueError as exc:
                raise ValueError(f"Board size must be an integer, got '{token}'") from exc
            if size not in VALID_SIZES:
                raise InvalidBoardSizeError(size, VALID_SIZES)
            selected.append(size)
    return sorted(set(selected)) or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and copy its values into ``settings`` in-place."""
    config_mgr = ConfigManager(config_path)

    generation = config_mgr.get_generation_settings()
    if generation:
        settings.MAX_ATTEMPTS = int(generation.get("max_attempts", settings.MAX_ATTEMPTS))
        seed = generation.get("seed", settings.SEED)
        settings.SEED = int(seed) if seed is not None else None

    experiment = config_mgr.get_experiment_settings()
    if experiment:
        sizes = [int(n) for n in experiment.get("sizes", settings.SIZES)]
        invalid = [n for n in sizes if n not in VALID_SIZES]
        if invalid:
            raise ValueError("Unsupported board sizes in configuration: " + ", ".join(str(n) for n in invalid))
        settings.SIZES = sizes
        settings.RUNS_PER_SIZE = int(experiment.get("runs_per_size", settings.RUNS_PER_SIZE))
        processes = experiment.get("num_processes")
        if processes:
            settings.NUM_PROCESSES = int(processes)
        settings.VALIDATE = bool(experiment.get("validate", settings.VALIDATE))

    output = config_mgr.get_output_settings()
    if output:
        settings.OUT_DIR = output.get("output_dir", settings.OUT_DIR)
        settings.RUN_TAG = output.get("run_tag", settings.RUN_TAG)
        settings.DATE_IN_FILENAMES = bool(output.get("date_in_filenames", settings.DATE_IN_FILENAMES))

    return config_mgr


# ------------- Commands -----------------------------------------------------

def cmd_generate(args: argparse.Namespace) -> None:
    """Generate one puzzle and print it (or write it) as JSON."""
    seed = args.seed if args.seed is not None else settings.SEED
    rng = random.Random(seed)
    puzzle = generate_puzzle(args.size, max_attempts=settings.MAX_ATTEMPTS, rng=rng)

    if args.json:
        path = save_puzzle_json(puzzle, args.json)
        print(f"Saved {puzzle.size}x{puzzle.size} puzzle ({puzzle.attempts} attempts): {path}")
    else:
        print(json.dumps(puzzle.as_dict(), indent=2))


def cmd_benchmark(args: argparse.Namespace) -> None:
    """Generate batches of puzzles per size and export statistics."""
    sizes = parse_size_filters(args.sizes) or settings.SIZES
    runs = args.runs if args.runs is not None else settings.RUNS_PER_SIZE
    seed = args.seed if args.seed is not None else settings.SEED
    validate = args.validate or settings.VALIDATE
    out_dir = args.out_dir or settings.OUT_DIR

    print(f"=== Benchmark: sizes={sizes}, runs={runs}, max_attempts={settings.MAX_ATTEMPTS} ===")
    if args.parallel:
        results, records = run_generation_experiments_parallel(
            sizes, runs, settings.MAX_ATTEMPTS, seed=seed, validate=validate,
            num_processes=settings.NUM_PROCESSES,
        )
    else:
        results, records = run_generation_experiments(
            sizes, runs, settings.MAX_ATTEMPTS, seed=seed, validate=validate,
            progress_label="Benchmark",
        )

    for size in sizes:
        entry = results[size]
        attempts = entry.get("attempts", {}).get("mean")
        print(
            f"  N={size}: {entry.get('successes', 0)}/{entry.get('total_runs', 0)} generated, "
            f"mean attempts={attempts if attempts is None else round(attempts, 2)}"
        )

    save_summary_to_csv(results, sizes, out_dir)
    save_raw_runs_to_csv(records, out_dir)
    if args.plots:
        from .plots import plot_generation_analysis

        plot_generation_analysis(results, records, sizes, out_dir)


def run_quick_regression_tests() -> None:
    """Execute a fast, seeded smoke test across all supported sizes.

    Verifies that:
    - Every supported size yields a puzzle that passes the validators.
    - Unsupported sizes are rejected.
    - The benchmark pipeline produces non-empty CSV files in a temporary folder.
    """
    print("Running quick regression tests across all board sizes...")

    for size in VALID_SIZES:
        puzzle = generate_puzzle(size, rng=random.Random(42 + size))
        issues = validate_puzzle(puzzle.regions, puzzle.marks)
        if issues:
            raise AssertionError(f"Generator produced an invalid puzzle for N={size}: {issues}")
        print(f"  N={size}: valid puzzle in {puzzle.attempts} attempts, time={puzzle.elapsed:.4f}s")

    for size in (7, 13):
        try:
            generate_puzzle(size)
        except InvalidBoardSizeError:
            continue
        raise AssertionError(f"Board size {size} was accepted.")

    results, records = run_generation_experiments([8], runs=3, max_attempts=settings.MAX_ATTEMPTS, seed=42, validate=True)
    if results[8].get("successes", 0) == 0:
        raise AssertionError("Benchmark pipeline did not generate any puzzle for N=8.")

    with tempfile.TemporaryDirectory() as tmpdir:
        for path in (save_summary_to_csv(results, [8], tmpdir), save_raw_runs_to_csv(records, tmpdir)):
            if not Path(path).exists() or Path(path).stat().st_size == 0:
                raise AssertionError(f"CSV was not generated successfully: {path}")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Generate and benchmark Queens puzzles.")
    parser.add_argument("--config", default=None, help="Path to configuration file (default: config.json when present).")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log discarded generation attempts.")
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Generate a single puzzle.")
    gen.add_argument("--size", "-n", type=int, default=8, help="Board size (8-12, default: 8).")
    gen.add_argument("--seed", type=int, default=None, help="Seed for a reproducible puzzle.")
    gen.add_argument("--json", default=None, help="Write the puzzle to this JSON file instead of stdout.")
    gen.set_defaults(func=cmd_generate)

    bench = sub.add_parser("benchmark", help="Generate many puzzles and export statistics.")
    bench.add_argument("--sizes", "-n", action="append", help="Board sizes (comma-separated or multiple flags). Default: configured sizes.")
    bench.add_argument("--runs", "-r", type=int, default=None, help="Puzzles per size.")
    bench.add_argument("--seed", type=int, default=None, help="Base seed for reproducible runs.")
    bench.add_argument("--parallel", action="store_true", help="Spread runs over worker processes.")
    bench.add_argument("--plots", action="store_true", help="Also write charts.")
    bench.add_argument("--validate", action="store_true", help="Re-check every puzzle with the standalone validators.")
    bench.add_argument("--out-dir", default=None, help="Output directory (default: configured output_dir).")
    bench.set_defaults(func=cmd_benchmark)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen command."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    if args.quick_test:
        run_quick_regression_tests()
        return

    config_path = args.config
    if config_path is None and Path(DEFAULT_CONFIG).exists():
        config_path = DEFAULT_CONFIG
    if config_path is not None:
        try:
            apply_configuration(config_path)
        except FileNotFoundError as exc:
            print(f"Configuration file not found: {exc}")
            raise SystemExit(1) from exc
        except ValueError as exc:
            print(f"Configuration error: {exc}")
            raise SystemExit(1) from exc

    if not getattr(args, "func", None):
        parser.print_help()
        raise SystemExit(2)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except GenerationExhaustedError as exc:
        print(f"Generation failed: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
