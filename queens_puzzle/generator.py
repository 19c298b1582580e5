"""Puzzle generation orchestrator.

Runs the full pipeline (queen placement, region partitioning, validation) in
a bounded retry loop and returns the first structurally valid puzzle.

Contract (public API)
---------------------
- ``generate(board_size)`` returns ``(regions, marks)``: two fresh N×N grids,
  one mapping each cell to its region colour and one holding
  ``SquareState.QUEEN`` on the solution cells and ``SquareState.EMPTY``
  elsewhere.
- ``generate_puzzle(board_size, max_attempts, rng)`` returns a
  :class:`Puzzle` with the same grids plus the queen list and diagnostics.
- Sizes outside ``VALID_SIZES`` raise ``InvalidBoardSizeError`` before any
  randomness is consumed.
- Placement dead ends, partition errors and failed validations are absorbed;
  once ``max_attempts`` attempts fail, ``GenerationExhaustedError`` is raised.
  Results are all-or-nothing: a partial puzzle is never returned.

Determinism
-----------
Stochastic. Pass a seeded ``random.Random`` for reproducible puzzles.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from time import perf_counter
from typing import List, Optional, Tuple

from .board import VALID_SIZES, Coord, SquareState, marks_from_queens, region_colors
from .errors import (
    GenerationExhaustedError,
    InvalidBoardSizeError,
    PartitionError,
    PlacementError,
)
from .placement import place_queens
from .regions import partition_regions
from .validation import validate_queens, validate_regions

logger = logging.getLogger(__name__)

MAX_ATTEMPTS: int = 100


@dataclass
class Puzzle:
    """A validated puzzle and how long it took to find."""

    size: int
    regions: List[List[str]]
    queens: List[Coord]
    marks: List[List[SquareState]]
    attempts: int = 1
    elapsed: float = 0.0
    failures: Counter = field(default_factory=Counter)

    @property
    def colors(self) -> List[str]:
        return sorted({color for row in self.regions for color in row})

    def as_dict(self) -> dict:
        return {
            "size": self.size,
            "regions": [list(row) for row in self.regions],
            "queens": [list(q) for q in self.queens],
            "marks": [[state.value for state in row] for row in self.marks],
            "attempts": self.attempts,
            "elapsed": self.elapsed,
        }


def check_board_size(board_size: object) -> int:
    """Return ``board_size`` if supported, else raise ``InvalidBoardSizeError``."""
    if isinstance(board_size, bool) or not isinstance(board_size, int) or board_size not in VALID_SIZES:
        raise InvalidBoardSizeError(board_size, VALID_SIZES)
    return board_size


def _attempt(size: int, rng: random.Random) -> Tuple[List[Coord], List[List[str]], List[str]]:
    """Build one candidate puzzle from scratch and list what is wrong with it."""
    queens = place_queens(size, rng)
    regions = partition_regions(size, queens, region_colors(size), rng)
    issues = validate_queens(size, queens) + validate_regions(size, regions, queens)
    return queens, regions, issues


def generate_puzzle(
    board_size: int,
    max_attempts: int = MAX_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> Puzzle:
    """Generate a validated puzzle of size ``board_size``.

    Parameters
    ----------
    board_size : int
        One of ``VALID_SIZES``.
    max_attempts : int, default 100
        Number of full pipeline attempts before giving up.
    rng : random.Random | None
        Random source; the module-level ``random`` is used when omitted.

    Returns
    -------
    Puzzle
        Fresh grids owned by the caller.

    Raises
    ------
    InvalidBoardSizeError
        If ``board_size`` is not supported.
    GenerationExhaustedError
        If every attempt failed.
    """
    size = check_board_size(board_size)
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    rng = rng or random  # type: ignore[assignment]

    failures: Counter = Counter()
    start = perf_counter()
    for attempt in range(1, max_attempts + 1):
        try:
            queens, regions, issues = _attempt(size, rng)  # type: ignore[arg-type]
        except PlacementError as exc:
            failures["placement"] += 1
            logger.debug("attempt %d: %s", attempt, exc)
            continue
        except PartitionError as exc:
            failures["partition"] += 1
            logger.debug("attempt %d: partition failed: %s", attempt, exc)
            continue

        if issues:
            failures["validation"] += 1
            logger.debug("attempt %d: discarded (%s)", attempt, "; ".join(issues))
            continue

        elapsed = perf_counter() - start
        logger.debug("generated %dx%d puzzle in %d attempts (%.4fs)", size, size, attempt, elapsed)
        return Puzzle(
            size=size,
            regions=regions,
            queens=queens,
            marks=marks_from_queens(size, queens),
            attempts=attempt,
            elapsed=elapsed,
            failures=failures,
        )

    logger.warning(
        "no valid %dx%d puzzle after %d attempts: %s",
        size, size, max_attempts, dict(failures),
    )
    raise GenerationExhaustedError(size, max_attempts, failures)


def generate(board_size: int) -> Tuple[List[List[str]], List[List[SquareState]]]:
    """Return ``(regions, marks)`` for a new puzzle of size ``board_size``."""
    puzzle = generate_puzzle(board_size)
    return puzzle.regions, puzzle.marks
