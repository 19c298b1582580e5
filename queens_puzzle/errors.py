"""Exception taxonomy for puzzle generation.

- ``InvalidBoardSizeError``: the requested size is not supported. Raised
  before any randomized work and never retried.
- ``PlacementError``: one randomized queen placement pass dead-ended.
- ``PartitionError``: region growth left the board in an unusable state.
- ``GenerationExhaustedError``: the attempt budget ran out.

The two middle errors are retriable and are absorbed by the orchestrator;
only the first and the last ever reach callers of ``generate_puzzle``.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence


class QueensPuzzleError(Exception):
    """Base class for all errors raised by this package."""


class InvalidBoardSizeError(QueensPuzzleError, ValueError):
    def __init__(self, size: object, valid_sizes: Sequence[int]):
        self.size = size
        self.valid_sizes = tuple(valid_sizes)
        super().__init__(
            f"Invalid board size: {size}. Valid sizes are: "
            + ", ".join(str(s) for s in self.valid_sizes)
        )


class PlacementError(QueensPuzzleError):
    """Raised when no legal cell remains for the next queen."""

    def __init__(self, placed: int, size: int):
        self.placed = placed
        self.size = size
        super().__init__(f"Failed to place queens: stuck after {placed} of {size}")


class PartitionError(QueensPuzzleError):
    """Raised when the region grid cannot be completed."""


class GenerationExhaustedError(QueensPuzzleError, RuntimeError):
    """Raised when no valid puzzle was found within the attempt budget.

    ``reasons`` counts why each discarded attempt failed, which helps tell a
    too-tight budget apart from a systematic partition problem.
    """

    def __init__(self, size: int, attempts: int, reasons: Optional[Counter] = None):
        self.size = size
        self.attempts = attempts
        self.reasons = reasons if reasons is not None else Counter()
        super().__init__(
            f"Failed to generate valid puzzle after {attempts} attempts (size {size})"
        )
