"""Queens puzzle generation and validation."""

from .board import REGION_PALETTE, VALID_SIZES, Coord, SquareState
from .conflicts import (
    Conflict,
    auto_mark,
    cycle_square,
    excluded_cells,
    find_conflicts,
    is_solved,
)
from .errors import (
    GenerationExhaustedError,
    InvalidBoardSizeError,
    PartitionError,
    PlacementError,
    QueensPuzzleError,
)
from .generator import MAX_ATTEMPTS, Puzzle, generate, generate_puzzle
from .placement import can_place_queen, place_queens
from .regions import partition_regions
from .validation import (
    is_region_contiguous,
    is_valid_puzzle,
    max_region_size,
    validate_puzzle,
    validate_queens,
    validate_regions,
)

__version__ = "0.1.0"

__all__ = [
    "Coord",
    "SquareState",
    "VALID_SIZES",
    "REGION_PALETTE",
    "MAX_ATTEMPTS",
    "Puzzle",
    "generate",
    "generate_puzzle",
    "place_queens",
    "can_place_queen",
    "partition_regions",
    "validate_queens",
    "validate_regions",
    "validate_puzzle",
    "is_valid_puzzle",
    "is_region_contiguous",
    "max_region_size",
    "Conflict",
    "find_conflicts",
    "excluded_cells",
    "auto_mark",
    "cycle_square",
    "is_solved",
    "QueensPuzzleError",
    "InvalidBoardSizeError",
    "PlacementError",
    "PartitionError",
    "GenerationExhaustedError",
]
