"""Board primitives shared by the generator, validators and mark helpers.

This module provides the low-level vocabulary every other module depends on:
board sizes, coordinates, the region palette, square states and the two
neighbourhood notions used by the puzzle rules.

Representation
--------------
Boards are encoded as row-major 2D lists where ``grid[row][col]`` holds either
a region colour (regions grid) or a :class:`SquareState` (marks grid).
Coordinates are ``(row, col)`` tuples with 0-based indices.

Neighbourhoods
--------------
- Orthogonal (4-directional) steps define region contiguity.
- King-move (8-directional) steps define queen adjacency. Diagonal alignment
  of two queens is legal as long as they do not touch.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Sequence, Tuple

Coord = Tuple[int, int]

VALID_SIZES: Tuple[int, ...] = (8, 9, 10, 11, 12)

REGION_PALETTE: Tuple[str, ...] = (
    "blue",
    "yellow",
    "red",
    "lime",
    "purple",
    "cyan",
    "brown",
    "green",
    "indigo",
    "orange",
    "emerald",
    "pink",
    "gray",
    "amber",
    "teal",
    "rose",
)

# Upper bound for any single region, as a share of all cells
REGION_SIZE_RATIO: float = 0.3

ORTHOGONAL_STEPS: Tuple[Coord, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
KING_STEPS: Tuple[Coord, ...] = ORTHOGONAL_STEPS + ((-1, -1), (-1, 1), (1, 1), (1, -1))


class SquareState(str, Enum):
    """State of a cell in a marks grid."""

    EMPTY = "empty"
    X = "x"
    QUEEN = "queen"


def region_colors(count: int) -> List[str]:
    """Return the first ``count`` palette labels.

    Raises ``ValueError`` when the palette cannot provide enough distinct
    labels, since two regions sharing a label would merge them.
    """
    if count < 0:
        raise ValueError("colour count cannot be negative")
    if count > len(REGION_PALETTE):
        raise ValueError(
            f"palette has {len(REGION_PALETTE)} colours, {count} requested"
        )
    return list(REGION_PALETTE[:count])


def in_bounds(size: int, row: int, col: int) -> bool:
    return 0 <= row < size and 0 <= col < size


def orthogonal_neighbors(size: int, cell: Coord) -> Iterator[Coord]:
    """Yield in-bounds right/down/left/up neighbours of ``cell``."""
    row, col = cell
    for dr, dc in ORTHOGONAL_STEPS:
        nr, nc = row + dr, col + dc
        if in_bounds(size, nr, nc):
            yield nr, nc


def king_neighbors(size: int, cell: Coord) -> Iterator[Coord]:
    """Yield in-bounds neighbours of ``cell`` in all eight directions."""
    row, col = cell
    for dr, dc in KING_STEPS:
        nr, nc = row + dr, col + dc
        if in_bounds(size, nr, nc):
            yield nr, nc


def are_adjacent(a: Coord, b: Coord) -> bool:
    """Return True if two distinct cells touch, diagonals included."""
    if a == b:
        return False
    return abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1


def all_cells(size: int) -> List[Coord]:
    return [(r, c) for r in range(size) for c in range(size)]


def empty_marks(size: int) -> List[List[SquareState]]:
    return [[SquareState.EMPTY] * size for _ in range(size)]


def marks_from_queens(size: int, queens: Sequence[Coord]) -> List[List[SquareState]]:
    """Build a marks grid with ``QUEEN`` on each queen cell and ``EMPTY`` elsewhere."""
    marks = empty_marks(size)
    for row, col in queens:
        marks[row][col] = SquareState.QUEEN
    return marks


def queens_from_marks(marks: Sequence[Sequence[SquareState]]) -> List[Coord]:
    """Return queen coordinates of a marks grid in row-major order."""
    return [
        (r, c)
        for r, row in enumerate(marks)
        for c, state in enumerate(row)
        if state == SquareState.QUEEN
    ]


def flat_index(size: int, cell: Coord) -> int:
    return cell[0] * size + cell[1]
