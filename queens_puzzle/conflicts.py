"""Rule checks for in-progress player boards.

These helpers apply the puzzle rules to an arbitrary marks grid, typically
one a player is filling in, against a generated regions grid. The regions
grid is treated as ground truth and is never modified; functions that
produce a new marks grid return a copy.

Conflict kinds
--------------
- ``row``: two or more queens share a row.
- ``column``: two or more queens share a column.
- ``region``: two or more queens share a region.
- ``adjacent``: two queens touch, diagonals included.

Positions are reported as flat indices ``row * N + col``.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Hashable, List, Sequence, Set, Tuple

from .board import Coord, SquareState, are_adjacent, flat_index, queens_from_marks

CONFLICT_KINDS: Tuple[str, ...] = ("row", "column", "region", "adjacent")

CONFLICT_MESSAGES: Dict[str, str] = {
    "row": "Queens in same row",
    "column": "Queens in same column",
    "region": "Multiple queens in same region",
    "adjacent": "Queens are touching",
}

_NEXT_STATE = {
    SquareState.EMPTY: SquareState.X,
    SquareState.X: SquareState.QUEEN,
    SquareState.QUEEN: SquareState.EMPTY,
}

Regions = Sequence[Sequence[Hashable]]
Marks = Sequence[Sequence[SquareState]]


@dataclass(frozen=True)
class Conflict:
    kind: str
    positions: Tuple[int, ...]

    @property
    def message(self) -> str:
        return CONFLICT_MESSAGES[self.kind]


def cycle_square(state: SquareState) -> SquareState:
    """Return the state a click moves a cell to: empty, X, queen, empty."""
    return _NEXT_STATE[SquareState(state)]


def _check_shapes(regions: Regions, marks: Marks) -> int:
    size = len(regions)
    if len(marks) != size or any(len(row) != size for row in marks):
        raise ValueError(f"marks grid must be {size}x{size}")
    return size


def find_conflicts(regions: Regions, marks: Marks) -> List[Conflict]:
    """List every rule violation among the queens placed in ``marks``.

    Conflicts are grouped per row, column and region; touching queens are
    reported pairwise.
    """
    size = _check_shapes(regions, marks)
    queens = queens_from_marks(marks)
    conflicts: List[Conflict] = []

    by_row: Dict[int, List[Coord]] = defaultdict(list)
    by_col: Dict[int, List[Coord]] = defaultdict(list)
    by_region: Dict[Hashable, List[Coord]] = defaultdict(list)
    for queen in queens:
        by_row[queen[0]].append(queen)
        by_col[queen[1]].append(queen)
        by_region[regions[queen[0]][queen[1]]].append(queen)

    for kind, groups in (("row", by_row), ("column", by_col), ("region", by_region)):
        for cells in groups.values():
            if len(cells) > 1:
                conflicts.append(Conflict(kind, tuple(flat_index(size, q) for q in cells)))

    for a, b in combinations(queens, 2):
        if are_adjacent(a, b):
            conflicts.append(Conflict("adjacent", (flat_index(size, a), flat_index(size, b))))
    return conflicts


def excluded_cells(regions: Regions, marks: Marks) -> Set[Coord]:
    """Cells that cannot hold a queen given the queens already placed.

    Covers each queen's row, column and region, plus its four diagonal
    neighbours (orthogonal neighbours already fall in its row or column).
    """
    size = _check_shapes(regions, marks)
    excluded: Set[Coord] = set()
    for qr, qc in queens_from_marks(marks):
        region = regions[qr][qc]
        for r in range(size):
            for c in range(size):
                if (r, c) == (qr, qc):
                    continue
                if r == qr or c == qc or regions[r][c] == region:
                    excluded.add((r, c))
                elif abs(r - qr) == 1 and abs(c - qc) == 1:
                    excluded.add((r, c))
    return excluded


def auto_mark(regions: Regions, marks: Marks) -> List[List[SquareState]]:
    """Return a copy of ``marks`` with X on every excluded empty cell.

    Existing X marks not implied by the current queens are cleared, so the
    result only reflects the queens on the board.
    """
    excluded = excluded_cells(regions, marks)
    result: List[List[SquareState]] = []
    for r, row in enumerate(marks):
        new_row = []
        for c, state in enumerate(row):
            if state == SquareState.QUEEN:
                new_row.append(SquareState.QUEEN)
            elif (r, c) in excluded:
                new_row.append(SquareState.X)
            else:
                new_row.append(SquareState.EMPTY)
        result.append(new_row)
    return result


def is_solved(regions: Regions, marks: Marks) -> bool:
    """Return True when ``marks`` holds N queens and no conflicts."""
    size = _check_shapes(regions, marks)
    return len(queens_from_marks(marks)) == size and not find_conflicts(regions, marks)
