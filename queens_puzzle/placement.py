"""Randomized queen placement for Queens puzzles.

Places N queens on an N×N board so that no two share a row or a column and
no two touch, diagonals included. Unlike the classic N-Queens problem, two
queens on the same diagonal are legal as long as they are not neighbours.

Contract (public API)
---------------------
- Input: board size ``size >= 1`` and an optional ``random.Random`` source.
- Output: a list of ``size`` coordinates ``(row, col)`` in placement order.
- Failure: raises :class:`~queens_puzzle.errors.PlacementError` when a pass
  dead-ends. The caller is expected to retry with a fresh pass.

Algorithm
---------
Greedy with per-queen reshuffling, no backtracking: for each queen the full
candidate list is shuffled and scanned for the first legal cell. Dead ends
are cheap to detect and the outer generator simply starts over, which keeps
the placements varied.

Determinism
-----------
Stochastic. Pass a seeded ``random.Random`` for reproducible placements.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .board import Coord, all_cells, are_adjacent
from .errors import PlacementError


def can_place_queen(row: int, col: int, queens: Sequence[Coord]) -> bool:
    """Return True if ``(row, col)`` is legal with respect to ``queens``.

    Rejects a shared row, a shared column, or any touching queen. Diagonal
    alignment alone is accepted.
    """
    for q_row, q_col in queens:
        if q_row == row or q_col == col:
            return False
        if are_adjacent((q_row, q_col), (row, col)):
            return False
    return True


def place_queens(size: int, rng: Optional[random.Random] = None) -> List[Coord]:
    """Place ``size`` mutually non-attacking queens in one randomized pass.

    Parameters
    ----------
    size : int
        Board dimension N.
    rng : random.Random | None
        Random source; the module-level ``random`` is used when omitted.

    Returns
    -------
    list[Coord]
        Queen coordinates in placement order.

    Raises
    ------
    PlacementError
        If some queen has no legal cell left.
    """
    rng = rng or random
    candidates = all_cells(size)
    queens: List[Coord] = []

    for index in range(size):
        rng.shuffle(candidates)
        for row, col in candidates:
            if can_place_queen(row, col, queens):
                queens.append((row, col))
                break
        else:
            raise PlacementError(index, size)

    return queens


def is_valid_queen_set(size: int, queens: Sequence[Coord]) -> bool:
    """Return True if ``queens`` is a complete legal placement for ``size``."""
    if len(queens) != size:
        return False
    for index, (row, col) in enumerate(queens):
        if not (0 <= row < size and 0 <= col < size):
            return False
        if not can_place_queen(row, col, queens[:index]):
            return False
    return True
