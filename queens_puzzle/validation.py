"""Structural checks for queen sets and region grids.

Every check returns a list of human-readable issues; an empty list means the
input satisfies the corresponding invariants. The functions work on any
grid, generated or hand-built, and never mutate their inputs.

Invariants checked
------------------
Queens: exactly N, one per row, one per column, none touching (8-directional).
Regions: N×N shape, no unassigned cells, exactly N colours, each colour
orthogonally contiguous, exactly one queen per colour, no colour above
``max_region_size(N)`` cells, and at most one single-cell region.
"""

from __future__ import annotations

import math
from collections import Counter, deque
from itertools import combinations
from typing import Hashable, List, Optional, Sequence

from .board import (
    REGION_SIZE_RATIO,
    Coord,
    SquareState,
    are_adjacent,
    orthogonal_neighbors,
    queens_from_marks,
)

Grid = Sequence[Sequence[Optional[Hashable]]]


def max_region_size(size: int) -> int:
    """Largest cell count a single region may have on a ``size`` board."""
    return math.ceil(size * size * REGION_SIZE_RATIO)


def region_sizes(regions: Grid) -> Counter:
    return Counter(color for row in regions for color in row)


def is_region_contiguous(regions: Grid, color: Hashable) -> bool:
    """Return True if all cells of ``color`` form one orthogonal component.

    A colour absent from the grid counts as contiguous.
    """
    size = len(regions)
    cells = [(r, c) for r in range(size) for c in range(len(regions[r])) if regions[r][c] == color]
    if not cells:
        return True

    seen = {cells[0]}
    queue = deque([cells[0]])
    while queue:
        cell = queue.popleft()
        for nr, nc in orthogonal_neighbors(size, cell):
            if (nr, nc) not in seen and regions[nr][nc] == color:
                seen.add((nr, nc))
                queue.append((nr, nc))
    return len(seen) == len(cells)


def validate_queens(size: int, queens: Sequence[Coord]) -> List[str]:
    issues: List[str] = []
    if len(queens) != size:
        issues.append(f"expected {size} queens, found {len(queens)}")

    for row, col in queens:
        if not (0 <= row < size and 0 <= col < size):
            issues.append(f"queen {(row, col)} is off the board")

    rows = Counter(r for r, _ in queens)
    cols = Counter(c for _, c in queens)
    for row, count in sorted(rows.items()):
        if count > 1:
            issues.append(f"row {row} holds {count} queens")
    for col, count in sorted(cols.items()):
        if count > 1:
            issues.append(f"column {col} holds {count} queens")

    for a, b in combinations(queens, 2):
        if are_adjacent(a, b):
            issues.append(f"queens {a} and {b} touch")
    return issues


def validate_regions(size: int, regions: Grid, queens: Sequence[Coord]) -> List[str]:
    """Check a regions grid against the queen set it was built around."""
    if len(regions) != size or any(len(row) != size for row in regions):
        return [f"regions grid is not {size}x{size}"]

    issues: List[str] = []
    sizes = region_sizes(regions)
    if None in sizes:
        issues.append(f"{sizes.pop(None)} cells are unassigned")

    if len(sizes) != size:
        issues.append(f"expected {size} regions, found {len(sizes)}")

    ceiling = max_region_size(size)
    for color, count in sizes.items():
        if count > ceiling:
            issues.append(f"region {color} has {count} cells (max {ceiling})")
        if not is_region_contiguous(regions, color):
            issues.append(f"region {color} is not contiguous")

    queen_counts = Counter(regions[r][c] for r, c in queens if 0 <= r < size and 0 <= c < size)
    for color in sizes:
        if queen_counts.get(color, 0) != 1:
            issues.append(f"region {color} holds {queen_counts.get(color, 0)} queens")

    singletons = [color for color, count in sizes.items() if count == 1]
    if len(singletons) > 1:
        issues.append(f"{len(singletons)} single-cell regions (at most 1 allowed)")
    return issues


def validate_puzzle(regions: Grid, marks: Sequence[Sequence[SquareState]]) -> List[str]:
    """Validate a (regions, marks) pair as returned by ``generate``."""
    size = len(regions)
    if len(marks) != size or any(len(row) != size for row in marks):
        return [f"marks grid is not {size}x{size}"]
    queens = queens_from_marks(marks)
    return validate_queens(size, queens) + validate_regions(size, regions, queens)


def is_valid_puzzle(regions: Grid, marks: Sequence[Sequence[SquareState]]) -> bool:
    return not validate_puzzle(regions, marks)
