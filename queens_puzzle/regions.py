"""Region partitioning around a fixed queen placement.

Given a board size and a legal queen set, this module colours every cell so
that each queen owns one orthogonally contiguous region. The work happens in
phases that share one :class:`GrowthContext`, created per call and discarded
afterwards:

1. ``seed_queens``: every queen cell receives its own colour.
2. ``assign_growth_priorities``: each queen draws a growth priority in
   ``[MIN_PRIORITY, MAX_PRIORITY]``; one queen chosen at random is pinned to
   ``MIN_PRIORITY`` so that it tends to stay a single-cell region.
3. ``grow_regions``: multi-source growth driven by a binary heap. Entries are
   ordered by priority plus a random jitter below ``TIE_WINDOW``, so
   priorities up to two apart can come out in either order while larger gaps
   keep their order. Each newly coloured cell pushes its uncoloured
   neighbours with a priority that decays by one with probability
   ``DECAY_PROBABILITY``. A region stops claiming cells once it reaches the
   size ceiling.
4. ``fill_gaps``: any cell the growth missed adopts a neighbouring colour
   (one below the ceiling when possible), or the colour of the smallest
   region when it has no coloured neighbour.
5. ``trim_oversized``: regions above the ceiling hand boundary cells to
   neighbouring regions that still have room.
6. ``dedupe_singletons``: when several regions ended with a single cell,
   all but one borrow a cell from their largest neighbouring region. The
   pinned queen's region is the one kept when it is a singleton.
7. ``repair_contiguity``: disconnected fragments are bridged back to their
   queen along a shortest path, or handed to a neighbouring region.

Phases 5 and 6 only move cells whose removal keeps the donor region in one
piece, so phase 7 is a safety net. The partitioner does not judge the final
result; the invariants are checked by :mod:`queens_puzzle.validation`.
"""

from __future__ import annotations

import heapq
import logging
import random
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .board import Coord, orthogonal_neighbors, region_colors
from .errors import PartitionError
from .validation import max_region_size

logger = logging.getLogger(__name__)

MIN_PRIORITY: int = 1
MAX_PRIORITY: int = 10
TIE_WINDOW: float = 3.0
DECAY_PROBABILITY: float = 0.3

Cell = Optional[str]


@dataclass
class GrowthContext:
    """Mutable state of one partitioning run."""

    size: int
    queens: List[Coord]
    colors: List[str]
    rng: random.Random
    board: List[List[Cell]] = field(default_factory=list)
    priorities: Dict[str, int] = field(default_factory=dict)
    singleton_candidate: Optional[str] = None
    ceiling: int = 0

    def __post_init__(self) -> None:
        if not self.board:
            self.board = [[None] * self.size for _ in range(self.size)]
        if not self.ceiling:
            self.ceiling = max_region_size(self.size)

    def color_of(self, cell: Coord) -> Cell:
        return self.board[cell[0]][cell[1]]

    def paint(self, cell: Coord, color: Cell) -> None:
        self.board[cell[0]][cell[1]] = color

    def owner(self, color: str) -> Coord:
        return self.queens[self.colors.index(color)]

    def sizes(self) -> Counter:
        return Counter(c for row in self.board for c in row if c is not None)

    def cells_of(self, color: str) -> List[Coord]:
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.board[r][c] == color
        ]

    def unassigned(self) -> List[Coord]:
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.board[r][c] is None
        ]


def seed_queens(ctx: GrowthContext) -> None:
    for queen, color in zip(ctx.queens, ctx.colors):
        ctx.paint(queen, color)


def assign_growth_priorities(ctx: GrowthContext) -> None:
    for color in ctx.colors:
        ctx.priorities[color] = ctx.rng.randint(MIN_PRIORITY, MAX_PRIORITY)
    ctx.singleton_candidate = ctx.rng.choice(ctx.colors)
    ctx.priorities[ctx.singleton_candidate] = MIN_PRIORITY


def grow_regions(ctx: GrowthContext) -> None:
    """Flood the board from every queen at once, highest priority first.

    Cells whose only claimants are regions at the ceiling stay unassigned.
    """
    frontier: List[Tuple[float, int, Coord, str, int]] = []
    counter = 0
    sizes = ctx.sizes()

    def push(cell: Coord, color: str, priority: int) -> None:
        nonlocal counter
        jitter = ctx.rng.random() * TIE_WINDOW
        # heapq is a min-heap: negate so the highest priority pops first
        heapq.heappush(frontier, (-(priority + jitter), counter, cell, color, priority))
        counter += 1

    for queen, color in zip(ctx.queens, ctx.colors):
        for neighbor in orthogonal_neighbors(ctx.size, queen):
            if ctx.color_of(neighbor) is None:
                push(neighbor, color, ctx.priorities[color])

    while frontier:
        _, _, cell, color, priority = heapq.heappop(frontier)
        if ctx.color_of(cell) is not None or sizes[color] >= ctx.ceiling:
            continue
        ctx.paint(cell, color)
        sizes[color] += 1

        for neighbor in orthogonal_neighbors(ctx.size, cell):
            if ctx.color_of(neighbor) is None:
                decay = 1 if ctx.rng.random() < DECAY_PROBABILITY else 0
                push(neighbor, color, max(MIN_PRIORITY, priority - decay))


def _neighbor_color(ctx: GrowthContext, cell: Coord, sizes: Counter) -> Cell:
    colors = [ctx.color_of(n) for n in orthogonal_neighbors(ctx.size, cell)]
    colors = [c for c in colors if c is not None]
    roomy = [c for c in colors if sizes[c] < ctx.ceiling]
    return (roomy or colors or [None])[0]


def fill_gaps(ctx: GrowthContext) -> int:
    """Colour every remaining cell; return how many cells were filled."""
    filled = 0
    while True:
        pending = ctx.unassigned()
        if not pending:
            return filled

        sizes = ctx.sizes()
        assigned_any = False
        for cell in pending:
            color = _neighbor_color(ctx, cell, sizes)
            if color is not None:
                ctx.paint(cell, color)
                sizes[color] += 1
                filled += 1
                assigned_any = True

        if not assigned_any:
            # Islands with no coloured neighbour: feed the smallest region
            for cell in pending:
                smallest = min(ctx.colors, key=lambda c: sizes.get(c, 0))
                ctx.paint(cell, smallest)
                sizes[smallest] += 1
                filled += 1


def _reachable_from(ctx: GrowthContext, start: Coord, color: str) -> Set[Coord]:
    visited = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        for neighbor in orthogonal_neighbors(ctx.size, cell):
            if neighbor not in visited and ctx.color_of(neighbor) == color:
                visited.add(neighbor)
                queue.append(neighbor)
    return visited


def _splits_region(ctx: GrowthContext, cell: Coord, color: str) -> bool:
    """Return True if taking ``cell`` away would cut ``color`` in pieces."""
    ctx.paint(cell, None)
    try:
        remaining = ctx.cells_of(color)
        return len(_reachable_from(ctx, ctx.owner(color), color)) != len(remaining)
    finally:
        ctx.paint(cell, color)


def _trim_move(ctx: GrowthContext, color: str, sizes: Counter) -> Optional[Tuple[Coord, str]]:
    queen = ctx.owner(color)
    for cell in ctx.cells_of(color):
        if cell == queen:
            continue
        takers = [
            other
            for other in (ctx.color_of(n) for n in orthogonal_neighbors(ctx.size, cell))
            if other is not None and other != color and sizes[other] < ctx.ceiling
        ]
        if takers and not _splits_region(ctx, cell, color):
            return cell, min(takers, key=lambda c: sizes[c])
    return None


def trim_oversized(ctx: GrowthContext) -> int:
    """Shrink regions above the ceiling; return how many cells moved."""
    sizes = ctx.sizes()
    moved = 0
    for color in ctx.colors:
        while sizes[color] > ctx.ceiling:
            move = _trim_move(ctx, color, sizes)
            if move is None:
                logger.debug("region %s stuck at %d cells", color, sizes[color])
                break
            cell, taker = move
            ctx.paint(cell, taker)
            sizes[color] -= 1
            sizes[taker] += 1
            moved += 1
    return moved


def dedupe_singletons(ctx: GrowthContext) -> int:
    """Grow all but one single-cell region; return how many grew."""
    sizes = ctx.sizes()
    singletons = [color for color in ctx.colors if sizes.get(color, 0) == 1]
    if ctx.singleton_candidate in singletons:
        singletons.remove(ctx.singleton_candidate)
        singletons.insert(0, ctx.singleton_candidate)
    grown = 0

    for color in singletons[1:]:
        queen = ctx.owner(color)
        donors: Dict[str, Coord] = {}
        for neighbor in orthogonal_neighbors(ctx.size, queen):
            other = ctx.color_of(neighbor)
            if other is None or other == color or other in donors or sizes[other] <= 2:
                continue
            if not _splits_region(ctx, neighbor, other):
                donors[other] = neighbor
        if not donors:
            logger.debug("singleton %s has no donor region", color)
            continue

        donor = max(donors, key=lambda c: sizes[c])
        ctx.paint(donors[donor], color)
        sizes[donor] -= 1
        sizes[color] += 1
        grown += 1

    return grown


def shortest_bridge(
    size: int,
    start: Coord,
    targets: Set[Coord],
    blocked: Set[Coord],
) -> Optional[List[Coord]]:
    """Breadth-first shortest path from ``start`` to any cell in ``targets``.

    The path includes both endpoints and never steps on ``blocked`` cells.
    Returns None when no target is reachable.
    """
    previous: Dict[Coord, Optional[Coord]] = {start: None}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell in targets and cell != start:
            path = [cell]
            while previous[path[-1]] is not None:
                path.append(previous[path[-1]])  # type: ignore[arg-type]
            path.reverse()
            return path
        for neighbor in orthogonal_neighbors(size, cell):
            if neighbor in previous or neighbor in blocked:
                continue
            previous[neighbor] = cell
            queue.append(neighbor)
    return None


def repair_contiguity(ctx: GrowthContext) -> int:
    """Reconnect or reassign cells cut off from their queen; return repairs made."""
    repairs = 0
    queen_cells = set(ctx.queens)

    for color, queen in zip(ctx.colors, ctx.queens):
        if ctx.color_of(queen) != color:
            continue
        visited = _reachable_from(ctx, queen, color)
        disconnected = [cell for cell in ctx.cells_of(color) if cell not in visited]

        for cell in disconnected:
            if ctx.color_of(cell) != color or cell in visited:
                continue

            if any(n in visited for n in orthogonal_neighbors(ctx.size, cell)):
                # Touching the main body already; only reachable through an earlier bridge
                visited.add(cell)
                continue

            path = shortest_bridge(ctx.size, cell, visited, queen_cells - {queen})
            if path is not None:
                for step in path:
                    ctx.paint(step, color)
                    visited.add(step)
                repairs += 1
                continue

            for neighbor in orthogonal_neighbors(ctx.size, cell):
                other = ctx.color_of(neighbor)
                if other is not None and other != color:
                    ctx.paint(cell, other)
                    repairs += 1
                    break

    return repairs


def partition_regions(
    size: int,
    queens: Sequence[Coord],
    colors: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> List[List[str]]:
    """Partition an N×N board into one region per queen.

    Parameters
    ----------
    size : int
        Board dimension N.
    queens : Sequence[Coord]
        A legal queen placement of length N.
    colors : Sequence[str] | None
        Region labels, one per queen; defaults to the first N palette colours.
    rng : random.Random | None
        Random source; the module-level ``random`` is used when omitted.

    Returns
    -------
    list[list[str]]
        The regions grid. Its invariants still need validation.

    Raises
    ------
    PartitionError
        If labels do not match the queens or a cell is left uncoloured.
    """
    colors = list(colors) if colors is not None else region_colors(len(queens))
    if len(colors) != len(queens) or len(set(colors)) != len(colors):
        raise PartitionError("need exactly one distinct colour per queen")

    ctx = GrowthContext(size=size, queens=list(queens), colors=colors, rng=rng or random)  # type: ignore[arg-type]
    seed_queens(ctx)
    assign_growth_priorities(ctx)
    grow_regions(ctx)
    filled = fill_gaps(ctx)
    trimmed = trim_oversized(ctx)
    grown = dedupe_singletons(ctx)
    repairs = repair_contiguity(ctx)
    logger.debug(
        "partitioned %dx%d board: filled=%d trimmed=%d singletons_grown=%d repairs=%d",
        size, size, filled, trimmed, grown, repairs,
    )

    if ctx.unassigned():
        raise PartitionError("unassigned cells remain after partitioning")
    return [[_require_color(c) for c in row] for row in ctx.board]


def _require_color(value: Cell) -> str:
    if value is None:
        raise PartitionError("unassigned cell in regions grid")
    return value
