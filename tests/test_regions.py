"""Tests for the region partitioner and its individual phases."""

import random
import unittest

from queens_puzzle.board import region_colors
from queens_puzzle.errors import PartitionError, PlacementError
from queens_puzzle.placement import place_queens
from queens_puzzle.regions import (
    MAX_PRIORITY,
    MIN_PRIORITY,
    GrowthContext,
    assign_growth_priorities,
    dedupe_singletons,
    fill_gaps,
    grow_regions,
    partition_regions,
    repair_contiguity,
    seed_queens,
    shortest_bridge,
    trim_oversized,
)
from queens_puzzle.validation import is_region_contiguous, max_region_size, region_sizes, validate_regions

QUEENS_8 = [(0, 0), (1, 4), (2, 2), (3, 6), (4, 1), (5, 3), (6, 5), (7, 7)]


def _context(board, queens, colors, seed=0):
    return GrowthContext(
        size=len(board),
        queens=queens,
        colors=colors,
        rng=random.Random(seed),
        board=[list(row) for row in board],
    )


class PhaseTests(unittest.TestCase):
    def setUp(self):
        self.colors = region_colors(8)
        self.ctx = GrowthContext(size=8, queens=list(QUEENS_8), colors=self.colors, rng=random.Random(5))

    def test_seed_colors_each_queen(self):
        seed_queens(self.ctx)
        for queen, color in zip(QUEENS_8, self.colors):
            self.assertEqual(self.ctx.color_of(queen), color)
        self.assertEqual(len(self.ctx.unassigned()), 64 - 8)

    def test_growth_priorities_pin_one_queen_low(self):
        assign_growth_priorities(self.ctx)
        self.assertEqual(set(self.ctx.priorities), set(self.colors))
        for priority in self.ctx.priorities.values():
            self.assertGreaterEqual(priority, MIN_PRIORITY)
            self.assertLessEqual(priority, MAX_PRIORITY)
        self.assertIn(self.ctx.singleton_candidate, self.colors)
        self.assertEqual(self.ctx.priorities[self.ctx.singleton_candidate], MIN_PRIORITY)

    def test_growth_stays_under_ceiling_and_contiguous(self):
        for seed in range(20):
            ctx = GrowthContext(size=8, queens=list(QUEENS_8), colors=self.colors, rng=random.Random(seed))
            seed_queens(ctx)
            assign_growth_priorities(ctx)
            grow_regions(ctx)
            self.assertLessEqual(max(ctx.sizes().values()), max_region_size(8))
            fill_gaps(ctx)
            self.assertEqual(ctx.unassigned(), [])
            for color in self.colors:
                self.assertTrue(is_region_contiguous(ctx.board, color), (seed, color))

    def test_fill_gaps_uses_neighbors_then_smallest_region(self):
        ctx = _context([[None] * 3 for _ in range(3)], [(0, 0), (2, 2)], ["a", "b"])
        filled = fill_gaps(ctx)
        self.assertEqual(filled, 9)
        self.assertEqual(ctx.unassigned(), [])
        self.assertEqual(set(ctx.sizes()), {"a", "b"})

        ctx = _context([["a", None, None], [None, None, None], [None, None, "b"]], [(0, 0), (2, 2)], ["a", "b"])
        fill_gaps(ctx)
        self.assertEqual(ctx.unassigned(), [])
        self.assertEqual(ctx.board[0][1], "a")

    def test_dedupe_keeps_first_singleton_and_grows_the_rest(self):
        board = [
            ["a", "c", "c", "c"],
            ["c", "c", "c", "c"],
            ["c", "c", "c", "c"],
            ["c", "c", "c", "b"],
        ]
        ctx = _context(board, [(0, 0), (3, 3), (0, 3)], ["a", "b", "c"])
        self.assertEqual(dedupe_singletons(ctx), 1)
        self.assertEqual(ctx.sizes()["a"], 1)
        self.assertEqual(ctx.sizes()["b"], 2)
        self.assertEqual(ctx.board[3][2], "b")

    def test_dedupe_keeps_pinned_singleton(self):
        board = [
            ["a", "c", "c", "c"],
            ["c", "c", "c", "c"],
            ["c", "c", "c", "c"],
            ["c", "c", "c", "b"],
        ]
        ctx = _context(board, [(0, 0), (3, 3), (0, 3)], ["a", "b", "c"])
        ctx.singleton_candidate = "b"
        self.assertEqual(dedupe_singletons(ctx), 1)
        self.assertEqual(ctx.sizes()["b"], 1)
        self.assertEqual(ctx.board[0][1], "a")

    def test_dedupe_never_splits_the_donor(self):
        # Taking (0, 2) from the larger region "c" would strand (0, 1)
        board = [
            ["s", "c", "c", "b"],
            ["d", "d", "c", "e"],
            ["d", "d", "c", "e"],
            ["d", "d", "c", "e"],
        ]
        ctx = _context(board, [(0, 0), (0, 3), (2, 2), (3, 0), (3, 3)], ["s", "b", "c", "d", "e"])
        self.assertEqual(dedupe_singletons(ctx), 1)
        self.assertEqual(ctx.board[1][3], "b")
        self.assertEqual(ctx.board[0][2], "c")
        for color in "bcde":
            self.assertTrue(is_region_contiguous(ctx.board, color), color)

    def test_trim_hands_cells_to_neighbors_with_room(self):
        board = [
            ["a", "a", "a", "a"],
            ["a", "a", "a", "d"],
            ["c", "c", "b", "d"],
            ["c", "b", "b", "d"],
        ]
        ctx = _context(board, [(0, 0), (3, 2), (3, 0), (2, 3)], ["a", "b", "c", "d"])
        self.assertEqual(ctx.ceiling, 5)
        self.assertEqual(trim_oversized(ctx), 2)
        sizes = ctx.sizes()
        self.assertEqual(sizes["a"], 5)
        self.assertLessEqual(max(sizes.values()), 5)
        self.assertEqual(ctx.board[0][3], "d")
        for color in "abcd":
            self.assertTrue(is_region_contiguous(ctx.board, color), color)

    def test_trim_leaves_regions_under_ceiling_alone(self):
        board = [["a", "b"], ["a", "b"]]
        ctx = _context(board, [(0, 0), (1, 1)], ["a", "b"])
        self.assertEqual(trim_oversized(ctx), 0)
        self.assertEqual(ctx.board, board)

    def test_dedupe_without_donor_leaves_board_alone(self):
        board = [
            ["a", "c"],
            ["c", "b"],
        ]
        ctx = _context(board, [(0, 0), (1, 1), (0, 1)], ["a", "b", "c"])
        self.assertEqual(dedupe_singletons(ctx), 0)
        self.assertEqual(ctx.board, board)

    def test_repair_bridges_disconnected_cell(self):
        board = [
            ["a", "b", "b", "b"],
            ["b", "b", "b", "b"],
            ["b", "b", "a", "b"],
            ["b", "b", "b", "b"],
        ]
        ctx = _context(board, [(0, 0), (3, 3)], ["a", "b"])
        self.assertEqual(repair_contiguity(ctx), 1)
        self.assertEqual(ctx.board[2][2], "a")
        self.assertTrue(is_region_contiguous(ctx.board, "a"))
        self.assertTrue(is_region_contiguous(ctx.board, "b"))
        self.assertEqual(ctx.board[3][3], "b")

    def test_repair_reassigns_cell_when_queens_block_every_path(self):
        board = [
            ["a", "b", "b"],
            ["c", "c", "b"],
            ["c", "c", "a"],
        ]
        ctx = _context(board, [(0, 0), (0, 1), (1, 0)], ["a", "b", "c"])
        self.assertEqual(repair_contiguity(ctx), 1)
        self.assertEqual(ctx.board[2][2], "c")
        self.assertEqual(ctx.sizes()["a"], 1)


class ShortestBridgeTests(unittest.TestCase):
    def test_path_includes_both_endpoints(self):
        path = shortest_bridge(4, (3, 0), {(0, 0)}, set())
        self.assertEqual(path[0], (3, 0))
        self.assertEqual(path[-1], (0, 0))
        self.assertEqual(len(path), 4)

    def test_blocked_cells_are_avoided(self):
        path = shortest_bridge(3, (2, 0), {(0, 0)}, {(1, 0)})
        self.assertNotIn((1, 0), path)
        self.assertEqual(len(path), 5)

    def test_unreachable_target(self):
        self.assertIsNone(shortest_bridge(3, (2, 2), {(0, 0)}, {(0, 1), (1, 0), (1, 1)}))


class PartitionRegionsTests(unittest.TestCase):
    def test_every_cell_colored_and_queens_keep_their_color(self):
        for seed in range(10):
            regions = partition_regions(8, QUEENS_8, rng=random.Random(seed))
            self.assertEqual(len(regions), 8)
            colors = region_colors(8)
            for row in regions:
                self.assertEqual(len(row), 8)
                for color in row:
                    self.assertIn(color, colors)
            for queen, color in zip(QUEENS_8, colors):
                self.assertEqual(regions[queen[0]][queen[1]], color)

    def test_seeded_partition_is_reproducible(self):
        first = partition_regions(8, QUEENS_8, rng=random.Random(99))
        second = partition_regions(8, QUEENS_8, rng=random.Random(99))
        self.assertEqual(first, second)

    def test_custom_labels(self):
        labels = [f"r{i}" for i in range(8)]
        regions = partition_regions(8, QUEENS_8, colors=labels, rng=random.Random(3))
        self.assertEqual({c for row in regions for c in row} - set(labels), set())

    def test_mismatched_labels_raise(self):
        with self.assertRaises(PartitionError):
            partition_regions(8, QUEENS_8, colors=["blue"] * 8)
        with self.assertRaises(PartitionError):
            partition_regions(8, QUEENS_8, colors=region_colors(7))


def _legal_queens(size, rng):
    while True:
        try:
            return place_queens(size, rng)
        except PlacementError:
            continue


class PartitionQualityTests(unittest.TestCase):
    """Aggregate behaviour over many random queen sets."""

    def test_most_partitions_are_valid(self):
        rng = random.Random(2718)
        ceiling = max_region_size(8)
        runs = 200
        valid = 0
        largest = []
        for _ in range(runs):
            queens = _legal_queens(8, rng)
            regions = partition_regions(8, queens, rng=rng)
            largest.append(max(region_sizes(regions).values()))
            if not validate_regions(8, regions, queens):
                valid += 1

        self.assertGreaterEqual(valid / runs, 0.3)
        self.assertLessEqual(sum(largest) / runs, ceiling)
        self.assertGreaterEqual(sum(1 for n in largest if n <= ceiling) / runs, 0.95)

    def test_larger_boards_respect_the_ceiling(self):
        rng = random.Random(31)
        for size in (10, 12):
            for _ in range(20):
                queens = _legal_queens(size, rng)
                regions = partition_regions(size, queens, rng=rng)
                sizes = region_sizes(regions)
                self.assertEqual(len(sizes), size)
                self.assertLessEqual(max(sizes.values()), max_region_size(size))


if __name__ == "__main__":
    unittest.main()
