"""Tests for randomized queen placement."""

import random
import unittest

from queens_puzzle.board import are_adjacent
from queens_puzzle.errors import PlacementError
from queens_puzzle.placement import can_place_queen, is_valid_queen_set, place_queens

# Legal 8x8 placement with (0, 0) and (2, 2) on a shared diagonal
DIAGONAL_QUEENS = [(0, 0), (1, 4), (2, 2), (3, 6), (4, 1), (5, 3), (6, 5), (7, 7)]


def _place_until_success(size, rng, tries=500):
    for _ in range(tries):
        try:
            return place_queens(size, rng)
        except PlacementError:
            continue
    raise AssertionError(f"no placement for N={size} in {tries} passes")


class CanPlaceQueenTests(unittest.TestCase):
    def test_rejects_shared_row_and_column(self):
        self.assertFalse(can_place_queen(0, 5, [(0, 0)]))
        self.assertFalse(can_place_queen(5, 0, [(0, 0)]))

    def test_rejects_touching_cells(self):
        for cell in [(2, 3), (3, 3), (4, 3), (2, 4), (4, 4), (2, 5), (3, 5), (4, 5)]:
            self.assertFalse(can_place_queen(cell[0], cell[1], [(3, 4)]), cell)

    def test_accepts_diagonal_two_apart(self):
        self.assertTrue(can_place_queen(2, 2, [(0, 0)]))
        self.assertTrue(can_place_queen(5, 1, [(3, 3)]))

    def test_empty_board_accepts_anything(self):
        self.assertTrue(can_place_queen(0, 0, []))


class PlaceQueensTests(unittest.TestCase):
    def test_placements_satisfy_rules_for_all_sizes(self):
        rng = random.Random(1234)
        for size in (8, 9, 10, 11, 12):
            queens = _place_until_success(size, rng)
            self.assertEqual(len(queens), size)
            self.assertEqual(len({r for r, _ in queens}), size)
            self.assertEqual(len({c for _, c in queens}), size)
            for i, a in enumerate(queens):
                for b in queens[i + 1:]:
                    self.assertFalse(are_adjacent(a, b), (a, b))
            self.assertTrue(is_valid_queen_set(size, queens))

    def test_impossible_boards_fail_with_placement_error(self):
        # Every arrangement on 2x2 and 3x3 boards has touching queens
        for size in (2, 3):
            with self.assertRaises(PlacementError) as ctx:
                place_queens(size, random.Random(0))
            self.assertLess(ctx.exception.placed, size)

    def test_seeded_rng_is_reproducible(self):
        first = second = None
        for seed in range(50):
            try:
                first = place_queens(8, random.Random(seed))
                second = place_queens(8, random.Random(seed))
                break
            except PlacementError:
                continue
        self.assertIsNotNone(first)
        self.assertEqual(first, second)


class QueenSetTests(unittest.TestCase):
    def test_diagonal_alignment_is_valid(self):
        self.assertTrue(is_valid_queen_set(8, DIAGONAL_QUEENS))

    def test_invalid_sets(self):
        self.assertFalse(is_valid_queen_set(8, DIAGONAL_QUEENS[:-1]))
        touching = list(DIAGONAL_QUEENS)
        touching[1] = (1, 1)
        self.assertFalse(is_valid_queen_set(8, touching))
        off_board = list(DIAGONAL_QUEENS)
        off_board[7] = (7, 8)
        self.assertFalse(is_valid_queen_set(8, off_board))


if __name__ == "__main__":
    unittest.main()
