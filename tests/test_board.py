# tests/test_board.py

import io
import unittest
from contextlib import redirect_stdout

from backend.board import MinesweeperBoard
from backend.errors import InvalidConfig, OutOfBounds
from backend.utils import get_neighbors
from tests.layouts import WALL_MINES


class TestMinesweeperBoard(unittest.TestCase):

    def test_board_dimensions(self):
        board = MinesweeperBoard(rows=4, cols=5, num_mines=3)
        self.assertEqual(board.is_mine_grid.shape, (4, 5))
        self.assertEqual(board.adjacent.shape, (4, 5))

    def test_mine_count(self):
        for rows, cols, mines in [(5, 5, 6), (9, 9, 25), (15, 15, 50), (1, 2, 1), (30, 30, 899)]:
            for seed in range(5):
                board = MinesweeperBoard(rows, cols, mines, seed=seed)
                self.assertEqual(int(board.is_mine_grid.sum()), mines)
                self.assertEqual(len(board.mine_positions()), mines)

    def test_adjacent_counts_match_neighbors(self):
        for seed in range(10):
            board = MinesweeperBoard(9, 7, 20, seed=seed)
            for r in range(board.rows):
                for c in range(board.cols):
                    if board.is_mine(r, c):
                        continue
                    expected = sum(1 for nr, nc in get_neighbors(r, c, 9, 7) if board.is_mine(nr, nc))
                    self.assertEqual(board.adjacent_count(r, c), expected)

    def test_seed_is_reproducible(self):
        first = MinesweeperBoard(9, 9, 25, seed=42)
        second = MinesweeperBoard(9, 9, 25, seed=42)
        self.assertEqual(first.mine_positions(), second.mine_positions())

    def test_explicit_mine_positions(self):
        board = MinesweeperBoard(5, 5, 6, mine_positions=WALL_MINES)
        self.assertEqual(sorted(board.mine_positions()), sorted(WALL_MINES))
        self.assertEqual(board.adjacent_count(0, 0), 0)
        self.assertEqual(board.adjacent_count(0, 1), 2)
        self.assertEqual(board.adjacent_count(2, 1), 3)
        self.assertEqual(board.adjacent_count(3, 4), 1)
        self.assertEqual(board.adjacent_count(3, 3), 4)

    def test_corner_and_edge_clipping(self):
        board = MinesweeperBoard(3, 3, 8, mine_positions=[
            (r, c) for r in range(3) for c in range(3) if (r, c) != (0, 0)
        ])
        self.assertEqual(board.adjacent_count(0, 0), 3)

        board = MinesweeperBoard(3, 3, 8, mine_positions=[
            (r, c) for r in range(3) for c in range(3) if (r, c) != (1, 1)
        ])
        self.assertEqual(board.adjacent_count(1, 1), 8)

    def test_adjacent_count_on_mine_is_zero(self):
        board = MinesweeperBoard(5, 5, 6, mine_positions=WALL_MINES)
        self.assertEqual(board.adjacent_count(0, 2), 0)

    def test_invalid_config(self):
        for rows, cols, mines in [(0, 5, 1), (5, 0, 1), (5, 5, 0), (5, 5, 25), (5, 5, 30), (2, 2, -1)]:
            with self.assertRaises(InvalidConfig):
                MinesweeperBoard(rows, cols, mines)

    def test_invalid_config_is_a_value_error(self):
        with self.assertRaises(ValueError):
            MinesweeperBoard(1, 1, 1)

    def test_invalid_mine_positions(self):
        with self.assertRaises(InvalidConfig):
            MinesweeperBoard(5, 5, 2, mine_positions=[(0, 0)])
        with self.assertRaises(InvalidConfig):
            MinesweeperBoard(5, 5, 2, mine_positions=[(0, 0), (0, 0)])
        with self.assertRaises(InvalidConfig):
            MinesweeperBoard(5, 5, 2, mine_positions=[(0, 0), (5, 0)])
        with self.assertRaises(InvalidConfig):
            MinesweeperBoard(5, 5, 2, mine_positions=[(0, 0), (1.5, 0)])

    def test_print_debug_board(self):
        board = MinesweeperBoard(5, 5, 6, mine_positions=WALL_MINES)
        out = io.StringIO()
        with redirect_stdout(out):
            board.print_debug_board()
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 5)
        self.assertEqual(lines[0].split(), ["0", "2", "*", "2", "0"])
        self.assertEqual(lines[4].split(), ["0", "2", "*", "3", "*"])

    def test_out_of_bounds(self):
        board = MinesweeperBoard(5, 5, 6, mine_positions=WALL_MINES)
        for row, col in [(-1, 0), (0, -1), (5, 0), (0, 5), ("a", 0),
                         (2.9, 1.5), (-0.5, 0), ("2", "1"), (True, 0)]:
            with self.assertRaises(OutOfBounds):
                board.is_mine(row, col)
        with self.assertRaises(IndexError):
            board.adjacent_count(5, 5)


if __name__ == "__main__":
    unittest.main()
