# backend/board.py

import numbers
import random

import numpy as np

from .config import validate_dimensions
from .errors import InvalidConfig, OutOfBounds
from .utils import generate_random_positions, get_neighbors, print_board_debug


class MinesweeperBoard:
    """
    Mine layout and hint numbers for one game.

    The board holds no player state. Mines are placed once, at construction,
    by uniform sampling without replacement over every cell; there is no
    guarantee that the first reveal is safe or that the board is solvable
    without guessing.
    """

    def __init__(self, rows, cols, num_mines, seed=None, mine_positions=None):
        """
        seed:
            Optional seed for reproducible placement.
        mine_positions:
            Optional explicit list of (row, col) mine coordinates. Must hold
            exactly `num_mines` distinct in-bounds cells; overrides `seed`.
        """
        validate_dimensions(rows, cols, num_mines)

        self.rows = rows
        self.cols = cols
        self.num_mines = num_mines

        self.is_mine_grid = np.zeros((rows, cols), dtype=bool)
        self.adjacent = np.zeros((rows, cols), dtype=np.int8)

        if mine_positions is None:
            mine_positions = generate_random_positions(rows, cols, num_mines, random.Random(seed))
        self._place_mines(mine_positions)
        self._compute_adjacent_counts()

    def _place_mines(self, positions):
        positions = [tuple(p) for p in positions]
        if len(set(positions)) != len(positions):
            raise InvalidConfig("Mine positions must be distinct")
        if len(positions) != self.num_mines:
            raise InvalidConfig(
                f"Expected {self.num_mines} mine positions, got {len(positions)}"
            )
        for r, c in positions:
            if not self.is_valid_coord(r, c):
                raise InvalidConfig(f"Mine position ({r}, {c}) is outside the board")
            self.is_mine_grid[r, c] = True

    def _compute_adjacent_counts(self):
        for r in range(self.rows):
            for c in range(self.cols):
                if self.is_mine_grid[r, c]:
                    continue
                count = 0
                for nr, nc in get_neighbors(r, c, self.rows, self.cols):
                    if self.is_mine_grid[nr, nc]:
                        count += 1
                self.adjacent[r, c] = count

    @property
    def cells(self):
        return self.rows * self.cols

    @property
    def safe_cells(self):
        return self.cells - self.num_mines

    def is_valid_coord(self, row, col):
        for value in (row, col):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                return False
        return 0 <= row < self.rows and 0 <= col < self.cols

    def check_bounds(self, row, col):
        """Raise OutOfBounds unless (row, col) is a cell of this board."""
        if not self.is_valid_coord(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)
        return int(row), int(col)

    def neighbors(self, row, col):
        return get_neighbors(row, col, self.rows, self.cols)

    def is_mine(self, row, col):
        row, col = self.check_bounds(row, col)
        return bool(self.is_mine_grid[row, col])

    def adjacent_count(self, row, col):
        """Number of mines around a safe cell. Mine cells report 0."""
        row, col = self.check_bounds(row, col)
        if self.is_mine_grid[row, col]:
            return 0
        return int(self.adjacent[row, col])

    def mine_positions(self):
        return [(int(r), int(c)) for r, c in np.argwhere(self.is_mine_grid)]

    def print_debug_board(self):
        print_board_debug(self.is_mine_grid, self.adjacent)
