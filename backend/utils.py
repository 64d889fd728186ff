# backend/utils.py

import random
from typing import Iterable, List, Optional, Tuple

NEIGHBOR_OFFSETS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),          (0, 1),
    (1, -1), (1, 0), (1, 1)
]

DISPLAY_MAX = 999


def generate_random_positions(rows: int, cols: int, count: int, rng: Optional[random.Random] = None) -> List[Tuple[int, int]]:
    """
    Pick `count` distinct (row, col) positions uniformly at random.
    Sampling is without replacement over every cell of the grid.
    """
    all_coords = [(r, c) for r in range(rows) for c in range(cols)]
    rng = rng or random.Random()
    return rng.sample(all_coords, count)


def get_neighbors(row: int, col: int, rows: int, cols: int) -> List[Tuple[int, int]]:
    """
    Return the valid 8-way neighbors of (row, col), clipped to the grid.
    """
    neighbors = []
    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = row + dr, col + dc
        if 0 <= nr < rows and 0 <= nc < cols:
            neighbors.append((nr, nc))
    return neighbors


def format_counter(value: int) -> str:
    """
    Render a counter for a fixed-width three digit display.
    Only the rendering is clamped; callers keep the real value.
    """
    return f"{min(max(value, 0), DISPLAY_MAX):03d}"


def print_board_debug(is_mine, adjacent, revealed=None, flags: Optional[Iterable] = None):
    """
    Print the board for debugging purposes.
    Shows revealed tiles, flags, and mines/numbers.
    """
    for r in range(len(is_mine)):
        row_str = ""
        for c in range(len(is_mine[0])):
            if flags is not None and flags[r][c]:
                row_str += " F "
            elif revealed is not None and not revealed[r][c]:
                row_str += " . "
            elif is_mine[r][c]:
                row_str += " * "
            else:
                row_str += f" {adjacent[r][c]} "
        print(row_str)
