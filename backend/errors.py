# backend/errors.py


class MinesweeperError(Exception):
    """Base class for every error raised by the board engine."""


class InvalidConfig(MinesweeperError, ValueError):
    """Board dimensions or mine count cannot produce a playable board."""


class OutOfBounds(MinesweeperError, IndexError):
    """A coordinate outside the grid was passed to the engine."""

    def __init__(self, row, col, rows, cols):
        super().__init__(f"Cell ({row}, {col}) is outside a {rows}x{cols} board")
        self.row = row
        self.col = col
