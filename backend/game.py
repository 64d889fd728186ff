# backend/game.py

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .board import MinesweeperBoard
from .clock import GameClock
from .utils import format_counter

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class Outcome(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass
class Effect:
    """
    What a single player action changed.

    `changed` lists every cell whose revealed/flagged/text state changed, in
    the order the changes happened, so a presentation layer can repaint just
    those cells. An action that was a no-op returns an Effect with nothing
    in it.
    """

    outcome: Outcome = Outcome.IN_PROGRESS
    changed: List[Cell] = field(default_factory=list)
    exploded: Optional[Cell] = None
    unflagged_mines: List[Cell] = field(default_factory=list)
    wrong_flags: List[Cell] = field(default_factory=list)
    auto_flagged: List[Cell] = field(default_factory=list)

    def __bool__(self):
        return bool(self.changed)

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "changed": [list(cell) for cell in self.changed],
            "exploded": list(self.exploded) if self.exploded else None,
            "unflagged_mines": [list(cell) for cell in self.unflagged_mines],
            "wrong_flags": [list(cell) for cell in self.wrong_flags],
            "auto_flagged": [list(cell) for cell in self.auto_flagged],
        }


class GameState:
    """
    Player-visible state of one game wrapped around a MinesweeperBoard.

    States: IN_PROGRESS -> WON or IN_PROGRESS -> LOST. Both are terminal;
    only reset() starts a fresh game. Once terminal, reveal() and
    toggle_flag() are silent no-ops.

    The class does no locking. Callers that deliver input and clock ticks
    from different threads must serialize reveal/toggle_flag/tick/reset
    themselves (see backend.session.GameSession).
    """

    def __init__(self, rows: int, cols: int, num_mines: int, seed: int = None,
                 mine_positions: Optional[List[Cell]] = None, clock: Optional[GameClock] = None):
        self.clock = clock or GameClock()
        self.board = None
        self.reset(num_mines, rows, cols, seed=seed, mine_positions=mine_positions)

    def reset(self, num_mines: int = None, rows: int = None, cols: int = None,
              seed: int = None, mine_positions: Optional[List[Cell]] = None):
        """
        Start a fresh game. Parameters left as None keep the current value.
        A new mine layout is always drawn. An invalid configuration raises
        InvalidConfig before anything of the current game is touched.
        """
        if self.board is not None:
            rows = self.board.rows if rows is None else rows
            cols = self.board.cols if cols is None else cols
            num_mines = self.board.num_mines if num_mines is None else num_mines

        board = MinesweeperBoard(rows, cols, num_mines, seed=seed, mine_positions=mine_positions)

        self.board = board
        self.revealed = np.zeros((board.rows, board.cols), dtype=bool)
        self.flagged = np.zeros((board.rows, board.cols), dtype=bool)
        self.remaining_flags = board.num_mines
        self.outcome = Outcome.IN_PROGRESS
        self.exploded = None
        self.forced = False
        self.clock.reset()
        logger.info("New game %dx%d with %d mines", board.rows, board.cols, board.num_mines)

    @property
    def rows(self):
        return self.board.rows

    @property
    def cols(self):
        return self.board.cols

    @property
    def num_mines(self):
        return self.board.num_mines

    def _no_effect(self) -> Effect:
        return Effect(outcome=self.outcome)

    def reveal(self, row: int, col: int) -> Effect:
        """
        Uncover (row, col).

        - Terminal game, flagged cell or already revealed cell: no-op.
        - The first reveal of a game starts the clock.
        - A mine loses the game and reports the exploded cell, every other
          mine the player did not flag, and every flag sitting on a safe cell.
        - A safe cell starts a flood reveal. Cells with no adjacent mines
          spread to their neighbors; flagged and mine cells are never
          touched. The win condition is checked once the flood settles.
        """
        row, col = self.board.check_bounds(row, col)
        if self.outcome is not Outcome.IN_PROGRESS or self.flagged[row, col] or self.revealed[row, col]:
            return self._no_effect()

        self.clock.start()

        if self.board.is_mine(row, col):
            return self._lose(row, col)

        changed = self._flood_reveal(row, col)
        logger.debug("Revealed %d cell(s) from (%d, %d)", len(changed), row, col)

        if self.revealed_count() == self.board.safe_cells:
            return self._win(changed)
        return Effect(outcome=self.outcome, changed=changed)

    def _flood_reveal(self, row: int, col: int) -> List[Cell]:
        # Explicit worklist: recursion depth would grow with the board size.
        changed = []
        pending = [(row, col)]
        while pending:
            r, c = pending.pop()
            if self.revealed[r, c] or self.flagged[r, c] or self.board.is_mine_grid[r, c]:
                continue
            self.revealed[r, c] = True
            changed.append((r, c))
            if self.board.adjacent[r, c] == 0:
                pending.extend(self.board.neighbors(r, c))
        return changed

    def _lose(self, row: int, col: int) -> Effect:
        self.outcome = Outcome.LOST
        self.exploded = (row, col)
        self.clock.stop()

        unflagged_mines = []
        wrong_flags = []
        for r in range(self.rows):
            for c in range(self.cols):
                is_mine = self.board.is_mine_grid[r, c]
                if is_mine and not self.flagged[r, c] and (r, c) != self.exploded:
                    unflagged_mines.append((r, c))
                elif not is_mine and self.flagged[r, c]:
                    wrong_flags.append((r, c))

        logger.info("Game lost on (%d, %d) after %d second(s)", row, col, self.clock.elapsed_seconds)
        return Effect(
            outcome=self.outcome,
            changed=[self.exploded] + unflagged_mines + wrong_flags,
            exploded=self.exploded,
            unflagged_mines=unflagged_mines,
            wrong_flags=wrong_flags,
        )

    def _win(self, changed: List[Cell]) -> Effect:
        self.outcome = Outcome.WON
        self.clock.stop()

        auto_flagged = []
        for r, c in self.board.mine_positions():
            if not self.flagged[r, c]:
                self.flagged[r, c] = True
                auto_flagged.append((r, c))
        self.remaining_flags = 0

        logger.info("Game won in %d second(s)", self.clock.elapsed_seconds)
        return Effect(outcome=self.outcome, changed=changed + auto_flagged, auto_flagged=auto_flagged)

    def toggle_flag(self, row: int, col: int) -> Effect:
        """
        Flag or unflag an unrevealed cell. Over-flagging is allowed and drives
        remaining_flags below zero.
        """
        row, col = self.board.check_bounds(row, col)
        if self.outcome is not Outcome.IN_PROGRESS or self.revealed[row, col]:
            return self._no_effect()

        if self.flagged[row, col]:
            self.flagged[row, col] = False
            self.remaining_flags += 1
        else:
            self.flagged[row, col] = True
            self.remaining_flags -= 1
        logger.debug("Flag on (%d, %d) is now %s", row, col, bool(self.flagged[row, col]))
        return Effect(outcome=self.outcome, changed=[(row, col)])

    def force_win(self) -> Effect:
        """
        Debug shortcut: finish the game as won. Every safe cell is revealed
        (clearing any flag on it) and every mine is flagged.
        """
        if self.outcome is not Outcome.IN_PROGRESS:
            return self._no_effect()

        changed = []
        for r in range(self.rows):
            for c in range(self.cols):
                if not self.board.is_mine_grid[r, c] and not self.revealed[r, c]:
                    self.flagged[r, c] = False
                    self.revealed[r, c] = True
                    changed.append((r, c))
        self.forced = True
        logger.warning("Game finished with a forced win")
        return self._win(changed)

    def is_revealed(self, row: int, col: int) -> bool:
        row, col = self.board.check_bounds(row, col)
        return bool(self.revealed[row, col])

    def is_flagged(self, row: int, col: int) -> bool:
        row, col = self.board.check_bounds(row, col)
        return bool(self.flagged[row, col])

    def revealed_count(self) -> int:
        return int(self.revealed.sum())

    def is_over(self) -> bool:
        return self.outcome is not Outcome.IN_PROGRESS

    def is_won(self) -> bool:
        return self.outcome is Outcome.WON

    def remaining_flags_display(self) -> str:
        return format_counter(self.remaining_flags)

    def cell_view(self, row: int, col: int):
        """
        Render code for one cell:
            None  hidden
            "F"   flagged (after a win every mine shows as "F")
            ""    revealed, no adjacent mines
            1..8  revealed hint
        After a loss additionally:
            "*"   the mine that exploded
            "M"   a mine the player did not flag
            "X"   a flag placed on a safe cell
        """
        row, col = self.board.check_bounds(row, col)
        is_mine = self.board.is_mine_grid[row, col]
        flagged = self.flagged[row, col]

        if self.outcome is Outcome.LOST:
            if (row, col) == self.exploded:
                return "*"
            if is_mine:
                return "F" if flagged else "M"
            if flagged:
                return "X"

        if flagged:
            return "F"
        if not self.revealed[row, col]:
            return None
        return int(self.board.adjacent[row, col]) or ""

    def get_visible_state(self):
        return [[self.cell_view(r, c) for c in range(self.cols)] for r in range(self.rows)]

    def get_state(self) -> dict:
        """
        Return the current visible board and game status.
        """
        return {
            "board": self.get_visible_state(),
            "outcome": self.outcome.value,
            "game_over": self.is_over(),
            "won": self.is_won(),
            "dimensions": (self.rows, self.cols),
            "num_mines": self.num_mines,
            "remaining_flags": self.remaining_flags,
            "remaining_flags_display": self.remaining_flags_display(),
            "elapsed_seconds": self.clock.elapsed_seconds,
            "elapsed_display": self.clock.display(),
            "clock_running": self.clock.running,
            "revealed_count": self.revealed_count(),
        }
