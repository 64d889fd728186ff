# backend/session.py

import logging
import random
import threading
from dataclasses import dataclass
from typing import Optional

from .config import BoardConfig
from .game import Effect, GameState, Outcome

logger = logging.getLogger(__name__)

TEST_NAME_PREFIX = "[TEST]"


@dataclass(frozen=True)
class FinishedGame:
    """Result of a won game, waiting to be recorded."""

    config: BoardConfig
    elapsed_seconds: int
    forced: bool = False


class GameSession:
    """
    Owns the difficulty, the current GameState and the hand-off of a win to
    the leaderboard.

    Input and clock ticks may arrive from different threads (the web server
    handles requests concurrently), so every call that touches the game runs
    under one lock.
    """

    def __init__(self, config: BoardConfig, leaderboard=None, seed: int = None):
        self._lock = threading.Lock()
        self._rng = random.Random(seed)
        self.config = config.validate()
        self.leaderboard = leaderboard
        self.game = GameState(config.rows, config.cols, config.mines, seed=self._next_seed())
        self._pending_result = None

    def _next_seed(self):
        return self._rng.randrange(2 ** 32)

    def _capture_result(self, effect: Effect) -> Effect:
        # Non-empty effects that end in WON are the transition itself.
        if effect and effect.outcome is Outcome.WON:
            self._pending_result = FinishedGame(self.config, self.game.clock.elapsed_seconds, self.game.forced)
        return effect

    def reveal(self, row: int, col: int) -> Effect:
        with self._lock:
            return self._capture_result(self.game.reveal(row, col))

    def toggle_flag(self, row: int, col: int) -> Effect:
        with self._lock:
            return self.game.toggle_flag(row, col)

    def force_win(self) -> Effect:
        with self._lock:
            return self._capture_result(self.game.force_win())

    def tick(self) -> int:
        with self._lock:
            return self.game.clock.tick()

    def reset(self, config: Optional[BoardConfig] = None):
        """
        Start a new game, optionally on a new difficulty. An invalid config
        raises InvalidConfig and leaves the current game untouched.
        """
        config = (config or self.config).validate()
        with self._lock:
            self.game.reset(config.mines, config.rows, config.cols, seed=self._next_seed())
            self.config = config
            self._pending_result = None

    @property
    def pending_result(self) -> Optional[FinishedGame]:
        return self._pending_result

    def record_score(self, player_name: str) -> bool:
        """
        Save the pending win under `player_name`. Returns True when a record
        was written. A result can be recorded only once; blank names keep it
        pending, and 0-second wins are dropped.
        """
        with self._lock:
            result = self._pending_result
            if result is None or self.leaderboard is None:
                return False

            name = (player_name or "").strip()
            if not name:
                return False

            self._pending_result = None
            if result.elapsed_seconds == 0:
                logger.info("Not recording a 0 second game for %s", name)
                return False

            if result.forced:
                name = TEST_NAME_PREFIX + name
            self.leaderboard.add_record(result.config, name, result.elapsed_seconds)
            return True

    def get_state(self) -> dict:
        with self._lock:
            state = self.game.get_state()
            state["difficulty"] = self.config.label
            state["score_pending"] = self._pending_result is not None
            return state
