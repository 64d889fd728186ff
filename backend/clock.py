# backend/clock.py

from .utils import format_counter


class GameClock:
    """
    Elapsed-seconds counter for one game.

    The clock does not read wall time. An external scheduler calls tick()
    once per second; ticks only count while the clock is running.
    """

    def __init__(self):
        self.elapsed_seconds = 0
        self.running = False

    def start(self):
        if not self.running:
            self.running = True

    def stop(self):
        # elapsed_seconds is kept so the final time stays readable
        if self.running:
            self.running = False

    def tick(self):
        if self.running:
            self.elapsed_seconds += 1
        return self.elapsed_seconds

    def reset(self):
        self.running = False
        self.elapsed_seconds = 0

    def display(self) -> str:
        return format_counter(self.elapsed_seconds)
