# backend/config.py

import os
from dataclasses import dataclass
from typing import Dict, Optional

import yaml

from .errors import InvalidConfig

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config", "difficulties.yaml"
)

DEFAULT_DIFFICULTY = "junior"

# Bounds of the custom difficulty picker.
CUSTOM_MIN_SIZE = 5
CUSTOM_MAX_SIZE = 30


@dataclass(frozen=True)
class BoardConfig:
    """Board dimensions and mine count for one difficulty."""

    rows: int
    cols: int
    mines: int
    label: str = "custom"

    @property
    def cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        return self.cells - self.mines

    def validate(self) -> "BoardConfig":
        validate_dimensions(self.rows, self.cols, self.mines)
        return self

    @classmethod
    def custom(cls, rows: int, cols: int, mines: int) -> "BoardConfig":
        """
        Build a custom difficulty the way the difficulty picker does:
        rows and cols are held to [5, 30], mines to [1, rows*cols // 2],
        and at least one safe cell is always left.
        """
        rows = min(max(int(rows), CUSTOM_MIN_SIZE), CUSTOM_MAX_SIZE)
        cols = min(max(int(cols), CUSTOM_MIN_SIZE), CUSTOM_MAX_SIZE)
        mines = min(max(int(mines), 1), (rows * cols) // 2)
        mines = min(mines, rows * cols - 1)
        return cls(rows, cols, mines).validate()


BUILTIN_DIFFICULTIES = {
    "junior": BoardConfig(5, 5, 6, "junior"),
    "middle": BoardConfig(9, 9, 25, "middle"),
    "senior": BoardConfig(15, 15, 50, "senior"),
}


def validate_dimensions(rows, cols, mines):
    for name, value in (("rows", rows), ("cols", cols), ("mines", mines)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfig(f"{name} must be an integer, got {value!r}")
    if rows < 1 or cols < 1:
        raise InvalidConfig(f"Board must be at least 1x1, got {rows}x{cols}")
    if mines < 1:
        raise InvalidConfig(f"Board needs at least one mine, got {mines}")
    if mines >= rows * cols:
        raise InvalidConfig(
            f"Cannot place {mines} mines on a {rows}x{cols} board: at least one safe cell is required"
        )


def load_difficulties(path: Optional[str] = None) -> Dict[str, BoardConfig]:
    """
    Load difficulty presets from a YAML file shaped like:

        difficulties:
          junior: {rows: 5, cols: 5, mines: 6}

    Falls back to the built-in presets when the file does not exist.
    """
    path = path or DEFAULT_CONFIG_PATH
    if not os.path.exists(path):
        return dict(BUILTIN_DIFFICULTIES)

    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise InvalidConfig(f"Expected a mapping at the top of {path}")
    section = raw.get("difficulties", {})
    if not isinstance(section, dict) or not section:
        raise InvalidConfig(f"No difficulties defined in {path}")

    difficulties = {}
    for label, params in section.items():
        try:
            config = BoardConfig(params["rows"], params["cols"], params["mines"], str(label))
        except (KeyError, TypeError) as exc:
            raise InvalidConfig(f"Difficulty {label!r} in {path} needs rows, cols and mines") from exc
        difficulties[str(label)] = config.validate()
    return difficulties
