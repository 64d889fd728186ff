# tests/test_config.py

import os
import tempfile
import unittest

from backend.config import BUILTIN_DIFFICULTIES, BoardConfig, load_difficulties
from backend.errors import InvalidConfig


class TestDifficulties(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _write(self, text):
        path = os.path.join(self.tmp.name, "difficulties.yaml")
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_default_file_matches_builtin_presets(self):
        presets = load_difficulties()
        self.assertEqual(presets["junior"], BoardConfig(5, 5, 6, "junior"))
        self.assertEqual(presets["middle"], BoardConfig(9, 9, 25, "middle"))
        self.assertEqual(presets["senior"], BoardConfig(15, 15, 50, "senior"))

    def test_missing_file_falls_back(self):
        presets = load_difficulties(os.path.join(self.tmp.name, "missing.yaml"))
        self.assertEqual(presets, BUILTIN_DIFFICULTIES)

    def test_load_custom_file(self):
        path = self._write("difficulties:\n  tiny:\n    rows: 2\n    cols: 3\n    mines: 1\n")
        presets = load_difficulties(path)
        self.assertEqual(list(presets), ["tiny"])
        self.assertEqual(presets["tiny"].cells, 6)
        self.assertEqual(presets["tiny"].safe_cells, 5)

    def test_invalid_entries(self):
        for text in [
            "difficulties: {}\n",
            "difficulties:\n  broken:\n    rows: 2\n",
            "difficulties:\n  full:\n    rows: 2\n    cols: 2\n    mines: 4\n",
            "difficulties:\n  words:\n    rows: two\n    cols: 2\n    mines: 1\n",
            "- junior\n",
            "just a string\n",
        ]:
            with self.assertRaises(InvalidConfig):
                load_difficulties(self._write(text))


class TestBoardConfig(unittest.TestCase):

    def test_validate(self):
        self.assertEqual(BoardConfig(5, 5, 24).validate().mines, 24)
        with self.assertRaises(InvalidConfig):
            BoardConfig(5, 5, 25).validate()
        with self.assertRaises(InvalidConfig):
            BoardConfig(5, 5, True).validate()

    def test_custom_clamps_to_picker_bounds(self):
        self.assertEqual(BoardConfig.custom(2, 40, 500), BoardConfig(5, 30, 75))
        self.assertEqual(BoardConfig.custom(10, 10, 0), BoardConfig(10, 10, 1))
        self.assertEqual(BoardConfig.custom(9, 9, 25).label, "custom")


if __name__ == "__main__":
    unittest.main()
