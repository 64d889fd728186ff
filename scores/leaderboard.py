# scores/leaderboard.py

import os
import csv
import logging
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

FILE_PREFIX = "LegendList_"
LEADERBOARD_DIR = "LegendLists"


@dataclass(frozen=True)
class Record:
    player_name: str
    time: int


class Leaderboard:
    """
    Best times per difficulty, one append-only text file per board shape:
    `LegendList_{rows}x{cols}_{mines}.txt` with `name,seconds` lines.
    """

    def __init__(self, directory: str = LEADERBOARD_DIR):
        self.directory = directory

    def _ensure_directory(self):
        os.makedirs(self.directory, exist_ok=True)

    def file_path(self, config) -> str:
        filename = f"{FILE_PREFIX}{config.rows}x{config.cols}_{config.mines}.txt"
        return os.path.join(self.directory, filename)

    def add_record(self, config, player_name: str, seconds: int):
        self._ensure_directory()
        with open(self.file_path(config), "a", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow([player_name, int(seconds)])
        logger.info("Recorded %s in %d second(s) for %dx%d/%d",
                    player_name, seconds, config.rows, config.cols, config.mines)

    def get_records(self, config) -> List[Record]:
        """Records for one difficulty, fastest first."""
        path = self.file_path(config)
        if not os.path.exists(path):
            return []

        records = []
        with open(path, "r", newline="") as f:
            reader = csv.reader(f)
            for line_no, row in enumerate(reader, start=1):
                if len(row) != 2:
                    logger.warning("Skipping malformed line %d in %s", line_no, path)
                    continue
                try:
                    records.append(Record(row[0], int(row[1])))
                except ValueError:
                    logger.warning("Skipping malformed line %d in %s", line_no, path)

        return sorted(records, key=lambda record: record.time)


def display_leaderboard(records: List[Record], config):
    print(f"\n🏆 Legend List - {config.rows}x{config.cols}, {config.mines} mines\n")
    if not records:
        print("No records for this difficulty yet.")
        return

    header = f"{'Rank':<6} {'Player':<20} {'Time (s)'}"
    print(header)
    print("-" * len(header))
    for rank, record in enumerate(records, start=1):
        print(f"{rank:<6} {record.player_name:<20} {record.time}")


def main():
    import argparse

    from backend.config import DEFAULT_DIFFICULTY, load_difficulties

    parser = argparse.ArgumentParser(description="Show the best times for a difficulty")
    parser.add_argument("--difficulty", default=DEFAULT_DIFFICULTY, help="Difficulty preset name")
    parser.add_argument("--config", default=None, help="Path to difficulties yaml")
    parser.add_argument("--scores-dir", default=LEADERBOARD_DIR, help="Directory holding the score files")
    args = parser.parse_args()

    difficulties = load_difficulties(args.config)
    if args.difficulty not in difficulties:
        parser.error(f"unknown difficulty {args.difficulty!r}, choose from {', '.join(difficulties)}")

    config = difficulties[args.difficulty]
    display_leaderboard(Leaderboard(args.scores_dir).get_records(config), config)


if __name__ == "__main__":
    main()
