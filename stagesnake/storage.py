"""
storage.py — Best-score persistence.

The only thing the game remembers between runs is one integer, kept in a
small JSON file. A missing or broken file never stops the game: it reads
as 0 and a warning goes to the console.
"""

import json
import os

from .config import BEST_SCORE_PATH


class BestScoreStore:
    """Load / save the all-time best score."""

    def __init__(self, path: str = BEST_SCORE_PATH):
        self.path = path
        self.best: int = self.load()

    def load(self) -> int:
        if not os.path.isfile(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
            return max(0, int(data["best_score"]))
        except (OSError, ValueError, TypeError, KeyError) as exc:
            print(f"[scores] Could not read '{self.path}': {exc}; starting from 0.")
            return 0

    def save(self, score: int) -> None:
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump({"best_score": score}, fh)
        except OSError as exc:
            print(f"[scores] Could not write '{self.path}': {exc}")

    def record(self, score: int) -> int:
        """Keep max(best, score); touch the file only when the best improves."""
        if score > self.best:
            self.best = score
            self.save(score)
        return self.best
