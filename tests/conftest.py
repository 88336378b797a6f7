import os

import pytest

# Headless pygame for the controller / view tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


def _scripted(*values):
    remaining = list(values) or [0.0]

    def rng() -> float:
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return rng


@pytest.fixture
def scripted_rng():
    """Factory: rng that returns the given values in order, then repeats the last."""
    return _scripted


@pytest.fixture
def best_score_path(tmp_path):
    return str(tmp_path / "scores" / "best_score.json")
