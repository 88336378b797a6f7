"""
session.py — Live game session.

Sits between the Controller and the pure engine:
  - holds the current GameState and replaces it after every operation
  - turns frame time into ticks, re-armed from the latest tick_ms
  - keeps the best score up to date

No pygame here; the Controller feeds it milliseconds and action names.
"""

import random
from typing import Optional

from .config import SPEED_LAYERS, STATUS_RUNNING
from .model import (
    DIRECTIONS, GameState, Rng,
    create_initial_state, queue_direction, restart_game,
    set_speed_layer, tick, toggle_pause,
)
from .storage import BestScoreStore

ACTION_PAUSE   = "pause"
ACTION_RESTART = "restart"


class GameSession:
    """
    Owns the current state.
    The controller calls update() once per frame and apply() per key press.
    """

    def __init__(
        self,
        state: Optional[GameState] = None,
        store: Optional[BestScoreStore] = None,
        rng: Rng = random.random,
    ):
        self.rng = rng
        self.state: GameState = state or create_initial_state(rng=rng)
        self.store = store
        self.best_score: int = store.best if store is not None else 0
        self.elapsed_ms: float = 0.0
        self._record_best()

    # ── Queries ──────────────────────────────────────────────────
    @property
    def status(self) -> str:
        return self.state.status

    # ── Scheduling ───────────────────────────────────────────────
    def update(self, dt_ms: float) -> int:
        """
        Advance by dt_ms of wall time. Returns the number of ticks taken (0 or 1).

        At most one step per frame; time left over after a slow frame is
        dropped and the timer re-arms from the new state's tick_ms.
        """
        if self.status != STATUS_RUNNING:
            return 0

        self.elapsed_ms += dt_ms
        if self.elapsed_ms < self.state.tick_ms:
            return 0

        self.elapsed_ms = 0.0
        self.state = tick(self.state, self.rng)
        self._record_best()
        return 1

    # ── Commands ─────────────────────────────────────────────────
    def apply(self, action: str) -> None:
        if action in DIRECTIONS:
            self.state = queue_direction(self.state, action)
        elif action == ACTION_PAUSE:
            self.state = toggle_pause(self.state)
        elif action == ACTION_RESTART:
            self.state = restart_game(self.state, self.rng)
            self.elapsed_ms = 0.0

    def select_speed_layer(self, speed_layer) -> None:
        self.state = set_speed_layer(self.state, speed_layer)

    def cycle_speed_layer(self) -> None:
        index = SPEED_LAYERS.index(self.state.speed_layer)
        self.select_speed_layer(SPEED_LAYERS[(index + 1) % len(SPEED_LAYERS)])

    # ── Private helpers ──────────────────────────────────────────
    def _record_best(self) -> None:
        if self.store is not None:
            self.best_score = self.store.record(self.state.score)
        else:
            self.best_score = max(self.best_score, self.state.score)
