"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate raw keyboard events into session actions.
  - Drive the game loop: feed frame time to the session, ask the view to render.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

The controller is the only layer that imports pygame directly for events.
"""

import sys
from typing import Optional

import pygame

from .config import FPS, SPEED_LAYERS
from .session import ACTION_PAUSE, ACTION_RESTART, GameSession
from .storage import BestScoreStore
from .view import GameView

ACTION_QUIT  = "quit"
ACTION_CYCLE = "cycle_speed"

KEY_ACTIONS = {
    pygame.K_UP:     "up",
    pygame.K_DOWN:   "down",
    pygame.K_LEFT:   "left",
    pygame.K_RIGHT:  "right",
    pygame.K_w:      "up",
    pygame.K_s:      "down",
    pygame.K_a:      "left",
    pygame.K_d:      "right",
    pygame.K_SPACE:  ACTION_PAUSE,
    pygame.K_p:      ACTION_PAUSE,
    pygame.K_r:      ACTION_RESTART,
    pygame.K_RETURN: ACTION_RESTART,
    pygame.K_TAB:    ACTION_CYCLE,
    pygame.K_q:      ACTION_QUIT,
    pygame.K_ESCAPE: ACTION_QUIT,
}

SPEED_KEYS = {
    pygame.K_1: SPEED_LAYERS[0],
    pygame.K_2: SPEED_LAYERS[1],
    pygame.K_3: SPEED_LAYERS[2],
    pygame.K_4: SPEED_LAYERS[3],
    pygame.K_5: SPEED_LAYERS[4],
}


def action_for_key(key: int) -> Optional[str]:
    return KEY_ACTIONS.get(key)


class GameController:
    """
    Owns the main loop.
    Glues Session <-> View without them knowing about each other.
    """

    def __init__(self, session: Optional[GameSession] = None):
        pygame.init()
        self.session = session or GameSession(store=BestScoreStore())
        self.view    = GameView.for_board(self.session.state.width, self.session.state.height)
        pygame.display.set_caption("StageSnake")
        self.clock   = pygame.time.Clock()

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        while True:
            dt_ms = self.clock.tick(FPS)
            self._handle_events()
            self.session.update(dt_ms)
            self.view.render(self.session.state, self.session.best_score)

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key: int) -> None:
        if key in SPEED_KEYS:
            self.session.select_speed_layer(SPEED_KEYS[key])
            return

        action = action_for_key(key)
        if action == ACTION_QUIT:
            self._quit()
        elif action == ACTION_CYCLE:
            self.session.cycle_speed_layer()
        elif action is not None:
            self.session.apply(action)

    # ── Utilities ─────────────────────────────────────────────────
    @staticmethod
    def _quit() -> None:
        pygame.quit()
        sys.exit()


def main() -> None:
    GameController().run()
