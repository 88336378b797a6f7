"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

import os

# ── Engine tuning ─────────────────────────────────────────────────
BASE_TICK_MS    = 140
MIN_TICK_MS     = 70
SPEED_STEP_MS   = 10
FOOD_PER_STAGE  = 5
SPEED_LAYERS    = (1, 1.25, 1.5, 1.75, 2)

# ── Default board ─────────────────────────────────────────────────
BOARD_W, BOARD_H = 20, 20
START_HEAD_X     = 3
START_LENGTH     = 3

# ── Window & Grid ─────────────────────────────────────────────────
CELL            = 20
PANEL_H         = 64
MARGIN          = 10
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (9,   18,  30)
BOARD_BG    = (11,  24,  40)
GRID_COL    = (40,  60,  78)
SNAKE_COL   = (92,  247, 186)
SNAKE_DIM   = (24,  120, 84)
FOOD_COL    = (255, 95,  109)
FOOD_HI     = (255, 212, 217)
PAUSE_COL   = (255, 216, 105)
UI_COL      = (120, 150, 180)
TEXT_COL    = (214, 233, 255)
PANEL_BG    = (12,  16,  28)
BORDER_COL  = (26,  40,  62)

# ── Persistence ───────────────────────────────────────────────────
BEST_SCORE_PATH = os.environ.get(
    "STAGESNAKE_BEST_SCORE_PATH",
    os.path.join(os.path.expanduser("~"), ".stagesnake", "best_score.json"),
)

# ── Session status ────────────────────────────────────────────────
STATUS_RUNNING = "running"
STATUS_PAUSED  = "paused"
STATUS_OVER    = "over"
