"""
view.py — View layer.

Draws one frame from a GameState snapshot:
  - Pre-rendered board + grid surface (drawn once, blitted every frame)
  - Pulsing food with a soft glow
  - Snake with a head-to-tail colour fade and eyes facing the heading
  - HUD panel: score, best, stage, speed multiplier, speed-layer pips,
    status badge (running / paused / over)
  - Paused / game-over overlays

Public API:
    GameView.for_board(w, h)       — open a window sized for the board
    view.render(state, best_score) — draw the current frame
"""

import math
import pygame

from .config import (
    CELL, PANEL_H, MARGIN,
    BG, BOARD_BG, GRID_COL, SNAKE_COL, SNAKE_DIM, FOOD_COL, FOOD_HI,
    PAUSE_COL, UI_COL, TEXT_COL, PANEL_BG, BORDER_COL,
    SPEED_LAYERS, STATUS_OVER, STATUS_PAUSED, STATUS_RUNNING,
)
from .model import GameState


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def window_size(board_w: int, board_h: int) -> tuple[int, int]:
    return board_w * CELL + 2 * MARGIN, PANEL_H + board_h * CELL + 2 * MARGIN


STATUS_BADGES = {
    STATUS_RUNNING: ("RUNNING",   SNAKE_COL),
    STATUS_PAUSED:  ("PAUSED",    PAUSE_COL),
    STATUS_OVER:    ("GAME OVER", FOOD_COL),
}


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a GameState snapshot."""

    def __init__(self, screen: pygame.Surface, board_w: int, board_h: int):
        self.screen  = screen
        self.board_w = board_w
        self.board_h = board_h
        self.width, self.height = window_size(board_w, board_h)
        self.origin  = (MARGIN, PANEL_H + MARGIN)
        self.badge_pos = (MARGIN + 4, PANEL_H - 10)
        self._init_fonts()
        self._build_static_surfaces()
        self._anim_tick: int = 0

    @classmethod
    def for_board(cls, board_w: int, board_h: int) -> "GameView":
        screen = pygame.display.set_mode(window_size(board_w, board_h))
        return cls(screen, board_w, board_h)

    # ── Main entry ───────────────────────────────────────────────
    def render(self, state: GameState, best_score: int) -> None:
        self._anim_tick += 1

        self.screen.fill(BG)
        self.screen.blit(self._board_surf, self.origin)

        self._draw_food(state)
        self._draw_snake(state)

        self._draw_border()
        self._draw_panel(state, best_score)

        if state.game_over:
            self._draw_game_over_overlay(state, best_score)
        elif state.paused:
            self._draw_paused_overlay()

        pygame.display.flip()

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        board_px = (self.board_w * CELL, self.board_h * CELL)
        self._board_surf = pygame.Surface(board_px, pygame.SRCALPHA)
        self._board_surf.fill(BOARD_BG)
        for x in range(self.board_w + 1):
            pygame.draw.line(self._board_surf, (*GRID_COL, 120),
                             (x * CELL, 0), (x * CELL, board_px[1]))
        for y in range(self.board_h + 1):
            pygame.draw.line(self._board_surf, (*GRID_COL, 120),
                             (0, y * CELL), (board_px[0], y * CELL))

    def _cell_center(self, x: int, y: int) -> tuple[int, int]:
        ox, oy = self.origin
        return ox + x * CELL + CELL // 2, oy + y * CELL + CELL // 2

    # ── Food ─────────────────────────────────────────────────────
    def _draw_food(self, state: GameState) -> None:
        if state.food is None:
            return
        pulse = 0.80 + 0.20 * math.sin(self._anim_tick * 0.09)
        r = max(2, int((CELL / 2 - 1) * pulse))
        x, y = self._cell_center(*state.food)

        glow_r = r + 8
        glow = pygame.Surface((glow_r * 2, glow_r * 2), pygame.SRCALPHA)
        for gr in range(glow_r, r, -1):
            a = int(70 * (1 - (gr - r) / (glow_r - r)) * pulse)
            pygame.draw.circle(glow, _with_alpha(FOOD_COL, a), (glow_r, glow_r), gr)
        self.screen.blit(glow, (x - glow_r, y - glow_r))

        pygame.draw.circle(self.screen, FOOD_COL, (x, y), r)
        pygame.draw.circle(self.screen, FOOD_HI, (x - 3, y - 3), max(1, r // 4))

    # ── Snake ────────────────────────────────────────────────────
    def _draw_snake(self, state: GameState) -> None:
        length = len(state.snake)
        ox, oy = self.origin
        # Colour warms up a little as the score rises
        head_col = _lerp_color(SNAKE_COL, PAUSE_COL, min(state.score, 40) / 160)

        for i, (sx, sy) in enumerate(state.snake):
            t = 1.0 - (i / max(length - 1, 1)) * 0.65
            color = _lerp_color(SNAKE_DIM, head_col, t)
            inset = 1 if i == 0 else 2
            rect = pygame.Rect(ox + sx * CELL + inset, oy + sy * CELL + inset,
                               CELL - inset * 2, CELL - inset * 2)
            pygame.draw.rect(self.screen, color, rect, border_radius=5)

        self._draw_eyes(state)

    def _draw_eyes(self, state: GameState) -> None:
        cx, cy = self._cell_center(*state.head)
        dx, dy = state.direction.x, state.direction.y
        px, py = -dy, dx  # perpendicular

        for sign in (+1, -1):
            ex = int(cx + dx * 4 + sign * px * 4)
            ey = int(cy + dy * 4 + sign * py * 4)
            pygame.draw.circle(self.screen, (233, 255, 239), (ex, ey), 2)
            pygame.draw.circle(self.screen, (7, 39, 29), (ex + dx, ey + dy), 1)

    # ── Border ────────────────────────────────────────────────────
    def _draw_border(self) -> None:
        ox, oy = self.origin
        pygame.draw.rect(self.screen, BORDER_COL,
                         (ox - 1, oy - 1, self.board_w * CELL + 2, self.board_h * CELL + 2), 1)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, state: GameState, best_score: int) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, self.width, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL,
                         (0, PANEL_H - 1), (self.width, PANEL_H - 1), 1)

        columns = [
            ("SCORE", str(state.score), SNAKE_COL),
            ("BEST",  str(best_score),  PAUSE_COL),
            ("STAGE", str(state.stage), TEXT_COL),
            ("SPEED", f"{state.speed_multiplier:.2f}x", FOOD_COL),
        ]
        col_w = self.width // len(columns)
        for i, (label, value, color) in enumerate(columns):
            cx = col_w * i + col_w // 2
            lbl = self.font_tiny.render(label, True, UI_COL)
            val = self.font_big.render(value, True, color)
            self.screen.blit(lbl, lbl.get_rect(center=(cx, 12)))
            self.screen.blit(val, val.get_rect(center=(cx, 32)))

        self._draw_speed_pips(self.width // 2, PANEL_H - 10, state.speed_layer)
        self._draw_status_badge(state)

    def _draw_speed_pips(self, cx: int, y: int, active: float) -> None:
        """One pip per speed layer; the selected one is lit."""
        spacing = 12
        n = len(SPEED_LAYERS)
        sx = cx - ((n - 1) * spacing) // 2
        for i, layer in enumerate(SPEED_LAYERS):
            px = sx + i * spacing
            if layer == active:
                pygame.draw.circle(self.screen, _with_alpha(FOOD_COL, 55), (px, y), 7)
                pygame.draw.circle(self.screen, FOOD_COL, (px, y), 4)
            else:
                pygame.draw.circle(self.screen, _lerp_color(UI_COL, BG, 0.3), (px, y), 2)

    def _draw_status_badge(self, state: GameState) -> None:
        label, color = STATUS_BADGES[state.status]
        bx, by = self.badge_pos
        pygame.draw.circle(self.screen, color, (bx, by), 4)
        txt = self.font_tiny.render(label, True, color)
        self.screen.blit(txt, txt.get_rect(midleft=(bx + 8, by)))

    # ── Overlays ──────────────────────────────────────────────────
    def _draw_overlay_base(self, alpha: int) -> None:
        surf = pygame.Surface((self.board_w * CELL, self.board_h * CELL), pygame.SRCALPHA)
        surf.fill((0, 0, 0, alpha))
        self.screen.blit(surf, self.origin)

    def _draw_text_line(self, text: str, color: tuple,
                        cy: int, font: pygame.font.Font) -> int:
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(self.width // 2, cy)))
        return cy + surf.get_height() + 8

    def _draw_paused_overlay(self) -> None:
        self._draw_overlay_base(110)
        cy = self.origin[1] + (self.board_h * CELL) // 2 - 20
        cy = self._draw_text_line("PAUSED", PAUSE_COL, cy, self.font_title)
        self._draw_text_line("SPACE TO RESUME", UI_COL, cy, self.font_tiny)

    def _draw_game_over_overlay(self, state: GameState, best_score: int) -> None:
        self._draw_overlay_base(122)
        cy = self.origin[1] + (self.board_h * CELL) // 2 - 36
        cy = self._draw_text_line("GAME OVER", (255, 255, 255), cy, self.font_title)
        if state.score > 0 and state.score >= best_score:
            cy = self._draw_text_line("NEW BEST!", PAUSE_COL, cy, self.font_small)
        self._draw_text_line("PRESS R TO PLAY AGAIN", TEXT_COL, cy, self.font_small)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 30, True),
            ("font_big",   "courier", 20, True),
            ("font_small", "courier", 14, True),
            ("font_tiny",  "courier", 11, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except (pygame.error, OSError) as exc:
                print(f"[view] Font '{name}' unavailable ({exc}); using default.")
                setattr(self, attr, pygame.font.Font(None, size))
