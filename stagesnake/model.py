"""
model.py — Model layer.

Owns ALL game rules. Zero rendering, zero input handling, zero I/O.
Every operation takes a GameState and returns a new GameState; nothing is
mutated in place, so callers can keep old states around safely.

Classes:
    Point       — immutable (x, y) grid cell
    Direction   — immutable (dx, dy) value object
    Progress    — stage / tick interval derived from score and speed layer
    GameState   — the full snapshot of one game

Operations:
    create_initial_state, queue_direction, toggle_pause,
    set_speed_layer, restart_game, tick
"""

import math
import random
from dataclasses import dataclass, replace
from typing import Callable, Iterable, NamedTuple, Optional, Tuple

from .config import (
    BASE_TICK_MS, MIN_TICK_MS, SPEED_STEP_MS, FOOD_PER_STAGE,
    SPEED_LAYERS, BOARD_W, BOARD_H, START_HEAD_X, START_LENGTH,
    STATUS_OVER, STATUS_PAUSED, STATUS_RUNNING,
)

Rng = Callable[[], float]


# ──────────────────────────── Point ──────────────────────────────
class Point(NamedTuple):
    x: int
    y: int


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None

    __slots__ = ("_x", "_y")

    def __init__(self, x: int, y: int):
        self._x = x
        self._y = y

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def step(self, point: Point) -> Point:
        return Point(point.x + self.x, point.y + self.y)

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.LEFT  = Direction(-1,  0)
Direction.RIGHT = Direction( 1,  0)
Direction.UP    = Direction( 0, -1)
Direction.DOWN  = Direction( 0,  1)

DIRECTIONS = {
    "up":    Direction.UP,
    "down":  Direction.DOWN,
    "left":  Direction.LEFT,
    "right": Direction.RIGHT,
}


# ─────────────────────────── Progress ────────────────────────────
class Progress(NamedTuple):
    stage: int
    tick_ms: int
    speed_multiplier: float


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_progress(score: int, speed_layer: float) -> Progress:
    """Derive stage and timing from the score and the chosen speed layer."""
    stage = score // FOOD_PER_STAGE + 1
    stage_tick_ms = max(MIN_TICK_MS, BASE_TICK_MS - (stage - 1) * SPEED_STEP_MS)
    tick_ms = max(MIN_TICK_MS, _round_half_up(stage_tick_ms / speed_layer))
    speed_multiplier = round(BASE_TICK_MS / tick_ms, 2)
    return Progress(stage, tick_ms, speed_multiplier)


def normalize_speed_layer(value) -> float:
    """Return `value` if it names a known speed layer, else the base layer."""
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return SPEED_LAYERS[0]
    for layer in SPEED_LAYERS:
        if layer == numeric:
            return layer
    return SPEED_LAYERS[0]


# ─────────────────────────── Geometry ────────────────────────────
def is_out_of_bounds(point: Point, width: int, height: int) -> bool:
    return point.x < 0 or point.y < 0 or point.x >= width or point.y >= height


def random_free_cell(
    width: int,
    height: int,
    occupied: Iterable[Point],
    rng: Rng,
) -> Optional[Point]:
    """
    Pick a cell not in `occupied`, uniformly, using `rng`.

    Free cells are listed row by row so a scripted rng always maps to
    the same cell. Returns None when the board is full.
    """
    taken = set(occupied)
    free = [
        Point(x, y)
        for y in range(height)
        for x in range(width)
        if (x, y) not in taken
    ]
    if not free:
        return None
    index = min(int(rng() * len(free)), len(free) - 1)
    return free[index]


# ─────────────────────────── GameState ───────────────────────────
@dataclass(frozen=True)
class GameState:
    width: int
    height: int
    snake: Tuple[Point, ...]
    direction: Direction
    queued_direction: Direction
    food: Optional[Point]
    score: int
    speed_layer: float
    stage: int
    tick_ms: int
    speed_multiplier: float
    game_over: bool = False
    paused: bool = False

    @property
    def head(self) -> Point:
        return self.snake[0]

    @property
    def status(self) -> str:
        if self.game_over:
            return STATUS_OVER
        if self.paused:
            return STATUS_PAUSED
        return STATUS_RUNNING


def _default_snake(height: int) -> Tuple[Point, ...]:
    row = height // 2
    return tuple(Point(START_HEAD_X - i, row) for i in range(START_LENGTH))


def _with_progress(state: GameState, score: int, speed_layer: float, **changes) -> GameState:
    progress = calculate_progress(score, speed_layer)
    return replace(
        state,
        score=score,
        speed_layer=speed_layer,
        stage=progress.stage,
        tick_ms=progress.tick_ms,
        speed_multiplier=progress.speed_multiplier,
        **changes,
    )


def _as_direction(value) -> Direction:
    """Accept a Direction or a direction name; anything else means right."""
    if isinstance(value, Direction):
        return value
    if isinstance(value, str):
        return DIRECTIONS.get(value, Direction.RIGHT)
    return Direction.RIGHT


# ─────────────────────────── Operations ──────────────────────────
def create_initial_state(config: Optional[dict] = None, rng: Rng = random.random) -> GameState:
    """
    Build a fresh game.

    Recognised `config` keys: width, height, snake, direction, speed_layer,
    score, food. Anything missing takes the default 20x20 board with a
    three-segment snake heading right. Food is placed with `rng` unless
    given explicitly.
    """
    config = config or {}
    width = config.get("width", BOARD_W)
    height = config.get("height", BOARD_H)
    if "snake" in config:
        snake = tuple(Point(*segment) for segment in config["snake"])
    else:
        snake = _default_snake(height)
    direction = _as_direction(config.get("direction", Direction.RIGHT))
    speed_layer = normalize_speed_layer(config.get("speed_layer"))
    score = config.get("score", 0)

    food = config.get("food")
    if food is None:
        food = random_free_cell(width, height, snake, rng)
    else:
        food = Point(*food)

    progress = calculate_progress(score, speed_layer)
    return GameState(
        width=width,
        height=height,
        snake=snake,
        direction=direction,
        queued_direction=direction,
        food=food,
        score=score,
        speed_layer=speed_layer,
        stage=progress.stage,
        tick_ms=progress.tick_ms,
        speed_multiplier=progress.speed_multiplier,
    )


def queue_direction(state: GameState, direction_name: str) -> GameState:
    """Queue a direction change (ignored if unknown or it would reverse the snake)."""
    requested = DIRECTIONS.get(direction_name) if isinstance(direction_name, str) else None
    if requested is None or state.game_over:
        return state
    if requested.is_opposite(state.direction):
        return state
    return replace(state, queued_direction=requested)


def toggle_pause(state: GameState) -> GameState:
    if state.game_over:
        return state
    return replace(state, paused=not state.paused)


def set_speed_layer(state: GameState, speed_layer) -> GameState:
    return _with_progress(state, state.score, normalize_speed_layer(speed_layer))


def restart_game(state: GameState, rng: Rng = random.random) -> GameState:
    """New session on the same board and speed layer; everything else resets."""
    return create_initial_state(
        {"width": state.width, "height": state.height, "speed_layer": state.speed_layer},
        rng,
    )


def tick(state: GameState, rng: Rng = random.random) -> GameState:
    """
    Advance one cell.

    Stage 1 wraps around the board edges; from stage 2 on the walls kill.
    A fatal move returns a game-over state with the snake left where it was.
    """
    if state.game_over or state.paused:
        return state

    # queue_direction already refuses reversals; re-checked for states built by hand
    if state.queued_direction.is_opposite(state.direction):
        direction = state.direction
    else:
        direction = state.queued_direction

    next_head = direction.step(state.head)

    if is_out_of_bounds(next_head, state.width, state.height):
        if state.stage != 1:
            return replace(state, direction=direction, game_over=True)
        next_head = Point(next_head.x % state.width, next_head.y % state.height)

    will_grow = state.food is not None and next_head == state.food
    body = state.snake if will_grow else state.snake[:-1]

    if next_head in body:
        return replace(state, direction=direction, game_over=True)

    snake = (next_head,) + body
    food = random_free_cell(state.width, state.height, snake, rng) if will_grow else state.food
    score = state.score + 1 if will_grow else state.score

    return _with_progress(
        state,
        score,
        state.speed_layer,
        snake=snake,
        direction=direction,
        queued_direction=direction,
        food=food,
    )
