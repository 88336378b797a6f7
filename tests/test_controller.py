import pygame
import pytest

from stagesnake.config import (
    CELL, FOOD_COL, PAUSE_COL, SNAKE_COL,
    STATUS_OVER, STATUS_PAUSED, STATUS_RUNNING,
)
from stagesnake.controller import GameController, action_for_key
from stagesnake.model import Direction, create_initial_state
from stagesnake.session import GameSession
from stagesnake.view import STATUS_BADGES, window_size


@pytest.fixture
def controller(scripted_rng):
    state = create_initial_state({"width": 10, "height": 8}, scripted_rng(0.0))
    ctrl = GameController(GameSession(state=state, rng=scripted_rng(0.0)))
    yield ctrl
    pygame.quit()


@pytest.mark.parametrize(
    "key, action",
    [
        (pygame.K_UP, "up"),
        (pygame.K_a, "left"),
        (pygame.K_s, "down"),
        (pygame.K_RIGHT, "right"),
        (pygame.K_SPACE, "pause"),
        (pygame.K_r, "restart"),
        (pygame.K_F1, None),
    ],
)
def test_action_for_key(key, action):
    assert action_for_key(key) == action


def test_window_is_sized_for_the_board(controller):
    assert controller.view.screen.get_size() == window_size(10, 8)


def test_keys_drive_the_session(controller):
    controller.handle_key(pygame.K_w)
    assert controller.session.state.queued_direction == Direction.UP

    controller.handle_key(pygame.K_3)
    assert controller.session.state.speed_layer == 1.5

    controller.handle_key(pygame.K_TAB)
    assert controller.session.state.speed_layer == 1.75

    controller.handle_key(pygame.K_p)
    assert controller.session.state.paused is True


def test_quit_key_exits(controller):
    with pytest.raises(SystemExit):
        controller.handle_key(pygame.K_q)


def _pixel(view, point):
    return tuple(view.screen.get_at(point))[:3]


def _cell_center(view, x, y):
    ox, oy = view.origin
    return ox + x * CELL + CELL // 2, oy + y * CELL + CELL // 2


def test_render_every_status(controller):
    view = controller.view
    state = controller.session.state
    assert state.food == (0, 0)
    food_px = _cell_center(view, 0, 0)

    view.render(state, 0)
    assert _pixel(view, food_px) == FOOD_COL
    assert _pixel(view, view.badge_pos) == STATUS_BADGES[STATUS_RUNNING][1]

    controller.handle_key(pygame.K_SPACE)
    view.render(controller.session.state, 3)
    assert _pixel(view, view.badge_pos) == STATUS_BADGES[STATUS_PAUSED][1]
    # board is dimmed under the pause overlay
    assert _pixel(view, food_px) != FOOD_COL

    over = create_initial_state({
        "width": 10,
        "height": 8,
        "snake": [(9, 1), (8, 1)],
        "direction": Direction.RIGHT,
        "food": (0, 0),
        "score": 5,
    })
    session = GameSession(state=over)
    session.update(1000)
    assert session.state.game_over
    view.render(session.state, session.best_score)
    assert _pixel(view, view.badge_pos) == STATUS_BADGES[STATUS_OVER][1]
    assert _pixel(view, food_px) != FOOD_COL


def test_status_badges_use_distinct_colours():
    colours = [STATUS_BADGES[s][1] for s in (STATUS_RUNNING, STATUS_PAUSED, STATUS_OVER)]
    assert colours == [SNAKE_COL, PAUSE_COL, FOOD_COL]
