import json

import pytest

from stagesnake.config import SPEED_LAYERS, STATUS_OVER, STATUS_PAUSED, STATUS_RUNNING
from stagesnake.model import Direction, create_initial_state
from stagesnake.session import GameSession
from stagesnake.storage import BestScoreStore


@pytest.fixture
def session(scripted_rng):
    state = create_initial_state({
        "width": 8,
        "height": 8,
        "snake": [(2, 2), (1, 2), (0, 2)],
        "direction": Direction.RIGHT,
        "food": (7, 7),
    })
    return GameSession(state=state, rng=scripted_rng(0.0))


def test_ticks_only_once_the_interval_has_elapsed(session):
    assert session.update(139) == 0
    assert session.state.snake[0] == (2, 2)
    assert session.update(1) == 1
    assert session.state.snake[0] == (3, 2)
    assert session.elapsed_ms == 0


def test_long_frame_takes_a_single_step(session):
    assert session.update(3000) == 1
    assert session.state.snake[0] == (3, 2)
    assert session.elapsed_ms == 0
    assert session.update(139) == 0
    assert session.update(1) == 1
    assert session.state.snake[0] == (4, 2)


def test_schedule_uses_the_interval_of_the_latest_state(scripted_rng):
    state = create_initial_state({
        "width": 8,
        "height": 8,
        "snake": [(2, 2), (1, 2), (0, 2)],
        "direction": Direction.RIGHT,
        "food": (3, 2),
        "score": 4,
    })
    session = GameSession(state=state, rng=scripted_rng(0.0))
    assert session.update(140) == 1
    assert session.state.stage == 2
    assert session.state.tick_ms == 130
    assert session.update(129) == 0
    assert session.update(1) == 1


def test_paused_session_does_not_advance(session):
    session.apply("pause")
    assert session.status == STATUS_PAUSED
    assert session.update(1000) == 0
    assert session.elapsed_ms == 0
    session.apply("pause")
    assert session.status == STATUS_RUNNING
    assert session.update(140) == 1


def test_game_over_stops_the_clock():
    state = create_initial_state({
        "width": 4,
        "height": 4,
        "snake": [(3, 1), (2, 1), (1, 1)],
        "direction": Direction.RIGHT,
        "food": (0, 0),
        "score": 5,
    })
    session = GameSession(state=state)
    assert session.update(10_000) == 1
    assert session.status == STATUS_OVER
    assert session.elapsed_ms == 0
    assert session.update(10_000) == 0


def test_apply_routes_actions(session):
    session.apply("down")
    assert session.state.queued_direction == Direction.DOWN
    session.apply("sideways")
    assert session.state.queued_direction == Direction.DOWN

    session.update(100)
    session.apply("restart")
    assert session.elapsed_ms == 0
    assert session.state.direction == Direction.RIGHT
    assert session.state.score == 0


def test_restart_keeps_speed_layer(session):
    session.select_speed_layer(1.75)
    session.apply("restart")
    assert session.state.speed_layer == 1.75
    assert (session.state.width, session.state.height) == (8, 8)


def test_cycle_speed_layer_wraps(session):
    seen = []
    for _ in range(len(SPEED_LAYERS)):
        session.cycle_speed_layer()
        seen.append(session.state.speed_layer)
    assert seen == list(SPEED_LAYERS[1:]) + [SPEED_LAYERS[0]]


def test_best_score_tracks_the_highest_score(scripted_rng):
    state = create_initial_state({
        "width": 8,
        "height": 8,
        "snake": [(2, 2), (1, 2), (0, 2)],
        "direction": Direction.RIGHT,
        "food": (3, 2),
    })
    session = GameSession(state=state, rng=scripted_rng(0.0))
    session.update(140)
    assert session.best_score == 1
    session.apply("restart")
    session.update(140)
    assert session.state.score == 0
    assert session.best_score == 1


def test_best_score_is_persisted_through_the_store(best_score_path, scripted_rng):
    state = create_initial_state({
        "width": 8,
        "height": 8,
        "snake": [(2, 2), (1, 2), (0, 2)],
        "direction": Direction.RIGHT,
        "food": (3, 2),
    })
    session = GameSession(state=state, store=BestScoreStore(best_score_path), rng=scripted_rng(0.0))
    assert session.best_score == 0
    session.update(140)
    assert session.best_score == 1
    with open(best_score_path, encoding="utf-8") as fh:
        assert json.load(fh) == {"best_score": 1}

    again = GameSession(state=state, store=BestScoreStore(best_score_path))
    assert again.best_score == 1
