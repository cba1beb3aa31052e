from __future__ import annotations

import random

import pytest

from helpers import PADDLE_WIDTH, PADDLE_Y, PLAY_HEIGHT, PLAY_WIDTH, park, tick
from models import Difficulty
from session import GameSession, TickResult


def test_new_session_state(rng: random.Random) -> None:
    s = GameSession(Difficulty.HARD.profile, PLAY_WIDTH, PADDLE_WIDTH, rng=rng)
    assert len(s.entities) == 5
    assert s.paddle_x == (PLAY_WIDTH - PADDLE_WIDTH) // 2
    assert (s.score, s.lives, s.ended) == (0, 3, False)
    for entity in s.entities:
        assert 0 <= entity.x < PLAY_WIDTH - entity.size
        assert -200 <= entity.y < 0
        assert 3 <= entity.speed <= 6


@pytest.mark.parametrize(
    "play_width, paddle_width, lives",
    [(20, 10, 3), (400, 0, 3), (400, 401, 3), (400, 60, 0)],
)
def test_invalid_geometry_fails_fast(play_width: int, paddle_width: int, lives: int) -> None:
    with pytest.raises(ValueError):
        GameSession(Difficulty.EASY.profile, play_width, paddle_width, lives=lives)


def test_move_paddle_clamps_to_play_area(session: GameSession) -> None:
    session.move_paddle(-1000)
    assert session.paddle_x == 0
    session.move_paddle(40)
    assert session.paddle_x == 40
    session.move_paddle(1000)
    assert session.paddle_x == PLAY_WIDTH - PADDLE_WIDTH


def test_quiet_tick_only_moves_entities(session: GameSession) -> None:
    before = [(e.x, e.y, e.speed) for e in session.entities]

    result = tick(session)

    assert result == TickResult()
    assert (session.score, session.lives) == (0, 3)
    for (x, y, speed), entity in zip(before, session.entities):
        assert (entity.x, entity.y) == (x, y + speed)


def test_catch_increments_score_and_respawns(session: GameSession) -> None:
    entity = session.entities[0]
    entity.x, entity.y, entity.speed = 180, 428, 2  # bottom edge reaches the paddle top

    result = tick(session)

    assert result.caught == 1
    assert session.score == 1
    assert entity.y < 0


@pytest.mark.parametrize("x, caught", [(149, False), (150, True), (230, True), (231, False)])
def test_catch_uses_bounding_square_edges(session: GameSession, x: int, caught: bool) -> None:
    # Paddle spans 170..230.
    entity = session.entities[0]
    entity.x, entity.y, entity.speed = x, 440, 2

    result = tick(session)

    assert result.caught == (1 if caught else 0)
    assert session.score == (1 if caught else 0)


def test_paddle_height_plays_no_part_in_catches(session: GameSession) -> None:
    entity = session.entities[0]
    entity.x, entity.y, entity.speed = 180, 440, 2

    result = session.tick(PADDLE_Y, 1, PLAY_HEIGHT)

    assert result.caught == 1


def test_catch_wins_over_miss_in_the_same_tick(session: GameSession) -> None:
    entity = session.entities[0]
    entity.x, entity.y, entity.speed = 180, PLAY_HEIGHT, 5

    result = tick(session)

    assert (result.caught, result.missed) == (1, 0)
    assert (session.score, session.lives) == (1, 3)


def test_miss_costs_a_life_and_respawns(session: GameSession) -> None:
    entity = session.entities[0]
    entity.x, entity.y, entity.speed = 0, PLAY_HEIGHT - 2, 3

    result = tick(session)

    assert result.missed == 1
    assert session.lives == 2
    assert not session.ended
    assert entity.y < 0


def test_entity_exactly_at_bottom_is_not_missed(session: GameSession) -> None:
    entity = session.entities[0]
    entity.x, entity.y, entity.speed = 0, PLAY_HEIGHT - 3, 3

    assert tick(session).missed == 0
    assert session.lives == 3


def test_three_misses_end_the_game_once(session: GameSession) -> None:
    session.score = 7
    results = []
    for _ in range(3):
        entity = session.entities[0]
        entity.x, entity.y, entity.speed = 0, PLAY_HEIGHT, 1
        results.append(tick(session))
        park(entity)

    assert [r.ended for r in results] == [False, False, True]
    assert results[-1].final_score == 7
    assert (session.lives, session.ended) == (0, True)

    assert tick(session) == TickResult()


def test_several_misses_in_one_tick_stop_at_zero_lives(session: GameSession) -> None:
    session.lives = 1
    for entity in session.entities:
        entity.x, entity.y, entity.speed = 0, PLAY_HEIGHT, 1
    untouched = session.entities[-1]

    result = tick(session)

    assert result.ended
    assert result.missed == 1
    assert session.lives == 0
    assert untouched.y == PLAY_HEIGHT


def test_ended_session_ignores_input_and_ticks(session: GameSession) -> None:
    session.lives = 1
    entity = session.entities[0]
    entity.x, entity.y, entity.speed = 0, PLAY_HEIGHT, 1
    assert tick(session).ended

    paddle_x = session.paddle_x
    session.move_paddle(40)
    positions = [(e.x, e.y) for e in session.entities]
    for _ in range(5):
        assert tick(session) == TickResult()

    assert session.paddle_x == paddle_x
    assert [(e.x, e.y) for e in session.entities] == positions
    assert (session.score, session.lives) == (0, 0)


def test_long_random_run_keeps_invariants() -> None:
    s = GameSession(Difficulty.HARD.profile, PLAY_WIDTH, PADDLE_WIDTH, rng=random.Random(5))
    ended_signals = 0
    for i in range(5000):
        s.move_paddle(40 if i % 7 < 3 else -40)
        result = tick(s)
        ended_signals += int(result.ended)
        assert s.lives >= 0
        assert s.ended == (s.lives <= 0)
        assert 0 <= s.paddle_x <= PLAY_WIDTH - PADDLE_WIDTH
    assert ended_signals == 1
