"""
Tests for Pong ball physics, paddles and scoring.
"""

import pygame
import pytest

from pocket_arcade.games.pong import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    HIT_SPEEDUP,
    PADDLE_HEIGHT,
    PADDLE_SPEED,
    WINNING_SCORE,
    PongGame,
    PongState,
    move_paddle,
    step,
)

PADDLE_Y = 170.0


def rally_state() -> PongState:
    return PongState(
        left_y=PADDLE_Y, right_y=PADDLE_Y,
        ball_x=20.0, ball_y=200.0, ball_vx=-5.0, ball_vy=1.0,
    )


class TestRally:
    """Tests for paddle hits."""

    @pytest.mark.parametrize("hits", [1, 2, 5])
    def test_speed_grows_per_hit(self, rng, hits):
        state = rally_state()
        initial = state.ball_speed
        for n in range(hits):
            # Park the ball just in front of whichever paddle it is heading for
            state.ball_y = 200.0
            state.ball_x = 20.0 if state.ball_vx < 0 else CANVAS_WIDTH - 20.0
            step(state, rng)
        assert state.ball_speed == pytest.approx(initial * HIT_SPEEDUP ** hits)
        assert state.left_score == state.right_score == 0

    def test_hit_reverses_horizontal_direction(self, rng):
        state = rally_state()
        step(state, rng)
        assert state.ball_vx == pytest.approx(5.0 * HIT_SPEEDUP)
        assert state.ball_vy == pytest.approx(1.0 * HIT_SPEEDUP)

    def test_miss_does_not_speed_up(self, rng):
        state = rally_state()
        state.left_y = 0.0
        step(state, rng)
        assert state.ball_vx == -5.0


class TestWalls:
    """Tests for top and bottom reflection."""

    def test_bounce_off_top(self, rng):
        state = PongState(ball_x=300.0, ball_y=10.0, ball_vx=5.0, ball_vy=-5.0)
        step(state, rng)
        assert state.ball_vy == 5.0

    def test_bounce_off_bottom(self, rng):
        state = PongState(ball_x=300.0, ball_y=CANVAS_HEIGHT - 10.0, ball_vx=5.0, ball_vy=5.0)
        step(state, rng)
        assert state.ball_vy == -5.0


class TestScoring:
    """Tests for points and the winner."""

    def test_left_exit_scores_for_right(self, rng):
        state = PongState(left_y=0.0, ball_x=2.0, ball_y=300.0, ball_vx=-5.0, ball_vy=1.0)
        step(state, rng)
        assert state.right_score == 1
        assert (state.ball_x, state.ball_y) == (CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2)
        assert not state.game_over

    def test_winning_score_ends_game(self, rng):
        state = PongState(
            right_y=0.0, left_score=WINNING_SCORE - 1,
            ball_x=CANVAS_WIDTH - 2.0, ball_y=300.0, ball_vx=5.0, ball_vy=1.0,
        )
        step(state, rng)
        assert state.left_score == WINNING_SCORE
        assert state.game_over
        assert state.winner == "left"


class TestPaddles:
    """Tests for paddle movement."""

    def test_paddles_are_clamped(self):
        state = PongState(left_y=3.0, right_y=CANVAS_HEIGHT - PADDLE_HEIGHT - 3.0)
        move_paddle(state, "left", -PADDLE_SPEED)
        move_paddle(state, "right", PADDLE_SPEED)
        assert state.left_y == 0
        assert state.right_y == CANVAS_HEIGHT - PADDLE_HEIGHT

    def test_unknown_paddle(self):
        with pytest.raises(ValueError):
            move_paddle(PongState(), "middle", 1)

    def test_keys_move_paddles(self, screen, cfg, rng, press):
        game = PongGame(screen, cfg, rng=rng)
        game.start()
        start = game.state.left_y
        game.handle_event(press(pygame.K_w))
        game.handle_event(press(pygame.K_DOWN))
        assert game.state.left_y == start - PADDLE_SPEED
        assert game.state.right_y == start + PADDLE_SPEED
