"""
Tests for Snake movement, steering, food and collisions.
"""

import pygame

from pocket_arcade.games.snake import GRID_SIZE, SnakeGame, SnakeState, place_food, step, turn


class TestSteering:
    """Tests for direction changes."""

    def test_direct_reversal_is_ignored(self):
        state = SnakeState()
        assert not turn(state, "LEFT")
        assert state.direction == "RIGHT"

    def test_perpendicular_turn_is_accepted(self):
        state = SnakeState()
        assert turn(state, "UP")
        assert state.direction == "UP"

    def test_quick_double_turn_cannot_reverse(self):
        """UP then LEFT inside one tick is still a reversal of the last move."""
        state = SnakeState()
        turn(state, "UP")
        assert not turn(state, "LEFT")
        assert state.direction == "UP"


class TestStep:
    """Tests for a single tick."""

    def test_moves_one_cell(self, rng):
        state = SnakeState()
        step(state, rng)
        assert state.body == [(11, 10)]
        assert state.heading == "RIGHT"

    def test_eating_grows_and_scores(self, rng):
        state = SnakeState(body=[(10, 10)], food=(11, 10))
        step(state, rng)
        assert state.body == [(11, 10), (10, 10)]
        assert state.score == 1
        assert state.food not in state.body

    def test_wall_ends_game(self, rng):
        state = SnakeState(body=[(GRID_SIZE - 1, 5)])
        step(state, rng)
        assert state.game_over
        assert state.body == [(GRID_SIZE - 1, 5)]

    def test_body_collision_ends_game(self, rng):
        state = SnakeState(
            body=[(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)],
            direction="DOWN",
            heading="LEFT",
        )
        step(state, rng)
        assert state.game_over

    def test_food_never_lands_on_body(self, rng):
        state = SnakeState(body=[(x, 0) for x in range(GRID_SIZE)])
        for _ in range(50):
            place_food(state, rng)
            assert state.food not in state.body

    def test_full_board_leaves_no_food(self, rng):
        state = SnakeState(body=[(x, y) for y in range(GRID_SIZE) for x in range(GRID_SIZE)])
        place_food(state, rng)
        assert state.food is None


class TestSnakeGame:
    """Tests for Snake through the game scaffold."""

    def test_tick_and_keys(self, screen, cfg, rng, press):
        game = SnakeGame(screen, cfg, rng=rng)
        game.start()
        game.handle_event(press(pygame.K_DOWN))
        game.update(0.1)
        assert game.state.head == (10, 11)

    def test_space_pauses(self, screen, cfg, rng, press):
        game = SnakeGame(screen, cfg, rng=rng)
        game.start()
        game.handle_event(press(pygame.K_SPACE))
        game.update(1.0)
        assert game.state.head == (10, 10)
        game.handle_event(press(pygame.K_SPACE))
        game.update(0.1)
        assert game.state.head == (11, 10)
