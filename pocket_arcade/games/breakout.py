from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict
import pygame
from . import BaseGame, GameState, register_game, INK, OLIVE
from ..systems.rules import get_rules
from ..systems.scoring import ScoreEvent, breakout_score
from ..systems.collision import point_in_box

logger = logging.getLogger(__name__)

RULES = get_rules("breakout").data
CANVAS_WIDTH, CANVAS_HEIGHT = RULES["canvas"]
PADDLE_WIDTH, PADDLE_HEIGHT = RULES["paddle_size"]
PADDLE_TOP = CANVAS_HEIGHT - PADDLE_HEIGHT - RULES["paddle_margin"]
BALL_SIZE: int = RULES["ball_size"]
BALL_SPEED: float = RULES["ball_speed"]
BRICK_ROWS, BRICK_COLS = RULES["bricks"]
BRICK_HEIGHT: int = RULES["brick_height"]
BRICK_PADDING: int = RULES["brick_padding"]
BRICK_COLORS = [(255, 107, 107), (78, 205, 196), (69, 183, 209), (150, 206, 180), (255, 238, 173)]


@dataclass
class Brick:
    x: float
    y: float
    width: float
    color: tuple[int, int, int]
    visible: bool = True


def build_bricks() -> list[Brick]:
    width = (CANVAS_WIDTH - BRICK_PADDING * (BRICK_COLS + 1)) / BRICK_COLS
    return [
        Brick(
            x=col * (width + BRICK_PADDING) + BRICK_PADDING,
            y=row * (BRICK_HEIGHT + BRICK_PADDING) + BRICK_PADDING + RULES["brick_top"],
            width=width,
            color=BRICK_COLORS[row % len(BRICK_COLORS)],
        )
        for row in range(BRICK_ROWS)
        for col in range(BRICK_COLS)
    ]


@dataclass
class BreakoutState(GameState):
    paddle_x: float = CANVAS_WIDTH / 2 - PADDLE_WIDTH / 2
    ball_x: float = CANVAS_WIDTH / 2
    ball_y: float = CANVAS_HEIGHT - 30
    ball_vx: float = BALL_SPEED
    ball_vy: float = -BALL_SPEED
    bricks: list[Brick] = field(default_factory=build_bricks)
    lives: int = RULES["lives"]
    won: bool = False

    @property
    def bricks_left(self) -> int:
        return sum(1 for brick in self.bricks if brick.visible)


def serve(state: BreakoutState, rng) -> None:
    state.ball_x = CANVAS_WIDTH / 2
    state.ball_y = CANVAS_HEIGHT - 30
    state.ball_vx = BALL_SPEED * (1 if rng.random() > 0.5 else -1)
    state.ball_vy = -BALL_SPEED


def set_paddle(state: BreakoutState, x: float) -> None:
    state.paddle_x = max(0, min(CANVAS_WIDTH - PADDLE_WIDTH, x))


def paddle_deflection(ball_x: float, paddle_x: float) -> float:
    """Horizontal speed after a paddle hit: -SPEED at the left edge, +SPEED at the right."""
    hit_position = (ball_x - paddle_x) / PADDLE_WIDTH
    return BALL_SPEED * (hit_position * 2 - 1)


def _hit_brick(state: BreakoutState) -> bool:
    for brick in state.bricks:
        if not brick.visible:
            continue
        if point_in_box(state.ball_x, state.ball_y, brick.x, brick.y, brick.width, BRICK_HEIGHT):
            brick.visible = False
            state.ball_vy = -state.ball_vy
            state.score += breakout_score(ScoreEvent(bricks_destroyed=1), RULES["brick_points"])
            return True
    return False


def step(state: BreakoutState, rng) -> BreakoutState:
    state.ball_x += state.ball_vx
    state.ball_y += state.ball_vy

    if (state.ball_x <= BALL_SIZE and state.ball_vx < 0) or (
        state.ball_x >= CANVAS_WIDTH - BALL_SIZE and state.ball_vx > 0
    ):
        state.ball_vx = -state.ball_vx
    if state.ball_y <= BALL_SIZE and state.ball_vy < 0:
        state.ball_vy = -state.ball_vy

    on_paddle = (
        state.ball_vy > 0
        and PADDLE_TOP - BALL_SIZE <= state.ball_y <= CANVAS_HEIGHT - BALL_SIZE
        and state.paddle_x <= state.ball_x <= state.paddle_x + PADDLE_WIDTH
    )
    if on_paddle:
        state.ball_vy = -abs(state.ball_vy)
        state.ball_vx = paddle_deflection(state.ball_x, state.paddle_x)
    elif state.ball_y >= CANVAS_HEIGHT - BALL_SIZE:
        state.lives -= 1
        logger.debug("breakout ball lost, %d lives left", state.lives)
        if state.lives <= 0:
            state.lives = 0
            state.game_over = True
            return state
        serve(state, rng)
        return state

    if _hit_brick(state) and state.bricks_left == 0:
        state.won = True
        state.game_over = True
    return state


@register_game("breakout")
class BreakoutGame(BaseGame):
    key_bindings = {
        pygame.K_LEFT: "left",
        pygame.K_RIGHT: "right",
        pygame.K_p: "pause",
        pygame.K_h: "help",
        pygame.K_r: "restart",
    }
    help_lines = ("Mouse or Left/Right : Move paddle", "Break all bricks to win!")

    state: BreakoutState

    def new_state(self) -> BreakoutState:
        return BreakoutState()

    def tick_intervals(self) -> Dict[str, float]:
        return {"frame": RULES["tick_interval"]}

    def on_tick(self, key: str) -> None:
        step(self.state, self.rng)

    def apply_action(self, action: str) -> None:
        if action == "left":
            set_paddle(self.state, self.state.paddle_x - RULES["paddle_step"])
        elif action == "right":
            set_paddle(self.state, self.state.paddle_x + RULES["paddle_step"])
        else:
            raise ValueError(f"unknown breakout action {action!r}")

    def on_pointer(self, x: float, y: float) -> None:
        ox, _ = self.playfield_origin(CANVAS_WIDTH, CANVAS_HEIGHT)
        set_paddle(self.state, x - ox - PADDLE_WIDTH / 2)

    def result_text(self) -> str:
        return "You Won!" if self.state.won else "Game Over!"

    def hud_lines(self) -> list[str]:
        return [f"Score: {self.state.score}", f"Lives: {self.state.lives}"]

    def draw_playfield(self) -> pygame.Rect:
        ox, oy = self.playfield_origin(CANVAS_WIDTH, CANVAS_HEIGHT)
        board = pygame.Rect(ox, oy, CANVAS_WIDTH, CANVAS_HEIGHT)
        pygame.draw.rect(self.screen, INK, board)
        s = self.state
        for brick in s.bricks:
            if brick.visible:
                pygame.draw.rect(self.screen, brick.color, pygame.Rect(ox + brick.x, oy + brick.y, brick.width, BRICK_HEIGHT))
        pygame.draw.rect(self.screen, OLIVE, pygame.Rect(ox + s.paddle_x, oy + PADDLE_TOP, PADDLE_WIDTH, PADDLE_HEIGHT))
        pygame.draw.circle(self.screen, OLIVE, (ox + s.ball_x, oy + s.ball_y), BALL_SIZE)
        return board
