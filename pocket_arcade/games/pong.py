from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Optional
import pygame
from . import BaseGame, GameState, register_game, INK, OLIVE
from ..systems.rules import get_rules

logger = logging.getLogger(__name__)

RULES = get_rules("pong").data
CANVAS_WIDTH, CANVAS_HEIGHT = RULES["canvas"]
PADDLE_WIDTH, PADDLE_HEIGHT = RULES["paddle_size"]
BALL_SIZE: int = RULES["ball_size"]
BALL_SPEED: float = RULES["ball_speed"]
PADDLE_SPEED: int = RULES["paddle_speed"]
HIT_SPEEDUP: float = RULES["hit_speedup"]
WINNING_SCORE: int = RULES["winning_score"]

PADDLE_START = CANVAS_HEIGHT / 2 - PADDLE_HEIGHT / 2


@dataclass
class PongState(GameState):
    left_y: float = PADDLE_START
    right_y: float = PADDLE_START
    ball_x: float = CANVAS_WIDTH / 2
    ball_y: float = CANVAS_HEIGHT / 2
    ball_vx: float = BALL_SPEED
    ball_vy: float = BALL_SPEED
    left_score: int = 0
    right_score: int = 0
    winner: Optional[str] = None

    @property
    def ball_speed(self) -> float:
        return (self.ball_vx ** 2 + self.ball_vy ** 2) ** 0.5


def serve(state: PongState, rng) -> None:
    state.ball_x = CANVAS_WIDTH / 2
    state.ball_y = CANVAS_HEIGHT / 2
    state.ball_vx = BALL_SPEED * (1 if rng.random() > 0.5 else -1)
    state.ball_vy = BALL_SPEED * (1 if rng.random() > 0.5 else -1)


def move_paddle(state: PongState, side: str, dy: float) -> None:
    if side not in ("left", "right"):
        raise ValueError(f"unknown paddle {side!r}")
    attr = f"{side}_y"
    y = getattr(state, attr) + dy
    setattr(state, attr, max(0, min(CANVAS_HEIGHT - PADDLE_HEIGHT, y)))


def _paddle_hit(state: PongState) -> bool:
    y = state.ball_y
    if state.ball_vx < 0 and state.ball_x <= PADDLE_WIDTH + BALL_SIZE:
        return state.left_y <= y <= state.left_y + PADDLE_HEIGHT
    if state.ball_vx > 0 and state.ball_x >= CANVAS_WIDTH - PADDLE_WIDTH - BALL_SIZE:
        return state.right_y <= y <= state.right_y + PADDLE_HEIGHT
    return False


def _point(state: PongState, side: str, rng) -> None:
    total = getattr(state, f"{side}_score") + 1
    setattr(state, f"{side}_score", total)
    logger.debug("pong point to %s, now %d", side, total)
    if total >= WINNING_SCORE:
        state.game_over = True
        state.winner = side
        return
    serve(state, rng)


def step(state: PongState, rng) -> PongState:
    state.ball_x += state.ball_vx
    state.ball_y += state.ball_vy

    # Only reflect while heading into a wall, so the ball cannot stick to it
    if (state.ball_y <= BALL_SIZE and state.ball_vy < 0) or (
        state.ball_y >= CANVAS_HEIGHT - BALL_SIZE and state.ball_vy > 0
    ):
        state.ball_vy = -state.ball_vy

    if _paddle_hit(state):
        state.ball_vx = -state.ball_vx * HIT_SPEEDUP
        state.ball_vy = state.ball_vy * HIT_SPEEDUP
    elif state.ball_x <= 0:
        _point(state, "right", rng)
    elif state.ball_x >= CANVAS_WIDTH:
        _point(state, "left", rng)
    state.score = state.left_score + state.right_score
    return state


@register_game("pong")
class PongGame(BaseGame):
    key_bindings = {
        pygame.K_w: "left_up",
        pygame.K_s: "left_down",
        pygame.K_UP: "right_up",
        pygame.K_DOWN: "right_down",
        pygame.K_p: "pause",
        pygame.K_h: "help",
        pygame.K_r: "restart",
    }
    help_lines = (
        "W/S : Move left paddle",
        "Up/Down : Move right paddle",
        f"First to {WINNING_SCORE} points wins!",
    )

    state: PongState

    def new_state(self) -> PongState:
        state = PongState()
        serve(state, self.rng)
        return state

    def tick_intervals(self) -> Dict[str, float]:
        return {"frame": RULES["tick_interval"]}

    def on_tick(self, key: str) -> None:
        step(self.state, self.rng)

    def apply_action(self, action: str) -> None:
        side, _, way = action.partition("_")
        if way not in ("up", "down"):
            raise ValueError(f"unknown pong action {action!r}")
        move_paddle(self.state, side, -PADDLE_SPEED if way == "up" else PADDLE_SPEED)

    def result_text(self) -> str:
        return f"{(self.state.winner or 'nobody').title()} Player Wins!"

    def hud_lines(self) -> list[str]:
        return [f"Left: {self.state.left_score}", f"Right: {self.state.right_score}"]

    def draw_playfield(self) -> pygame.Rect:
        ox, oy = self.playfield_origin(CANVAS_WIDTH, CANVAS_HEIGHT)
        board = pygame.Rect(ox, oy, CANVAS_WIDTH, CANVAS_HEIGHT)
        pygame.draw.rect(self.screen, INK, board)

        # Dashed centre line
        cx = ox + CANVAS_WIDTH // 2
        for y in range(oy, oy + CANVAS_HEIGHT, 20):
            pygame.draw.line(self.screen, OLIVE, (cx, y), (cx, y + 5))

        s = self.state
        pygame.draw.rect(self.screen, OLIVE, pygame.Rect(ox, oy + s.left_y, PADDLE_WIDTH, PADDLE_HEIGHT))
        pygame.draw.rect(
            self.screen, OLIVE,
            pygame.Rect(ox + CANVAS_WIDTH - PADDLE_WIDTH, oy + s.right_y, PADDLE_WIDTH, PADDLE_HEIGHT),
        )
        pygame.draw.circle(self.screen, OLIVE, (ox + s.ball_x, oy + s.ball_y), BALL_SIZE)

        big = self.font(48)
        left = big.render(str(s.left_score), True, OLIVE)
        right = big.render(str(s.right_score), True, OLIVE)
        self.screen.blit(left, (ox + CANVAS_WIDTH // 4, oy + 20))
        self.screen.blit(right, (ox + CANVAS_WIDTH * 3 // 4, oy + 20))
        return board
