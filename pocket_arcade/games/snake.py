from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional
import pygame
from . import BaseGame, GameState, register_game, INK, OLIVE, OLIVE_DARK, SAGE
from ..systems.rules import get_rules
from ..systems.scoring import ScoreEvent, snake_score
from ..systems.collision import Cell, point_in_grid

RULES = get_rules("snake").data
GRID_SIZE: int = RULES["grid_size"]
CELL_SIZE = 20

DIRECTIONS: Dict[str, Cell] = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}
OPPOSITE = {"UP": "DOWN", "DOWN": "UP", "LEFT": "RIGHT", "RIGHT": "LEFT"}


@dataclass
class SnakeState(GameState):
    body: list[Cell] = field(default_factory=lambda: [RULES["start"]])
    food: Optional[Cell] = RULES["first_food"]
    # direction is what the next tick will use; heading is what the last tick used
    direction: str = "RIGHT"
    heading: str = "RIGHT"

    @property
    def head(self) -> Cell:
        return self.body[0]


def turn(state: SnakeState, direction: str) -> bool:
    """Queue a new direction; a direct reversal of the heading is refused."""
    if direction not in DIRECTIONS:
        raise ValueError(f"unknown direction {direction!r}")
    if direction == OPPOSITE[state.heading]:
        return False
    state.direction = direction
    return True


def place_food(state: SnakeState, rng) -> None:
    occupied = set(state.body)
    free = [(x, y) for x in range(GRID_SIZE) for y in range(GRID_SIZE) if (x, y) not in occupied]
    state.food = rng.choice(free) if free else None


def step(state: SnakeState, rng) -> SnakeState:
    """Advance the snake one cell, resolving walls, self-collision and food."""
    hx, hy = state.head
    dx, dy = DIRECTIONS[state.direction]
    new_head = (hx + dx, hy + dy)
    if not point_in_grid(new_head, (GRID_SIZE, GRID_SIZE)) or new_head in state.body[1:]:
        state.game_over = True
        return state

    state.heading = state.direction
    ate = new_head == state.food
    state.body.insert(0, new_head)
    if ate:
        state.score += snake_score(ScoreEvent(food_eaten=1), RULES["points_per_food"])
        place_food(state, rng)
    else:
        state.body.pop()
    return state


@register_game("snake")
class SnakeGame(BaseGame):
    key_bindings = {
        pygame.K_UP: "UP",
        pygame.K_DOWN: "DOWN",
        pygame.K_LEFT: "LEFT",
        pygame.K_RIGHT: "RIGHT",
        pygame.K_SPACE: "pause",
        pygame.K_p: "pause",
        pygame.K_h: "help",
        pygame.K_r: "restart",
    }
    help_lines = ("Arrows : Move snake", "Space : Pause game", "Collect food to grow longer!")

    state: SnakeState

    def new_state(self) -> SnakeState:
        return SnakeState()

    def tick_intervals(self) -> Dict[str, float]:
        return {"move": RULES["tick_interval"]}

    def on_tick(self, key: str) -> None:
        step(self.state, self.rng)

    def apply_action(self, action: str) -> None:
        turn(self.state, action)

    def draw_playfield(self) -> pygame.Rect:
        size = GRID_SIZE * CELL_SIZE
        ox, oy = self.playfield_origin(size, size)
        board = pygame.Rect(ox, oy, size, size)
        pygame.draw.rect(self.screen, OLIVE_DARK, board.inflate(8, 8))
        pygame.draw.rect(self.screen, SAGE, board)

        body = set(self.state.body)
        for gx, gy in body:
            cell = pygame.Rect(ox + gx * CELL_SIZE, oy + gy * CELL_SIZE, CELL_SIZE - 1, CELL_SIZE - 1)
            pygame.draw.rect(self.screen, INK, cell, border_radius=3)
        hx, hy = self.state.head
        head = pygame.Rect(ox + hx * CELL_SIZE, oy + hy * CELL_SIZE, CELL_SIZE - 1, CELL_SIZE - 1)
        pygame.draw.rect(self.screen, INK, head, border_radius=8)
        pygame.draw.circle(self.screen, OLIVE, head.center, CELL_SIZE // 5)

        if self.state.food is not None:
            fx, fy = self.state.food
            center = (ox + fx * CELL_SIZE + CELL_SIZE // 2, oy + fy * CELL_SIZE + CELL_SIZE // 2)
            pygame.draw.circle(self.screen, INK, center, CELL_SIZE // 3)
        return board
