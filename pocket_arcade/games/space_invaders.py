from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict
import pygame
from . import BaseGame, GameState, register_game, INK, OLIVE, OLIVE_DARK, SAGE
from ..systems.rules import get_rules
from ..systems.scoring import ScoreEvent, invaders_score
from ..systems.collision import Cell

logger = logging.getLogger(__name__)

RULES = get_rules("space_invaders").data
GRID_SIZE: int = RULES["grid_size"]
ENEMY_ROWS, ENEMIES_PER_ROW = RULES["formation"]
BULLET_LIMIT: int = RULES["bullet_limit"]
INITIAL_MOVE_INTERVAL: float = RULES["move_interval"]
MIN_MOVE_INTERVAL: float = RULES["min_move_interval"]
SPEED_INCREASE_INTERVAL: float = RULES["speed_increase_interval"]
SPEED_INCREASE_FACTOR: float = RULES["speed_increase_factor"]
CELL_SIZE = 20


def build_formation() -> list[Cell]:
    return [(col * 2 + 2, row + 2) for row in range(ENEMY_ROWS) for col in range(ENEMIES_PER_ROW)]


@dataclass
class InvadersState(GameState):
    player: Cell = RULES["player_start"]
    bullets: list[Cell] = field(default_factory=list)
    enemies: list[Cell] = field(default_factory=build_formation)
    direction: int = 1
    move_interval: float = INITIAL_MOVE_INTERVAL
    wave: int = 1


def move_player(state: InvadersState, dx: int) -> None:
    x, y = state.player
    state.player = (max(0, min(GRID_SIZE - 1, x + dx)), y)


def shoot(state: InvadersState) -> bool:
    if len(state.bullets) >= BULLET_LIMIT:
        return False
    x, y = state.player
    state.bullets.append((x, y - 1))
    return True


def speed_up(state: InvadersState) -> float:
    state.move_interval = max(MIN_MOVE_INTERVAL, state.move_interval * SPEED_INCREASE_FACTOR)
    logger.debug("invaders move interval now %.3fs", state.move_interval)
    return state.move_interval


def new_wave(state: InvadersState) -> None:
    state.enemies = build_formation()
    state.move_interval = INITIAL_MOVE_INTERVAL
    state.wave += 1
    logger.debug("invaders wave %d", state.wave)


def move_bullets(state: InvadersState) -> InvadersState:
    """Bullets climb one row; hits remove both bullet and enemy."""
    bullets = [(x, y - 1) for x, y in state.bullets if y - 1 >= 0]
    struck = set(bullets) & set(state.enemies)
    if struck:
        remaining = [enemy for enemy in state.enemies if enemy not in struck]
        destroyed = len(state.enemies) - len(remaining)
        state.enemies = remaining
        state.score += invaders_score(
            ScoreEvent(enemies_destroyed=destroyed), RULES["enemy_points"], RULES["wave_bonus"]
        )
    state.bullets = [bullet for bullet in bullets if bullet not in struck]
    if not state.enemies:
        new_wave(state)
        state.score += invaders_score(ScoreEvent(waves_cleared=1), RULES["enemy_points"], RULES["wave_bonus"])
    return state


def move_enemies(state: InvadersState, rng) -> InvadersState:
    """Shift the formation as one body, with random per-enemy lurches."""
    if not state.enemies:
        return state
    xs = [x for x, _ in state.enemies]
    lowest = max(y for _, y in state.enemies)
    if lowest >= state.player[1] - 1:
        state.game_over = True
        return state

    direction = state.direction
    step_down = (max(xs) >= GRID_SIZE - 2 and direction == 1) or (min(xs) <= 1 and direction == -1)
    if step_down:
        direction = -direction

    moved = []
    for x, y in state.enemies:
        if step_down:
            nx = x
        else:
            lurch = direction if rng.random() < RULES["lurch_chance"] else 0
            nx = max(1, min(GRID_SIZE - 2, x + direction + lurch))
        ny = y + (1 if step_down else 0) + (1 if rng.random() < RULES["drop_chance"] else 0)
        moved.append((nx, ny))
    state.enemies = moved
    state.direction = direction
    return state


@register_game("space_invaders")
class SpaceInvadersGame(BaseGame):
    key_bindings = {
        pygame.K_LEFT: "left",
        pygame.K_RIGHT: "right",
        pygame.K_SPACE: "shoot",
        pygame.K_p: "pause",
        pygame.K_h: "help",
        pygame.K_r: "restart",
    }
    help_lines = (
        "Left/Right : Move ship",
        "Space : Shoot",
        "They get faster every 10 seconds!",
    )

    state: InvadersState

    def new_state(self) -> InvadersState:
        return InvadersState()

    def tick_intervals(self) -> Dict[str, float]:
        return {
            "bullets": RULES["bullet_interval"],
            "enemies": self.state.move_interval,
            "speed": SPEED_INCREASE_INTERVAL,
        }

    def on_tick(self, key: str) -> None:
        if key == "bullets":
            move_bullets(self.state)
        elif key == "enemies":
            move_enemies(self.state, self.rng)
        elif key == "speed":
            speed_up(self.state)

    def apply_action(self, action: str) -> None:
        if action == "left":
            move_player(self.state, -1)
        elif action == "right":
            move_player(self.state, 1)
        elif action == "shoot":
            shoot(self.state)
        else:
            raise ValueError(f"unknown space invaders action {action!r}")

    def hud_lines(self) -> list[str]:
        return [f"Score: {self.state.score}", f"Wave: {self.state.wave}"]

    def draw_playfield(self) -> pygame.Rect:
        size = GRID_SIZE * CELL_SIZE
        ox, oy = self.playfield_origin(size, size)
        board = pygame.Rect(ox, oy, size, size)
        pygame.draw.rect(self.screen, OLIVE_DARK, board.inflate(8, 8))
        pygame.draw.rect(self.screen, SAGE, board)

        def cell(x: int, y: int) -> pygame.Rect:
            return pygame.Rect(ox + x * CELL_SIZE, oy + y * CELL_SIZE, CELL_SIZE - 1, CELL_SIZE - 1)

        for x, y in self.state.enemies:
            if 0 <= y < GRID_SIZE:
                pygame.draw.rect(self.screen, INK, cell(x, y).inflate(-4, -6), border_radius=4)
        for x, y in self.state.bullets:
            pygame.draw.circle(self.screen, INK, cell(x, y).center, 3)
        px, py = self.state.player
        ship = cell(px, py)
        pygame.draw.polygon(self.screen, INK, [ship.midtop, ship.bottomleft, ship.bottomright])
        pygame.draw.circle(self.screen, OLIVE, ship.center, 2)
        return board
