from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict
import pygame
from . import BaseGame, GameState, register_game, INK, OLIVE_DARK
from ..systems.rules import get_rules
from ..systems.scoring import ScoreEvent, tetris_score
from ..systems.collision import Cell, point_in_grid

logger = logging.getLogger(__name__)

RULES = get_rules("tetris").data
GRID_WIDTH, GRID_HEIGHT = RULES["grid_size"]
INITIAL_DROP_INTERVAL: float = RULES["drop_interval"]
MIN_DROP_INTERVAL: float = RULES["min_drop_interval"]
CELL_SIZE = 25

# Offsets are relative to the pivot cell (0, 0); rotation turns them about it.
TETROMINOES: Dict[str, list[Cell]] = {
    "I": [(0, 0), (0, -1), (0, 1), (0, 2)],
    "O": [(0, 0), (0, 1), (1, 0), (1, 1)],
    "T": [(0, 0), (-1, 0), (1, 0), (0, 1)],
    "S": [(0, 0), (-1, 0), (0, 1), (1, 1)],
    "Z": [(0, 0), (1, 0), (0, 1), (-1, 1)],
    "J": [(0, 0), (0, -1), (0, 1), (-1, 1)],
    "L": [(0, 0), (0, -1), (0, 1), (1, 1)],
}

SHAPE_COLORS = {
    "I": (0, 240, 240),
    "O": (240, 240, 0),
    "T": (160, 0, 240),
    "S": (0, 240, 0),
    "Z": (240, 0, 0),
    "J": (0, 0, 240),
    "L": (240, 160, 0),
}

Grid = list[list[str]]


def empty_grid() -> Grid:
    return [["" for _ in range(GRID_WIDTH)] for _ in range(GRID_HEIGHT)]


@dataclass
class TetrisState(GameState):
    grid: Grid = field(default_factory=empty_grid)
    kind: str = "I"
    piece: list[Cell] = field(default_factory=lambda: list(TETROMINOES["I"]))
    origin: Cell = (GRID_WIDTH // 2, 1)
    level: int = 1
    lines: int = 0
    drop_interval: float = INITIAL_DROP_INTERVAL

    def cells(self) -> list[Cell]:
        ox, oy = self.origin
        return [(ox + x, oy + y) for x, y in self.piece]


def is_valid(grid: Grid, piece: list[Cell], origin: Cell) -> bool:
    ox, oy = origin
    size = (len(grid[0]), len(grid))
    for x, y in piece:
        gx, gy = ox + x, oy + y
        if not point_in_grid((gx, gy), size) or grid[gy][gx]:
            return False
    return True


def rotated(piece: list[Cell]) -> list[Cell]:
    return [(-y, x) for x, y in piece]


def spawn(state: TetrisState, rng) -> None:
    state.kind = rng.choice(list(TETROMINOES))
    state.piece = list(TETROMINOES[state.kind])
    state.origin = (GRID_WIDTH // 2, 1)
    if not is_valid(state.grid, state.piece, state.origin):
        state.game_over = True


def new_game(rng) -> TetrisState:
    state = TetrisState()
    spawn(state, rng)
    return state


def move(state: TetrisState, dx: int, dy: int) -> bool:
    ox, oy = state.origin
    target = (ox + dx, oy + dy)
    if is_valid(state.grid, state.piece, target):
        state.origin = target
        return True
    return False


def rotate(state: TetrisState) -> bool:
    candidate = rotated(state.piece)
    if is_valid(state.grid, candidate, state.origin):
        state.piece = candidate
        return True
    return False


def merge(state: TetrisState) -> None:
    for gx, gy in state.cells():
        # Cells above the top edge are lost
        if gy >= 0:
            state.grid[gy][gx] = state.kind


def clear_lines(state: TetrisState) -> int:
    kept = [row for row in state.grid if not all(row)]
    cleared = len(state.grid) - len(kept)
    if not cleared:
        return 0
    state.grid = [["" for _ in range(GRID_WIDTH)] for _ in range(cleared)] + kept
    state.lines += cleared
    state.score += tetris_score(ScoreEvent(lines_cleared=cleared, level=state.level), RULES["points_per_line"])
    if state.score > state.level * RULES["level_threshold"]:
        state.level += 1
        state.drop_interval = max(MIN_DROP_INTERVAL, state.drop_interval * RULES["speed_factor"])
        logger.debug("tetris level %d, drop interval %.3fs", state.level, state.drop_interval)
    return cleared


def drop(state: TetrisState, rng) -> bool:
    """One row of gravity. Returns False when the piece locked instead of moving."""
    if move(state, 0, 1):
        return True
    merge(state)
    clear_lines(state)
    spawn(state, rng)
    return False


def hard_drop(state: TetrisState, rng) -> None:
    while drop(state, rng):
        pass


@register_game("tetris")
class TetrisGame(BaseGame):
    key_bindings = {
        pygame.K_LEFT: "left",
        pygame.K_RIGHT: "right",
        pygame.K_DOWN: "down",
        pygame.K_UP: "rotate",
        pygame.K_SPACE: "hard_drop",
        pygame.K_p: "pause",
        pygame.K_h: "help",
        pygame.K_r: "restart",
    }
    help_lines = (
        "Left/Right : Move piece",
        "Up : Rotate piece",
        "Down : Move down",
        "Space : Drop piece",
        "Level up every 1000 points!",
    )

    state: TetrisState

    def new_state(self) -> TetrisState:
        return new_game(self.rng)

    def tick_intervals(self) -> Dict[str, float]:
        return {"gravity": self.state.drop_interval}

    def on_tick(self, key: str) -> None:
        drop(self.state, self.rng)

    def apply_action(self, action: str) -> None:
        if action == "left":
            move(self.state, -1, 0)
        elif action == "right":
            move(self.state, 1, 0)
        elif action == "down":
            move(self.state, 0, 1)
        elif action == "rotate":
            rotate(self.state)
        elif action == "hard_drop":
            hard_drop(self.state, self.rng)
        else:
            raise ValueError(f"unknown tetris action {action!r}")

    def hud_lines(self) -> list[str]:
        return [f"Score: {self.state.score}", f"Level: {self.state.level}"]

    def draw_playfield(self) -> pygame.Rect:
        width, height = GRID_WIDTH * CELL_SIZE, GRID_HEIGHT * CELL_SIZE
        ox, oy = self.playfield_origin(width, height)
        board = pygame.Rect(ox, oy, width, height)
        pygame.draw.rect(self.screen, OLIVE_DARK, board.inflate(8, 8))
        pygame.draw.rect(self.screen, INK, board)

        falling = set() if self.state.game_over else set(self.state.cells())
        for y, row in enumerate(self.state.grid):
            for x, label in enumerate(row):
                if (x, y) in falling:
                    label = self.state.kind
                if not label:
                    continue
                pygame.draw.rect(
                    self.screen, SHAPE_COLORS[label],
                    pygame.Rect(ox + x * CELL_SIZE, oy + y * CELL_SIZE, CELL_SIZE - 1, CELL_SIZE - 1),
                )
        return board
