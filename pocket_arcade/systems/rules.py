from dataclasses import dataclass, field
from typing import Dict, Any

@dataclass
class GameRuleSet:
    name: str
    data: Dict[str, Any] = field(default_factory=dict)

# Intervals are in seconds, distances in grid cells or pixels.
DEFAULT_RULES = {
    "snake": GameRuleSet(
        name="snake",
        data={
            "grid_size": 20,
            "tick_interval": 0.1,
            "start": (10, 10),
            "first_food": (15, 15),
            "points_per_food": 1,
        },
    ),
    "tetris": GameRuleSet(
        name="tetris",
        data={
            "grid_size": (10, 20),
            "drop_interval": 1.0,
            "min_drop_interval": 0.1,
            "speed_factor": 0.8,
            "points_per_line": 100,
            "level_threshold": 1000,
        },
    ),
    "pong": GameRuleSet(
        name="pong",
        data={
            "canvas": (600, 400),
            "paddle_size": (10, 60),
            "ball_size": 8,
            "ball_speed": 5,
            "paddle_speed": 8,
            "hit_speedup": 1.1,
            "winning_score": 5,
            "tick_interval": 1 / 60,
        },
    ),
    "breakout": GameRuleSet(
        name="breakout",
        data={
            "canvas": (480, 360),
            "paddle_size": (75, 10),
            "paddle_margin": 10,
            "paddle_step": 20,
            "ball_size": 8,
            "ball_speed": 4,
            "bricks": (5, 8),
            "brick_height": 20,
            "brick_padding": 4,
            "brick_top": 30,
            "brick_points": 10,
            "lives": 3,
            "tick_interval": 1 / 60,
        },
    ),
    "space_invaders": GameRuleSet(
        name="space_invaders",
        data={
            "grid_size": 20,
            "player_start": (10, 18),
            "formation": (3, 8),
            "bullet_limit": 3,
            "bullet_interval": 0.05,
            "move_interval": 0.8,
            "min_move_interval": 0.2,
            "speed_increase_interval": 10.0,
            "speed_increase_factor": 0.9,
            "enemy_points": 10,
            "wave_bonus": 50,
            "lurch_chance": 0.1,
            "drop_chance": 0.05,
        },
    ),
}

def get_rules(game: str) -> GameRuleSet:
    return DEFAULT_RULES.get(game, GameRuleSet(name=game))
