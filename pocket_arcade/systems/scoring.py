from __future__ import annotations
from dataclasses import dataclass

@dataclass
class ScoreEvent:
    lines_cleared: int = 0
    food_eaten: int = 0
    bricks_destroyed: int = 0
    enemies_destroyed: int = 0
    waves_cleared: int = 0
    level: int = 1

def tetris_score(event: ScoreEvent, points_per_line: int = 100) -> int:
    return points_per_line * event.lines_cleared * event.level

def snake_score(event: ScoreEvent, points_per_food: int = 1) -> int:
    return event.food_eaten * points_per_food

def breakout_score(event: ScoreEvent, brick_points: int = 10) -> int:
    return event.bricks_destroyed * brick_points

def invaders_score(event: ScoreEvent, enemy_points: int = 10, wave_bonus: int = 50) -> int:
    return event.enemies_destroyed * enemy_points + event.waves_cleared * wave_bonus
