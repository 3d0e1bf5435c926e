from __future__ import annotations
from typing import Tuple

Cell = Tuple[int, int]

def point_in_grid(point: Cell, grid_size: Tuple[int, int]) -> bool:
    x, y = point
    width, height = grid_size
    return 0 <= x < width and 0 <= y < height

def point_in_box(x: float, y: float, left: float, top: float, width: float, height: float) -> bool:
    """Inclusive on every edge, so a ball exactly on a brick border still hits."""
    return left <= x <= left + width and top <= y <= top + height
