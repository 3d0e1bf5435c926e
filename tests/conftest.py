"""
Pytest fixtures for Pocket Arcade tests.
"""

import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from pocket_arcade.settings import Settings


class FixedRandom:
    """Stand-in RNG whose ``random()`` always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return seq[0]


@pytest.fixture(scope="session", autouse=True)
def pygame_headless():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def screen() -> pygame.Surface:
    """Off-screen surface large enough for every playfield."""
    return pygame.Surface((960, 720))


@pytest.fixture
def cfg() -> Settings:
    return Settings()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def steady_rng() -> FixedRandom:
    """Never triggers the random lurches or drops."""
    return FixedRandom(0.99)


@pytest.fixture
def press():
    """Build a synthetic KEYDOWN event for a key constant."""

    def make(key: int) -> pygame.event.Event:
        return pygame.event.Event(pygame.KEYDOWN, {"key": key, "mod": 0, "unicode": "", "scancode": 0})

    return make
