from __future__ import annotations
import copy
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Type
import pygame
from ..settings import Settings
from ..systems.ticker import Ticker

logger = logging.getLogger(__name__)

# Palette shared by every playfield
INK = (42, 42, 42)
OLIVE = (135, 147, 114)
OLIVE_DARK = (98, 107, 81)
SAGE = (168, 177, 138)

# Actions every game understands; the scaffold handles them itself
COMMON_ACTIONS = ("pause", "help", "restart")


class Phase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class UnknownGameError(KeyError):
    """Raised when a game key has no registered implementation."""


@dataclass
class GameState:
    score: int = 0
    paused: bool = False
    show_help: bool = False
    game_over: bool = False


class BaseGame:
    """Tick/input/render scaffold shared by every game.

    Subclasses supply the rules: ``new_state`` builds a fresh state,
    ``tick_intervals`` names the timers and their current periods,
    ``on_tick`` advances the state for a fired timer and ``apply_action``
    handles a game-specific input action.
    """

    name: str = "base"
    key_bindings: Dict[int, str] = {}
    help_lines: tuple[str, ...] = ()

    def __init__(self, screen: pygame.Surface, cfg: Settings, rng: random.Random | None = None):
        self.screen = screen
        self.cfg = cfg
        self.rng = rng or random.Random()
        self.active = False
        self.state: GameState = self.new_state()
        self.tickers: Dict[str, Ticker] = {}
        self._fonts: Dict[int, pygame.font.Font] = {}

    # ----- lifecycle -----
    def start(self) -> None:
        self.active = True
        self.reset()
        logger.info("%s started", self.name)

    def stop(self) -> None:
        if not self.active:
            return
        self.active = False
        self.tickers.clear()
        logger.info("%s stopped with score %d", self.name, self.state.score)

    def reset(self) -> None:
        self.state = self.new_state()
        self.tickers = {key: Ticker(interval) for key, interval in self.tick_intervals().items()}
        logger.debug("%s reset", self.name)

    def __enter__(self) -> "BaseGame":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    @property
    def phase(self) -> Phase:
        if not self.active:
            return Phase.IDLE
        if self.state.game_over:
            return Phase.OVER
        if self.state.paused:
            return Phase.PAUSED
        return Phase.RUNNING

    def snapshot(self) -> GameState:
        return copy.deepcopy(self.state)

    # ----- rules (per game) -----
    def new_state(self) -> GameState:
        raise NotImplementedError

    def tick_intervals(self) -> Dict[str, float]:
        raise NotImplementedError

    def on_tick(self, key: str) -> None:
        raise NotImplementedError

    def apply_action(self, action: str) -> None:
        ...

    def on_pointer(self, x: float, y: float) -> None:
        ...

    # ----- input -----
    def handle_event(self, event: pygame.event.Event) -> None:
        if not self.active:
            return
        if event.type == pygame.KEYDOWN:
            action = self.key_bindings.get(event.key)
            if action is None:
                logger.debug("%s ignored key %s", self.name, pygame.key.name(event.key))
                return
            self.dispatch(action)
        elif event.type == pygame.MOUSEMOTION:
            if self.phase is Phase.RUNNING:
                self.on_pointer(*event.pos)

    def dispatch(self, action: str) -> None:
        state = self.state
        if action == "help":
            state.show_help = not state.show_help
            return
        if state.game_over:
            if action == "restart":
                self.reset()
                logger.info("%s restarted", self.name)
            return
        if action == "pause":
            state.paused = not state.paused
            return
        if state.paused or action == "restart":
            return
        self.apply_action(action)
        if state.game_over:
            self.announce_game_over()

    # ----- ticking -----
    def update(self, dt: float) -> None:
        if self.phase is not Phase.RUNNING:
            return
        intervals = self.tick_intervals()
        for key, ticker in self.tickers.items():
            ticker.interval = intervals[key]
            if ticker.advance(dt):
                self.on_tick(key)
                if self.state.game_over:
                    self.announce_game_over()
                    return

    def announce_game_over(self) -> None:
        logger.info("%s over: %s", self.name, self.result_text())

    def result_text(self) -> str:
        return f"Game Over! Score: {self.state.score}"

    # ----- rendering -----
    def font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont("consolas", size)
        return self._fonts[size]

    def playfield_origin(self, width: int, height: int) -> tuple[int, int]:
        sw, sh = self.screen.get_size()
        return (sw - width) // 2, (sh - height) // 2

    def draw(self) -> None:
        rect = self.draw_playfield()
        self.draw_hud(rect)
        if self.state.show_help or self.state.paused or self.state.game_over:
            self.draw_overlay(rect)

    def draw_playfield(self) -> pygame.Rect:
        raise NotImplementedError

    def hud_lines(self) -> list[str]:
        return [f"Score: {self.state.score}"]

    def draw_hud(self, rect: pygame.Rect) -> None:
        font = self.font(24)
        x = rect.x
        for line in self.hud_lines():
            surf = font.render(line, True, OLIVE)
            self.screen.blit(surf, (x, rect.bottom + 12))
            x += surf.get_width() + 32
        hint = self.font(18).render("Press H for controls", True, SAGE)
        self.screen.blit(hint, (rect.x, rect.bottom + 44))

    def draw_overlay(self, rect: pygame.Rect) -> None:
        # Dim the playfield
        overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 128))
        self.screen.blit(overlay, rect.topleft)

        if self.state.show_help:
            lines = ["Controls", *self.help_lines, "P : Pause game", "H : Show/hide help"]
        elif self.state.game_over:
            lines = [self.result_text(), "R : Play again", "Esc : Back to menu"]
        else:
            lines = ["Paused"]
        surfs = [self.font(26 if i == 0 else 20).render(line, True, INK) for i, line in enumerate(lines)]
        pad = 18
        box_w = max(s.get_width() for s in surfs) + pad * 2
        box_h = sum(s.get_height() + 6 for s in surfs) + pad * 2
        box = pygame.Rect(0, 0, box_w, box_h)
        box.center = rect.center
        pygame.draw.rect(self.screen, OLIVE, box, border_radius=8)
        y = box.y + pad
        for surf in surfs:
            self.screen.blit(surf, (box.centerx - surf.get_width() // 2, y))
            y += surf.get_height() + 6


GAME_REGISTRY: Dict[str, Type[BaseGame]] = {}

def register_game(key: str) -> Callable[[Type[BaseGame]], Type[BaseGame]]:
    def wrapper(cls: Type[BaseGame]) -> Type[BaseGame]:
        GAME_REGISTRY[key] = cls
        cls.name = key
        return cls
    return wrapper

def get_game_class(key: str) -> Type[BaseGame]:
    try:
        return GAME_REGISTRY[key]
    except KeyError:
        known = ", ".join(sorted(GAME_REGISTRY))
        raise UnknownGameError(f"unknown game {key!r} (known: {known})") from None

# Auto-import game modules to populate the registry on package import.
from . import snake  # noqa: E402,F401
from . import tetris  # noqa: E402,F401
from . import pong  # noqa: E402,F401
from . import breakout  # noqa: E402,F401
from . import space_invaders  # noqa: E402,F401
