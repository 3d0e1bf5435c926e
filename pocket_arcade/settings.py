from dataclasses import dataclass, field
from pathlib import Path
import logging
import os
from dotenv import load_dotenv
import pygame

BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(BASE_DIR / ".env")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass
class Settings:
    width: int = field(default_factory=lambda: env_int("ARCADE_WIDTH", 960))
    height: int = field(default_factory=lambda: env_int("ARCADE_HEIGHT", 720))
    fullscreen: bool = field(default_factory=lambda: env_bool("ARCADE_FULLSCREEN", False))
    fps: int = field(default_factory=lambda: env_int("ARCADE_FPS", 60))
    title: str = field(default_factory=lambda: os.getenv("ARCADE_TITLE", "Pocket Arcade"))
    bg_color: tuple[int, int, int] = (42, 42, 42)
    # Allow held keys to auto-repeat KEYDOWN events (ms)
    key_repeat_delay: int = field(default_factory=lambda: env_int("ARCADE_KEY_REPEAT_DELAY", 120))
    key_repeat_interval: int = field(default_factory=lambda: env_int("ARCADE_KEY_REPEAT_INTERVAL", 30))
    log_level: str = field(default_factory=lambda: os.getenv("ARCADE_LOG_LEVEL", "INFO").upper())
    # Game key to mount on launch; empty shows the menu
    start_game: str = field(default_factory=lambda: os.getenv("ARCADE_START_GAME", "").strip())

    @property
    def screen_size(self) -> tuple[int, int]:
        return (self.width, self.height)


def configure_logging(cfg: Settings) -> None:
    level = getattr(logging, cfg.log_level, None)
    if not isinstance(level, int):
        raise ValueError(f"ARCADE_LOG_LEVEL is not a logging level: {cfg.log_level!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def init_pygame_window(cfg: Settings) -> pygame.Surface:
    pygame.display.set_caption(cfg.title)
    flags = pygame.FULLSCREEN if cfg.fullscreen else 0
    size = (0, 0) if cfg.fullscreen else cfg.screen_size
    screen = pygame.display.set_mode(size, flags)
    if cfg.fullscreen:
        cfg.width, cfg.height = screen.get_size()
    # Enable key repeat so holding keys keeps paddles and pieces moving
    pygame.key.set_repeat(cfg.key_repeat_delay, cfg.key_repeat_interval)
    return screen
