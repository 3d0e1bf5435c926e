"""
Tests for environment-driven configuration.
"""

import pytest

from pocket_arcade.main import main
from pocket_arcade.settings import Settings, configure_logging, env_bool, env_int


class TestSettings:
    """Tests for Settings defaults and overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("ARCADE_WIDTH", "ARCADE_HEIGHT", "ARCADE_FPS", "ARCADE_START_GAME"):
            monkeypatch.delenv(name, raising=False)
        cfg = Settings()
        assert cfg.screen_size == (960, 720)
        assert cfg.fps == 60
        assert cfg.start_game == ""

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ARCADE_FPS", "30")
        monkeypatch.setenv("ARCADE_FULLSCREEN", "yes")
        monkeypatch.setenv("ARCADE_START_GAME", " tetris ")
        cfg = Settings()
        assert cfg.fps == 30
        assert cfg.fullscreen is True
        assert cfg.start_game == "tetris"

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("ARCADE_FPS", "fast")
        with pytest.raises(ValueError, match="ARCADE_FPS"):
            env_int("ARCADE_FPS", 60)

    def test_bad_boolean(self, monkeypatch):
        monkeypatch.setenv("ARCADE_FULLSCREEN", "maybe")
        with pytest.raises(ValueError, match="ARCADE_FULLSCREEN"):
            env_bool("ARCADE_FULLSCREEN", False)

    def test_bad_log_level(self):
        cfg = Settings(log_level="CHATTY")
        with pytest.raises(ValueError):
            configure_logging(cfg)


class TestMain:
    """Tests for the console entry point."""

    def test_bad_environment_value_exits_cleanly(self, monkeypatch, caplog):
        monkeypatch.setenv("ARCADE_FPS", "fast")
        assert main() == 1
        assert "ARCADE_FPS" in caplog.text
