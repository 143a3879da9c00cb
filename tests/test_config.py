"""Tests for settings and logging setup."""

import logging

from featurefest import config
from featurefest.config import Settings, configure_logging, settings


def test_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("FEATUREFEST_BOARD_ID", "board-from-env")
    monkeypatch.setenv("FEATUREFEST_TIMEOUT", "2.5")
    loaded = Settings()
    assert loaded.board_id == "board-from-env"
    assert loaded.timeout == 2.5
    assert loaded.database_url.startswith("sqlite+aiosqlite:///")


def test_configure_logging_uses_log_level(monkeypatch):
    captured = {}
    monkeypatch.setattr(settings, "log_level", "debug")
    monkeypatch.setattr(config.logging, "basicConfig", lambda **kw: captured.update(kw))

    configure_logging()

    assert captured["level"] == logging.DEBUG
    assert captured["format"] == "%(levelname)s:%(name)s: %(message)s"


def test_configure_logging_unknown_level_falls_back_to_info(monkeypatch):
    captured = {}
    monkeypatch.setattr(settings, "log_level", "chatty")
    monkeypatch.setattr(config.logging, "basicConfig", lambda **kw: captured.update(kw))

    configure_logging()

    assert captured["level"] == logging.INFO
