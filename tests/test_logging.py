"""Tests for root logger configuration."""

import logging
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler

import pytest

from daily_pulse.utils.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _clean_log_env(monkeypatch):
    for name in ("LOG_LEVEL", "LOG_FORMAT", "LOG_FILE_PATH"):
        monkeypatch.delenv(name, raising=False)


@contextmanager
def scratch_root():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        yield root
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_defaults_to_single_stderr_handler_at_warning():
    with scratch_root() as root:
        configure_logging()

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RotatingFileHandler)


def test_explicit_level_wins_over_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    with scratch_root() as root:
        configure_logging("debug")
        assert root.level == logging.DEBUG


def test_log_file_path_adds_rotating_file_handler(monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "pulse.log"
    monkeypatch.setenv("LOG_FILE_PATH", str(log_file))
    monkeypatch.setenv("LOG_FORMAT", "json")

    with scratch_root() as root:
        configure_logging("INFO")
        get_logger("pulse.test").info("hello file")
        for handler in root.handlers:
            handler.flush()
        assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)

    content = log_file.read_text(encoding="utf-8")
    assert '"name": "pulse.test"' in content
    assert '"message": "hello file"' in content
