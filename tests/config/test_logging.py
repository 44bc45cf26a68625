"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest
import structlog

from svcsched.config.logging import configure_logging, flush_logging
from svcsched.config.models import LoggingConfig


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    sched = logging.getLogger("svcsched")
    sched_level = sched.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
    sched.setLevel(sched_level)


class TestConfigureLogging:
    def test_default_is_info(self) -> None:
        configure_logging()
        assert logging.getLogger("svcsched").level == logging.INFO
        assert logging.getLogger().level == logging.WARNING

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("svcsched").level == logging.DEBUG

    def test_quiet_sets_warning(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("svcsched").level == logging.WARNING

    def test_human_mode_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging()
        structlog.get_logger("svcsched.test").info("run.start", entries=2)
        captured = capsys.readouterr()
        assert "run.start" in captured.err
        assert "entries" in captured.err

    def test_json_mode_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        structlog.get_logger("svcsched.test").warning("service.not_found", service="Ghost")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "service.not_found"
        assert payload["service"] == "Ghost"
        assert payload["level"] == "warning"
        assert "timestamp" in payload

    def test_no_file_handler_by_default(self) -> None:
        configure_logging()
        assert not any(
            isinstance(h, TimedRotatingFileHandler) for h in logging.getLogger().handlers
        )


class TestLogFile:
    def test_daily_file_is_written(self, tmp_path: Path) -> None:
        config = LoggingConfig(directory=tmp_path / "logs", file_prefix="nightly")
        configure_logging(log_file=config)
        structlog.get_logger("svcsched.test").info("run.complete", ok=3)
        flush_logging()

        log_path = tmp_path / "logs" / "nightly.log"
        assert log_path.is_file()
        text = log_path.read_text(encoding="utf-8")
        assert "run.complete" in text
        assert "\x1b[" not in text

    def test_rotates_at_midnight(self, tmp_path: Path) -> None:
        config = LoggingConfig(directory=tmp_path, backup_count=7)
        configure_logging(log_file=config)
        handler = next(
            h for h in logging.getLogger().handlers if isinstance(h, TimedRotatingFileHandler)
        )
        assert handler.when == "MIDNIGHT"
        assert handler.backupCount == 7

    def test_disabled(self, tmp_path: Path) -> None:
        config = LoggingConfig(file_enabled=False, directory=tmp_path / "logs")
        configure_logging(log_file=config)
        assert not (tmp_path / "logs").exists()

    def test_reconfigure_replaces_file_handler(self, tmp_path: Path) -> None:
        config = LoggingConfig(directory=tmp_path)
        configure_logging(log_file=config)
        configure_logging(log_file=config)
        handlers = [
            h for h in logging.getLogger().handlers if isinstance(h, TimedRotatingFileHandler)
        ]
        assert len(handlers) == 1
