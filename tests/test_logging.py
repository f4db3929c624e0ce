"""Tests for logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lintbridge.logging import configure_logging, get_linter_logger, get_logger


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_default_configuration(self) -> None:
        """Default configuration sets INFO level."""
        configure_logging()
        logger = logging.getLogger("lintbridge")
        assert logger.level == logging.INFO

    def test_custom_level(self) -> None:
        """Can set custom log level."""
        configure_logging(level="DEBUG")
        logger = logging.getLogger("lintbridge")
        assert logger.level == logging.DEBUG

    def test_case_insensitive_level(self) -> None:
        """Log level is case insensitive."""
        configure_logging(level="warning")
        logger = logging.getLogger("lintbridge")
        assert logger.level == logging.WARNING

    def test_file_handler(self, tmp_path: Path) -> None:
        """Can configure logging to file."""
        log_file = tmp_path / "test.log"
        configure_logging(log_file=log_file)
        logger = logging.getLogger("lintbridge")

        # Log something and verify it appears in the file
        logger.info("test message")

        # Flush handlers
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        content = log_file.read_text()
        assert "test message" in content

    def test_clears_existing_handlers(self) -> None:
        """configure_logging clears existing handlers."""
        configure_logging()
        logger = logging.getLogger("lintbridge")
        initial_count = len(logger.handlers)

        # Call again
        configure_logging()

        assert len(logger.handlers) == initial_count


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_namespaced_logger(self) -> None:
        """get_logger returns logger with lintbridge prefix."""
        logger = get_logger("test")
        assert logger.name == "lintbridge.test"

    def test_nested_namespace(self) -> None:
        """Can create nested logger names."""
        logger = get_logger("lsp.server")
        assert logger.name == "lintbridge.lsp.server"


class TestGetLinterLogger:
    """Tests for get_linter_logger function."""

    def test_is_under_linters_namespace(self) -> None:
        assert get_linter_logger("ruff").name == "lintbridge.linters.ruff"

    @pytest.mark.parametrize("linter_id", ["", "ruff.extra"])
    def test_rejects_invalid_ids(self, linter_id: str) -> None:
        with pytest.raises(ValueError, match="Invalid linter id"):
            get_linter_logger(linter_id)


class TestLogFormat:
    """Tests for emitted records."""

    def test_does_not_propagate(self) -> None:
        """lintbridge records stay off the root logger (stdout carries LSP)."""
        configure_logging()
        assert logging.getLogger("lintbridge").propagate is False

    def test_child_records_reach_file(self, tmp_path: Path) -> None:
        """Records from adapter loggers end up in the configured file."""
        log_file = tmp_path / "lint.log"
        configure_logging(level="DEBUG", log_file=log_file)

        get_linter_logger("ruff").debug("Run linter:\nruff --exit-zero -")

        for handler in logging.getLogger("lintbridge").handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "lintbridge.linters.ruff - DEBUG - Run linter:" in content
        assert "ruff --exit-zero -" in content
