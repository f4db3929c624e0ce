"""Logging configuration for lintbridge."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "lintbridge"
LINTERS_LOGGER_SUFFIX = "linters"


def configure_logging(*, level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure the ``lintbridge`` logger namespace.

    stdout carries the LSP stream, so records only ever go to stderr or a file.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs to stderr.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(formatter)
    handler.setLevel(log_level)
    logger.addHandler(handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the lintbridge namespace.

    Args:
        name: Logger name (will be prefixed with 'lintbridge.').

    Returns:
        Logger instance.
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_linter_logger(linter_id: str) -> logging.Logger:
    """
    Get the logger an external linter adapter reports through.

    Each tool gets its own ``lintbridge.linters.<id>`` logger, so its command
    lines and raw output can be filtered or routed separately.

    Args:
        linter_id: Linter identifier, e.g. ``"ruff"``.

    Returns:
        Logger instance.

    Raises:
        ValueError: If linter_id is empty or contains a dot.
    """
    if not linter_id or "." in linter_id:
        raise ValueError(f"Invalid linter id: {linter_id!r}")
    return get_logger(f"{LINTERS_LOGGER_SUFFIX}.{linter_id}")
