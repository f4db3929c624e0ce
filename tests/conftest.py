"""Shared fixtures."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from lintbridge.config import LinterInfo

FAKE_RUFF = Path(__file__).parent / "helpers" / "fake_ruff.py"


@pytest.fixture
def fake_ruff_info() -> LinterInfo:
    """LinterInfo that runs the fake ruff script with the current interpreter."""
    return LinterInfo(
        id="ruff",
        executable=sys.executable,
        args=(str(FAKE_RUFF),),
    )


@pytest.fixture(autouse=True)
def _reset_lintbridge_logger():
    """Undo configure_logging so caplog keeps seeing lintbridge records."""
    yield
    logger = logging.getLogger("lintbridge")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
