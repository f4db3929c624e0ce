"""Common behaviour of external linter adapters."""

from __future__ import annotations

import abc
import asyncio
import logging
import time
from pathlib import Path

from lintbridge.config import LinterInfo
from lintbridge.linters.errors import LinterError
from lintbridge.linters.types import CoordinateConvention, LintMessage
from lintbridge.logging import get_linter_logger


class BaseLinter(abc.ABC):
    """
    One external tool, bound to its settings and its own logger.

    Subclasses implement :meth:`run_linter`; callers use :meth:`lint_document`,
    which never raises. A failing tool yields no diagnostics and a log record,
    so it cannot hold up the other linters running alongside it.
    """

    convention: CoordinateConvention

    def __init__(self, info: LinterInfo, logger: logging.Logger | None = None) -> None:
        if logger is None:
            logger = get_linter_logger(info.id)
        self.info = info
        self.logger = logger

    @property
    def id(self) -> str:
        return self.info.id

    async def lint_document(
        self, text: str, path: str, *, cwd: str | Path | None = None
    ) -> list[LintMessage]:
        """
        Lint one document snapshot.

        Args:
            text: Full document content.
            path: Absolute path the content belongs to.
            cwd: Working directory for the tool.

        Returns:
            Diagnostics in tool order; empty when disabled or on failure.
        """
        if not self.info.is_enabled(path):
            self.logger.debug("%s is disabled for %s", self.id, path)
            return []

        start_time = time.monotonic()
        try:
            messages = await self.run_linter(text, path, cwd=cwd)
        except asyncio.CancelledError:
            raise
        except LinterError as e:
            self.logger.error(
                "Linting with %s failed: %s\ncommand: %s",
                self.id,
                e,
                e.command or "<not started>",
            )
            return []
        except Exception:
            self.logger.exception("Linting with %s failed", self.id)
            return []

        self.logger.debug(
            "%s produced %d diagnostics for %s in %.2fms",
            self.id,
            len(messages),
            path,
            (time.monotonic() - start_time) * 1000,
        )
        return messages

    @abc.abstractmethod
    async def run_linter(
        self, text: str, path: str, *, cwd: str | Path | None
    ) -> list[LintMessage]:
        """Run the tool and normalize its output. May raise LinterError."""
