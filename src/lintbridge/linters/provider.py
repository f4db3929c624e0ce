"""Fan a document out to every configured linter."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from lintbridge.config import LintSettings
from lintbridge.linters.base import BaseLinter
from lintbridge.linters.ruff import RuffLinter
from lintbridge.linters.types import LintMessage
from lintbridge.logging import get_logger

LINTERS: dict[str, type[BaseLinter]] = {
    "ruff": RuffLinter,
}


class LinterProvider:
    """Holds the current settings and one adapter per registered tool."""

    def __init__(
        self,
        settings: LintSettings | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        if logger is None:
            logger = get_logger("linters")
        self._logger = logger
        self.update_settings(settings or LintSettings())

    @property
    def settings(self) -> LintSettings:
        return self._settings

    @property
    def linters(self) -> list[BaseLinter]:
        return list(self._linters)

    def update_settings(self, settings: LintSettings) -> None:
        """Replace the settings and rebuild the adapters."""
        self._settings = settings
        self._linters = [
            linter_cls(settings.linter_info(linter_id))
            for linter_id, linter_cls in LINTERS.items()
        ]
        self._logger.debug("Linter settings updated: %s", settings)

    async def lint(
        self, text: str, path: str, *, cwd: str | Path | None = None
    ) -> list[LintMessage]:
        """
        Run all linters concurrently on one document snapshot.

        Results are concatenated in registration order. Each linter absorbs
        its own failures, so one broken tool only loses its own diagnostics.
        """
        linters = self._linters
        results = await asyncio.gather(
            *(linter.lint_document(text, path, cwd=cwd) for linter in linters)
        )
        return [message for messages in results for message in messages]
