"""Errors raised while running an external linter."""

from __future__ import annotations


class LinterError(Exception):
    """Base class for failures of a single linter run."""

    def __init__(self, message: str, *, command: str | None = None) -> None:
        super().__init__(message)
        self.command = command


class LinterSpawnError(LinterError):
    """The linter executable is missing or cannot be started."""


class LinterOutputError(LinterError):
    """The linter produced no usable structured output."""

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        output: str | None = None,
    ) -> None:
        super().__init__(message, command=command)
        self.output = output
