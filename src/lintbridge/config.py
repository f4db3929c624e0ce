"""Linting settings received from the editor."""

from __future__ import annotations

import dataclasses
import functools
import logging
import re
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any

from lintbridge.logging import get_logger

__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "LintSettings",
    "LinterInfo",
]

SETTINGS_SECTION = "lintbridge"

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    ".vscode/*.py",
    "**/site-packages/**/*.py",
)


@dataclasses.dataclass(frozen=True)
class LintSettings:
    """Linting configuration, as sent in initializationOptions or didChangeConfiguration."""

    enabled: bool = True
    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    ruff_enabled: bool = True
    ruff_path: str = "ruff"
    ruff_args: tuple[str, ...] = ()

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any] | None,
        *,
        defaults: LintSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> LintSettings:
        """
        Build settings from an editor payload.

        Accepts either the settings mapping itself or one nested under
        ``"lintbridge"``. Values of the wrong type are ignored (with a warning)
        and the default is kept.

        Args:
            data: Raw settings payload, or None for defaults.
            defaults: Values for keys the payload leaves out.
            logger: Optional logger for rejected values.

        Returns:
            Parsed LintSettings.
        """
        if logger is None:
            logger = get_logger("config")
        if defaults is None:
            defaults = cls()
        if not isinstance(data, Mapping):
            return defaults

        section = data.get(SETTINGS_SECTION)
        if isinstance(section, Mapping):
            data = section

        return cls(
            enabled=_get_bool(data, "enabled", defaults.enabled, logger),
            ignore_patterns=_get_str_tuple(
                data, "ignorePatterns", defaults.ignore_patterns, logger
            ),
            ruff_enabled=_get_bool(data, "ruffEnabled", defaults.ruff_enabled, logger),
            ruff_path=_get_str(data, "ruffPath", defaults.ruff_path, logger),
            ruff_args=_get_str_tuple(data, "ruffArgs", defaults.ruff_args, logger),
        )

    def linter_info(self, linter_id: str) -> LinterInfo:
        """Per-tool view of these settings."""
        if linter_id == "ruff":
            return LinterInfo(
                id=linter_id,
                executable=self.ruff_path,
                args=self.ruff_args,
                tool_enabled=self.ruff_enabled,
                linting_enabled=self.enabled,
                ignore_patterns=self.ignore_patterns,
            )
        raise ValueError(f"Unknown linter: {linter_id!r}")


@dataclasses.dataclass(frozen=True)
class LinterInfo:
    """Invocation details and enablement for one external tool."""

    id: str
    executable: str
    args: tuple[str, ...] = ()
    tool_enabled: bool = True
    linting_enabled: bool = True
    ignore_patterns: tuple[str, ...] = ()

    def is_enabled(self, path: str) -> bool:
        """Whether this tool should run for ``path`` at all."""
        if not (self.linting_enabled and self.tool_enabled):
            return False
        return not any(_matches(path, pattern) for pattern in self.ignore_patterns)


def _matches(path: str, pattern: str) -> bool:
    if not pattern:
        return False
    return _compile_glob(pattern).search(PurePath(path).as_posix()) is not None


@functools.lru_cache(maxsize=None)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """
    Translate a path glob into a regex matching whole trailing path segments.

    ``**/`` matches zero or more directories, ``**`` anything, ``*`` and ``?``
    never cross a ``/``. Relative patterns may match at any directory boundary;
    patterns starting with ``/`` are anchored at the root.
    """
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    prefix = "^" if pattern.startswith("/") else "(?:^|/)"
    return re.compile(prefix + "".join(parts) + "$")


def _get_bool(
    data: Mapping[str, Any], key: str, default: bool, logger: logging.Logger
) -> bool:
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    logger.warning("Ignoring setting %s=%r: expected a boolean", key, value)
    return default


def _get_str(
    data: Mapping[str, Any], key: str, default: str, logger: logging.Logger
) -> str:
    value = data.get(key, default)
    if isinstance(value, str) and value:
        return value
    logger.warning("Ignoring setting %s=%r: expected a non-empty string", key, value)
    return default


def _get_str_tuple(
    data: Mapping[str, Any],
    key: str,
    default: tuple[str, ...],
    logger: logging.Logger,
) -> tuple[str, ...]:
    value = data.get(key, default)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    logger.warning("Ignoring setting %s=%r: expected a list of strings", key, value)
    return default
