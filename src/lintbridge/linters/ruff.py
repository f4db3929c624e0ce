"""Ruff adapter.

Ruff reads the document from stdin and reports findings as a JSON array:

    [
      {
        "code": "F401",
        "message": "`numpy` imported but unused",
        "fix": {
          "content": "",
          "location": {"row": 3, "column": 0},
          "end_location": {"row": 4, "column": 0}
        },
        "location": {"row": 3, "column": 8},
        "end_location": {"row": 3, "column": 19},
        "filename": "/path/to/bug.py"
      }
    ]
"""

from __future__ import annotations

import json
from collections.abc import Collection
from pathlib import Path
from typing import Any

from lsprotocol import types

from lintbridge.linters.base import BaseLinter
from lintbridge.linters.errors import LinterOutputError
from lintbridge.linters.process import run_linter_process
from lintbridge.linters.types import (
    CoordinateConvention,
    FixEdit,
    LinterCommand,
    LintMessage,
    RawFix,
    RawToolMessage,
    SourcePosition,
    SourceRange,
)

__all__ = [
    "RUFF_CONVENTION",
    "UNNECESSARY_CODES",
    "RuffLinter",
    "parse_ruff_output",
    "to_lint_message",
]

# Start columns are 1-based, end columns already behave as 0-based exclusive.
# Fix ranges use 1-based rows and feed a 0-based-row consumer.
RUFF_CONVENTION = CoordinateConvention(
    column_offset=1,
    end_column_offset=0,
    fix_row_offset=1,
)

# Imported but unused, assigned but unused.
UNNECESSARY_CODES: frozenset[str] = frozenset({"F401", "F841"})

# ruff's own severities are unreliable (astral-sh/ruff#645).
RUFF_SEVERITY = types.DiagnosticSeverity.Warning


def _parse_position(value: Any, field: str) -> SourcePosition:
    if not isinstance(value, dict):
        raise LinterOutputError(f"Missing or invalid {field!r} in ruff output")
    row = value.get("row")
    column = value.get("column")
    if not isinstance(row, int) or not isinstance(column, int):
        raise LinterOutputError(f"Invalid row/column in {field!r}: {value!r}")
    return SourcePosition(row=row, column=column)


def _parse_fix(value: Any) -> RawFix | None:
    if value is None:
        return None
    if not isinstance(value, dict) or not isinstance(value.get("content"), str):
        raise LinterOutputError(f"Invalid fix in ruff output: {value!r}")
    return RawFix(
        content=value["content"],
        location=_parse_position(value.get("location"), "fix.location"),
        end_location=_parse_position(value.get("end_location"), "fix.end_location"),
    )


def _parse_message(entry: Any) -> RawToolMessage:
    if not isinstance(entry, dict):
        raise LinterOutputError(f"Expected an object, got {type(entry).__name__}")

    if "code" not in entry:
        raise LinterOutputError(f"Missing code in ruff output: {entry!r}")
    code = entry["code"]
    # syntax errors carry a null rule code
    if code is None:
        code = ""
    message = entry.get("message")
    if not isinstance(code, str) or not isinstance(message, str):
        raise LinterOutputError(f"Missing code or message in ruff output: {entry!r}")

    filename = entry.get("filename")
    if filename is not None and not isinstance(filename, str):
        raise LinterOutputError(f"Invalid filename in ruff output: {filename!r}")

    return RawToolMessage(
        code=code,
        message=message,
        location=_parse_position(entry.get("location"), "location"),
        end_location=_parse_position(entry.get("end_location"), "end_location"),
        filename=filename,
        fix=_parse_fix(entry.get("fix")),
    )


def parse_ruff_output(raw: str) -> list[RawToolMessage]:
    """
    Parse ruff's JSON output.

    Args:
        raw: stdout of a ``--format json`` run.

    Returns:
        Messages in the order ruff reported them.

    Raises:
        LinterOutputError: Output is not a JSON array of well-formed entries.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise LinterOutputError(f"Ruff output is not valid JSON: {e}", output=raw) from e

    if not isinstance(data, list):
        raise LinterOutputError("Ruff output is not a JSON array", output=raw)

    return [_parse_message(entry) for entry in data]


def to_lint_message(
    raw: RawToolMessage,
    *,
    provider: str,
    default_file: str,
    convention: CoordinateConvention = RUFF_CONVENTION,
    unnecessary_codes: Collection[str] = UNNECESSARY_CODES,
    severity: types.DiagnosticSeverity = RUFF_SEVERITY,
) -> LintMessage:
    """
    Project a raw message into the consumer's coordinate space.

    Diagnostic rows stay 1-based; fix rows become 0-based. Keep both
    conventions or fixes land on the wrong line.
    """
    file = raw.filename or default_file

    fix: FixEdit | None = None
    if raw.fix is not None:
        fix = FixEdit(
            target_file=file,
            range=SourceRange(
                start=SourcePosition(
                    row=raw.fix.location.row - convention.fix_row_offset,
                    column=raw.fix.location.column,
                ),
                end=SourcePosition(
                    row=raw.fix.end_location.row - convention.fix_row_offset,
                    column=raw.fix.end_location.column,
                ),
            ),
            replacement_text=raw.fix.content,
        )

    return LintMessage(
        line=raw.location.row,
        column=raw.location.column - convention.column_offset,
        end_line=raw.end_location.row,
        end_column=raw.end_location.column - convention.end_column_offset,
        code=raw.code,
        message=raw.message,
        severity=severity,
        tags=[types.DiagnosticTag.Unnecessary] if raw.code in unnecessary_codes else [],
        provider=provider,
        file=file,
        fix=fix,
    )


class RuffLinter(BaseLinter):
    """Runs ``ruff`` on stdin in JSON, exit-zero mode."""

    convention = RUFF_CONVENTION

    def build_command(self, path: str) -> LinterCommand:
        return LinterCommand(
            executable=self.info.executable,
            args=[
                *self.info.args,
                "--format",
                "json",
                "--exit-zero",
                "--stdin-filename",
                path,
                "-",
            ],
        )

    async def run_linter(
        self, text: str, path: str, *, cwd: str | Path | None
    ) -> list[LintMessage]:
        command = self.build_command(path)
        output = await run_linter_process(command, text, cwd=cwd, logger=self.logger)
        try:
            raw_messages = parse_ruff_output(output)
        except LinterOutputError as e:
            e.command = command.display()
            raise
        return [
            to_lint_message(
                raw,
                provider=self.id,
                default_file=path,
                convention=self.convention,
            )
            for raw in raw_messages
        ]
