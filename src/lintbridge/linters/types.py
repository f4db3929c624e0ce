"""Type definitions shared by linter adapters."""

from __future__ import annotations

from typing import NamedTuple

from lsprotocol import types


class SourcePosition(NamedTuple):
    """A position as reported by an external tool."""

    row: int
    column: int


class SourceRange(NamedTuple):
    """A start/end pair of positions."""

    start: SourcePosition
    end: SourcePosition


class RawFix(NamedTuple):
    """Literal replacement suggested by the tool."""

    content: str
    location: SourcePosition
    end_location: SourcePosition


class RawToolMessage(NamedTuple):
    """One finding in the tool's own coordinate space."""

    code: str
    message: str
    location: SourcePosition
    end_location: SourcePosition
    filename: str | None = None
    fix: RawFix | None = None


class CoordinateConvention(NamedTuple):
    """
    How a tool's coordinates map onto the consumer's.

    Every adapter must spell these out; there is no shared default.
    """

    column_offset: int  # subtracted from the start column
    end_column_offset: int  # subtracted from the end column
    fix_row_offset: int  # subtracted from both rows of a fix range


class FixEdit(NamedTuple):
    """A ready-to-apply replacement in one file."""

    target_file: str
    range: SourceRange  # already offset-normalized (0-based rows)
    replacement_text: str


class LintMessage(NamedTuple):
    """A normalized diagnostic, independent of the tool that produced it."""

    line: int
    column: int
    end_line: int
    end_column: int
    code: str
    message: str
    severity: types.DiagnosticSeverity
    tags: list[types.DiagnosticTag]
    provider: str
    file: str
    fix: FixEdit | None = None


class LinterCommand(NamedTuple):
    """A fully assembled external tool invocation."""

    executable: str
    args: list[str]

    def display(self) -> str:
        return " ".join([self.executable, *self.args])
