"""Adapter module for converting between lint results and LSP protocol types."""

from __future__ import annotations

from typing import Any

from lsprotocol import types
from pygls.uris import from_fs_path

from lintbridge.linters.types import FixEdit, LintMessage, SourcePosition, SourceRange

__all__ = [
    "fix_from_data",
    "fix_to_text_edit",
    "fix_to_workspace_edit",
    "to_lsp_diagnostic",
]

_FIX_DATA_KEY = "fix"


def _file_uri(path: str) -> str:
    return from_fs_path(path) or path


def _to_lsp_range(source_range: SourceRange) -> types.Range:
    return types.Range(
        start=types.Position(
            line=source_range.start.row, character=source_range.start.column
        ),
        end=types.Position(line=source_range.end.row, character=source_range.end.column),
    )


def fix_to_text_edit(fix: FixEdit) -> types.TextEdit:
    """Convert a fix to a single TextEdit; its range is already 0-based."""
    return types.TextEdit(range=_to_lsp_range(fix.range), new_text=fix.replacement_text)


def fix_to_workspace_edit(fixes: list[FixEdit]) -> types.WorkspaceEdit:
    """
    Bundle fixes into one WorkspaceEdit keyed by file URI.

    Edits keep their given order; callers are responsible for passing fixes
    that do not overlap.
    """
    changes: dict[str, list[types.TextEdit]] = {}
    for fix in fixes:
        changes.setdefault(_file_uri(fix.target_file), []).append(fix_to_text_edit(fix))
    return types.WorkspaceEdit(changes=changes)


def _fix_to_data(fix: FixEdit) -> dict[str, Any]:
    return {
        "file": fix.target_file,
        "start": [fix.range.start.row, fix.range.start.column],
        "end": [fix.range.end.row, fix.range.end.column],
        "content": fix.replacement_text,
    }


def fix_from_data(data: Any) -> FixEdit | None:
    """
    Recover the fix stored in ``Diagnostic.data``.

    Clients echo ``data`` back verbatim in codeAction requests; anything that
    does not look like a fix we stored yields None.
    """
    if not isinstance(data, dict):
        return None
    raw = data.get(_FIX_DATA_KEY)
    if not isinstance(raw, dict):
        return None
    try:
        start_row, start_column = raw["start"]
        end_row, end_column = raw["end"]
        return FixEdit(
            target_file=str(raw["file"]),
            range=SourceRange(
                start=SourcePosition(row=int(start_row), column=int(start_column)),
                end=SourcePosition(row=int(end_row), column=int(end_column)),
            ),
            replacement_text=str(raw["content"]),
        )
    except (KeyError, TypeError, ValueError):
        return None


def to_lsp_diagnostic(message: LintMessage) -> types.Diagnostic:
    """
    Convert a LintMessage to an LSP Diagnostic.

    LintMessage rows are 1-based and LSP lines are 0-based; columns are
    already 0-based.
    """
    diagnostic = types.Diagnostic(
        range=types.Range(
            start=types.Position(
                line=max(message.line - 1, 0), character=max(message.column, 0)
            ),
            end=types.Position(
                line=max(message.end_line - 1, 0),
                character=max(message.end_column, 0),
            ),
        ),
        message=message.message,
        severity=message.severity,
        source=message.provider,
        code=message.code or None,
        tags=list(message.tags) or None,
    )
    if message.fix is not None:
        diagnostic.data = {_FIX_DATA_KEY: _fix_to_data(message.fix)}
    return diagnostic
