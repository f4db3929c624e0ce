"""Tests for conversion between lint results and LSP types."""

from __future__ import annotations

import pytest
from lsprotocol import types

from lintbridge.linters.types import FixEdit, LintMessage, SourcePosition, SourceRange
from lintbridge.lsp.adapter import (
    fix_from_data,
    fix_to_text_edit,
    fix_to_workspace_edit,
    to_lsp_diagnostic,
)


def _fix(
    start: tuple[int, int] = (0, 0),
    end: tuple[int, int] = (1, 0),
    *,
    target_file: str = "/tmp/bug.py",
    content: str = "",
) -> FixEdit:
    return FixEdit(
        target_file=target_file,
        range=SourceRange(start=SourcePosition(*start), end=SourcePosition(*end)),
        replacement_text=content,
    )


def _message(**overrides) -> LintMessage:
    fields = dict(
        line=1,
        column=7,
        end_line=1,
        end_column=19,
        code="F401",
        message="`numpy` imported but unused",
        severity=types.DiagnosticSeverity.Warning,
        tags=[types.DiagnosticTag.Unnecessary],
        provider="ruff",
        file="/tmp/bug.py",
        fix=_fix(),
    )
    fields.update(overrides)
    return LintMessage(**fields)


class TestToLspDiagnostic:
    """Tests for to_lsp_diagnostic."""

    def test_lines_become_zero_based(self) -> None:
        diagnostic = to_lsp_diagnostic(_message(line=3, end_line=4))
        assert diagnostic.range.start == types.Position(line=2, character=7)
        assert diagnostic.range.end == types.Position(line=3, character=19)

    def test_fields_are_carried_over(self) -> None:
        diagnostic = to_lsp_diagnostic(_message())
        assert diagnostic.message == "`numpy` imported but unused"
        assert diagnostic.code == "F401"
        assert diagnostic.source == "ruff"
        assert diagnostic.severity == types.DiagnosticSeverity.Warning
        assert diagnostic.tags == [types.DiagnosticTag.Unnecessary]

    def test_no_tags_becomes_none(self) -> None:
        assert to_lsp_diagnostic(_message(tags=[])).tags is None

    def test_negative_coordinates_are_clamped(self) -> None:
        diagnostic = to_lsp_diagnostic(_message(line=0, column=-1, end_line=0))
        assert diagnostic.range.start == types.Position(line=0, character=0)
        assert diagnostic.range.end.line == 0

    def test_fix_roundtrips_through_data(self) -> None:
        fix = _fix((2, 4), (2, 9), content="os")
        diagnostic = to_lsp_diagnostic(_message(fix=fix))
        assert fix_from_data(diagnostic.data) == fix

    def test_no_fix_no_data(self) -> None:
        assert to_lsp_diagnostic(_message(fix=None)).data is None


class TestFixFromData:
    """Tests for fix_from_data on client-supplied data."""

    @pytest.mark.parametrize(
        "data",
        [
            None,
            "fix",
            {},
            {"fix": None},
            {"fix": {"file": "/a.py"}},
            {"fix": {"file": "/a.py", "start": [0], "end": [1, 0], "content": ""}},
            {"fix": {"file": "/a.py", "start": ["x", 0], "end": [1, 0], "content": ""}},
        ],
    )
    def test_unusable_data_gives_none(self, data: object) -> None:
        assert fix_from_data(data) is None


class TestFixToWorkspaceEdit:
    """Tests for TextEdit/WorkspaceEdit conversion."""

    def test_text_edit_keeps_zero_based_range(self) -> None:
        edit = fix_to_text_edit(_fix((0, 0), (1, 0), content=""))
        assert edit.range == types.Range(
            start=types.Position(line=0, character=0),
            end=types.Position(line=1, character=0),
        )
        assert edit.new_text == ""

    def test_workspace_edit_is_keyed_by_uri(self) -> None:
        workspace_edit = fix_to_workspace_edit(
            [_fix((0, 0), (1, 0)), _fix((3, 0), (4, 0)), _fix(target_file="/tmp/o.py")]
        )
        assert workspace_edit.changes is not None
        assert set(workspace_edit.changes) == {"file:///tmp/bug.py", "file:///tmp/o.py"}
        assert len(workspace_edit.changes["file:///tmp/bug.py"]) == 2
