"""Tests for LinterProvider."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from lintbridge.config import LintSettings
from lintbridge.linters.provider import LinterProvider
from lintbridge.linters.ruff import RuffLinter

FAKE_RUFF = Path(__file__).parents[1] / "helpers" / "fake_ruff.py"


def _fake_ruff_settings(**overrides) -> LintSettings:
    return LintSettings(
        ruff_path=sys.executable,
        ruff_args=(str(FAKE_RUFF),),
        ignore_patterns=(),
        **overrides,
    )


class TestLinterProvider:
    """Tests for LinterProvider."""

    def test_builds_one_linter_per_registered_tool(self) -> None:
        provider = LinterProvider()
        (linter,) = provider.linters
        assert isinstance(linter, RuffLinter)
        assert linter.info.executable == "ruff"

    def test_update_settings_rebuilds_linters(self) -> None:
        provider = LinterProvider()
        provider.update_settings(LintSettings(ruff_path="/opt/ruff"))
        assert provider.settings.ruff_path == "/opt/ruff"
        assert provider.linters[0].info.executable == "/opt/ruff"

    async def test_lint_collects_diagnostics(self, tmp_path: Path) -> None:
        provider = LinterProvider(_fake_ruff_settings())
        messages = await provider.lint(
            "import numpy\n", str(tmp_path / "bug.py"), cwd=tmp_path
        )
        assert [(m.code, m.provider) for m in messages] == [("F401", "ruff")]

    async def test_lint_disabled_returns_empty(self, tmp_path: Path) -> None:
        provider = LinterProvider(_fake_ruff_settings(enabled=False))
        assert await provider.lint("import numpy\n", str(tmp_path / "bug.py")) == []

    async def test_concurrent_documents(self, tmp_path: Path) -> None:
        """Different documents linted at once each get their own results."""
        provider = LinterProvider(_fake_ruff_settings())
        documents = {
            str(tmp_path / f"mod{i}.py"): "".join(
                f"import m{j}\n" for j in range(i)
            )
            for i in range(4)
        }
        results = await asyncio.gather(
            *(provider.lint(text, path) for path, text in documents.items())
        )
        for (path, _), messages in zip(documents.items(), results):
            assert all(m.file == path for m in messages)
        assert [len(messages) for messages in results] == [0, 1, 2, 3]
