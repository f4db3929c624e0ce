"""External linter adapters."""

from lintbridge.linters.base import BaseLinter
from lintbridge.linters.errors import LinterError, LinterOutputError, LinterSpawnError
from lintbridge.linters.provider import LINTERS, LinterProvider
from lintbridge.linters.ruff import RuffLinter
from lintbridge.linters.types import FixEdit, LintMessage

__all__ = [
    "LINTERS",
    "BaseLinter",
    "FixEdit",
    "LintMessage",
    "LinterError",
    "LinterOutputError",
    "LinterProvider",
    "LinterSpawnError",
    "RuffLinter",
]
