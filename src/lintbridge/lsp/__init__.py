"""Language server hosting the linter adapters."""

from lintbridge.lsp.server import create_server

__all__ = ["create_server"]
