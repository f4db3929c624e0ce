"""Lint server using pygls 2.0.

Publishes diagnostics from external linters for Python documents and offers
their suggested fixes as code actions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from lsprotocol import types
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from lintbridge import __version__
from lintbridge.config import LintSettings
from lintbridge.error_handling import wrap_handler
from lintbridge.linters.provider import LinterProvider
from lintbridge.linters.types import FixEdit, LintMessage
from lintbridge.logging import get_logger
from lintbridge.lsp.adapter import (
    fix_from_data,
    fix_to_workspace_edit,
    to_lsp_diagnostic,
)
from lintbridge.lsp.debounce import DebounceManager

FIX_ALL_KIND = "source.fixAll.lintbridge"

_PYTHON_SUFFIXES = (".py", ".pyi")


def _is_python_document(document: TextDocument) -> bool:
    if document.language_id == "python":
        return True
    return Path(document.path).suffix in _PYTHON_SUFFIXES


def _kind_value(kind: types.CodeActionKind | str) -> str:
    return kind.value if isinstance(kind, types.CodeActionKind) else str(kind)


def _kind_requested(kind: str, only: list[str] | None) -> bool:
    """Whether ``kind`` passes a codeAction ``only`` filter (hierarchical prefixes)."""
    if not only:
        return True
    return any(kind == k or kind.startswith(f"{k}.") for k in only)


def _non_overlapping(fixes: list[FixEdit]) -> list[FixEdit]:
    """Keep fixes in document order, dropping any that overlaps an earlier one."""
    selected: list[FixEdit] = []
    for fix in sorted(fixes, key=lambda f: (f.target_file, f.range.start, f.range.end)):
        if selected:
            previous = selected[-1]
            if (
                previous.target_file == fix.target_file
                and fix.range.start < previous.range.end
            ):
                continue
        selected.append(fix)
    return selected


def create_server(
    *,
    provider: LinterProvider | None = None,
    logger: logging.Logger | None = None,
    debounce_ms: int = 300,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        provider: Linter provider to use. If None, one with default settings is built.
        logger: Optional logger instance. If None, uses the lintbridge.lsp logger.
        debounce_ms: Delay between the last edit and the lint run.

    Returns:
        Configured LanguageServer instance.
    """
    if logger is None:
        logger = get_logger("lsp")
    if provider is None:
        provider = LinterProvider()

    server = LanguageServer("lintbridge", f"v{__version__}")
    debounce_manager = DebounceManager()
    base_settings = provider.settings
    # Latest lint result per URI, replaced wholesale on every run.
    published: dict[str, list[LintMessage]] = {}

    def _apply_settings(raw_settings: object) -> bool:
        # Pull-model clients send null here; the current settings stay.
        if not isinstance(raw_settings, Mapping):
            logger.debug("No settings mapping in payload, keeping %s", provider.settings)
            return False
        settings = LintSettings.from_mapping(raw_settings, defaults=base_settings)
        provider.update_settings(settings)
        logger.info("Applied linting settings: %s", settings)
        return True

    def _working_directory(document: TextDocument) -> str:
        root_path = server.workspace.root_path
        if root_path and Path(root_path).is_dir():
            return root_path
        return str(Path(document.path).parent)

    async def lint_and_publish(uri: str, document_version: int | None) -> None:
        """Lint a document and publish the result, unless it went stale meanwhile."""
        document = server.workspace.get_text_document(uri)
        if document is None or not _is_python_document(document):
            return

        if document_version is not None and document.version != document_version:
            logger.debug(
                "Skipping lint for %s: version mismatch (expected %s, got %s)",
                uri,
                document_version,
                document.version,
            )
            return

        messages = await provider.lint(
            document.source, document.path, cwd=_working_directory(document)
        )

        if document_version is not None and document.version != document_version:
            logger.debug("Discarding stale lint result for %s", uri)
            return

        published[uri] = messages
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=uri,
                diagnostics=[to_lsp_diagnostic(message) for message in messages],
                version=document_version,
            )
        )
        logger.debug(
            "Published %d diagnostics for %s (version %s)",
            len(messages),
            uri,
            document_version,
        )

    async def schedule_lint(uri: str) -> None:
        document = server.workspace.get_text_document(uri)
        if document is None:
            return
        version = document.version
        await debounce_manager.schedule(
            uri,
            lambda: lint_and_publish(uri, version),
            delay_ms=debounce_ms,
        )

    @server.feature(types.INITIALIZE)
    @wrap_handler(
        logger=logger,
        feature_name="initialize",
        default_factory=lambda: None,
    )
    def initialize(params: types.InitializeParams) -> None:
        """Read linting settings from initializationOptions."""
        if params.initialization_options is not None:
            _apply_settings(params.initialization_options)

    @server.feature(types.WORKSPACE_DID_CHANGE_CONFIGURATION)
    @wrap_handler(
        logger=logger,
        feature_name="workspace/didChangeConfiguration",
        default_factory=lambda: None,
    )
    async def did_change_configuration(
        params: types.DidChangeConfigurationParams,
    ) -> None:
        """Apply new settings and re-lint every open document."""
        if not _apply_settings(params.settings):
            return
        for uri in list(server.workspace.text_documents):
            await schedule_lint(uri)

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didOpen",
        default_factory=lambda: None,
    )
    async def did_open(params: types.DidOpenTextDocumentParams) -> None:
        logger.debug("Document opened: %s", params.text_document.uri)
        await schedule_lint(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didChange",
        default_factory=lambda: None,
    )
    async def did_change(params: types.DidChangeTextDocumentParams) -> None:
        logger.debug("Document changed: %s", params.text_document.uri)
        await schedule_lint(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_SAVE)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didSave",
        default_factory=lambda: None,
    )
    async def did_save(params: types.DidSaveTextDocumentParams) -> None:
        logger.debug("Document saved: %s", params.text_document.uri)
        await schedule_lint(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didClose",
        default_factory=lambda: None,
    )
    async def did_close(params: types.DidCloseTextDocumentParams) -> None:
        """Clear diagnostics and drop any pending lint."""
        uri = params.text_document.uri
        logger.debug("Document closed: %s", uri)

        await debounce_manager.cancel(uri)
        published.pop(uri, None)
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=[], version=None)
        )

    @server.feature(
        types.TEXT_DOCUMENT_CODE_ACTION,
        types.CodeActionOptions(
            code_action_kinds=[
                types.CodeActionKind.QuickFix,
                types.CodeActionKind.SourceFixAll,
            ],
            resolve_provider=False,
        ),
    )
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/codeAction",
        default_factory=list,
    )
    def code_action(params: types.CodeActionParams) -> list[types.CodeAction]:
        """Offer each diagnostic's fix, plus one action applying all of them."""
        only = [_kind_value(kind) for kind in params.context.only or []]
        actions: list[types.CodeAction] = []

        if _kind_requested(types.CodeActionKind.QuickFix.value, only):
            for diagnostic in params.context.diagnostics:
                fix = fix_from_data(diagnostic.data)
                if fix is None:
                    continue
                actions.append(
                    types.CodeAction(
                        title=f"{diagnostic.source}: fix {diagnostic.code}",
                        kind=types.CodeActionKind.QuickFix,
                        diagnostics=[diagnostic],
                        edit=fix_to_workspace_edit([fix]),
                        is_preferred=True,
                    )
                )

        if _kind_requested(FIX_ALL_KIND, only):
            messages = published.get(params.text_document.uri, [])
            fixes = _non_overlapping(
                [message.fix for message in messages if message.fix is not None]
            )
            if fixes:
                actions.append(
                    types.CodeAction(
                        title="lintbridge: fix all auto-fixable problems",
                        kind=FIX_ALL_KIND,
                        edit=fix_to_workspace_edit(fixes),
                    )
                )

        return actions

    return server
