from __future__ import annotations

import logging

from lsprotocol.types import (
    COMPLETION_ITEM_RESOLVE,
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    CompletionItem,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    InitializeParams,
)

from ._server import CompletionMixin, DocumentMixin
from ._version import __version__

logger = logging.getLogger(__name__)


class HelmValuesLanguageServer(DocumentMixin, CompletionMixin):
    """Language Server for Helm values files."""


def _read_initialization_options(options) -> tuple[str | None, float | None]:
    if not isinstance(options, dict):
        return None, None

    helm_path = options.get("helmPath") or None
    fetch_timeout = options.get("fetchTimeout")
    if fetch_timeout is not None:
        try:
            fetch_timeout = float(fetch_timeout)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid fetchTimeout: {fetch_timeout!r}")
            fetch_timeout = None
    return helm_path, fetch_timeout


def create_server(
    helm_path: str | None = None, fetch_timeout: float | None = None
) -> HelmValuesLanguageServer:
    """Create the language server and register its features."""
    server = HelmValuesLanguageServer(
        "helm-values-lsp",
        __version__,
        helm_path=helm_path,
        fetch_timeout=fetch_timeout,
    )

    @server.feature(INITIALIZE)
    def initialize(params: InitializeParams) -> None:
        """Initialize the language server."""
        logger.info("Initializing Helm values LSP server")

        if params.workspace_folders:
            server.workspace_root = server._uri_to_path(params.workspace_folders[0].uri)
        elif params.root_uri:
            server.workspace_root = server._uri_to_path(params.root_uri)
        elif params.root_path:
            server.workspace_root = params.root_path

        option_helm_path, option_timeout = _read_initialization_options(
            params.initialization_options
        )
        if option_helm_path or option_timeout is not None:
            server.configure_provider(helm_path=option_helm_path, fetch_timeout=option_timeout)

        logger.info(f"Workspace root: {server.workspace_root}")

    @server.feature(TEXT_DOCUMENT_DID_OPEN)
    def did_open(params: DidOpenTextDocumentParams):
        """Handle document open event."""
        uri = params.text_document.uri
        server._update_document(uri, params.text_document.text)
        logger.info(f"Opened document: {uri}")

    @server.feature(TEXT_DOCUMENT_DID_CHANGE)
    def did_change(params: DidChangeTextDocumentParams):
        """Handle document change event."""
        server._apply_changes(params.text_document.uri, params.content_changes)

    @server.feature(TEXT_DOCUMENT_DID_CLOSE)
    def did_close(params: DidCloseTextDocumentParams):
        """Handle document close event."""
        server._close_document(params.text_document.uri)

    @server.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(resolve_provider=True))
    def completion(params: CompletionParams) -> CompletionList:
        """Provide chart value completions."""
        return server._get_completion_list(params.text_document.uri, params.position)

    @server.feature(COMPLETION_ITEM_RESOLVE)
    def completion_item_resolve(item: CompletionItem) -> CompletionItem:
        """Fill in documentation for a selected completion item."""
        return server._resolve_completion_item(item)

    return server
