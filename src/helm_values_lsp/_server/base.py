"""Base class for LSP server with interface for mixins."""

from __future__ import annotations

from typing import Any
from urllib.parse import unquote, urlsplit

from pygls.server import LanguageServer

from helm_values_lsp.cache import values_cache
from helm_values_lsp.provider import HelmValuesProvider
from helm_values_lsp.source import HelmValuesSource


class LSPServerBase(LanguageServer):
    """Base class defining the interface needed by mixins.

    This class provides the minimal interface that mixins expect,
    reducing the need for verbose type annotations in mixin methods.
    """

    def __init__(
        self,
        *args,
        helm_path: str | None = None,
        fetch_timeout: float | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.workspace_root: str | None = None
        self.document_cache: dict[str, dict[str, Any]] = {}
        self.source = HelmValuesSource(
            provider=HelmValuesProvider(helm_path=helm_path, timeout=fetch_timeout),
            cache=values_cache,
        )

    def _uri_to_path(self, uri: str) -> str:
        """Convert URI to file path."""
        return unquote(urlsplit(uri).path)

    def configure_provider(
        self, helm_path: str | None = None, fetch_timeout: float | None = None
    ) -> None:
        """Replace the helm settings used to fetch chart values."""
        current = self.source.provider
        if isinstance(current, HelmValuesProvider):
            helm_path = helm_path or current.helm_path
            if fetch_timeout is None:
                fetch_timeout = current.timeout
        self.source.provider = HelmValuesProvider(helm_path=helm_path, timeout=fetch_timeout)
