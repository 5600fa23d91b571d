"""Document mixin keeping the text of open documents in sync."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .base import LSPServerBase

if TYPE_CHECKING:
    from lsprotocol.types import TextDocumentContentChangeEvent

logger = logging.getLogger(__name__)


def apply_content_change(content: str, change: TextDocumentContentChangeEvent) -> str:
    """Apply one incremental or full-text change to a document."""
    change_range = getattr(change, "range", None)
    if change_range is None:
        return change.text

    lines = content.split("\n")
    start, end = change_range.start, change_range.end

    prefix = lines[start.line][: start.character] if start.line < len(lines) else ""
    suffix = lines[end.line][end.character :] if end.line < len(lines) else ""

    replacement = (prefix + change.text + suffix).split("\n")
    lines[start.line : end.line + 1] = replacement
    return "\n".join(lines)


class DocumentMixin(LSPServerBase):
    """Tracks open documents in ``document_cache``."""

    def _update_document(self, uri: str, content: str) -> None:
        self.document_cache[uri] = {
            "content": content,
            "lines": content.split("\n"),
        }

    def _apply_changes(self, uri: str, changes: list[TextDocumentContentChangeEvent]) -> None:
        if uri not in self.document_cache:
            logger.debug(f"Change for unknown document {uri}")
            return

        content = self.document_cache[uri]["content"]
        for change in changes:
            content = apply_content_change(content, change)
        self._update_document(uri, content)

    def _close_document(self, uri: str) -> None:
        self.document_cache.pop(uri, None)
