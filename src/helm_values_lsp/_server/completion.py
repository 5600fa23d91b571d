"""Completion mixin turning chart value candidates into LSP items."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    InsertTextFormat,
    MarkupContent,
    MarkupKind,
    MessageType,
    Position,
    Range,
    TextEdit,
)

from helm_values_lsp.models import Candidate, CompletionContext, NoticeLevel

from .base import LSPServerBase

if TYPE_CHECKING:
    from helm_values_lsp.models import Notice

logger = logging.getLogger(__name__)

_KIND_MAP = {
    "object": CompletionItemKind.Field,
    "string": CompletionItemKind.Text,
    "number": CompletionItemKind.Constant,
    "boolean": CompletionItemKind.Keyword,
}

_MESSAGE_TYPES = {
    NoticeLevel.WARNING: MessageType.Warning,
    NoticeLevel.ERROR: MessageType.Error,
}


class CompletionMixin(LSPServerBase):
    """Provides chart value completions for the LSP server."""

    def _get_completion_list(self, uri: str, position: Position) -> CompletionList:
        """Compute the completion list for a position; always returns a list."""
        empty = CompletionList(is_incomplete=False, items=[])

        if uri not in self.document_cache:
            return empty

        document_name = self._uri_to_path(uri)
        if not self.source.is_applicable(document_name):
            return empty

        lines = self.document_cache[uri]["lines"]
        if position.line >= len(lines):
            return empty

        context = CompletionContext(
            document_name=document_name,
            lines=lines,
            line=position.line,
            character=position.character,
        )
        result = self.source.get_completions(context)
        self._show_notices(result.notices)

        items = [self._candidate_to_item(candidate) for candidate in result.candidates]
        return CompletionList(is_incomplete=False, items=items)

    def _show_notices(self, notices: list[Notice]) -> None:
        for notice in notices:
            self.show_message(notice.message, _MESSAGE_TYPES[notice.level])

    def _candidate_to_item(self, candidate: Candidate) -> CompletionItem:
        text_edit = None
        if candidate.edit_range is not None:
            edit_range = candidate.edit_range
            text_edit = TextEdit(
                range=Range(
                    start=Position(line=edit_range.line, character=edit_range.start),
                    end=Position(line=edit_range.line, character=edit_range.end),
                ),
                new_text=candidate.insert_text,
            )

        documentation = None
        if candidate.documentation:
            documentation = MarkupContent(kind=MarkupKind.Markdown, value=candidate.documentation)

        return CompletionItem(
            label=candidate.label,
            kind=_KIND_MAP.get(candidate.kind, CompletionItemKind.Value),
            detail=candidate.kind,
            documentation=documentation,
            sort_text=candidate.sort_key,
            filter_text=candidate.label,
            insert_text=candidate.insert_text,
            insert_text_format=InsertTextFormat.PlainText,
            text_edit=text_edit,
        )

    def _resolve_completion_item(self, item: CompletionItem) -> CompletionItem:
        """Add default documentation to an item that lacks it."""
        if item.documentation:
            return item

        candidate = Candidate(
            label=item.label,
            insert_text=item.insert_text or item.label,
            sort_key=item.sort_text or "",
            kind=item.detail or "",
        )
        resolved = self.source.resolve(candidate)

        item = copy.copy(item)
        item.documentation = MarkupContent(kind=MarkupKind.Markdown, value=resolved.documentation)
        return item
