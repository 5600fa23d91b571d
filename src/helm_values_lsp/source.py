"""Completion source for chart-annotated Helm values files."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from pathlib import PurePosixPath

from .cache import ValueCache, values_cache
from .completion_filter import filter_entries
from .constants import DEFAULT_DOCUMENTATION, TRAILING_TOKEN_PATTERN, VALUES_FILE_PATTERN
from .flattener import flatten_values
from .models import (
    Candidate,
    CompletionContext,
    CompletionResult,
    EditRange,
    Notice,
    NoticeLevel,
)
from .path_resolver import resolve_cursor_path
from .provider import FetchErrorKind, HelmValuesProvider, ValueFetchError, ValueTreeProvider
from .scanner import locate_block, scan_blocks

logger = logging.getLogger(__name__)


def is_values_file(document_name: str) -> bool:
    """Check whether a file name or path looks like a Helm values file."""
    return VALUES_FILE_PATTERN.match(PurePosixPath(document_name).name) is not None


def key_edit_range(context: CompletionContext) -> EditRange:
    """Range of the token being typed, from its first character to the cursor."""
    before_cursor = context.current_line[: context.character]
    match = TRAILING_TOKEN_PATTERN.search(before_cursor)
    start = match.start() if match else context.character
    return EditRange(line=context.line, start=start, end=len(before_cursor))


class HelmValuesSource:
    """Offers chart value keys for the block enclosing the cursor."""

    def __init__(
        self,
        provider: ValueTreeProvider | None = None,
        cache: ValueCache | None = None,
    ):
        self.provider = provider or HelmValuesProvider()
        self.cache = cache if cache is not None else values_cache

    def is_applicable(self, document_name: str) -> bool:
        return is_values_file(document_name)

    def get_completions(
        self, context: CompletionContext, cancel: threading.Event | None = None
    ) -> CompletionResult:
        """Compute the completion candidates at the context position.

        A set ``cancel`` event ends the request with an empty result at the
        next stage boundary; a helm call already running is not interrupted.
        """
        result = CompletionResult()
        cursor_line = context.line + 1

        block = locate_block(scan_blocks(context.lines), cursor_line)
        if block is None or block.chart_ref is None:
            return result

        if cancel is not None and cancel.is_set():
            return result

        try:
            tree = self.cache.get_or_fetch(block.chart_ref, self.provider)
        except ValueFetchError as e:
            if e.kind is FetchErrorKind.PARSE_FAILED:
                logger.error(f"Failed to parse values for chart {block.chart_ref}: {e.message}")
                level = NoticeLevel.ERROR
            else:
                logger.warning(f"Failed to fetch values for chart {block.chart_ref}: {e.message}")
                level = NoticeLevel.WARNING
            result.notices.append(Notice(level, e.message))
            return result

        if cancel is not None and cancel.is_set():
            return result

        cursor_path = resolve_cursor_path(context.lines, cursor_line)
        path = cursor_path.keys or cursor_path.segments
        edit_range = key_edit_range(context)

        for filtered in filter_entries(flatten_values(tree), path, block.top_key):
            entry = filtered.entry
            result.candidates.append(
                Candidate(
                    label=filtered.label,
                    insert_text=filtered.insert_text,
                    sort_key=entry.sort_key,
                    kind="object" if entry.is_object else entry.type_tag.value,
                    edit_range=edit_range,
                    documentation=entry.documentation,
                )
            )

        logger.debug(
            f"{len(result.candidates)} candidate(s) for {'.'.join(path) or '<root>'} "
            f"in chart {block.chart_ref}"
        )
        return result

    def resolve(self, candidate: Candidate) -> Candidate:
        """Fill in documentation for a candidate that has none."""
        if candidate.documentation:
            return candidate
        return replace(
            candidate, documentation=f"# {candidate.label}\n\n{DEFAULT_DOCUMENTATION}"
        )

    def execute(self, candidate: Candidate) -> tuple[EditRange | None, str]:
        """Return the edit that inserts a candidate: its range and new text."""
        return candidate.edit_range, candidate.insert_text
