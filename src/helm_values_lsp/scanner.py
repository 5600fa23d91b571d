"""Scanning of values documents into chart-annotated blocks."""

from __future__ import annotations

import logging

from .constants import CHART_ANNOTATION_PATTERN, TOP_LEVEL_KEY_PATTERN
from .models import Block

logger = logging.getLogger(__name__)


def _top_level_key(line: str) -> str | None:
    """Return the key of a zero-indent ``key:`` line, ignoring comments."""
    if line.startswith("#"):
        return None
    match = TOP_LEVEL_KEY_PATTERN.match(line)
    return match.group(1) if match else None


def scan_blocks(lines: list[str]) -> dict[str, Block]:
    """Scan document lines into blocks keyed by their top-level key.

    A chart annotation (``# @repo/chart``) either trails a top-level key on
    the same line or sits on a zero-indent comment line of its own, in which
    case it applies to the next top-level key, provided only blank and comment
    lines come in between. Annotations on indented lines are ignored. Top-level
    keys without an annotation open a block with no chart reference. A repeated
    key replaces the earlier block.

    Args:
        lines: Document lines

    Returns:
        Mapping of top-level key to Block, in commit order
    """
    blocks: dict[str, Block] = {}
    pending_chart: str | None = None

    for line_number, line in enumerate(lines, start=1):
        annotation = CHART_ANNOTATION_PATTERN.search(line)
        key = _top_level_key(line)

        if key is None:
            if line.startswith("#"):
                if annotation:
                    pending_chart = annotation.group(1)
            elif line.strip() and not line.lstrip().startswith("#"):
                # Annotations only carry over blank and comment lines
                pending_chart = None
            continue

        if annotation:
            pending_chart = annotation.group(1)

        if key in blocks:
            # Keep commit order meaningful for the last-wins rule
            del blocks[key]
        blocks[key] = Block(top_key=key, chart_ref=pending_chart, start_line=line_number)
        pending_chart = None

    logger.debug(f"Scanned {len(blocks)} block(s)")
    return blocks


def locate_block(blocks: dict[str, Block], cursor_line: int) -> Block | None:
    """Find the block containing a 1-based cursor line.

    The block is the one whose start line is the greatest value not after the
    cursor. Among blocks with equal start lines the most recently committed
    one wins.
    """
    current: Block | None = None
    for block in blocks.values():
        if block.start_line > cursor_line:
            continue
        if current is None or block.start_line >= current.start_line:
            current = block
    return current
