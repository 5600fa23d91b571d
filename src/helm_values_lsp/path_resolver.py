"""Reconstruction of the key path at the cursor from raw indentation."""

from __future__ import annotations

from .constants import KEY_LINE_PATTERN, LEADING_WHITESPACE_PATTERN, PARTIAL_KEY_PATTERN
from .models import CursorPath


def indent_width(line: str) -> int:
    """Number of leading whitespace characters of a line."""
    match = LEADING_WHITESPACE_PATTERN.match(line)
    return len(match.group(1)) if match else 0


def resolve_cursor_path(lines: list[str], cursor_line: int) -> CursorPath:
    """Resolve the chain of keys enclosing a 1-based cursor line.

    Walks upward from the cursor collecting key lines whose indentation is
    strictly less than the last collected one, and stops after a key at
    indentation zero. Lines that do not look like ``key:`` are skipped.

    If the cursor line holds a key still being typed (no colon yet), its
    trimmed text becomes ``CursorPath.partial``.
    """
    if cursor_line < 1 or cursor_line > len(lines):
        return CursorPath()

    current_line = lines[cursor_line - 1]
    current_indent = indent_width(current_line)
    keys: list[str] = []

    for index in range(cursor_line - 2, -1, -1):
        line = lines[index]
        indent = indent_width(line)
        if indent >= current_indent:
            continue
        if line.lstrip().startswith("#"):
            continue

        match = KEY_LINE_PATTERN.match(line)
        if not match:
            continue

        keys.insert(0, match.group(1).strip())
        current_indent = indent
        if indent == 0:
            break

    partial = None
    partial_match = PARTIAL_KEY_PATTERN.match(current_line)
    if partial_match:
        partial = partial_match.group(1).strip()

    return CursorPath(keys=tuple(keys), partial=partial)
