"""Selection of the entries that complete the key path at the cursor."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .models import Entry


@dataclass(frozen=True)
class FilteredEntry:
    """An entry relabelled for the level at which it is offered."""

    label: str
    insert_text: str
    entry: Entry


def _insert_text(label: str, entry: Entry) -> str:
    if entry.is_object:
        return f"{label}:"
    return f"{label}: {entry.scalar_text}"


def filter_entries(
    entries: Sequence[Entry], path: Sequence[str], top_key: str
) -> list[FilteredEntry]:
    """Pick the entries one level below ``path`` inside a block.

    Args:
        entries: Flattened entries of the block's chart, objects first
        path: Key path at the cursor, starting with the block's top key
        top_key: Top-level key of the block

    Returns:
        Next-level entries, deduplicated by label with the first one kept
    """
    if path and path[0] != top_key:
        return []

    remaining = tuple(path[1:]) if path else ()
    depth = len(remaining)

    results: list[FilteredEntry] = []
    seen: set[str] = set()
    for entry in entries:
        if len(entry.path) != depth + 1 or entry.path[:depth] != remaining:
            continue
        label = entry.path[depth]
        if label in seen:
            continue
        seen.add(label)
        results.append(FilteredEntry(label=label, insert_text=_insert_text(label, entry), entry=entry))

    return results
