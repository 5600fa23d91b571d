"""Flattening of chart values trees into addressable entries."""

from __future__ import annotations

from typing import Any

import yaml

from .models import Entry, ObjectNode, Scalar, TypeTag, ValueNode


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    return _canonical_text(key)


def _canonical_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def to_scalar(value: Any) -> Scalar:
    """Build the Scalar for a plain YAML value."""
    if isinstance(value, str):
        return Scalar(f'"{value}"', TypeTag.STRING)
    if isinstance(value, bool):
        return Scalar(_canonical_text(value), TypeTag.BOOLEAN)
    if isinstance(value, (int, float)):
        return Scalar(_canonical_text(value), TypeTag.NUMBER)
    if value is None:
        return Scalar("null", TypeTag.NULL)
    if isinstance(value, (list, tuple)):
        text = yaml.safe_dump(list(value), default_flow_style=True, width=float("inf"))
        return Scalar(text.strip(), TypeTag.LIST)
    # Dates and other YAML scalars
    return Scalar(str(value), TypeTag.STRING)


def to_value_node(data: Any) -> ValueNode:
    """Convert a loaded YAML document into a ValueNode tree."""
    if isinstance(data, dict):
        return ObjectNode({_key_text(key): to_value_node(value) for key, value in data.items()})
    return to_scalar(data)


def flatten_values(tree: ObjectNode) -> list[Entry]:
    """Flatten a values tree into entries ordered objects-first.

    Every key yields one entry, including keys of nested objects, which come
    after their own descendants in flattening order. Entries are returned
    sorted by ``sort_key``: objects (``a``) before scalars (``b``), each group
    in flattening order.
    """
    entries: list[Entry] = []
    _flatten_into(tree, (), entries)
    return sorted(entries, key=lambda entry: entry.sort_key)


def _flatten_into(node: ObjectNode, prefix: tuple[str, ...], entries: list[Entry]) -> None:
    for key, child in node.children.items():
        path = (*prefix, key)
        if isinstance(child, ObjectNode):
            _flatten_into(child, path, entries)
            entries.append(Entry(path=path, is_object=True, sort_key=f"a{len(entries):06d}"))
        else:
            entries.append(
                Entry(
                    path=path,
                    is_object=False,
                    sort_key=f"b{len(entries):06d}",
                    scalar_text=child.display_text,
                    type_tag=child.type_tag,
                )
            )
