"""Data models for helm-values-lsp."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class TypeTag(str, Enum):
    """Type of a scalar chart value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    LIST = "list"


@dataclass(frozen=True)
class Scalar:
    """A leaf of a chart values tree."""

    display_text: str
    type_tag: TypeTag


@dataclass(frozen=True)
class ObjectNode:
    """A mapping node of a chart values tree."""

    children: dict[str, ValueNode] = field(default_factory=dict)


ValueNode = Union[Scalar, ObjectNode]


@dataclass
class Block:
    """A document region anchored at a top-level key.

    ``start_line`` is 1-based. ``chart_ref`` is None when the key carries no
    chart annotation.
    """

    top_key: str
    chart_ref: str | None
    start_line: int


@dataclass(frozen=True)
class Entry:
    """One flattened node of a values tree, addressed by its full key path."""

    path: tuple[str, ...]
    is_object: bool
    sort_key: str
    scalar_text: str | None = None
    type_tag: TypeTag | None = None

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    @property
    def documentation(self) -> str:
        """Markdown documentation shown next to the completion."""
        if self.is_object:
            return f"# {self.dotted_path}\nObject."
        type_name = self.type_tag.value if self.type_tag else "unknown"
        return f"# {self.dotted_path}\nValue: `{self.scalar_text}`\nType: `{type_name}`"


@dataclass(frozen=True)
class CursorPath:
    """Chain of keys enclosing the cursor.

    ``keys`` holds the enclosing ancestors, outermost first. ``partial`` is the
    key being typed on the cursor line, if the line has no colon yet.
    """

    keys: tuple[str, ...] = ()
    partial: str | None = None

    @property
    def segments(self) -> tuple[str, ...]:
        if self.partial is None:
            return self.keys
        return (*self.keys, self.partial)


@dataclass(frozen=True)
class EditRange:
    """Replacement range on a single line, 0-based and end-exclusive."""

    line: int
    start: int
    end: int


@dataclass(frozen=True)
class Candidate:
    """A completion candidate handed to the host editor."""

    label: str
    insert_text: str
    sort_key: str
    kind: str
    edit_range: EditRange | None = None
    documentation: str | None = None


@dataclass
class CompletionContext:
    """Position of a completion request inside a document.

    ``line`` and ``character`` are 0-based, as in LSP.
    """

    document_name: str
    lines: list[str]
    line: int
    character: int

    @property
    def current_line(self) -> str:
        if 0 <= self.line < len(self.lines):
            return self.lines[self.line]
        return ""


class NoticeLevel(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A user-facing message produced while computing completions."""

    level: NoticeLevel
    message: str


@dataclass
class CompletionResult:
    """Outcome of one completion request."""

    candidates: list[Candidate] = field(default_factory=list)
    notices: list[Notice] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(notice.level is NoticeLevel.ERROR for notice in self.notices)
