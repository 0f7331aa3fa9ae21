"""Typed document tree for adocparse.

All nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads and with renderers
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Document
├── Section
├── Block (leaf structural units)
│   ├── Paragraph
│   ├── ListItem
│   ├── Admonition
│   └── DelimitedBlock
└── Inline (spans)
    ├── Text
    ├── Strong
    ├── Emphasis
    ├── Monospace
    └── AttributeReference

Spans never carry source positions; blocks and sections carry a
SourceLocation with line numbers only.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from adocparse.config import ParseConfig
from adocparse.location import SourceLocation


class ListKind(Enum):
    """Kind of list a ListItem belongs to."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


class AdmonitionKind(Enum):
    """Labels recognized at the start of an admonition paragraph."""

    NOTE = "NOTE"
    TIP = "TIP"
    IMPORTANT = "IMPORTANT"
    WARNING = "WARNING"
    CAUTION = "CAUTION"


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes."""


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text."""

    content: str

    @property
    def source(self) -> str:
        return self.content


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text.

    Markup: *text*

    """

    content: str

    @property
    def source(self) -> str:
        return f"*{self.content}*"


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markup: _text_

    """

    content: str

    @property
    def source(self) -> str:
        return f"_{self.content}_"


@dataclass(frozen=True, slots=True)
class Monospace(Node):
    """Monospaced text.

    Markup: `text`

    """

    content: str

    @property
    def source(self) -> str:
        return f"`{self.content}`"


@dataclass(frozen=True, slots=True)
class Attribute:
    """One entry of a bracketed attribute list.

    Positional entries have ``name=None``.
    """

    name: str | None
    value: str


@dataclass(frozen=True, slots=True)
class AttributeReference(Node):
    """Span extracted from bracketed syntax.

    Markup: [text], [role=lead,"a, b"], https://example.org[Example]

    Attributes:
        content: Bracket interior with ``\\]`` un-escaped
        raw: Bracket interior exactly as written
        attributes: Interior parsed as a comma-separated attribute list
        target: URI-like prefix written directly before the bracket, if any

    """

    content: str
    raw: str
    attributes: tuple[Attribute, ...] = ()
    target: str | None = None

    @property
    def source(self) -> str:
        return f"{self.target or ''}[{self.raw}]"


type Inline = Text | Strong | Emphasis | Monospace | AttributeReference


def flatten(spans: tuple[Inline, ...]) -> str:
    """Concatenate spans back into the exact text they were resolved from."""
    return "".join(span.source for span in spans)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph: consecutive plain lines, separated by blank lines."""

    location: SourceLocation
    children: tuple[Inline, ...]

    @property
    def text(self) -> str:
        return flatten(self.children)


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item.

    Markup: ``* item`` / ``- item`` (unordered), ``. item`` / ``1. item``
    (ordered). Repeating the marker (``**``, ``..``) nests one level deeper.

    Attributes:
        kind: Ordered or unordered
        depth: Nesting depth (0 for top-level markers)
        children: Item text as inline spans
        items: Nested items of greater depth

    """

    location: SourceLocation
    kind: ListKind
    depth: int
    children: tuple[Inline, ...]
    items: tuple[ListItem, ...] = ()

    @property
    def text(self) -> str:
        return flatten(self.children)


@dataclass(frozen=True, slots=True)
class Admonition(Node):
    """Labeled callout paragraph.

    Markup: NOTE: text

    The label is not part of ``children``.

    """

    location: SourceLocation
    kind: AdmonitionKind
    children: tuple[Inline, ...]

    @property
    def text(self) -> str:
        return flatten(self.children)


@dataclass(frozen=True, slots=True)
class DelimitedBlock(Node):
    """Verbatim block bounded by matching delimiter lines.

    Content is preserved line for line and never inline-resolved.
    The delimiter lines themselves are not part of ``lines``.

    Attributes:
        tag: Opening delimiter (e.g., "----")
        style: Block style derived from the delimiter character
        lines: Verbatim content lines
        restricted: Passthrough content that the safe mode does not allow

    """

    location: SourceLocation
    tag: str
    style: str
    lines: tuple[str, ...]
    restricted: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


type Block = Paragraph | ListItem | Admonition | DelimitedBlock


@dataclass(frozen=True, slots=True)
class Section(Node):
    """Titled container.

    Markup: == Title (level = number of ``=`` minus one)

    Every nested Section has a level greater than its parent's.

    """

    location: SourceLocation
    level: int
    title: str
    title_spans: tuple[Inline, ...]
    children: tuple[Section | Block, ...]

    @property
    def sections(self) -> tuple[Section, ...]:
        return tuple(child for child in self.children if isinstance(child, Section))

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(child for child in self.children if not isinstance(child, Section))


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root of the tree.

    Attributes:
        title: Text of the leading level-0 title, if any
        title_spans: The title as inline spans
        children: Top-level sections and blocks
        attributes: Document attributes (overrides plus attribute entries)
        config: Configuration snapshot used for the parse

    """

    location: SourceLocation
    children: tuple[Section | Block, ...]
    title: str | None = None
    title_spans: tuple[Inline, ...] = ()
    attributes: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    config: ParseConfig = field(default_factory=ParseConfig)

    @property
    def sections(self) -> tuple[Section, ...]:
        return tuple(child for child in self.children if isinstance(child, Section))

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(child for child in self.children if not isinstance(child, Section))


__all__ = [
    "Admonition",
    "AdmonitionKind",
    "Attribute",
    "AttributeReference",
    "Block",
    "DelimitedBlock",
    "Document",
    "Emphasis",
    "Inline",
    "ListItem",
    "ListKind",
    "Monospace",
    "Node",
    "Paragraph",
    "Section",
    "Strong",
    "Text",
    "flatten",
]
