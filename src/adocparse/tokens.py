"""Line classifications produced by the lexer.

The lexer turns every input line into one LineKind; the parser folds over
them. Each LineKind has a type plus the payload that type needs
(section level, list kind and depth, delimiter tag, admonition kind,
attribute name and value) and the remaining text of the line.

Thread Safety:
LineKind and ClassifyContext are frozen (immutable) and safe to share.
LineType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from adocparse.nodes import AdmonitionKind, ListKind


class LineType(Enum):
    """Structural role of one input line."""

    BLANK = auto()
    SECTION_TITLE = auto()  # == Title
    LIST_MARKER = auto()  # * item, . item
    DELIMITER_OPEN = auto()  # ---- (opening)
    DELIMITER_CLOSE = auto()  # ---- (matching)
    ADMONITION_START = auto()  # NOTE: text
    ATTRIBUTE_ENTRY = auto()  # :name: value
    PLAIN = auto()  # Anything else, or verbatim delimited content


@dataclass(frozen=True, slots=True)
class ClassifyContext:
    """The left-to-right state a line's role depends on.

    Attributes:
        previous_line_blank: Whether the preceding line was blank. Tracked
            for callers; the classification cascade does not consult it.
        open_delimiter: Tag of the delimited block currently open, if any

    """

    previous_line_blank: bool = True
    open_delimiter: str | None = None


@dataclass(frozen=True, slots=True)
class LineKind:
    """A classified line.

    Attributes:
        type: Structural role
        line: The raw line as given
        text: Payload text (title, item text, admonition body, attribute
            value); the raw line for PLAIN
        lineno: 1-indexed line number (0 when classified in isolation)
        level: Section level for SECTION_TITLE
        depth: Nesting depth for LIST_MARKER
        list_kind: Ordered/unordered for LIST_MARKER
        tag: Delimiter for DELIMITER_OPEN / DELIMITER_CLOSE
        admonition: Kind for ADMONITION_START
        name: Attribute name for ATTRIBUTE_ENTRY (unset entries have text None)

    """

    type: LineType
    line: str
    text: str | None = None
    lineno: int = 0
    level: int = -1
    depth: int = -1
    list_kind: ListKind | None = None
    tag: str | None = None
    admonition: AdmonitionKind | None = None
    name: str | None = None

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.line
        if len(val) > 20:
            val = val[:17] + "..."
        return f"LineKind({self.type.name}, {val!r}, {self.lineno})"
