"""Pattern library: the catalog of named, precompiled line and inline matchers.

Every recognizer used by the lexer and the inline resolver lives here.
The catalog is compiled once, at import time, into the immutable
``PATTERNS`` library. A malformed expression raises PatternCompileError
during import, never during a parse.

Matchers hold no per-call state, so one library is shared by reference
across every parse, in any number of threads.

Usage:
    >>> from adocparse.patterns import PATTERNS
    >>> PATTERNS.admonition_inline.match("NOTE: careful here").group(1)
    'NOTE'
    >>> PATTERNS["uri_sniff"].match("https://example.org").group(1)
    'https://'

The bracketed attribute list pattern captures the contents between square
brackets, ignoring escaped closing brackets:

    Pattern:  \\[((?:\\\\\\]|[^\\]])*?)\\]
    Matches:  [enclosed text here] or [enclosed [text\\] here]

"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from adocparse.errors import PatternCompileError

CC_ALPHA = "a-zA-Z"
CC_ALNUM = "a-zA-Z0-9"
CC_BLANK = r"[ \t]"

ADMONITION_STYLES: tuple[str, ...] = ("NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION")

# Characters that may form a delimited block fence (4 or more in a row)
DELIMITER_CHARS = "-.=*_+/"


@dataclass(frozen=True, slots=True)
class Pattern:
    """A named, precompiled matcher.

    Immutable and shared by reference; compiled regular expressions are
    safe for concurrent use.

    Attributes:
        name: Catalog name (e.g., "admonition_inline")
        expression: Source regular expression
        regex: Compiled expression

    """

    name: str
    expression: str
    regex: re.Pattern[str] = field(repr=False, compare=False)

    def match(self, text: str, pos: int = 0) -> re.Match[str] | None:
        """Match at ``pos`` (lookbehind assertions still see earlier text)."""
        return self.regex.match(text, pos)

    def search(self, text: str, pos: int = 0) -> re.Match[str] | None:
        return self.regex.search(text, pos)

    def fullmatch(self, text: str) -> re.Match[str] | None:
        return self.regex.fullmatch(text)

    def finditer(self, text: str) -> Iterator[re.Match[str]]:
        return self.regex.finditer(text)


def compile_pattern(name: str, expression: str) -> Pattern:
    """Compile one catalog entry.

    Args:
        name: Catalog name of the pattern
        expression: Regular expression source

    Returns:
        Immutable Pattern

    Raises:
        PatternCompileError: If the expression is malformed.
    """
    try:
        regex = re.compile(expression)
    except re.error as e:
        raise PatternCompileError(name, expression, str(e)) from e
    return Pattern(name=name, expression=expression, regex=regex)


PATTERN_EXPRESSIONS: Mapping[str, str] = MappingProxyType(
    {
        # NOTE: this is an inline admonition note
        "admonition_inline": rf"^({'|'.join(ADMONITION_STYLES)}):{CC_BLANK}",
        # http://domain, https://domain, data:info
        "uri_sniff": rf"^([{CC_ALPHA}][{CC_ALNUM}.+-]*:/{{0,2}})",
        # [enclosed text here] or [enclosed [text\] here]
        "bracketed_attribute_list": r"\[((?:\\\]|[^\]])*?)\]",
        # == Section Title  (optional symmetric closing run)
        "section_title": rf"^(={{1,6}}){CC_BLANK}+(\S.*?)(?:{CC_BLANK}+\1)?{CC_BLANK}*$",
        # * item, ** nested item, - item, . item, .. nested item, 1. item
        "list_marker": rf"^{CC_BLANK}*(\*{{1,5}}|-|\.{{1,5}}|\d{{1,9}}\.){CC_BLANK}+(\S.*?){CC_BLANK}*$",
        # ----, ...., ====, ****, ____, ++++, ////
        "delimiter": rf"^((?:{'|'.join(re.escape(c) + '{4,}' for c in DELIMITER_CHARS)})){CC_BLANK}*$",
        # :name: value, :name!:, :!name:
        "attribute_entry": rf"^:(!?[{CC_ALNUM}_][{CC_ALNUM}_-]*!?):(?:{CC_BLANK}+(.*?))?{CC_BLANK}*$",
        # name in a name=value attribute list entry
        "attribute_name": rf"[{CC_ALPHA}_][{CC_ALNUM}_-]*",
        # *strong*, _emphasis_, `monospace` (constrained forms)
        "strong": r"(?<![\w*])\*(?=\S)(.*?\S)\*(?![\w*])",
        "emphasis": r"(?<!\w)_(?=\S)(.*?\S)_(?!\w)",
        "monospace": r"(?<![\w`])`(?=\S)(.*?\S)`(?![\w`])",
    }
)


class PatternLibrary(Mapping[str, Pattern]):
    """Immutable, read-only collection of compiled patterns.

    Supports mapping access (``library["uri_sniff"]``) and attribute access
    for the well-known matchers (``library.uri_sniff``).

    Thread Safety:
        No mutation after construction. Safe to share across threads.

    """

    __slots__ = ("_patterns",)

    def __init__(self, patterns: Mapping[str, Pattern]) -> None:
        object.__setattr__(self, "_patterns", MappingProxyType(dict(patterns)))

    @classmethod
    def from_expressions(cls, expressions: Mapping[str, str]) -> PatternLibrary:
        """Compile every expression, failing fast on the first bad one."""
        return cls({name: compile_pattern(name, expr) for name, expr in expressions.items()})

    def __getitem__(self, name: str) -> Pattern:
        return self._patterns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __getattr__(self, name: str) -> Pattern:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._patterns[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __repr__(self) -> str:
        return f"PatternLibrary({', '.join(self._patterns)})"


# Compiled once at import; shared by every parse.
PATTERNS: PatternLibrary = PatternLibrary.from_expressions(PATTERN_EXPRESSIONS)


__all__ = [
    "ADMONITION_STYLES",
    "PATTERNS",
    "PATTERN_EXPRESSIONS",
    "Pattern",
    "PatternLibrary",
    "compile_pattern",
]
