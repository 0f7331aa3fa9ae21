"""Lexer operating modes and delimited block styles."""

from __future__ import annotations

from enum import Enum, auto
from types import MappingProxyType


class LexerMode(Enum):
    """Lexer operating modes.

    The lexer switches between modes based on context:
    - BLOCK: Between blocks, scanning for block starts
    - DELIMITED: Inside a delimited block, every line is verbatim

    """

    BLOCK = auto()
    DELIMITED = auto()


# Delimiter character -> block style
DELIMITER_STYLES = MappingProxyType(
    {
        "-": "listing",
        ".": "literal",
        "=": "example",
        "*": "sidebar",
        "_": "quote",
        "+": "pass",
        "/": "comment",
    }
)


def delimiter_style(tag: str) -> str:
    """Block style for a delimiter tag (e.g., "----" -> "listing")."""
    return DELIMITER_STYLES.get(tag[:1], "open")
