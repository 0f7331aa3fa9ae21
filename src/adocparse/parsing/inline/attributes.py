"""Bracketed attribute list parsing.

The interior of ``[...]`` is a comma-separated list. Entries of the form
``name=value`` are named; anything else is positional. Values may be
quoted with ``"`` or ``'`` to include commas.

Parsing is best-effort: an interior whose quotes never close is kept as
one positional attribute instead of being discarded.
"""

from __future__ import annotations

from adocparse.nodes import Attribute
from adocparse.parsing.charsets import ATTRIBUTE_QUOTES
from adocparse.patterns import PATTERNS, PatternLibrary


def unescape_brackets(raw: str) -> str:
    """Replace escaped closing brackets (``\\]``) with ``]``."""
    return raw.replace("\\]", "]")


def parse_attribute_list(
    interior: str, *, patterns: PatternLibrary = PATTERNS
) -> tuple[Attribute, ...]:
    """Parse an (already un-escaped) bracket interior.

    Example:
        >>> parse_attribute_list('lead, role="a, b"')
        (Attribute(name=None, value='lead'), Attribute(name='role', value='a, b'))

    Returns:
        Attributes in source order; empty for a blank interior.
    """
    if not interior.strip():
        return ()

    entries = _split_entries(interior)
    if entries is None:
        return (Attribute(None, interior),)

    attributes: list[Attribute] = []
    for entry in entries:
        name, sep, value = entry.partition("=")
        name = name.strip()
        if sep and patterns.attribute_name.fullmatch(name):
            attributes.append(Attribute(name, _unquote(value.strip())))
        else:
            attributes.append(Attribute(None, _unquote(entry.strip())))
    return tuple(attributes)


def _split_entries(interior: str) -> list[str] | None:
    """Split on commas outside quotes; None if a quote is left open."""
    entries: list[str] = []
    current: list[str] = []
    quote = ""
    pos = 0
    length = len(interior)
    while pos < length:
        char = interior[pos]
        if quote:
            if char == "\\" and pos + 1 < length and interior[pos + 1] == quote:
                current.append(char)
                current.append(quote)
                pos += 2
                continue
            if char == quote:
                quote = ""
        elif char in ATTRIBUTE_QUOTES:
            # A quote only opens at the start of an entry or of a value
            prefix = "".join(current).strip(" \t")
            if not prefix or prefix.endswith("="):
                quote = char
        elif char == ",":
            entries.append("".join(current))
            current = []
            pos += 1
            continue
        current.append(char)
        pos += 1

    if quote:
        return None
    entries.append("".join(current))
    return entries


def _unquote(value: str) -> str:
    """Strip one pair of matching quotes and their escapes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ATTRIBUTE_QUOTES:
        quote = value[0]
        return value[1:-1].replace("\\" + quote, quote)
    return value
