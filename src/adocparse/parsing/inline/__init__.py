"""Inline span resolution for adocparse.

Provides InlineResolver / resolve_spans, attribute list parsing, and
flatten (the lossless inverse of resolution).
"""

from adocparse.nodes import flatten
from adocparse.parsing.inline.attributes import parse_attribute_list, unescape_brackets
from adocparse.parsing.inline.core import InlineResolver, resolve_spans

__all__ = [
    "InlineResolver",
    "flatten",
    "parse_attribute_list",
    "resolve_spans",
    "unescape_brackets",
]
