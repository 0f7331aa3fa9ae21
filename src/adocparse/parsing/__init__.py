"""Parsing subsystem for adocparse.

Provides the building blocks the block assembler composes:
- `SectionStack` / `ListStack`: explicit container stacks owned by one parse
- `InlineResolver` / `resolve_spans`: inline span resolution for leaf text

Example:
    >>> from adocparse.parsing import resolve_spans
    >>> resolve_spans("see *this*")
    (Text(content='see '), Strong(content='this'))

"""

from adocparse.parsing.containers import ListFrame, ListStack, SectionFrame, SectionStack
from adocparse.parsing.inline import InlineResolver, flatten, resolve_spans

__all__ = [
    "InlineResolver",
    "ListFrame",
    "ListStack",
    "SectionFrame",
    "SectionStack",
    "flatten",
    "resolve_spans",
]
