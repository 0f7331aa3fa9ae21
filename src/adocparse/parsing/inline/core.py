"""Inline span resolution.

Turns the accumulated text of a leaf block (or a title) into a tuple of
spans. The scan is left to right: at a character that can open a span the
matching pattern is tried; on a miss the character simply extends the
current literal run.

Resolution is lossless: ``flatten(resolve_spans(text)) == text`` for every
string, which makes resolving twice a no-op.

Thread Safety:
InlineResolver holds only a reference to the read-only pattern library.
One instance can be shared by any number of threads.

"""

from __future__ import annotations

from collections.abc import Callable

from adocparse.nodes import (
    AttributeReference,
    Emphasis,
    Inline,
    Monospace,
    Strong,
    Text,
)
from adocparse.parsing.charsets import INLINE_SPECIAL, WORD_BREAK
from adocparse.parsing.inline.attributes import parse_attribute_list, unescape_brackets
from adocparse.patterns import PATTERNS, PatternLibrary

# Opening character -> (pattern name, span factory) for the quoted forms
_QUOTED_SPANS: dict[str, tuple[str, Callable[[str], Inline]]] = {
    "*": ("strong", Strong),
    "_": ("emphasis", Emphasis),
    "`": ("monospace", Monospace),
}


class InlineResolver:
    """Resolves text into inline spans.

    Usage:
        >>> resolver = InlineResolver()
        >>> resolver.resolve("see [some text\\\\] here]")
        (Text(content='see '), AttributeReference(content='some text] here', ...))

    """

    __slots__ = ("_patterns",)

    def __init__(self, *, patterns: PatternLibrary = PATTERNS) -> None:
        self._patterns = patterns

    def resolve(self, text: str) -> tuple[Inline, ...]:
        """Resolve ``text`` into spans. Never fails.

        Unmatched syntax stays in Text spans; adjacent literal text is
        always emitted as a single Text span.
        """
        spans: list[Inline] = []
        literal_start = 0
        pos = 0
        length = len(text)

        while pos < length:
            if text[pos] not in INLINE_SPECIAL:
                pos += 1
                continue

            result = self._try_span(text, pos, literal_start)
            if result is None:
                pos += 1
                continue

            span, span_start, span_end = result
            if span_start > literal_start:
                spans.append(Text(text[literal_start:span_start]))
            spans.append(span)
            pos = literal_start = span_end

        if literal_start < length:
            spans.append(Text(text[literal_start:]))
        return tuple(spans)

    def _try_span(
        self, text: str, pos: int, literal_start: int
    ) -> tuple[Inline, int, int] | None:
        """Try every span form that can open at ``pos``.

        Returns:
            (span, start, end) or None. ``start`` precedes ``pos`` when a
            URI target is absorbed from the literal run.
        """
        char = text[pos]
        if char == "[":
            return self._try_attribute_reference(text, pos, literal_start)

        name, factory = _QUOTED_SPANS[char]
        match = self._patterns[name].match(text, pos)
        if match is None:
            return None
        return factory(match.group(1)), pos, match.end()

    def _try_attribute_reference(
        self, text: str, pos: int, literal_start: int
    ) -> tuple[Inline, int, int] | None:
        match = self._patterns.bracketed_attribute_list.match(text, pos)
        if match is None:
            return None

        raw = match.group(1)
        content = unescape_brackets(raw)
        attributes = parse_attribute_list(content, patterns=self._patterns)

        # A URI-like word directly before the bracket becomes the target
        word_start = pos
        while word_start > literal_start and text[word_start - 1] not in WORD_BREAK:
            word_start -= 1
        word = text[word_start:pos]
        target = None
        if word and self._patterns.uri_sniff.match(word):
            target = word
        else:
            word_start = pos

        span = AttributeReference(content=content, raw=raw, attributes=attributes, target=target)
        return span, word_start, match.end()


_DEFAULT_RESOLVER = InlineResolver()


def resolve_spans(text: str, *, patterns: PatternLibrary | None = None) -> tuple[Inline, ...]:
    """Resolve text into inline spans with the default (or given) patterns.

    Example:
        >>> resolve_spans("[some text\\\\] here]")[0].content
        'some text] here'
    """
    if patterns is None:
        return _DEFAULT_RESOLVER.resolve(text)
    return InlineResolver(patterns=patterns).resolve(text)
