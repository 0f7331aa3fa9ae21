"""Line classifier and lexer.

Classification is a fixed-priority cascade over one line plus the
ClassifyContext that left-to-right scanning has accumulated:

1. An open delimited block swallows every line (verbatim PLAIN) except
   its exact closing delimiter.
2. Blank line.
3. Section title.
4. List marker (wins over an admonition label on the same line).
5. Opening delimiter.
6. Admonition label.
7. Attribute entry.
8. Plain text.

No line is ever rejected: anything unrecognized is PLAIN.

Thread Safety:
Lexer instances are single-use. Create one per line sequence.
All state is instance-local; the pattern library is read-only.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from adocparse.lexer.classifiers import (
    AdmonitionClassifierMixin,
    AttributeEntryClassifierMixin,
    DelimiterClassifierMixin,
    HeadingClassifierMixin,
    ListClassifierMixin,
)
from adocparse.lexer.modes import LexerMode
from adocparse.patterns import PATTERNS, PatternLibrary
from adocparse.tokens import ClassifyContext, LineKind, LineType


class Lexer(
    HeadingClassifierMixin,
    ListClassifierMixin,
    DelimiterClassifierMixin,
    AdmonitionClassifierMixin,
    AttributeEntryClassifierMixin,
):
    """Classifies a sequence of lines, tracking delimiter state.

    Usage:
            >>> lexer = Lexer(["== Title", "", "NOTE: careful here"])
            >>> for kind in lexer.tokenize():
            ...     print(kind)
        LineKind(SECTION_TITLE, '== Title', 1)
        LineKind(BLANK, '', 2)
        LineKind(ADMONITION_START, 'NOTE: careful here', 3)

    Thread Safety:
        Lexer instances are single-use. All state is instance-local.

    """

    __slots__ = (
        "_lines",
        "_patterns",
        "_mode",
        "_open_delimiter",
        "_previous_line_blank",
    )

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        patterns: PatternLibrary = PATTERNS,
    ) -> None:
        """Initialize lexer.

        Args:
            lines: Input lines; trailing newline characters are ignored
            patterns: Pattern library to classify with
        """
        self._lines = lines
        self._patterns = patterns
        self._mode = LexerMode.BLOCK
        self._open_delimiter: str | None = None
        self._previous_line_blank = True

    @property
    def context(self) -> ClassifyContext:
        """Snapshot of the state the next line will be classified with."""
        return ClassifyContext(
            previous_line_blank=self._previous_line_blank,
            open_delimiter=self._open_delimiter,
        )

    def tokenize(self) -> Iterator[LineKind]:
        """Classify every line in order.

        Yields:
            One LineKind per input line

        Complexity: O(n) in the number of lines
        """
        for lineno, raw in enumerate(self._lines, start=1):
            line = raw.rstrip("\r\n")
            kind = self.classify(line, self.context, lineno)
            self._advance(kind)
            yield kind

    def _advance(self, kind: LineKind) -> None:
        """Update mode and context after classifying one line."""
        if kind.type is LineType.DELIMITER_OPEN:
            self._mode = LexerMode.DELIMITED
            self._open_delimiter = kind.tag
        elif kind.type is LineType.DELIMITER_CLOSE:
            self._mode = LexerMode.BLOCK
            self._open_delimiter = None
        self._previous_line_blank = kind.type is LineType.BLANK

    def classify(self, line: str, context: ClassifyContext, lineno: int = 0) -> LineKind:
        """Determine the structural role of one line.

        Args:
            line: Line content without its trailing newline
            context: Accumulated left-to-right state
            lineno: Line number to record (0 when classifying in isolation)

        Returns:
            LineKind describing the line.
        """
        if context.open_delimiter is not None:
            if self._is_closing_delimiter(line, context.open_delimiter):
                return LineKind(
                    type=LineType.DELIMITER_CLOSE,
                    line=line,
                    lineno=lineno,
                    tag=context.open_delimiter,
                )
            return LineKind(type=LineType.PLAIN, line=line, text=line, lineno=lineno)

        if not line.strip():
            return LineKind(type=LineType.BLANK, line=line, lineno=lineno)

        kind = (
            self._try_classify_section_title(line, lineno)
            or self._try_classify_list_marker(line, lineno)
            or self._try_classify_delimiter_open(line, lineno)
            or self._try_classify_admonition(line, lineno)
            or self._try_classify_attribute_entry(line, lineno)
        )
        if kind is not None:
            return kind
        return LineKind(type=LineType.PLAIN, line=line, text=line, lineno=lineno)


_DEFAULT_CONTEXT = ClassifyContext()


def classify(
    line: str,
    context: ClassifyContext | None = None,
    *,
    patterns: PatternLibrary = PATTERNS,
) -> LineKind:
    """Classify a single line in isolation.

    Example:
        >>> classify("== Title").level
        1
        >>> classify("== Title", ClassifyContext(open_delimiter="----")).type
        <LineType.PLAIN: 8>
    """
    return Lexer(patterns=patterns).classify(line, context or _DEFAULT_CONTEXT)
