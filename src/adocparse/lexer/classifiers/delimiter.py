"""Delimited block classifier mixin."""

from adocparse.patterns import PatternLibrary
from adocparse.tokens import LineKind, LineType


class DelimiterClassifierMixin:
    """Mixin providing delimiter open/close classification."""

    _patterns: PatternLibrary

    def _try_classify_delimiter_open(self, line: str, lineno: int) -> LineKind | None:
        """Try to classify a line as an opening delimiter.

        A delimiter is four or more of the same character from ``-.=*_+/``,
        alone on the line. The tag is the run itself; only the identical
        run closes the block.
        """
        match = self._patterns.delimiter.match(line)
        if match is None:
            return None
        return LineKind(
            type=LineType.DELIMITER_OPEN,
            line=line,
            lineno=lineno,
            tag=match.group(1),
        )

    def _is_closing_delimiter(self, line: str, open_delimiter: str) -> bool:
        """Check if line closes the block opened by ``open_delimiter``."""
        return line.rstrip() == open_delimiter
