"""List marker classifier mixin."""

from adocparse.nodes import ListKind
from adocparse.patterns import PatternLibrary
from adocparse.tokens import LineKind, LineType


class ListClassifierMixin:
    """Mixin providing list marker classification."""

    _patterns: PatternLibrary

    def _try_classify_list_marker(self, line: str, lineno: int) -> LineKind | None:
        """Try to classify a line as a list item marker.

        Unordered: ``*`` (depth = stars - 1) or ``-`` (depth 0).
        Ordered: ``.`` (depth = dots - 1) or ``N.`` (depth 0).
        The marker must be followed by whitespace and text.
        """
        match = self._patterns.list_marker.match(line)
        if match is None:
            return None

        marker = match.group(1)
        if marker[0] == "*":
            kind, depth = ListKind.UNORDERED, len(marker) - 1
        elif marker == "-":
            kind, depth = ListKind.UNORDERED, 0
        elif marker[0] == ".":
            kind, depth = ListKind.ORDERED, len(marker) - 1
        else:
            kind, depth = ListKind.ORDERED, 0

        return LineKind(
            type=LineType.LIST_MARKER,
            line=line,
            text=match.group(2),
            lineno=lineno,
            depth=depth,
            list_kind=kind,
        )
