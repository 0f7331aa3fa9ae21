"""Admonition label classifier mixin."""

from adocparse.nodes import AdmonitionKind
from adocparse.patterns import PatternLibrary
from adocparse.tokens import LineKind, LineType


class AdmonitionClassifierMixin:
    """Mixin providing inline admonition classification."""

    _patterns: PatternLibrary

    def _try_classify_admonition(self, line: str, lineno: int) -> LineKind | None:
        """Try to classify a line as ``KIND: text``.

        The label and its separator are dropped from the payload text.
        """
        match = self._patterns.admonition_inline.match(line)
        if match is None:
            return None
        return LineKind(
            type=LineType.ADMONITION_START,
            line=line,
            text=line[match.end() :].strip(),
            lineno=lineno,
            admonition=AdmonitionKind(match.group(1)),
        )
