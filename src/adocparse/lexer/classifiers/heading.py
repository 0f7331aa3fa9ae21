"""Section title classifier mixin."""

from adocparse.patterns import PatternLibrary
from adocparse.tokens import LineKind, LineType


class HeadingClassifierMixin:
    """Mixin providing section title classification."""

    _patterns: PatternLibrary

    def _try_classify_section_title(self, line: str, lineno: int) -> LineKind | None:
        """Try to classify a line as a section title.

        A title is a run of 1-6 ``=`` at line start, whitespace, then text.
        A closing run of the same length (``== Title ==``) is dropped.
        The level is the run length minus one, so ``= Title`` is level 0.

        Returns:
            LineKind if the line is a title, None otherwise.
        """
        if not line.startswith("="):
            return None
        match = self._patterns.section_title.match(line)
        if match is None:
            return None
        return LineKind(
            type=LineType.SECTION_TITLE,
            line=line,
            text=match.group(2),
            lineno=lineno,
            level=len(match.group(1)) - 1,
        )
