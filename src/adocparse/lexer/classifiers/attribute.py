"""Attribute entry classifier mixin."""

from adocparse.patterns import PatternLibrary
from adocparse.tokens import LineKind, LineType


class AttributeEntryClassifierMixin:
    """Mixin providing document attribute entry classification."""

    _patterns: PatternLibrary

    def _try_classify_attribute_entry(self, line: str, lineno: int) -> LineKind | None:
        """Try to classify a line as ``:name: value``.

        ``:name!:`` and ``:!name:`` unset the attribute; the entry then
        carries ``text=None``.
        """
        if not line.startswith(":"):
            return None
        match = self._patterns.attribute_entry.match(line)
        if match is None:
            return None

        name = match.group(1)
        value: str | None = match.group(2) or ""
        if name.startswith("!") or name.endswith("!"):
            name = name.strip("!")
            value = None
        if not name:
            return None

        return LineKind(
            type=LineType.ATTRIBUTE_ENTRY,
            line=line,
            text=value,
            lineno=lineno,
            name=name,
        )
