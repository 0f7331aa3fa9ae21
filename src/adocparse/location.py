"""Source location tracking for blocks and sections.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Line span of a block or section in the input.

    All positions are 1-indexed.

    Attributes:
        lineno: First line of the construct
        end_lineno: Last line of the construct (optional)
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(3, 5, "guide.adoc")
            >>> str(loc)
            'guide.adoc:3'

    """

    lineno: int
    end_lineno: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for messages.

        Returns:
            Formatted string like "file.adoc:10" or "10"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}"
        return str(self.lineno)
