"""Exception classes for adocparse.

Parsing itself never raises: malformed markup degrades to plain text.
The exceptions below cover configuration, the pattern catalog, and the
optional timing monitor.
"""

from __future__ import annotations


class AdocError(Exception):
    """Base exception for all adocparse errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(AdocError):
    """Invalid processing configuration.

    Raised when a configuration is built (before any line is parsed),
    e.g. for an unrecognized safe mode.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            option: Name of the offending option (e.g., "safe_mode")
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Invalid option '{option}': {message}")


class PatternCompileError(AdocError):
    """A pattern in the catalog failed to compile.

    The catalog is fixed, so this surfaces at import time rather than
    per parse.
    """

    def __init__(self, name: str, expression: str, reason: str) -> None:
        """Initialize pattern compile error.

        Args:
            name: Catalog name of the pattern
            expression: The expression that failed to compile
            reason: Error reported by the regular expression engine
        """
        self.name = name
        self.expression = expression
        self.reason = reason
        super().__init__(f"Pattern '{name}' ({expression!r}) failed to compile: {reason}")


class NotMonitoredError(AdocError):
    """Timing was requested from a processor that is not monitored."""

    def __init__(self, phase: str) -> None:
        self.phase = phase
        super().__init__(f"No {phase}: current document is not monitored")
