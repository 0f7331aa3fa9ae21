"""Opt-in timing of the read, parse, render and write phases.

Timing wraps calls to the core; nothing inside the lexer or parser knows
about it. Zero overhead when disabled (get_monitor() returns None).

Example:
    from adocparse import load_file
    from adocparse.monitoring import monitored

    with monitored() as monitor:
        doc = load_file("guide.adoc")

    print(monitor.summary())
    # {"read_ms": 0.3, "parse_ms": 1.2, "load_ms": 1.5, ...}

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from adocparse.utils.logger import get_logger

logger = get_logger(__name__)

PHASES: tuple[str, ...] = ("read", "parse", "render", "write")


@dataclass
class Monitor:
    """Accumulated phase durations, in seconds.

    Attributes:
        read_time: Time spent reading input into lines
        parse_time: Time spent assembling the document
        render_time: Time spent in the renderer
        write_time: Time spent writing output

    """

    read_time: float = 0.0
    parse_time: float = 0.0
    render_time: float = 0.0
    write_time: float = 0.0

    def record(self, phase: str, seconds: float) -> None:
        """Add a measured duration to a phase.

        Raises:
            ValueError: If ``phase`` is not one of PHASES.
        """
        if phase not in PHASES:
            msg = f"Unknown phase {phase!r}; expected one of {', '.join(PHASES)}"
            raise ValueError(msg)
        attr = f"{phase}_time"
        setattr(self, attr, getattr(self, attr) + seconds)

    @contextmanager
    def timed(self, phase: str) -> Iterator[None]:
        """Time the enclosed block and record it under ``phase``.

        The duration is recorded even if the block raises.
        """
        if phase not in PHASES:
            msg = f"Unknown phase {phase!r}; expected one of {', '.join(PHASES)}"
            raise ValueError(msg)
        start = perf_counter()
        try:
            yield
        finally:
            elapsed = perf_counter() - start
            self.record(phase, elapsed)
            logger.debug("%s took %.3f ms", phase, elapsed * 1000)

    @property
    def load_time(self) -> float:
        """Read plus parse."""
        return self.read_time + self.parse_time

    @property
    def load_render_time(self) -> float:
        """Load plus render."""
        return self.load_time + self.render_time

    @property
    def total_time(self) -> float:
        """Load, render and write."""
        return self.load_render_time + self.write_time

    def summary(self) -> dict[str, Any]:
        """Get all durations in milliseconds.

        Returns:
            Dict with read_ms, parse_ms, render_ms, write_ms, load_ms,
            load_render_ms and total_ms.

        """
        return {
            "read_ms": round(self.read_time * 1000, 3),
            "parse_ms": round(self.parse_time * 1000, 3),
            "render_ms": round(self.render_time * 1000, 3),
            "write_ms": round(self.write_time * 1000, 3),
            "load_ms": round(self.load_time * 1000, 3),
            "load_render_ms": round(self.load_render_time * 1000, 3),
            "total_ms": round(self.total_time * 1000, 3),
        }


# Module-level ContextVar
_monitor: ContextVar[Monitor | None] = ContextVar(
    "monitor",
    default=None,
)


def get_monitor() -> Monitor | None:
    """Get the active monitor (None if monitoring is disabled)."""
    return _monitor.get()


@contextmanager
def monitored(monitor: Monitor | None = None) -> Iterator[Monitor]:
    """Context manager that activates a monitor for the current context.

    Args:
        monitor: Monitor to accumulate into (a new one if omitted)

    Yields:
        The active Monitor.

    Example:
        with monitored() as monitor:
            doc = parse(source)
        print(monitor.parse_time)

    """
    active = monitor if monitor is not None else Monitor()
    token: Token[Monitor | None] = _monitor.set(active)
    try:
        yield active
    finally:
        _monitor.reset(token)


@contextmanager
def timed(phase: str, monitor: Monitor | None = None) -> Iterator[None]:
    """Time a block into ``monitor``, else the active monitor, else nowhere."""
    target = monitor if monitor is not None else _monitor.get()
    if target is None:
        yield
        return
    with target.timed(phase):
        yield


__all__ = [
    "PHASES",
    "Monitor",
    "get_monitor",
    "monitored",
    "timed",
]
