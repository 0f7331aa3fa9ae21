"""
adocparse: AsciiDoc-style document parser for Python

Turns lightweight-markup text into an immutable, typed document tree:
nested sections, paragraphs, list items, admonitions and delimited blocks,
with inline spans (strong, emphasis, monospace, bracketed attribute
references) resolved inside each block. Rendering is left to a separate
collaborator implementing DocumentRenderer. Zero runtime dependencies.

Quick Start:
    >>> from adocparse import parse
    >>> doc = parse("= Guide\\n\\n== Install\\n\\nNOTE: Run *pip* first.")
    >>> doc.title
    'Guide'
    >>> section = doc.sections[0]
    >>> section.title, section.children[0].kind.name
    ('Install', 'NOTE')

    >>> # Or use the high-level processor, with timings
    >>> from adocparse import Asciidoc
    >>> processor = Asciidoc({"safe": "server"}).monitor()
    >>> doc = processor.load_file("guide.adoc")
    >>> processor.timings["parse_ms"]
    0.412

Installation:
    pip install adocparse
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from typing import Any, TextIO

from adocparse.config import (
    ParseConfig,
    SafeMode,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from adocparse.errors import AdocError, ConfigError, NotMonitoredError, PatternCompileError
from adocparse.lexer import Lexer, classify
from adocparse.loader import (
    file_attributes,
    lines_from_path,
    lines_from_stream,
    lines_from_string,
    normalize_lines,
    stream_path,
)
from adocparse.location import SourceLocation
from adocparse.monitoring import Monitor, get_monitor, monitored, timed
from adocparse.nodes import (
    Admonition,
    AdmonitionKind,
    Attribute,
    AttributeReference,
    Block,
    DelimitedBlock,
    Document,
    Emphasis,
    Inline,
    ListItem,
    ListKind,
    Monospace,
    Node,
    Paragraph,
    Section,
    Strong,
    Text,
    flatten,
)
from adocparse.parser import Parser, assemble
from adocparse.parsing.inline import resolve_spans
from adocparse.patterns import PATTERNS, Pattern, PatternLibrary, compile_pattern
from adocparse.renderers.protocol import DocumentRenderer
from adocparse.serialization import from_dict, from_json, to_dict, to_json
from adocparse.tokens import ClassifyContext, LineKind, LineType
from adocparse.utils.logger import get_logger
from adocparse.visitor import BaseVisitor, transform, walk

__version__ = "0.1.0"

logger = get_logger(__name__)

type Options = ParseConfig | Mapping[str, Any] | None


def _resolve_config(options: Options) -> ParseConfig:
    """Build the config up front so option errors surface before any I/O."""
    if options is None:
        return get_parse_config()
    if isinstance(options, ParseConfig):
        return options
    return ParseConfig.from_dict(options)


def _with_file_attributes(config: ParseConfig, path: str | os.PathLike[str]) -> ParseConfig:
    """Seed docfile/docdir/docname; explicit overrides keep precedence."""
    merged: dict[str, str | None] = dict(file_attributes(path))
    merged.update(config.attribute_overrides)
    return ParseConfig(
        safe_mode=config.safe_mode,
        attribute_overrides=merged,
        header_footer=config.header_footer,
    )


def parse(
    source: str | Iterable[str],
    *,
    config: Options = None,
    source_file: str | None = None,
) -> Document:
    """Parse AsciiDoc source into a typed document tree.

    Args:
        source: Source text, or an iterable of lines
        config: ParseConfig, an option mapping, or None for the active config
        source_file: Optional source file path recorded in locations

    Returns:
        Document root node

    Raises:
        ConfigError: If ``config`` is an invalid option mapping.

    Example:
        >>> doc = parse(". Item 1\\n. Item 2")
        >>> [item.text for item in doc.children]
        ['Item 1', 'Item 2']
    """
    resolved = _resolve_config(config)
    with timed("parse"):
        if isinstance(source, str):
            lines = lines_from_string(source)
        else:
            lines = normalize_lines(source)
        return assemble(lines, resolved, source_file=source_file)


def load(
    source: str | Iterable[str] | TextIO,
    options: Options = None,
) -> Document:
    """Load a document from a string, a sequence of lines or a text stream.

    When the stream was opened from a named file, the ``docfile``,
    ``docdir``, ``docname`` and ``docfilesuffix`` attributes are seeded.

    Raises:
        ConfigError: If ``options`` is invalid; raised before reading.
        OSError: If reading the stream fails.
    """
    if isinstance(source, str):
        return load_string(source, options)
    config = _resolve_config(options)
    if not hasattr(source, "read"):
        return load_lines(source, config)

    path = stream_path(source)
    if path is not None:
        config = _with_file_attributes(config, path)
    with timed("read"):
        lines = lines_from_stream(source)  # type: ignore[arg-type]
    with timed("parse"):
        return assemble(lines, config, source_file=path)


def load_string(text: str, options: Options = None) -> Document:
    """Load a document from source text."""
    config = _resolve_config(options)
    with timed("read"):
        lines = lines_from_string(text)
    with timed("parse"):
        return assemble(lines, config)


def load_lines(lines: Iterable[str], options: Options = None) -> Document:
    """Load a document from a sequence of lines."""
    config = _resolve_config(options)
    with timed("read"):
        normalized = normalize_lines(lines)
    with timed("parse"):
        return assemble(normalized, config)


def load_file(
    path: str | os.PathLike[str],
    options: Options = None,
    *,
    encoding: str = "utf-8",
) -> Document:
    """Load a document from a file, seeding its file attributes.

    Raises:
        ConfigError: If ``options`` is invalid; raised before the file is opened.
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid in ``encoding``.

    Example:
        >>> doc = load_file("docs/guide.adoc")
        >>> doc.attributes["docname"]
        'guide'
    """
    config = _with_file_attributes(_resolve_config(options), path)
    with timed("read"):
        lines = lines_from_path(path, encoding=encoding)
    with timed("parse"):
        return assemble(lines, config, source_file=str(path))


class Asciidoc:
    """High-level processor combining loading, parsing and rendering.

    Holds an immutable ParseConfig and, once ``monitor()`` is called, a
    Monitor that accumulates read/parse/render/write durations across
    calls.

    Usage:
        >>> processor = Asciidoc({"safe": "safe", "attributes": ["toc"]})
        >>> doc = processor.parse("== Hello *World*")
        >>> doc.sections[0].title
        'Hello *World*'

        >>> # Render through any DocumentRenderer
        >>> html = processor.convert("== Hello", renderer)

        >>> # Timings
        >>> processor.monitor().load_file("guide.adoc")
        >>> processor.parse_time
        0.0004

    Thread Safety:
        Config is immutable and applied via ContextVar for each call. The
        monitor accumulates across calls; use one processor per thread
        when monitoring.

    """

    __slots__ = ("_config", "_monitor")

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        config: ParseConfig | None = None,
        monitor: bool = False,
    ) -> None:
        """Initialize the processor.

        Args:
            options: Option mapping (``safe``, ``attributes``, ``header_footer``)
            config: Prebuilt ParseConfig; takes precedence over ``options``
            monitor: Start with monitoring enabled

        Raises:
            ConfigError: If ``options`` is invalid.
        """
        if config is None:
            config = ParseConfig.from_dict(options or {})
        self._config = config
        self._monitor: Monitor | None = Monitor() if monitor else None

    @property
    def config(self) -> ParseConfig:
        return self._config

    # =========================================================================
    # Monitoring
    # =========================================================================

    def monitor(self) -> Asciidoc:
        """Enable timing of subsequent calls. Returns self for chaining."""
        if self._monitor is None:
            self._monitor = Monitor()
        return self

    @property
    def is_monitored(self) -> bool:
        return self._monitor is not None

    @property
    def timings(self) -> dict[str, Any]:
        """All durations in milliseconds (see Monitor.summary)."""
        return self._require_monitor("timings").summary()

    @property
    def read_time(self) -> float:
        return self._require_monitor("read time").read_time

    @property
    def parse_time(self) -> float:
        return self._require_monitor("parse time").parse_time

    @property
    def load_time(self) -> float:
        return self._require_monitor("load time").load_time

    @property
    def render_time(self) -> float:
        return self._require_monitor("render time").render_time

    @property
    def load_render_time(self) -> float:
        return self._require_monitor("load render time").load_render_time

    @property
    def write_time(self) -> float:
        return self._require_monitor("write time").write_time

    @property
    def total_time(self) -> float:
        return self._require_monitor("total time").total_time

    def _require_monitor(self, what: str) -> Monitor:
        if self._monitor is None:
            raise NotMonitoredError(what)
        return self._monitor

    def _activate(self) -> AbstractContextManager[Any]:
        if self._monitor is None:
            return nullcontext()
        return monitored(self._monitor)

    # =========================================================================
    # Processing
    # =========================================================================

    def parse(self, source: str | Iterable[str], *, source_file: str | None = None) -> Document:
        """Parse source text (or lines) with this processor's config."""
        with self._activate():
            return parse(source, config=self._config, source_file=source_file)

    def load(self, source: str | Iterable[str] | TextIO) -> Document:
        """Load from a string, lines or a text stream."""
        with self._activate():
            return load(source, self._config)

    def load_string(self, text: str) -> Document:
        with self._activate():
            return load_string(text, self._config)

    def load_file(self, path: str | os.PathLike[str], *, encoding: str = "utf-8") -> Document:
        with self._activate():
            return load_file(path, self._config, encoding=encoding)

    def render(self, doc: Document, renderer: DocumentRenderer) -> str:
        """Render a document through a rendering collaborator.

        Raises:
            TypeError: If ``renderer`` does not implement DocumentRenderer.
        """
        if not isinstance(renderer, DocumentRenderer):
            msg = f"{type(renderer).__name__} does not implement DocumentRenderer"
            raise TypeError(msg)
        with timed("render", self._monitor):
            return renderer.render(doc)

    def convert(
        self,
        source: str | Iterable[str] | TextIO,
        renderer: DocumentRenderer,
        *,
        to_file: str | os.PathLike[str] | TextIO | None = None,
    ) -> str:
        """Load and render in one call, optionally writing the result."""
        output = self.render(self.load(source), renderer)
        if to_file is not None:
            self.write(output, to_file)
        return output

    def write(self, output: str, target: str | os.PathLike[str] | TextIO) -> None:
        """Write rendered output to a path or an open text stream.

        Raises:
            OSError: If writing fails.
        """
        with timed("write", self._monitor):
            if hasattr(target, "write"):
                target.write(output)  # type: ignore[union-attr]
            else:
                Path(target).write_text(output, encoding="utf-8")  # type: ignore[arg-type]
        logger.debug("Wrote %d characters", len(output))


__all__ = [
    # Main API
    "Asciidoc",
    "assemble",
    "load",
    "load_file",
    "load_lines",
    "load_string",
    "parse",
    # Configuration
    "ParseConfig",
    "SafeMode",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    # Errors
    "AdocError",
    "ConfigError",
    "NotMonitoredError",
    "PatternCompileError",
    # Core classes
    "ClassifyContext",
    "Lexer",
    "LineKind",
    "LineType",
    "Parser",
    "SourceLocation",
    "classify",
    "resolve_spans",
    # Patterns
    "PATTERNS",
    "Pattern",
    "PatternLibrary",
    "compile_pattern",
    # Monitoring
    "Monitor",
    "get_monitor",
    "monitored",
    # Rendering contract
    "DocumentRenderer",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Traversal
    "BaseVisitor",
    "transform",
    "walk",
    # Nodes
    "Admonition",
    "AdmonitionKind",
    "Attribute",
    "AttributeReference",
    "Block",
    "DelimitedBlock",
    "Document",
    "Emphasis",
    "Inline",
    "ListItem",
    "ListKind",
    "Monospace",
    "Node",
    "Paragraph",
    "Section",
    "Strong",
    "Text",
    "flatten",
    # Version
    "__version__",
]
