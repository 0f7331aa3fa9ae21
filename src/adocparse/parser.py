"""Block assembler producing the typed document tree.

Consumes classified lines from the Lexer in one left-to-right pass and
builds the tree bottom-up with two explicit stacks (sections and list
items, see parsing.containers) plus a single open-block accumulator.

Assembly is total: any sequence of lines yields a Document. Constructs
that never complete (an unclosed delimited block, a dangling list) are
flushed at end of input rather than dropped.

Thread Safety:
- Parser instances are single-use and not thread-safe. Create one per parse.
- Configuration is read from ContextVar (thread-local).
- The resulting tree is immutable and safe to share.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from adocparse.config import ParseConfig, SafeMode, get_parse_config, parse_config_context
from adocparse.lexer import Lexer, delimiter_style
from adocparse.location import SourceLocation
from adocparse.nodes import (
    Admonition,
    AdmonitionKind,
    Block,
    DelimitedBlock,
    Document,
    Inline,
    Paragraph,
)
from adocparse.parsing.containers import ListFrame, ListStack, SectionFrame, SectionStack
from adocparse.parsing.inline import InlineResolver
from adocparse.patterns import PATTERNS, PatternLibrary
from adocparse.tokens import LineKind, LineType
from adocparse.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class _OpenBlock:
    """Accumulator for the paragraph, admonition or delimited block being read."""

    type: LineType
    lineno: int
    lines: list[str] = field(default_factory=list)
    end_lineno: int = 0
    admonition: AdmonitionKind | None = None
    tag: str | None = None

    def append(self, text: str, lineno: int) -> None:
        self.lines.append(text)
        self.end_lineno = lineno


class Parser:
    """Single-pass block assembler.

    Usage:
            >>> doc = Parser(["== Title", "", "NOTE: careful here"]).parse()
            >>> section = doc.children[0]
            >>> section.level, section.title
            (1, 'Title')
            >>> section.children[0].kind, section.children[0].text
            (<AdmonitionKind.NOTE: 'NOTE'>, 'careful here')

    Thread Safety:
        Parser instances are single-use. Configuration is read from
        ContextVar (thread-local). The resulting tree is immutable.

    """

    __slots__ = (
        "_lines",
        "_source_file",
        "_patterns",
        "_resolver",
        "_sections",
        "_lists",
        "_open",
        "_item_open",
        "_in_header",
        "_title",
        "_title_spans",
        "_attributes",
        "_last_lineno",
    )

    def __init__(
        self,
        lines: Iterable[str],
        source_file: str | None = None,
        *,
        patterns: PatternLibrary = PATTERNS,
    ) -> None:
        """Initialize parser with input lines.

        Configuration is read from ContextVar, not passed as parameters.
        Use assemble() or parse_config_context() for non-default config.

        Args:
            lines: Input lines (trailing newlines are ignored)
            source_file: Optional source file path recorded in locations
            patterns: Pattern library shared with the lexer and resolver
        """
        self._lines = lines
        self._source_file = source_file
        self._patterns = patterns
        self._resolver = InlineResolver(patterns=patterns)
        self._sections = SectionStack(source_file=source_file)
        self._lists = ListStack(
            resolve=self._resolver.resolve,
            emit=self._emit,
            source_file=source_file,
        )
        self._open: _OpenBlock | None = None
        self._item_open = False
        self._in_header = True
        self._title: str | None = None
        self._title_spans: tuple[Inline, ...] = ()
        self._attributes: dict[str, str] = {}
        self._last_lineno = 0

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    def parse(self) -> Document:
        """Assemble the document.

        Returns:
            Immutable Document tree
        """
        config = self._config
        overrides = config.attribute_overrides
        self._attributes = {k: v for k, v in overrides.items() if v is not None}

        for kind in Lexer(self._lines, patterns=self._patterns).tokenize():
            self._dispatch(kind)
            self._last_lineno = kind.lineno

        self._finish()
        return Document(
            location=SourceLocation(1, max(self._last_lineno, 1), self._source_file),
            children=tuple(self._sections.root.children),
            title=self._title,
            title_spans=self._title_spans,
            attributes=MappingProxyType(self._attributes),
            config=config,
        )

    # =========================================================================
    # Line dispatch
    # =========================================================================

    def _dispatch(self, kind: LineKind) -> None:
        match kind.type:
            case LineType.SECTION_TITLE:
                self._on_section_title(kind)
            case LineType.LIST_MARKER:
                self._on_list_marker(kind)
            case LineType.DELIMITER_OPEN:
                self._on_delimiter_open(kind)
            case LineType.DELIMITER_CLOSE:
                self._on_delimiter_close(kind)
            case LineType.BLANK:
                self._on_blank()
            case LineType.ADMONITION_START:
                self._on_admonition(kind)
            case LineType.ATTRIBUTE_ENTRY:
                self._on_attribute_entry(kind)
            case _:
                self._on_plain(kind)

    def _on_section_title(self, kind: LineKind) -> None:
        self._flush_block()
        self._close_lists()
        title = kind.text or ""
        spans = self._resolver.resolve(title)

        if kind.level == 0 and self._in_header and self._title is None:
            self._title = title
            self._title_spans = spans
            return

        self._in_header = False
        self._sections.push(
            SectionFrame(level=kind.level, title=title, title_spans=spans, lineno=kind.lineno),
            end_lineno=self._last_lineno,
        )

    def _on_list_marker(self, kind: LineKind) -> None:
        self._flush_block()
        assert kind.list_kind is not None
        frame = ListFrame(kind=kind.list_kind, depth=kind.depth, lineno=kind.lineno)
        frame.append(kind.text or "", kind.lineno)
        self._lists.push(frame)
        self._item_open = True

    def _on_delimiter_open(self, kind: LineKind) -> None:
        self._flush_block()
        self._close_lists()
        self._open = _OpenBlock(
            type=LineType.DELIMITER_OPEN, lineno=kind.lineno, end_lineno=kind.lineno, tag=kind.tag
        )

    def _on_delimiter_close(self, kind: LineKind) -> None:
        if self._open is not None:
            self._open.end_lineno = kind.lineno
        self._flush_block()

    def _on_blank(self) -> None:
        # Idempotent: a second blank line finds nothing open
        self._flush_block()
        self._item_open = False

    def _on_admonition(self, kind: LineKind) -> None:
        self._flush_block()
        self._close_lists()
        self._open = _OpenBlock(
            type=LineType.ADMONITION_START, lineno=kind.lineno, admonition=kind.admonition
        )
        self._open.append(kind.text or "", kind.lineno)

    def _on_attribute_entry(self, kind: LineKind) -> None:
        # Inside running text an entry is just more text
        if self._open is not None or self._item_open:
            self._on_plain(kind)
            return

        assert kind.name is not None
        if kind.name in self._config.attribute_overrides:
            return
        if kind.text is None:
            self._attributes.pop(kind.name, None)
        else:
            self._attributes[kind.name] = kind.text

    def _on_plain(self, kind: LineKind) -> None:
        if self._open is not None:
            if self._open.type is LineType.DELIMITER_OPEN:
                self._open.append(kind.line, kind.lineno)
            else:
                self._open.append(kind.line.strip(), kind.lineno)
            return

        if self._item_open and self._lists.top is not None:
            self._lists.top.append(kind.line.strip(), kind.lineno)
            return

        self._close_lists()
        self._open = _OpenBlock(type=LineType.PLAIN, lineno=kind.lineno)
        self._open.append(kind.line.strip(), kind.lineno)

    # =========================================================================
    # Closing
    # =========================================================================

    def _flush_block(self) -> None:
        """Freeze the open accumulator (if any) into a block."""
        block = self._open
        if block is None:
            return
        self._open = None

        location = SourceLocation(
            block.lineno, max(block.end_lineno, block.lineno), self._source_file
        )
        node: Block
        if block.type is LineType.DELIMITER_OPEN:
            assert block.tag is not None
            style = delimiter_style(block.tag)
            node = DelimitedBlock(
                location=location,
                tag=block.tag,
                style=style,
                lines=tuple(block.lines),
                restricted=style == "pass" and self._config.safe_mode >= SafeMode.SAFE,
            )
        elif block.type is LineType.ADMONITION_START:
            assert block.admonition is not None
            node = Admonition(
                location=location,
                kind=block.admonition,
                children=self._resolver.resolve("\n".join(block.lines)),
            )
        else:
            node = Paragraph(
                location=location,
                children=self._resolver.resolve("\n".join(block.lines)),
            )
        self._emit(node)

    def _close_lists(self) -> None:
        self._lists.close_all()
        self._item_open = False

    def _emit(self, block: Block) -> None:
        self._in_header = False
        self._sections.top.children.append(block)

    def _finish(self) -> None:
        """Flush all open state in stack order at end of input."""
        if self._open is not None and self._open.type is LineType.DELIMITER_OPEN:
            logger.debug(
                "Unterminated delimited block %r opened at line %d; closing at end of input",
                self._open.tag,
                self._open.lineno,
            )
            self._open.end_lineno = self._last_lineno
        self._flush_block()
        self._close_lists()
        self._sections.close_all(self._last_lineno)


def assemble(
    lines: Iterable[str],
    config: ParseConfig | Mapping[str, Any] | None = None,
    *,
    source_file: str | None = None,
    patterns: PatternLibrary = PATTERNS,
) -> Document:
    """Assemble a document from lines.

    Args:
        lines: Input lines, already materialized by the caller
        config: ParseConfig, an option mapping, or None for the active config
        source_file: Optional source file path recorded in locations
        patterns: Pattern library to use

    Returns:
        Immutable Document tree

    Raises:
        ConfigError: If ``config`` is an invalid option mapping. Raised
            before any line is processed.

    Example:
        >>> doc = assemble([". Item 1", ". Item 2"])
        >>> [item.text for item in doc.children]
        ['Item 1', 'Item 2']
    """
    if config is None:
        config = get_parse_config()
    elif not isinstance(config, ParseConfig):
        config = ParseConfig.from_dict(config)

    with parse_config_context(config):
        return Parser(lines, source_file, patterns=patterns).parse()
