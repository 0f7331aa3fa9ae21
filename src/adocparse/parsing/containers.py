"""Container stacks for block assembly.

Two explicit stacks are owned by one parse:

1. SectionStack - the open sections, from the implicit root (level -1) to
   the current insertion point. Levels strictly increase from bottom to
   top; pushing a title pops every frame whose level is not lower.
2. ListStack - the open list items, by depth. Pushing an item pops every
   frame at the same or greater depth; the remaining top frame, if any,
   becomes the new item's parent.

Frames are mutable builders. Popping a frame freezes it into its node and
hands the node to its parent, so the finished tree is built bottom-up and
no node ever points back at a frame.

Usage:
    stack = SectionStack(source_file=None)
    stack.push(SectionFrame(level=1, title="Intro", title_spans=(), lineno=1))
    stack.top.children.append(paragraph)
    stack.close_all(end_lineno=10)
    children = stack.root.children
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from adocparse.location import SourceLocation
from adocparse.nodes import Block, Inline, ListItem, ListKind, Section


@dataclass(slots=True)
class SectionFrame:
    """An open section (or the document root, at level -1)."""

    level: int
    title: str = ""
    title_spans: tuple[Inline, ...] = ()
    lineno: int = 1
    children: list[Section | Block] = field(default_factory=list)

    def freeze(self, end_lineno: int, source_file: str | None) -> Section:
        return Section(
            location=SourceLocation(self.lineno, max(end_lineno, self.lineno), source_file),
            level=self.level,
            title=self.title,
            title_spans=self.title_spans,
            children=tuple(self.children),
        )


@dataclass
class SectionStack:
    """Stack of open sections.

    Invariant: frames[0] is the root (level -1); levels strictly increase
    from frames[0] to frames[-1].

    """

    source_file: str | None = None
    frames: list[SectionFrame] = field(default_factory=lambda: [SectionFrame(level=-1)])

    @property
    def root(self) -> SectionFrame:
        return self.frames[0]

    @property
    def top(self) -> SectionFrame:
        return self.frames[-1]

    def push(self, frame: SectionFrame, end_lineno: int) -> None:
        """Open a section, first closing every frame it cannot nest under.

        Args:
            frame: New section frame (level >= 0)
            end_lineno: Last line of the sections being closed
        """
        self.close_to(frame.level, end_lineno)
        self.frames.append(frame)

    def close_to(self, level: int, end_lineno: int) -> None:
        """Pop frames until the top frame's level is below ``level``."""
        while len(self.frames) > 1 and self.top.level >= level:
            self._pop(end_lineno)

    def close_all(self, end_lineno: int) -> None:
        """Pop every frame except the root."""
        while len(self.frames) > 1:
            self._pop(end_lineno)

    def _pop(self, end_lineno: int) -> None:
        frame = self.frames.pop()
        self.top.children.append(frame.freeze(end_lineno, self.source_file))

    def __len__(self) -> int:
        return len(self.frames)


@dataclass(slots=True)
class ListFrame:
    """An open list item accumulating its text and nested items."""

    kind: ListKind
    depth: int
    lineno: int
    lines: list[str] = field(default_factory=list)
    items: list[ListItem] = field(default_factory=list)
    end_lineno: int = 0

    def append(self, text: str, lineno: int) -> None:
        self.lines.append(text)
        self.end_lineno = lineno


@dataclass
class ListStack:
    """Stack of open list items, ordered by increasing depth.

    Finished top-level items are passed to ``emit``; nested ones are
    attached to their parent frame.

    """

    resolve: Callable[[str], tuple[Inline, ...]]
    emit: Callable[[ListItem], None]
    source_file: str | None = None
    frames: list[ListFrame] = field(default_factory=list)

    @property
    def top(self) -> ListFrame | None:
        return self.frames[-1] if self.frames else None

    def push(self, frame: ListFrame) -> None:
        """Open an item as a sibling or child of the open items.

        Items at the same or greater depth are closed first; the new item
        nests under whatever shallower item remains open.
        """
        self.close_to(frame.depth)
        self.frames.append(frame)

    def close_to(self, depth: int) -> None:
        """Close every open item whose depth is >= ``depth``."""
        while self.frames and self.frames[-1].depth >= depth:
            self._pop()

    def close_all(self) -> None:
        while self.frames:
            self._pop()

    def _pop(self) -> None:
        frame = self.frames.pop()
        item = ListItem(
            location=SourceLocation(
                frame.lineno, max(frame.end_lineno, frame.lineno), self.source_file
            ),
            kind=frame.kind,
            depth=frame.depth,
            children=self.resolve("\n".join(frame.lines)),
            items=tuple(frame.items),
        )
        if self.frames:
            self.frames[-1].items.append(item)
        else:
            self.emit(item)

    def __bool__(self) -> bool:
        return bool(self.frames)
