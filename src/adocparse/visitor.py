"""Tree visitor and transformer for adocparse.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen trees.

Example (collect all section titles):

    class TitleCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.titles: list[str] = []

        def visit_section(self, node: Section) -> None:
            self.titles.append(node.title)

    collector = TitleCollector()
    collector.visit(doc)

Example (drop comment blocks):

    def drop_comments(node: Node) -> Node | None:
        if isinstance(node, DelimitedBlock) and node.style == "comment":
            return None
        return node

    new_doc = transform(doc, drop_comments)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure and safe to call from any thread.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator

from adocparse.nodes import (
    Admonition,
    AttributeReference,
    DelimitedBlock,
    Document,
    Emphasis,
    ListItem,
    Monospace,
    Node,
    Paragraph,
    Section,
    Strong,
    Text,
)


class BaseVisitor[T]:
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call, title spans first.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Default returns None (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Structural visitors ---------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_section(self, node: Section) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_admonition(self, node: Admonition) -> T:
        return self.visit_default(node)

    def visit_delimited_block(self, node: DelimitedBlock) -> T:
        return self.visit_default(node)

    # -- Span visitors ---------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_monospace(self, node: Monospace) -> T:
        return self.visit_default(node)

    def visit_attribute_reference(self, node: AttributeReference) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Section():
                return self.visit_section(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case ListItem():
                return self.visit_list_item(node)
            case Admonition():
                return self.visit_admonition(node)
            case DelimitedBlock():
                return self.visit_delimited_block(node)
            case Text():
                return self.visit_text(node)
            case Strong():
                return self.visit_strong(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Monospace():
                return self.visit_monospace(node)
            case AttributeReference():
                return self.visit_attribute_reference(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes."""
        match node:
            case Document(title_spans=spans, children=children) | Section(
                title_spans=spans, children=children
            ):
                for span in spans:
                    self.visit(span)
                for child in children:
                    self.visit(child)
            case ListItem(children=children, items=items):
                for child in children:
                    self.visit(child)
                for item in items:
                    self.visit(item)
            case Paragraph(children=children) | Admonition(children=children):
                for child in children:
                    self.visit(child)
            case _:
                pass  # Spans and delimited blocks: no child nodes


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the tree, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children.

    Return ``None`` from ``fn`` to remove a node from the tree. The root
    Document cannot be removed; returning None for it raises TypeError.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    transformed = _transform_children(node, fn)
    return fn(transformed)


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Produce a new node with children transformed; filter out removed nodes."""

    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    changes: dict[str, tuple[Node, ...]] = {}
    match node:
        case Document(title_spans=spans, children=children) | Section(
            title_spans=spans, children=children
        ):
            changes["title_spans"] = _filtered(spans)
            changes["children"] = _filtered(children)
        case ListItem(children=children, items=items):
            changes["children"] = _filtered(children)
            changes["items"] = _filtered(items)
        case Paragraph(children=children) | Admonition(children=children):
            changes["children"] = _filtered(children)
        case _:
            return node

    changed = {name: value for name, value in changes.items() if value != getattr(node, name)}
    if changed:
        return dataclasses.replace(node, **changed)
    return node


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every node below it, depth-first in document order.

    Example:
        >>> doc = parse("== A\\n\\n* one\\n** two")
        >>> [type(n).__name__ for n in walk(doc)][:3]
        ['Document', 'Section', 'Text']
    """
    yield node
    match node:
        case Document(title_spans=spans, children=children) | Section(
            title_spans=spans, children=children
        ):
            for child in (*spans, *children):
                yield from walk(child)
        case ListItem(children=children, items=items):
            for child in (*children, *items):
                yield from walk(child)
        case Paragraph(children=children) | Admonition(children=children):
            for child in children:
                yield from walk(child)
        case _:
            pass


__all__ = ["BaseVisitor", "transform", "walk"]
