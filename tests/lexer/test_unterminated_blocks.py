"""Test unterminated constructs at end of input - ensures content isn't silently lost.

Every construct still open when the input ends is flushed into the tree:
delimited blocks without a closing fence, list items, admonitions, and
the sections that contain them.
"""

import pytest

from adocparse import parse
from adocparse.nodes import Admonition, DelimitedBlock, ListItem, Paragraph, Section


class TestUnterminatedDelimitedBlocks:
    """Tests for delimited blocks that aren't closed before end of input."""

    @pytest.mark.parametrize("tag", ["----", "....", "====", "****", "____", "++++", "////"])
    def test_unterminated_at_eof(self, tag: str) -> None:
        """Content must be emitted even without a closing fence."""
        doc = parse(f"{tag}\ncontent without closing")

        assert len(doc.children) == 1
        block = doc.children[0]
        assert isinstance(block, DelimitedBlock)
        assert block.tag == tag
        assert block.lines == ("content without closing",)

    def test_unterminated_empty_block(self) -> None:
        block = parse("----").children[0]
        assert isinstance(block, DelimitedBlock)
        assert block.lines == ()
        assert (block.location.lineno, block.location.end_lineno) == (1, 1)

    def test_unterminated_swallows_later_structure(self) -> None:
        """Without a close, everything after the fence stays verbatim."""
        doc = parse("== Title\n\n----\n== Not a section\n* not an item")

        section = doc.sections[0]
        assert section.sections == ()
        block = section.children[0]
        assert isinstance(block, DelimitedBlock)
        assert block.lines == ("== Not a section", "* not an item")

    def test_mismatched_close_does_not_terminate(self) -> None:
        block = parse("----\ncode\n....").children[0]
        assert block.lines == ("code", "....")

    def test_unterminated_inside_nested_section(self) -> None:
        doc = parse("== A\n=== B\n....\nliteral")
        inner = doc.sections[0].sections[0]
        assert isinstance(inner.children[0], DelimitedBlock)
        assert inner.location.end_lineno == 4


class TestOpenStateAtEof:
    """Other constructs open at end of input."""

    def test_dangling_list_is_flushed(self) -> None:
        doc = parse("* a\n** b\n*** c")
        a = doc.children[0]
        assert isinstance(a, ListItem)
        assert a.items[0].items[0].text == "c"

    def test_dangling_admonition_is_flushed(self) -> None:
        block = parse("WARNING: last\nline").children[0]
        assert isinstance(block, Admonition)
        assert block.text == "last\nline"

    def test_dangling_paragraph_is_flushed(self) -> None:
        block = parse("== S\ntrailing text").sections[0].children[0]
        assert isinstance(block, Paragraph)

    def test_deep_sections_all_closed(self) -> None:
        doc = parse("== 1\n=== 2\n==== 3\n===== 4")
        node: Section = doc.sections[0]
        levels = [node.level]
        while node.sections:
            node = node.sections[0]
            levels.append(node.level)
        assert levels == [1, 2, 3, 4]
