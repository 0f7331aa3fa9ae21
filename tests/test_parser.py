"""Tests for the block assembler (adocparse.parser)."""

import logging

import pytest

from adocparse import parse
from adocparse.config import ParseConfig, SafeMode
from adocparse.nodes import (
    Admonition,
    AdmonitionKind,
    AttributeReference,
    DelimitedBlock,
    ListItem,
    ListKind,
    Paragraph,
    Section,
    Strong,
    Text,
)
from adocparse.parser import Parser, assemble


class TestScenarios:
    """End-to-end documents with known shapes."""

    def test_section_with_admonition(self) -> None:
        doc = parse("== Title\n\nNOTE: careful here\n")

        assert len(doc.children) == 1
        section = doc.children[0]
        assert isinstance(section, Section)
        assert section.level == 1
        assert section.title == "Title"
        assert len(section.children) == 1
        block = section.children[0]
        assert isinstance(block, Admonition)
        assert block.kind is AdmonitionKind.NOTE
        assert block.text == "careful here"

    def test_ordered_list_siblings(self) -> None:
        doc = parse(". Item 1\n. Item 2\n")

        assert len(doc.children) == 2
        first, second = doc.children
        assert isinstance(first, ListItem) and isinstance(second, ListItem)
        assert first.kind is ListKind.ORDERED and second.kind is ListKind.ORDERED
        assert first.depth == 0 and second.depth == 0
        assert (first.text, second.text) == ("Item 1", "Item 2")

    def test_escaped_bracket(self) -> None:
        doc = parse("[some text\\] here]")

        paragraph = doc.children[0]
        assert isinstance(paragraph, Paragraph)
        assert len(paragraph.children) == 1
        span = paragraph.children[0]
        assert isinstance(span, AttributeReference)
        assert span.content == "some text] here"

    def test_unterminated_delimiter_is_flushed(self) -> None:
        doc = parse("----\ncode line\nmore")

        assert len(doc.children) == 1
        block = doc.children[0]
        assert isinstance(block, DelimitedBlock)
        assert block.lines == ("code line", "more")
        assert block.location.lineno == 1
        assert block.location.end_lineno == 3


class TestSections:
    def test_document_title(self) -> None:
        doc = parse("= Guide\n\n== Install\n\nText")
        assert doc.title == "Guide"
        assert doc.title_spans == (Text("Guide"),)
        assert [s.title for s in doc.sections] == ["Install"]

    def test_level_zero_after_content_is_a_section(self) -> None:
        doc = parse("intro\n\n= Part")
        assert doc.title is None
        assert isinstance(doc.children[1], Section)
        assert doc.children[1].level == 0

    def test_nested_sections(self) -> None:
        doc = parse("== A\n\n=== A.1\n\ntext\n\n== B")

        a, b = doc.sections
        assert a.title == "A" and b.title == "B"
        assert [s.title for s in a.sections] == ["A.1"]
        assert isinstance(a.sections[0].children[0], Paragraph)

    def test_shallower_title_pops_deeper_sections(self) -> None:
        doc = parse("== A\n=== A.1\n==== A.1.1\n== B")
        assert [s.title for s in doc.sections] == ["A", "B"]
        assert doc.sections[0].sections[0].sections[0].title == "A.1.1"

    def test_skipped_level_still_nests(self) -> None:
        doc = parse("== A\n==== Deep\n=== Mid")
        a = doc.sections[0]
        assert [(s.level, s.title) for s in a.sections] == [(3, "Deep"), (2, "Mid")]

    def test_section_title_spans(self) -> None:
        doc = parse("== Hello *World*")
        assert doc.sections[0].title_spans == (Text("Hello "), Strong("World"))

    def test_symmetric_title(self) -> None:
        doc = parse("=== Setup ===")
        assert doc.sections[0].title == "Setup"
        assert doc.sections[0].level == 2

    def test_section_line_span(self) -> None:
        doc = parse("== A\ntext\n\n== B\nmore")
        a, b = doc.sections
        assert (a.location.lineno, a.location.end_lineno) == (1, 3)
        assert (b.location.lineno, b.location.end_lineno) == (4, 5)


class TestParagraphs:
    def test_consecutive_lines_join(self) -> None:
        doc = parse("first line\nsecond line")
        assert len(doc.children) == 1
        assert doc.children[0].text == "first line\nsecond line"

    def test_blank_line_splits(self) -> None:
        doc = parse("one\n\ntwo")
        assert [b.text for b in doc.blocks] == ["one", "two"]

    def test_repeated_blank_lines_do_not_add_blocks(self) -> None:
        assert len(parse("one\n\n\n\ntwo").children) == 2

    def test_paragraph_lines_are_stripped(self) -> None:
        doc = parse("   indented")
        assert doc.children[0].text == "indented"

    def test_inline_spans_resolved(self) -> None:
        doc = parse("a *b* c")
        assert doc.children[0].children == (Text("a "), Strong("b"), Text(" c"))


class TestLists:
    def test_unordered_markers(self) -> None:
        doc = parse("* star\n- dash")
        assert [(i.kind, i.depth, i.text) for i in doc.children] == [
            (ListKind.UNORDERED, 0, "star"),
            (ListKind.UNORDERED, 0, "dash"),
        ]

    def test_numbered_marker(self) -> None:
        doc = parse("1. first\n2. second")
        assert [i.kind for i in doc.children] == [ListKind.ORDERED, ListKind.ORDERED]

    def test_nested_items(self) -> None:
        doc = parse("* a\n** a.1\n** a.2\n* b")

        a, b = doc.children
        assert a.text == "a" and b.text == "b"
        assert [(i.depth, i.text) for i in a.items] == [(1, "a.1"), (1, "a.2")]
        assert b.items == ()

    def test_deeper_item_closed_by_shallower(self) -> None:
        doc = parse(". one\n.. one.a\n... one.a.i\n. two")
        one, two = doc.children
        assert one.items[0].items[0].text == "one.a.i"
        assert two.text == "two"

    def test_continuation_line(self) -> None:
        doc = parse("* first\n  continued")
        assert doc.children[0].text == "first\ncontinued"

    def test_paragraph_after_blank_ends_list(self) -> None:
        doc = parse("* item\n\nafter")
        assert isinstance(doc.children[0], ListItem)
        assert isinstance(doc.children[1], Paragraph)

    def test_list_marker_closes_paragraph(self) -> None:
        doc = parse("intro\n* item")
        assert isinstance(doc.children[0], Paragraph)
        assert isinstance(doc.children[1], ListItem)

    def test_list_marker_beats_admonition(self) -> None:
        doc = parse("* NOTE: not an admonition")
        item = doc.children[0]
        assert isinstance(item, ListItem)
        assert item.text == "NOTE: not an admonition"


class TestAdmonitions:
    @pytest.mark.parametrize("label", ["NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION"])
    def test_every_label(self, label: str) -> None:
        block = parse(f"{label}: body").children[0]
        assert isinstance(block, Admonition)
        assert block.kind is AdmonitionKind(label)
        assert block.text == "body"

    def test_continuation_until_blank(self) -> None:
        doc = parse("TIP: first\nsecond\n\nafter")
        assert doc.children[0].text == "first\nsecond"
        assert isinstance(doc.children[1], Paragraph)

    def test_lowercase_label_is_plain(self) -> None:
        assert isinstance(parse("note: lower").children[0], Paragraph)


class TestDelimitedBlocks:
    def test_content_is_verbatim(self) -> None:
        doc = parse("----\n== Not a title\n* not a list\n  indented *bold*\n----")
        block = doc.children[0]
        assert isinstance(block, DelimitedBlock)
        assert block.lines == ("== Not a title", "* not a list", "  indented *bold*")
        assert block.style == "listing"

    def test_delimiters_excluded(self) -> None:
        block = parse("....\nliteral\n....").children[0]
        assert block.lines == ("literal",)
        assert block.tag == "...."
        assert block.style == "literal"

    def test_blank_lines_kept_inside(self) -> None:
        block = parse("----\na\n\n\nb\n----").children[0]
        assert block.lines == ("a", "", "", "b")

    def test_only_identical_run_closes(self) -> None:
        doc = parse("------\n----\n------\nafter")
        block = doc.children[0]
        assert block.lines == ("----",)
        assert isinstance(doc.children[1], Paragraph)

    @pytest.mark.parametrize(
        ("tag", "style"),
        [("====", "example"), ("****", "sidebar"), ("____", "quote"), ("////", "comment")],
    )
    def test_styles(self, tag: str, style: str) -> None:
        assert parse(f"{tag}\nx\n{tag}").children[0].style == style

    def test_passthrough_restricted_by_safe_mode(self) -> None:
        source = "++++\n<b>raw</b>\n++++"
        assert parse(source).children[0].restricted is True
        unsafe = parse(source, config=ParseConfig(safe_mode=SafeMode.UNSAFE))
        assert unsafe.children[0].restricted is False

    def test_location_spans_fences(self) -> None:
        block = parse("text\n\n----\ncode\n----").children[1]
        assert (block.location.lineno, block.location.end_lineno) == (3, 5)

    def test_unterminated_logs_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="adocparse"):
            parse("====\nexample")
        assert any("Unterminated" in record.getMessage() for record in caplog.records)


class TestAttributeEntries:
    def test_header_entries(self) -> None:
        doc = parse("= Guide\n:toc: left\n:icons:\n\ntext")
        assert doc.title == "Guide"
        assert dict(doc.attributes) == {"toc": "left", "icons": ""}

    def test_unset_entry(self) -> None:
        doc = parse(":toc: left\n:toc!:")
        assert "toc" not in doc.attributes

    def test_entry_inside_paragraph_is_text(self) -> None:
        doc = parse("some text\n:toc: left")
        assert doc.children[0].text == "some text\n:toc: left"
        assert "toc" not in doc.attributes

    def test_override_pins_value(self) -> None:
        doc = parse(":toc: left", config={"attributes": {"toc": "right"}})
        assert doc.attributes["toc"] == "right"

    def test_none_override_pins_unset(self) -> None:
        doc = parse(":toc: left", config={"attributes": ["toc!"]})
        assert "toc" not in doc.attributes

    def test_attributes_are_read_only(self) -> None:
        doc = parse(":toc: left")
        with pytest.raises(TypeError):
            doc.attributes["toc"] = "right"  # type: ignore[index]


class TestAssemble:
    def test_assemble_lines(self) -> None:
        doc = assemble(["== A", "", "text"])
        assert doc.sections[0].blocks[0].text == "text"

    def test_trailing_newlines_ignored(self) -> None:
        assert assemble(["== A\n", "text\r\n"]) == assemble(["== A", "text"])

    def test_config_recorded_on_document(self) -> None:
        config = ParseConfig(safe_mode="server", header_footer=True)
        doc = assemble(["x"], config)
        assert doc.config is config

    def test_parser_uses_active_config(self) -> None:
        from adocparse.config import parse_config_context

        with parse_config_context(ParseConfig(safe_mode=SafeMode.SAFE)):
            doc = Parser(["x"]).parse()
        assert doc.config.safe_mode is SafeMode.SAFE

    def test_document_location(self) -> None:
        doc = assemble(["a", "b", "c"], source_file="f.adoc")
        assert (doc.location.lineno, doc.location.end_lineno) == (1, 3)
        assert str(doc.location) == "f.adoc:1"
