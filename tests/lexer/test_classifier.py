"""Tests for single-line classification and the classification cascade."""

import pytest

from adocparse.lexer import Lexer, classify, delimiter_style
from adocparse.nodes import AdmonitionKind, ListKind
from adocparse.tokens import ClassifyContext, LineType

_IN_LISTING = ClassifyContext(open_delimiter="----")


class TestBlankLines:
    @pytest.mark.parametrize("line", ["", " ", "\t", "   \t  "])
    def test_whitespace_only_is_blank(self, line: str) -> None:
        assert classify(line).type is LineType.BLANK


class TestSectionTitles:
    @pytest.mark.parametrize(
        ("line", "level", "text"),
        [
            ("= Document", 0, "Document"),
            ("== Section", 1, "Section"),
            ("=== Sub", 2, "Sub"),
            ("====== Deepest", 5, "Deepest"),
            ("== Trailing  ", 1, "Trailing"),
            ("== Closed ==", 1, "Closed"),
        ],
    )
    def test_titles(self, line: str, level: int, text: str) -> None:
        kind = classify(line)
        assert kind.type is LineType.SECTION_TITLE
        assert kind.level == level
        assert kind.text == text

    @pytest.mark.parametrize("line", ["==NoSpace", "======= Seven", " == Indented", "=="])
    def test_not_titles(self, line: str) -> None:
        assert classify(line).type is not LineType.SECTION_TITLE


class TestListMarkers:
    @pytest.mark.parametrize(
        ("line", "list_kind", "depth", "text"),
        [
            ("* item", ListKind.UNORDERED, 0, "item"),
            ("** nested", ListKind.UNORDERED, 1, "nested"),
            ("***** deepest", ListKind.UNORDERED, 4, "deepest"),
            ("- dash", ListKind.UNORDERED, 0, "dash"),
            (". step", ListKind.ORDERED, 0, "step"),
            (".. sub step", ListKind.ORDERED, 1, "sub step"),
            ("1. first", ListKind.ORDERED, 0, "first"),
            ("  * indented", ListKind.UNORDERED, 0, "indented"),
        ],
    )
    def test_markers(self, line: str, list_kind: ListKind, depth: int, text: str) -> None:
        kind = classify(line)
        assert kind.type is LineType.LIST_MARKER
        assert kind.list_kind is list_kind
        assert kind.depth == depth
        assert kind.text == text

    @pytest.mark.parametrize("line", ["*bold* text", "-not a dash item", "1.no space", "*"])
    def test_not_markers(self, line: str) -> None:
        assert classify(line).type is not LineType.LIST_MARKER

    def test_list_marker_wins_over_admonition(self) -> None:
        kind = classify("* NOTE: in a list")
        assert kind.type is LineType.LIST_MARKER
        assert kind.text == "NOTE: in a list"


class TestDelimiters:
    @pytest.mark.parametrize("tag", ["----", "....", "====", "****", "____", "++++", "////"])
    def test_open(self, tag: str) -> None:
        kind = classify(tag)
        assert kind.type is LineType.DELIMITER_OPEN
        assert kind.tag == tag

    def test_longer_run(self) -> None:
        assert classify("--------").tag == "--------"

    @pytest.mark.parametrize("line", ["---", "--==", "---- text"])
    def test_not_delimiters(self, line: str) -> None:
        assert classify(line).type is not LineType.DELIMITER_OPEN

    def test_close_only_inside_block(self) -> None:
        assert classify("----", _IN_LISTING).type is LineType.DELIMITER_CLOSE
        assert classify("----").type is LineType.DELIMITER_OPEN

    def test_different_run_does_not_close(self) -> None:
        assert classify("....", _IN_LISTING).type is LineType.PLAIN
        assert classify("-----", _IN_LISTING).type is LineType.PLAIN

    @pytest.mark.parametrize(
        "line", ["== Looks like a title", "* looks like a list", "NOTE: looks like a note", ""]
    )
    def test_open_block_swallows_syntax(self, line: str) -> None:
        kind = classify(line, _IN_LISTING)
        assert kind.type is LineType.PLAIN
        assert kind.text == line

    @pytest.mark.parametrize(
        ("tag", "style"),
        [("----", "listing"), ("....", "literal"), ("++++", "pass"), ("////", "comment")],
    )
    def test_delimiter_style(self, tag: str, style: str) -> None:
        assert delimiter_style(tag) == style


class TestAdmonitions:
    @pytest.mark.parametrize("label", ["NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION"])
    def test_labels(self, label: str) -> None:
        kind = classify(f"{label}: body text")
        assert kind.type is LineType.ADMONITION_START
        assert kind.admonition is AdmonitionKind(label)
        assert kind.text == "body text"

    @pytest.mark.parametrize("line", ["NOTE:no space", "Note: mixed case", "HINT: unknown"])
    def test_not_admonitions(self, line: str) -> None:
        assert classify(line).type is LineType.PLAIN


class TestAttributeEntries:
    def test_set(self) -> None:
        kind = classify(":toc: left")
        assert kind.type is LineType.ATTRIBUTE_ENTRY
        assert (kind.name, kind.text) == ("toc", "left")

    def test_empty_value(self) -> None:
        kind = classify(":sectnums:")
        assert (kind.name, kind.text) == ("sectnums", "")

    @pytest.mark.parametrize("line", [":toc!:", ":!toc:"])
    def test_unset(self, line: str) -> None:
        kind = classify(line)
        assert kind.type is LineType.ATTRIBUTE_ENTRY
        assert (kind.name, kind.text) == ("toc", None)

    @pytest.mark.parametrize("line", [":: nothing", ":bad name: x", "text :toc: x"])
    def test_not_entries(self, line: str) -> None:
        assert classify(line).type is LineType.PLAIN


class TestLexer:
    def test_line_numbers(self) -> None:
        kinds = list(Lexer(["== A", "", "text"]).tokenize())
        assert [k.lineno for k in kinds] == [1, 2, 3]
        assert [k.type for k in kinds] == [LineType.SECTION_TITLE, LineType.BLANK, LineType.PLAIN]

    def test_tracks_open_delimiter(self) -> None:
        kinds = list(Lexer(["----", "== inside", "----", "== outside"]).tokenize())
        assert [k.type for k in kinds] == [
            LineType.DELIMITER_OPEN,
            LineType.PLAIN,
            LineType.DELIMITER_CLOSE,
            LineType.SECTION_TITLE,
        ]
        assert kinds[2].tag == "----"

    def test_context_snapshot(self) -> None:
        lexer = Lexer(["----", "", "----", ""])
        tokens = lexer.tokenize()
        next(tokens)
        assert lexer.context == ClassifyContext(previous_line_blank=False, open_delimiter="----")
        # Blank lines inside a delimited block are content, not separators
        assert next(tokens).type is LineType.PLAIN
        assert lexer.context.previous_line_blank is False
        next(tokens)
        assert lexer.context == ClassifyContext(previous_line_blank=False)
        assert next(tokens).type is LineType.BLANK
        assert lexer.context.previous_line_blank is True

    @pytest.mark.parametrize(
        "line", ["== Title", "* item", "----", "NOTE: x", ":toc: left", "plain", ""]
    )
    def test_previous_blank_does_not_change_role(self, line: str) -> None:
        after_blank = classify(line, ClassifyContext(previous_line_blank=True))
        after_text = classify(line, ClassifyContext(previous_line_blank=False))
        assert after_blank == after_text

    def test_strips_line_terminators(self) -> None:
        kind = next(Lexer(["== Title\r\n"]).tokenize())
        assert kind.line == "== Title"
        assert kind.text == "Title"

    def test_repr_is_compact(self) -> None:
        kind = next(Lexer(["a" * 40]).tokenize())
        assert repr(kind) == f"LineKind(PLAIN, {'a' * 17 + '...'!r}, 1)"
