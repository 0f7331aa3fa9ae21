"""Tests for adocparse utility modules."""

import logging

import pytest


class TestGetLogger:
    """Tests for get_logger namespacing."""

    def test_package_names_unchanged(self) -> None:
        from adocparse.utils.logger import get_logger

        assert get_logger("adocparse").name == "adocparse"
        assert get_logger("adocparse.parser").name == "adocparse.parser"

    def test_foreign_names_nested(self) -> None:
        from adocparse.utils.logger import get_logger

        assert get_logger("renderer").name == "adocparse.renderer"
        assert get_logger("adocparser").name == "adocparse.adocparser"

    def test_parser_diagnostics_reach_root_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        from adocparse import parse

        with caplog.at_level(logging.DEBUG, logger="adocparse"):
            parse("----\nnever closed")

        assert any(record.name.startswith("adocparse.") for record in caplog.records)
