"""Input acquisition: turn strings, streams and files into lines.

The parser only ever sees a materialized sequence of lines. Everything
about where those lines come from (decoding, BOM, line endings, file
metadata) is handled here.

I/O and decoding errors propagate unchanged.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from adocparse.utils.logger import get_logger

logger = get_logger(__name__)

_BOM = "\ufeff"


def normalize_lines(lines: Iterable[str]) -> list[str]:
    """Strip line terminators and trailing whitespace; drop a leading BOM."""
    result = [line.rstrip() for line in lines]
    if result and result[0].startswith(_BOM):
        result[0] = result[0][len(_BOM) :]
    return result


def lines_from_string(text: str) -> list[str]:
    """Split text on ``\\n``, ``\\r\\n`` and ``\\r``.

    Other Unicode line boundaries (form feed, U+2028, ...) stay inside
    their line, so line numbers match the file as written.

    Example:
        >>> lines_from_string("= Title\\r\\n\\nBody  \\n")
        ['= Title', '', 'Body']
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return normalize_lines(lines)


def lines_from_stream(stream: TextIO) -> list[str]:
    """Read every line from an open text stream."""
    return normalize_lines(stream)


def lines_from_path(path: str | os.PathLike[str], encoding: str = "utf-8") -> list[str]:
    """Read a file as lines.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid in ``encoding``.
    """
    logger.debug("Reading %s", path)
    return lines_from_string(Path(path).read_text(encoding=encoding))


def stream_path(stream: object) -> str | None:
    """Path of a stream opened from a real file, if it has one.

    Streams such as stdin report names like ``<stdin>``; those are ignored.
    """
    name = getattr(stream, "name", None)
    if isinstance(name, os.PathLike):
        name = os.fspath(name)
    if isinstance(name, str) and name and not name.startswith("<"):
        return name
    return None


def file_attributes(path: str | os.PathLike[str]) -> dict[str, str]:
    """Document attributes describing the input file.

    Example:
        >>> file_attributes("/docs/guide.adoc")["docname"]
        'guide'
    """
    resolved = Path(path).absolute()
    return {
        "docfile": str(resolved),
        "docdir": str(resolved.parent),
        "docname": resolved.stem,
        "docfilesuffix": resolved.suffix,
    }


__all__ = [
    "file_attributes",
    "lines_from_path",
    "lines_from_stream",
    "lines_from_string",
    "normalize_lines",
    "stream_path",
]
