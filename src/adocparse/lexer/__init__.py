"""Line classifier for adocparse.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode, classify
├── core.py              # Lexer class (mixin composition + priority cascade)
├── modes.py             # LexerMode enum, delimiter styles
└── classifiers/         # One mixin per structural role
    ├── heading.py       # Section titles
    ├── list.py          # List markers
    ├── delimiter.py     # Delimited block fences
    ├── admonition.py    # NOTE:/TIP:/... labels
    └── attribute.py     # :name: value entries

Usage:
    >>> from adocparse.lexer import Lexer
    >>> kinds = list(Lexer([". Item 1", ". Item 2"]).tokenize())
    >>> [k.type.name for k in kinds]
    ['LIST_MARKER', 'LIST_MARKER']

"""

from adocparse.lexer.core import Lexer, classify
from adocparse.lexer.modes import LexerMode, delimiter_style

__all__ = ["Lexer", "LexerMode", "classify", "delimiter_style"]
