"""Line classifiers for the adocparse lexer.

Each classifier is a mixin that recognizes one structural role. Classifiers
are pure: they read the line and the shared pattern library, and never
change lexer state.
"""

from adocparse.lexer.classifiers.admonition import (
    AdmonitionClassifierMixin,
)
from adocparse.lexer.classifiers.attribute import (
    AttributeEntryClassifierMixin,
)
from adocparse.lexer.classifiers.delimiter import (
    DelimiterClassifierMixin,
)
from adocparse.lexer.classifiers.heading import (
    HeadingClassifierMixin,
)
from adocparse.lexer.classifiers.list import (
    ListClassifierMixin,
)

__all__ = [
    "AdmonitionClassifierMixin",
    "AttributeEntryClassifierMixin",
    "DelimiterClassifierMixin",
    "HeadingClassifierMixin",
    "ListClassifierMixin",
]
