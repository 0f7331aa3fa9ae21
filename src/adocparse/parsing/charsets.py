"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)
"""

# Characters that can open an inline span; anything else is literal text
INLINE_SPECIAL: frozenset[str] = frozenset("[*_`")

# Separators that end the word a URI target is taken from
WORD_BREAK: frozenset[str] = frozenset(" \t\n")

# Quote characters recognized inside attribute lists
ATTRIBUTE_QUOTES: frozenset[str] = frozenset("\"'")
