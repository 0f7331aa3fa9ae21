"""Rendering contract for adocparse.

adocparse ships no concrete renderer; templating stages implement
DocumentRenderer and consume the immutable Document tree.

"""

from adocparse.renderers.protocol import DocumentRenderer

__all__ = ["DocumentRenderer"]
