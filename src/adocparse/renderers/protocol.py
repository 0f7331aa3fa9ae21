"""DocumentRenderer protocol: the contract for rendering collaborators.

Rendering lives outside adocparse. Any object with ``render(doc) -> str``
conforms. Renderers receive the frozen tree and must not try to mutate it.

Example:
    from adocparse.renderers.protocol import DocumentRenderer

    def render_page(renderer: DocumentRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol, runtime_checkable

from adocparse.nodes import Document


@runtime_checkable
class DocumentRenderer(Protocol):
    """Protocol for document renderers.

    Implementations accept a Document and return the rendered string.
    ``doc.config.header_footer`` tells the renderer whether to emit a
    full page or an embeddable fragment.

    """

    def render(self, node: Document) -> str:
        """Render a Document to a string.

        Args:
            node: The document tree to render.

        Returns:
            Rendered string output.

        """
        ...
