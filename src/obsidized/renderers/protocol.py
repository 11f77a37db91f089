"""ASTRenderer protocol: stable interface for AST renderers.

Any renderer with ``render(node) -> str`` and ``convert(node, sink)``
conforms. The built-in ``HtmlRenderer`` is the reference implementation.

"""

from typing import BinaryIO, Protocol

from obsidized.nodes import Document


class ASTRenderer(Protocol):
    """Protocol for AST renderers."""

    def render(self, node: Document) -> str:
        """Render a Document AST to a string."""
        ...

    def convert(self, node: Document, sink: BinaryIO) -> None:
        """Render a Document AST into a writable binary sink.

        Raises:
            ConversionError: If writing to the sink fails

        """
        ...
