"""
obsidized: Obsidian-flavored Markdown to HTML

Parses wiki links, embeds, callouts, highlights and math spans into a typed,
immutable AST and renders it to HTML.

Quick Start:
    >>> from obsidized import parse_document, render
    >>> doc = parse_document("This is a *test*!")
    >>> print(render(doc))
    <p class="block">
    This is a <span class="italic">
    test</span>
    !
    </p>

    >>> # Or use the high-level Markdown class
    >>> from obsidized import Markdown
    >>> md = Markdown(plugins=["headings", "block_quotes"])
    >>> html = md("# Daily note\\n\\n> [!todo] water the [[Plants]]")

Writing to a file:
    >>> with open("note.html", "wb") as sink:
    ...     convert(parse_document(text), sink)
"""

from typing import BinaryIO

from obsidized.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from obsidized.errors import ConversionError, ObsidizedError, ParseError
from obsidized.location import SourceLocation
from obsidized.nodes import (
    Block,
    BlockMath,
    BlockQuote,
    Bold,
    Callout,
    CodeBlock,
    Document,
    Expression,
    ExternalImage,
    Heading,
    Highlight,
    HorizontalBar,
    InlineCode,
    InlineMath,
    InternalImage,
    InternalLink,
    Italic,
    ListElement,
    Node,
    RawHyperLink,
    StrikeThrough,
    Tables,
    Task,
    TaskList,
    Text,
)
from obsidized.parser import Parser
from obsidized.renderers.html import HtmlRenderer
from obsidized.renderers.protocol import ASTRenderer
from obsidized.serialization import from_dict, from_json, to_dict, to_json
from obsidized.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def parse(source: str, *, source_file: str | None = None) -> list[Expression]:
    """Parse Markdown source into a list of blocks.

    Uses the configuration active in the current context (see
    ``parse_config_context``).

    Args:
        source: Markdown source text
        source_file: Optional source file path for error messages

    Returns:
        One Block per run of non-blank lines

    Raises:
        ParseError: If a fence is opened and never closed

    Example:
        >>> parse("A\\n\\nB")
        [Block(children=(Text(content='A'),)), Block(children=(Text(content='B'),))]
    """
    return Parser(source, source_file=source_file).parse()


def parse_document(source: str, *, source_file: str | None = None) -> Document:
    """Parse Markdown source and wrap the blocks in a Document."""
    return Parser(source, source_file=source_file).parse_document()


def render(doc: Document, *, repair_markup: bool = False) -> str:
    """Render a Document to an HTML string."""
    return HtmlRenderer(repair_markup=repair_markup).render(doc)


def convert(doc: Document, sink: BinaryIO, *, repair_markup: bool = False) -> None:
    """Render a Document into a writable binary sink.

    Raises:
        ConversionError: If writing to the sink fails
    """
    HtmlRenderer(repair_markup=repair_markup).convert(doc, sink)


class Markdown:
    """High-level processor combining parser configuration and renderer.

    Usage:
        >>> md = Markdown()
        >>> md("**Bold** move")
        '<p class="block">\\n<span class="bold">\\nBold</span>\\nmove\\n</p>\\n'

        >>> md = Markdown(plugins=["all"], strict_fences=False)
        >>> doc = md.parse("# Title\\n\\ncosts $5")

    Thread Safety:
        Config is set via ContextVar around each parse. Safe to use several
        instances concurrently from different threads.

    """

    __slots__ = ("_config", "_plugins", "_renderer")

    def __init__(
        self,
        *,
        plugins: list[str] | None = None,
        strict_fences: bool = True,
        repair_markup: bool = False,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            plugins: Extension names to enable (``headings``,
                ``block_quotes``, ``block_math``, ``code_blocks``,
                ``autolinks``), or ``["all"]``
            strict_fences: Raise ParseError on unterminated fences
            repair_markup: Emit well-formed link and heading markup

        Raises:
            KeyError: If a plugin name is not recognized
        """
        self._plugins = list(plugins or [])
        self._config = ParseConfig.from_plugins(self._plugins, strict_fences=strict_fences)
        self._renderer = HtmlRenderer(repair_markup=repair_markup)

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render Markdown in one call."""
        return self._renderer.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into a Document under this instance's config."""
        with parse_config_context(self._config):
            return parse_document(source, source_file=source_file)

    def render(self, doc: Document) -> str:
        return self._renderer.render(doc)

    def convert(self, doc: Document, sink: BinaryIO) -> None:
        """Render into a writable binary sink.

        Raises:
            ConversionError: If writing to the sink fails
        """
        self._renderer.convert(doc, sink)


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "parse",
    "parse_document",
    "render",
    "convert",
    # Nodes
    "Node",
    "Expression",
    "Document",
    "Block",
    "Text",
    "RawHyperLink",
    "InternalLink",
    "InlineCode",
    "InlineMath",
    "BlockMath",
    "Heading",
    "CodeBlock",
    "TaskList",
    "Task",
    "BlockQuote",
    "Callout",
    "ExternalImage",
    "InternalImage",
    "Tables",
    "Italic",
    "Bold",
    "StrikeThrough",
    "Highlight",
    "HorizontalBar",
    "ListElement",
    # Errors
    "ObsidizedError",
    "ParseError",
    "ConversionError",
    # Parser and renderer
    "Parser",
    "HtmlRenderer",
    "ASTRenderer",
    # Visitor + Transform
    "BaseVisitor",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Location
    "SourceLocation",
    # High-level
    "Markdown",
]
