"""HTML renderer using StringBuilder pattern.

Walks the AST depth-first and emits one fixed HTML fragment per node type.
Each top-level block is wrapped in ``<p class="block">``.

Output compatibility:
By default the output matches the established format byte for byte,
including two known quirks: raw hyperlinks are written as ``href"url"``
(no ``=``) and headings close with ``</div>``. Pass ``repair_markup=True``
to emit ``href="url"`` and a matching ``</hN>`` instead.

Unrendered node types (CodeBlock, TaskList, Task, Callout, Tables,
ListElement) produce no output.

Thread Safety:
All per-render state lives in a StringBuilder created for each call.
A single HtmlRenderer can be shared across threads.
"""

from __future__ import annotations

from typing import BinaryIO

from obsidized.errors import ConversionError
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
    RawHyperLink,
    StrikeThrough,
    Task,
    TaskList,
    Tables,
    Text,
)
from obsidized.stringbuilder import StringBuilder
from obsidized.utils.logger import get_logger

logger = get_logger(__name__)

_HEADING_TAGS: dict[int, str] = {1: "h1", 2: "h2", 3: "h3", 4: "h4"}


class HtmlRenderer:
    """Render AST to HTML.

    Usage:
        >>> doc = parse_document("This is a *test*!")
        >>> HtmlRenderer().render(doc)
        '<p class="block">\\nThis is a <span class="italic">\\ntest</span>\\n!\\n</p>\\n'

        >>> with open("out.html", "wb") as sink:
        ...     HtmlRenderer().convert(doc, sink)

    """

    __slots__ = ("_repair_markup",)

    def __init__(self, *, repair_markup: bool = False) -> None:
        """Initialize renderer.

        Args:
            repair_markup: Emit well-formed link and heading markup instead of
                the legacy byte-exact fragments
        """
        self._repair_markup = repair_markup

    def render(self, node: Document) -> str:
        """Render document AST to an HTML string."""
        sb = StringBuilder()
        for child in node.children:
            self._render_top_level(child, sb)
        return sb.build()

    def convert(self, node: Document, sink: BinaryIO) -> None:
        """Render document AST into a writable binary sink.

        Output is written block by block; bytes written before a failure
        stay written.

        Raises:
            ConversionError: If writing to the sink fails
        """
        for index, child in enumerate(node.children):
            sb = StringBuilder()
            self._render_top_level(child, sb)
            try:
                sink.write(sb.encode())
            except (OSError, ValueError) as exc:
                logger.debug("sink write failed at block %d", index, exc_info=True)
                raise ConversionError("Error while writing contents to output") from exc

    # =========================================================================
    # Rendering
    # =========================================================================

    def _render_top_level(self, node: Expression, sb: StringBuilder) -> None:
        sb.append_line('<p class="block">')
        self._render_expression(node, sb)
        sb.append_line().append_line("</p>")

    def _render_children(self, children: tuple[Expression, ...], sb: StringBuilder) -> None:
        for child in children:
            self._render_expression(child, sb)

    def _render_span(self, css_class: str, children: tuple[Expression, ...], sb: StringBuilder) -> None:
        sb.append_line(f'<span class="{css_class}">')
        self._render_children(children, sb)
        sb.append_line("</span>")

    def _render_expression(self, node: Expression, sb: StringBuilder) -> None:
        """Render one node; each type maps to exactly one fragment."""
        match node:
            case Block(children=children):
                self._render_children(children, sb)
            case Text(content=content):
                sb.append(content)
            case RawHyperLink(url=url):
                if self._repair_markup:
                    sb.append(f'<a class="link" href="{url}">{url}</a>')
                else:
                    sb.append(f'<a class="link" href"{url}">{url}</a>')
            case InternalLink(target=target):
                # TODO: resolve the target note and show its title instead of the path
                sb.append(f'<a class="link internal-link" href="{target}"> {target}')
            case InlineCode(code=code):
                sb.append(f'<span class="inline-code">{code}</span>')
            case InlineMath(content=content):
                sb.append(f"${content}$")
            case BlockMath(content=content):
                sb.append(f"$${content}$$")
            case Heading(level=level, text=text):
                self._render_heading(level, text, sb)
            case ExternalImage(alt=alt, url=url):
                sb.append(f'<img class="external-image" alt="{alt}" src="{url}"/>')
            case InternalImage(target=target):
                sb.append(f'<img class="external-image" alt="{target}" src="{target}"/>')
            case Italic(children=children):
                self._render_span("italic", children, sb)
            case Bold(children=children):
                self._render_span("bold", children, sb)
            case StrikeThrough(children=children):
                self._render_span("strikethrough", children, sb)
            case Highlight(children=children):
                self._render_span("highlight", children, sb)
            case BlockQuote(children=children):
                sb.append_line('<quote class="blockquote">')
                self._render_children(children, sb)
                sb.append_line("</quote>")
            case HorizontalBar():
                sb.append_line('<div class="horizontal-bar"> </div>')
            case CodeBlock() | TaskList() | Task() | Callout() | Tables() | ListElement():
                pass  # Parsed but not rendered

    def _render_heading(self, level: int, text: str, sb: StringBuilder) -> None:
        tag = _HEADING_TAGS.get(level, "div")
        close = tag if self._repair_markup else "div"
        sb.append(f'<{tag} class="heading header-{level}">{text}</{close}>')
