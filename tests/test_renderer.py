"""Tests for HtmlRenderer."""

from __future__ import annotations

import io

import pytest

from obsidized.nodes import (
    Block,
    BlockMath,
    BlockQuote,
    Bold,
    Callout,
    CodeBlock,
    Document,
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
    Tables,
    Task,
    TaskList,
    Text,
)
from obsidized.renderers.html import HtmlRenderer

OPEN = '<p class="block">\n'
CLOSE = "\n</p>\n"


def _doc(*nodes) -> Document:
    return Document((Block(tuple(nodes)),))


def _render(*nodes, repair_markup: bool = False) -> str:
    """Render nodes inside one block and strip the block wrapper."""
    html = HtmlRenderer(repair_markup=repair_markup).render(_doc(*nodes))
    assert html.startswith(OPEN)
    assert html.endswith(CLOSE)
    return html[len(OPEN) : -len(CLOSE)]


class TestFragments:
    """Each node type maps to one fixed fragment."""

    def test_text_verbatim(self) -> None:
        assert _render(Text("a < b & c")) == "a < b & c"

    def test_raw_hyperlink(self) -> None:
        assert _render(RawHyperLink("https://a.b")) == (
            '<a class="link" href"https://a.b">https://a.b</a>'
        )

    def test_internal_link_has_no_closing_tag(self) -> None:
        assert _render(InternalLink("Note")) == '<a class="link internal-link" href="Note"> Note'

    def test_inline_code(self) -> None:
        assert _render(InlineCode("x = 1")) == '<span class="inline-code">x = 1</span>'

    def test_inline_math(self) -> None:
        assert _render(InlineMath("e^x")) == "$e^x$"

    def test_block_math(self) -> None:
        assert _render(BlockMath("\\sum")) == "$$\\sum$$"

    @pytest.mark.parametrize("level", [1, 2, 3, 4])
    def test_heading(self, level: int) -> None:
        assert _render(Heading(level=level, text="Title")) == (
            f'<h{level} class="heading header-{level}">Title</div>'
        )

    @pytest.mark.parametrize("level", [5, 6])
    def test_deep_heading_uses_div(self, level: int) -> None:
        assert _render(Heading(level=level, text="Deep")) == (
            f'<div class="heading header-{level}">Deep</div>'
        )

    def test_external_image(self) -> None:
        assert _render(ExternalImage(alt="cat", url="cat.png")) == (
            '<img class="external-image" alt="cat" src="cat.png"/>'
        )

    def test_internal_image(self) -> None:
        assert _render(InternalImage("d.png")) == (
            '<img class="external-image" alt="d.png" src="d.png"/>'
        )

    @pytest.mark.parametrize(
        ("node_cls", "css_class"),
        [
            (Bold, "bold"),
            (Italic, "italic"),
            (StrikeThrough, "strikethrough"),
            (Highlight, "highlight"),
        ],
    )
    def test_styled_spans(self, node_cls: type, css_class: str) -> None:
        assert _render(node_cls((Text("x"),))) == f'<span class="{css_class}">\nx</span>\n'

    def test_nested_spans(self) -> None:
        node = Bold((Text("a "), Italic((Text("b"),))))
        assert _render(node) == (
            '<span class="bold">\na <span class="italic">\nb</span>\n</span>\n'
        )

    def test_block_quote(self) -> None:
        assert _render(BlockQuote((Text("q"),))) == '<quote class="blockquote">\nq</quote>\n'

    def test_horizontal_bar(self) -> None:
        assert _render(HorizontalBar()) == '<div class="horizontal-bar"> </div>\n'


class TestUnrendered:
    """Parsed-only node types produce nothing and do not fail."""

    @pytest.mark.parametrize(
        "node",
        [
            CodeBlock(lang="py", contents="x"),
            TaskList((Task(completed=False, children=(Text("t"),)),)),
            Task(completed=True, children=(Text("t"),)),
            Callout(callout_type="note", children=(Text("c"),)),
            Tables(((Text("a"), Text("b")),)),
            ListElement(style="-", loose=False, children=(Text("l"),)),
        ],
    )
    def test_no_output(self, node) -> None:
        assert _render(node) == ""

    def test_between_text(self) -> None:
        assert _render(Text("a"), CodeBlock(lang="", contents="x"), Text("b")) == "ab"


class TestDocument:
    """Block wrappers and whole-document output."""

    def test_each_block_wrapped(self) -> None:
        doc = Document((Block((Text("A"),)), Block((Text("B"),))))
        assert HtmlRenderer().render(doc) == (
            '<p class="block">\nA\n</p>\n<p class="block">\nB\n</p>\n'
        )

    def test_empty_block(self) -> None:
        assert HtmlRenderer().render(Document((Block(()),))) == '<p class="block">\n\n</p>\n'

    def test_empty_document(self) -> None:
        assert HtmlRenderer().render(Document(())) == ""

    def test_end_to_end_fragment(self) -> None:
        doc = _doc(Text("This is a "), Italic((Text("test"),)), Text("!"))
        assert HtmlRenderer().render(doc) == (
            '<p class="block">\nThis is a <span class="italic">\ntest</span>\n!\n</p>\n'
        )


class TestRepairMarkup:
    """``repair_markup`` fixes the two malformed fragments only."""

    def test_hyperlink_gets_equals_sign(self) -> None:
        assert _render(RawHyperLink("https://a.b"), repair_markup=True) == (
            '<a class="link" href="https://a.b">https://a.b</a>'
        )

    def test_heading_closes_with_own_tag(self) -> None:
        assert _render(Heading(level=3, text="T"), repair_markup=True) == (
            '<h3 class="heading header-3">T</h3>'
        )

    def test_deep_heading_unchanged(self) -> None:
        assert _render(Heading(level=5, text="T"), repair_markup=True) == (
            '<div class="heading header-5">T</div>'
        )

    def test_internal_link_unchanged(self) -> None:
        assert _render(InternalLink("N"), repair_markup=True) == (
            '<a class="link internal-link" href="N"> N'
        )


class TestConvert:
    """Writing into a binary sink."""

    def test_matches_render(self) -> None:
        doc = Document((Block((Text("A"),)), Block((Bold((Text("日本"),)),))))
        sink = io.BytesIO()
        HtmlRenderer().convert(doc, sink)
        assert sink.getvalue() == HtmlRenderer().render(doc).encode("utf-8")

    def test_empty_document_writes_nothing(self) -> None:
        sink = io.BytesIO()
        HtmlRenderer().convert(Document(()), sink)
        assert sink.getvalue() == b""
