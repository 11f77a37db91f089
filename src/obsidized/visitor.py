"""AST Visitor and Transformer for obsidized.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen ASTs.

Collect every internal link target:

    class LinkCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.targets: list[str] = []

        def visit_internal_link(self, node: InternalLink) -> None:
            self.targets.append(node.target)

    collector = LinkCollector()
    collector.visit(doc)

Turn highlights into italics:

    def unhighlight(node: Node) -> Node:
        if isinstance(node, Highlight):
            return Italic(node.children, location=node.location)
        return node

    new_doc = transform(doc, unhighlight)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread. The
    transform function is pure.

"""

import dataclasses
from collections.abc import Callable

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
    Node,
    RawHyperLink,
    StrikeThrough,
    Tables,
    Task,
    TaskList,
    Text,
)

# Node types whose ``children`` field holds nested nodes
_CONTAINERS = (
    Document,
    Block,
    Italic,
    Bold,
    StrikeThrough,
    Highlight,
    BlockQuote,
    Callout,
    TaskList,
    Task,
    ListElement,
)


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the matching ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` override."""
        return None  # type: ignore[return-value]

    # -- Structure -------------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_block(self, node: Block) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_code_block(self, node: CodeBlock) -> T:
        return self.visit_default(node)

    def visit_block_quote(self, node: BlockQuote) -> T:
        return self.visit_default(node)

    def visit_callout(self, node: Callout) -> T:
        return self.visit_default(node)

    def visit_task_list(self, node: TaskList) -> T:
        return self.visit_default(node)

    def visit_task(self, node: Task) -> T:
        return self.visit_default(node)

    def visit_list_element(self, node: ListElement) -> T:
        return self.visit_default(node)

    def visit_tables(self, node: Tables) -> T:
        return self.visit_default(node)

    def visit_horizontal_bar(self, node: HorizontalBar) -> T:
        return self.visit_default(node)

    def visit_block_math(self, node: BlockMath) -> T:
        return self.visit_default(node)

    # -- Inline ----------------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_raw_hyperlink(self, node: RawHyperLink) -> T:
        return self.visit_default(node)

    def visit_internal_link(self, node: InternalLink) -> T:
        return self.visit_default(node)

    def visit_inline_code(self, node: InlineCode) -> T:
        return self.visit_default(node)

    def visit_inline_math(self, node: InlineMath) -> T:
        return self.visit_default(node)

    def visit_external_image(self, node: ExternalImage) -> T:
        return self.visit_default(node)

    def visit_internal_image(self, node: InternalImage) -> T:
        return self.visit_default(node)

    def visit_italic(self, node: Italic) -> T:
        return self.visit_default(node)

    def visit_bold(self, node: Bold) -> T:
        return self.visit_default(node)

    def visit_strikethrough(self, node: StrikeThrough) -> T:
        return self.visit_default(node)

    def visit_highlight(self, node: Highlight) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        match node:
            case Document():
                return self.visit_document(node)
            case Block():
                return self.visit_block(node)
            case Heading():
                return self.visit_heading(node)
            case CodeBlock():
                return self.visit_code_block(node)
            case BlockQuote():
                return self.visit_block_quote(node)
            case Callout():
                return self.visit_callout(node)
            case TaskList():
                return self.visit_task_list(node)
            case Task():
                return self.visit_task(node)
            case ListElement():
                return self.visit_list_element(node)
            case Tables():
                return self.visit_tables(node)
            case HorizontalBar():
                return self.visit_horizontal_bar(node)
            case BlockMath():
                return self.visit_block_math(node)
            case Text():
                return self.visit_text(node)
            case RawHyperLink():
                return self.visit_raw_hyperlink(node)
            case InternalLink():
                return self.visit_internal_link(node)
            case InlineCode():
                return self.visit_inline_code(node)
            case InlineMath():
                return self.visit_inline_math(node)
            case ExternalImage():
                return self.visit_external_image(node)
            case InternalImage():
                return self.visit_internal_image(node)
            case Italic():
                return self.visit_italic(node)
            case Bold():
                return self.visit_bold(node)
            case StrikeThrough():
                return self.visit_strikethrough(node)
            case Highlight():
                return self.visit_highlight(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        match node:
            case Tables(rows=rows):
                for row in rows:
                    for cell in row:
                        self.visit(cell)
            case _ if isinstance(node, _CONTAINERS):
                for child in node.children:
                    self.visit(child)
            case _:
                pass  # Leaf nodes: no children


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the AST, returning a new tree.

    ``fn`` is called bottom-up: children are transformed first, then the
    parent receives its new children. Return ``None`` from ``fn`` to remove
    a node. The root Document cannot be removed; returning None for it
    raises TypeError.

    The original tree is untouched.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    return fn(_transform_children(node, fn))


def _changed(new: tuple[Node, ...], old: tuple[Node, ...]) -> bool:
    """Compare by identity; node equality ignores ``location``."""
    return len(new) != len(old) or any(a is not b for a, b in zip(new, old))


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Produce a new node with children transformed; removed nodes are dropped."""

    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    match node:
        case Tables(rows=rows):
            new_rows = tuple(_filtered(row) for row in rows)
            if any(_changed(new, old) for new, old in zip(new_rows, rows, strict=True)):
                return dataclasses.replace(node, rows=new_rows)
        case _ if isinstance(node, _CONTAINERS):
            new_children = _filtered(node.children)
            if _changed(new_children, node.children):
                return dataclasses.replace(node, children=new_children)
        case _:
            pass  # Leaf nodes: return as-is

    return node
