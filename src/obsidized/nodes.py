"""Typed AST nodes for obsidized.

All AST nodes are frozen dataclasses with slots:
- Immutability: a parsed tree can be shared freely and never changes
- Pattern matching: the renderer and visitor dispatch with ``match``
- Location is keyword-only and excluded from equality, so tests can compare
  ``Text("a")`` with a parsed node directly

Node Hierarchy:
Node (base)
├── Document (root, not an Expression)
├── Block (one blank-line-delimited group)
├── Leaf spans
│   ├── Text, RawHyperLink, InternalLink
│   ├── InlineCode, InlineMath, BlockMath
│   ├── Heading, CodeBlock
│   ├── ExternalImage, InternalImage
│   └── HorizontalBar
├── Styled spans
│   └── Italic, Bold, StrikeThrough, Highlight
└── Containers
    ├── BlockQuote, Callout
    ├── TaskList, Task
    ├── ListElement
    └── Tables

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from obsidized.location import SourceLocation

_UNKNOWN = SourceLocation.unknown()

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    ``location`` points back into the source text the node came from.

    """

    location: SourceLocation = field(
        default=_UNKNOWN, kw_only=True, compare=False, repr=False
    )


# =============================================================================
# Leaf spans
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal run of characters, no further parsing."""

    content: str


@dataclass(frozen=True, slots=True)
class RawHyperLink(Node):
    """Bare URL.

    Markdown: https://example.com (autolinks extension)

    """

    url: str


@dataclass(frozen=True, slots=True)
class InternalLink(Node):
    """Wiki-style link to another note.

    Markdown: [[Some Note]]

    The target is kept as written; resolving it to a file is left to callers.

    """

    target: str


@dataclass(frozen=True, slots=True)
class InlineCode(Node):
    """Inline code.

    Markdown: `code`

    """

    code: str


@dataclass(frozen=True, slots=True)
class InlineMath(Node):
    """Inline math.

    Markdown: $E = mc^2$

    """

    content: str


@dataclass(frozen=True, slots=True)
class BlockMath(Node):
    """Display math.

    Markdown: $$\\int_0^1 x\\,dx$$ (block_math extension)

    """

    content: str


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """Heading line.

    Markdown: ## Title (headings extension)

    Levels above 4 render as a generic container.

    """

    level: int
    text: str


@dataclass(frozen=True, slots=True)
class CodeBlock(Node):
    """Fenced code.

    Markdown: ```lang\\n...\\n```

    ``lang`` is the first line of the fence interior and may be empty.

    """

    lang: str
    contents: str


@dataclass(frozen=True, slots=True)
class ExternalImage(Node):
    """Markdown image.

    Markdown: ![alt](url)

    """

    alt: str
    url: str


@dataclass(frozen=True, slots=True)
class InternalImage(Node):
    """Embedded note or attachment.

    Markdown: ![[image.png]]

    """

    target: str


@dataclass(frozen=True, slots=True)
class HorizontalBar(Node):
    """Horizontal rule.

    Markdown: --- (alone on its line)

    """


# =============================================================================
# Styled spans
# =============================================================================


@dataclass(frozen=True, slots=True)
class Italic(Node):
    """Markdown: *text* or _text_"""

    children: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class Bold(Node):
    """Markdown: **text** or __text__"""

    children: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class StrikeThrough(Node):
    """Markdown: ~~text~~"""

    children: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class Highlight(Node):
    """Markdown: ==text=="""

    children: tuple[Expression, ...]


# =============================================================================
# Containers
# =============================================================================


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Quoted line.

    Markdown: > quoted text (block_quotes extension)

    """

    children: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class Callout(Node):
    """Obsidian callout.

    Markdown: > [!warning] Be careful (block_quotes extension)

    """

    callout_type: str
    children: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class TaskList(Node):
    """Group of tasks. Not produced by the parser yet."""

    children: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class Task(Node):
    """Single checklist entry. Not produced by the parser yet."""

    completed: bool
    children: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class ListElement(Node):
    """List item. Not produced by the parser yet."""

    style: str
    loose: bool
    children: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class Tables(Node):
    """Row-major grid of cells. Not produced by the parser yet."""

    rows: tuple[tuple[Expression, ...], ...]


@dataclass(frozen=True, slots=True)
class Block(Node):
    """One run of consecutive non-blank lines.

    The contents of every line in the run, in order.

    """

    children: tuple[Expression, ...]


# PEP 695 type alias for everything that can appear in a block
type Expression = (
    Text
    | RawHyperLink
    | InternalLink
    | InlineCode
    | InlineMath
    | BlockMath
    | Heading
    | CodeBlock
    | TaskList
    | Task
    | BlockQuote
    | Callout
    | ExternalImage
    | InternalImage
    | Tables
    | Italic
    | Bold
    | StrikeThrough
    | Highlight
    | HorizontalBar
    | ListElement
    | Block
)


# =============================================================================
# Root
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node.

    ``frontmatter`` is reserved and always empty for now.

    """

    children: tuple[Expression, ...]
    frontmatter: str = ""
