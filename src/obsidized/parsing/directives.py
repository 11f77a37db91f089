"""Inline directive recognizers and the priority dispatcher.

Each recognizer is a plain function ``(scanner, pos, limit)`` returning
``(node, resume)`` on a match or ``None`` when its syntax does not start at
``pos``. The dispatcher tries them in a fixed order and returns the first
match. Order matters because prefixes overlap:

- ``![`` is tried as an external image before ``![[`` as an internal image
- ```` ``` ```` is tried before a single backtick
- ``**``/``__`` are tried before ``*``/``_``

"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from obsidized.nodes import (
    Bold,
    CodeBlock,
    Expression,
    ExternalImage,
    Highlight,
    InlineCode,
    InlineMath,
    InternalImage,
    InternalLink,
    Italic,
    RawHyperLink,
    StrikeThrough,
)
from obsidized.parsing.charsets import URL_TRAILING_PUNCTUATION
from obsidized.parsing.primitives import Fence, fenced, fenced_char, styled

if TYPE_CHECKING:
    from obsidized.config import ParseConfig
    from obsidized.parsing.inline import InlineScanner

type Recognizer = Callable[[InlineScanner, int, int], tuple[Expression, int] | None]

_URL_RE = re.compile(r"https?://[^\s<>\[\]]+")


# =============================================================================
# Building blocks
# =============================================================================


def _internal_link(scanner: InlineScanner, pos: int, limit: int) -> Fence | None:
    return fenced(scanner, pos, limit, "[[", "]]")


def _markdown_link(
    scanner: InlineScanner, pos: int, limit: int
) -> tuple[Fence, Fence] | None:
    """Match ``[text](url)``; a missing ``(`` after ``]`` is no match."""
    text = fenced_char(scanner, pos, limit, "[", "]")
    if text is None:
        return None
    url = fenced_char(scanner, text.resume, limit, "(", ")")
    if url is None:
        return None
    return text, url


# =============================================================================
# Recognizers
# =============================================================================


def inline_math(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    fence = fenced_char(scanner, pos, limit, "$", "$")
    if fence is None:
        return None
    node = InlineMath(fence.inner(scanner.source), location=scanner.location(pos, fence.resume))
    return node, fence.resume


def internal_link(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    fence = _internal_link(scanner, pos, limit)
    if fence is None:
        return None
    node = InternalLink(fence.inner(scanner.source), location=scanner.location(pos, fence.resume))
    return node, fence.resume


def external_image(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    """Parse ``![alt](url)``."""
    if pos >= limit or scanner.source[pos] != "!":
        return None
    link = _markdown_link(scanner, pos + 1, limit)
    if link is None:
        return None
    alt, url = link
    source = scanner.source
    node = ExternalImage(
        alt=alt.inner(source),
        url=url.inner(source),
        location=scanner.location(pos, url.resume),
    )
    return node, url.resume


def code_block(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    """Parse a triple-backtick fence.

    The interior up to the first newline is the language tag; the rest,
    newline included, is the body with trailing whitespace removed.
    """
    fence = fenced(scanner, pos, limit, "```", "```")
    if fence is None:
        return None
    inner = fence.inner(scanner.source)
    newline = inner.find("\n")
    if newline == -1:
        lang, contents = inner, ""
    else:
        lang, contents = inner[:newline], inner[newline:]
    node = CodeBlock(
        lang=lang.rstrip("\r"),
        contents=contents.rstrip(),
        location=scanner.location(pos, fence.resume),
    )
    return node, fence.resume


def inline_code(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    fence = fenced_char(scanner, pos, limit, "`", "`")
    if fence is None:
        return None
    node = InlineCode(fence.inner(scanner.source), location=scanner.location(pos, fence.resume))
    return node, fence.resume


def internal_image(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    """Parse ``![[target]]``."""
    if pos >= limit or scanner.source[pos] != "!":
        return None
    fence = _internal_link(scanner, pos + 1, limit)
    if fence is None:
        return None
    node = InternalImage(fence.inner(scanner.source), location=scanner.location(pos, fence.resume))
    return node, fence.resume


def bold(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    for boundary in ("**", "__"):
        result = styled(scanner, pos, limit, boundary)
        if result is not None:
            children, resume = result
            return Bold(children, location=scanner.location(pos, resume)), resume
    return None


def italic(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    for boundary in ("*", "_"):
        result = styled(scanner, pos, limit, boundary)
        if result is not None:
            children, resume = result
            return Italic(children, location=scanner.location(pos, resume)), resume
    return None


def strikethrough(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    result = styled(scanner, pos, limit, "~~")
    if result is None:
        return None
    children, resume = result
    return StrikeThrough(children, location=scanner.location(pos, resume)), resume


def highlight(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    result = styled(scanner, pos, limit, "==")
    if result is None:
        return None
    children, resume = result
    return Highlight(children, location=scanner.location(pos, resume)), resume


def raw_hyperlink(scanner: InlineScanner, pos: int, limit: int) -> tuple[Expression, int] | None:
    """Parse a bare ``http://`` or ``https://`` URL.

    Only matches at a word start; trailing sentence punctuation stays text.
    """
    source = scanner.source
    if pos > 0 and source[pos - 1].isalnum():
        return None
    match = _URL_RE.match(source, pos, limit)
    if match is None:
        return None
    url = match.group(0).rstrip(URL_TRAILING_PUNCTUATION)
    if url.endswith(")") and url.count("(") < url.count(")"):
        url = url[:-1]
    if url.endswith("://"):
        return None
    resume = pos + len(url)
    return RawHyperLink(url, location=scanner.location(pos, resume)), resume


# =============================================================================
# Dispatch
# =============================================================================

BASE_DIRECTIVES: tuple[Recognizer, ...] = (
    inline_math,
    internal_link,
    external_image,
    code_block,
    inline_code,
    internal_image,
    bold,
    italic,
    strikethrough,
    highlight,
)

AUTOLINK_DIRECTIVES: tuple[Recognizer, ...] = (*BASE_DIRECTIVES, raw_hyperlink)


def directives_for(config: ParseConfig) -> tuple[Recognizer, ...]:
    """Return the recognizers active under ``config``, in priority order."""
    if config.autolinks_enabled:
        return AUTOLINK_DIRECTIVES
    return BASE_DIRECTIVES


def dispatch(
    scanner: InlineScanner,
    pos: int,
    limit: int,
    directives: tuple[Recognizer, ...] = BASE_DIRECTIVES,
) -> tuple[Expression, int] | None:
    """Return the first recognizer match at ``pos``, or None if none applies.

    Raises:
        ParseError: A recognizer found an opening fence with no close
    """
    for recognizer in directives:
        result = recognizer(scanner, pos, limit)
        if result is not None:
            return result
    return None
