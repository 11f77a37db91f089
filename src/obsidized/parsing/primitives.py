"""Fenced and styled span primitives.

A fence is a start delimiter at the current position plus the first
occurrence of an end delimiter after it. Nesting of the same delimiter is
not supported: the first matching end wins.

All primitives scan the shared source buffer between ``pos`` and ``limit``
without slicing it, and report:
- ``None`` when the start delimiter is not at ``pos`` (no match)
- a ``Fence`` with the interior bounds and the resume position
- ``ParseError`` (via the scanner) when the start delimiter is present but
  the end delimiter never occurs before ``limit``

"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from obsidized.nodes import Expression
    from obsidized.parsing.inline import InlineScanner


class Fence(NamedTuple):
    """Bounds of a matched fence.

    ``start``/``end`` delimit the interior; ``resume`` is the first offset
    after the closing delimiter.
    """

    start: int
    end: int
    resume: int

    def inner(self, source: str) -> str:
        return source[self.start : self.end]


def fenced(
    scanner: InlineScanner, pos: int, limit: int, start: str, end: str
) -> Fence | None:
    """Match a literal start delimiter and the first literal end after it."""
    source = scanner.source
    if not source.startswith(start, pos, limit):
        return None
    inner = pos + len(start)
    close = source.find(end, inner, limit)
    if close == -1:
        return scanner.unterminated(start, pos, limit)
    return Fence(inner, close, close + len(end))


def fenced_char(
    scanner: InlineScanner, pos: int, limit: int, start: str, end: str
) -> Fence | None:
    """Single-character variant of ``fenced``: stop at the first ``end`` char."""
    source = scanner.source
    if pos >= limit or source[pos] != start:
        return None
    close = pos + 1
    while close < limit and source[close] != end:
        close += 1
    if close >= limit:
        return scanner.unterminated(start, pos, limit)
    return Fence(pos + 1, close, close + 1)


def styled(
    scanner: InlineScanner, pos: int, limit: int, boundary: str
) -> tuple[tuple[Expression, ...], int] | None:
    """Fence on ``boundary`` and parse the interior as inline content.

    Returns the nested children and the resume position.
    """
    if len(boundary) == 1:
        fence = fenced_char(scanner, pos, limit, boundary, boundary)
    else:
        fence = fenced(scanner, pos, limit, boundary, boundary)
    if fence is None:
        return None
    children = scanner.scan(fence.start, fence.end)
    return tuple(children), fence.resume
