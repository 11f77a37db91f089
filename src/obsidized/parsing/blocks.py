"""Block segmentation for obsidized parser.

Splits the source into maximal runs of non-blank lines. Every line of a run
is parsed on its own and the results are concatenated into one ``Block``.

Line-level extensions (headings, quotes, math blocks, multi-line code
fences) are checked here, before a line is handed to the inline scanner.

"""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import TYPE_CHECKING, NamedTuple

from obsidized.nodes import (
    Block,
    BlockMath,
    BlockQuote,
    Callout,
    Expression,
    Heading,
    HorizontalBar,
)

if TYPE_CHECKING:
    from obsidized.config import ParseConfig
    from obsidized.parsing.inline import InlineScanner

# Whole line that parses as HorizontalBar (nothing else on the line)
HORIZONTAL_BAR = "---"

_HEADING_RE = re.compile(r"(#+)[ \t]+(\S.*)")
_CALLOUT_RE = re.compile(r"\[!([^\]\s]+)\][+-]?")


class LineSpan(NamedTuple):
    """Line bounds in the source; ``end`` excludes the line terminator."""

    start: int
    end: int


def split_lines(source: str, starts: list[int]) -> list[LineSpan]:
    """Build one LineSpan per line, dropping ``\\n`` and a preceding ``\\r``."""
    lines: list[LineSpan] = []
    last = len(starts) - 1
    for i, start in enumerate(starts):
        end = starts[i + 1] - 1 if i < last else len(source)
        if end > start and source[end - 1] == "\r":
            end -= 1
        lines.append(LineSpan(start, end))
    return lines


class BlockParsingMixin:
    """Block segmentation and line-level parsing.

    Required Host Attributes:
        - _source: str
        - _config: ParseConfig
        - _scanner: InlineScanner
        - _line_starts: list[int]
        - _lines: list[LineSpan]

    """

    __slots__ = ()

    _source: str
    _config: ParseConfig
    _scanner: InlineScanner
    _line_starts: list[int]
    _lines: list[LineSpan]

    def _parse_blocks(self) -> list[Expression]:
        """Group lines into blocks at blank-line boundaries.

        A source without any non-blank line yields a single empty block.
        """
        source = self._source
        lines = self._lines
        blocks: list[Expression] = []
        current: list[Expression] = []
        block_start = -1
        block_end = -1
        index = 0

        while index < len(lines):
            line = lines[index]
            if not source[line.start : line.end].strip():
                if block_start != -1:
                    blocks.append(self._finish_block(current, block_start, block_end))
                    current = []
                    block_start = -1
                index += 1
                continue

            if block_start == -1:
                block_start = line.start
            nodes, index = self._parse_line(index)
            current.extend(nodes)
            block_end = lines[index - 1].end

        if block_start != -1:
            blocks.append(self._finish_block(current, block_start, block_end))

        if not blocks:
            blocks.append(Block((), location=self._scanner.location(0, len(source))))
        return blocks

    def _finish_block(self, nodes: list[Expression], start: int, end: int) -> Block:
        return Block(tuple(nodes), location=self._scanner.location(start, end))

    def _parse_line(self, index: int) -> tuple[list[Expression], int]:
        """Parse the non-blank line at ``index``.

        Returns the line's nodes and the index of the next unconsumed line,
        which is past ``index + 1`` when a fence spans several lines.
        """
        source = self._source
        config = self._config
        scanner = self._scanner
        line = self._lines[index]
        text = source[line.start : line.end]

        if text == HORIZONTAL_BAR:
            return [HorizontalBar(location=scanner.location(line.start, line.end))], index + 1

        end = line.start + len(text.rstrip())
        body = line.start + (len(text) - len(text.lstrip()))

        if config.block_math_enabled and source.startswith("$$", body, end):
            result = self._parse_block_math(body)
            if result is not None:
                return result

        if config.code_blocks_enabled and source.startswith("```", body, end):
            limit, next_index = self._extend_code_fence(index, body, end)
            return scanner.scan(line.start, limit), next_index

        if config.headings_enabled:
            match = _HEADING_RE.fullmatch(source, body, end)
            if match is not None:
                heading = Heading(
                    level=len(match.group(1)),
                    text=match.group(2),
                    location=scanner.location(body, end),
                )
                return [heading], index + 1

        if config.block_quotes_enabled and source.startswith(">", body, end):
            return [self._parse_quote(body, end)], index + 1

        return scanner.scan(line.start, end), index + 1

    # =========================================================================
    # Extensions
    # =========================================================================

    def _parse_quote(self, body: int, end: int) -> Expression:
        """Parse ``> text`` as BlockQuote or ``> [!type] text`` as Callout."""
        source = self._source
        scanner = self._scanner
        pos = body + 1
        if pos < end and source[pos] in " \t":
            pos += 1

        callout = _CALLOUT_RE.match(source, pos, end)
        if callout is not None:
            children = scanner.scan(callout.end(), end)
            return Callout(
                callout_type=callout.group(1),
                children=tuple(children),
                location=scanner.location(body, end),
            )
        return BlockQuote(tuple(scanner.scan(pos, end)), location=scanner.location(body, end))

    def _parse_block_math(self, body: int) -> tuple[list[Expression], int] | None:
        """Parse ``$$...$$`` starting at ``body``; the close may be lines later.

        Text after the closing ``$$`` on its line is scanned inline.
        """
        source = self._source
        scanner = self._scanner
        close = source.find("$$", body + 2)
        if close == -1:
            if self._config.strict_fences:
                raise scanner.error("unterminated '$$' fence", body, len(source))
            return None

        last = self._line_index(close)
        node = BlockMath(source[body + 2 : close], location=scanner.location(body, close + 2))
        nodes: list[Expression] = [node]
        nodes.extend(scanner.scan(close + 2, self._content_end(last)))
        return nodes, last + 1

    def _extend_code_fence(self, index: int, body: int, end: int) -> tuple[int, int]:
        """Find how far the scan window of a fence line must reach.

        A fence closed on its own line keeps the line as the window. An open
        fence extends to the end of the line holding the next ``` so the
        code body (blank lines included) is scanned as one region. Without
        any closing fence the line stays as is and the scanner reports it.
        """
        source = self._source
        if source.find("```", body + 3, end) != -1:
            return end, index + 1
        close = source.find("```", end)
        if close == -1:
            return end, index + 1
        last = self._line_index(close)
        return self._content_end(last), last + 1

    # =========================================================================
    # Line helpers
    # =========================================================================

    def _line_index(self, offset: int) -> int:
        return bisect_right(self._line_starts, offset) - 1

    def _content_end(self, index: int) -> int:
        """End of line ``index`` with trailing whitespace removed."""
        line = self._lines[index]
        text = self._source[line.start : line.end]
        return line.start + len(text.rstrip())
