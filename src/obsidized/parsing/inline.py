"""Inline scanner: turns one line (or any source region) into Expressions.

The scanner walks candidate offsets left to right and asks the directive
dispatcher whether a directive starts there. Text between directives is
collected as ``Text`` nodes with leading whitespace removed.

Offsets index the source string by code point, so multi-byte characters are
never split.

Thread Safety:
Scanner instances hold per-parse state only. Create one per parse.

"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING

from obsidized.errors import ParseError
from obsidized.location import SourceLocation
from obsidized.nodes import Expression, Text
from obsidized.parsing.charsets import AUTOLINK_START, DIRECTIVE_START
from obsidized.parsing.directives import directives_for, dispatch

if TYPE_CHECKING:
    from obsidized.config import ParseConfig
    from obsidized.parsing.primitives import Fence


def line_starts(source: str) -> list[int]:
    """Offsets at which each line of ``source`` begins."""
    starts = [0]
    pos = source.find("\n")
    while pos != -1:
        starts.append(pos + 1)
        pos = source.find("\n", pos + 1)
    return starts


class InlineScanner:
    """Scan regions of a source buffer for inline directives.

    Usage:
        >>> scanner = InlineScanner("This is a *test*!", ParseConfig())
        >>> scanner.scan(0, 17)
        [Text(content='This is a '), Italic(children=(Text(content='test'),)), Text(content='!')]

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_config",
        "_line_starts",
        "_directives",
        "_start_chars",
    )

    def __init__(
        self,
        source: str,
        config: ParseConfig,
        source_file: str | None = None,
        starts: list[int] | None = None,
    ) -> None:
        self._source = source
        self._source_file = source_file
        self._config = config
        self._line_starts = starts if starts is not None else line_starts(source)
        self._directives = directives_for(config)
        if config.autolinks_enabled:
            self._start_chars = DIRECTIVE_START | AUTOLINK_START
        else:
            self._start_chars = DIRECTIVE_START

    @property
    def source(self) -> str:
        return self._source

    # =========================================================================
    # Scanning
    # =========================================================================

    def scan(self, start: int, limit: int) -> list[Expression]:
        """Parse ``source[start:limit]`` into an ordered list of Expressions.

        The whole region is consumed: anything no directive claims becomes
        Text. Each match resumes strictly after its start, so the loop ends.

        Raises:
            ParseError: A fence inside the region is never closed
        """
        output: list[Expression] = []
        source = self._source
        start_chars = self._start_chars
        directives = self._directives
        pos = start

        while pos < limit:
            match = None
            offset = pos
            while offset < limit:
                if source[offset] in start_chars:
                    match = dispatch(self, offset, limit, directives)
                    if match is not None:
                        break
                offset += 1

            if match is None:
                self._push_text(output, pos, limit)
                break

            node, resume = match
            self._push_text(output, pos, offset)
            output.append(node)
            pos = resume

        return output

    def _push_text(self, output: list[Expression], start: int, end: int) -> None:
        """Append ``source[start:end]`` minus leading whitespace, if anything is left."""
        source = self._source
        while start < end and source[start].isspace():
            start += 1
        if start < end:
            output.append(Text(source[start:end], location=self.location(start, end)))

    # =========================================================================
    # Locations and errors
    # =========================================================================

    def line_col(self, offset: int) -> tuple[int, int]:
        """Return 1-indexed (line, column) for a source offset."""
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def location(self, start: int, end: int) -> SourceLocation:
        lineno, col = self.line_col(start)
        return SourceLocation(
            lineno=lineno,
            col_offset=col,
            offset=start,
            end_offset=end,
            source_file=self._source_file,
        )

    def error(self, message: str, offset: int, limit: int) -> ParseError:
        lineno, col = self.line_col(offset)
        return ParseError(
            message,
            lineno=lineno,
            col_offset=col,
            source_file=self._source_file,
            fragment=self._source[offset:limit],
        )

    def unterminated(self, delimiter: str, offset: int, limit: int) -> Fence | None:
        """Handle a fence whose closing delimiter never appears.

        Raises ParseError under ``strict_fences``; otherwise reports no match
        so the delimiter stays plain text.
        """
        if self._config.strict_fences:
            raise self.error(f"unterminated {delimiter!r} fence", offset, limit)
        return None
