"""Recursive descent parser producing the typed AST.

Architecture:
`Parser` owns per-parse state (source, line table, inline scanner) and
inherits block segmentation from `BlockParsingMixin`. Inline content is
delegated to `InlineScanner`, which re-enters itself for styled spans.

Thread Safety:
- Parser instances are single-use; create one per parse
- Configuration is read from ContextVar (thread-local)
- The resulting AST is immutable

"""

from __future__ import annotations

from obsidized.config import get_parse_config
from obsidized.location import SourceLocation
from obsidized.nodes import Document, Expression
from obsidized.parsing import BlockParsingMixin, InlineScanner, line_starts, split_lines
from obsidized.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(BlockParsingMixin):
    """Parser for Obsidian-flavored Markdown.

    Usage:
        >>> parser = Parser("A\\n\\nB")
        >>> parser.parse()
        [Block(children=(Text(content='A'),)), Block(children=(Text(content='B'),))]

    Configuration:
        Read from ContextVar when the parser is created. Use
        set_parse_config() or parse_config_context() beforehand for
        non-default behavior.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_config",
        "_line_starts",
        "_lines",
        "_scanner",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages

        """
        self._source = source
        self._source_file = source_file
        self._config = get_parse_config()
        self._line_starts = line_starts(source)
        self._lines = split_lines(source, self._line_starts)
        self._scanner = InlineScanner(
            source,
            self._config,
            source_file=source_file,
            starts=self._line_starts,
        )

    def parse(self) -> list[Expression]:
        """Parse the source into one Block per run of non-blank lines.

        Raises:
            ParseError: If a fence is opened and never closed
        """
        blocks = self._parse_blocks()
        logger.debug(
            "parsed %d block(s) from %d line(s)%s",
            len(blocks),
            len(self._lines),
            f" in {self._source_file}" if self._source_file else "",
        )
        return blocks

    def parse_document(self) -> Document:
        """Parse and wrap the blocks in a Document with empty frontmatter."""
        blocks = self.parse()
        loc = SourceLocation(
            lineno=1,
            col_offset=1,
            offset=0,
            end_offset=len(self._source),
            source_file=self._source_file,
        )
        return Document(tuple(blocks), frontmatter="", location=loc)
