"""Parsing subsystem for obsidized.

Layers, leaf first:
- `primitives`: fenced and styled span matching
- `directives`: inline recognizers and the priority dispatcher
- `inline`: `InlineScanner`, which walks a region and emits Expressions
- `blocks`: `BlockParsingMixin`, which groups lines into blocks

Example:
    >>> from obsidized.parsing import BlockParsingMixin, InlineScanner
    >>> class Parser(BlockParsingMixin):
    ...     pass

"""

from obsidized.parsing.blocks import BlockParsingMixin, LineSpan, split_lines
from obsidized.parsing.directives import BASE_DIRECTIVES, dispatch
from obsidized.parsing.inline import InlineScanner, line_starts

__all__ = [
    "BASE_DIRECTIVES",
    "BlockParsingMixin",
    "InlineScanner",
    "LineSpan",
    "dispatch",
    "line_starts",
    "split_lines",
]
