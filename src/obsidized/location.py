"""Source location tracking for AST nodes and error messages.

Every node records the region of the source buffer it was parsed from, so
``source[loc.offset:loc.end_offset]`` gives back the exact span without the
node holding on to anything but its own payload.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node inside the source text.

    ``lineno`` and ``col_offset`` are 1-indexed; ``offset`` and
    ``end_offset`` are absolute 0-indexed positions into the source string.

    Examples:
        >>> loc = SourceLocation(lineno=3, col_offset=5, offset=40, end_offset=52)
        >>> str(loc)
        '3:5'

        >>> loc = SourceLocation(1, 1, source_file="notes/daily.md")
        >>> str(loc)
        'notes/daily.md:1:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def span(self, source: str) -> str:
        """Return the source text this location covers."""
        return source[self.offset : self.end_offset]

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder for synthetic nodes built outside the parser."""
        return cls(lineno=0, col_offset=0)
