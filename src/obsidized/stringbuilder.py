"""StringBuilder for O(n) accumulation of rendered HTML.

Fragments are appended to a list and joined once, instead of growing a
string by repeated concatenation.

Thread Safety:
Instances are local to one render of one block. No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
        >>> sb = StringBuilder()
        >>> sb.append('<span class="bold">').append_line()
        >>> sb.append("text").append_line("</span>")
        >>> sb.build()
        '<span class="bold">\\ntext</span>\\n'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a fragment (empty strings are skipped)."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a fragment followed by a newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)

    def encode(self, encoding: str = "utf-8") -> bytes:
        """Join and encode, for writing to a binary sink."""
        return self.build().encode(encoding)
