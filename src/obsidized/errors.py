"""Exception classes for obsidized.

Parsing and conversion each have exactly one failure kind. Recognizers that
simply do not apply at a position return ``None``; they never raise.
"""

from __future__ import annotations


class ObsidizedError(Exception):
    """Base exception for all obsidized errors."""

    pass


class ParseError(ObsidizedError):
    """Error during Markdown parsing.

    Raised when a fence is opened but never closed, or when a line cannot be
    consumed completely.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
        fragment: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
            fragment: The unmatched input, from the error position to the
                end of the scanned region
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        self.fragment = fragment

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ConversionError(ObsidizedError):
    """Error while writing rendered HTML to the output sink.

    The underlying I/O exception is chained as ``__cause__``.
    """

    pass
