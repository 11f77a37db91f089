"""Tests for fenced and styled span primitives."""

import pytest

from obsidized.config import ParseConfig
from obsidized.errors import ParseError
from obsidized.nodes import Italic, Text
from obsidized.parsing.inline import InlineScanner
from obsidized.parsing.primitives import Fence, fenced, fenced_char, styled


def _scanner(source: str, **config: bool) -> InlineScanner:
    return InlineScanner(source, ParseConfig(**config))


class TestFenced:
    """Literal-delimiter fences."""

    def test_returns_interior_bounds_and_resume(self) -> None:
        scanner = _scanner("[[Note]] rest")
        fence = fenced(scanner, 0, 13, "[[", "]]")
        assert fence == Fence(2, 6, 8)
        assert fence.inner(scanner.source) == "Note"

    def test_no_match_when_start_absent(self) -> None:
        scanner = _scanner("plain [[Note]]")
        assert fenced(scanner, 0, 14, "[[", "]]") is None

    def test_first_end_wins(self) -> None:
        scanner = _scanner("```a``` ```b```")
        fence = fenced(scanner, 0, 15, "```", "```")
        assert fence is not None
        assert fence.inner(scanner.source) == "a"
        assert fence.resume == 7

    def test_end_must_be_before_limit(self) -> None:
        scanner = _scanner("[[Note]]")
        with pytest.raises(ParseError):
            fenced(scanner, 0, 6, "[[", "]]")

    def test_unterminated_raises(self) -> None:
        scanner = _scanner("[[Note")
        with pytest.raises(ParseError, match="unterminated"):
            fenced(scanner, 0, 6, "[[", "]]")

    def test_unterminated_is_no_match_when_lenient(self) -> None:
        scanner = _scanner("[[Note", strict_fences=False)
        assert fenced(scanner, 0, 6, "[[", "]]") is None

    def test_scan_starts_at_pos(self) -> None:
        scanner = _scanner("ab==c==")
        fence = fenced(scanner, 2, 7, "==", "==")
        assert fence == Fence(4, 5, 7)


class TestFencedChar:
    """Single-character fences."""

    def test_backtick(self) -> None:
        scanner = _scanner("`code` tail")
        fence = fenced_char(scanner, 0, 11, "`", "`")
        assert fence == Fence(1, 5, 6)

    def test_empty_interior(self) -> None:
        scanner = _scanner("$$")
        fence = fenced_char(scanner, 0, 2, "$", "$")
        assert fence == Fence(1, 1, 2)

    def test_different_start_and_end(self) -> None:
        scanner = _scanner("(http://a.b)")
        fence = fenced_char(scanner, 0, 12, "(", ")")
        assert fence is not None
        assert fence.inner(scanner.source) == "http://a.b"

    def test_pos_at_limit_is_no_match(self) -> None:
        scanner = _scanner("`")
        assert fenced_char(scanner, 1, 1, "`", "`") is None

    def test_unterminated_raises_with_location(self) -> None:
        scanner = _scanner("`unterminated")
        with pytest.raises(ParseError) as exc_info:
            fenced_char(scanner, 0, 13, "`", "`")
        assert exc_info.value.lineno == 1
        assert exc_info.value.col_offset == 1
        assert exc_info.value.fragment == "`unterminated"


class TestStyled:
    """Fences whose interior is parsed again as inline content."""

    def test_interior_is_parsed(self) -> None:
        scanner = _scanner("**bold *and italic* text**")
        result = styled(scanner, 0, 26, "**")
        assert result is not None
        children, resume = result
        assert resume == 26
        assert children == (
            Text("bold "),
            Italic((Text("and italic"),)),
            Text("text"),
        )

    def test_single_char_boundary(self) -> None:
        scanner = _scanner("_x_")
        assert styled(scanner, 0, 3, "_") == ((Text("x"),), 3)

    def test_empty_interior_has_no_children(self) -> None:
        scanner = _scanner("~~~~")
        assert styled(scanner, 0, 4, "~~") == ((), 4)

    def test_no_match(self) -> None:
        scanner = _scanner("text")
        assert styled(scanner, 0, 4, "==") is None
