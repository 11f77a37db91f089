"""ContextVar-based parse configuration for obsidized.

The active ParseConfig is stored in a ContextVar (PEP 567), so each thread
or async task sees its own value and parsers never need it passed down.

Usage:
    # Through the Markdown class
    md = Markdown(plugins=["headings", "block_quotes"])
    html = md("# Hello")  # Sets config internally via ContextVar

    # Directly
    from obsidized.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(headings_enabled=True)):
        blocks = parse("# Hello")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

# Plugin name -> ParseConfig flag it switches on
PLUGIN_FLAGS: dict[str, str] = {
    "headings": "headings_enabled",
    "block_quotes": "block_quotes_enabled",
    "block_math": "block_math_enabled",
    "code_blocks": "code_blocks_enabled",
    "autolinks": "autolinks_enabled",
}


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    The base grammar (inline directives, blank-line blocks, ``---``) is
    always on. Everything else is an opt-in extension.

    Attributes:
        strict_fences: Raise ParseError for a fence that is opened but never
            closed. When False the opening delimiter is kept as plain text.
        headings_enabled: Parse ``# Title`` lines as Heading
        block_quotes_enabled: Parse ``> text`` lines as BlockQuote and
            ``> [!type] text`` as Callout
        block_math_enabled: Parse ``$$ ... $$`` at line start as BlockMath
        code_blocks_enabled: Let a ``` fence run across lines
        autolinks_enabled: Parse bare http(s) URLs as RawHyperLink

    """

    strict_fences: bool = True
    headings_enabled: bool = False
    block_quotes_enabled: bool = False
    block_math_enabled: bool = False
    code_blocks_enabled: bool = False
    autolinks_enabled: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Unknown keys are ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "headings_enabled": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.headings_enabled
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_plugins(cls, plugins: list[str], *, strict_fences: bool = True) -> "ParseConfig":
        """Create ParseConfig with the named extensions switched on.

        ``"all"`` enables every extension.

        Raises:
            KeyError: If a plugin name is not recognized

        """
        for name in plugins:
            if name != "all" and name not in PLUGIN_FLAGS:
                available = ", ".join(sorted(PLUGIN_FLAGS))
                raise KeyError(f"Unknown plugin: {name!r}. Available: {available}")
        names = list(PLUGIN_FLAGS) if "all" in plugins else plugins
        flags = {PLUGIN_FLAGS[name]: True for name in names}
        return cls(strict_fences=strict_fences, **flags)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the parse configuration active in the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset the current context to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(autolinks_enabled=True)):
        ...     blocks = parse("see https://obsidian.md")
        >>> # Previous config restored here

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "PLUGIN_FLAGS",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
