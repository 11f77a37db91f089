"""Character sets for O(1) classification.

The inline scanner only consults the dispatcher at offsets whose character
can begin some directive; every other character is plain text.

Usage:
    from obsidized.parsing.charsets import DIRECTIVE_START

    if char in DIRECTIVE_START:  # O(1) lookup
        ...
"""

# First characters of the base inline directives:
# $math$  [[link]]  ![img]  `code`  **bold** __bold__  *it* _it_  ~~del~~  ==mark==
DIRECTIVE_START: frozenset[str] = frozenset("$[!`*_~=")

# First characters of bare URLs (autolinks extension)
AUTOLINK_START: frozenset[str] = frozenset("h")

# Characters stripped from the end of a bare URL
URL_TRAILING_PUNCTUATION: str = ".,;:!?'\""
