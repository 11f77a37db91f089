"""Minimal logging utilities for obsidized.

Provides a get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure logging.

Example:
    >>> from obsidized.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``obsidized``.

    Example:
        >>> get_logger("mymodule").name
        'obsidized.mymodule'
    """
    if not (name == "obsidized" or name.startswith("obsidized.")):
        name = f"obsidized.{name}"
    return logging.getLogger(name)
