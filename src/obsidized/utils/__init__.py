"""Utility modules for obsidized.

- logger: get_logger for namespaced logging
"""

from obsidized.utils.logger import get_logger

__all__ = [
    "get_logger",
]
