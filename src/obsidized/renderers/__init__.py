"""Renderers for obsidized AST."""

from obsidized.renderers.html import HtmlRenderer
from obsidized.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer"]
