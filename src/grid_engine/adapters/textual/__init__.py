"""Textual adapter (``app`` needs the optional textual runtime)."""

from .controller import TextualGridAdapter, TextualUIHooks

__all__ = ["TextualGridAdapter", "TextualUIHooks"]
