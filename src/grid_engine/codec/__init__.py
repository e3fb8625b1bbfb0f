"""Delimited-text codec for grid matrices."""

from .csv_text import MalformedInputError, decode, parse, serialize

__all__ = ["MalformedInputError", "decode", "parse", "serialize"]
