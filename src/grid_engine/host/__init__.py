"""Reference host-shell helpers (file loading, saving, placeholders)."""

from .files import (
    UnsupportedFormatError,
    check_format,
    load_or_placeholder,
    read_table,
    write_table,
)

__all__ = [
    "UnsupportedFormatError",
    "check_format",
    "load_or_placeholder",
    "read_table",
    "write_table",
]
