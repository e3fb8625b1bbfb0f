"""Comma-separated text <-> matrix conversion.

The default (lenient) dialect understands exactly one layer of double-quote
wrapping: a ``"`` toggles quoting and is dropped, so ``"a,b"`` reads back as
``a,b``. Doubled quotes are *not* unescaped and embedded quotes are not
escaped on write; cells containing ``"`` therefore do not round-trip. Pass
``strict=True`` for RFC 4180 behaviour backed by the standard ``csv`` module.
"""

from __future__ import annotations

import csv
import io
import re
from typing import Iterable, List, Sequence, Union

Cell = Union[str, int, float, None]
Matrix = List[List[Cell]]

_LINE_BREAK = re.compile(r"\r\n|\n")
_QUOTE = '"'
_DELIMITER = ","


class MalformedInputError(ValueError):
    """Raised when the payload handed to the codec is not decodable text."""

    def __init__(self, message: str, *, encoding: str | None = None) -> None:
        super().__init__(message)
        self.encoding = encoding


def decode(data: Union[str, bytes, bytearray], encoding: str = "utf-8") -> str:
    """Return ``data`` as text, decoding bytes and dropping a UTF-8 BOM."""

    if isinstance(data, str):
        return data
    if not isinstance(data, (bytes, bytearray)):
        raise MalformedInputError(
            f"Expected text or bytes, got {type(data).__name__}"
        )
    codec = encoding
    if encoding.lower().replace("_", "-") in {"utf-8", "utf8"}:
        codec = "utf-8-sig"
    try:
        return bytes(data).decode(codec)
    except UnicodeDecodeError as exc:
        raise MalformedInputError(
            f"Input is not valid {encoding} text: {exc.reason}", encoding=encoding
        ) from exc
    except LookupError as exc:
        raise MalformedInputError(
            f"Unknown text encoding '{encoding}'", encoding=encoding
        ) from exc


def parse(
    text: Union[str, bytes, bytearray], *, strict: bool = False
) -> Matrix:
    """Split ``text`` into rows of string cells.

    Blank (whitespace-only) lines are skipped. Rows keep whatever width the
    input gives them; padding is the caller's job.
    """

    content = decode(text)
    if strict:
        return _parse_strict(content)
    return [
        _split_line(line)
        for line in _LINE_BREAK.split(content)
        if line.strip()
    ]


def serialize(matrix: Iterable[Sequence[Cell]], *, strict: bool = False) -> str:
    """Render ``matrix`` back to comma-separated text joined with ``\\n``."""

    if strict:
        return _serialize_strict(matrix)
    return "\n".join(
        _DELIMITER.join(_quote(render_cell(cell)) for cell in row) for row in matrix
    )


def render_cell(cell: Cell) -> str:
    if cell is None:
        return ""
    return str(cell)


def _split_line(line: str) -> List[Cell]:
    fields: List[Cell] = []
    current: List[str] = []
    in_quotes = False
    for char in line:
        if char == _QUOTE:
            in_quotes = not in_quotes
        elif char == _DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return [_unwrap(value) for value in fields]


def _unwrap(value: str) -> str:
    if len(value) >= 2 and value.startswith(_QUOTE) and value.endswith(_QUOTE):
        return value[1:-1]
    return value


def _quote(value: str) -> str:
    if _DELIMITER in value:
        return f"{_QUOTE}{value}{_QUOTE}"
    return value


def _parse_strict(content: str) -> Matrix:
    reader = csv.reader(io.StringIO(content, newline=""))
    rows: Matrix = []
    for row in reader:
        if not row or (len(row) == 1 and not row[0].strip()):
            continue
        rows.append(list(row))
    return rows


def _serialize_strict(matrix: Iterable[Sequence[Cell]]) -> str:
    out = io.StringIO(newline="")
    writer = csv.writer(out, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    for row in matrix:
        writer.writerow([render_cell(cell) for cell in row])
    return out.getvalue().removesuffix("\n")


__all__ = [
    "Cell",
    "Matrix",
    "MalformedInputError",
    "decode",
    "parse",
    "render_cell",
    "serialize",
]
