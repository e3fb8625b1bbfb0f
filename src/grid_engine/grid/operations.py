"""Structural and single-cell edits over a matrix.

Every function returns a fresh matrix and leaves its argument untouched.
When a precondition fails (header row involved, index out of range, nothing
to remove) the *same* matrix object comes back, so callers can detect a
no-op with ``result is matrix``.
"""

from __future__ import annotations

import re
from typing import List

from grid_engine.codec.csv_text import Cell, Matrix

HEADER_ROW = 0
ROW_LABEL = "Row {index}"
_ROW_LABEL_PATTERN = re.compile(r"Row \d+")


def _copy(matrix: Matrix) -> Matrix:
    return [list(row) for row in matrix]


def _width(matrix: Matrix) -> int:
    return len(matrix[HEADER_ROW]) if matrix else 0


def _blank_row(width: int, label: str | None = None) -> List[Cell]:
    row: List[Cell] = [""] * width
    if label is not None and width:
        row[0] = label
    return row


def row_label(index: int) -> str:
    return ROW_LABEL.format(index=index)


def is_row_label(value: Cell) -> bool:
    return isinstance(value, str) and _ROW_LABEL_PATTERN.fullmatch(value) is not None


def set_cell(matrix: Matrix, row: int, col: int, value: Cell) -> Matrix:
    if not 0 <= row < len(matrix) or not 0 <= col < _width(matrix):
        return matrix
    if col >= len(matrix[row]):
        return matrix
    updated = _copy(matrix)
    updated[row][col] = value
    return updated


def insert_row(matrix: Matrix, after_index: int) -> Matrix:
    """Insert a blank row below ``after_index``.

    Rows inserted below a data row get a ``Row <n>`` label in their first
    cell, ``n`` being the row count before the insert. A row added directly
    below the header stays blank.
    """

    if not 0 <= after_index < len(matrix):
        return matrix
    label = row_label(len(matrix)) if after_index > HEADER_ROW else None
    updated = _copy(matrix)
    updated.insert(after_index + 1, _blank_row(_width(matrix), label))
    return updated


def delete_row(matrix: Matrix, index: int) -> Matrix:
    if index <= HEADER_ROW or index >= len(matrix):
        return matrix
    updated = _copy(matrix)
    del updated[index]
    return updated


def move_row_up(matrix: Matrix, index: int) -> Matrix:
    # Row 1 may not trade places with the header.
    if index <= HEADER_ROW + 1 or index >= len(matrix):
        return matrix
    updated = _copy(matrix)
    updated[index - 1], updated[index] = updated[index], updated[index - 1]
    return updated


def move_row_down(matrix: Matrix, index: int) -> Matrix:
    if index <= HEADER_ROW or index >= len(matrix) - 1:
        return matrix
    updated = _copy(matrix)
    updated[index + 1], updated[index] = updated[index], updated[index + 1]
    return updated


def add_rows(matrix: Matrix, count: int) -> Matrix:
    if count <= 0 or not matrix:
        return matrix
    width = _width(matrix)
    start = len(matrix)
    updated = _copy(matrix)
    updated.extend(_blank_row(width, row_label(start + i)) for i in range(count))
    return updated


def delete_last_rows(matrix: Matrix, count: int) -> Matrix:
    if count <= 0 or len(matrix) <= 1:
        return matrix
    removed = min(count, len(matrix) - 1)
    return _copy(matrix[: len(matrix) - removed])


def duplicate_last_row(matrix: Matrix) -> Matrix:
    if len(matrix) <= 1:
        return matrix
    updated = _copy(matrix)
    clone = list(matrix[-1])
    updated.append(clone)
    if clone and is_row_label(clone[0]):
        clone[0] = row_label(len(updated) - 1)
    return updated


def rectangularize(matrix: Matrix) -> Matrix:
    """Pad short rows with empty cells up to the widest row."""

    if not matrix:
        return matrix
    width = max(len(row) for row in matrix)
    if all(len(row) == width for row in matrix):
        return matrix
    return [list(row) + [""] * (width - len(row)) for row in matrix]


__all__ = [
    "HEADER_ROW",
    "add_rows",
    "delete_last_rows",
    "delete_row",
    "duplicate_last_row",
    "insert_row",
    "is_row_label",
    "move_row_down",
    "move_row_up",
    "rectangularize",
    "row_label",
    "set_cell",
]
