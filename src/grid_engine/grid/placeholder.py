"""Generated stand-in data for hosts that start without a file."""

from __future__ import annotations

import random
from typing import List, Optional

from grid_engine.codec.csv_text import Cell, Matrix

from .operations import row_label


def column_label(index: int) -> str:
    """Spreadsheet-style column letters: 0 -> A, 25 -> Z, 26 -> AA."""

    if index < 0:
        raise ValueError("column index must be non-negative")
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def generate_placeholder(
    rows: int = 20, cols: int = 10, *, seed: Optional[int] = None
) -> Matrix:
    """Build a ``rows`` x ``cols`` matrix with a header and mixed sample values.

    Column 0 carries ``Row <n>`` labels; the other columns rotate between
    integers, two-decimal strings and ``Value <row>-<col>`` text.
    """

    if rows < 1 or cols < 1:
        raise ValueError("placeholder needs at least one row and one column")
    rng = random.Random(seed)
    matrix: Matrix = [[f"Column {column_label(j)}" for j in range(cols)]]
    for i in range(1, rows):
        row: List[Cell] = []
        for j in range(cols):
            if j == 0:
                row.append(row_label(i))
            elif j % 3 == 0:
                row.append(rng.randrange(1000))
            elif j % 3 == 1:
                row.append(f"{rng.random() * 100:.2f}")
            else:
                row.append(f"Value {i}-{j}")
        matrix.append(row)
    return matrix


__all__ = ["column_label", "generate_placeholder"]
