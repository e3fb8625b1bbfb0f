"""Matrix storage for the grid engine."""

from __future__ import annotations

from typing import Optional, Tuple

from grid_engine.codec.csv_text import Cell, Matrix

Address = Tuple[int, int]  # (row, column)
Shape = Tuple[int, int]  # (row_count, column_count)


class OutOfRangeAccess(IndexError):
    """Raised when a read addresses a cell outside the current matrix."""

    def __init__(self, message: str, *, row: int, col: int) -> None:
        super().__init__(message)
        self.row = row
        self.col = col


class GridModel:
    """Holds the current matrix and swaps it wholesale on every change.

    ``None`` means nothing has been loaded yet; ``[]`` is a loaded but empty
    grid. Callers must treat the matrix returned by ``snapshot`` as
    read-only: writes go through ``grid_engine.grid.operations`` and come
    back in through ``replace``.
    """

    __slots__ = ("_matrix", "version")

    def __init__(self, matrix: Optional[Matrix] = None) -> None:
        self._matrix = matrix
        self.version = 0

    @property
    def loaded(self) -> bool:
        return self._matrix is not None

    def snapshot(self) -> Matrix:
        return self._matrix if self._matrix is not None else []

    def replace(self, matrix: Matrix) -> None:
        self._matrix = matrix
        self.version += 1

    def shape(self) -> Shape:
        matrix = self._matrix
        if not matrix:
            return (0, 0)
        return (len(matrix), len(matrix[0]))

    def get(self, row: int, col: int) -> Cell:
        matrix = self._matrix
        if matrix is None:
            raise OutOfRangeAccess("No matrix loaded", row=row, col=col)
        if row < 0 or row >= len(matrix):
            raise OutOfRangeAccess(
                f"Row {row} out of range (0..{len(matrix) - 1})", row=row, col=col
            )
        cells = matrix[row]
        if col < 0 or col >= len(cells):
            raise OutOfRangeAccess(
                f"Column {col} out of range (0..{len(cells) - 1})", row=row, col=col
            )
        return cells[col]

    def contains(self, row: int, col: int) -> bool:
        matrix = self._matrix
        if not matrix or row < 0 or row >= len(matrix):
            return False
        return 0 <= col < len(matrix[row])


__all__ = ["Address", "GridModel", "OutOfRangeAccess", "Shape"]
