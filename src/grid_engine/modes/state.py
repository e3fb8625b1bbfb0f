"""Edit cursor state and the host-facing snapshot of the grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from grid_engine.codec.csv_text import Matrix
from grid_engine.grid.model import Address, Shape


@dataclass(slots=True)
class EditCursor:
    """The single active cell plus its uncommitted text.

    ``selected`` mirrors a text field that highlights its contents on focus:
    the first typed character replaces the buffer instead of appending.
    """

    address: Optional[Address] = None
    pending: str = ""
    selected: bool = False

    @property
    def active(self) -> bool:
        return self.address is not None

    def begin(self, row: int, col: int, text: str) -> None:
        self.address = (row, col)
        self.pending = text
        self.selected = True

    def update(self, text: str) -> None:
        self.pending = text
        self.selected = False

    def type_text(self, text: str) -> None:
        self.update(text if self.selected else self.pending + text)

    def backspace(self) -> None:
        self.update("" if self.selected else self.pending[:-1])

    def clear(self) -> Optional[Tuple[Address, str]]:
        if self.address is None:
            return None
        cleared = (self.address, self.pending)
        self.address = None
        self.pending = ""
        self.selected = False
        return cleared


@dataclass(slots=True)
class GridMirror:
    """Snapshot handed to hosts after every interaction."""

    matrix: Matrix
    shape: Shape
    mode: str
    cursor: Optional[Address]
    pending: str
    version: int
