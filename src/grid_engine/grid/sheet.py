"""Sheet façade: one grid model, the mutation verbs, and change listeners."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from grid_engine.codec.csv_text import Cell, Matrix, render_cell, serialize
from grid_engine.runtime import telemetry

from . import operations
from .model import GridModel, Shape

ChangeListener = Callable[["SheetDelta"], None]


@dataclass(slots=True)
class SheetDelta:
    version: int
    matrix: Matrix
    label: str
    changed: bool


class Sheet:
    def __init__(
        self,
        *,
        name: str = "default",
        model: Optional[GridModel] = None,
    ) -> None:
        self.name = name
        self.model = model or GridModel()
        self._listeners: List[ChangeListener] = []

    @classmethod
    def from_matrix(cls, matrix: Matrix, *, name: str = "default") -> "Sheet":
        sheet = cls(name=name)
        sheet.load(matrix)
        return sheet

    @property
    def matrix(self) -> Matrix:
        return self.model.snapshot()

    def shape(self) -> Shape:
        return self.model.shape()

    def get(self, row: int, col: int) -> Cell:
        return self.model.get(row, col)

    def display(self, row: int, col: int) -> str:
        return render_cell(self.model.get(row, col))

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener`` for committed changes; returns an unsubscriber."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self, matrix: Matrix) -> SheetDelta:
        with telemetry.span(
            "sheet::load",
            component="sheet",
            metadata={"sheet": self.name, "rows": len(matrix)},
        ):
            owned = [list(row) for row in matrix]
            self.model.replace(operations.rectangularize(owned))
        return self._commit("load")

    def export_text(self, *, strict: bool = False) -> str:
        return serialize(self.model.snapshot(), strict=strict)

    # ----- mutation verbs -----
    def set_cell(self, row: int, col: int, value: Cell) -> SheetDelta:
        return self._apply("set_cell", operations.set_cell, row, col, value)

    def insert_row(self, after_index: int) -> SheetDelta:
        return self._apply("insert_row", operations.insert_row, after_index)

    def delete_row(self, index: int) -> SheetDelta:
        return self._apply("delete_row", operations.delete_row, index)

    def move_row_up(self, index: int) -> SheetDelta:
        return self._apply("move_row_up", operations.move_row_up, index)

    def move_row_down(self, index: int) -> SheetDelta:
        return self._apply("move_row_down", operations.move_row_down, index)

    def add_rows(self, count: int) -> SheetDelta:
        return self._apply("add_rows", operations.add_rows, count)

    def delete_last_rows(self, count: int) -> SheetDelta:
        return self._apply("delete_last_rows", operations.delete_last_rows, count)

    def duplicate_last_row(self) -> SheetDelta:
        return self._apply("duplicate_last_row", operations.duplicate_last_row)

    def _apply(
        self, label: str, operation: Callable[..., Matrix], *args: object
    ) -> SheetDelta:
        with telemetry.span(
            f"sheet::{label}",
            component="sheet",
            metadata={"sheet": self.name, "args": args},
        ) as handle:
            before = self.model.snapshot()
            after = operation(before, *args)
            changed = after is not before
            handle.add_metadata("changed", changed)
            if changed:
                self.model.replace(after)

        if not changed:
            telemetry.record_event(
                "sheet.noop",
                level="debug",
                data={"sheet": self.name, "operation": label, "args": args},
            )
            return SheetDelta(
                version=self.model.version, matrix=before, label=label, changed=False
            )
        return self._commit(label)

    def _commit(self, label: str) -> SheetDelta:
        delta = SheetDelta(
            version=self.model.version,
            matrix=self.model.snapshot(),
            label=label,
            changed=True,
        )
        for listener in list(self._listeners):
            listener(delta)
        return delta


ROW_ACTIONS = frozenset(
    {
        "insert_row",
        "delete_row",
        "move_row_up",
        "move_row_down",
        "add_rows",
        "delete_last_rows",
        "duplicate_last_row",
    }
)


__all__ = ["ChangeListener", "ROW_ACTIONS", "Sheet", "SheetDelta"]
