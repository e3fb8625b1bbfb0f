"""Commit-then-move verbs bound to the editing keys.

Every verb writes the pending text through ``Sheet.set_cell`` *before* the
cursor moves, so a keystroke can never land on the wrong address.
"""

from __future__ import annotations

from typing import Optional

from grid_engine.grid.model import Address
from grid_engine.grid.sheet import SheetDelta
from grid_engine.keymaps.resolver import ResolutionMatch
from grid_engine.modes.base_mode import ModeContext, ModeResult


def begin_edit(context: ModeContext, row: int, col: int) -> None:
    text = context.sheet.display(row, col)
    context.cursor.begin(row, col, text)
    context.bus.emit("edit.begin", {"address": (row, col), "text": text})


def commit_edit(context: ModeContext) -> Optional[SheetDelta]:
    cursor = context.cursor
    if cursor.address is None:
        return None
    (row, col), text = cursor.address, cursor.pending
    delta = context.sheet.set_cell(row, col, text)
    cursor.clear()
    context.bus.emit(
        "edit.commit",
        {"address": (row, col), "value": text, "version": delta.version},
    )
    return delta


def discard_edit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    cleared = context.cursor.clear()
    if cleared is not None:
        context.bus.emit("edit.discard", {"address": cleared[0]})
    return ModeResult(
        consumed=True, switch_to="idle", status="discarded", message="edit_discard"
    )


def commit_and_move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    address = context.cursor.address
    if address is None:
        return _lost_cursor()
    row, col = address
    rows, _ = context.sheet.shape()
    target = (row + 1, col) if row < rows - 1 else None
    return _commit_then(context, target, "edit_enter")


def commit_and_advance(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Tab: next column, wrapping to the first column of the next row."""

    del match
    address = context.cursor.address
    if address is None:
        return _lost_cursor()
    row, col = address
    rows, cols = context.sheet.shape()
    target: Optional[Address] = None
    if col < cols - 1:
        target = (row, col + 1)
    elif row < rows - 1:
        target = (row + 1, 0)
    return _commit_then(context, target, "edit_tab")


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _step(context, -1, 0, "move_up")


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _step(context, 1, 0, "move_down")


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _step(context, 0, -1, "move_left")


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _step(context, 0, 1, "move_right")


def _step(context: ModeContext, d_row: int, d_col: int, message: str) -> ModeResult:
    address = context.cursor.address
    if address is None:
        return _lost_cursor()
    target = (address[0] + d_row, address[1] + d_col)
    if not context.sheet.model.contains(*target):
        # At the grid edge: the edit stays open and nothing is committed.
        return ModeResult(consumed=True, status="edge", message=message)
    return _commit_then(context, target, message)


def _commit_then(
    context: ModeContext, target: Optional[Address], message: str
) -> ModeResult:
    commit_edit(context)
    if target is None:
        return ModeResult(
            consumed=True, switch_to="idle", status="committed", message=message
        )
    begin_edit(context, *target)
    return ModeResult(
        consumed=True, switch_to="editing", status="editing", message=message
    )


def _lost_cursor() -> ModeResult:
    return ModeResult(consumed=False, switch_to="idle", status="no_cursor")


__all__ = [
    "begin_edit",
    "commit_and_advance",
    "commit_and_move_down",
    "commit_edit",
    "discard_edit",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
]
