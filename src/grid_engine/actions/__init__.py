"""Verbs that key bindings and hosts invoke on the edit cursor."""

from .navigation import (
    begin_edit,
    commit_and_advance,
    commit_and_move_down,
    commit_edit,
    discard_edit,
    move_down,
    move_left,
    move_right,
    move_up,
)

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
