"""Built-in bindings for the editing keys."""

from __future__ import annotations

from typing import Sequence

from grid_engine.actions import navigation as navigation_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

# (binding id, mode, key, action id)
DEFAULT_BINDINGS: Sequence[tuple[str, str, str, str]] = (
    ("editing.enter", "editing", "ENTER", "navigation.commit_down"),
    ("editing.tab", "editing", "TAB", "navigation.commit_next"),
    ("editing.up", "editing", "UP", "navigation.move_up"),
    ("editing.down", "editing", "DOWN", "navigation.move_down"),
    ("editing.left", "editing", "LEFT", "navigation.move_left"),
    ("editing.right", "editing", "RIGHT", "navigation.move_right"),
    ("editing.escape", "editing", "ESC", "navigation.discard"),
)


def default_actions() -> tuple[ActionRef, ...]:
    # Built lazily: the action module may still be initialising at import time.
    return (
        ActionRef(
            id="navigation.commit_down",
            handler=navigation_actions.commit_and_move_down,
            description="Commit and edit the cell below",
        ),
        ActionRef(
            id="navigation.commit_next",
            handler=navigation_actions.commit_and_advance,
            description="Commit and edit the next cell",
        ),
        ActionRef(
            id="navigation.move_up",
            handler=navigation_actions.move_up,
            description="Commit and move up",
        ),
        ActionRef(
            id="navigation.move_down",
            handler=navigation_actions.move_down,
            description="Commit and move down",
        ),
        ActionRef(
            id="navigation.move_left",
            handler=navigation_actions.move_left,
            description="Commit and move left",
        ),
        ActionRef(
            id="navigation.move_right",
            handler=navigation_actions.move_right,
            description="Commit and move right",
        ),
        ActionRef(
            id="navigation.discard",
            handler=navigation_actions.discard_edit,
            description="Discard the pending edit",
        ),
    )


def load_default_keymaps(registry: KeymapRegistry, *, replace: bool = False) -> None:
    for action in default_actions():
        registry.register_action(action, replace=replace)
    for binding_id, mode, key, action_id in DEFAULT_BINDINGS:
        registry.register_binding(
            Binding(
                id=binding_id,
                mode=mode,
                sequence=KeySequence.from_strings(key),
                action_id=action_id,
            ),
            replace=replace,
        )


__all__ = ["DEFAULT_BINDINGS", "default_actions", "load_default_keymaps"]
