"""Base classes shared by the navigation modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from grid_engine.grid.sheet import Sheet

from .state import EditCursor


@dataclass(slots=True)
class KeyInput:
    """Normalized key event (``"ENTER"``, ``"TAB"``, ``"UP"``, ``"a"``...)."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Services every mode and action can reach."""

    sheet: Sheet
    bus: "ModeBus"
    cursor: EditCursor = field(default_factory=EditCursor)
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes and actions publish edit events."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover
        raise NotImplementedError
