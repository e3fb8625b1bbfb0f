"""Textual-facing adapter wiring the navigation manager into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from grid_engine.grid.sheet import ROW_ACTIONS, Sheet, SheetDelta
from grid_engine.modes import GridMirror, KeyInput, ModeResult
from grid_engine.modes.mode_manager import ModeManager

EDIT_EVENTS = ("edit.begin", "edit.text", "edit.commit", "edit.discard")


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to refresh the host widgets."""

    update_grid: Callable[[GridMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualGridAdapter:
    """Translates host events into mode-manager calls and pushes snapshots back.

    The sheet's change listener and the bus edit events both trigger a
    refresh, so hooks see the matrix as soon as a commit lands.
    """

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._unsubscribe = manager.context.sheet.subscribe(self._on_sheet_change)
        self._subscribe_events()
        self._refresh_grid()

    @property
    def sheet(self) -> Sheet:
        return self.manager.context.sheet

    def close(self) -> None:
        self._unsubscribe()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        normalized = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized)
        )
        self._after_result(result)
        return result

    def activate_cell(self, row: int, col: int) -> ModeResult:
        self._log_state("activate ->", row=row, col=col)
        result = self.manager.activate(row, col)
        self._after_result(result)
        return result

    def blur(self) -> ModeResult:
        result = self.manager.blur()
        self._after_result(result)
        return result

    def update_text(self, text: str) -> ModeResult:
        result = self.manager.update_text(text)
        self._refresh_grid()
        return result

    def row_action(self, name: str, *args: int) -> SheetDelta:
        """Run a structural row operation after committing any open edit."""

        if name not in ROW_ACTIONS:
            raise ValueError(f"Unknown row action '{name}'")
        self.manager.blur()
        delta: SheetDelta = getattr(self.sheet, name)(*args)
        self.hooks.update_status(name if delta.changed else f"{name}:noop")
        self._log_state("row_action <-", action=name, args=args, changed=delta.changed)
        self._refresh_grid()
        return delta

    def export_text(self, *, strict: bool = False) -> str:
        self.manager.blur()
        return self.sheet.export_text(strict=strict)

    def _after_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_grid()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in EDIT_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _on_sheet_change(self, delta: SheetDelta) -> None:
        self._log_state("change ->", label=delta.label, version=delta.version)
        self._refresh_grid()

    def _refresh_grid(self) -> None:
        self.hooks.update_grid(self.manager.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        mirror = self.manager.mirror()
        return {
            "mode": mirror.mode,
            "cursor": mirror.cursor,
            "shape": mirror.shape,
            "sheet": self.sheet.name,
            "version": mirror.version,
        }


__all__ = ["EDIT_EVENTS", "TextualGridAdapter", "TextualUIHooks"]
