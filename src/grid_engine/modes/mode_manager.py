"""Mode manager driving the idle/editing state machine."""

from __future__ import annotations

from typing import Dict, Optional, Type

from grid_engine.actions.navigation import begin_edit, commit_edit
from grid_engine.grid.sheet import Sheet
from grid_engine.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from grid_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .editing_mode import EditingMode
from .idle_mode import IdleMode
from .state import GridMirror


class ModeManager:
    """Owns the active mode, the edit cursor lifecycle, and key dispatch."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="grid_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="grid_engine.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @classmethod
    def for_sheet(
        cls, sheet: Sheet, *, keymap_registry: KeymapRegistry | None = None
    ) -> "ModeManager":
        """Build a manager over ``sheet`` with the idle and editing modes."""

        context = ModeContext(sheet=sheet, bus=ModeBus())
        manager = cls(context, keymap_registry=keymap_registry)
        manager.register_mode(IdleMode)
        manager.register_mode(EditingMode)
        return manager

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def is_editing(self) -> bool:
        return self._active == EditingMode.name and self.context.cursor.active

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(result)

    def activate(self, row: int, col: int) -> ModeResult:
        """Open ``(row, col)`` for editing, committing any edit in progress."""

        with telemetry.span(
            "navigation::activate",
            component="navigation",
            metadata={"row": row, "col": col},
        ) as handle:
            commit_edit(self.context)
            if not self.context.sheet.model.contains(row, col):
                handle.add_metadata("status", "out_of_range")
                return self._after_mode_result(
                    ModeResult(consumed=False, switch_to="idle", status="out_of_range")
                )
            begin_edit(self.context, row, col)
            return self._after_mode_result(
                ModeResult(
                    consumed=True,
                    switch_to=EditingMode.name,
                    status="editing",
                    message="edit_begin",
                )
            )

    def blur(self) -> ModeResult:
        """Focus left the grid: commit whatever is pending and go idle."""

        delta = commit_edit(self.context)
        if delta is None:
            return self._after_mode_result(
                ModeResult(consumed=False, switch_to="idle", status="idle")
            )
        return self._after_mode_result(
            ModeResult(
                consumed=True, switch_to="idle", status="committed", message="blur"
            )
        )

    def update_text(self, text: str) -> ModeResult:
        """Replace the pending buffer wholesale (e.g. from a host text widget)."""

        cursor = self.context.cursor
        if not cursor.active:
            return ModeResult(consumed=False, status="idle")
        cursor.update(text)
        self.context.bus.emit("edit.text", {"address": cursor.address, "text": text})
        return ModeResult(consumed=True, status="editing")

    def mirror(self) -> GridMirror:
        sheet = self.context.sheet
        cursor = self.context.cursor
        return GridMirror(
            matrix=sheet.matrix,
            shape=sheet.shape(),
            mode=self._active or "?",
            cursor=cursor.address,
            pending=cursor.pending,
            version=sheet.model.version,
        )

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["ModeManager"]
