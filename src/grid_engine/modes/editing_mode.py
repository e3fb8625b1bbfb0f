"""Editing mode: keystrokes buffer into the active cell until committed."""

from __future__ import annotations

from typing import List

from grid_engine.keymaps import ResolutionResult
from grid_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, key_to_token, require_keymap_resolver

_TEXT_BLOCKING_MODIFIERS = {"ctrl", "alt", "meta"}


class EditingMode(Mode):
    name = "editing"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("grid_engine.modes.editing")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[KeyInput] = []

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        if not self.context.cursor.active:
            self._pending.clear()
            return ModeResult(consumed=False, switch_to="idle", status="no_cursor")

        self._pending.append(key)
        result = self._resolve(self._pending)

        if result.status == "match" and result.match:
            self._pending.clear()
            return execute_match(self.context, result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True, status="pending", message="awaiting_sequence"
            )

        prefix = self._pending[:-1]
        self._pending.clear()
        if not prefix:
            return self._handle_text_input(key)

        # The swallowed prefix was plain input after all.
        for held in prefix:
            self._handle_text_input(held)
        return self.handle_key(key)

    def _resolve(self, keys: List[KeyInput]) -> ResolutionResult:
        return self._resolver.resolve(
            self.name, tuple(key_to_token(k) for k in keys)
        )

    def _handle_text_input(self, key: KeyInput) -> ModeResult:
        cursor = self.context.cursor

        if key.key == "BACKSPACE":
            cursor.backspace()
            self._emit_text()
            return ModeResult(consumed=True, status="editing")

        blocked = {m.lower() for m in key.modifiers} & _TEXT_BLOCKING_MODIFIERS
        if key.text and not blocked:
            cursor.type_text(key.text)
            self._emit_text()
            return ModeResult(consumed=True, status="editing")

        self.logger.debug(f"editing: unhandled key {key_to_token(key)}")
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _emit_text(self) -> None:
        cursor = self.context.cursor
        self.context.bus.emit(
            "edit.text", {"address": cursor.address, "text": cursor.pending}
        )
