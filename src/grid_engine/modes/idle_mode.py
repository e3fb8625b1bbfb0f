"""Idle mode: no cell is being edited."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, key_to_token, require_keymap_resolver


class IdleMode(Mode):
    """Only host-registered ``idle`` bindings do anything here.

    Cells are entered through ``ModeManager.activate``; keys arriving while
    idle are reported back as unconsumed so the host can use them.
    """

    name = "idle"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, (key_to_token(key),))
        if result.status == "match" and result.match:
            return execute_match(self.context, result.match)
        return ModeResult(consumed=False, status="idle")
