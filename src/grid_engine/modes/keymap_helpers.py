"""Helpers for keymap-driven modes."""

from __future__ import annotations

from grid_engine.keymaps import KeymapResolver, ResolutionMatch
from grid_engine.keymaps.models import make_token
from grid_engine.runtime import telemetry

from .base_mode import KeyInput, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return make_token(key.key, key.modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)
    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


__all__ = ["execute_match", "key_to_token", "require_keymap_resolver"]
