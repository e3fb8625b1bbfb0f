"""Registry storing navigation actions and the bindings that reach them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from grid_engine.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding reuses a key signature already taken in its mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and per-mode binding indexes."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        # mode -> key signature -> binding ids
        self._mode_index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Index ``binding``; with ``replace=True`` it evicts whatever it clashes with."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding)
            if replace:
                evicted = [*conflicts]
                existing = self._bindings.get(binding.id)
                if existing is not None and existing not in evicted:
                    evicted.append(existing)
                for stale in evicted:
                    self._unindex(stale)
                    self._bindings.pop(stale.id, None)
            elif conflicts:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(binding, conflicts)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._index(binding)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        self._unindex(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for bucket in self._mode_index.get(mode, {}).values():
            for binding_id in sorted(bucket):
                yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._mode_index)),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        bucket = self._mode_index.get(binding.mode, {}).get(binding.key_signature, ())
        return [
            self._bindings[binding_id]
            for binding_id in sorted(bucket)
            if binding_id != binding.id
        ]

    def _index(self, binding: Binding) -> None:
        by_signature = self._mode_index.setdefault(binding.mode, {})
        by_signature.setdefault(binding.key_signature, set()).add(binding.id)

    def _unindex(self, binding: Binding) -> None:
        by_signature = self._mode_index.get(binding.mode)
        if not by_signature:
            return
        bucket = by_signature.get(binding.key_signature)
        if bucket is None:
            return
        bucket.discard(binding.id)
        if not bucket:
            by_signature.pop(binding.key_signature, None)
        if not by_signature:
            self._mode_index.pop(binding.mode, None)


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
