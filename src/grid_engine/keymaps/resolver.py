"""Trie-based resolution of key tokens to bound actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from grid_engine.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    bindings: list[str] = field(default_factory=list)
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    def next_tokens(self) -> tuple[str, ...]:
        return tuple(sorted(self.children))


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Builds one trie per mode (rebuilt when the registry revision moves)."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, TrieNode]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        normalized = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "tokens": normalized},
        ) as handle:
            node = self._trie(mode)
            consumed = 0
            for token in normalized:
                child = node.children.get(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return ResolutionResult(status="miss", consumed=consumed)
                node = child
                consumed += 1

            match = self._select_match(node)
            if match is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", match.binding.id)
                return ResolutionResult(status="match", match=match, consumed=consumed)

            next_expected = node.next_tokens()
            if next_expected and consumed:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending", consumed=consumed, next_expected=next_expected
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=consumed)

    def _trie(self, mode: str) -> TrieNode:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        root = TrieNode()
        for binding in self._registry.iter_bindings(mode):
            node = root
            for token in binding.sequence.tokens:
                node = node.child(token)
            node.bindings.append(binding.id)
        self._cache[mode] = (revision, root)
        return root

    def _select_match(self, node: TrieNode) -> Optional[ResolutionMatch]:
        if not node.bindings:
            return None
        bindings = [self._registry.get_binding(b) for b in node.bindings]
        best = min(bindings, key=lambda b: (-b.priority, b.id))
        return ResolutionMatch(
            binding=best, action=self._registry.get_action(best.action_id)
        )


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
