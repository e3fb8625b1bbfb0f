import pytest

from grid_engine.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    load_default_keymaps,
)
from grid_engine.keymaps.defaults import DEFAULT_BINDINGS


def make_action(action_id: str = "grid.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "editing",
    keys: tuple[str, ...] = ("ENTER",),
    action_id: str = "grid.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="editing.enter")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="editing")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="editing.enter"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="editing.enter.copy"))

    assert [b.id for b in excinfo.value.conflicts] == ["editing.enter"]


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="editing.enter"))

    registry.register_binding(make_binding(binding_id="idle.enter", mode="idle"))

    assert registry.stats().modes == ("editing", "idle")


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="editing.enter"))


def test_duplicate_binding_id_rejected_without_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="editing.key"))

    with pytest.raises(ValueError):
        registry.register_binding(make_binding(binding_id="editing.key", keys=("TAB",)))


def test_replace_evicts_conflicting_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_action(make_action("grid.other"))
    registry.register_binding(make_binding(binding_id="editing.enter"))

    registry.register_binding(
        make_binding(binding_id="host.enter", action_id="grid.other"), replace=True
    )

    assert [b.id for b in registry.iter_bindings("editing")] == ["host.enter"]


def test_duplicate_action_rejected_unless_replaced() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())

    replacement = make_action()
    registry.register_action(replacement, replace=True)
    assert registry.get_action("grid.test") is replacement


def test_unregister_binding_bumps_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="editing.enter"))
    revision = registry.revision()

    removed = registry.unregister_binding("editing.enter")

    assert removed is not None and removed.id == "editing.enter"
    assert registry.revision() == revision + 1
    assert registry.unregister_binding("editing.enter") is None
    assert registry.stats().modes == ()


def test_load_default_keymaps_registers_editing_keys() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert stats.modes == ("editing",)
    signatures = {b.key_signature for b in registry.iter_bindings("editing")}
    assert signatures == {"ENTER", "TAB", "UP", "DOWN", "LEFT", "RIGHT", "ESC"}


def test_load_default_keymaps_twice_requires_replace() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    with pytest.raises(ValueError):
        load_default_keymaps(registry)

    load_default_keymaps(registry, replace=True)
    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)


def test_key_signature_normalizes_modifiers() -> None:
    stroke = KeyStroke("UP", ("Shift", "ctrl", "ctrl"))
    binding = Binding(
        id="idle.jump",
        mode="idle",
        sequence=KeySequence(strokes=(stroke,)),
        action_id="grid.test",
    )

    assert stroke.modifiers == ("ctrl", "shift")
    assert binding.key_signature == "ctrl+shift+UP"


def test_action_ref_rejects_non_callable() -> None:
    with pytest.raises(TypeError):
        ActionRef(id="grid.bad", handler="nope")  # type: ignore[arg-type]
