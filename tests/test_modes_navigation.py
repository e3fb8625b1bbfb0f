from __future__ import annotations

from typing import List, Tuple

from grid_engine.grid import Sheet
from grid_engine.keymaps import ActionRef, Binding, KeySequence
from grid_engine.modes import EditingMode, IdleMode, KeyInput, ModeResult
from grid_engine.modes.mode_manager import ModeManager


def make_manager(rows: int = 3, cols: int = 4) -> ModeManager:
    matrix = [[f"r{r}c{c}" for c in range(cols)] for r in range(rows)]
    return ModeManager.for_sheet(Sheet.from_matrix(matrix))


def press(manager: ModeManager, key: str) -> ModeResult:
    return manager.handle_key(KeyInput(key=key))


def type_text(manager: ModeManager, text: str) -> None:
    for char in text:
        manager.handle_key(KeyInput(key=char, text=char))


def cell(manager: ModeManager, row: int, col: int) -> object:
    return manager.context.sheet.get(row, col)


def test_manager_starts_idle() -> None:
    manager = make_manager()

    assert isinstance(manager.active_mode, IdleMode)
    assert manager.is_editing is False


def test_activate_enters_editing_with_cell_text() -> None:
    manager = make_manager()

    result = manager.activate(1, 2)

    assert result.consumed is True
    assert isinstance(manager.active_mode, EditingMode)
    assert manager.context.cursor.address == (1, 2)
    assert manager.context.cursor.pending == "r1c2"


def test_activate_outside_grid_stays_idle() -> None:
    manager = make_manager()

    result = manager.activate(3, 0)

    assert result.consumed is False
    assert result.status == "out_of_range"
    assert isinstance(manager.active_mode, IdleMode)


def test_typing_buffers_without_touching_matrix() -> None:
    manager = make_manager()
    manager.activate(1, 1)
    version = manager.context.sheet.model.version

    type_text(manager, "abc")

    assert manager.context.cursor.pending == "abc"
    assert cell(manager, 1, 1) == "r1c1"
    assert manager.context.sheet.model.version == version


def test_first_keystroke_replaces_then_appends() -> None:
    manager = make_manager()
    manager.activate(1, 1)
    manager.update_text("r1c1")

    type_text(manager, "!")

    assert manager.context.cursor.pending == "r1c1!"


def test_backspace_edits_pending_text() -> None:
    manager = make_manager()
    manager.activate(1, 1)
    type_text(manager, "xyz")

    press(manager, "BACKSPACE")

    assert manager.context.cursor.pending == "xy"


def test_backspace_on_fresh_activation_clears_buffer() -> None:
    manager = make_manager()
    manager.activate(2, 2)

    press(manager, "BACKSPACE")

    assert manager.context.cursor.pending == ""


def test_ctrl_modified_keys_do_not_insert_text() -> None:
    manager = make_manager()
    manager.activate(1, 1)
    type_text(manager, "a")

    result = manager.handle_key(KeyInput(key="b", text="b", modifiers=("ctrl",)))

    assert result.consumed is False
    assert manager.context.cursor.pending == "a"


def test_tab_on_last_cell_commits_and_goes_idle() -> None:
    manager = make_manager(rows=3, cols=4)
    manager.activate(2, 3)
    type_text(manager, "x")

    result = press(manager, "TAB")

    assert result.switch_to == "idle"
    assert cell(manager, 2, 3) == "x"
    assert isinstance(manager.active_mode, IdleMode)
    assert manager.context.cursor.active is False


def test_tab_wraps_to_next_row() -> None:
    manager = make_manager(rows=3, cols=4)
    manager.activate(1, 3)
    type_text(manager, "x")

    press(manager, "TAB")

    assert cell(manager, 1, 3) == "x"
    assert manager.context.cursor.address == (2, 0)
    assert manager.context.cursor.pending == "r2c0"
    assert manager.is_editing


def test_tab_moves_right_within_row() -> None:
    manager = make_manager()
    manager.activate(0, 0)

    press(manager, "TAB")

    assert manager.context.cursor.address == (0, 1)


def test_enter_moves_down_then_idles_on_last_row() -> None:
    manager = make_manager(rows=3)
    manager.activate(1, 2)
    type_text(manager, "a")

    press(manager, "ENTER")
    assert manager.context.cursor.address == (2, 2)

    type_text(manager, "b")
    result = press(manager, "ENTER")

    assert result.switch_to == "idle"
    assert cell(manager, 1, 2) == "a"
    assert cell(manager, 2, 2) == "b"


def test_escape_discards_pending_edit() -> None:
    manager = make_manager()
    manager.activate(1, 1)
    version = manager.context.sheet.model.version
    type_text(manager, "y")

    result = press(manager, "ESC")

    assert result.status == "discarded"
    assert cell(manager, 1, 1) == "r1c1"
    assert manager.context.sheet.model.version == version
    assert isinstance(manager.active_mode, IdleMode)


def test_arrow_commits_and_moves() -> None:
    manager = make_manager()
    manager.activate(1, 1)
    type_text(manager, "q")

    press(manager, "RIGHT")
    assert cell(manager, 1, 1) == "q"
    assert manager.context.cursor.address == (1, 2)

    press(manager, "UP")
    assert manager.context.cursor.address == (0, 2)
    press(manager, "LEFT")
    press(manager, "DOWN")
    assert manager.context.cursor.address == (1, 1)


def test_arrow_at_edge_keeps_edit_open() -> None:
    manager = make_manager()
    manager.activate(0, 0)
    type_text(manager, "z")
    version = manager.context.sheet.model.version

    up = press(manager, "UP")
    left = press(manager, "LEFT")

    assert up.status == "edge" and left.status == "edge"
    assert manager.context.cursor.address == (0, 0)
    assert manager.context.cursor.pending == "z"
    assert manager.context.sheet.model.version == version


def test_blur_commits_pending_edit() -> None:
    manager = make_manager()
    manager.activate(2, 1)
    type_text(manager, "done")

    result = manager.blur()

    assert result.status == "committed"
    assert cell(manager, 2, 1) == "done"
    assert isinstance(manager.active_mode, IdleMode)


def test_blur_while_idle_is_harmless() -> None:
    manager = make_manager()

    result = manager.blur()

    assert result.consumed is False


def test_activate_elsewhere_commits_previous_cell_first() -> None:
    manager = make_manager()
    events: List[Tuple[str, object]] = []
    for name in ("edit.begin", "edit.commit"):
        manager.context.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    manager.activate(1, 1)
    type_text(manager, "first")

    manager.activate(2, 2)

    assert cell(manager, 1, 1) == "first"
    assert manager.context.cursor.address == (2, 2)
    names = [name for name, _ in events]
    assert names == ["edit.begin", "edit.commit", "edit.begin"]


def test_update_text_replaces_buffer() -> None:
    manager = make_manager()

    assert manager.update_text("ignored").consumed is False

    manager.activate(1, 0)
    manager.update_text("from widget")
    press(manager, "ENTER")

    assert cell(manager, 1, 0) == "from widget"


def test_idle_keys_are_not_consumed() -> None:
    manager = make_manager()

    result = press(manager, "ENTER")

    assert result.consumed is False
    assert result.status == "idle"


def test_idle_mode_honours_custom_bindings() -> None:
    manager = make_manager()
    calls: List[str] = []

    def start_top_left(context, match) -> ModeResult:
        del match
        calls.append("start")
        return context.extras["mode_manager"].activate(0, 0)

    manager.keymap_registry.register_action(
        ActionRef(id="host.start", handler=start_top_left)
    )
    manager.keymap_registry.register_binding(
        Binding(
            id="idle.f2",
            mode="idle",
            sequence=KeySequence.from_strings("F2"),
            action_id="host.start",
        )
    )

    press(manager, "F2")

    assert calls == ["start"]
    assert manager.context.cursor.address == (0, 0)


def test_mirror_reflects_cursor_and_mode() -> None:
    manager = make_manager()
    manager.activate(1, 2)
    type_text(manager, "p")

    mirror = manager.mirror()

    assert mirror.mode == "editing"
    assert mirror.cursor == (1, 2)
    assert mirror.pending == "p"
    assert mirror.shape == (3, 4)


def bind_editing_chord(manager: ModeManager, calls: List[str]) -> None:
    def mark(context, match) -> ModeResult:
        del context, match
        calls.append("jj")
        return ModeResult(consumed=True, status="chord")

    manager.keymap_registry.register_action(ActionRef(id="host.mark", handler=mark))
    manager.keymap_registry.register_binding(
        Binding(
            id="editing.jj",
            mode="editing",
            sequence=KeySequence.from_strings("j", "j"),
            action_id="host.mark",
        )
    )


def test_editing_chord_fires_on_full_sequence() -> None:
    manager = make_manager()
    calls: List[str] = []
    bind_editing_chord(manager, calls)
    manager.activate(1, 1)

    first = manager.handle_key(KeyInput(key="j", text="j"))
    second = manager.handle_key(KeyInput(key="j", text="j"))

    assert first.status == "pending"
    assert second.status == "chord"
    assert calls == ["jj"]
    assert manager.context.cursor.pending == "r1c1"


def test_broken_chord_keeps_prefix_as_text() -> None:
    manager = make_manager()
    calls: List[str] = []
    bind_editing_chord(manager, calls)
    manager.activate(1, 1)

    type_text(manager, "ajx")
    press(manager, "ENTER")

    assert calls == []
    assert cell(manager, 1, 1) == "ajx"


def test_enter_after_chord_prefix_still_commits() -> None:
    manager = make_manager()
    bind_editing_chord(manager, [])
    manager.activate(1, 1)

    type_text(manager, "aj")
    result = press(manager, "ENTER")

    assert result.message == "edit_enter"
    assert cell(manager, 1, 1) == "aj"
    assert manager.context.cursor.address == (2, 1)


def test_escape_after_chord_prefix_still_discards() -> None:
    manager = make_manager()
    bind_editing_chord(manager, [])
    manager.activate(1, 1)

    type_text(manager, "j")
    result = press(manager, "ESC")

    assert result.status == "discarded"
    assert cell(manager, 1, 1) == "r1c1"
    assert isinstance(manager.active_mode, IdleMode)
