"""Executable Textual app that hosts the grid engine."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the demo is run
    from rich.table import Table
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use grid_engine.adapters.textual.app"
    ) from exc

from grid_engine.codec import MalformedInputError
from grid_engine.grid import Sheet, column_label
from grid_engine.host import UnsupportedFormatError, load_or_placeholder, write_table
from grid_engine.modes import GridMirror
from grid_engine.modes.mode_manager import ModeManager
from grid_engine.runtime import telemetry

from .controller import TextualGridAdapter, TextualUIHooks

_ARROWS = {"up": (-1, 0), "down": (1, 0), "left": (0, -1), "right": (0, 1)}
_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
}


class GridEditorApp(App[None]):
    """Minimal Textual UI around one sheet."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#grid-scroll {
		height: 1fr;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("tab", "tab_key", "Next cell", show=False, priority=True),
        Binding("ctrl+n", "row('insert_row')", "Insert row", priority=True),
        Binding("ctrl+d", "row('delete_row')", "Delete row", priority=True),
        Binding("ctrl+up", "row('move_row_up')", "Move up", priority=True),
        Binding("ctrl+down", "row('move_row_down')", "Move down", priority=True),
        Binding("ctrl+r", "bulk('add_rows', 1)", "Add row", priority=True),
        Binding("ctrl+t", "bulk('add_rows', 5)", "Add 5", show=False, priority=True),
        Binding("ctrl+l", "bulk('duplicate_last_row')", "Duplicate", priority=True),
        Binding("ctrl+x", "bulk('delete_last_rows', 1)", "Drop last", priority=True),
    ]

    def __init__(
        self,
        sheet: Sheet,
        *,
        output: Optional[Path] = None,
        strict: bool = False,
    ) -> None:
        super().__init__()
        self.sheet = sheet
        self.output = output
        self.strict = strict
        self.manager: ModeManager | None = None
        self.adapter: TextualGridAdapter | None = None
        self._grid_widget: Static | None = None
        self._status_widget: Static | None = None
        # Highlighted cell while idle; follows the edit cursor otherwise.
        self._focus: Tuple[int, int] = (0, 0)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="grid-scroll"):
            self._grid_widget = Static("", id="grid-view")
            yield self._grid_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.manager = ModeManager.for_sheet(self.sheet)
        hooks = TextualUIHooks(
            update_grid=self._update_grid,
            update_status=self._update_status,
        )
        self.adapter = TextualGridAdapter(self.manager, hooks)
        rows, cols = self.sheet.shape()
        self._update_status(f"{self.sheet.name}: {rows} rows x {cols} columns")

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or not self.manager:
            return
        if event.key.startswith("ctrl+"):
            return
        if self.manager.is_editing:
            key, text = self._normalize_key(event)
            self.adapter.handle_textual_key(key, text=text)
        elif event.key in _ARROWS:
            self._move_focus(*_ARROWS[event.key])
        elif event.key in {"enter", "return"}:
            self.adapter.activate_cell(*self._focus)
        else:
            return
        event.stop()

    def action_tab_key(self) -> None:
        if not self.adapter or not self.manager:
            return
        if self.manager.is_editing:
            self.adapter.handle_textual_key("TAB")
        else:
            self._move_focus(0, 1)

    def action_row(self, name: str) -> None:
        if not self.adapter:
            return
        row, col = self._focus
        delta = self.adapter.row_action(name, row)
        if not delta.changed:
            return
        if name == "insert_row":
            self._focus = (row + 1, col)
        elif name == "move_row_up":
            self._focus = (row - 1, col)
        elif name == "move_row_down":
            self._focus = (row + 1, col)
        self._clamp_focus()

    def action_bulk(self, name: str, *args: int) -> None:
        if not self.adapter:
            return
        self.adapter.row_action(name, *args)
        self._clamp_focus()

    def action_save(self) -> None:
        if not self.adapter:
            return
        if self.output is None:
            self._update_status("No output path (use --output)")
            return
        self.adapter.blur()
        try:
            written = write_table(self.output, self.sheet.matrix, strict=self.strict)
        except (OSError, UnsupportedFormatError) as exc:
            self._update_status(f"Save failed: {exc}")
            return
        self._update_status(f"Saved {written}")

    def _move_focus(self, d_row: int, d_col: int) -> None:
        row, col = self._focus
        self._focus = (row + d_row, col + d_col)
        self._clamp_focus()

    def _clamp_focus(self) -> None:
        rows, cols = self.sheet.shape()
        row, col = self._focus
        self._focus = (
            max(0, min(row, rows - 1)),
            max(0, min(col, cols - 1)),
        )
        if self.manager:
            self._update_grid(self.manager.mirror())

    def _update_grid(self, mirror: GridMirror) -> None:
        if mirror.cursor is not None:
            self._focus = mirror.cursor
        if self._grid_widget:
            self._grid_widget.update(self._render(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _render(self, mirror: GridMirror) -> Table:
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("#", justify="right", style="dim")
        for index in range(mirror.shape[1]):
            table.add_column(column_label(index))
        for row_index, row in enumerate(mirror.matrix):
            cells = []
            for col_index, cell in enumerate(row):
                address = (row_index, col_index)
                if address == mirror.cursor:
                    cells.append(Text(mirror.pending + "▏", style="reverse"))
                    continue
                style = "bold" if row_index == 0 else ""
                if address == self._focus:
                    style = f"{style} underline".strip()
                cells.append(Text("" if cell is None else str(cell), style=style))
            table.add_row(str(row_index + 1), *cells)
        return table

    @staticmethod
    def _normalize_key(event: events.Key) -> Tuple[str, Optional[str]]:
        named = _NAMED_KEYS.get(event.key)
        if named is not None:
            return (named, None)
        if event.character and event.is_printable:
            return (event.character, event.character)
        return (event.key.upper(), None)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a CSV file as a grid.")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="CSV file to load (placeholder data when omitted)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=os.environ.get("GRID_ENGINE_OUTPUT"),
        help="Where ctrl+s writes the sheet (default: the loaded file)",
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=_env_int("GRID_ENGINE_ROWS", 20),
        help="Placeholder row count, header included (default: 20)",
    )
    parser.add_argument(
        "--cols",
        type=int,
        default=_env_int("GRID_ENGINE_COLS", 10),
        help="Placeholder column count (default: 10)",
    )
    parser.add_argument("--seed", type=int, help="Seed for placeholder values")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Use RFC 4180 quoting when reading and writing",
    )
    parser.add_argument(
        "--telemetry",
        choices=("development", "production", "quiet"),
        default=os.environ.get("GRID_ENGINE_PRESET", "quiet"),
        help="Telemetry preset (default: quiet, so logs do not draw over the UI)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.telemetry)
    try:
        matrix = load_or_placeholder(
            args.path, rows=args.rows, cols=args.cols, seed=args.seed, strict=args.strict
        )
    except (MalformedInputError, UnsupportedFormatError, OSError) as exc:
        raise SystemExit(f"could not load file: {exc}") from exc

    name = args.path.name if args.path else "placeholder"
    sheet = Sheet.from_matrix(matrix, name=name)
    output = args.output or args.path
    app = GridEditorApp(sheet, output=output, strict=args.strict)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
