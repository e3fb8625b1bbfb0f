from __future__ import annotations

from pathlib import Path

import pytest

from grid_engine.codec import MalformedInputError
from grid_engine.host import (
    UnsupportedFormatError,
    check_format,
    load_or_placeholder,
    read_table,
    write_table,
)


def test_read_table_parses_csv(tmp_path: Path) -> None:
    path = tmp_path / "orders.csv"
    path.write_bytes(b'name,note\r\nRow 1,"a, b"\r\n\r\nRow 2,c\r\n')

    matrix = read_table(path)

    assert matrix == [["name", "note"], ["Row 1", "a, b"], ["Row 2", "c"]]


def test_read_table_accepts_bom_and_txt(tmp_path: Path) -> None:
    path = tmp_path / "orders.TXT"
    path.write_bytes("\ufeffname,qty\nRow 1,3".encode("utf-8"))

    assert read_table(path) == [["name", "qty"], ["Row 1", "3"]]


def test_read_table_rejects_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "broken.csv"
    path.write_bytes(b"name\n\xff\xfe\xfa")

    with pytest.raises(MalformedInputError):
        read_table(path)


def test_write_table_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "out.csv"
    matrix = [["name", "note"], ["Row 1", "x, y"], ["Row 2", None]]

    written = write_table(path, matrix)

    assert written == path
    assert path.read_bytes() == b'name,note\nRow 1,"x, y"\nRow 2,'
    assert read_table(path) == [["name", "note"], ["Row 1", "x, y"], ["Row 2", ""]]


def test_strict_mode_preserves_embedded_quotes(tmp_path: Path) -> None:
    path = tmp_path / "strict.csv"
    matrix = [["name", "quote"], ["Row 1", 'say "hi", then leave']]

    write_table(path, matrix, strict=True)

    assert read_table(path, strict=True) == matrix


@pytest.mark.parametrize("name", ["book.xlsx", "legacy.XLS"])
def test_excel_files_are_rejected(tmp_path: Path, name: str) -> None:
    with pytest.raises(UnsupportedFormatError) as excinfo:
        check_format(tmp_path / name)

    assert "Excel" in str(excinfo.value)
    assert excinfo.value.path.name == name


def test_unknown_extensions_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFormatError):
        write_table(tmp_path / "data.json", [["a"]])
    with pytest.raises(UnsupportedFormatError):
        read_table(tmp_path / "README")


def test_load_or_placeholder_without_path_is_deterministic() -> None:
    first = load_or_placeholder(rows=4, cols=5, seed=7)
    second = load_or_placeholder(rows=4, cols=5, seed=7)

    assert first == second
    assert len(first) == 4
    assert first[0] == ["Column A", "Column B", "Column C", "Column D", "Column E"]
    assert [row[0] for row in first[1:]] == ["Row 1", "Row 2", "Row 3"]


def test_load_or_placeholder_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "small.csv"
    path.write_text("a,b\n1,2", encoding="utf-8")

    assert load_or_placeholder(path) == [["a", "b"], ["1", "2"]]
