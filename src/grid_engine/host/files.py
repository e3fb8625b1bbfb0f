"""Reading and writing tables on disk for the reference host."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from grid_engine.codec.csv_text import Matrix, decode, parse, serialize
from grid_engine.grid.placeholder import generate_placeholder
from grid_engine.runtime import telemetry

PathLike = Union[str, Path]

TEXT_SUFFIXES = frozenset({".csv", ".txt"})
EXCEL_SUFFIXES = frozenset({".xlsx", ".xls"})


class UnsupportedFormatError(ValueError):
    """Raised for files the engine cannot load (Excel workbooks included)."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


def check_format(path: PathLike) -> Path:
    resolved = Path(path)
    suffix = resolved.suffix.lower()
    if suffix in TEXT_SUFFIXES:
        return resolved
    if suffix in EXCEL_SUFFIXES:
        raise UnsupportedFormatError(
            f"Excel workbooks are not supported yet: {resolved.name}", path=resolved
        )
    raise UnsupportedFormatError(
        f"Unsupported file type '{suffix or '<none>'}' (use .csv)", path=resolved
    )


def read_table(
    path: PathLike, *, strict: bool = False, encoding: str = "utf-8"
) -> Matrix:
    """Load ``path`` into a matrix; raises ``MalformedInputError`` for bad text."""

    resolved = check_format(path)
    with telemetry.span(
        "host::read_table", component="host", metadata={"path": str(resolved)}
    ) as handle:
        matrix = parse(decode(resolved.read_bytes(), encoding), strict=strict)
        handle.add_metadata("rows", len(matrix))
    return matrix


def write_table(
    path: PathLike, matrix: Matrix, *, strict: bool = False, encoding: str = "utf-8"
) -> Path:
    resolved = check_format(path)
    with telemetry.span(
        "host::write_table", component="host", metadata={"path": str(resolved)}
    ):
        with open(resolved, "w", encoding=encoding, newline="") as handle:
            handle.write(serialize(matrix, strict=strict))
    return resolved


def load_or_placeholder(
    path: Optional[PathLike] = None,
    *,
    rows: int = 20,
    cols: int = 10,
    seed: Optional[int] = None,
    strict: bool = False,
) -> Matrix:
    """Read ``path`` when given, otherwise generate placeholder data."""

    if path is None:
        telemetry.record_event(
            "host.placeholder", data={"rows": rows, "cols": cols, "seed": seed}
        )
        return generate_placeholder(rows, cols, seed=seed)
    return read_table(path, strict=strict)


__all__ = [
    "EXCEL_SUFFIXES",
    "TEXT_SUFFIXES",
    "UnsupportedFormatError",
    "check_format",
    "load_or_placeholder",
    "read_table",
    "write_table",
]
