"""UI-agnostic CSV grid editing engine."""

__all__ = [
    "adapters",
    "actions",
    "codec",
    "grid",
    "host",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
