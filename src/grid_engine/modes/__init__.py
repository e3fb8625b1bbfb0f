"""Navigation modes (idle / editing) and their shared plumbing.

``ModeManager`` lives in ``grid_engine.modes.mode_manager``.
"""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .state import EditCursor, GridMirror
from .idle_mode import IdleMode
from .editing_mode import EditingMode

__all__ = [
    "EditCursor",
    "EditingMode",
    "GridMirror",
    "IdleMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
]
