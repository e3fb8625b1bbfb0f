"""Key binding registry and resolver for the navigation modes."""

from .models import ActionRef, Binding, KeySequence, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "RegistryStats",
    "ResolutionMatch",
    "ResolutionResult",
    "load_default_keymaps",
]
