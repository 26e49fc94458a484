"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeyChord, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats, ResolutionMatch
from .defaults import load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyChord",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "ResolutionMatch",
    "load_default_keymaps",
]
