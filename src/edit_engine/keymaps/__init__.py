"""Key stroke to command translation and default bindings."""

from .models import Binding, CommandFactory, KeyEventKind, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .translator import KeyTranslator
from .defaults import DEFAULT_BINDINGS, load_default_keymaps

__all__ = [
    "Binding",
    "CommandFactory",
    "DEFAULT_BINDINGS",
    "KeyEventKind",
    "KeyStroke",
    "KeyTranslator",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "load_default_keymaps",
]
