"""Abstract editing commands."""

from .models import (
    BeginSelection,
    ClearSelection,
    Command,
    Commit,
    Copy,
    Cut,
    DeleteBackward,
    Escape,
    ExtendSelection,
    InsertChar,
    MoveCursor,
    NewLine,
    Paste,
    Redo,
    Save,
    Undo,
)

__all__ = [
    "BeginSelection",
    "ClearSelection",
    "Command",
    "Commit",
    "Copy",
    "Cut",
    "DeleteBackward",
    "Escape",
    "ExtendSelection",
    "InsertChar",
    "MoveCursor",
    "NewLine",
    "Paste",
    "Redo",
    "Save",
    "Undo",
]
