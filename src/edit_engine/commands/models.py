"""Abstract editing commands consumed by the edit engine.

The input layer decodes physical key presses into these values; the engine
never sees raw key events. A first press and an auto-repeat of the same key
produce the same command.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from edit_engine.buffer import Direction


@dataclass(frozen=True, slots=True)
class Command:
    """Base class; ``name`` is the stable id used in telemetry and results."""

    name: ClassVar[str] = "command"


@dataclass(frozen=True, slots=True)
class InsertChar(Command):
    name: ClassVar[str] = "insert_char"

    ch: str = ""

    @property
    def is_valid(self) -> bool:
        return len(self.ch) == 1 and self.ch != "\n"


@dataclass(frozen=True, slots=True)
class DeleteBackward(Command):
    name: ClassVar[str] = "delete_backward"


@dataclass(frozen=True, slots=True)
class NewLine(Command):
    name: ClassVar[str] = "new_line"


@dataclass(frozen=True, slots=True)
class MoveCursor(Command):
    name: ClassVar[str] = "move_cursor"

    direction: Direction = Direction.RIGHT


@dataclass(frozen=True, slots=True)
class BeginSelection(Command):
    name: ClassVar[str] = "begin_selection"


@dataclass(frozen=True, slots=True)
class ExtendSelection(Command):
    name: ClassVar[str] = "extend_selection"

    direction: Direction = Direction.RIGHT
    # Key-driven extension (shift+arrow) starts a selection when none is active.
    begin_if_inactive: bool = False


@dataclass(frozen=True, slots=True)
class ClearSelection(Command):
    name: ClassVar[str] = "clear_selection"


@dataclass(frozen=True, slots=True)
class Escape(Command):
    name: ClassVar[str] = "escape"


@dataclass(frozen=True, slots=True)
class Cut(Command):
    name: ClassVar[str] = "cut"


@dataclass(frozen=True, slots=True)
class Copy(Command):
    name: ClassVar[str] = "copy"


@dataclass(frozen=True, slots=True)
class Paste(Command):
    name: ClassVar[str] = "paste"

    # ``None`` means "ask the clipboard collaborator".
    text: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Undo(Command):
    name: ClassVar[str] = "undo"


@dataclass(frozen=True, slots=True)
class Redo(Command):
    name: ClassVar[str] = "redo"


@dataclass(frozen=True, slots=True)
class Commit(Command):
    name: ClassVar[str] = "commit"


@dataclass(frozen=True, slots=True)
class Save(Command):
    name: ClassVar[str] = "save"


__all__ = [
    "Command",
    "InsertChar",
    "DeleteBackward",
    "NewLine",
    "MoveCursor",
    "BeginSelection",
    "ExtendSelection",
    "ClearSelection",
    "Escape",
    "Cut",
    "Copy",
    "Paste",
    "Undo",
    "Redo",
    "Commit",
    "Save",
]
