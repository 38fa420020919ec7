"""Built-in bindings for the standard editing shortcuts."""

from __future__ import annotations

from typing import Iterable

from edit_engine.buffer import Direction
from edit_engine.commands import (
    BeginSelection,
    Copy,
    Cut,
    DeleteBackward,
    Escape,
    ExtendSelection,
    MoveCursor,
    NewLine,
    Paste,
    Redo,
    Save,
    Undo,
)

from .models import Binding
from .registry import KeymapRegistry


def _move(direction: Direction) -> Binding:
    return Binding(
        id=f"cursor.{direction.value}",
        token=direction.value,
        factory=lambda stroke: MoveCursor(direction),
        description=f"Move cursor {direction.value}",
    )


def _extend(direction: Direction) -> Binding:
    return Binding(
        id=f"selection.extend_{direction.value}",
        token=f"shift+{direction.value}",
        factory=lambda stroke: ExtendSelection(direction, begin_if_inactive=True),
        description=f"Extend selection {direction.value}",
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="clipboard.cut",
        token="ctrl+x",
        factory=lambda stroke: Cut(),
        description="Cut the selection",
    ),
    Binding(
        id="clipboard.copy",
        token="ctrl+c",
        factory=lambda stroke: Copy(),
        description="Copy the selection",
    ),
    Binding(
        id="clipboard.paste",
        token="ctrl+v",
        factory=lambda stroke: Paste(),
        description="Paste clipboard text at the cursor",
    ),
    Binding(
        id="document.save",
        token="ctrl+s",
        factory=lambda stroke: Save(),
        description="Save the most recent edit",
    ),
    Binding(
        id="history.undo",
        token="ctrl+z",
        factory=lambda stroke: Undo(),
        description="Undo one edit",
    ),
    Binding(
        id="history.redo",
        token="ctrl+y",
        factory=lambda stroke: Redo(),
        description="Redo one edit",
    ),
    Binding(
        id="edit.delete_backward",
        token="backspace",
        factory=lambda stroke: DeleteBackward(),
        description="Delete the character before the cursor",
    ),
    Binding(
        id="edit.new_line",
        token="enter",
        factory=lambda stroke: NewLine(),
        description="Split the line at the cursor",
    ),
    Binding(
        id="selection.begin",
        token="ctrl+space",
        factory=lambda stroke: BeginSelection(),
        description="Anchor a selection at the cursor",
    ),
    Binding(
        id="focus.escape",
        token="escape",
        factory=lambda stroke: Escape(),
        description="Drop the selection and release focus",
    ),
    *(_move(direction) for direction in Direction),
    *(_extend(direction) for direction in Direction),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register the built-in bindings, then any host-supplied extras."""

    for binding in DEFAULT_BINDINGS:
        registry.register(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register(binding, replace=True)


__all__ = ["DEFAULT_BINDINGS", "load_default_keymaps"]
