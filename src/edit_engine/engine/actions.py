"""Per-command action implementations.

Each action takes the session and the command, performs the Buffer /
Selection / History calls, and reports whether the buffer text changed.
Collaborator calls always happen before any state is touched, so a
``CollaboratorError`` escaping an action leaves the session as it was.
"""

from __future__ import annotations

from edit_engine.buffer import Direction, clipboard_import, serialize
from edit_engine.commands import (
    BeginSelection,
    ClearSelection,
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

from .context import EditResult, EditSession


def _edited(session: EditSession, version_before: int, status: str) -> EditResult:
    changed = session.buffer.document.version != version_before
    return EditResult(
        consumed=True,
        status=status if changed else "noop",
        changed=changed,
    )


def clipboard_payload(session: EditSession, text: str) -> None:
    """Hand selected text to the clipboard collaborator, then announce it."""

    session.clipboard.set_text(text)
    session.bus.emit("clipboard.set", text)


def _drop_selection(session: EditSession) -> None:
    if session.selection.active:
        session.selection.clear()
        session.bus.emit("selection.cleared", None)


def insert_char(session: EditSession, command: InsertChar) -> EditResult:
    if not command.is_valid:
        return EditResult(consumed=False, status="invalid", message=repr(command.ch))
    _drop_selection(session)
    buffer = session.buffer
    before = buffer.document.version
    buffer.insert_char(*buffer.cursor, command.ch)
    return _edited(session, before, "inserted")


def delete_backward(session: EditSession, command: DeleteBackward) -> EditResult:
    del command
    _drop_selection(session)
    buffer = session.buffer
    before = buffer.document.version
    buffer.delete_char(*buffer.cursor)
    return _edited(session, before, "deleted")


def new_line(session: EditSession, command: NewLine) -> EditResult:
    del command
    _drop_selection(session)
    buffer = session.buffer
    before = buffer.document.version
    buffer.split_line(*buffer.cursor)
    return _edited(session, before, "split")


def move_cursor(session: EditSession, command: MoveCursor) -> EditResult:
    before = session.buffer.cursor
    after = session.buffer.move_cursor(command.direction)
    return EditResult(consumed=True, status="moved" if after != before else "noop")


def begin_selection(session: EditSession, command: BeginSelection) -> EditResult:
    del command
    selection = session.selection
    selection.begin(session.buffer.cursor)
    session.bus.emit("selection.changed", selection.bounds())
    return EditResult(consumed=True, status="selection_started")


_EXTENDERS = {
    Direction.LEFT: "extend_left",
    Direction.RIGHT: "extend_right",
    Direction.UP: "extend_up",
    Direction.DOWN: "extend_down",
}


def extend_selection(session: EditSession, command: ExtendSelection) -> EditResult:
    selection = session.selection
    if not selection.active:
        if not command.begin_if_inactive:
            return EditResult(consumed=False, status="no_selection")
        selection.begin(session.buffer.cursor)
    moved = getattr(selection, _EXTENDERS[command.direction])()
    session.bus.emit("selection.changed", selection.bounds())
    return EditResult(consumed=True, status="selection_extended" if moved else "noop")


def clear_selection(session: EditSession, command: ClearSelection) -> EditResult:
    del command
    _drop_selection(session)
    return EditResult(consumed=True, status="selection_cleared")


def escape(session: EditSession, command: Escape) -> EditResult:
    del command
    _drop_selection(session)
    # The host shell decides where focus goes next.
    return EditResult(consumed=True, status="escape")


def cut(session: EditSession, command: Cut) -> EditResult:
    del command
    selection = session.selection
    selected = selection.materialize()
    bounds = selection.bounds()
    if selected is None or bounds is None:
        return EditResult(consumed=False, status="no_selection")
    text = selected.to_text()
    clipboard_payload(session, text)
    buffer = session.buffer
    before = buffer.document.version
    buffer.delete_range(*bounds)
    _drop_selection(session)
    result = _edited(session, before, "cut")
    result.payload = text
    if not result.changed:
        # An empty selection still counts as a cut of nothing.
        result.status = "cut"
    return result


def copy(session: EditSession, command: Copy) -> EditResult:
    del command
    selected = session.selection.materialize()
    if selected is None:
        return EditResult(consumed=False, status="no_selection")
    text = selected.to_text()
    clipboard_payload(session, text)
    return EditResult(consumed=True, status="copied", payload=text)


def paste(session: EditSession, command: Paste) -> EditResult:
    text = command.text if command.text is not None else session.clipboard.get_text()
    if not text:
        return EditResult(consumed=True, status="noop")
    _drop_selection(session)
    buffer = session.buffer
    before = buffer.document.version
    buffer.insert_text(*buffer.cursor, text)
    result = _edited(session, before, "pasted")
    result.payload = len(clipboard_import(text))
    return result


def undo(session: EditSession, command: Undo) -> EditResult:
    del command
    history = session.history
    if not history.can_undo():
        return EditResult(consumed=True, status="noop", message="oldest_snapshot")
    _drop_selection(session)
    session.replace_buffer(history.undo())
    return EditResult(consumed=True, status="undone")


def redo(session: EditSession, command: Redo) -> EditResult:
    del command
    history = session.history
    if not history.can_redo():
        return EditResult(consumed=True, status="noop", message="newest_snapshot")
    _drop_selection(session)
    session.replace_buffer(history.redo())
    return EditResult(consumed=True, status="redone")


def commit(session: EditSession, command: Commit) -> EditResult:
    del command
    session.history.commit(session.buffer)
    return EditResult(consumed=True, status="committed")


def save(session: EditSession, command: Save) -> EditResult:
    del command
    store = session.store
    if store is None:
        return EditResult(consumed=False, status="no_store")
    history = session.history
    tip = history.tip
    text = serialize(tip)
    behind_tip = history.can_redo()
    store.write(text)
    # Only a successful write moves the pointer and the working buffer.
    history.reset_to_tip()
    if behind_tip:
        session.replace_buffer(tip)
    session.bus.emit("document.saved", text)
    return EditResult(consumed=True, status="saved", payload=text)


__all__ = [
    "clipboard_payload",
    "insert_char",
    "delete_backward",
    "new_line",
    "move_cursor",
    "begin_selection",
    "extend_selection",
    "clear_selection",
    "escape",
    "cut",
    "copy",
    "paste",
    "undo",
    "redo",
    "commit",
    "save",
]
