"""Command dispatcher that drives Buffer, Selection and History."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Type

from edit_engine.collaborators import CollaboratorError
from edit_engine.commands import (
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
from edit_engine.runtime import telemetry

from . import actions
from .context import EditResult, EditSession

ActionHandler = Callable[[EditSession, Command], EditResult]

_COMMAND_HANDLERS: Dict[Type[Command], ActionHandler] = {
    InsertChar: actions.insert_char,
    DeleteBackward: actions.delete_backward,
    NewLine: actions.new_line,
    MoveCursor: actions.move_cursor,
    BeginSelection: actions.begin_selection,
    ExtendSelection: actions.extend_selection,
    ClearSelection: actions.clear_selection,
    Escape: actions.escape,
    Cut: actions.cut,
    Copy: actions.copy,
    Paste: actions.paste,
    Undo: actions.undo,
    Redo: actions.redo,
    Commit: actions.commit,
    Save: actions.save,
}  # type: ignore[dict-item]


class EditEngine:
    """Runs one command at a time to completion against a session.

    After a command reports a text change the engine commits a snapshot (one
    per logical edit). Pure navigation never commits.
    """

    def __init__(self, session: EditSession) -> None:
        self.session = session

    def dispatch(self, command: Command) -> EditResult:
        handler = _COMMAND_HANDLERS.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command {command!r}")

        session = self.session
        with telemetry.span(
            name=f"engine::{command.name}",
            metadata={"cursor": session.buffer.cursor},
        ) as handle:
            try:
                result = handler(session, command)
            except CollaboratorError as exc:
                telemetry.record_event(
                    "collaborator.failure",
                    data={
                        "command": command.name,
                        "collaborator": exc.collaborator,
                        "reason": str(exc),
                    },
                )
                result = EditResult(
                    consumed=True, status=f"{command.name}_failed", message=str(exc)
                )
            handle.add_metadata("status", result.status)

            if result.changed and session.settings.auto_commit:
                session.history.commit(session.buffer)
            if session.settings.validate_after_dispatch:
                session.buffer.validate()

        if result.status == "invalid":
            telemetry.record_event(
                "engine.invalid",
                data={"command": command.name, "detail": result.message},
            )
        session.bus.emit("engine.result", result)
        if result.changed:
            session.bus.emit("buffer.changed", session.buffer.cursor)
        return result

    def dispatch_many(self, commands: Iterable[Command]) -> List[EditResult]:
        return [self.dispatch(command) for command in commands]


__all__ = ["EditEngine"]
