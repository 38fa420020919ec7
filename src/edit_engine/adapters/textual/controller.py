"""Adapter that feeds host key events to the edit engine and reports back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from edit_engine.buffer import BufferMirror, BufferSync
from edit_engine.engine import EditEngine, EditResult
from edit_engine.keymaps import KeyEventKind, KeyStroke, KeyTranslator


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    release_focus: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter(BufferSync):
    """Bridges key events and engine bus events to a Textual-friendly surface."""

    def __init__(
        self, engine: EditEngine, translator: KeyTranslator, hooks: TextualUIHooks
    ) -> None:
        self.engine = engine
        self.translator = translator
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def pull_buffer(self) -> BufferMirror:
        return self.engine.session.mirror()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
        kind: KeyEventKind = KeyEventKind.PRESS,
    ) -> Optional[EditResult]:
        """Translate a key event and dispatch the resulting command, if any."""

        stroke = KeyStroke(key=key, modifiers=tuple(modifiers), text=text)
        self._log_state("key ->", token=stroke.token, kind=kind.value)
        command = self.translator.translate(stroke, kind)
        if command is None:
            return None
        result = self.engine.dispatch(command)
        self._after_result(result)
        self._log_state(
            "result <-",
            command=command.name,
            status=result.status,
            message=result.message,
        )
        return result

    def _after_result(self, result: EditResult) -> None:
        self.hooks.update_status(result.message or result.status)
        if result.status == "escape":
            self.hooks.release_focus()
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        bus = self.engine.session.bus
        for event in (
            "selection.changed",
            "selection.cleared",
            "clipboard.set",
            "document.saved",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.engine.session
        return {
            "cursor": session.buffer.cursor,
            "selection": session.selection.bounds(),
            "history": session.history.index,
            "buffer": session.buffer.name,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
