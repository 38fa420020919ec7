"""Session state the edit engine dispatches commands against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from edit_engine.buffer import Buffer, BufferMirror, History, Selection, load
from edit_engine.collaborators import (
    ClipboardProvider,
    DocumentStore,
    MemoryClipboard,
    make_clipboard,
)
from edit_engine.config import EngineSettings


@dataclass(slots=True)
class EditResult:
    """Outcome of dispatching one command."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    payload: Any = None
    # True when the buffer text changed; the engine commits on it.
    changed: bool = False


class EngineBus:
    """Minimal event bus letting hosts observe engine activity."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass
class EditSession:
    """Everything one editing session owns exclusively.

    ``buffer`` is the working copy; ``history`` holds independent snapshots
    of it. Hosts reach the outside world only through ``clipboard`` and
    ``store``.
    """

    buffer: Buffer
    history: History = field(init=False)
    selection: Selection = field(init=False)
    clipboard: ClipboardProvider = field(default_factory=MemoryClipboard)
    store: Optional[DocumentStore] = None
    bus: EngineBus = field(default_factory=EngineBus)
    settings: EngineSettings = field(default_factory=EngineSettings)

    def __post_init__(self) -> None:
        self.history = History(self.buffer)
        self.selection = Selection(self.buffer)

    @classmethod
    def open(
        cls,
        store: Optional[DocumentStore] = None,
        *,
        clipboard: Optional[ClipboardProvider] = None,
        settings: Optional[EngineSettings] = None,
        name: str = "default",
    ) -> "EditSession":
        """Load the initial buffer from ``store``; read failures propagate."""

        resolved = settings or EngineSettings()
        text = store.read() if store is not None else None
        return cls(
            buffer=load(text, name=name),
            clipboard=clipboard or make_clipboard(resolved.clipboard),
            store=store,
            settings=resolved,
        )

    def replace_buffer(self, snapshot: Buffer) -> None:
        """Install a copy of ``snapshot`` as the working buffer."""

        self.buffer = snapshot.clone()
        self.selection.rebind(self.buffer)

    def mirror(self) -> BufferMirror:
        return self.buffer.mirror(
            selection=self.selection.bounds(),
            attributes={
                "history": f"{self.history.index + 1}/{len(self.history)}",
            },
        )


__all__ = ["EditResult", "EditSession", "EngineBus"]
