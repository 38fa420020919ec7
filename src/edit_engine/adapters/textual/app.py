"""Executable Textual app that hosts the edit engine on a single file."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use edit_engine.adapters.textual.app"
    ) from exc

from edit_engine.buffer import BufferMirror
from edit_engine.collaborators import FileDocumentStore, make_clipboard
from edit_engine.config import EngineSettings
from edit_engine.engine import EditEngine, EditSession
from edit_engine.keymaps import KeymapRegistry, KeyTranslator, load_default_keymaps
from edit_engine.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks


def create_default_engine(path: str, settings: EngineSettings) -> EditEngine:
    """Open ``path`` in a fresh session wired to real collaborators."""

    store = FileDocumentStore(path)
    session = EditSession.open(
        store,
        clipboard=make_clipboard(settings.clipboard),
        settings=settings,
        name=os.path.basename(path),
    )
    return EditEngine(session)


def normalize_key(
    key: str, character: Optional[str], is_printable: bool
) -> Tuple[str, Optional[str], Tuple[str, ...]]:
    """Split a Textual key name into ``(key, text, modifiers)`` for the adapter."""

    *modifiers, name = key.split("+")
    if modifiers or not character:
        return (name, None, tuple(modifiers))
    if is_printable:
        return (character, character, ())
    if name == "tab":
        # Tab is not printable but still types a character.
        return (name, character, ())
    return (name, None, ())


def render_mirror(mirror: BufferMirror) -> Text:
    """Render buffer text with the cursor cell and selection highlighted."""

    lines = mirror.text.split("\n")
    rendered = Text()
    start, end = mirror.selection if mirror.selection else ((0, 0), (0, 0))
    for row, line in enumerate(lines):
        segment = Text(line + " ")
        if mirror.selection and start[0] <= row <= end[0]:
            first = start[1] if row == start[0] else 0
            last = end[1] if row == end[0] else len(line)
            segment.stylize("reverse blue", first, last)
        if row == mirror.cursor[0]:
            column = mirror.cursor[1]
            segment.stylize("reverse", column, column + 1)
        rendered.append(segment)
        if row < len(lines) - 1:
            rendered.append("\n")
    return rendered


@dataclass
class UIState:
    status_text: str = ""
    focused: bool = True


class EditorApp(App[None]):
    """Minimal Textual UI embedding the edit engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, path: str, *, settings: Optional[EngineSettings] = None) -> None:
        super().__init__()
        self.path = path
        self.settings = settings or EngineSettings.from_env()
        self._state = UIState()
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.path
        registry = KeymapRegistry(logger_name="edit_engine.keymaps")
        load_default_keymaps(registry)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            release_focus=self._release_focus,
        )
        self.adapter = TextualEditorAdapter(
            create_default_engine(self.path, self.settings),
            KeyTranslator(registry, logger_name="edit_engine.keymaps"),
            hooks,
        )

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if not self._state.focused:
            # Any key after Escape hands focus back to the editor.
            self._state.focused = True
            self._update_status("editing")
            event.stop()
            return
        key, text, modifiers = normalize_key(event.key, event.character, event.is_printable)
        result = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if result is not None:
            event.prevent_default()
            event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "document.saved":
            self._update_status(f"saved {self.path}")

    def _release_focus(self) -> None:
        self._state.focused = False
        self._update_status("focus released (press any key to resume)")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file with the edit engine.")
    parser.add_argument("path", help="File to open (created on first save)")
    parser.add_argument(
        "--system-clipboard",
        action="store_true",
        help="Use the desktop clipboard instead of an in-process one",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = EngineSettings.from_env()
    if args.system_clipboard:
        settings = replace(settings, clipboard="system")
    # The TUI owns the terminal, so keep telemetry off the console.
    telemetry.configure(preset="quiet")
    EditorApp(args.path, settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
