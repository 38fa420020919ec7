"""Clipboard collaborators handed to an editing session."""

from __future__ import annotations

from typing import Protocol

from .errors import CollaboratorError


class ClipboardProvider(Protocol):
    """Plain-text clipboard the engine writes Cut/Copy payloads to."""

    def get_text(self) -> str:
        """Return the current clipboard text (empty when nothing is stored)."""
        ...

    def set_text(self, text: str) -> None:
        """Replace the clipboard contents with ``text``."""
        ...


class MemoryClipboard:
    """In-process clipboard; the default for tests and headless hosts."""

    def __init__(self, text: str = "") -> None:
        self._text = text

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text


class SystemClipboard:
    """Clipboard backed by the desktop clipboard through pyperclip."""

    name = "system_clipboard"

    def get_text(self) -> str:
        import pyperclip

        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as exc:
            raise CollaboratorError(self.name, str(exc)) from exc

    def set_text(self, text: str) -> None:
        import pyperclip

        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise CollaboratorError(self.name, str(exc)) from exc


def make_clipboard(backend: str) -> ClipboardProvider:
    if backend == "system":
        return SystemClipboard()
    if backend == "memory":
        return MemoryClipboard()
    raise ValueError(f"Unknown clipboard backend '{backend}'")


__all__ = ["ClipboardProvider", "MemoryClipboard", "SystemClipboard", "make_clipboard"]
