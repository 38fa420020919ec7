"""Turns normalized key events into abstract editing commands."""

from __future__ import annotations

from typing import Optional

from edit_engine.commands import Command, InsertChar
from edit_engine.runtime.telemetry import span

from .models import KeyEventKind, KeyStroke
from .registry import KeymapRegistry


def _insertable(text: Optional[str]) -> bool:
    return text is not None and len(text) == 1 and (text.isprintable() or text == "\t")


class KeyTranslator:
    """Resolves strokes against a registry.

    A first press and an auto-repeat are the same logical command; releases
    never produce one. Unbound strokes carrying a printable character become
    ``InsertChar``.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    def translate(
        self, stroke: KeyStroke, kind: KeyEventKind = KeyEventKind.PRESS
    ) -> Optional[Command]:
        if kind is KeyEventKind.RELEASE:
            return None
        with span(
            "keymaps::translate",
            logger_name=self._logger_name,
            metadata={"token": stroke.token, "kind": kind.value},
        ) as handle:
            binding = self._registry.lookup(stroke.token)
            if binding is not None:
                handle.add_metadata("binding_id", binding.id)
                return binding.build(stroke)
            if not stroke.is_chorded and _insertable(stroke.text):
                handle.add_metadata("binding_id", "insert_char")
                return InsertChar(stroke.text or "")
            handle.add_metadata("status", "miss")
            return None


__all__ = ["KeyTranslator"]
