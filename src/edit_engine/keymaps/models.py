"""Dataclasses describing key strokes and their command bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from edit_engine.commands import Command


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


class KeyEventKind(str, Enum):
    """Phase of a physical key event as reported by the host terminal."""

    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press."""

    key: str
    modifiers: tuple[str, ...] = ()
    text: str | None = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key.lower()}"
        return self.key if len(self.key) == 1 else self.key.lower()

    @property
    def is_chorded(self) -> bool:
        """True when a ctrl/alt/meta modifier turns the key into a shortcut."""

        return any(mod in {"ctrl", "alt", "meta"} for mod in self.modifiers)

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+x"`` style notation."""

        if token == "+":
            return cls("+")
        *modifiers, key = token.split("+")
        return cls(key, tuple(modifiers))


CommandFactory = Callable[[KeyStroke], Command]


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a stroke token with the command it produces."""

    id: str
    token: str
    factory: CommandFactory
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.token:
            raise ValueError("binding token cannot be empty")
        if not callable(self.factory):
            raise TypeError("factory must be callable")
        # Store the canonical form so "Ctrl+X" and "ctrl+x" collide.
        object.__setattr__(self, "token", KeyStroke.parse(self.token).token)

    def build(self, stroke: KeyStroke) -> Command:
        return self.factory(stroke)


__all__ = ["KeyEventKind", "KeyStroke", "Binding", "CommandFactory"]
