"""Single line value stored by a ``LineDocument``."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Line:
    """An ordinal position paired with the line's text.

    Lines are values: edits produce a new ``Line`` rather than mutating one
    that a History snapshot may still reference.
    """

    position: int
    text: str = ""

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError("line position cannot be negative")

    def __len__(self) -> int:
        return len(self.text)

    def with_text(self, text: str) -> "Line":
        return replace(self, text=text)

    def with_position(self, position: int) -> "Line":
        if position == self.position:
            return self
        return replace(self, position=position)
