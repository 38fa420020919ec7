"""Anchored character-range selection over a ``Buffer``."""

from __future__ import annotations

from typing import Optional

from .buffer import Buffer
from .state import ORIGIN, Cursor, CursorRange, ordered


class Selection:
    """Anchor/extent pair that grows from a fixed point in either direction.

    While inactive the range has no effect on anything. While active both ends
    are valid cursors in ``buffer``; every extension moves the buffer cursor
    to the new extent.
    """

    def __init__(self, buffer: Buffer) -> None:
        self.buffer = buffer
        self.anchor: Cursor = ORIGIN
        self.extent: Cursor = ORIGIN
        self.active = False

    def rebind(self, buffer: Buffer) -> None:
        """Point at a replacement buffer; the old range is meaningless there."""

        self.buffer = buffer
        self.clear()

    def begin(self, at: Cursor) -> bool:
        if not self.buffer.is_valid(at):
            return False
        self.anchor = self.extent = at
        self.active = True
        return True

    def clear(self) -> None:
        self.active = False

    def bounds(self) -> Optional[CursorRange]:
        if not self.active:
            return None
        return ordered(self.anchor, self.extent)

    def extend_left(self) -> bool:
        if not self.active:
            return False
        row, col = self.extent
        if col > 0:
            return self._move_extent((row, col - 1))
        if row == 0:
            return False
        return self._move_extent((row - 1, len(self._text(row - 1))))

    def extend_right(self) -> bool:
        if not self.active:
            return False
        row, col = self.extent
        if col < len(self._text(row)):
            return self._move_extent((row, col + 1))
        if row >= self.buffer.line_count - 1:
            return False
        return self._move_extent((row + 1, 0))

    def extend_up(self) -> bool:
        if not self.active:
            return False
        row, col = self.extent
        if row == 0:
            return False
        return self._move_extent((row - 1, min(col, len(self._text(row - 1)))))

    def extend_down(self) -> bool:
        if not self.active:
            return False
        row, col = self.extent
        if row >= self.buffer.line_count - 1:
            return False
        return self._move_extent((row + 1, min(col, len(self._text(row + 1)))))

    def materialize(self) -> Optional[Buffer]:
        """Return the selected text as a standalone buffer numbered from 0."""

        if not self.active:
            return None
        start, end = ordered(self.anchor, self.extent)
        return Buffer.from_lines(
            self.buffer.slice_lines(start, end), name=f"{self.buffer.name}:selection"
        )

    def _text(self, row: int) -> str:
        return self.buffer.document.text_at(row)

    def _move_extent(self, target: Cursor) -> bool:
        self.extent = target
        self.buffer.set_cursor(*target)
        return True

    def __repr__(self) -> str:
        return (
            f"Selection(anchor={self.anchor!r}, extent={self.extent!r}, "
            f"active={self.active!r})"
        )


__all__ = ["Selection"]
