"""Cursor and direction primitives shared by the buffer layer."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)
CursorRange = Tuple[Cursor, Cursor]

ORIGIN: Cursor = (0, 0)


class Direction(str, Enum):
    """Cardinal cursor movements."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


def ordered(first: Cursor, second: Cursor) -> CursorRange:
    """Return ``(start, end)`` in document order."""

    if first <= second:
        return first, second
    return second, first
