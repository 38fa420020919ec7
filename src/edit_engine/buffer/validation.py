"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import LineDocument
from .state import Cursor
from .sync import BufferValidationError


def is_valid_cursor(document: LineDocument, cursor: Cursor) -> bool:
    row, col = cursor
    if not document.has_row(row):
        return False
    return 0 <= col <= len(document.text_at(row))


def ensure_cursor(document: LineDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    if not document.has_row(row):
        raise BufferValidationError("Row out of range", cursor=cursor)
    if col < 0 or col > len(document.text_at(row)):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def clamp_cursor(document: LineDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    row = max(0, min(row, document.line_count - 1))
    col = max(0, min(col, len(document.text_at(row))))
    return (row, col)


def check_positions(document: LineDocument) -> None:
    for index, line in enumerate(document.lines()):
        if line.position != index:
            raise BufferValidationError(
                f"Line at index {index} carries position {line.position}",
                cursor=(index, 0),
            )


__all__ = ["is_valid_cursor", "ensure_cursor", "clamp_cursor", "check_positions"]
