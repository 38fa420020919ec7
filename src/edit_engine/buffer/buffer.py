"""Buffer façade: a ``LineDocument`` plus the cursor that edits it."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, List, Optional, Sequence

from edit_engine.runtime import telemetry

from .document import LINE_SEPARATOR, LineDocument
from .line import Line
from .state import ORIGIN, Cursor, CursorRange, Direction, ordered
from .sync import BufferMirror, BufferValidationError
from .validation import check_positions, clamp_cursor, ensure_cursor, is_valid_cursor


class Buffer:
    """Ordered lines plus a ``(row, column)`` cursor.

    All structural text mutation goes through this class. Methods that take an
    explicit address validate it first; an address outside the buffer is a
    no-op that hands back the unchanged cursor.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[LineDocument] = None,
        cursor: Cursor = ORIGIN,
    ) -> None:
        self.name = name
        self.document = document or LineDocument()
        self._cursor = clamp_cursor(self.document, cursor)

    @classmethod
    def from_text(cls, text: Optional[str], *, name: str = "default") -> "Buffer":
        return cls(name=name, document=LineDocument.from_text(text))

    @classmethod
    def from_lines(cls, texts: Iterable[str], *, name: str = "default") -> "Buffer":
        return cls(name=name, document=LineDocument.from_strings(texts))

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    @property
    def line_count(self) -> int:
        return self.document.line_count

    def lines(self) -> Sequence[Line]:
        return self.document.lines()

    def snapshot(self) -> Sequence[str]:
        return self.document.snapshot()

    def line(self, row: int) -> Optional[Line]:
        if not self.document.has_row(row):
            return None
        return self.document.get_line(row)

    def clone(self, *, name: Optional[str] = None) -> "Buffer":
        return Buffer(
            name=name or self.name,
            document=self.document.copy(),
            cursor=self._cursor,
        )

    def to_text(self) -> str:
        return self.document.to_text()

    def set_cursor(self, row: int, column: int) -> Cursor:
        self._cursor = clamp_cursor(self.document, (row, column))
        return self._cursor

    def is_valid(self, cursor: Cursor) -> bool:
        return is_valid_cursor(self.document, cursor)

    # -- single-character edits -------------------------------------------

    def insert_char(self, row: int, column: int, ch: str) -> Cursor:
        if not self.is_valid((row, column)):
            return self._cursor
        with Transaction(self, "insert_char", (row, column)):
            text = self.document.text_at(row)
            self.document.set_text(row, text[:column] + ch + text[column:])
            self._cursor = (row, column + len(ch))
        return self._cursor

    def delete_char(self, row: int, column: int) -> Cursor:
        if not self.is_valid((row, column)) or (row, column) == ORIGIN:
            return self._cursor
        with Transaction(self, "delete_char", (row, column)):
            text = self.document.text_at(row)
            if column > 0:
                self.document.set_text(row, text[: column - 1] + text[column:])
                self._cursor = (row, column - 1)
            else:
                previous = self.document.text_at(row - 1)
                self.document.set_text(row - 1, previous + text)
                self.document.remove_lines(row, row + 1)
                self._cursor = (row - 1, len(previous))
        return self._cursor

    def split_line(self, row: int, column: int) -> Cursor:
        if not self.is_valid((row, column)):
            return self._cursor
        with Transaction(self, "split_line", (row, column)):
            text = self.document.text_at(row)
            self.document.set_text(row, text[:column])
            self.document.insert_lines(row + 1, [text[column:]])
            self._cursor = (row + 1, 0)
        return self._cursor

    def move_cursor(self, direction: Direction) -> Cursor:
        row, col = self._cursor
        if direction is Direction.UP:
            row -= 1
        elif direction is Direction.DOWN:
            row += 1
        elif direction is Direction.LEFT:
            col -= 1
        elif direction is Direction.RIGHT:
            col += 1
        # Horizontal moves never wrap; clamping keeps them on the current line.
        return self.set_cursor(row, col)

    # -- range edits ------------------------------------------------------

    def insert_text(self, row: int, column: int, text: str) -> Cursor:
        """Insert possibly multi-line ``text`` at ``(row, column)``."""

        if not text or not self.is_valid((row, column)):
            return self._cursor
        parts = text.split(LINE_SEPARATOR)
        with Transaction(self, "insert_text", (row, column)):
            current = self.document.text_at(row)
            head, tail = current[:column], current[column:]
            if len(parts) == 1:
                self.document.set_text(row, head + parts[0] + tail)
                self._cursor = (row, column + len(parts[0]))
            else:
                self.document.set_text(row, head + parts[0])
                self.document.insert_lines(row + 1, parts[1:-1] + [parts[-1] + tail])
                self._cursor = (row + len(parts) - 1, len(parts[-1]))
        return self._cursor

    def delete_range(self, start: Cursor, end: Cursor) -> Cursor:
        if not (self.is_valid(start) and self.is_valid(end)):
            return self._cursor
        start, end = ordered(start, end)
        if start == end:
            return self._cursor
        (start_row, start_col), (end_row, end_col) = start, end
        with Transaction(self, "delete_range", start):
            merged = (
                self.document.text_at(start_row)[:start_col]
                + self.document.text_at(end_row)[end_col:]
            )
            self.document.set_text(start_row, merged)
            self.document.remove_lines(start_row + 1, end_row + 1)
            self._cursor = start
        return self._cursor

    def slice_lines(self, start: Cursor, end: Cursor) -> List[str]:
        """Return the text between two cursors, one string per spanned row."""

        start = ensure_cursor(self.document, start)
        end = ensure_cursor(self.document, end)
        (start_row, start_col), (end_row, end_col) = ordered(start, end)
        if start_row == end_row:
            return [self.document.text_at(start_row)[start_col:end_col]]
        pieces = [self.document.text_at(start_row)[start_col:]]
        pieces.extend(self.document.text_at(row) for row in range(start_row + 1, end_row))
        pieces.append(self.document.text_at(end_row)[:end_col])
        return pieces

    def get_text_range(self, start: Cursor, end: Cursor) -> str:
        return LINE_SEPARATOR.join(self.slice_lines(start, end))

    # -- integrity --------------------------------------------------------

    def validate(self) -> None:
        """Raise ``BufferValidationError`` if any buffer invariant is broken."""

        if self.document.line_count == 0:
            raise BufferValidationError("Buffer has no lines")
        check_positions(self.document)
        ensure_cursor(self.document, self._cursor)

    def mirror(
        self,
        *,
        selection: Optional[CursorRange] = None,
        attributes: Optional[dict[str, str]] = None,
    ) -> BufferMirror:
        return BufferMirror(
            text=self.to_text(),
            cursor=self._cursor,
            selection=selection,
            attributes=dict(attributes or {}),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self.document == other.document and self._cursor == other._cursor

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Buffer(name={self.name!r}, lines={list(self.snapshot())!r}, cursor={self._cursor!r})"


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one structural edit in a telemetry span."""

    def __init__(self, buffer: Buffer, label: str, at: Cursor) -> None:
        self.buffer = buffer
        self.label = label
        self.at = at
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            metadata={"buffer": self.buffer.name, "at": self.at},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def load(initial_text: Optional[str] = None, *, name: str = "default") -> Buffer:
    """Build the starting buffer from text handed over by a file reader."""

    return Buffer.from_text(initial_text, name=name)


def serialize(buffer: Buffer) -> str:
    """Canonical text for a file writer: lines joined with ``\\n``."""

    return buffer.to_text()


def clipboard_import(text: str) -> List[str]:
    """Split clipboard text into the lines a paste inserts."""

    return text.split(LINE_SEPARATOR)


__all__ = [
    "Buffer",
    "Transaction",
    "load",
    "serialize",
    "clipboard_import",
]
