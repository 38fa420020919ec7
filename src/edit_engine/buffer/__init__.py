"""Buffer abstractions, snapshot history and selection."""

from .buffer import Buffer, Transaction, clipboard_import, load, serialize
from .document import LINE_SEPARATOR, LineDocument
from .history import History
from .line import Line
from .selection import Selection
from .state import ORIGIN, Cursor, CursorRange, Direction, ordered
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import check_positions, clamp_cursor, ensure_cursor, is_valid_cursor

__all__ = [
    "Buffer",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "Cursor",
    "CursorRange",
    "Direction",
    "History",
    "LINE_SEPARATOR",
    "Line",
    "LineDocument",
    "ORIGIN",
    "Selection",
    "Transaction",
    "check_positions",
    "clamp_cursor",
    "clipboard_import",
    "ensure_cursor",
    "is_valid_cursor",
    "load",
    "ordered",
    "serialize",
]
