"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import Cursor, CursorRange


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: Cursor
    selection: Optional[CursorRange] = None
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How hosts pull rendered state out of an editing session."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a buffer or caller presents out-of-bounds cursor info."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
