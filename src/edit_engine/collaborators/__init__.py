"""External collaborators: clipboard and document storage."""

from .clipboard import ClipboardProvider, MemoryClipboard, SystemClipboard, make_clipboard
from .errors import CollaboratorError
from .store import DocumentStore, FileDocumentStore, MemoryDocumentStore

__all__ = [
    "ClipboardProvider",
    "CollaboratorError",
    "DocumentStore",
    "FileDocumentStore",
    "MemoryClipboard",
    "MemoryDocumentStore",
    "SystemClipboard",
    "make_clipboard",
]
