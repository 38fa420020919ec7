"""Document stores: where the active document is read from and saved to."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from .errors import CollaboratorError


class DocumentStore(Protocol):
    """Reads the initial text blob and persists serialized buffers verbatim."""

    def read(self) -> Optional[str]:
        """Return the stored text, or ``None`` when nothing exists yet."""
        ...

    def write(self, text: str) -> None:
        """Persist ``text`` exactly as given, or raise ``CollaboratorError``."""
        ...


class MemoryDocumentStore:
    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text
        self.writes = 0

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        self.text = text
        self.writes += 1


class FileDocumentStore:
    """UTF-8 file on disk, replaced atomically on every write."""

    name = "file_store"

    def __init__(self, path: os.PathLike[str] | str, *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def read(self) -> Optional[str]:
        try:
            # newline="" keeps "\r\n" intact so a save writes back what was read.
            with self.path.open("r", encoding=self.encoding, newline="") as handle:
                return handle.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise CollaboratorError(self.name, f"cannot read {self.path}: {exc}") from exc

    def write(self, text: str) -> None:
        directory = self.path.parent
        temp_name: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding=self.encoding,
                newline="",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, self.path)
        except (OSError, UnicodeEncodeError) as exc:
            if temp_name is not None and os.path.exists(temp_name):
                os.remove(temp_name)
            raise CollaboratorError(self.name, f"cannot write {self.path}: {exc}") from exc


__all__ = ["DocumentStore", "MemoryDocumentStore", "FileDocumentStore"]
