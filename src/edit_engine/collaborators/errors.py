"""Failure type raised by external collaborators."""

from __future__ import annotations


class CollaboratorError(RuntimeError):
    """A clipboard or document-store call failed; the engine stays consistent."""

    def __init__(self, collaborator: str, message: str) -> None:
        super().__init__(f"{collaborator}: {message}")
        self.collaborator = collaborator
