"""Keymap registry mapping stroke tokens to command bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from edit_engine.runtime.telemetry import span

from .models import Binding


@dataclass(slots=True)
class RegistryStats:
    binding_count: int
    revision: int


class KeymapConflictError(RuntimeError):
    """Raised when a new binding reuses a token that is already bound."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' on '{binding.token}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns the token -> binding table."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def register(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register",
            logger_name=self._logger_name,
            metadata={"binding_id": binding.id, "token": binding.token},
        ) as handle:
            existing = self._bindings.get(binding.token)
            if existing is not None and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)
            self._bindings[binding.token] = binding
            self._revision += 1
            return binding

    def unregister(self, token: str) -> Optional[Binding]:
        binding = self._bindings.pop(token, None)
        if binding is not None:
            self._revision += 1
        return binding

    def lookup(self, token: str) -> Optional[Binding]:
        return self._bindings.get(token)

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def stats(self) -> RegistryStats:
        return RegistryStats(binding_count=len(self._bindings), revision=self._revision)


__all__ = ["KeymapRegistry", "KeymapConflictError", "RegistryStats"]
