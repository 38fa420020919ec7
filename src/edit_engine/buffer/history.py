"""Snapshot-based undo/redo history."""

from __future__ import annotations

from typing import List

from edit_engine.runtime import telemetry

from .buffer import Buffer


class History:
    """Linear sequence of full ``Buffer`` snapshots with a movable pointer.

    The pointer always names a valid snapshot. Committing while the pointer
    is behind the tail prunes the redo branch before appending.
    """

    def __init__(self, initial: Buffer) -> None:
        self._snapshots: List[Buffer] = [initial.clone()]
        self._index: int = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Buffer:
        return self._snapshots[self._index]

    @property
    def tip(self) -> Buffer:
        return self._snapshots[-1]

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def commit(self, snapshot: Buffer) -> None:
        pruned = len(self._snapshots) - 1 - self._index
        if pruned:
            del self._snapshots[self._index + 1 :]
        self._snapshots.append(snapshot.clone())
        self._index = len(self._snapshots) - 1
        telemetry.record_event(
            "history.commit",
            data={"index": self._index, "pruned": pruned},
        )

    def undo(self) -> Buffer:
        if self.can_undo():
            self._index -= 1
            self._record("history.undo")
        return self.current

    def redo(self) -> Buffer:
        if self.can_redo():
            self._index += 1
            self._record("history.redo")
        return self.current

    def _record(self, event: str) -> None:
        telemetry.record_event(
            event,
            data={"index": self._index, "size": len(self._snapshots)},
        )

    def reset_to_tip(self) -> None:
        self._index = len(self._snapshots) - 1


__all__ = ["History"]
