"""Ordered line storage backing every ``Buffer``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .line import Line

LINE_SEPARATOR = "\n"


@dataclass(slots=True)
class LineDocument:
    """List-of-``Line`` storage whose positions always mirror list order.

    Every structural mutation (insert or remove of whole lines) renumbers the
    lines from the change point onwards before returning, so ``position`` and
    sequence index never disagree at an observable boundary.
    """

    _lines: List[Line] = field(default_factory=lambda: [Line(0, "")])
    version: int = 0

    @classmethod
    def from_text(cls, text: Optional[str]) -> "LineDocument":
        if not text:
            return cls()
        return cls.from_strings(text.split(LINE_SEPARATOR))

    @classmethod
    def from_strings(cls, texts: Iterable[str]) -> "LineDocument":
        lines = [Line(index, value) for index, value in enumerate(texts)]
        if not lines:
            lines = [Line(0, "")]
        return cls(_lines=lines)

    def copy(self) -> "LineDocument":
        # Lines are frozen, so sharing them between copies is safe.
        return LineDocument(_lines=list(self._lines), version=self.version)

    def snapshot(self) -> Sequence[str]:
        """Return the current line texts without exposing internal mutability."""

        return tuple(line.text for line in self._lines)

    def lines(self) -> Sequence[Line]:
        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def has_row(self, row: int) -> bool:
        return 0 <= row < len(self._lines)

    def get_line(self, row: int) -> Line:
        return self._lines[row]

    def text_at(self, row: int) -> str:
        return self._lines[row].text

    def set_text(self, row: int, text: str) -> None:
        self._lines[row] = self._lines[row].with_text(text)
        self.version += 1

    def insert_lines(self, row: int, texts: Iterable[str]) -> int:
        """Insert ``texts`` so the first lands at ``row``; returns how many."""

        new_lines = [Line(row + offset, value) for offset, value in enumerate(texts)]
        if not new_lines:
            return 0
        self._lines[row:row] = new_lines
        self.renumber(row + len(new_lines))
        self.version += 1
        return len(new_lines)

    def remove_lines(self, start: int, end: int) -> None:
        """Remove rows ``start`` up to (not including) ``end``."""

        if start >= end:
            return
        del self._lines[start:end]
        if not self._lines:
            self._lines.append(Line(0, ""))
        self.renumber(start)
        self.version += 1

    def renumber(self, start: int = 0) -> None:
        for row in range(max(0, start), len(self._lines)):
            self._lines[row] = self._lines[row].with_position(row)

    def to_text(self) -> str:
        return LINE_SEPARATOR.join(line.text for line in self._lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineDocument):
            return NotImplemented
        return self._lines == other._lines


__all__ = ["LineDocument", "LINE_SEPARATOR"]
