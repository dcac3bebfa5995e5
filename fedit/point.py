"""Positions inside a text buffer."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering


@total_ordering
@dataclass(frozen=True)
class Point:
    """A column/row position; ordered by row first, then column."""

    x: int
    y: int

    @staticmethod
    def zero() -> Point:
        """Return the origin of the buffer."""
        return Point(0, 0)

    def _key(self) -> tuple[int, int]:
        return (self.y, self.x)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._key() < other._key()