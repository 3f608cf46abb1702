from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned room rectangle spanning the corner lines (x1, y1) to (x2, y2).

    Generation carves the cells strictly right of x1 and below y1, up to and
    including x2 and y2.
    """

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def center(self) -> Tuple[int, int]:
        return ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: "Rect") -> bool:
        # Inclusive on both ends: rooms sharing a corner line overlap.
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self):
        """Yield the (x, y) cells carved for this room."""
        for y in range(self.y1 + 1, self.y2 + 1):
            for x in range(self.x1 + 1, self.x2 + 1):
                yield x, y
