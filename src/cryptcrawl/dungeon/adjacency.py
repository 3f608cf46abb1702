from __future__ import annotations

import logging
from collections import deque
from typing import List, Protocol, Set, Tuple

logger = logging.getLogger(__name__)


class BaseMap(Protocol):
    """What pathfinding and field-of-view code may ask of a level.

    ``Map`` satisfies this protocol; search and visibility algorithms live
    outside this package and depend on nothing else.
    """

    def dimensions(self) -> Tuple[int, int]:  # pragma: no cover - Protocol
        ...

    def is_opaque(self, idx: int) -> bool:  # pragma: no cover - Protocol
        ...

    def pathing_distance(self, idx1: int, idx2: int) -> float:  # pragma: no cover - Protocol
        ...

    def available_exits(self, idx: int) -> List[Tuple[int, float]]:  # pragma: no cover - Protocol
        ...


def reachable_indices(grid: BaseMap, start: int) -> Set[int]:
    """Return every index reachable from ``start`` by following exits, ``start`` included."""
    seen = {start}
    q = deque([start])
    while q:
        idx = q.popleft()
        for nxt, _cost in grid.available_exits(idx):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    logger.debug("Flood fill from %d reached %d tiles", start, len(seen))
    return seen
