from __future__ import annotations

import logging
from typing import List

logger = logging.getLogger(__name__)


class GameLog:
    """Player-facing message log.

    Keeps a finite history (capacity) and drops the oldest entries past it.
    """

    def __init__(self, capacity: int = 200) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self.entries: List[str] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self.entries)

    def add(self, message: str) -> None:
        self.entries.append(message)
        if len(self.entries) > self._capacity:
            dropped = len(self.entries) - self._capacity
            del self.entries[0:dropped]
        logger.debug("Game log: %s", message)

    def get_recent(self, n: int) -> List[str]:
        if n <= 0:
            return []
        return self.entries[-n:]

    def clear(self) -> None:
        self.entries.clear()
