from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

POW_GLYPH = "☼"
POW_FG: RGB = (255, 165, 0)
DEFAULT_BG: RGB = (0, 0, 0)
HIT_LIFETIME_MS = 200.0


@dataclass(frozen=True)
class ParticleRequest:
    x: int
    y: int
    fg: RGB
    bg: RGB
    glyph: str
    lifetime_ms: float


class ParticleBuilder:
    """Queue of short-lived cosmetic effects for the renderer to spawn."""

    def __init__(self) -> None:
        self.requests: List[ParticleRequest] = []

    def request(self, x: int, y: int, fg: RGB, bg: RGB, glyph: str, lifetime_ms: float) -> None:
        if lifetime_ms <= 0:
            raise ValueError("lifetime_ms must be positive")
        self.requests.append(ParticleRequest(x, y, fg, bg, glyph, lifetime_ms))
        logger.debug("Particle %r requested at (%d,%d) for %.0fms", glyph, x, y, lifetime_ms)

    def drain(self) -> List[ParticleRequest]:
        """Hand every queued request to the caller and empty the queue."""
        out, self.requests = self.requests, []
        return out
