from __future__ import annotations

import logging
from typing import Optional

from ..exceptions import MapGenerationFailed
from ..rng import RandomSource
from ..settings import GenerationSettings
from .map import Map
from .rect import Rect
from .tiles import TileType

logger = logging.getLogger(__name__)


class RoomsGenerator:
    """Rooms + corridors generator.

    Each attempt samples a room; rooms that intersect an accepted room are
    thrown away. Every accepted room after the first is joined to the one
    accepted just before it with an L-shaped corridor, so the whole level is
    one connected region. The stairs down sit at the centre of the last room.
    """

    def __init__(self, max_rooms: int = 30, min_size: int = 6, max_size: int = 10) -> None:
        self.max_rooms = max_rooms
        self.min_size = min_size
        self.max_size = max_size

    @classmethod
    def from_settings(cls, settings: GenerationSettings) -> "RoomsGenerator":
        return cls(max_rooms=settings.max_rooms, min_size=settings.min_size, max_size=settings.max_size)

    def _validate(self, depth: int, width: int, height: int) -> None:
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        if self.max_rooms < 0:
            raise ValueError("max_rooms must be >= 0")
        if self.min_size < 1:
            raise ValueError("min_size must be >= 1")
        if self.max_size <= self.min_size:
            raise ValueError("max_size must be greater than min_size")
        if width < self.max_size + 3 or height < self.max_size + 3:
            raise ValueError(f"Map {width}x{height} is too small for rooms up to {self.max_size} tiles")

    def generate(self, depth: int, width: int, height: int, rng: RandomSource) -> Map:
        self._validate(depth, width, height)
        dmap = Map(width, height, depth=depth)

        for attempt in range(self.max_rooms):
            w = rng.range(self.min_size, self.max_size)
            h = rng.range(self.min_size, self.max_size)
            x = rng.range(2, width - w - 1) - 1
            y = rng.range(2, height - h - 1) - 1
            new_room = Rect.from_size(x, y, w, h)

            if any(new_room.intersects(other) for other in dmap.rooms):
                logger.debug("Attempt %d: room %s rejected (overlap)", attempt, new_room)
                continue

            dmap.apply_room(new_room)
            if dmap.rooms:
                new_x, new_y = new_room.center()
                prev_x, prev_y = dmap.rooms[-1].center()
                if rng.range(0, 2) == 1:
                    dmap.apply_horizontal_tunnel(prev_x, new_x, prev_y)
                    dmap.apply_vertical_tunnel(prev_y, new_y, new_x)
                else:
                    dmap.apply_vertical_tunnel(prev_y, new_y, prev_x)
                    dmap.apply_horizontal_tunnel(prev_x, new_x, new_y)
            dmap.rooms.append(new_room)

        if not dmap.rooms:
            raise MapGenerationFailed(
                f"No room accepted after {self.max_rooms} attempts on a {width}x{height} map"
            )

        stairs_x, stairs_y = dmap.rooms[-1].center()
        dmap.tiles[dmap.xy_idx(stairs_x, stairs_y)] = TileType.DOWN_STAIRS
        dmap.populate_blocked()

        logger.info(
            "Generated depth %d: %d/%d rooms accepted, stairs at (%d,%d)",
            depth,
            len(dmap.rooms),
            self.max_rooms,
            stairs_x,
            stairs_y,
        )
        return dmap


def generate(
    depth: int,
    width: int,
    height: int,
    max_rooms: int,
    min_size: int,
    max_size: int,
    rng: RandomSource,
) -> Map:
    """Generate one level with the rooms-and-corridors algorithm."""
    return RoomsGenerator(max_rooms=max_rooms, min_size=min_size, max_size=max_size).generate(
        depth, width, height, rng
    )


def build_level(settings: GenerationSettings, depth: int, rng: Optional[RandomSource] = None) -> Map:
    """Build the level for ``depth``.

    Without an explicit RNG the layout seed is derived from ``settings.seed``
    and the depth, so revisiting a depth of a seeded run rebuilds the same map.
    """
    if rng is None:
        rng = RandomSource() if settings.seed is None else RandomSource.for_depth(settings.seed, depth)
    return RoomsGenerator.from_settings(settings).generate(depth, settings.width, settings.height, rng)
