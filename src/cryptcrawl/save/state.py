from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from ..dungeon.tiles import TileType

if TYPE_CHECKING:
    from ..dungeon.map import Map

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class MapState(BaseModel):
    """Persisted form of one level.

    The per-tile occupant index is deliberately absent: it is rebuilt by the
    first turn after loading.
    """

    schema_version: int = Field(SCHEMA_VERSION, description="Layout version of this record")
    width: int = Field(..., gt=2)
    height: int = Field(..., gt=2)
    depth: int = Field(1, ge=1)
    tiles: List[str] = Field(..., description="TileType names in y * width + x order")
    rooms: List[Tuple[int, int, int, int]] = Field(default_factory=list, description="(x1, y1, x2, y2) in generation order")
    revealed: List[bool]
    visible: List[bool]
    blocked: List[bool]
    bloodstains: List[int] = Field(default_factory=list)

    @field_validator("tiles")
    @classmethod
    def known_tiles(cls, v: List[str]) -> List[str]:
        unknown = sorted({name for name in v if name not in TileType.__members__})
        if unknown:
            raise ValueError(f"Unknown tile types: {unknown}")
        return v

    @field_validator("schema_version")
    @classmethod
    def supported_version(cls, v: int) -> int:
        if v != SCHEMA_VERSION:
            raise ValueError(f"Unsupported map schema version {v}")
        return v

    @model_validator(mode="after")
    def consistent_lengths(self) -> "MapState":
        count = self.width * self.height
        for field_name in ("tiles", "revealed", "visible", "blocked"):
            if len(getattr(self, field_name)) != count:
                raise ValueError(f"{field_name} has {len(getattr(self, field_name))} entries, expected {count}")
        bad = [i for i in self.bloodstains if not 0 <= i < count]
        if bad:
            raise ValueError(f"Bloodstain indices out of range: {bad}")
        return self

    @classmethod
    def from_map(cls, dmap: "Map") -> "MapState":
        state = cls(
            width=dmap.width,
            height=dmap.height,
            depth=dmap.depth,
            tiles=[t.name for t in dmap.tiles],
            rooms=[(r.x1, r.y1, r.x2, r.y2) for r in dmap.rooms],
            revealed=list(dmap.revealed),
            visible=list(dmap.visible),
            blocked=list(dmap.blocked),
            bloodstains=sorted(dmap.bloodstains),
        )
        logger.debug("Captured state for depth %d (%dx%d)", dmap.depth, dmap.width, dmap.height)
        return state
