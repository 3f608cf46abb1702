"""Glyph lookup for the renderer.

Walls pick a box-drawing glyph from the revealed walls around them, so the
renderer never has to know the layout rules. Colour choice stays with the
renderer.
"""
from __future__ import annotations

import logging
from typing import Dict

from .map import Map
from .tiles import TileType

logger = logging.getLogger(__name__)

BORDER_WALL_GLYPH = "#"
FLOOR_GLYPH = "."
STAIRS_GLYPH = "»"
UNREVEALED_GLYPH = " "

WALL_NORTH = 1
WALL_SOUTH = 2
WALL_WEST = 4
WALL_EAST = 8

# Bit mask of revealed wall neighbours (N=1, S=2, W=4, E=8) -> glyph.
WALL_GLYPHS: Dict[int, str] = {
    0: "○",   # pillar
    1: "╨",
    2: "╥",
    3: "║",
    4: "╡",
    5: "╝",
    6: "╗",
    7: "╣",
    8: "╞",
    9: "╚",
    10: "╔",
    11: "╠",
    12: "═",
    13: "╩",
    14: "╦",
    15: "╬",
}


def _is_revealed_wall(dmap: Map, x: int, y: int) -> bool:
    idx = dmap.xy_idx(x, y)
    return dmap.tiles[idx] is TileType.WALL and dmap.revealed[idx]


def wall_mask(dmap: Map, x: int, y: int) -> int:
    """Bit mask of revealed walls to the north, south, west and east of (x, y)."""
    mask = 0
    if _is_revealed_wall(dmap, x, y - 1):
        mask |= WALL_NORTH
    if _is_revealed_wall(dmap, x, y + 1):
        mask |= WALL_SOUTH
    if _is_revealed_wall(dmap, x - 1, y):
        mask |= WALL_WEST
    if _is_revealed_wall(dmap, x + 1, y):
        mask |= WALL_EAST
    return mask


def wall_glyph(dmap: Map, x: int, y: int) -> str:
    if x < 1 or x > dmap.width - 2 or y < 1 or y > dmap.height - 2:
        return BORDER_WALL_GLYPH
    mask = wall_mask(dmap, x, y)
    glyph = WALL_GLYPHS.get(mask)
    if glyph is None:
        logger.error("No wall glyph for mask %d at (%d,%d)", mask, x, y)
        raise ValueError(f"Wall mask {mask} out of range at ({x},{y})")
    return glyph


def tile_glyph(dmap: Map, x: int, y: int) -> str:
    """Glyph for one tile as the player knows it; unrevealed tiles are blank."""
    idx = dmap.xy_idx(x, y)
    if not dmap.revealed[idx]:
        return UNREVEALED_GLYPH
    tile = dmap.tiles[idx]
    if tile is TileType.WALL:
        return wall_glyph(dmap, x, y)
    if tile is TileType.DOWN_STAIRS:
        return STAIRS_GLYPH
    return FLOOR_GLYPH
