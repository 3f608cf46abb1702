"""
Dungeon levels: tile map, rooms-and-corridors generation, adjacency queries
and movement helpers.
"""
from .tiles import TileType
from .rect import Rect
from .map import Map
from .generator import RoomsGenerator, build_level, generate

__all__ = ["TileType", "Rect", "Map", "RoomsGenerator", "build_level", "generate"]
