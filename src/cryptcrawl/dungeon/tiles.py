from enum import Enum


class TileType(Enum):
    """Basic dungeon tile types.

    - WALL: Non-walkable, opaque obstacle
    - FLOOR: Walkable open tile
    - DOWN_STAIRS: Walkable tile that leads to the next depth
    """

    WALL = 0
    FLOOR = 1
    DOWN_STAIRS = 2

    @property
    def is_walkable(self) -> bool:
        return self is not TileType.WALL

    @property
    def is_opaque(self) -> bool:
        return self is TileType.WALL
