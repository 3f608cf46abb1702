from __future__ import annotations

from dataclasses import dataclass

from ..components import Position
from .map import Map


@dataclass
class MoveResult:
    new_pos: Position
    moved: bool


def try_move_player(dmap: Map, pos: Position, dx: int, dy: int) -> MoveResult:
    """
    Attempt to move from pos by (dx, dy). The destination is clamped to the
    grid before it is turned into an index, so edge moves never index outside
    the map. Moving into a wall leaves the position unchanged.
    """
    target_x = min(dmap.width - 1, max(0, pos.x + dx))
    target_y = min(dmap.height - 1, max(0, pos.y + dy))
    if (target_x, target_y) == (pos.x, pos.y):
        return MoveResult(new_pos=pos, moved=False)
    if not dmap.tiles[dmap.xy_idx(target_x, target_y)].is_walkable:
        return MoveResult(new_pos=pos, moved=False)
    return MoveResult(new_pos=Position(target_x, target_y), moved=True)
