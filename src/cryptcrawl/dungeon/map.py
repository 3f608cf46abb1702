from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Iterable, List, Optional, Set, Tuple

from ..exceptions import OutOfBoundsIndex
from .rect import Rect
from .tiles import TileType

if TYPE_CHECKING:
    from ..save.state import MapState

logger = logging.getLogger(__name__)

CARDINAL_COST = 1.0
DIAGONAL_COST = 1.45

Exit = Tuple[int, float]


class Map:
    """
    One dungeon level: a flat tile list indexed by ``y * width + x`` plus the
    per-tile state other systems read every turn.

    - ``revealed``: tiles ever seen; only ever goes from False to True.
    - ``visible``: tiles seen this turn; rewritten by the visibility system.
    - ``blocked``: derived from tiles by ``populate_blocked``.
    - ``tile_content``: entity ids standing on each tile; rebuilt every turn and
      never persisted.

    The adjacency queries (``dimensions``, ``is_opaque``, ``pathing_distance``,
    ``available_exits``) are the surface external pathfinding and field-of-view
    code works against.
    """

    def __init__(self, width: int, height: int, depth: int = 1, default: TileType = TileType.WALL) -> None:
        if width < 3 or height < 3:
            raise ValueError("Map must be at least 3x3 to maintain wall borders")
        self.width = width
        self.height = height
        self.depth = depth
        count = width * height
        self.tiles: List[TileType] = [default] * count
        self.rooms: List[Rect] = []
        self.revealed: List[bool] = [False] * count
        self.visible: List[bool] = [False] * count
        self.blocked: List[bool] = [False] * count
        self.bloodstains: Set[int] = set()
        self.tile_content: List[List[int]] = [[] for _ in range(count)]

    def __len__(self) -> int:
        return self.width * self.height

    def __repr__(self) -> str:
        return f"Map({self.width}x{self.height}, depth={self.depth}, rooms={len(self.rooms)})"

    # ---- Indexing --------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def xy_idx(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise OutOfBoundsIndex(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return y * self.width + x

    def idx_xy(self, idx: int) -> Tuple[int, int]:
        self._check_idx(idx)
        return idx % self.width, idx // self.width

    def _check_idx(self, idx: int) -> None:
        if not 0 <= idx < len(self):
            raise OutOfBoundsIndex(f"Tile index {idx} not in [0,{len(self)})")

    def tile_at(self, x: int, y: int) -> TileType:
        return self.tiles[self.xy_idx(x, y)]

    # ---- Carving ---------------------------------------------------------
    def set_tile(self, x: int, y: int, t: TileType) -> None:
        if not self.in_bounds(x, y):
            # Generation never writes outside the grid; a write here means an
            # upstream bounds bug, so it is reported rather than applied.
            logger.error("Attempt to write out-of-bounds tile at (%d,%d)", x, y)
            return
        self.tiles[y * self.width + x] = t

    def apply_room(self, room: Rect) -> None:
        for x, y in room.interior():
            self.set_tile(x, y, TileType.FLOOR)

    def apply_horizontal_tunnel(self, x1: int, x2: int, y: int) -> None:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            self.set_tile(x, y, TileType.FLOOR)

    def apply_vertical_tunnel(self, y1: int, y2: int, x: int) -> None:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            self.set_tile(x, y, TileType.FLOOR)

    # ---- Per-turn state --------------------------------------------------
    def populate_blocked(self) -> None:
        """Recompute ``blocked`` from the tiles. Run after any tile change."""
        for i, tile in enumerate(self.tiles):
            self.blocked[i] = not tile.is_walkable

    def clear_content_index(self) -> None:
        """Empty every tile's occupant list. Run at the start of each turn."""
        for content in self.tile_content:
            content.clear()

    def add_content(self, idx: int, entity: int) -> None:
        self._check_idx(idx)
        self.tile_content[idx].append(entity)

    def content_at(self, idx: int) -> List[int]:
        self._check_idx(idx)
        return list(self.tile_content[idx])

    def reveal(self, idx: int) -> None:
        self._check_idx(idx)
        self.revealed[idx] = True

    def apply_viewshed(self, indices: Iterable[int]) -> None:
        """Replace this turn's visible set and fold it into ``revealed``."""
        seen = list(indices)
        for idx in seen:
            self._check_idx(idx)
        for i in range(len(self)):
            self.visible[i] = False
        for idx in seen:
            self.visible[idx] = True
            self.revealed[idx] = True
        logger.debug("Viewshed applied: %d visible tiles", len(seen))

    def add_bloodstain(self, idx: int) -> None:
        self._check_idx(idx)
        self.bloodstains.add(idx)

    # ---- Adjacency -------------------------------------------------------
    def dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def is_opaque(self, idx: int) -> bool:
        self._check_idx(idx)
        return self.tiles[idx].is_opaque

    def pathing_distance(self, idx1: int, idx2: int) -> float:
        x1, y1 = self.idx_xy(idx1)
        x2, y2 = self.idx_xy(idx2)
        return math.hypot(x1 - x2, y1 - y2)

    def is_exit_valid(self, x: int, y: int) -> bool:
        if x < 1 or x > self.width - 2 or y < 1 or y > self.height - 2:
            return False
        return not self.blocked[y * self.width + x]

    def available_exits(self, idx: int) -> List[Exit]:
        x, y = self.idx_xy(idx)
        w = self.width
        exits: List[Exit] = []

        # Cardinal directions
        if self.is_exit_valid(x - 1, y):
            exits.append((idx - 1, CARDINAL_COST))
        if self.is_exit_valid(x + 1, y):
            exits.append((idx + 1, CARDINAL_COST))
        if self.is_exit_valid(x, y - 1):
            exits.append((idx - w, CARDINAL_COST))
        if self.is_exit_valid(x, y + 1):
            exits.append((idx + w, CARDINAL_COST))

        # Diagonals
        if self.is_exit_valid(x - 1, y - 1):
            exits.append((idx - w - 1, DIAGONAL_COST))
        if self.is_exit_valid(x + 1, y - 1):
            exits.append((idx - w + 1, DIAGONAL_COST))
        if self.is_exit_valid(x - 1, y + 1):
            exits.append((idx + w - 1, DIAGONAL_COST))
        if self.is_exit_valid(x + 1, y + 1):
            exits.append((idx + w + 1, DIAGONAL_COST))

        return exits

    # ---- Export ----------------------------------------------------------
    def stairs_position(self) -> Optional[Tuple[int, int]]:
        for i, tile in enumerate(self.tiles):
            if tile is TileType.DOWN_STAIRS:
                return self.idx_xy(i)
        return None

    def to_str_lines(self) -> List[str]:
        symbol = {TileType.WALL: "#", TileType.FLOOR: ".", TileType.DOWN_STAIRS: ">"}
        return [
            "".join(symbol[self.tiles[y * self.width + x]] for x in range(self.width))
            for y in range(self.height)
        ]

    def snapshot(self) -> Tuple[int, ...]:
        """Hashable snapshot of the tiles for equality tests."""
        return tuple(t.value for t in self.tiles)

    def to_state(self) -> "MapState":
        from ..save.state import MapState

        return MapState.from_map(self)

    @classmethod
    def from_state(cls, state: "MapState") -> "Map":
        """Rebuild a level from persisted state. The occupant index starts empty."""
        m = cls(state.width, state.height, depth=state.depth)
        m.tiles = [TileType[name] for name in state.tiles]
        m.rooms = [Rect(*r) for r in state.rooms]
        m.revealed = list(state.revealed)
        m.visible = list(state.visible)
        m.blocked = list(state.blocked)
        m.bloodstains = set(state.bloodstains)
        return m
