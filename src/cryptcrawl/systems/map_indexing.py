from __future__ import annotations

import logging

from ..components import Position
from ..ecs import SystemView
from ..engine.turn import System, TurnContext

logger = logging.getLogger(__name__)


class MapIndexingSystem(System):
    """Rebuilds ``blocked`` and the per-tile occupant index.

    Must run first in the turn: movement and AI read both structures.
    """

    name = "map_indexing"
    reads = (Position,)

    def run(self, ctx: TurnContext, view: SystemView) -> None:
        dmap = ctx.map
        dmap.populate_blocked()
        dmap.clear_content_index()
        placed = 0
        for eid, pos in view.query(Position):
            dmap.add_content(dmap.xy_idx(pos.x, pos.y), eid)
            placed += 1
        logger.debug("Indexed %d entities on depth %d", placed, dmap.depth)
