from __future__ import annotations

import logging
from typing import Callable, Iterable

from ..components import Position
from ..dungeon.adjacency import BaseMap
from ..ecs import SystemView
from ..engine.turn import System, TurnContext

logger = logging.getLogger(__name__)

# Field-of-view algorithm supplied by the caller: (map, origin) -> visible indices.
ViewshedProvider = Callable[[BaseMap, Position], Iterable[int]]


class VisibilitySystem(System):
    """Recomputes what the player sees this turn.

    The field-of-view algorithm is injected; this system only stores its
    result, clearing last turn's ``visible`` and adding to ``revealed``.
    """

    name = "visibility"
    reads = (Position,)

    def __init__(self, viewshed: ViewshedProvider) -> None:
        self.viewshed = viewshed

    def run(self, ctx: TurnContext, view: SystemView) -> None:
        if ctx.player is None:
            logger.debug("No player entity; visibility unchanged")
            return
        pos = view.get(ctx.player, Position)
        if pos is None:
            ctx.missing_component(f"visibility: player {ctx.player} has no Position")
            return
        ctx.map.apply_viewshed(self.viewshed(ctx.map, pos))
