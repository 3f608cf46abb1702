from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..combat.particles import ParticleBuilder
from ..dungeon.map import Map
from ..ecs import SystemView, World
from ..exceptions import MissingRequiredComponent, PipelineOrderError
from ..gamelog import GameLog
from ..settings import DebugSettings

logger = logging.getLogger(__name__)


@dataclass
class TurnContext:
    """Everything a turn's systems share, passed explicitly through the pipeline."""

    world: World
    map: Map
    log: GameLog = field(default_factory=GameLog)
    particles: ParticleBuilder = field(default_factory=ParticleBuilder)
    debug: DebugSettings = field(default_factory=DebugSettings)
    player: Optional[int] = None
    turn: int = 0

    def missing_component(self, message: str) -> None:
        """Report a broken entity invariant.

        Fatal when ``debug.strict_invariants`` is set; otherwise logged so the
        caller can skip the entity.
        """
        if self.debug.strict_invariants:
            raise MissingRequiredComponent(message)
        logger.error("Invariant violation (skipped): %s", message)


class System:
    """One step of the turn pipeline.

    Subclasses declare the component tables they touch. ``consumes`` lists
    tables the system empties when it finishes, so anything writing them must
    run earlier in the same turn.
    """

    name = "system"
    reads: Tuple[type, ...] = ()
    writes: Tuple[type, ...] = ()
    consumes: Tuple[type, ...] = ()

    def run(self, ctx: TurnContext, view: SystemView) -> None:  # pragma: no cover - abstract
        raise NotImplementedError


class TurnPipeline:
    """Runs systems one after another, each with a view scoped to its declarations.

    A turn has no rollback: if a system raises, the error is logged and
    propagates, and the turn is abandoned where it stopped.
    """

    def __init__(self, systems: Sequence[System]) -> None:
        self.systems: List[System] = list(systems)
        self._validate_order()

    def _validate_order(self) -> None:
        for i, consumer in enumerate(self.systems):
            for table in consumer.consumes:
                if table not in consumer.writes:
                    raise PipelineOrderError(
                        f"{consumer.name} consumes {table.__name__} without declaring write access"
                    )
                for later in self.systems[i + 1:]:
                    if table in later.writes and table not in later.consumes:
                        raise PipelineOrderError(
                            f"{later.name} writes {table.__name__} after {consumer.name} consumed it"
                        )

    def run(self, ctx: TurnContext) -> None:
        ctx.turn += 1
        logger.debug("Turn %d starting (%d systems)", ctx.turn, len(self.systems))
        for system in self.systems:
            view = SystemView(ctx.world, reads=system.reads, writes=system.writes, owner=system.name)
            try:
                system.run(ctx, view)
            except Exception:
                logger.exception("Turn %d aborted in %s", ctx.turn, system.name)
                raise
            finally:
                view.close()
