"""
Component tables keyed by entity id.

Entities are ints. Each component type gets its own table (a dict from
entity id to component), so a system works on whole tables rather than on
entity objects.

    w = World()
    e = w.spawn()
    w.add(e, Position(5, 3))
    w.add(e, CombatStats(max_hp=30, hp=30, defense=2, power=5))

    for eid, pos, stats in w.query(Position, CombatStats):
        ...
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")


class World:
    def __init__(self) -> None:
        self._next_id = 0
        self._tables: Dict[type, Dict[int, Any]] = {}
        self._alive: set[int] = set()

    # -- Entities --

    def spawn(self, *components: Any) -> int:
        self._next_id += 1
        eid = self._next_id
        self._alive.add(eid)
        for comp in components:
            self.add(eid, comp)
        return eid

    def despawn(self, eid: int) -> None:
        """Remove an entity and all of its components."""
        for table in self._tables.values():
            table.pop(eid, None)
        self._alive.discard(eid)

    def alive(self, eid: int) -> bool:
        return eid in self._alive

    def entities(self) -> List[int]:
        return sorted(self._alive)

    # -- Components --

    def add(self, eid: int, comp: Any) -> None:
        if eid not in self._alive:
            raise KeyError(f"Entity {eid} does not exist")
        self.table(type(comp))[eid] = comp

    def get(self, eid: int, comp_type: Type[C]) -> Optional[C]:
        return self._tables.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._tables.get(comp_type, {})

    def remove(self, eid: int, comp_type: type) -> None:
        table = self._tables.get(comp_type)
        if table and eid in table:
            del table[eid]

    def table(self, comp_type: Type[C]) -> Dict[int, C]:
        """The live table for ``comp_type``, created empty on first use."""
        return self._tables.setdefault(comp_type, {})

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for entities that have ALL types.

        Entities come out in the order they were added to the first table.
        """
        if not types:
            return
        tables = [self._tables.get(t, {}) for t in types]
        for eid in list(tables[0]):
            if all(eid in t for t in tables):
                yield (eid, *(t[eid] for t in tables))

    def count(self, comp_type: type) -> int:
        return len(self._tables.get(comp_type, {}))
