from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Type, TypeVar

from ..exceptions import UndeclaredComponentAccess
from .world import World

logger = logging.getLogger(__name__)

C = TypeVar("C")


class SystemView:
    """Access to the world limited to the tables a system declared.

    Tables in ``writes`` may be mutated; tables in ``reads`` come back as
    read-only mappings. A view is handed to one system for one run and closed
    afterwards, after which every access raises.
    """

    def __init__(self, world: World, reads: Iterable[type] = (), writes: Iterable[type] = (), owner: str = "system") -> None:
        self._world = world
        self._writes: FrozenSet[type] = frozenset(writes)
        self._reads: FrozenSet[type] = frozenset(reads) | self._writes
        self._owner = owner
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def _check(self, comp_type: type, write: bool) -> None:
        if self._closed:
            raise UndeclaredComponentAccess(f"{self._owner}: view used after its run finished")
        allowed = self._writes if write else self._reads
        if comp_type not in allowed:
            mode = "write" if write else "read"
            raise UndeclaredComponentAccess(f"{self._owner} did not declare {mode} access to {comp_type.__name__}")

    def read(self, comp_type: Type[C]) -> Mapping[int, C]:
        self._check(comp_type, write=False)
        return MappingProxyType(self._world.table(comp_type))

    def write(self, comp_type: Type[C]) -> Dict[int, C]:
        self._check(comp_type, write=True)
        return self._world.table(comp_type)

    def get(self, eid: int, comp_type: Type[C]) -> Optional[C]:
        return self.read(comp_type).get(eid)

    def add(self, eid: int, comp: Any) -> None:
        self._check(type(comp), write=True)
        self._world.add(eid, comp)

    def query(self, *types: type) -> Iterator[tuple]:
        for t in types:
            self._check(t, write=False)
        return self._world.query(*types)
