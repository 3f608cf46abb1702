from __future__ import annotations

import hashlib
import json
import logging
import random
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

logger = logging.getLogger(__name__)

SeedLike = Union[int, str, bytes]


def _to_stable_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _canonicalize_seed(seed: SeedLike) -> bytes:
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, int):
        if seed < 0:
            # sign marker keeps -n distinct from n
            return b"-" + _canonicalize_seed(-seed)
        length = (seed.bit_length() + 7) // 8 or 1
        return seed.to_bytes(length, "big", signed=False)
    if isinstance(seed, str):
        return seed.strip().encode("utf-8")
    raise TypeError("Unsupported seed type: %r" % (type(seed),))


def derive_seed(master_seed: SeedLike, domain: str, *identifiers: Any) -> int:
    """Derive a 64-bit integer seed from a master seed and domain identifiers.

    The same (master_seed, domain, identifiers) always yields the same seed,
    so a level can be rebuilt from the run seed and its depth alone.
    """
    payload = {
        "domain": domain,
        "ids": identifiers,
        "master": _canonicalize_seed(master_seed).hex(),
        "algo": "blake2b-64",
    }
    data = _to_stable_json(payload).encode("utf-8")
    h = hashlib.blake2b(data, digest_size=8)
    seed_int = int.from_bytes(h.digest(), "big", signed=False)
    logger.debug("Derived seed for domain=%s ids=%s -> %d", domain, identifiers, seed_int)
    return seed_int


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - centralize RNG handling
    - support optional deterministic seeding for tests
    - offer the half-open ``range`` draw the generator is written against
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def range(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi). Raises ValueError when the range is empty."""
        if hi <= lo:
            raise ValueError(f"RandomSource.range() needs lo < hi, got [{lo}, {hi})")
        return self._rng.randrange(lo, hi)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def random(self) -> float:
        return self._rng.random()

    def roll_dice(self, n: int, sides: int) -> int:
        if n < 0 or sides < 1:
            raise ValueError(f"Invalid dice expression {n}d{sides}")
        return sum(self._rng.randint(1, sides) for _ in range(n))

    def choice(self, seq: Iterable[Any]) -> Any:
        seq_list = list(seq)
        if not seq_list:
            raise ValueError("RandomSource.choice() received an empty sequence")
        return seq_list[self._rng.randrange(0, len(seq_list))]

    @classmethod
    def for_depth(cls, master_seed: SeedLike, depth: int) -> "RandomSource":
        """RNG for the layout of one dungeon depth, derived from the run seed."""
        return cls(derive_seed(master_seed, "level_layout", depth))
