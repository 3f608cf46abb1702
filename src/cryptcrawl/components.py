"""Component types stored in the world's tables.

Components are plain data. Entities are ints handed out by ``World.spawn``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass
class Name:
    name: str


@dataclass
class Position:
    x: int
    y: int


@dataclass
class CombatStats:
    max_hp: int
    hp: int
    defense: int
    power: int


@dataclass
class MeleePowerBonus:
    """Attack bonus granted by an item while it is equipped."""
    power: int


@dataclass
class DefenseBonus:
    """Defense bonus granted by an item while it is equipped."""
    defense: int


@dataclass
class Equipped:
    """Attached to an item entity; ``owner`` is the entity wearing it."""
    owner: int


class HungerState(Enum):
    WELL_FED = "well_fed"
    NORMAL = "normal"
    HUNGRY = "hungry"
    STARVING = "starving"


@dataclass
class HungerClock:
    state: HungerState = HungerState.NORMAL
    duration: int = 0


@dataclass
class WantsToMelee:
    """One attack intent for this turn, keyed by the attacking entity."""
    target: int


@dataclass
class SufferDamage:
    """Pending damage for one entity; drained by the damage step."""

    amounts: List[int] = field(default_factory=list)
