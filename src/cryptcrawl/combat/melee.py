from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..components import (
    CombatStats,
    DefenseBonus,
    Equipped,
    HungerClock,
    HungerState,
    MeleePowerBonus,
    Name,
    Position,
    SufferDamage,
    WantsToMelee,
)
from ..ecs import SystemView
from ..engine.turn import System, TurnContext
from .particles import DEFAULT_BG, HIT_LIFETIME_MS, POW_FG, POW_GLYPH

logger = logging.getLogger(__name__)

WELL_FED_BONUS = 1


@dataclass(frozen=True)
class MeleeOutcome:
    """Result of one resolved attack.

    Attributes:
        offensive_bonus: Sum of equipped power bonuses plus the well-fed bonus.
        defensive_bonus: Sum of the target's equipped defense bonuses.
        damage: Damage queued on the target (0 when the blow glances off).
        message: The line written to the game log.
    """

    attacker: int
    target: int
    offensive_bonus: int
    defensive_bonus: int
    damage: int
    message: str


def equipped_power_bonus(view: SystemView, owner: int) -> int:
    equipped = view.read(Equipped)
    return sum(
        bonus.power
        for item, bonus in view.read(MeleePowerBonus).items()
        if item in equipped and equipped[item].owner == owner
    )


def equipped_defense_bonus(view: SystemView, owner: int) -> int:
    equipped = view.read(Equipped)
    return sum(
        bonus.defense
        for item, bonus in view.read(DefenseBonus).items()
        if item in equipped and equipped[item].owner == owner
    )


def compute_damage(power: int, offensive_bonus: int, defense: int, defensive_bonus: int) -> int:
    return max(0, (power + offensive_bonus) - (defense + defensive_bonus))


def queue_damage(view: SystemView, victim: int, amount: int) -> None:
    """Add ``amount`` to the victim's pending damage, creating the entry if needed."""
    pending = view.write(SufferDamage)
    if victim in pending:
        pending[victim].amounts.append(amount)
    else:
        pending[victim] = SufferDamage([amount])


def resolve_melee(ctx: TurnContext, view: SystemView, attacker: int, target: int) -> Optional[MeleeOutcome]:
    """Resolve one attack of ``attacker`` on ``target``.

    Returns None when the attack does not happen: either side is already
    down, or (outside strict mode) an entity is missing its stats or name.
    """
    stats = view.get(attacker, CombatStats)
    target_stats = view.get(target, CombatStats)
    name = view.get(attacker, Name)
    target_name = view.get(target, Name)
    for eid, comp, label in (
        (attacker, stats, "CombatStats"),
        (attacker, name, "Name"),
        (target, target_stats, "CombatStats"),
        (target, target_name, "Name"),
    ):
        if comp is None:
            ctx.missing_component(f"melee: entity {eid} has no {label}")
            return None

    if stats.hp <= 0 or target_stats.hp <= 0:
        logger.debug("Melee %d -> %d skipped: a combatant is already down", attacker, target)
        return None

    offensive_bonus = equipped_power_bonus(view, attacker)
    hunger = view.get(attacker, HungerClock)
    if hunger is not None and hunger.state is HungerState.WELL_FED:
        offensive_bonus += WELL_FED_BONUS
    defensive_bonus = equipped_defense_bonus(view, target)

    pos = view.get(target, Position)
    if pos is not None:
        ctx.particles.request(pos.x, pos.y, POW_FG, DEFAULT_BG, POW_GLYPH, HIT_LIFETIME_MS)

    damage = compute_damage(stats.power, offensive_bonus, target_stats.defense, defensive_bonus)
    if damage == 0:
        message = f"{name.name} is unable to hurt {target_name.name}"
    else:
        message = f"{name.name} hits {target_name.name}, for {damage} hp."
        queue_damage(view, target, damage)
    ctx.log.add(message)
    logger.debug(
        "Melee %d -> %d: power %d%+d vs defense %d%+d = %d",
        attacker,
        target,
        stats.power,
        offensive_bonus,
        target_stats.defense,
        defensive_bonus,
        damage,
    )
    return MeleeOutcome(attacker, target, offensive_bonus, defensive_bonus, damage, message)


class MeleeCombatSystem(System):
    """Turns this turn's melee intents into log lines, particles and pending damage.

    Intents are handled in the order they were queued and the intent table is
    emptied afterwards whatever happened, so no intent is ever handled twice.
    Hit points are not touched here.
    """

    name = "melee_combat"
    reads = (
        Name,
        CombatStats,
        MeleePowerBonus,
        DefenseBonus,
        Equipped,
        HungerClock,
        Position,
    )
    writes = (WantsToMelee, SufferDamage)
    consumes = (WantsToMelee,)

    def run(self, ctx: TurnContext, view: SystemView) -> None:
        intents = view.write(WantsToMelee)
        try:
            for attacker, intent in list(intents.items()):
                resolve_melee(ctx, view, attacker, intent.target)
        finally:
            if intents:
                logger.debug("Clearing %d melee intents", len(intents))
            intents.clear()
