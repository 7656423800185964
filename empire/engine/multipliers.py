"""Multiplier aggregation — folds upgrades + prestige into four rates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from empire.data.balance import BALANCE
from empire.data.upgrades import ALL_UPGRADES, UpgradeDef, UpgradeEffect
from empire.engine.game_state import GameState


@dataclass(frozen=True)
class Multipliers:
    income_mult: float = 1.0
    speed_mult: float = 1.0
    cost_reduction: float = 1.0
    click_power: float = 1.0


def compute_multipliers(
    upgrades: Mapping[str, int],
    prestige_multiplier: float,
    catalog: Mapping[str, UpgradeDef] = ALL_UPGRADES,
) -> Multipliers:
    """Aggregate every owned upgrade (standard + legacy) into effective rates.

    Additive bonuses combine first; prestige-bonus upgrades then scale the
    total income multiplier.  Pure: the same inputs always give the same
    result.
    """
    income = prestige_multiplier
    speed = 1.0
    cost = 1.0
    click = 1.0
    prestige_scale = 1.0

    for uid, udef in catalog.items():
        level = upgrades.get(uid, 0)
        if level <= 0:
            continue
        v = udef.value_per_level
        if udef.effect == UpgradeEffect.INCOME_MULT:
            income += v * level
        elif udef.effect == UpgradeEffect.SPEED_MULT:
            speed += v * level
        elif udef.effect == UpgradeEffect.CLICK_POWER:
            click += v * level
        elif udef.effect == UpgradeEffect.COST_REDUCTION:
            # A discount of 100% or more would zero the price entirely
            cost *= max(0.0, 1.0 - v) ** level
        elif udef.effect == UpgradeEffect.PRESTIGE_BONUS:
            prestige_scale *= 1.0 + v * level

    bal = BALANCE.economy
    return Multipliers(
        income_mult=income * prestige_scale,
        speed_mult=max(speed, bal.min_speed_mult),
        cost_reduction=min(1.0, max(cost, bal.min_cost_reduction)),
        click_power=click,
    )


def multipliers_for(state: GameState) -> Multipliers:
    """Shortcut: rates for a game state."""
    return compute_multipliers(state.upgrades, state.prestige_multiplier)
