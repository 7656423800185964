"""Economy engine — costs, purchases, rewards, and number formatting.

Every action here is a reducer: it reads the given state, works on a deep
copy, and returns an Outcome.  On rejection the input state comes back
untouched, so there is never a partial debit.
"""

from __future__ import annotations

import copy
import logging
import math
import random

from empire.data.balance import BALANCE
from empire.data.missions import ALL_MISSIONS
from empire.data.upgrades import ALL_UPGRADES, Currency
from empire.engine.effects import ActionError, Effect, EffectKind, Outcome, rejected
from empire.engine.game_state import Business, GameState, MissionState
from empire.engine.multipliers import multipliers_for
from empire.engine.production import income_per_second

logger = logging.getLogger(__name__)

_BALANCE_FIELDS = {
    Currency.MONEY: "money",
    Currency.GEMS: "gems",
    Currency.LEGACY: "legacy_points",
}


# ── Costs ────────────────────────────────────────────────────────


def get_business_cost(business: Business, count: int, cost_reduction: float = 1.0) -> float:
    """Cost of the next `count` levels of a business (geometric series).

    Returns inf when the price is beyond float range.
    """
    growth = BALANCE.economy.unit_cost_growth
    try:
        current = business.base_cost * (growth ** business.level)
        if count == 1:
            total = current
        else:
            total = current * (growth ** count - 1) / (growth - 1)
    except OverflowError:
        return math.inf
    return total * cost_reduction


def get_upgrade_cost(state: GameState, upgrade_id: str) -> float:
    """Calculate the current cost of the next level of an upgrade."""
    udef = ALL_UPGRADES[upgrade_id]
    return udef.cost_at_level(state.upgrades.get(upgrade_id, 0))


def balance_of(state: GameState, currency: Currency) -> float:
    return getattr(state, _BALANCE_FIELDS[currency])


def can_afford(state: GameState, currency: Currency, cost: float) -> bool:
    return balance_of(state, currency) >= cost


def _credit(state: GameState, currency: Currency, amount: float) -> None:
    field_name = _BALANCE_FIELDS[currency]
    setattr(state, field_name, getattr(state, field_name) + amount)


# ── Purchases ────────────────────────────────────────────────────


def buy_business(state: GameState, business_id: int, count: int = 1) -> Outcome:
    """Buy `count` levels of a business with money."""
    business = state.find_business(business_id)
    if business is None:
        logger.warning("buy_business: unknown business %r", business_id)
        return rejected(state, ActionError.INVALID_REFERENCE, f"business {business_id}")
    if count < 1:
        logger.warning("buy_business: invalid count %r for business %r", count, business_id)
        return rejected(state, ActionError.INVALID_REFERENCE, f"count {count}")

    cost = get_business_cost(business, count, multipliers_for(state).cost_reduction)
    if state.money < cost:
        return rejected(state, ActionError.INSUFFICIENT_FUNDS, "Not enough money!")

    new = copy.deepcopy(state)
    new.money = max(0.0, new.money - cost)
    target = new.find_business(business_id)
    assert target is not None
    target.level += count
    return Outcome(
        state=new,
        amount=cost,
        effects=[Effect(EffectKind.PURCHASED, cost, f"Upgraded {business.name}")],
    )


def hire_manager(state: GameState, business_id: int) -> Outcome:
    """Hire the (one-time) manager that automates a business."""
    business = state.find_business(business_id)
    if business is None:
        logger.warning("hire_manager: unknown business %r", business_id)
        return rejected(state, ActionError.INVALID_REFERENCE, f"business {business_id}")
    if business.has_manager:
        return rejected(state, ActionError.ALREADY_HIRED, f"{business.name} already has a manager")
    if state.money < business.manager_cost:
        return rejected(state, ActionError.INSUFFICIENT_FUNDS, "Not enough money!")

    new = copy.deepcopy(state)
    new.money = max(0.0, new.money - business.manager_cost)
    target = new.find_business(business_id)
    assert target is not None
    target.has_manager = True
    return Outcome(
        state=new,
        amount=business.manager_cost,
        effects=[Effect(EffectKind.MANAGER_HIRED, business.manager_cost,
                        f"Hired manager for {business.name}")],
    )


def buy_upgrade(state: GameState, upgrade_id: str) -> Outcome:
    """Buy one level of an upgrade, paid in the upgrade's own currency."""
    udef = ALL_UPGRADES.get(upgrade_id)
    if udef is None:
        logger.warning("buy_upgrade: unknown upgrade %r", upgrade_id)
        return rejected(state, ActionError.INVALID_REFERENCE, f"upgrade {upgrade_id}")

    level = state.upgrades.get(upgrade_id, 0)
    if udef.max_level is not None and level >= udef.max_level:
        return rejected(state, ActionError.MAX_LEVEL, f"{udef.title} is maxed")

    cost = udef.cost_at_level(level)
    if not can_afford(state, udef.currency, cost):
        return rejected(state, ActionError.INSUFFICIENT_FUNDS,
                        f"Insufficient {udef.currency.value}")

    new = copy.deepcopy(state)
    field_name = _BALANCE_FIELDS[udef.currency]
    setattr(new, field_name, max(0.0, getattr(new, field_name) - cost))
    new.upgrades[upgrade_id] = level + 1
    return Outcome(
        state=new,
        amount=cost,
        effects=[Effect(EffectKind.UPGRADE_BOUGHT, cost, udef.title)],
    )


# ── Missions ─────────────────────────────────────────────────────


def claim_mission(state: GameState, mission_id: str) -> Outcome:
    """Pay out a completed, unclaimed mission reward."""
    mdef = ALL_MISSIONS.get(mission_id)
    if mdef is None:
        logger.warning("claim_mission: unknown mission %r", mission_id)
        return rejected(state, ActionError.INVALID_REFERENCE, f"mission {mission_id}")

    ms = state.mission(mission_id)
    if not ms.completed or ms.claimed:
        return rejected(state, ActionError.STALE_CLAIM, mdef.title)

    new = copy.deepcopy(state)
    _credit(new, mdef.reward_type, mdef.reward_value)
    new.missions[mission_id] = MissionState(completed=True, claimed=True)
    return Outcome(
        state=new,
        amount=mdef.reward_value,
        effects=[Effect(EffectKind.REWARD_CLAIMED, mdef.reward_value,
                        f"{mdef.title}:{mdef.reward_type.value}")],
    )


# ── Manual work & gems ───────────────────────────────────────────


def click_value(state: GameState) -> float:
    """Money paid by one manual work action."""
    bal = BALANCE.economy
    rates = multipliers_for(state)
    base = bal.base_click_value * rates.income_mult * rates.click_power
    bonus = income_per_second(state.businesses) * bal.click_throughput_fraction * rates.income_mult
    return max(bal.min_click_value, base + bonus)


def handle_click(state: GameState, rng: random.Random | None = None) -> Outcome:
    """Manual work: pay the click value, with a small chance of a free gem."""
    rng = rng or random.Random()
    earned = click_value(state)

    new = copy.deepcopy(state)
    new.money += earned
    new.total_earned += earned
    effects = [Effect(EffectKind.EARNED, earned)]

    if rng.random() < BALANCE.economy.lucky_gem_chance:
        new.gems += 1
        effects.append(Effect(EffectKind.GEM_FOUND, 1, "Lucky! Found 1 Gem!"))

    return Outcome(state=new, amount=earned, effects=effects)


def collect_gem(state: GameState, gem_active: bool, rng: random.Random | None = None) -> Outcome:
    """Collect the floating gem, if one is currently spawned."""
    if not gem_active:
        return rejected(state, ActionError.NOTHING_TO_COLLECT, "No gem to collect")

    rng = rng or random.Random()
    bal = BALANCE.events
    amount = rng.randint(bal.gem_reward_min, bal.gem_reward_max)

    new = copy.deepcopy(state)
    new.gems += amount
    return Outcome(
        state=new,
        amount=amount,
        effects=[Effect(EffectKind.GEM_COLLECTED, amount, f"Collected {amount} Gems")],
    )


# ── Formatting ───────────────────────────────────────────────────


def _compact(value: float) -> str:
    return f"{value:.1f}".rstrip("0").rstrip(".")


def format_number(n: float) -> str:
    """Compact count with at most one decimal: 5, 99.5, 1.5K, 2.3M."""
    if n < 0:
        return f"-{format_number(-n)}"
    for threshold, suffix in reversed(BALANCE.economy.suffixes):
        if n >= threshold:
            return f"{_compact(n / threshold)}{suffix}"
    return _compact(n)


def format_money(n: float) -> str:
    """Dollar amount: whole dollars below 1k, then two decimals ($2.50k)."""
    if n < 0:
        return f"-{format_money(-n)}"
    for threshold, suffix in reversed(BALANCE.economy.money_suffixes):
        if n >= threshold:
            return f"${n / threshold:.2f}{suffix}"
    return f"${math.floor(n)}"
