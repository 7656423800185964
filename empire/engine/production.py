"""Production engine — advances business cycles and pays out income."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace

from empire.data.balance import BALANCE
from empire.engine.game_state import Business, GameState
from empire.engine.multipliers import Multipliers


def clamp_dt(dt: float) -> float:
    """Clamp a frame delta into [0, max_dt_s]; NaN counts as zero."""
    if not dt > 0:
        return 0.0
    return min(dt, BALANCE.loop.max_dt_s)


def effective_cycle_time(business: Business, speed_mult: float) -> float:
    """Seconds per cycle after speed upgrades, never zero."""
    bal = BALANCE.economy
    speed = max(speed_mult, bal.min_speed_mult)
    return max(business.cycle_time, bal.min_cycle_time_s) / speed


def advance_business(
    business: Business,
    dt: float,
    rates: Multipliers,
) -> tuple[Business, float]:
    """Advance one business by dt seconds. Returns (updated copy, payout)."""
    if business.level <= 0 or not business.has_manager or dt <= 0:
        return business, 0.0

    cycle = effective_cycle_time(business, rates.speed_mult)
    progress = max(0.0, business.progress) + (dt / cycle) * 100.0
    payout = 0.0
    if progress >= 100.0:
        cycles = math.floor(progress / 100.0)
        payout = business.base_income * business.level * rates.income_mult * cycles
        progress = progress % 100.0
    return replace(business, progress=progress), payout


def advance_production(
    businesses: Iterable[Business],
    dt: float,
    rates: Multipliers,
) -> tuple[list[Business], float]:
    """Advance every business by dt (clamped). Returns (businesses, total payout).

    The input businesses are not modified.
    """
    dt = clamp_dt(dt)
    updated: list[Business] = []
    total = 0.0
    for b in businesses:
        nb, paid = advance_business(b, dt, rates)
        updated.append(nb)
        total += paid
    return updated, total


def tick_production(state: GameState, dt: float, rates: Multipliers) -> float:
    """Apply one production step to state in a single commit. Returns Money earned."""
    businesses, payout = advance_production(state.businesses, dt, rates)
    state.businesses = businesses
    if payout > 0:
        state.money += payout
        state.total_earned += payout
    return payout


def income_per_second(businesses: Iterable[Business]) -> float:
    """Raw throughput of every owned business, before multipliers."""
    total = 0.0
    for b in businesses:
        if b.level > 0:
            total += b.base_income * b.level / max(b.cycle_time, BALANCE.economy.min_cycle_time_s)
    return total
