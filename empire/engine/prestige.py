"""Prestige — full reset of transient progress for a permanent multiplier."""

from __future__ import annotations

import logging
import math

from empire.data.balance import BALANCE
from empire.data.upgrades import ALL_UPGRADES, UpgradeEffect
from empire.engine.game_state import GameState, MissionState, new_game_state

logger = logging.getLogger(__name__)


def compute_prestige_points(total_earned: float) -> int:
    """Legacy points a prestige would yield: floor(sqrt(total / threshold))."""
    if total_earned <= 0:
        return 0
    return math.floor(math.sqrt(total_earned / BALANCE.prestige.threshold))


def can_prestige(total_earned: float) -> bool:
    return compute_prestige_points(total_earned) > 0


def prestige_multiplier_for(legacy_points: float) -> float:
    """Multiplier for a legacy point total, recomputed from scratch each prestige."""
    return 1.0 + BALANCE.prestige.multiplier_per_point * legacy_points


def perform_prestige(state: GameState, now: float | None = None) -> tuple[GameState, int]:
    """Reset to a fresh baseline, carrying permanent currencies and upgrades.

    Returns (new state, points earned).  With zero points earned the input
    state is returned unchanged.
    """
    points = compute_prestige_points(state.total_earned)
    if points <= 0:
        return state, 0

    bal = BALANCE.prestige
    fresh = new_game_state(now)

    fresh.legacy_points = state.legacy_points + points
    fresh.gems = state.gems + bal.bonus_gems
    fresh.prestige_multiplier = prestige_multiplier_for(state.legacy_points + points)

    # Legacy upgrades survive; Seed Money pays out immediately
    for uid, level in state.upgrades.items():
        udef = ALL_UPGRADES.get(uid)
        if udef is None or not udef.permanent or level <= 0:
            continue
        fresh.upgrades[uid] = level
        if udef.effect == UpgradeEffect.STARTING_MONEY:
            bonus = level * bal.starting_money_per_level
            fresh.money += bonus
            fresh.total_earned += bonus

    # Achievements are kept as-is
    fresh.missions = {
        mid: MissionState(completed=ms.completed, claimed=ms.claimed)
        for mid, ms in state.missions.items()
    }

    logger.info(
        "Prestige: +%d legacy points, multiplier x%.2f",
        points, fresh.prestige_multiplier,
    )
    return fresh, points
