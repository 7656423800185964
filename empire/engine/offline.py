"""Offline earnings — back-fills income for managed businesses after a reload.

The rate is a continuous approximation: base income per second of each
managed business, with no speed or income multipliers applied.  Progress
bars are left where they were saved.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from empire.data.balance import BALANCE
from empire.engine.game_state import GameState

logger = logging.getLogger(__name__)


def compute_offline_earnings(state: GameState, elapsed_s: float) -> float:
    """Money earned while away for elapsed_s seconds (0 below the threshold)."""
    if not elapsed_s > BALANCE.offline.min_elapsed_s:
        return 0.0

    min_cycle = BALANCE.economy.min_cycle_time_s
    earned = 0.0
    for b in state.businesses:
        if b.has_manager and b.level > 0:
            per_s = b.base_income * b.level / max(b.cycle_time, min_cycle)
            earned += per_s * elapsed_s
    return earned


def apply_offline_earnings(state: GameState, now: float) -> tuple[GameState, float]:
    """Credit earnings since state.last_save_time. Returns (state, earned)."""
    elapsed = now - state.last_save_time
    earned = compute_offline_earnings(state, elapsed)
    if earned <= 0:
        return state, 0.0

    logger.info("Offline for %.0fs: +%.2f", elapsed, earned)
    return replace(
        state,
        money=state.money + earned,
        total_earned=state.total_earned + earned,
    ), earned
