"""Tests for multiplier aggregation."""

import pytest

from empire.data.upgrades import Currency, UpgradeDef, UpgradeEffect
from empire.engine.game_state import GameState
from empire.engine.multipliers import Multipliers, compute_multipliers, multipliers_for


def _udef(uid: str, effect: UpgradeEffect, value: float) -> UpgradeDef:
    return UpgradeDef(uid, uid, "", Currency.MONEY, effect, value, 1, 1)


def test_no_upgrades_is_identity():
    assert compute_multipliers({}, 1.0) == Multipliers(1.0, 1.0, 1.0, 1.0)


def test_prestige_multiplier_seeds_income():
    rates = compute_multipliers({}, 2.5)
    assert rates.income_mult == 2.5
    assert rates.speed_mult == 1.0


def test_additive_income_speed_click():
    rates = compute_multipliers(
        {"profit_margin": 2, "workflow": 3, "click_power": 1},
        1.0,
    )
    assert rates.income_mult == pytest.approx(1.10)
    assert rates.speed_mult == pytest.approx(1.30)
    assert rates.click_power == pytest.approx(1.5)


def test_prestige_bonus_scales_the_total():
    """Additive bonuses combine first, then Legacy Bonus multiplies."""
    rates = compute_multipliers({"profit_margin": 2, "legacy_boost": 1}, 1.5)
    assert rates.income_mult == pytest.approx((1.5 + 0.10) * 1.10)


def test_cost_reduction_compounds():
    rates = compute_multipliers({"cost_reduction": 25, "lobbying": 10}, 1.0)
    assert rates.cost_reduction == pytest.approx(0.98 ** 25 * 0.95 ** 10)
    assert 0 < rates.cost_reduction <= 1


def test_cost_reduction_never_reaches_zero_or_exceeds_one():
    catalog = {
        "huge": _udef("huge", UpgradeEffect.COST_REDUCTION, 1.5),
        "negative": _udef("negative", UpgradeEffect.COST_REDUCTION, -0.5),
    }
    too_much = compute_multipliers({"huge": 3}, 1.0, catalog)
    assert 0 < too_much.cost_reduction <= 1

    markup = compute_multipliers({"negative": 4}, 1.0, catalog)
    assert markup.cost_reduction == 1.0


def test_speed_has_a_positive_floor():
    catalog = {"slow": _udef("slow", UpgradeEffect.SPEED_MULT, -2.0)}
    rates = compute_multipliers({"slow": 1}, 1.0, catalog)
    assert rates.speed_mult > 0


def test_zero_levels_are_ignored():
    assert compute_multipliers({"profit_margin": 0}, 1.0) == compute_multipliers({}, 1.0)


def test_pure_and_repeatable():
    upgrades = {"profit_margin": 4, "speed_boost": 2, "legacy_boost": 3, "lobbying": 1}
    before = dict(upgrades)
    first = compute_multipliers(upgrades, 1.7)
    second = compute_multipliers(upgrades, 1.7)
    assert first == second
    assert upgrades == before


def test_multipliers_for_state():
    state = GameState(prestige_multiplier=1.2, upgrades={"time_mastery": 2})
    rates = multipliers_for(state)
    assert rates.income_mult == pytest.approx(1.2)
    assert rates.speed_mult == pytest.approx(1.10)
