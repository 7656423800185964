"""Upgrade definitions — all purchasable upgrades and their effects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Currency(Enum):
    """Which balance pays for something (or receives a reward)."""

    MONEY = "money"
    GEMS = "gems"
    LEGACY = "legacy"     # prestige-permanent; survives resets


class UpgradeEffect(Enum):
    """What an upgrade modifies."""

    INCOME_MULT = "income_mult"          # Additive income multiplier
    SPEED_MULT = "speed_mult"            # Additive production speed
    COST_REDUCTION = "cost_reduction"    # Compounding discount (1 - v)^level
    PRESTIGE_BONUS = "prestige_bonus"    # Scales the whole income total
    CLICK_POWER = "click_power"          # Additive manual work power
    STARTING_MONEY = "starting_money"    # One-shot grant on prestige reset


@dataclass(frozen=True)
class UpgradeDef:
    """Definition of a single upgrade."""

    id: str
    title: str
    description: str
    currency: Currency
    effect: UpgradeEffect
    # Value per level (interpretation depends on effect type)
    value_per_level: float
    cost_base: float
    cost_mult: float
    max_level: int | None = None

    @property
    def permanent(self) -> bool:
        return self.currency is Currency.LEGACY

    def cost_at_level(self, current_level: int) -> float:
        """Cost of the *next* level given current_level owned."""
        return self.cost_base * (self.cost_mult ** current_level)


# ── Shop (paid with gems) ─────────────────────────────────────────

SHOP_UPGRADES: tuple[UpgradeDef, ...] = (
    UpgradeDef(
        id="click_power",
        title="Click Power",
        description="Increases click value by 50%",
        currency=Currency.GEMS,
        effect=UpgradeEffect.CLICK_POWER,
        value_per_level=0.5,
        cost_base=5,
        cost_mult=1.5,
    ),
    UpgradeDef(
        id="click_power_2",
        title="Golden Mouse",
        description="Triples click value (+200%)",
        currency=Currency.GEMS,
        effect=UpgradeEffect.CLICK_POWER,
        value_per_level=2.0,
        cost_base=50,
        cost_mult=2.0,
    ),
    UpgradeDef(
        id="speed_boost",
        title="Production Speed",
        description="Businesses run 10% faster",
        currency=Currency.GEMS,
        effect=UpgradeEffect.SPEED_MULT,
        value_per_level=0.1,
        cost_base=10,
        cost_mult=1.8,
        max_level=10,
    ),
    UpgradeDef(
        id="flux_capacitor",
        title="Flux Capacitor",
        description="Supercharge speed by 25%",
        currency=Currency.GEMS,
        effect=UpgradeEffect.SPEED_MULT,
        value_per_level=0.25,
        cost_base=100,
        cost_mult=2.5,
        max_level=5,
    ),
)

# ── Research (paid with money) ────────────────────────────────────

RESEARCH_UPGRADES: tuple[UpgradeDef, ...] = (
    UpgradeDef(
        id="cost_reduction",
        title="Better Negotiations",
        description="Reduces business costs by 2%",
        currency=Currency.MONEY,
        effect=UpgradeEffect.COST_REDUCTION,
        value_per_level=0.02,
        cost_base=10_000,
        cost_mult=2.5,
        max_level=25,
    ),
    UpgradeDef(
        id="lobbying",
        title="Corporate Lobbying",
        description="Heavy cost reduction (5%)",
        currency=Currency.MONEY,
        effect=UpgradeEffect.COST_REDUCTION,
        value_per_level=0.05,
        cost_base=5_000_000,
        cost_mult=3.0,
        max_level=10,
    ),
    UpgradeDef(
        id="profit_margin",
        title="Profit Margins",
        description="Increases all income by 5%",
        currency=Currency.MONEY,
        effect=UpgradeEffect.INCOME_MULT,
        value_per_level=0.05,
        cost_base=50_000,
        cost_mult=2.2,
    ),
    UpgradeDef(
        id="marketing_1",
        title="Local Ads",
        description="Boosts income by 10%",
        currency=Currency.MONEY,
        effect=UpgradeEffect.INCOME_MULT,
        value_per_level=0.10,
        cost_base=500_000,
        cost_mult=2.0,
    ),
    UpgradeDef(
        id="marketing_2",
        title="TV Commercials",
        description="Boosts income by 25%",
        currency=Currency.MONEY,
        effect=UpgradeEffect.INCOME_MULT,
        value_per_level=0.25,
        cost_base=25_000_000,
        cost_mult=2.5,
    ),
    UpgradeDef(
        id="workflow",
        title="Workflow Optimization",
        description="Speed +10%",
        currency=Currency.MONEY,
        effect=UpgradeEffect.SPEED_MULT,
        value_per_level=0.10,
        cost_base=250_000,
        cost_mult=2.0,
        max_level=20,
    ),
)

# ── Legacy (paid with legacy points, survive prestige) ────────────

LEGACY_UPGRADES: tuple[UpgradeDef, ...] = (
    UpgradeDef(
        id="legacy_boost",
        title="Legacy Bonus",
        description="Adds +10% to Prestige Multiplier",
        currency=Currency.LEGACY,
        effect=UpgradeEffect.PRESTIGE_BONUS,
        value_per_level=0.10,
        cost_base=1,
        cost_mult=2,
    ),
    UpgradeDef(
        id="starter_pack",
        title="Seed Money",
        description="Start next run with +$5000",
        currency=Currency.LEGACY,
        effect=UpgradeEffect.STARTING_MONEY,
        value_per_level=0.0,   # amount comes from BALANCE.prestige
        cost_base=2,
        cost_mult=1.5,
    ),
    UpgradeDef(
        id="time_mastery",
        title="Time Mastery",
        description="Permanent +5% Speed",
        currency=Currency.LEGACY,
        effect=UpgradeEffect.SPEED_MULT,
        value_per_level=0.05,
        cost_base=5,
        cost_mult=2.5,
    ),
)

ALL_UPGRADES: dict[str, UpgradeDef] = {
    u.id: u for u in (*SHOP_UPGRADES, *RESEARCH_UPGRADES, *LEGACY_UPGRADES)
}
