"""Balance constants — all tuning knobs in one place.

Tweak these to adjust game feel, pacing, and difficulty curves.
Business costs follow: base_cost * (unit_cost_growth ^ owned_level)
Upgrade costs follow:  cost_base * (cost_mult ^ owned_level)
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EconomyBalance:
    """Tuning for income, clicking, and spending."""

    # Business cost scaling: cost = base * (growth ^ level)
    unit_cost_growth: float = 1.15

    # Manual work ("click"): base value before multipliers
    base_click_value: float = 1.0
    # Fraction of current income/s added to every click
    click_throughput_fraction: float = 0.05
    # A click never pays less than this
    min_click_value: float = 1.0
    # Chance of a lucky premium gem per click
    lucky_gem_chance: float = 0.005

    # Floors that keep the tick loop alive under degenerate catalog data
    min_speed_mult: float = 0.01
    min_cycle_time_s: float = 0.01
    min_cost_reduction: float = 1e-9

    # Large number formatting thresholds
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "B"),
        (1e12, "T"),
        (1e15, "Qa"),
        (1e18, "Qi"),
    )

    # Dollar amounts: two decimals, lower-case thousands
    money_suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "k"),
        (1e6, "M"),
        (1e9, "B"),
        (1e12, "T"),
    )


@dataclass(frozen=True)
class PrestigeBalance:
    """Tuning for the prestige reset."""

    # Points earned = floor(sqrt(total_earned / threshold))
    threshold: float = 1_000_000.0
    # Multiplier: 1 + (legacy_points * multiplier_per_point)
    multiplier_per_point: float = 0.1
    # Flat gem grant on every prestige
    bonus_gems: float = 5.0
    # "Seed Money" legacy upgrade: money granted per level on reset
    starting_money_per_level: float = 5_000.0


@dataclass(frozen=True)
class OfflineBalance:
    """Tuning for earnings while the game was closed."""

    # Below this many seconds away, nothing is back-filled
    min_elapsed_s: float = 10.0


@dataclass(frozen=True)
class EventBalance:
    """Tuning for gem spawns and ephemeral notifications."""

    # One spawn roll per this many simulated seconds
    gem_roll_interval_s: float = 1.0
    # ~2.2% per roll, roughly one gem every 45s
    gem_spawn_chance: float = 0.022
    gem_lifetime_s: float = 8.0
    gem_reward_min: int = 1
    gem_reward_max: int = 3

    toast_lifetime_s: float = 3.0
    floating_text_lifetime_s: float = 1.0


@dataclass(frozen=True)
class LoopBalance:
    """Tuning for the tick loop and its timed side-effects."""

    # A stalled host never advances the simulation more than this per tick
    max_dt_s: float = 5.0
    mission_check_interval_s: float = 1.0
    history_interval_s: float = 5.0
    history_max_points: int = 20
    autosave_interval_s: float = 30.0


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    economy: EconomyBalance = field(default_factory=EconomyBalance)
    prestige: PrestigeBalance = field(default_factory=PrestigeBalance)
    offline: OfflineBalance = field(default_factory=OfflineBalance)
    events: EventBalance = field(default_factory=EventBalance)
    loop: LoopBalance = field(default_factory=LoopBalance)

    # Game loop ticks per second (frame-synchronised hosts may run faster)
    tick_rate_hz: float = 60.0

    # Namespaced persistence key
    save_key: str = "money_empire_save_v1"


# Singleton, import this everywhere
BALANCE = GameBalance()
