"""Business definitions — the production units a player can own."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BusinessDef:
    """Catalog entry for a single production unit."""

    id: int
    name: str
    icon: str
    base_cost: float
    base_income: float
    manager_cost: float
    cycle_time: float      # seconds per cycle at 1.0x speed
    starting_level: int = 0


# Ordered by id; the first business is owned from the start so the
# player always has something to click on.
BUSINESSES: tuple[BusinessDef, ...] = (
    BusinessDef(0, "Lemonade Stand", "🍋", 10, 2, 150, 1.5, starting_level=1),
    BusinessDef(1, "Newspaper Delivery", "📰", 100, 12, 1_000, 3),
    BusinessDef(2, "Car Wash", "🚗", 1_100, 90, 11_000, 6),
    BusinessDef(3, "Pizza Shop", "🍕", 12_000, 500, 120_000, 12),
    BusinessDef(4, "Donut Factory", "🍩", 130_000, 2_500, 1_300_000, 24),
    BusinessDef(5, "Shrimp Boat", "🦐", 1_400_000, 15_000, 14_000_000, 48),
    BusinessDef(6, "Hockey Team", "🏒", 20_000_000, 120_000, 200_000_000, 96),
    BusinessDef(7, "Movie Studio", "🎬", 330_000_000, 1_000_000, 3_300_000_000, 192),
    BusinessDef(8, "Bank", "🏦", 5_000_000_000, 12_000_000, 50_000_000_000, 384),
    BusinessDef(9, "Oil Company", "🛢️", 75_000_000_000, 100_000_000, 750_000_000_000, 768),
)

ALL_BUSINESSES: dict[int, BusinessDef] = {b.id: b for b in BUSINESSES}
