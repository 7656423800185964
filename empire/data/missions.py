"""Mission definitions — one-off objectives that pay a reward when claimed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from empire.data.upgrades import Currency


class MissionType(Enum):
    """What a mission checks."""

    EARN_TOTAL = auto()      # lifetime earnings >= target
    OWN_BUSINESS = auto()    # business level >= target
    HIRE_MANAGER = auto()    # business has a manager


@dataclass(frozen=True)
class MissionDef:
    id: str
    title: str
    description: str
    type: MissionType
    target_value: float
    reward_type: Currency
    reward_value: float
    target_id: int | None = None


def _earn(mid: str, title: str, desc: str, target: float, reward: Currency, value: float) -> MissionDef:
    return MissionDef(mid, title, desc, MissionType.EARN_TOTAL, target, reward, value)


def _own(mid: str, title: str, desc: str, bid: int, level: int, reward: Currency, value: float) -> MissionDef:
    return MissionDef(mid, title, desc, MissionType.OWN_BUSINESS, level, reward, value, target_id=bid)


def _hire(mid: str, title: str, desc: str, bid: int, reward: Currency, value: float) -> MissionDef:
    return MissionDef(mid, title, desc, MissionType.HIRE_MANAGER, 1, reward, value, target_id=bid)


MONEY, GEMS, LEGACY = Currency.MONEY, Currency.GEMS, Currency.LEGACY

MISSIONS: tuple[MissionDef, ...] = (
    # ── Early game ────────────────────────────────────────
    _earn("m1", "First Profits", "Earn $100 lifetime earnings", 100, GEMS, 2),
    _own("m2", "Lemonade Empire", "Reach Level 25 Lemonade Stand", 0, 25, MONEY, 500),
    _hire("m3", "Automated Lemonade", "Hire a Manager for Lemonade Stand", 0, GEMS, 5),
    _own("m4", "Newspaper Boy", "Unlock Newspaper Delivery", 1, 1, MONEY, 200),
    _earn("m5", "Serious Business", "Earn $10,000 lifetime earnings", 10_000, GEMS, 10),
    # ── Mid game ──────────────────────────────────────────
    _own("m6", "Car Wash King", "Reach Level 50 Car Wash", 2, 50, LEGACY, 1),
    _earn("m7", "Millionaire", "Earn $1,000,000 lifetime earnings", 1e6, GEMS, 25),
    _hire("m8", "Pizza Party", "Automate the Pizza Shop", 3, MONEY, 50_000),
    _own("m9", "Lemonade Tycoon", "Reach Level 100 Lemonade Stand", 0, 100, GEMS, 15),
    _own("m10", "Paper Route", "Reach Level 100 Newspaper Delivery", 1, 100, GEMS, 15),
    _own("m11", "Squeaky Clean", "Reach Level 100 Car Wash", 2, 100, GEMS, 20),
    _earn("m12", "Billionaire", "Earn $1 Billion lifetime", 1e9, LEGACY, 2),
    # ── Late game ─────────────────────────────────────────
    _own("m13", "Shrimp King", "Unlock Shrimp Boat", 5, 1, GEMS, 30),
    _own("m14", "Puck Drop", "Reach Level 50 Hockey Team", 6, 50, LEGACY, 3),
    _hire("m15", "Blockbuster", "Hire Manager for Movie Studio", 7, MONEY, 50_000_000),
    _earn("m16", "Trillionaire", "Earn $1 Trillion lifetime", 1e12, GEMS, 50),
    _own("m17", "Banker", "Unlock Bank", 8, 1, LEGACY, 5),
    _own("m18", "Liquid Gold", "Unlock Oil Company", 9, 1, LEGACY, 10),
    _own("m19", "Oil Baron", "Reach Level 100 Oil Company", 9, 100, GEMS, 100),
    # ── End game ──────────────────────────────────────────
    _earn("m20", "Quadrillionaire", "Earn $1 Quadrillion", 1e15, LEGACY, 20),
    _earn("m21", "Quintillionaire", "Earn $1 Quintillion", 1e18, GEMS, 200),
    _own("m22", "Pizza Franchise", "Reach Level 200 Pizza Shop", 3, 200, GEMS, 40),
    _own("m23", "Donut Empire", "Reach Level 200 Donut Factory", 4, 200, GEMS, 50),
    _own("m24", "Shrimp Fleet", "Reach Level 200 Shrimp Boat", 5, 200, GEMS, 60),
    _hire("m25", "Manager Monopoly", "Hire Manager for Bank", 8, LEGACY, 15),
)

ALL_MISSIONS: dict[str, MissionDef] = {m.id: m for m in MISSIONS}
