"""Game state — single source of truth for the current save."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from empire.data.businesses import BUSINESSES, BusinessDef


@dataclass
class Business:
    """One owned production unit (catalog values + mutable progress)."""

    id: int
    name: str
    icon: str
    base_cost: float
    base_income: float
    manager_cost: float
    cycle_time: float
    level: int = 0
    has_manager: bool = False
    progress: float = 0.0   # percent of the current cycle, [0, 100)

    @classmethod
    def from_def(cls, bdef: BusinessDef) -> Business:
        return cls(
            id=bdef.id,
            name=bdef.name,
            icon=bdef.icon,
            base_cost=bdef.base_cost,
            base_income=bdef.base_income,
            manager_cost=bdef.manager_cost,
            cycle_time=bdef.cycle_time,
            level=bdef.starting_level,
        )


@dataclass
class MissionState:
    completed: bool = False
    claimed: bool = False


def _fresh_businesses() -> list[Business]:
    return [Business.from_def(b) for b in BUSINESSES]


@dataclass
class GameState:
    """Complete state for one save."""

    # ── Currencies ───────────────────────────────────────
    money: float = 0.0
    gems: float = 0.0
    legacy_points: float = 0.0     # prestige currency, never reset
    total_earned: float = 0.0      # lifetime earnings for the prestige calc
    prestige_multiplier: float = 1.0

    # ── Production ───────────────────────────────────────
    businesses: list[Business] = field(default_factory=_fresh_businesses)

    # ── Upgrades: id → owned level ───────────────────────
    upgrades: dict[str, int] = field(default_factory=dict)

    # ── Missions: id → state (missing id == not completed) ─
    missions: dict[str, MissionState] = field(default_factory=dict)

    # ── Timestamps ───────────────────────────────────────
    start_time: float = field(default_factory=time.time)
    last_save_time: float = field(default_factory=time.time)

    def find_business(self, business_id: int) -> Business | None:
        for b in self.businesses:
            if b.id == business_id:
                return b
        return None

    def mission(self, mission_id: str) -> MissionState:
        """Mission state for an id; unknown ids read as not completed."""
        return self.missions.get(mission_id) or MissionState()


def new_game_state(now: float | None = None) -> GameState:
    """Fresh baseline state with every business at catalog defaults."""
    if now is None:
        now = time.time()
    return GameState(start_time=now, last_save_time=now)
