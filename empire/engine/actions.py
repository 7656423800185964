"""Player actions and the dispatcher that routes them to reducers."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Union

from empire.engine.economy import (
    buy_business,
    buy_upgrade,
    claim_mission,
    collect_gem,
    handle_click,
    hire_manager,
)
from empire.engine.effects import ActionError, Effect, EffectKind, Outcome, rejected
from empire.engine.game_state import GameState
from empire.engine.prestige import perform_prestige


@dataclass(frozen=True)
class BuyBusiness:
    business_id: int
    count: int = 1


@dataclass(frozen=True)
class HireManager:
    business_id: int


@dataclass(frozen=True)
class BuyUpgrade:
    upgrade_id: str


@dataclass(frozen=True)
class ClaimMission:
    mission_id: str


@dataclass(frozen=True)
class Prestige:
    pass


@dataclass(frozen=True)
class ManualWork:
    pass


@dataclass(frozen=True)
class CollectGem:
    gem_active: bool = True


Action = Union[BuyBusiness, HireManager, BuyUpgrade, ClaimMission, Prestige, ManualWork, CollectGem]


def prestige(state: GameState, now: float | None = None) -> Outcome:
    """Prestige reducer. Not eligible is a rejection, never an error."""
    new, points = perform_prestige(state, now)
    if points <= 0:
        return rejected(state, ActionError.NOT_ELIGIBLE, "Not enough lifetime earnings")
    return Outcome(
        state=new,
        amount=points,
        effects=[Effect(EffectKind.PRESTIGED, points,
                        f"x{new.prestige_multiplier:.2f} Multiplier")],
    )


def dispatch(
    state: GameState,
    action: Action,
    rng: random.Random | None = None,
    now: float | None = None,
) -> Outcome:
    """Apply one action to state: (State, Action) -> (State, Effects)."""
    if isinstance(action, BuyBusiness):
        return buy_business(state, action.business_id, action.count)
    if isinstance(action, HireManager):
        return hire_manager(state, action.business_id)
    if isinstance(action, BuyUpgrade):
        return buy_upgrade(state, action.upgrade_id)
    if isinstance(action, ClaimMission):
        return claim_mission(state, action.mission_id)
    if isinstance(action, Prestige):
        return prestige(state, time.time() if now is None else now)
    if isinstance(action, ManualWork):
        return handle_click(state, rng)
    if isinstance(action, CollectGem):
        return collect_gem(state, action.gem_active, rng)
    raise TypeError(f"unknown action: {action!r}")
