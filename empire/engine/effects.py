"""Action outcomes and the events they emit for hosts to render."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from empire.engine.game_state import GameState


class ActionError(Enum):
    """Why an action was rejected. Every one of these is recoverable."""

    INSUFFICIENT_FUNDS = auto()
    INVALID_REFERENCE = auto()
    STALE_CLAIM = auto()
    MAX_LEVEL = auto()
    ALREADY_HIRED = auto()
    NOT_ELIGIBLE = auto()
    NOTHING_TO_COLLECT = auto()


class EffectKind(Enum):
    EARNED = auto()
    GEM_FOUND = auto()
    MISSION_COMPLETED = auto()
    REWARD_CLAIMED = auto()
    PURCHASED = auto()
    MANAGER_HIRED = auto()
    UPGRADE_BOUGHT = auto()
    PRESTIGED = auto()
    GEM_SPAWNED = auto()
    GEM_EXPIRED = auto()
    GEM_COLLECTED = auto()
    OFFLINE_EARNINGS = auto()
    SAVED = auto()
    REJECTED = auto()


@dataclass(frozen=True)
class Effect:
    """Something happened that a host may want to show."""

    kind: EffectKind
    amount: float = 0.0
    detail: str = ""


@dataclass
class Outcome:
    """Result of one state transition."""

    state: GameState
    ok: bool = True
    amount: float = 0.0
    reason: ActionError | None = None
    effects: list[Effect] = field(default_factory=list)


def rejected(state: GameState, reason: ActionError, detail: str = "") -> Outcome:
    """Failure outcome carrying the untouched input state."""
    return Outcome(
        state=state,
        ok=False,
        reason=reason,
        effects=[Effect(EffectKind.REJECTED, detail=detail or reason.name)],
    )
