"""Game loop — owns the authoritative state and advances it once per frame.

Each tick runs in a fixed order: production, mission scan, gem roll,
history sample, ephemeral sweep, then commit.  Player actions go through
``dispatch`` and are committed the same way, so a host never sees a
half-applied transition.
"""

from __future__ import annotations

import logging
import random
import time
from collections import deque
from collections.abc import Callable
from dataclasses import replace
from typing import Protocol

from empire.data.balance import BALANCE
from empire.engine import actions
from empire.engine.economy import format_money
from empire.engine.effects import Effect, EffectKind, Outcome
from empire.engine.events import EntryKind, EphemeralArena, GemSpawner
from empire.engine.game_state import GameState, new_game_state
from empire.engine.missions import evaluate_missions
from empire.engine.multipliers import multipliers_for
from empire.engine.production import advance_production, clamp_dt
from empire.engine.save import SnapshotStore, load_game, save_game

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Anything the host scheduler hands back (e.g. a Textual Timer)."""

    def stop(self) -> None: ...


class GameLoop:
    """Single-writer orchestrator for one game."""

    def __init__(
        self,
        state: GameState | None = None,
        store: SnapshotStore | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._clock = clock
        self._state: GameState = state if state is not None else new_game_state(clock())
        self._store = store
        self._rng = rng or random.Random()
        self.arena = EphemeralArena()
        self._gems = GemSpawner(self.arena, self._rng)
        self.history: deque[tuple[float, float]] = deque(maxlen=BALANCE.loop.history_max_points)
        self.offline_earned: float = 0.0

        self._last_tick: float | None = None
        self._mission_timer = 0.0
        self._history_timer = 0.0
        self._autosave_timer = 0.0
        self._handle: TimerHandle | None = None

    @classmethod
    def load(
        cls,
        store: SnapshotStore,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> GameLoop:
        """Resume from storage, crediting offline earnings."""
        now = clock()
        state, earned = load_game(store, now)
        loop = cls(state, store, rng, clock)
        loop.offline_earned = earned
        if earned > 0:
            loop._announce([Effect(EffectKind.OFFLINE_EARNINGS, earned)], now)
        return loop

    @property
    def state(self) -> GameState:
        """The committed snapshot. Treat as read-only."""
        return self._state

    @property
    def active_gem(self):
        return self._gems.active_gem

    # ── Scheduling ───────────────────────────────────

    @property
    def running(self) -> bool:
        return self._handle is not None

    def bind(self, handle: TimerHandle) -> None:
        """Attach the host's periodic timer that calls tick()."""
        self.stop()
        self._handle = handle
        self._last_tick = self._clock()

    def stop(self) -> None:
        """Release the scheduler handle. Safe to call any number of times."""
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.stop()

    # ── Ticking ──────────────────────────────────────

    def tick(self) -> list[Effect]:
        """Advance by wall-clock time since the previous tick."""
        now = self._clock()
        dt = 0.0 if self._last_tick is None else now - self._last_tick
        self._last_tick = now
        return self.step(dt, now)

    def step(self, dt: float, now: float | None = None) -> list[Effect]:
        """Advance the simulation by dt seconds (clamped)."""
        if now is None:
            now = self._clock()
        dt = clamp_dt(dt)
        effects: list[Effect] = []
        loop_bal = BALANCE.loop

        # 1. Production
        state = self._state
        businesses, payout = advance_production(state.businesses, dt, multipliers_for(state))
        working = replace(
            state,
            businesses=businesses,
            money=state.money + payout,
            total_earned=state.total_earned + payout,
        )

        # 2. Missions (throttled; sees this tick's payout)
        self._mission_timer += dt
        if self._mission_timer >= loop_bal.mission_check_interval_s:
            self._mission_timer = 0.0
            newly, missions = evaluate_missions(working)
            if newly:
                working = replace(working, missions=missions)
                effects.extend(
                    Effect(EffectKind.MISSION_COMPLETED, detail=m.title) for m in newly
                )

        # 3. Random events
        gem = self._gems.tick(dt, now)
        if gem is not None:
            logger.debug("Gem spawned at (%.0f%%, %.0f%%)", gem.x, gem.y)
            effects.append(Effect(EffectKind.GEM_SPAWNED, detail=str(gem.id)))

        # 4. History
        self._history_timer += dt
        if self._history_timer >= loop_bal.history_interval_s:
            self._history_timer = 0.0
            self.history.append((now, working.money))

        # 5. Ephemeral expiry
        for entry in self.arena.sweep(now):
            if entry.kind == EntryKind.GEM:
                effects.append(Effect(EffectKind.GEM_EXPIRED, detail=str(entry.id)))

        # 6. Commit
        self._state = working
        self._announce(effects, now)

        self._autosave_timer += dt
        if self._store is not None and self._autosave_timer >= loop_bal.autosave_interval_s:
            self._autosave_timer = 0.0
            effects.extend(self.save(now))

        return effects

    # ── Actions ──────────────────────────────────────

    def dispatch(self, action: actions.Action) -> Outcome:
        """Apply a player action to the committed state."""
        now = self._clock()
        if isinstance(action, actions.CollectGem):
            action = actions.CollectGem(gem_active=self._gems.active_gem is not None)

        outcome = actions.dispatch(self._state, action, self._rng, now)
        if outcome.ok:
            if isinstance(action, actions.CollectGem):
                self._gems.take()
            elif isinstance(action, actions.Prestige):
                self.history.clear()
            self._state = outcome.state
        self._announce(outcome.effects, now)
        return outcome

    def save(self, now: float | None = None) -> list[Effect]:
        """Persist the committed state, if a store is attached."""
        if self._store is None:
            return []
        self._state = save_game(self._state, self._store, self._clock() if now is None else now)
        return [Effect(EffectKind.SAVED)]

    # ── Ephemeral notifications ──────────────────────

    def _announce(self, effects: list[Effect], now: float) -> None:
        bal = BALANCE.events
        for e in effects:
            text = _toast_text(e)
            if text:
                self.arena.add(EntryKind.TOAST, text, bal.toast_lifetime_s, now)
            if e.kind == EffectKind.EARNED:
                self.arena.add(EntryKind.FLOATING_TEXT, f"+{format_money(e.amount)}",
                               bal.floating_text_lifetime_s, now)


def _toast_text(e: Effect) -> str:
    kind = e.kind
    if kind == EffectKind.MISSION_COMPLETED:
        return f"Achievement Unlocked: {e.detail}"
    if kind == EffectKind.GEM_SPAWNED:
        return "A Gem has appeared!"
    if kind == EffectKind.GEM_FOUND:
        return e.detail
    if kind == EffectKind.GEM_COLLECTED:
        return e.detail
    if kind == EffectKind.OFFLINE_EARNINGS:
        return f"Offline Earnings: {format_money(e.amount)}"
    if kind == EffectKind.PRESTIGED:
        return f"Prestige Successful! {e.detail}"
    if kind in (EffectKind.PURCHASED, EffectKind.MANAGER_HIRED, EffectKind.REJECTED):
        return e.detail
    return ""
