"""Tests for the game loop orchestration."""

from unittest.mock import MagicMock

import pytest

from empire.data.balance import BALANCE
from empire.engine import actions
from empire.engine.effects import ActionError, EffectKind
from empire.engine.events import EntryKind
from empire.engine.game_state import GameState
from empire.engine.loop import GameLoop
from empire.engine.save import MemoryStore, dumps_state


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _rng(roll: float = 0.9, gem_reward: int = 2) -> MagicMock:
    rng = MagicMock()
    rng.random.return_value = roll
    rng.randint.return_value = gem_reward
    return rng


def _managed(**kwargs) -> GameState:
    state = GameState(**kwargs)
    state.businesses[0].has_manager = True
    return state


def _kinds(effects):
    return [e.kind for e in effects]


def test_step_commits_production():
    loop = GameLoop(_managed(), rng=_rng(), clock=FakeClock(100.0))
    loop.step(1.5, now=100.0)
    assert loop.state.money == pytest.approx(2.0)
    assert loop.state.total_earned == pytest.approx(2.0)


def test_missions_see_the_same_tick_payout():
    loop = GameLoop(_managed(total_earned=99), rng=_rng(), clock=FakeClock())
    effects = loop.step(1.5, now=1.0)
    completed = [e.detail for e in effects if e.kind == EffectKind.MISSION_COMPLETED]
    assert "First Profits" in completed
    assert loop.state.mission("m1").completed
    assert any("First Profits" in t.text for t in loop.arena.active(EntryKind.TOAST))


def test_mission_scan_is_throttled():
    loop = GameLoop(GameState(total_earned=150), rng=_rng(), clock=FakeClock())
    assert EffectKind.MISSION_COMPLETED not in _kinds(loop.step(0.5, now=0.5))
    assert EffectKind.MISSION_COMPLETED in _kinds(loop.step(0.5, now=1.0))


def test_gem_spawns_and_expires():
    loop = GameLoop(GameState(), rng=_rng(roll=0.0), clock=FakeClock())

    assert EffectKind.GEM_SPAWNED in _kinds(loop.step(1.0, now=100.0))
    gem = loop.active_gem
    assert gem is not None
    assert gem.expires_at == 100.0 + BALANCE.events.gem_lifetime_s
    assert (gem.x, gem.y) == (10.0, 10.0)

    # still alive; no second gem while one is on screen
    effects = loop.step(1.0, now=104.0)
    assert EffectKind.GEM_SPAWNED not in _kinds(effects)
    assert loop.active_gem == gem

    assert EffectKind.GEM_EXPIRED in _kinds(loop.step(1.0, now=108.0))
    assert loop.active_gem is None


def test_no_gem_on_a_failed_roll():
    loop = GameLoop(GameState(), rng=_rng(roll=0.5), clock=FakeClock())
    loop.step(1.0, now=1.0)
    assert loop.active_gem is None


def test_collect_gem():
    loop = GameLoop(GameState(), rng=_rng(roll=0.0, gem_reward=2), clock=FakeClock(50.0))
    loop.step(1.0, now=50.0)

    outcome = loop.dispatch(actions.CollectGem())
    assert outcome.ok
    assert loop.state.gems == 2
    assert loop.active_gem is None


def test_collect_gem_when_none_is_active():
    loop = GameLoop(GameState(), rng=_rng(), clock=FakeClock())
    outcome = loop.dispatch(actions.CollectGem())
    assert outcome.reason == ActionError.NOTHING_TO_COLLECT
    assert loop.state.gems == 0


def test_rejected_action_keeps_committed_state():
    loop = GameLoop(GameState(), rng=_rng(), clock=FakeClock())
    before = loop.state
    outcome = loop.dispatch(actions.BuyBusiness(0))
    assert not outcome.ok
    assert loop.state is before


def test_successful_action_commits():
    loop = GameLoop(GameState(money=100), rng=_rng(), clock=FakeClock())
    outcome = loop.dispatch(actions.BuyBusiness(0))
    assert outcome.ok
    assert loop.state.businesses[0].level == 2
    assert any("Lemonade Stand" in t.text for t in loop.arena.active(EntryKind.TOAST))


def test_manual_work_adds_floating_text():
    loop = GameLoop(GameState(), rng=_rng(), clock=FakeClock())
    loop.dispatch(actions.ManualWork())
    assert loop.state.money > 0
    assert len(loop.arena.active(EntryKind.FLOATING_TEXT)) == 1


def test_history_sampling():
    loop = GameLoop(GameState(), rng=_rng(), clock=FakeClock())
    for i in range(3):
        loop.step(5.0, now=5.0 * (i + 1))
    assert [t for t, _ in loop.history] == [5.0, 10.0, 15.0]

    for i in range(30):
        loop.step(5.0, now=100.0 + i)
    assert len(loop.history) == BALANCE.loop.history_max_points


def test_prestige_clears_history():
    loop = GameLoop(GameState(total_earned=1_000_000), rng=_rng(), clock=FakeClock())
    loop.step(5.0, now=5.0)
    assert len(loop.history) == 1

    outcome = loop.dispatch(actions.Prestige())
    assert outcome.ok
    assert len(loop.history) == 0
    assert loop.state.legacy_points == 1


def test_tick_uses_clock_delta():
    clock = FakeClock(0.0)
    loop = GameLoop(_managed(), rng=_rng(), clock=clock)
    loop.tick()
    assert loop.state.money == 0

    clock.now = 1.5
    loop.tick()
    assert loop.state.money == pytest.approx(2.0)


def test_stop_releases_handle_exactly_once():
    loop = GameLoop(GameState(), rng=_rng(), clock=FakeClock())
    handle = MagicMock()
    loop.bind(handle)
    assert loop.running

    loop.stop()
    loop.stop()
    handle.stop.assert_called_once()
    assert not loop.running


def test_rebinding_stops_previous_handle():
    loop = GameLoop(GameState(), rng=_rng(), clock=FakeClock())
    first, second = MagicMock(), MagicMock()
    loop.bind(first)
    loop.bind(second)
    first.stop.assert_called_once()
    second.stop.assert_not_called()


def test_autosave():
    store = MemoryStore()
    loop = GameLoop(GameState(), store=store, rng=_rng(), clock=FakeClock())
    for i in range(5):
        loop.step(5.0, now=5.0 * (i + 1))
    assert store.blobs == {}

    effects = loop.step(5.0, now=30.0)
    assert EffectKind.SAVED in _kinds(effects)
    assert BALANCE.save_key in store.blobs
    assert loop.state.last_save_time == 30.0


def test_save_without_store_is_a_noop():
    loop = GameLoop(GameState(), rng=_rng(), clock=FakeClock())
    assert loop.save() == []


def test_load_credits_offline_earnings():
    saved = _managed(last_save_time=1000.0, start_time=1000.0)
    store = MemoryStore()
    store.set(BALANCE.save_key, dumps_state(saved))

    loop = GameLoop.load(store, rng=_rng(), clock=FakeClock(1150.0))
    assert loop.offline_earned == pytest.approx(200)
    assert loop.state.money == pytest.approx(200)
    assert any(t.text.startswith("Offline Earnings") for t in loop.arena.active(EntryKind.TOAST))
