"""Tests for save/load."""

import json
from dataclasses import replace

import pytest

from empire.data.balance import BALANCE
from empire.engine.game_state import GameState, MissionState
from empire.engine.save import (
    CorruptSnapshot,
    FileStore,
    MemoryStore,
    dumps_state,
    load_game,
    loads_state,
    save_game,
)


def _played_state() -> GameState:
    state = GameState(
        money=1234.5,
        gems=7,
        legacy_points=2,
        total_earned=98765.25,
        prestige_multiplier=1.2,
        upgrades={"profit_margin": 3, "legacy_boost": 1},
        missions={"m1": MissionState(completed=True, claimed=True), "m3": MissionState(completed=True)},
        start_time=100.0,
        last_save_time=100.0,
    )
    state.businesses[0].level = 12
    state.businesses[0].progress = 37.5
    state.businesses[2].has_manager = True
    return state


def test_round_trip_reproduces_state():
    store = MemoryStore()
    saved = save_game(_played_state(), store, now=200.0)
    loaded, earned = load_game(store, now=205.0)
    assert earned == 0
    assert loaded == saved


def test_save_stamps_a_copy():
    state = _played_state()
    saved = save_game(state, MemoryStore(), now=200.0)
    assert saved.last_save_time == 200.0
    assert state.last_save_time == 100.0


def test_missing_save_gives_fresh_state():
    state, earned = load_game(MemoryStore(), now=50.0)
    assert earned == 0
    assert state == GameState(start_time=50.0, last_save_time=50.0)


def test_older_snapshot_fills_missing_fields():
    state = loads_state(json.dumps({"money": 50}), now=10.0)
    fresh = GameState()
    assert state.money == 50
    assert state.gems == 0
    assert state.prestige_multiplier == 1.0
    assert [b.level for b in state.businesses] == [b.level for b in fresh.businesses]


def test_partial_business_list_is_merged():
    state = loads_state(json.dumps({"businesses": [{"id": 1, "level": 4}]}))
    assert state.businesses[0].level == 1
    assert state.businesses[1].level == 4
    assert len(state.businesses) == len(GameState().businesses)


def test_unknown_business_is_dropped():
    state = loads_state(json.dumps({"businesses": [{"id": 0, "level": 3}, {"id": 77, "level": 9}]}))
    assert state.find_business(77) is None
    assert state.businesses[0].level == 3


def test_claimed_implies_completed_on_load():
    state = loads_state(json.dumps({"missions": {"m1": {"claimed": True}}}))
    assert state.mission("m1") == MissionState(completed=False, claimed=False)


def test_corrupt_blob_raises():
    with pytest.raises(CorruptSnapshot):
        loads_state("{not json")
    with pytest.raises(CorruptSnapshot):
        loads_state("[1, 2, 3]")
    with pytest.raises(CorruptSnapshot):
        loads_state(json.dumps({"businesses": [{"level": 3}]}))
    with pytest.raises(CorruptSnapshot):
        loads_state(json.dumps({"money": "lots"}))


def test_corrupt_save_starts_fresh():
    store = MemoryStore()
    store.set(BALANCE.save_key, "garbage")
    state, earned = load_game(store, now=5.0)
    assert earned == 0
    assert state.money == 0
    assert state.start_time == 5.0


def test_load_applies_offline_earnings():
    state = GameState(last_save_time=1000.0, start_time=1000.0)
    state.businesses[0].has_manager = True
    store = MemoryStore()
    store.set(BALANCE.save_key, dumps_state(state))

    loaded, earned = load_game(store, now=1150.0)
    assert earned == pytest.approx(200)
    assert loaded.money == pytest.approx(200)


def test_file_store_round_trip(tmp_path):
    store = FileStore(tmp_path / "saves")
    assert store.get("anything") is None

    saved = save_game(_played_state(), store, now=300.0)
    assert (tmp_path / "saves" / f"{BALANCE.save_key}.json").exists()

    loaded, _ = load_game(FileStore(tmp_path / "saves"), now=301.0)
    assert loaded == saved

    store.delete(BALANCE.save_key)
    assert store.get(BALANCE.save_key) is None


def test_storage_failure_is_not_fatal():
    class BrokenStore:
        def get(self, key):
            raise OSError("disk gone")

        def set(self, key, blob):
            raise OSError("disk gone")

    state = _played_state()
    saved = save_game(state, BrokenStore(), now=400.0)
    assert saved == replace(state, last_save_time=400.0)

    loaded, _ = load_game(BrokenStore(), now=1.0)
    assert loaded.money == 0


def test_file_store_rejects_non_utf8(tmp_path):
    (tmp_path / f"{BALANCE.save_key}.json").write_bytes(b"\xff\xfe{garbage")
    with pytest.raises(CorruptSnapshot):
        FileStore(tmp_path).get(BALANCE.save_key)


def test_non_utf8_save_starts_fresh(tmp_path):
    (tmp_path / f"{BALANCE.save_key}.json").write_bytes(b"\xff\xfe{garbage")
    state, earned = load_game(FileStore(tmp_path), now=7.0)
    assert earned == 0
    assert state == GameState(start_time=7.0, last_save_time=7.0)


def _blob_with_business_field(name: str, value: float) -> str:
    data = json.loads(dumps_state(_played_state()))
    data["businesses"][0][name] = value
    return json.dumps(data)


def test_infinite_level_is_corrupt():
    with pytest.raises(CorruptSnapshot):
        loads_state(_blob_with_business_field("level", float("inf")))


def test_infinite_level_save_starts_fresh():
    store = MemoryStore()
    store.set(BALANCE.save_key, _blob_with_business_field("level", float("inf")))
    state, earned = load_game(store, now=3.0)
    assert earned == 0
    assert state == GameState(start_time=3.0, last_save_time=3.0)


def test_non_finite_progress_resets_to_zero():
    for value in (float("inf"), float("nan")):
        state = loads_state(_blob_with_business_field("progress", value))
        assert state.businesses[0].progress == 0.0
        assert state.businesses[0].level == 12


def test_infinite_upgrade_level_is_corrupt():
    data = json.loads(dumps_state(_played_state()))
    data["upgrades"]["profit_margin"] = 1e400
    with pytest.raises(CorruptSnapshot):
        loads_state(json.dumps(data))
