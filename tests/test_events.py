"""Tests for ephemeral entries and gem spawning."""

import random

from empire.engine.events import EntryKind, EphemeralArena, GemSpawner


def test_arena_sweeps_expired_entries():
    arena = EphemeralArena()
    toast = arena.add(EntryKind.TOAST, "hello", 3.0, now=10.0)
    floater = arena.add(EntryKind.FLOATING_TEXT, "+$5", 1.0, now=10.0)
    assert len(arena) == 2

    assert arena.sweep(10.5) == []
    assert arena.sweep(11.0) == [floater]
    assert arena.active() == [toast]
    assert arena.sweep(13.0) == [toast]
    assert len(arena) == 0


def test_arena_filters_by_kind():
    arena = EphemeralArena()
    arena.add(EntryKind.TOAST, "a", 1.0, now=0.0)
    gem = arena.add(EntryKind.GEM, "💎", 8.0, now=0.0, x=20, y=30)
    assert arena.active(EntryKind.GEM) == [gem]
    assert arena.remove(gem.id) == gem
    assert arena.remove(gem.id) is None
    assert arena.active(EntryKind.GEM) == []


def test_ids_are_unique():
    arena = EphemeralArena()
    ids = {arena.add(EntryKind.TOAST, str(i), 1.0, now=0.0).id for i in range(10)}
    assert len(ids) == 10


def test_spawner_rolls_once_per_interval():
    rng = random.Random(0)
    spawner = GemSpawner(EphemeralArena(), rng)
    state_before = rng.getstate()
    spawner.tick(0.4, now=0.4)
    spawner.tick(0.4, now=0.8)
    # no roll yet
    assert rng.getstate() == state_before


def test_spawner_with_seeded_rng_stays_in_bounds():
    arena = EphemeralArena()
    spawner = GemSpawner(arena, random.Random(7))
    spawned = []
    now = 0.0
    for _ in range(2000):
        now += 1.0
        gem = spawner.tick(1.0, now)
        if gem is not None:
            spawned.append(gem)
            assert 10 <= gem.x <= 90
            assert 10 <= gem.y <= 90
        arena.sweep(now)
        assert len(arena.active(EntryKind.GEM)) <= 1
    assert spawned


def test_take_removes_active_gem():
    arena = EphemeralArena()
    spawner = GemSpawner(arena, random.Random())
    assert spawner.take() is None
    gem = arena.add(EntryKind.GEM, "💎", 8.0, now=0.0)
    assert spawner.active_gem == gem
    assert spawner.take() == gem
    assert spawner.active_gem is None
