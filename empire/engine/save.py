"""Save/load — persists the game between sessions.

Storage is an opaque get/set of one JSON blob under a namespaced key.
Loading is forward-compatible: any field missing from an older save takes
its fresh-state value.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import replace
from pathlib import Path
from typing import Protocol

from empire.data.balance import BALANCE
from empire.data.businesses import ALL_BUSINESSES
from empire.engine.game_state import Business, GameState, MissionState, new_game_state
from empire.engine.offline import apply_offline_earnings

logger = logging.getLogger(__name__)

SAVE_DIR = Path.home() / ".empire"


class CorruptSnapshot(ValueError):
    """Persisted data could not be decoded into a GameState."""


class SnapshotStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, blob: str) -> None: ...


class FileStore:
    """One JSON file per key inside a directory."""

    def __init__(self, directory: Path = SAVE_DIR) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptSnapshot(f"{path.name} is not UTF-8: {exc}") from exc

    def set(self, key: str, blob: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(blob, encoding="utf-8")

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class MemoryStore:
    """In-process store, handy for tests and throwaway sessions."""

    def __init__(self) -> None:
        self.blobs: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.blobs.get(key)

    def set(self, key: str, blob: str) -> None:
        self.blobs[key] = blob


# ── Serialisation helpers ────────────────────────────────────────


def state_to_dict(state: GameState) -> dict:
    s = state
    return {
        "money": s.money,
        "gems": s.gems,
        "legacy_points": s.legacy_points,
        "total_earned": s.total_earned,
        "prestige_multiplier": s.prestige_multiplier,
        "start_time": s.start_time,
        "last_save_time": s.last_save_time,
        "businesses": [
            {
                "id": b.id,
                "name": b.name,
                "icon": b.icon,
                "base_cost": b.base_cost,
                "base_income": b.base_income,
                "manager_cost": b.manager_cost,
                "cycle_time": b.cycle_time,
                "level": b.level,
                "has_manager": b.has_manager,
                "progress": b.progress,
            }
            for b in s.businesses
        ],
        "upgrades": dict(s.upgrades),
        "missions": {
            mid: {"completed": ms.completed, "claimed": ms.claimed}
            for mid, ms in s.missions.items()
        },
    }


def _merge_business(fresh: Business, d: dict) -> Business:
    """Saved progress on top of the current catalog entry."""
    progress = float(d.get("progress", fresh.progress))
    if not math.isfinite(progress):
        progress = 0.0
    progress = progress % 100.0 if progress >= 100.0 else max(0.0, progress)
    return Business(
        id=fresh.id,
        name=d.get("name", fresh.name),
        icon=d.get("icon", fresh.icon),
        base_cost=float(d.get("base_cost", fresh.base_cost)),
        base_income=float(d.get("base_income", fresh.base_income)),
        manager_cost=float(d.get("manager_cost", fresh.manager_cost)),
        cycle_time=float(d.get("cycle_time", fresh.cycle_time)),
        level=max(0, int(d.get("level", fresh.level))),
        has_manager=bool(d.get("has_manager", fresh.has_manager)),
        progress=progress,
    )


def dict_to_state(d: dict, now: float | None = None) -> GameState:
    """Decode a snapshot dict. Raises CorruptSnapshot on an unusable shape."""
    if not isinstance(d, dict):
        raise CorruptSnapshot(f"snapshot is {type(d).__name__}, not an object")

    fresh = new_game_state(now)
    try:
        saved_businesses = {
            int(b["id"]): b for b in d.get("businesses", []) if isinstance(b, dict)
        }
        businesses = [
            _merge_business(b, saved_businesses[b.id]) if b.id in saved_businesses else b
            for b in fresh.businesses
        ]
        dropped = set(saved_businesses) - set(ALL_BUSINESSES)
        if dropped:
            logger.warning("Dropping unknown businesses from save: %s", sorted(dropped))

        missions = {
            str(mid): MissionState(
                completed=bool(ms.get("completed", False)),
                claimed=bool(ms.get("claimed", False)) and bool(ms.get("completed", False)),
            )
            for mid, ms in (d.get("missions") or {}).items()
        }

        return GameState(
            money=max(0.0, float(d.get("money", fresh.money))),
            gems=max(0.0, float(d.get("gems", fresh.gems))),
            legacy_points=max(0.0, float(d.get("legacy_points", fresh.legacy_points))),
            total_earned=max(0.0, float(d.get("total_earned", fresh.total_earned))),
            prestige_multiplier=max(1.0, float(d.get("prestige_multiplier", fresh.prestige_multiplier))),
            businesses=businesses,
            upgrades={str(k): int(v) for k, v in (d.get("upgrades") or {}).items()},
            missions=missions,
            start_time=float(d.get("start_time", fresh.start_time)),
            last_save_time=float(d.get("last_save_time", fresh.last_save_time)),
        )
    except (LookupError, ArithmeticError, TypeError, ValueError, AttributeError) as exc:
        raise CorruptSnapshot(str(exc)) from exc


def dumps_state(state: GameState) -> str:
    return json.dumps(state_to_dict(state), indent=2)


def loads_state(blob: str, now: float | None = None) -> GameState:
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise CorruptSnapshot(str(exc)) from exc
    return dict_to_state(data, now)


# ── Public API ───────────────────────────────────────────────────


def save_game(state: GameState, store: SnapshotStore, now: float | None = None) -> GameState:
    """Stamp last_save_time and persist. Returns the stamped state.

    Storage failures are logged and swallowed: saving is fire-and-forget.
    """
    stamped = replace(state, last_save_time=time.time() if now is None else now)
    try:
        store.set(BALANCE.save_key, dumps_state(stamped))
    except OSError:
        logger.exception("Save failed")
    return stamped


def load_game(store: SnapshotStore, now: float | None = None) -> tuple[GameState, float]:
    """Load the saved game and back-fill offline earnings.

    Returns (state, offline earnings).  A missing or corrupt save yields a
    fresh state.
    """
    if now is None:
        now = time.time()
    try:
        blob = store.get(BALANCE.save_key)
        if blob is None:
            return new_game_state(now), 0.0
        state = loads_state(blob, now)
    except OSError:
        logger.exception("Could not read save")
        return new_game_state(now), 0.0
    except CorruptSnapshot as exc:
        logger.warning("Corrupt save, starting fresh: %s", exc)
        return new_game_state(now), 0.0

    return apply_offline_earnings(state, now)
