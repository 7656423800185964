"""Ephemeral events — gem spawns, toasts and floating text.

None of this feeds back into GameState.  Entries live in an arena with a
fixed lifetime and are swept once per tick; the game loop only learns
*that* something appeared or expired.
"""

from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from enum import Enum, auto

from empire.data.balance import BALANCE


class EntryKind(Enum):
    TOAST = auto()
    FLOATING_TEXT = auto()
    GEM = auto()


@dataclass(frozen=True)
class TimedEntry:
    id: int
    kind: EntryKind
    text: str
    expires_at: float
    # Screen position in percent, only meaningful for gems
    x: float = 0.0
    y: float = 0.0


class EphemeralArena:
    """Timed entries, each removed once its lifetime runs out."""

    def __init__(self) -> None:
        self._entries: dict[int, TimedEntry] = {}
        self._ids = itertools.count(1)

    def add(
        self,
        kind: EntryKind,
        text: str,
        lifetime_s: float,
        now: float,
        x: float = 0.0,
        y: float = 0.0,
    ) -> TimedEntry:
        entry = TimedEntry(next(self._ids), kind, text, now + lifetime_s, x, y)
        self._entries[entry.id] = entry
        return entry

    def remove(self, entry_id: int) -> TimedEntry | None:
        return self._entries.pop(entry_id, None)

    def sweep(self, now: float) -> list[TimedEntry]:
        """Drop and return every entry whose lifetime has run out."""
        expired = [e for e in self._entries.values() if now >= e.expires_at]
        for e in expired:
            del self._entries[e.id]
        return expired

    def active(self, kind: EntryKind | None = None) -> list[TimedEntry]:
        if kind is None:
            return list(self._entries.values())
        return [e for e in self._entries.values() if e.kind == kind]

    def __len__(self) -> int:
        return len(self._entries)


class GemSpawner:
    """Rolls for a collectible gem once per interval of simulated time."""

    def __init__(self, arena: EphemeralArena, rng: random.Random) -> None:
        self._arena = arena
        self._rng = rng
        self._timer = 0.0

    @property
    def active_gem(self) -> TimedEntry | None:
        gems = self._arena.active(EntryKind.GEM)
        return gems[0] if gems else None

    def tick(self, dt: float, now: float) -> TimedEntry | None:
        """Advance the roll timer. Returns the gem spawned this tick, if any."""
        bal = BALANCE.events
        self._timer += dt
        if self._timer < bal.gem_roll_interval_s:
            return None
        self._timer = 0.0

        if self.active_gem is not None:
            return None
        if self._rng.random() >= bal.gem_spawn_chance:
            return None

        # Keep clear of the screen edges (10%..90%)
        x = self._rng.random() * 80 + 10
        y = self._rng.random() * 80 + 10
        return self._arena.add(EntryKind.GEM, "💎", bal.gem_lifetime_s, now, x, y)

    def take(self) -> TimedEntry | None:
        """Remove the active gem (it was collected)."""
        gem = self.active_gem
        if gem is not None:
            self._arena.remove(gem.id)
        return gem
