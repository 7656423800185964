"""Mission evaluator — detects objectives that became true."""

from __future__ import annotations

from collections.abc import Iterable

from empire.data.missions import MISSIONS, MissionDef, MissionType
from empire.engine.game_state import GameState, MissionState


def is_satisfied(state: GameState, mission: MissionDef) -> bool:
    """True if the mission's objective currently holds.

    A mission pointing at a business that doesn't exist is never satisfied.
    """
    if mission.type == MissionType.EARN_TOTAL:
        return state.total_earned >= mission.target_value

    if mission.target_id is None:
        return False
    business = state.find_business(mission.target_id)
    if business is None:
        return False

    if mission.type == MissionType.OWN_BUSINESS:
        return business.level >= mission.target_value
    if mission.type == MissionType.HIRE_MANAGER:
        return business.has_manager
    return False


def evaluate_missions(
    state: GameState,
    catalog: Iterable[MissionDef] = MISSIONS,
) -> tuple[list[MissionDef], dict[str, MissionState]]:
    """Scan the catalog against state.

    Returns (newly completed missions, updated mission map).  Existing
    entries are copied, never un-completed or un-claimed; the input state
    is not modified.
    """
    missions = {
        mid: MissionState(completed=ms.completed, claimed=ms.claimed)
        for mid, ms in state.missions.items()
    }
    newly: list[MissionDef] = []
    for mission in catalog:
        current = missions.get(mission.id)
        if current is not None and current.completed:
            continue
        if is_satisfied(state, mission):
            missions[mission.id] = MissionState(
                completed=True,
                claimed=current.claimed if current is not None else False,
            )
            newly.append(mission)
    return newly, missions


def claimable_missions(state: GameState, catalog: Iterable[MissionDef] = MISSIONS) -> list[MissionDef]:
    """Completed but not yet claimed."""
    result = []
    for m in catalog:
        ms = state.mission(m.id)
        if ms.completed and not ms.claimed:
            result.append(m)
    return result
