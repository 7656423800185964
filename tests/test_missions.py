"""Tests for mission evaluation."""

from empire.data.missions import ALL_MISSIONS, MissionDef, MissionType
from empire.data.upgrades import Currency
from empire.engine.game_state import GameState, MissionState
from empire.engine.missions import claimable_missions, evaluate_missions, is_satisfied


def test_earn_total_mission():
    m1 = ALL_MISSIONS["m1"]
    assert not is_satisfied(GameState(total_earned=99), m1)
    assert is_satisfied(GameState(total_earned=100), m1)


def test_own_business_mission():
    state = GameState()
    assert not is_satisfied(state, ALL_MISSIONS["m2"])
    state.businesses[0].level = 25
    assert is_satisfied(state, ALL_MISSIONS["m2"])


def test_hire_manager_mission():
    state = GameState()
    assert not is_satisfied(state, ALL_MISSIONS["m3"])
    state.businesses[0].has_manager = True
    assert is_satisfied(state, ALL_MISSIONS["m3"])


def test_dangling_target_is_never_satisfied():
    ghost = MissionDef("ghost", "Ghost", "", MissionType.OWN_BUSINESS, 0, Currency.GEMS, 1, target_id=99)
    newly, missions = evaluate_missions(GameState(), [ghost])
    assert newly == []
    assert "ghost" not in missions


def test_evaluate_reports_newly_completed():
    state = GameState(total_earned=150)
    newly, missions = evaluate_missions(state)
    assert [m.id for m in newly] == ["m1"]
    assert missions["m1"] == MissionState(completed=True, claimed=False)
    # input untouched
    assert state.missions == {}


def test_completed_missions_are_not_reported_twice():
    state = GameState(total_earned=150, missions={"m1": MissionState(completed=True)})
    newly, _ = evaluate_missions(state)
    assert newly == []


def test_completion_is_monotonic():
    state = GameState(
        total_earned=0,
        missions={"m1": MissionState(completed=True, claimed=True), "m3": MissionState(completed=True)},
    )
    _, missions = evaluate_missions(state)
    assert missions["m1"] == MissionState(completed=True, claimed=True)
    assert missions["m3"].completed


def test_claimable_missions():
    state = GameState(missions={
        "m1": MissionState(completed=True, claimed=True),
        "m3": MissionState(completed=True),
    })
    assert [m.id for m in claimable_missions(state)] == ["m3"]
