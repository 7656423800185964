"""Money Empire Web — Flask server that wraps the Python game engine.

Exposes a JSON API for game actions.  The game loop ticks are driven
lazily: each API request catches up on elapsed time before returning the
current state.
"""

from __future__ import annotations

import random
import threading
import time
from pathlib import Path

from flask import Flask, jsonify, request

from empire.data.balance import BALANCE
from empire.data.missions import MISSIONS
from empire.data.upgrades import ALL_UPGRADES
from empire.engine import actions
from empire.engine.economy import (
    balance_of,
    click_value,
    format_money,
    format_number,
    get_business_cost,
    get_upgrade_cost,
)
from empire.engine.effects import Effect, Outcome
from empire.engine.events import EntryKind
from empire.engine.loop import GameLoop
from empire.engine.multipliers import multipliers_for
from empire.engine.prestige import compute_prestige_points
from empire.engine.production import income_per_second
from empire.engine.save import SAVE_DIR, FileStore

# Cap catch-up to 60 s to avoid mega-ticks after long AFK; offline
# earnings only apply on reload.
MAX_CATCH_UP_S = 60.0

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

app = Flask(__name__)
app.config["SAVE_DIR"] = SAVE_DIR
app.config["SEED"] = None

# ---------------------------------------------------------------------------
# In-memory game session (single-player)
# ---------------------------------------------------------------------------

_lock = threading.Lock()
_loop: GameLoop | None = None
_last_tick: float = 0.0
_pending_notifications: list[dict] = []


def _ensure_game() -> GameLoop:
    """Initialise the game if not yet started."""
    global _loop, _last_tick
    if _loop is None:
        store = FileStore(Path(app.config["SAVE_DIR"]))
        _loop = GameLoop.load(store, rng=random.Random(app.config["SEED"]))
        _last_tick = time.time()
    return _loop


def reset_session() -> None:
    """Forget the in-memory game (the next request reloads from disk)."""
    global _loop
    with _lock:
        if _loop is not None:
            _loop.stop()
        _loop = None
        _pending_notifications.clear()


def _do_ticks() -> None:
    """Catch up game ticks since the last call."""
    global _last_tick
    loop = _ensure_game()
    now = time.time()
    dt = now - _last_tick
    if dt <= 0:
        return
    dt = min(dt, MAX_CATCH_UP_S)
    _last_tick = now

    while dt > 0:
        step = min(dt, BALANCE.loop.max_dt_s)
        _queue(loop.step(step, now))
        dt -= step


def _queue(effects: list[Effect]) -> None:
    for e in effects:
        _pending_notifications.append({"kind": e.kind.name, "amount": e.amount, "detail": e.detail})


def _state_json() -> dict:
    """Build the JSON blob sent to the frontend."""
    loop = _ensure_game()
    s = loop.state
    rates = multipliers_for(s)

    businesses = []
    for b in s.businesses:
        cost = get_business_cost(b, 1, rates.cost_reduction)
        businesses.append({
            "id": b.id,
            "name": b.name,
            "icon": b.icon,
            "level": b.level,
            "has_manager": b.has_manager,
            "progress": b.progress,
            "cost": format_money(cost),
            "cost_raw": cost,
            "can_afford": s.money >= cost,
            "manager_cost": format_money(b.manager_cost),
            "manager_cost_raw": b.manager_cost,
        })

    upgrades = []
    for uid, udef in ALL_UPGRADES.items():
        level = s.upgrades.get(uid, 0)
        cost = get_upgrade_cost(s, uid)
        maxed = udef.max_level is not None and level >= udef.max_level
        upgrades.append({
            "id": uid,
            "title": udef.title,
            "description": udef.description,
            "currency": udef.currency.value,
            "level": level,
            "max_level": udef.max_level,
            "cost": format_number(cost),
            "cost_raw": cost,
            "can_afford": not maxed and balance_of(s, udef.currency) >= cost,
            "maxed": maxed,
        })

    missions = []
    for m in MISSIONS:
        ms = s.mission(m.id)
        missions.append({
            "id": m.id,
            "title": m.title,
            "description": m.description,
            "reward_type": m.reward_type.value,
            "reward_value": m.reward_value,
            "completed": ms.completed,
            "claimed": ms.claimed,
        })

    gem = loop.active_gem

    # Drain pending notifications
    notifs = list(_pending_notifications)
    _pending_notifications.clear()

    return {
        "money": format_money(s.money),
        "money_raw": s.money,
        "gems": s.gems,
        "legacy_points": s.legacy_points,
        "total_earned": format_money(s.total_earned),
        "total_earned_raw": s.total_earned,
        "prestige_multiplier": s.prestige_multiplier,
        "prestige_points": compute_prestige_points(s.total_earned),
        "income_per_s": income_per_second(s.businesses) * rates.income_mult,
        "click_value": click_value(s),
        "multipliers": {
            "income": rates.income_mult,
            "speed": rates.speed_mult,
            "cost_reduction": rates.cost_reduction,
            "click_power": rates.click_power,
        },
        "businesses": businesses,
        "upgrades": upgrades,
        "missions": missions,
        "gem": {"id": gem.id, "x": gem.x, "y": gem.y, "expires_at": gem.expires_at} if gem else None,
        "toasts": [e.text for e in loop.arena.active(EntryKind.TOAST)],
        "history": [{"time": t, "value": v} for t, v in loop.history],
        "notifications": notifs,
        "server_time": time.time(),
    }


def _action_response(outcome: Outcome):
    _queue(outcome.effects)
    data = _state_json()
    data["result"] = {
        "ok": outcome.ok,
        "amount": outcome.amount,
        "reason": outcome.reason.name if outcome.reason else None,
    }
    return jsonify(data)


def _run(action: actions.Action):
    with _lock:
        loop = _ensure_game()
        _do_ticks()
        return _action_response(loop.dispatch(action))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/state")
def api_state():
    with _lock:
        _ensure_game()
        _do_ticks()
        return jsonify(_state_json())


@app.route("/api/action/work", methods=["POST"])
def action_work():
    return _run(actions.ManualWork())


@app.route("/api/action/buy/<int:business_id>", methods=["POST"])
def action_buy(business_id: int):
    body = request.get_json(silent=True) or {}
    try:
        count = int(body.get("count", 1))
    except (TypeError, ValueError):
        count = 1
    return _run(actions.BuyBusiness(business_id, count))


@app.route("/api/action/hire/<int:business_id>", methods=["POST"])
def action_hire(business_id: int):
    return _run(actions.HireManager(business_id))


@app.route("/api/action/upgrade/<upgrade_id>", methods=["POST"])
def action_upgrade(upgrade_id: str):
    return _run(actions.BuyUpgrade(upgrade_id))


@app.route("/api/action/claim/<mission_id>", methods=["POST"])
def action_claim(mission_id: str):
    return _run(actions.ClaimMission(mission_id))


@app.route("/api/action/collect_gem", methods=["POST"])
def action_collect_gem():
    return _run(actions.CollectGem())


@app.route("/api/action/prestige", methods=["POST"])
def action_prestige():
    with _lock:
        loop = _ensure_game()
        _do_ticks()
        outcome = loop.dispatch(actions.Prestige())
        if outcome.ok:
            _queue(loop.save())
        return _action_response(outcome)


@app.route("/api/action/save", methods=["POST"])
def action_save():
    with _lock:
        loop = _ensure_game()
        _do_ticks()
        loop.save()
        return jsonify({"saved": True, "last_save_time": loop.state.last_save_time})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_server(
    host: str = "127.0.0.1",
    port: int = 5000,
    debug: bool = False,
    save_dir: Path = SAVE_DIR,
    seed: int | None = None,
) -> None:
    """Start the Flask development server."""
    app.config["SAVE_DIR"] = save_dir
    app.config["SEED"] = seed
    app.run(host=host, port=port, debug=debug, use_reloader=False)
