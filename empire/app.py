"""Money Empire — Main Textual Application.

Wires the game loop into a playable TUI.  The app never mutates game state
itself: every key press becomes an action dispatched through the loop.
"""

from __future__ import annotations

import random
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header

from empire.data.balance import BALANCE
from empire.data.missions import MISSIONS
from empire.engine import actions
from empire.engine.effects import Outcome
from empire.engine.loop import GameLoop
from empire.engine.missions import claimable_missions
from empire.engine.save import SAVE_DIR, FileStore
from empire.ui.business_panel import BusinessPanel
from empire.ui.hud import HUD
from empire.ui.mission_panel import MissionPanel
from empire.ui.upgrade_panel import UpgradePanel


class EmpireApp(App):
    """The Money Empire TUI game application."""

    TITLE = "Money Empire"
    SUB_TITLE = "Buy. Automate. Prestige."

    BINDINGS = [
        Binding("space", "work", "Work", show=True, priority=True),
        Binding("up", "select_business(-1)", "Prev", show=False),
        Binding("down", "select_business(1)", "Next", show=False),
        Binding("b", "buy(1)", "Buy", show=True),
        Binding("x", "buy(10)", "Buy x10", show=False),
        Binding("h", "hire", "Hire", show=True),
        Binding("left_square_bracket", "select_upgrade(-1)", "Prev upgrade", show=False),
        Binding("right_square_bracket", "select_upgrade(1)", "Next upgrade", show=False),
        Binding("u", "buy_upgrade", "Upgrade", show=True),
        Binding("c", "claim", "Claim", show=True),
        Binding("g", "collect_gem", "Gem", show=False),
        Binding("p", "prestige", "Prestige", show=True),
        Binding("q", "quit_game", "Quit", show=True),
    ]

    def __init__(self, save_dir: Path = SAVE_DIR, seed: int | None = None) -> None:
        super().__init__()
        self._loop = GameLoop.load(FileStore(save_dir), rng=random.Random(seed))

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="game-container"):
            yield HUD(id="hud-panel")
            yield BusinessPanel(id="business-panel")
            with Vertical(id="side-panel"):
                yield UpgradePanel(id="upgrade-panel")
                yield MissionPanel(id="mission-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Start the game loop timer."""
        timer = self.set_interval(1.0 / BALANCE.tick_rate_hz, self._game_tick)
        self._loop.bind(timer)
        if self._loop.offline_earned > 0:
            self.notify("Welcome back! Offline earnings credited.", timeout=3)
        self._sync_ui()

    def on_unmount(self) -> None:
        self._loop.stop()

    def _game_tick(self) -> None:
        self._loop.tick()
        self._sync_ui()

    def _sync_ui(self) -> None:
        """Push the committed state to all widgets."""
        state = self._loop.state
        self.query_one("#hud-panel", HUD).update_from_loop(self._loop)
        self.query_one("#business-panel", BusinessPanel).update_from_state(state)
        self.query_one("#upgrade-panel", UpgradePanel).update_from_state(state)
        self.query_one("#mission-panel", MissionPanel).update_from_state(state)

    def _report(self, outcome: Outcome) -> None:
        if not outcome.ok and outcome.effects:
            self.notify(outcome.effects[0].detail, severity="error", timeout=1)
        self._sync_ui()

    # ── Actions ──────────────────────────────────────

    def action_work(self) -> None:
        self._report(self._loop.dispatch(actions.ManualWork()))

    def action_select_business(self, delta: int) -> None:
        panel = self.query_one("#business-panel", BusinessPanel)
        panel.move(delta)

    def action_select_upgrade(self, delta: int) -> None:
        self.query_one("#upgrade-panel", UpgradePanel).move(delta)

    def action_buy(self, count: int) -> None:
        bid = self.query_one("#business-panel", BusinessPanel).selected_id
        if bid is not None:
            self._report(self._loop.dispatch(actions.BuyBusiness(bid, count)))

    def action_hire(self) -> None:
        bid = self.query_one("#business-panel", BusinessPanel).selected_id
        if bid is not None:
            self._report(self._loop.dispatch(actions.HireManager(bid)))

    def action_buy_upgrade(self) -> None:
        uid = self.query_one("#upgrade-panel", UpgradePanel).selected_id
        self._report(self._loop.dispatch(actions.BuyUpgrade(uid)))

    def action_claim(self) -> None:
        """Claim every completed mission."""
        claimable = claimable_missions(self._loop.state, MISSIONS)
        if not claimable:
            self.notify("Nothing to claim yet.", severity="information", timeout=1)
            return
        for m in claimable:
            self._loop.dispatch(actions.ClaimMission(m.id))
        self.notify(f"Claimed {len(claimable)} reward(s)!", timeout=2)
        self._sync_ui()

    def action_collect_gem(self) -> None:
        self._report(self._loop.dispatch(actions.CollectGem()))

    def action_prestige(self) -> None:
        outcome = self._loop.dispatch(actions.Prestige())
        if outcome.ok:
            self._loop.save()
            self.notify(
                f"✨ Prestige! +{outcome.amount:.0f} Legacy, "
                f"x{self._loop.state.prestige_multiplier:.2f} multiplier",
                severity="warning", timeout=4,
            )
        self._report(outcome)

    def action_quit_game(self) -> None:
        """Save and quit."""
        self._loop.save()
        self._loop.stop()
        self.exit()
