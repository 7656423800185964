"""Upgrade panel — shop, research and legacy upgrades."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from empire.data.balance import BALANCE
from empire.data.upgrades import ALL_UPGRADES, Currency, UpgradeDef, UpgradeEffect
from empire.engine.economy import balance_of, format_number, get_upgrade_cost
from empire.engine.game_state import GameState

_CURRENCY_ICON = {Currency.MONEY: "$", Currency.GEMS: "💎", Currency.LEGACY: "✨"}


def _stat_summary(udef: UpgradeDef, level: int) -> str:
    """Human-readable total effect at a given level ("" when not owned)."""
    if level <= 0:
        return ""

    v = udef.value_per_level * level
    e = udef.effect

    if e == UpgradeEffect.INCOME_MULT:
        return f"+{v * 100:.0f}% income"
    if e == UpgradeEffect.SPEED_MULT:
        return f"+{v * 100:.0f}% speed"
    if e == UpgradeEffect.CLICK_POWER:
        return f"+{v * 100:.0f}% click power"
    if e == UpgradeEffect.COST_REDUCTION:
        factor = (1.0 - udef.value_per_level) ** level
        return f"{(1.0 - factor) * 100:.0f}% cheaper businesses"
    if e == UpgradeEffect.PRESTIGE_BONUS:
        return f"x{1.0 + v:.2f} total income"
    if e == UpgradeEffect.STARTING_MONEY:
        return f"start with ${format_number(level * BALANCE.prestige.starting_money_per_level)}"
    return ""


class UpgradePanel(Widget):
    """Displays every upgrade with cost and affordability."""

    DEFAULT_CSS = """
    UpgradePanel {
        width: 100%;
        height: 100%;
        padding: 1;
        overflow-y: auto;
    }
    """

    selected: reactive[int] = reactive(0)
    snapshot: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state: GameState | None = None
        self._ids = list(ALL_UPGRADES)

    def render(self) -> Text:
        text = Text()
        text.append("  ═══ Upgrades ═══\n\n", style="bold magenta")
        if self._state is None:
            return text

        state = self._state
        for i, uid in enumerate(self._ids):
            udef = ALL_UPGRADES[uid]
            level = state.upgrades.get(uid, 0)
            maxed = udef.max_level is not None and level >= udef.max_level
            cost = get_upgrade_cost(state, uid)
            affordable = balance_of(state, udef.currency) >= cost

            marker = "▶" if i == self.selected else " "
            text.append(f" {marker} ", style="bold")
            if maxed:
                text.append(f"{udef.title} ", style="dim")
                text.append("MAXED\n", style="bold green")
            else:
                text.append(f"{udef.title} ", style="bold green" if affordable else "bold red")
                cap = f"/{udef.max_level}" if udef.max_level is not None else ""
                text.append(f"Lv.{level}{cap}  ", style="dim")
                text.append(
                    f"{_CURRENCY_ICON[udef.currency]} {format_number(cost)}\n",
                    style="green" if affordable else "red",
                )

            stat = _stat_summary(udef, level)
            if stat:
                text.append(f"     Now: {stat}\n", style="cyan")

        return text

    def move(self, delta: int) -> None:
        self.selected = (self.selected + delta) % len(self._ids)

    @property
    def selected_id(self) -> str:
        return self._ids[self.selected]

    def update_from_state(self, state: GameState) -> None:
        self._state = state
        self.snapshot = "|".join(
            f"{uid}:{lvl}" for uid, lvl in sorted(state.upgrades.items())
        ) + f"|{state.money:.0f}:{state.gems:.0f}:{state.legacy_points:.0f}"
