"""HUD widget — currencies, multipliers, prestige preview, toasts."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from empire.data.balance import BALANCE
from empire.engine.economy import format_money, format_number
from empire.engine.events import EntryKind
from empire.engine.loop import GameLoop
from empire.engine.multipliers import multipliers_for
from empire.engine.prestige import compute_prestige_points
from empire.engine.production import income_per_second

_SPARK = "▁▂▃▄▅▆▇█"


def sparkline(values: list[float]) -> str:
    """Tiny text chart of the money history."""
    if not values:
        return ""
    lo, hi = min(values), max(values)
    span = hi - lo
    if span <= 0:
        return _SPARK[0] * len(values)
    return "".join(_SPARK[int((v - lo) / span * (len(_SPARK) - 1))] for v in values)


class HUD(Widget):
    """Heads-up display showing core game stats."""

    DEFAULT_CSS = """
    HUD {
        width: 100%;
        height: 100%;
        padding: 1;
    }
    """

    money: reactive[str] = reactive("$0")
    gems: reactive[str] = reactive("0")
    legacy: reactive[str] = reactive("0")
    net_worth: reactive[str] = reactive("$0")
    multiplier: reactive[str] = reactive("x1.00")
    income: reactive[str] = reactive("$0/s")
    prestige_points: reactive[int] = reactive(0)
    chart: reactive[str] = reactive("")
    gem_text: reactive[str] = reactive("")
    toasts: reactive[str] = reactive("")

    def render(self) -> Text:
        text = Text()
        text.append("  === MONEY EMPIRE ===\n\n", style="bold yellow")

        text.append("  Cash: ", style="dim")
        text.append(f"{self.money}\n", style="bold green")
        text.append("  Gems: ", style="dim")
        text.append(f"💎 {self.gems}\n", style="bold cyan")
        text.append("  Legacy: ", style="dim")
        text.append(f"✨ {self.legacy}\n", style="bold magenta")
        text.append("\n")

        text.append("  Net Worth: ", style="dim")
        text.append(f"{self.net_worth}\n", style="white")
        text.append("  Multiplier: ", style="dim")
        text.append(f"{self.multiplier}\n", style="yellow")
        text.append("  Income: ", style="dim")
        text.append(f"{self.income}\n", style="green")
        if self.chart:
            text.append(f"  {self.chart}\n", style="green")
        text.append("\n")

        if self.prestige_points > 0:
            text.append(f"  [P] Prestige for +{self.prestige_points} Legacy\n", style="bold magenta")
        else:
            text.append(
                f"  Prestige at {format_money(BALANCE.prestige.threshold)} lifetime\n",
                style="dim",
            )

        if self.gem_text:
            text.append(f"\n  {self.gem_text}\n", style="bold cyan")

        if self.toasts:
            text.append("\n")
            for line in self.toasts.split("\n"):
                text.append(f"  {line}\n", style="italic")

        text.append("\n")
        text.append("  [Space] Work  [B] Buy  [X] Buy x10\n", style="dim italic")
        text.append("  [H] Hire  [U] Upgrade  [C] Claim\n", style="dim italic")
        text.append("  [G] Gem  [P] Prestige  [Q] Quit\n", style="dim italic")
        return text

    def update_from_loop(self, loop: GameLoop) -> None:
        """Sync HUD with the committed state."""
        state = loop.state
        rates = multipliers_for(state)
        self.money = format_money(state.money)
        self.gems = format_number(state.gems)
        self.legacy = format_number(state.legacy_points)
        self.net_worth = format_money(state.total_earned)
        self.multiplier = f"x{state.prestige_multiplier:.2f}"
        self.income = f"{format_money(income_per_second(state.businesses) * rates.income_mult)}/s"
        self.prestige_points = compute_prestige_points(state.total_earned)
        self.chart = sparkline([v for _, v in loop.history])
        self.gem_text = "💎 A Gem has appeared! [G]" if loop.active_gem else ""
        self.toasts = "\n".join(e.text for e in loop.arena.active(EntryKind.TOAST)[-3:])
