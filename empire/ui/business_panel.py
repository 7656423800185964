"""Business panel — owned production units with cycle progress bars."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from empire.engine.economy import format_money, get_business_cost
from empire.engine.game_state import GameState
from empire.engine.multipliers import multipliers_for


class BusinessPanel(Widget):
    """Lists every business; the highlighted one is the action target."""

    DEFAULT_CSS = """
    BusinessPanel {
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

    def render(self) -> Text:
        text = Text()
        text.append("  ═══ Businesses ═══\n\n", style="bold yellow")
        if self._state is None:
            return text

        state = self._state
        cost_reduction = multipliers_for(state).cost_reduction
        for i, b in enumerate(state.businesses):
            marker = "▶" if i == self.selected else " "
            owned = b.level > 0
            text.append(f" {marker} {b.icon} ", style="bold")
            text.append(f"{b.name} ", style="bold white" if owned else "dim")
            text.append(f"Lv.{b.level}", style="dim")
            if b.has_manager:
                text.append("  [auto]", style="green")
            text.append("\n")

            if owned:
                bar_width = 16
                filled = int(b.progress / 100 * bar_width)
                bar = "#" * filled + "." * (bar_width - filled)
                text.append(f"     [{bar}]\n", style="green" if b.has_manager else "dim")

            cost = get_business_cost(b, 1, cost_reduction)
            text.append(
                f"     Buy: {format_money(cost)}",
                style="green" if state.money >= cost else "red",
            )
            if not b.has_manager:
                text.append(
                    f"  Manager: {format_money(b.manager_cost)}",
                    style="green" if state.money >= b.manager_cost else "dim",
                )
            text.append("\n")

        return text

    def move(self, delta: int) -> None:
        if self._state is None:
            return
        self.selected = (self.selected + delta) % len(self._state.businesses)

    @property
    def selected_id(self) -> int | None:
        if self._state is None or not self._state.businesses:
            return None
        return self._state.businesses[self.selected].id

    def update_from_state(self, state: GameState) -> None:
        self._state = state
        self.snapshot = "|".join(
            f"{b.level}:{b.has_manager}:{b.progress:.0f}" for b in state.businesses
        ) + f"|m:{state.money:.0f}"
