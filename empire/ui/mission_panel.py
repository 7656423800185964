"""Mission panel — achievements, claimable rewards first."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from empire.data.missions import MISSIONS
from empire.engine.economy import format_number
from empire.engine.game_state import GameState
from empire.engine.missions import claimable_missions


class MissionPanel(Widget):
    DEFAULT_CSS = """
    MissionPanel {
        width: 100%;
        height: auto;
        max-height: 50%;
        padding: 1;
        overflow-y: auto;
    }
    """

    snapshot: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state: GameState | None = None

    def render(self) -> Text:
        text = Text()
        if self._state is None:
            return text

        state = self._state
        claimable = claimable_missions(state)
        text.append(f"  ─── Missions ({len(claimable)} to claim) ───\n", style="bold green")

        for m in claimable:
            text.append(f"  ★ {m.title} ", style="bold green")
            text.append(f"+{format_number(m.reward_value)} {m.reward_type.value}\n", style="green")

        # Next few open objectives
        open_missions = [m for m in MISSIONS if not state.mission(m.id).completed][:3]
        for m in open_missions:
            text.append(f"  ○ {m.title}: ", style="white")
            text.append(f"{m.description}\n", style="dim")

        return text

    def update_from_state(self, state: GameState) -> None:
        self._state = state
        self.snapshot = "|".join(
            f"{mid}:{ms.completed}:{ms.claimed}" for mid, ms in sorted(state.missions.items())
        )
