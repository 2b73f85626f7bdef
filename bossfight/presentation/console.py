"""
Console presentation - renders narration and the battle status screen.

The presenter is a plain EventBus subscriber; the battle has no idea
it exists. Output goes through an injectable writer so tests can
capture it.
"""

from __future__ import annotations

from typing import Callable, Optional

from arena.core.events import Event, EventBus
from bossfight.battle.narration import BattleEvent
from bossfight.battle.system import BossBattle

BAR_LENGTH = 20
RULE = "=" * 40
THIN_RULE = "-" * 40

ACTION_MENU = "\n".join([
    "YOUR TURN!",
    THIN_RULE,
    "Choose your action:",
    "1. ATTACK  - Physical strike",
    "2. DEFEND  - Halve incoming damage",
    "3. MAGIC   - Cast a spell",
    "4. COUNTER - Perfect timing counter",
    "5. FLEE    - Run from battle",
    THIN_RULE,
])


def hp_bar(current: int, maximum: int, length: int = BAR_LENGTH) -> str:
    """
    Render an HP bar like [████████░░░░].

    Args:
        current: Current HP (clamped into [0, maximum])
        maximum: Maximum HP
        length: Number of cells inside the brackets
    """
    if maximum <= 0:
        filled = 0
    else:
        clamped = min(max(current, 0), maximum)
        filled = (clamped * length) // maximum
    return "[" + "█" * filled + "░" * (length - filled) + "]"


def format_status(battle: BossBattle, player_max_hp: Optional[int] = None) -> str:
    """Render the status block shown before each round."""
    player_max = player_max_hp or battle.config.player_max_hp
    phase = battle.phase
    lines = [
        RULE,
        f"BATTLE STATUS - Round {battle.rounds_played + 1}",
        RULE,
        f"BOSS HP: {hp_bar(battle.boss_hp, battle.boss_max_hp)} {battle.boss_hp}/{battle.boss_max_hp}",
        f"   State: {phase.display_name}",
        f"   Rules: {phase.rules.description}",
        "",
        f"YOUR HP: {hp_bar(battle.player_hp, player_max)} {battle.player_hp}/{player_max}",
        RULE,
    ]
    return "\n".join(lines)


class ConsolePresenter:
    """
    Writes every battle narration line to the console.

    Attributes:
        lines: Everything written so far
    """

    def __init__(self, event_bus: EventBus, write: Callable[[str], None] = print):
        self._write = write
        self.lines: list[str] = []
        for event_type in BattleEvent:
            event_bus.subscribe(event_type, self.on_event, weak=False)

    def on_event(self, event: Event) -> None:
        message = event.get("message")
        if not message:
            return

        if event.type is BattleEvent.PHASE_TRANSITION:
            self.emit("")
            self.emit(f">> {message}")
        elif event.type is BattleEvent.BATTLE_ENDED:
            self.emit("")
            self.emit(RULE)
            self.emit(message)
            self.emit(RULE)
        else:
            self.emit(message)

    def show_status(self, battle: BossBattle) -> None:
        self.emit(format_status(battle))
        self.emit(ACTION_MENU)

    def emit(self, text: str) -> None:
        self.lines.append(text)
        self._write(text)
