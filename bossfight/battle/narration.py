"""
Battle narration - structured events describing what happened.

The battle core never prints. Every noteworthy step becomes a
Narration collected per round and, when an EventBus is attached,
published so presenters and other listeners can react.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional

from arena.core.events import EventBus


class BattleEvent(Enum):
    """Events published by a boss battle."""
    BATTLE_STARTED = auto()     # boss_hp, boss_max_hp, player_hp, demo_mode
    PHASE_ENTERED = auto()      # phase, rules
    ACTION_CHOSEN = auto()      # side, action
    PLAYER_DEFENDING = auto()   # round
    CLASH = auto()              # action, damage
    EXCHANGE_RESOLVED = auto()  # outcome, boss_damage, player_damage
    DAMAGE_DEALT = auto()       # target, amount, remaining_hp
    PHASE_TRANSITION = auto()   # old_phase, new_phase, hp_percent
    BATTLE_ENDED = auto()       # outcome, rounds


@dataclass(frozen=True)
class Narration:
    """One human-readable line plus its structured payload."""
    event: BattleEvent
    message: str
    data: dict[str, Any] = field(default_factory=dict)


class Narrator:
    """
    Collects narration for the current round.

    Attributes:
        event_bus: Optional bus every narration is published on
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus
        self._pending: list[Narration] = []

    def emit(self, event: BattleEvent, message: str, **data: Any) -> Narration:
        """Record a narration and publish it."""
        narration = Narration(event=event, message=message, data=data)
        self._pending.append(narration)
        if self.event_bus:
            self.event_bus.publish(event, message=message, **data)
        return narration

    def drain(self) -> list[Narration]:
        """Return and forget everything recorded since the last drain."""
        pending, self._pending = self._pending, []
        return pending

