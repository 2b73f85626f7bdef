"""
Battle actions - the four moves and the player's round command.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from arena.core.actions import InputAction


class Action(Enum):
    """A move played by either combatant in a round."""
    ATTACK = "attack"
    DEFEND = "defend"
    MAGIC = "magic"
    COUNTER = "counter"

    @property
    def label(self) -> str:
        """Upper-case name for narration."""
        return self.name


class PlayerCommand(Enum):
    """What the player hands to the battle each round."""
    ATTACK = "attack"
    DEFEND = "defend"
    MAGIC = "magic"
    COUNTER = "counter"
    FLEE = "flee"

    @property
    def action(self) -> Optional[Action]:
        """The move this command plays, None for FLEE."""
        if self is PlayerCommand.FLEE:
            return None
        return Action(self.value)

    @property
    def is_flee(self) -> bool:
        return self is PlayerCommand.FLEE

    @classmethod
    def from_input(cls, input_action: InputAction) -> PlayerCommand:
        """Translate an engine input action."""
        return cls(input_action.value)

    @classmethod
    def play(cls, action: Action) -> PlayerCommand:
        """Command that plays the given move."""
        return cls(action.value)
