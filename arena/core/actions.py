"""
Input action definitions.

Actions abstract raw input (keys, typed text) into the semantic
choices a player can make in a battle round. Battle code never looks
at key codes.

Usage:
    action = handler.process_event(event)
    if action is InputAction.FLEE:
        ...
"""

from enum import Enum

import pygame


class InputAction(Enum):
    """Semantic battle inputs, in menu order."""

    ATTACK = "attack"
    DEFEND = "defend"
    MAGIC = "magic"
    COUNTER = "counter"
    FLEE = "flee"


# Default key bindings (can be customized per handler)
DEFAULT_KEY_BINDINGS: dict[InputAction, list[int]] = {
    InputAction.ATTACK: [pygame.K_1, pygame.K_KP1, pygame.K_a],
    InputAction.DEFEND: [pygame.K_2, pygame.K_KP2, pygame.K_d],
    InputAction.MAGIC: [pygame.K_3, pygame.K_KP3, pygame.K_m],
    InputAction.COUNTER: [pygame.K_4, pygame.K_KP4, pygame.K_c],
    InputAction.FLEE: [pygame.K_5, pygame.K_KP5, pygame.K_ESCAPE],
}

# Typed console input, matched after strip().lower()
DEFAULT_TEXT_BINDINGS: dict[InputAction, list[str]] = {
    InputAction.ATTACK: ["1", "attack", "a"],
    InputAction.DEFEND: ["2", "defend", "d"],
    InputAction.MAGIC: ["3", "magic", "m"],
    InputAction.COUNTER: ["4", "counter", "c"],
    InputAction.FLEE: ["5", "flee", "run", "f"],
}
