"""
Input handlers that turn raw input into InputActions.

Two front-ends share the same action vocabulary:
- InputHandler translates pygame events (windowed front-end, `--keys`)
- ConsoleCommandReader parses typed lines (terminal front-end)

Neither decides anything about the battle; they only report which
choice the player made. Unrecognized typed input is handled according
to the configured InvalidInputPolicy.

Usage:
    handler = InputHandler(event_bus)
    action = handler.wait_for_action()

    reader = ConsoleCommandReader(policy=InvalidInputPolicy.REPROMPT)
    action = reader.read_action()
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

import pygame

from arena.core.actions import (
    InputAction,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_TEXT_BINDINGS,
)
from arena.core.config import InvalidInputPolicy
from arena.core.events import EventBus

logger = logging.getLogger(__name__)


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"
    INPUT_REJECTED = "input.input_rejected"


class InputHandler:
    """
    Keyboard front-end.

    Maps pygame key codes to InputActions. Keys without a binding are
    ignored; closing the window counts as FLEE.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus
        self._reverse_key_bindings: dict[int, InputAction] = {}
        for action, keys in DEFAULT_KEY_BINDINGS.items():
            for key in keys:
                self._reverse_key_bindings.setdefault(key, action)

    def process_event(self, event: pygame.event.Event) -> Optional[InputAction]:
        """
        Process a pygame event.

        Returns:
            The bound InputAction for a KEYDOWN, FLEE for QUIT,
            otherwise None
        """
        if event.type == pygame.QUIT:
            action = InputAction.FLEE
        elif event.type == pygame.KEYDOWN:
            action = self._reverse_key_bindings.get(event.key)
            if action is None:
                return None
        else:
            return None

        if self.event_bus:
            self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
        return action

    def wait_for_action(self) -> InputAction:
        """Block on the pygame event queue until a bound key is pressed."""
        while True:
            action = self.process_event(pygame.event.wait())
            if action is not None:
                return action


class ConsoleCommandReader:
    """
    Line-based front-end.

    Reads one line per request and matches it against text bindings.
    End of input is reported as FLEE so a closed terminal ends the battle.
    """

    def __init__(
        self,
        read_line: Callable[[str], str] = input,
        policy: InvalidInputPolicy = InvalidInputPolicy.DEFAULT_ACTION,
        default_action: InputAction = InputAction.ATTACK,
        prompt: str = "Choose action (1-5): ",
        notify: Optional[Callable[[str], None]] = None,
        event_bus: EventBus | None = None,
    ):
        self._read_line = read_line
        self.policy = policy
        self.default_action = default_action
        self.prompt = prompt
        self._notify = notify
        self.event_bus = event_bus

        self._text_bindings: dict[str, InputAction] = {}
        for action, aliases in DEFAULT_TEXT_BINDINGS.items():
            for alias in aliases:
                self._text_bindings[alias] = action

    def parse(self, text: str) -> Optional[InputAction]:
        """Match typed text to an action, None if unrecognized."""
        return self._text_bindings.get(text.strip().lower())

    def read_action(self) -> InputAction:
        """
        Read lines until an action is known.

        Returns:
            The parsed action, the default action for unrecognized input
            under DEFAULT_ACTION, or FLEE at end of input
        """
        while True:
            try:
                line = self._read_line(self.prompt)
            except EOFError:
                logger.info("Input closed, treating as flee")
                return InputAction.FLEE

            action = self.parse(line)
            if action is not None:
                return action

            logger.warning(f"Unrecognized battle input: {line!r}")
            if self.event_bus:
                self.event_bus.publish(InputEvent.INPUT_REJECTED, text=line, policy=self.policy)

            if self.policy is InvalidInputPolicy.DEFAULT_ACTION:
                self._say(f"Invalid choice! Defaulting to {self.default_action.name}")
                return self.default_action

            self._say("Invalid choice! Try again.")

    def _say(self, message: str) -> None:
        if self._notify:
            self._notify(message)
