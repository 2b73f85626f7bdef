"""Input handling module."""

from arena.input.handler import InputHandler, ConsoleCommandReader, InputEvent

__all__ = [
    "InputHandler",
    "ConsoleCommandReader",
    "InputEvent",
]
