"""
Arena engine

Infrastructure shared by turn-based encounters: a typed event bus,
pydantic components, injectable randomness, configuration and input
translation. Game rules live in the bossfight package.
"""

__version__ = "0.1.0"

from arena.core import (
    EventBus,
    Event,
    Component,
    RandomSource,
    create_rng,
    BattleConfig,
    load_config,
    InputAction,
)

__all__ = [
    "EventBus",
    "Event",
    "Component",
    "RandomSource",
    "create_rng",
    "BattleConfig",
    "load_config",
    "InputAction",
]
