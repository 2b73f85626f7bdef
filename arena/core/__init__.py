"""
Core engine module.

Exports:
- EventBus, Event: Event system
- Component: Pydantic component base
- RandomSource, create_rng: Injectable randomness
- BattleConfig, load_config: Validated configuration
- InputAction: Semantic input actions
"""

from arena.core.events import EventBus, Event
from arena.core.component import Component
from arena.core.rng import RandomSource, create_rng
from arena.core.config import BattleConfig, ConfigError, InvalidInputPolicy, load_config
from arena.core.actions import InputAction

__all__ = [
    # Events
    "EventBus",
    "Event",
    # Components
    "Component",
    # Randomness
    "RandomSource",
    "create_rng",
    # Config
    "BattleConfig",
    "ConfigError",
    "InvalidInputPolicy",
    "load_config",
    # Input
    "InputAction",
]
