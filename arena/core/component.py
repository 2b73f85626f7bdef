"""
Component base class for data-only battle records.

Components hold state and validate it; rules that change that state
live in the battle modules. Pydantic gives us:
- Validation on construction and on assignment
- Defaults without boilerplate

Usage:
    class Health(Component):
        current: int = 100
        max_hp: int = 100
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Subclasses may expose small clamping helpers (take_damage),
    but never orchestration.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )
