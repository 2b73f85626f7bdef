"""
Character components - health tracking.
"""

from __future__ import annotations

from pydantic import Field

from arena.core.component import Component


class Health(Component):
    """
    Health points tracking.

    Attributes:
        current: Current HP, never below 0 or above max_hp
        max_hp: Maximum HP
        is_dead: Cached death state
    """
    current: int = Field(default=100, ge=0)
    max_hp: int = Field(default=100, gt=0)
    is_dead: bool = False

    def model_post_init(self, __context):
        """Clamp starting HP to the maximum."""
        self.current = min(self.current, self.max_hp)
        self.is_dead = self.current <= 0

    def take_damage(self, amount: int) -> int:
        """
        Take damage.

        Args:
            amount: Damage to take (negative values count as 0)

        Returns:
            Actual damage dealt
        """
        actual = min(max(amount, 0), self.current)
        self.current -= actual
        if self.current <= 0:
            self.is_dead = True
        return actual
