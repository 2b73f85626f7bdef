"""
Battle actors - the hero and the shared HP ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bossfight.components import Health

PLAYER_MAX_HP = 100


@dataclass
class Hero:
    """
    The player entity taken into a boss battle.

    Satisfies PlayerLike: the battle only borrows it through
    get_hp/take_damage/is_alive.
    """
    name: str = "Hero"
    health: Health = field(default_factory=lambda: Health(current=PLAYER_MAX_HP, max_hp=PLAYER_MAX_HP))

    @classmethod
    def with_hp(cls, hp: int, max_hp: int = PLAYER_MAX_HP, name: str = "Hero") -> Hero:
        """Create a hero with a given starting HP."""
        return cls(name=name, health=Health(current=hp, max_hp=max(hp, max_hp)))

    def get_hp(self) -> int:
        return self.health.current

    def take_damage(self, amount: int) -> int:
        """Take damage, returning the HP actually lost."""
        return self.health.take_damage(amount)

    def is_alive(self) -> bool:
        return not self.health.is_dead


@dataclass
class GameLedger:
    """
    Run-wide HP tracker mirrored alongside the hero.

    Passed explicitly into the battle; nothing looks it up globally.
    """
    hp: int = PLAYER_MAX_HP
    damage_taken: int = 0
    hits_taken: int = 0

    def take_damage(self, amount: int) -> None:
        amount = max(amount, 0)
        self.hp = max(0, self.hp - amount)
        self.damage_taken += amount
        if amount > 0:
            self.hits_taken += 1
