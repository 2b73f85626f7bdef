"""
Battle context - boss HP and the borrowed player for one encounter.

Phase rules mutate the battle only through this object. The player is
borrowed, not owned: the context calls the player's own damage method
and never keeps it beyond the battle.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, runtime_checkable

from bossfight.battle.narration import BattleEvent, Narrator

logger = logging.getLogger(__name__)

BOSS_MAX_HP = 200


@runtime_checkable
class PlayerLike(Protocol):
    """Capabilities the battle needs from the player entity."""

    def get_hp(self) -> int: ...

    def take_damage(self, amount: int) -> Any: ...

    def is_alive(self) -> bool: ...


@runtime_checkable
class HealthLedger(Protocol):
    """A shared HP tracker that mirrors damage dealt to the player."""

    def take_damage(self, amount: int) -> Any: ...


class BattleContext:
    """
    Mutable state of one boss encounter.

    Attributes:
        player: Borrowed player entity
        boss_hp: Current boss HP, always within [0, boss_max_hp]
        boss_max_hp: Boss maximum HP
        player_defending: Halves boss-inflicted damage while set
        ledger: Optional shared HP tracker
        narrator: Collects and publishes narration
    """

    def __init__(
        self,
        player: PlayerLike,
        boss_max_hp: int = BOSS_MAX_HP,
        ledger: Optional[HealthLedger] = None,
        narrator: Optional[Narrator] = None,
    ):
        if boss_max_hp <= 0:
            raise ValueError(f"boss_max_hp must be positive, got {boss_max_hp}")

        self.player = player
        self.boss_max_hp = boss_max_hp
        self.boss_hp = boss_max_hp
        self.player_defending = False
        self.ledger = ledger
        self.narrator = narrator or Narrator()

    def deal_damage_to_player(self, amount: int) -> int:
        """
        Apply boss-inflicted damage to the player.

        Halved (rounding down) while the player is defending, then
        forwarded to the player and to the shared ledger.

        Args:
            amount: Damage before the defending reduction

        Returns:
            Damage actually forwarded
        """
        if amount < 0:
            raise ValueError(f"Damage cannot be negative: {amount}")

        final_amount = amount // 2 if self.player_defending else amount

        self.player.take_damage(final_amount)
        if self.ledger is not None:
            self.ledger.take_damage(final_amount)

        remaining = max(0, self.player.get_hp())
        logger.debug(
            f"Player takes {final_amount} (requested {amount}, "
            f"defending={self.player_defending}), hp={remaining}"
        )
        self.narrator.emit(
            BattleEvent.DAMAGE_DEALT,
            f"You take {final_amount} damage!",
            target="player",
            amount=final_amount,
            requested=amount,
            defended=self.player_defending,
            remaining_hp=remaining,
        )
        return final_amount

    def deal_damage_to_boss(self, amount: int) -> int:
        """
        Apply damage to the boss, clamping HP at zero.

        Returns:
            Damage actually removed from the boss
        """
        if amount < 0:
            raise ValueError(f"Damage cannot be negative: {amount}")

        actual = min(amount, self.boss_hp)
        self.boss_hp = max(0, self.boss_hp - amount)

        logger.debug(f"Boss takes {actual} (requested {amount}), hp={self.boss_hp}")
        self.narrator.emit(
            BattleEvent.DAMAGE_DEALT,
            f"Boss takes {actual} damage!",
            target="boss",
            amount=actual,
            requested=amount,
            remaining_hp=self.boss_hp,
        )
        return actual

    def boss_hp_percent(self) -> float:
        """Boss HP as a fraction of max HP (0-1)."""
        return self.boss_hp / self.boss_max_hp

    @property
    def player_hp(self) -> int:
        """Player HP as reported by the player entity, floored at 0."""
        return max(0, self.player.get_hp())

    @property
    def boss_defeated(self) -> bool:
        return self.boss_hp <= 0

    @property
    def player_defeated(self) -> bool:
        return self.player.get_hp() <= 0 or not self.player.is_alive()
