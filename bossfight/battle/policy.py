"""
Boss policies - how the boss picks and settles its moves.

PhasePolicy is the real boss: it rolls from the active phase's weights
and resolves through the phase tables. DemoPolicy is the tutorial boss
that only ever defends, for every phase, so a new player (or a test)
can finish the encounter without being hurt.
"""

from __future__ import annotations

import logging
from typing import Protocol

from arena.core.rng import RandomSource
from bossfight.battle import phases
from bossfight.battle.actions import Action
from bossfight.battle.context import BattleContext
from bossfight.battle.narration import BattleEvent
from bossfight.battle.phases import Outcome, Phase, Resolution

logger = logging.getLogger(__name__)


class BossPolicy(Protocol):
    """Strategy the battle loop asks for the boss's move each round."""

    name: str

    def choose_action(self, phase: Phase, rng: RandomSource) -> Action:
        ...

    def resolve(
        self,
        phase: Phase,
        player_action: Action,
        boss_action: Action,
        ctx: BattleContext,
        rng: RandomSource,
    ) -> Resolution:
        ...


class PhasePolicy:
    """Weighted moves and table resolution of the active phase."""

    name = "phase"

    def choose_action(self, phase: Phase, rng: RandomSource) -> Action:
        return phases.choose_action(phase, rng)

    def resolve(
        self,
        phase: Phase,
        player_action: Action,
        boss_action: Action,
        ctx: BattleContext,
        rng: RandomSource,
    ) -> Resolution:
        return phases.resolve(phase, player_action, boss_action, ctx)


class DemoPolicy:
    """
    Tutorial boss: always DEFEND, never strikes back.

    The player's ATTACK or MAGIC lands a rolled strike in
    [strike_min, strike_max]; DEFEND and COUNTER do nothing against a
    boss that only guards. Phase transitions still happen as usual.
    """

    name = "demo"

    def __init__(self, strike_min: int = 20, strike_max: int = 30):
        if strike_min <= 0 or strike_min > strike_max:
            raise ValueError(f"Invalid demo strike range: {strike_min}-{strike_max}")
        self.strike_min = strike_min
        self.strike_max = strike_max

    def choose_action(self, phase: Phase, rng: RandomSource) -> Action:
        return Action.DEFEND

    def resolve(
        self,
        phase: Phase,
        player_action: Action,
        boss_action: Action,
        ctx: BattleContext,
        rng: RandomSource,
    ) -> Resolution:
        # Bypasses the phase tables: the tutorial boss never deals damage
        boss_damage = 0
        if player_action in (Action.ATTACK, Action.MAGIC):
            strike = rng.randint(self.strike_min, self.strike_max)
            boss_damage = ctx.deal_damage_to_boss(strike)
            outcome = Outcome.PLAYER_WINS
            message = f"Your {player_action.label} slips past the boss's guard!"
        else:
            outcome = Outcome.STALEMATE
            message = "The boss holds its guard. Nothing happens."

        logger.debug(f"Demo exchange {player_action.name} vs DEFEND -> {boss_damage}")
        ctx.narrator.emit(
            BattleEvent.EXCHANGE_RESOLVED,
            message,
            phase=phase,
            outcome=outcome,
            boss_damage=boss_damage,
            player_damage=0,
        )
        return Resolution(
            outcome=outcome,
            player_action=player_action,
            boss_action=boss_action,
            boss_damage=boss_damage,
            player_damage=0,
            message=message,
        )


def policy_for(demo_mode: bool, strike_min: int = 20, strike_max: int = 30) -> BossPolicy:
    """Pick the boss policy for a battle."""
    if demo_mode:
        return DemoPolicy(strike_min, strike_max)
    return PhasePolicy()
