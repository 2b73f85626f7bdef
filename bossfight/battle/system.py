"""
Boss battle - round-based controller for one encounter.

The battle is a small state machine:

    ONGOING --flee--> FLED
    ONGOING --boss HP 0--> WON
    ONGOING --player HP 0--> LOST

Each round has exactly one suspension point: the player's command.
The caller obtains it however it likes (keyboard, console, script) and
hands it to play_round(); the rest of the round (boss move, resolution,
phase transition, defending reset) then runs to completion.

Usage:
    battle = BossBattle(hero, rng=create_rng(7), events=bus)
    while battle.is_ongoing:
        report = battle.play_round(read_command())
    print(battle.outcome)

    # or let run_battle drive the loop
    outcome = run_battle(hero, demo_mode=False, action_source=read_command)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional, Union

from arena.core.actions import InputAction
from arena.core.config import BattleConfig
from arena.core.events import EventBus
from arena.core.rng import RandomSource, create_rng
from bossfight.battle import phases
from bossfight.battle.actions import Action, PlayerCommand
from bossfight.battle.context import BattleContext, HealthLedger, PlayerLike
from bossfight.battle.errors import BattleOverError, BattleStalledError, RulesTableError
from bossfight.battle.narration import BattleEvent, Narration, Narrator
from bossfight.battle.phases import Phase, Resolution
from bossfight.battle.policy import BossPolicy, policy_for

logger = logging.getLogger(__name__)


class BattleState(Enum):
    """State of the battle."""
    ONGOING = auto()
    WON = auto()
    LOST = auto()
    FLED = auto()


class BattleOutcome(Enum):
    """Final result of an encounter, produced exactly once."""
    WON = "won"
    LOST = "lost"
    FLED = "fled"


_OUTCOME_FOR_STATE = {
    BattleState.WON: BattleOutcome.WON,
    BattleState.LOST: BattleOutcome.LOST,
    BattleState.FLED: BattleOutcome.FLED,
}

_OUTCOME_MESSAGES = {
    BattleOutcome.WON: "VICTORY! You defeated the boss!",
    BattleOutcome.LOST: "DEFEAT... You were defeated by the boss.",
    BattleOutcome.FLED: "You fled from the battle!",
}


@dataclass
class RoundReport:
    """What happened in one round."""
    round_number: int
    command: PlayerCommand
    state: BattleState
    phase_before: Phase
    phase_after: Phase
    boss_hp: int
    player_hp: int
    player_action: Optional[Action] = None
    boss_action: Optional[Action] = None
    resolution: Optional[Resolution] = None
    events: list[Narration] = field(default_factory=list)

    @property
    def transitioned(self) -> bool:
        """Check if the boss changed phase this round."""
        return self.phase_after is not self.phase_before


class BossBattle:
    """
    Controller for a single boss encounter.

    Owns the BattleContext and the current Phase; borrows the player.
    """

    def __init__(
        self,
        player: PlayerLike,
        *,
        demo_mode: bool = False,
        rng: Optional[RandomSource] = None,
        config: Optional[BattleConfig] = None,
        events: Optional[EventBus] = None,
        ledger: Optional[HealthLedger] = None,
        policy: Optional[BossPolicy] = None,
    ):
        self.config = config or BattleConfig()
        self.demo_mode = demo_mode
        self.rng: RandomSource = rng if rng is not None else create_rng(self.config.seed)
        self.policy: BossPolicy = policy or policy_for(
            demo_mode,
            self.config.demo_strike_min,
            self.config.demo_strike_max,
        )

        self.narrator = Narrator(events)
        self.context = BattleContext(
            player,
            boss_max_hp=self.config.boss_max_hp,
            ledger=ledger,
            narrator=self.narrator,
        )

        self.state = BattleState.ONGOING
        self.phase = Phase.NORMAL
        self._round = 0
        self._outcome: Optional[BattleOutcome] = None

        self.narrator.emit(
            BattleEvent.BATTLE_STARTED,
            "BOSS BATTLE! A fearsome boss blocks your exit!",
            boss_hp=self.context.boss_hp,
            boss_max_hp=self.context.boss_max_hp,
            player_hp=self.context.player_hp,
            demo_mode=demo_mode,
            policy=self.policy.name,
        )
        self._announce_phase(self.phase)
        self.opening: list[Narration] = self.narrator.drain()

        logger.info(
            f"Boss battle started (policy={self.policy.name}, "
            f"boss_hp={self.context.boss_hp}, player_hp={self.context.player_hp})"
        )

    # Round flow

    def play_round(self, command: Union[PlayerCommand, InputAction]) -> RoundReport:
        """
        Run one round with the player's command.

        Args:
            command: The player's choice for this round

        Returns:
            RoundReport for the round

        Raises:
            BattleOverError: If the battle already ended
        """
        if self.state is not BattleState.ONGOING:
            raise BattleOverError(f"Battle already ended ({self.state.name})")

        if isinstance(command, InputAction):
            command = PlayerCommand.from_input(command)

        self._round += 1
        phase_before = self.phase
        ctx = self.context

        if command.is_flee:
            self._finish(BattleState.FLED)
            return self._report(command, phase_before)

        if ctx.boss_defeated:
            self._finish(BattleState.WON)
            return self._report(command, phase_before)

        player_action = command.action
        if player_action is Action.DEFEND:
            ctx.player_defending = True
            self.narrator.emit(BattleEvent.PLAYER_DEFENDING, "You brace yourself.", round=self._round)

        try:
            boss_action = self.policy.choose_action(self.phase, self.rng)
            self.narrator.emit(
                BattleEvent.ACTION_CHOSEN,
                f"You chose {player_action.label}.",
                side="player",
                action=player_action,
            )
            self.narrator.emit(
                BattleEvent.ACTION_CHOSEN,
                f"Boss chose {boss_action.label}.",
                side="boss",
                action=boss_action,
            )

            resolution = self.policy.resolve(self.phase, player_action, boss_action, ctx, self.rng)
            logger.debug(
                f"Round {self._round} [{self.phase.name}] {player_action.name} vs "
                f"{boss_action.name}: {resolution.outcome.name}, "
                f"boss_hp={ctx.boss_hp}, player_hp={ctx.player_hp}"
            )

            if ctx.boss_defeated:
                self._finish(BattleState.WON)
            elif ctx.player_defeated:
                self._finish(BattleState.LOST)
            else:
                next_phase = phases.check_transition(self.phase, ctx.boss_hp_percent())
                if next_phase is not None:
                    self._enter_phase(next_phase)
        finally:
            ctx.player_defending = False

        return self._report(
            command,
            phase_before,
            player_action=player_action,
            boss_action=boss_action,
            resolution=resolution,
        )

    def _enter_phase(self, next_phase: Phase) -> None:
        if next_phase.order <= self.phase.order:
            raise RulesTableError(
                f"Illegal phase transition {self.phase.name} -> {next_phase.name}"
            )

        old_phase = self.phase
        self.phase = next_phase
        hp_percent = self.context.boss_hp_percent()
        logger.info(f"Boss phase {old_phase.name} -> {next_phase.name} at {hp_percent:.0%} HP")
        self.narrator.emit(
            BattleEvent.PHASE_TRANSITION,
            next_phase.rules.transition_message,
            old_phase=old_phase,
            new_phase=next_phase,
            hp_percent=hp_percent,
        )
        self._announce_phase(next_phase)

    def _announce_phase(self, phase: Phase) -> None:
        self.narrator.emit(
            BattleEvent.PHASE_ENTERED,
            f"Boss state: {phase.display_name}",
            phase=phase,
            rules=phase.rules.description,
        )

    def _finish(self, state: BattleState) -> None:
        self.state = state
        self._outcome = _OUTCOME_FOR_STATE[state]
        logger.info(f"Boss battle ended: {self._outcome.name} after {self._round} rounds")
        self.narrator.emit(
            BattleEvent.BATTLE_ENDED,
            _OUTCOME_MESSAGES[self._outcome],
            outcome=self._outcome,
            rounds=self._round,
            boss_hp=self.context.boss_hp,
            player_hp=self.context.player_hp,
        )

    def _report(
        self,
        command: PlayerCommand,
        phase_before: Phase,
        player_action: Optional[Action] = None,
        boss_action: Optional[Action] = None,
        resolution: Optional[Resolution] = None,
    ) -> RoundReport:
        return RoundReport(
            round_number=self._round,
            command=command,
            state=self.state,
            phase_before=phase_before,
            phase_after=self.phase,
            boss_hp=self.context.boss_hp,
            player_hp=self.context.player_hp,
            player_action=player_action,
            boss_action=boss_action,
            resolution=resolution,
            events=self.narrator.drain(),
        )

    # Queries

    @property
    def is_ongoing(self) -> bool:
        return self.state is BattleState.ONGOING

    @property
    def outcome(self) -> Optional[BattleOutcome]:
        """Final outcome, None while the battle is ongoing."""
        return self._outcome

    @property
    def rounds_played(self) -> int:
        return self._round

    @property
    def boss_hp(self) -> int:
        return self.context.boss_hp

    @property
    def boss_max_hp(self) -> int:
        return self.context.boss_max_hp

    @property
    def player_hp(self) -> int:
        return self.context.player_hp


ActionSource = Callable[[], Union[PlayerCommand, InputAction]]


def run_battle(
    player: PlayerLike,
    demo_mode: bool = False,
    *,
    action_source: ActionSource,
    rng: Optional[RandomSource] = None,
    config: Optional[BattleConfig] = None,
    events: Optional[EventBus] = None,
    ledger: Optional[HealthLedger] = None,
    on_round_start: Optional[Callable[[BossBattle], None]] = None,
    max_rounds: Optional[int] = None,
) -> BattleOutcome:
    """
    Drive a boss battle to completion.

    Args:
        player: Borrowed player entity
        demo_mode: Replace the boss with the always-defending DemoPolicy
        action_source: Called once per round for the player's command
        rng: Random source for the boss (defaults to the config seed)
        config: Battle configuration
        events: Bus receiving narration events
        ledger: Shared HP tracker mirrored alongside the player
        on_round_start: Called before each command, e.g. to show status
        max_rounds: Round cap (defaults to config.max_rounds)

    Returns:
        The battle outcome

    Raises:
        BattleStalledError: If the round cap is reached
    """
    battle = BossBattle(
        player,
        demo_mode=demo_mode,
        rng=rng,
        config=config,
        events=events,
        ledger=ledger,
    )
    limit = max_rounds if max_rounds is not None else battle.config.max_rounds

    while battle.is_ongoing:
        if battle.rounds_played >= limit:
            raise BattleStalledError(limit)
        if on_round_start:
            on_round_start(battle)
        battle.play_round(action_source())

    return battle.outcome
