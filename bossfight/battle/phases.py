"""
Boss phases - action weights, resolution tables and transitions.

Each phase is a tag; all of its behavior is static data in PHASE_RULES:
- a weighted action distribution rolled out of 100
- a clash constant for mirrored moves
- ordered player-wins and boss-wins matchups
- a fallback hit when no matchup applies
- the HP threshold that hands over to the next phase

One generic resolver walks the active table, so a phase is changed by
editing data, not code. Phases only move forward:
NORMAL -> ANGRY -> DEFENSIVE -> ENRAGED, and ENRAGED is final.

Usage:
    action = choose_action(Phase.NORMAL, rng)
    resolution = resolve(Phase.NORMAL, Action.COUNTER, action, ctx)
    next_phase = check_transition(Phase.NORMAL, ctx.boss_hp_percent())
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from arena.core.rng import RandomSource
from bossfight.battle.actions import Action
from bossfight.battle.context import BattleContext
from bossfight.battle.errors import RulesTableError
from bossfight.battle.narration import BattleEvent

ROLL_SIZE = 100


class Phase(Enum):
    """Boss behavior phase, in the only order they can occur."""
    NORMAL = 0
    ANGRY = 1
    DEFENSIVE = 2
    ENRAGED = 3

    @property
    def order(self) -> int:
        """Position in the phase sequence."""
        return self.value

    @property
    def rules(self) -> PhaseRules:
        """Static rules table for this phase."""
        return PHASE_RULES[self]

    @property
    def display_name(self) -> str:
        return self.rules.name


class Outcome(Enum):
    """How an exchange was decided."""
    CLASH = auto()
    PLAYER_WINS = auto()
    BOSS_WINS = auto()
    FALLBACK = auto()
    STALEMATE = auto()


@dataclass(frozen=True)
class Matchup:
    """
    A winning pairing in a resolution table.

    Attributes:
        winner: Move of the side that wins, None matches any move
        loser: Move of the side that loses, None matches any move
        damage: Damage dealt to the losing side
        message: Narration for the exchange
    """
    winner: Optional[Action]
    loser: Optional[Action]
    damage: int
    message: str

    def matches(self, winner: Action, loser: Action) -> bool:
        """Check whether a (winner, loser) pair is covered."""
        return (
            (self.winner is None or self.winner == winner)
            and (self.loser is None or self.loser == loser)
        )

    @property
    def label(self) -> str:
        """Short 'X>Y' form used in rules descriptions."""
        left = self.winner.label if self.winner else "ANY"
        right = self.loser.label if self.loser else "ALL"
        return f"{left}>{right}"


@dataclass(frozen=True)
class PhaseRules:
    """
    Everything a phase decides.

    Attributes:
        name: Display name
        weights: (action, weight) in roll order; weights sum to 100
        clash_damage: Damage both sides take when moves match
        player_wins: Matchups (player move, boss move) hurting the boss
        boss_wins: Matchups (boss move, player move) hurting the player
        fallback_damage: Damage to the player when nothing matches
        threshold: Boss HP fraction at or below which the phase ends
        next_phase: Phase entered when the threshold is crossed
        transition_message: Narration when this phase is entered
        mirrored: Boss-wins matchups are the role-swapped player-wins ones
    """
    name: str
    weights: tuple[tuple[Action, int], ...]
    clash_damage: int
    player_wins: tuple[Matchup, ...]
    boss_wins: tuple[Matchup, ...]
    fallback_damage: int
    threshold: Optional[float]
    next_phase: Optional[Phase]
    transition_message: str
    clash_message: str = "CLASH! Both actions collide!"
    mirrored: bool = True

    @property
    def description(self) -> str:
        """Player-facing summary of the winning matchups."""
        return " | ".join(matchup.label for matchup in self.player_wins)


@dataclass(frozen=True)
class Resolution:
    """
    Result of resolving one exchange.

    Attributes:
        outcome: Which rule decided the exchange
        player_action: Move the player played
        boss_action: Move the boss played
        boss_damage: Damage removed from the boss
        player_damage: Damage forwarded to the player (after defending)
        message: Narration line for the exchange
    """
    outcome: Outcome
    player_action: Action
    boss_action: Action
    boss_damage: int
    player_damage: int
    message: str


def _weights(attack: int, defend: int, magic: int, counter: int) -> tuple[tuple[Action, int], ...]:
    return (
        (Action.ATTACK, attack),
        (Action.DEFEND, defend),
        (Action.MAGIC, magic),
        (Action.COUNTER, counter),
    )


def _mirror(matchups: tuple[Matchup, ...], messages: tuple[str, ...]) -> tuple[Matchup, ...]:
    """Role-swapped copies of player-wins matchups with the same damage."""
    return tuple(
        Matchup(winner=m.winner, loser=m.loser, damage=m.damage, message=message)
        for m, message in zip(matchups, messages)
    )


_A, _D, _M, _C = Action.ATTACK, Action.DEFEND, Action.MAGIC, Action.COUNTER

_ANGRY_WINS = (
    Matchup(_A, _D, 35, "Your attack breaks through!"),
    Matchup(_M, _C, 35, "Your magic catches the boss off guard!"),
    Matchup(_D, _M, 20, "You block the spell and strike back!"),
    Matchup(_C, _A, 50, "PERFECT COUNTER! You read the attack!"),
)

_DEFENSIVE_WINS = (
    Matchup(_M, _D, 40, "Your magic shatters the defense!"),
    Matchup(_D, _A, 25, "You block the attack and strike back!"),
    Matchup(_C, _M, 45, "PERFECT COUNTER! You nullify the spell!"),
    Matchup(_A, _C, 30, "Your attack catches the counter off balance!"),
)

_ENRAGED_WINS = (
    Matchup(_D, _A, 35, "You withstand the berserk assault!"),
    Matchup(_A, _M, 45, "Your attack disrupts the desperate spell!"),
    Matchup(_M, _C, 40, "Your magic strikes true!"),
    Matchup(_C, _D, 60, "LEGENDARY COUNTER! You predicted the defense!"),
)


PHASE_RULES: dict[Phase, PhaseRules] = {
    Phase.NORMAL: PhaseRules(
        name="NORMAL - Balanced combat",
        weights=_weights(25, 25, 25, 25),
        clash_damage=10,
        player_wins=(
            Matchup(_C, None, 40, "PERFECT COUNTER! Critical hit!"),
            Matchup(_A, _M, 25, "Your attack interrupts the spell!"),
            Matchup(_M, _D, 30, "Your magic pierces the defense!"),
            Matchup(_D, _A, 15, "You block the attack and strike back!"),
        ),
        boss_wins=(
            Matchup(_C, None, 40, "BOSS COUNTERED! You're hit hard!"),
        ),
        fallback_damage=25,
        threshold=0.75,
        next_phase=Phase.ANGRY,
        transition_message="The boss stirs, sizing you up.",
        mirrored=False,
    ),
    Phase.ANGRY: PhaseRules(
        name="ANGRY - Aggressive attacks",
        weights=_weights(50, 0, 20, 30),
        clash_damage=15,
        player_wins=_ANGRY_WINS,
        boss_wins=_mirror(_ANGRY_WINS, (
            "The boss's furious attack breaks your defense!",
            "The boss's magic hits you mid-counter!",
            "The boss blocks your spell and retaliates!",
            "THE BOSS COUNTERS YOUR ATTACK! Massive damage!",
        )),
        fallback_damage=30,
        threshold=0.50,
        next_phase=Phase.DEFENSIVE,
        transition_message="The boss is getting ANGRY! HP dropped to 75%!",
    ),
    Phase.DEFENSIVE: PhaseRules(
        name="DEFENSIVE - Shields up",
        weights=_weights(0, 60, 10, 30),
        clash_damage=12,
        player_wins=_DEFENSIVE_WINS,
        boss_wins=_mirror(_DEFENSIVE_WINS, (
            "The boss's magic shatters your guard!",
            "The boss's guard turns your attack back on you!",
            "The boss's counter turns your spell back on you!",
            "The boss's attack catches your counter off balance!",
        )),
        fallback_damage=28,
        threshold=0.25,
        next_phase=Phase.ENRAGED,
        transition_message="The boss switches to DEFENSIVE mode! HP dropped to 50%!",
    ),
    Phase.ENRAGED: PhaseRules(
        name="ENRAGED - Chaos unleashed",
        weights=_weights(70, 0, 20, 10),
        clash_damage=20,
        player_wins=_ENRAGED_WINS,
        boss_wins=_mirror(_ENRAGED_WINS, (
            "The boss's guard turns your attack aside!",
            "The boss's berserk attack cuts through your spell!",
            "The boss's magic blasts through your counter!",
            "The boss's counter punishes your defense!",
        )),
        fallback_damage=38,
        threshold=None,
        next_phase=None,
        transition_message="The boss enters ENRAGED mode! HP dropped to 25%!",
        clash_message="CLASH! Both actions collide with fury!",
    ),
}


def _validate_rules(phase: Phase, rules: PhaseRules) -> None:
    """Reject malformed tables at import time."""
    rolled = [action for action, _ in rules.weights]
    if sorted(rolled, key=lambda a: a.value) != sorted(Action, key=lambda a: a.value):
        raise RulesTableError(f"{phase.name}: weights must list every action exactly once")

    total = sum(weight for _, weight in rules.weights)
    if total != ROLL_SIZE or any(weight < 0 for _, weight in rules.weights):
        raise RulesTableError(f"{phase.name}: weights must be non-negative and sum to {ROLL_SIZE}, got {total}")

    for matchup in rules.player_wins + rules.boss_wins:
        if matchup.winner is not None and matchup.winner == matchup.loser:
            raise RulesTableError(f"{phase.name}: {matchup.label} duplicates the clash rule")
        if matchup.damage <= 0:
            raise RulesTableError(f"{phase.name}: {matchup.label} must deal damage")

    if rules.mirrored:
        forward = [(m.winner, m.loser, m.damage) for m in rules.player_wins]
        backward = [(m.winner, m.loser, m.damage) for m in rules.boss_wins]
        if forward != backward:
            raise RulesTableError(f"{phase.name}: boss-wins table is not the mirror of player-wins")

    if (rules.threshold is None) != (rules.next_phase is None):
        raise RulesTableError(f"{phase.name}: threshold and next phase must be set together")
    if rules.next_phase is not None and rules.next_phase.order != phase.order + 1:
        raise RulesTableError(f"{phase.name}: may only hand over to the phase right after it")


for _phase in Phase:
    if _phase not in PHASE_RULES:
        raise RulesTableError(f"No rules table for {_phase.name}")
    _validate_rules(_phase, PHASE_RULES[_phase])


def choose_action(phase: Phase, rng: RandomSource) -> Action:
    """
    Roll the boss's move for a phase.

    Draws an integer in [0, 100) and walks the cumulative weights in
    table order (ATTACK, DEFEND, MAGIC, COUNTER).
    """
    roll = rng.randrange(ROLL_SIZE)
    cumulative = 0
    for action, weight in phase.rules.weights:
        cumulative += weight
        if roll < cumulative:
            return action
    raise RulesTableError(f"{phase.name}: roll {roll} fell outside the weight table")


def find_matchup(phase: Phase, player_action: Action, boss_action: Action) -> tuple[Outcome, Optional[Matchup]]:
    """
    Look up which rule decides an exchange, without applying it.

    Precedence: clash, player-wins (first match), boss-wins (first
    match), fallback.
    """
    if player_action == boss_action:
        return Outcome.CLASH, None

    rules = phase.rules
    for matchup in rules.player_wins:
        if matchup.matches(player_action, boss_action):
            return Outcome.PLAYER_WINS, matchup
    for matchup in rules.boss_wins:
        if matchup.matches(boss_action, player_action):
            return Outcome.BOSS_WINS, matchup
    return Outcome.FALLBACK, None


def resolve(phase: Phase, player_action: Action, boss_action: Action, ctx: BattleContext) -> Resolution:
    """
    Apply one exchange to the battle context.

    Args:
        phase: Active boss phase
        player_action: Move played by the player
        boss_action: Move played by the boss
        ctx: Battle context receiving the damage

    Returns:
        Resolution describing the decided rule and damage dealt
    """
    rules = phase.rules
    outcome, matchup = find_matchup(phase, player_action, boss_action)
    boss_damage = 0
    player_damage = 0

    if outcome is Outcome.CLASH:
        message = rules.clash_message
        ctx.narrator.emit(BattleEvent.CLASH, message, action=player_action, damage=rules.clash_damage)
        player_damage = ctx.deal_damage_to_player(rules.clash_damage)
        boss_damage = ctx.deal_damage_to_boss(rules.clash_damage)

    elif outcome is Outcome.PLAYER_WINS:
        message = matchup.message
        boss_damage = ctx.deal_damage_to_boss(matchup.damage)

    elif outcome is Outcome.BOSS_WINS:
        message = matchup.message
        player_damage = ctx.deal_damage_to_player(matchup.damage)

    else:
        message = f"The boss's {boss_action.label} beats your {player_action.label}!"
        player_damage = ctx.deal_damage_to_player(rules.fallback_damage)

    ctx.narrator.emit(
        BattleEvent.EXCHANGE_RESOLVED,
        message,
        phase=phase,
        outcome=outcome,
        boss_damage=boss_damage,
        player_damage=player_damage,
    )
    return Resolution(
        outcome=outcome,
        player_action=player_action,
        boss_action=boss_action,
        boss_damage=boss_damage,
        player_damage=player_damage,
        message=message,
    )


def check_transition(phase: Phase, hp_percent: float) -> Optional[Phase]:
    """
    Decide whether the boss leaves a phase.

    Returns:
        The next phase when hp_percent is at or below the threshold,
        otherwise None. The final phase always returns None.
    """
    rules = phase.rules
    if rules.threshold is None:
        return None
    if hp_percent <= rules.threshold:
        return rules.next_phase
    return None
