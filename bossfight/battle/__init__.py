"""
Battle module - one-on-one boss encounter.

Provides:
- Actions and player commands
- Four boss phases with static rules tables
- Battle context (boss HP, borrowed player, defending flag)
- Boss policies (phase-driven, demo)
- Round-based battle controller and narration events
"""

from bossfight.battle.actions import Action, PlayerCommand
from bossfight.battle.actor import Hero, GameLedger
from bossfight.battle.context import BattleContext, PlayerLike, HealthLedger
from bossfight.battle.errors import (
    BossFightError,
    RulesTableError,
    BattleOverError,
    BattleStalledError,
)
from bossfight.battle.narration import BattleEvent, Narration, Narrator
from bossfight.battle.phases import (
    Phase,
    PhaseRules,
    Matchup,
    Outcome,
    Resolution,
    PHASE_RULES,
    choose_action,
    resolve,
    check_transition,
)
from bossfight.battle.policy import BossPolicy, PhasePolicy, DemoPolicy, policy_for
from bossfight.battle.system import (
    BossBattle,
    BattleState,
    BattleOutcome,
    RoundReport,
    run_battle,
)

__all__ = [
    # Actions
    "Action",
    "PlayerCommand",
    # Actors
    "Hero",
    "GameLedger",
    # Context
    "BattleContext",
    "PlayerLike",
    "HealthLedger",
    # Errors
    "BossFightError",
    "RulesTableError",
    "BattleOverError",
    "BattleStalledError",
    # Narration
    "BattleEvent",
    "Narration",
    "Narrator",
    # Phases
    "Phase",
    "PhaseRules",
    "Matchup",
    "Outcome",
    "Resolution",
    "PHASE_RULES",
    "choose_action",
    "resolve",
    "check_transition",
    # Policies
    "BossPolicy",
    "PhasePolicy",
    "DemoPolicy",
    "policy_for",
    # System
    "BossBattle",
    "BattleState",
    "BattleOutcome",
    "RoundReport",
    "run_battle",
]
