"""
Boss fight

Turn-based boss encounter built on the arena engine:
- Components (pydantic health records)
- Battle (phases, rules tables, context, policies, round controller)
- Presentation (console narration and status screen)

Quick Start:
    from bossfight import Hero, PlayerCommand, run_battle

    outcome = run_battle(Hero(), demo_mode=True, action_source=lambda: PlayerCommand.ATTACK)
"""

__version__ = "0.1.0"

from bossfight.battle import (
    Action,
    PlayerCommand,
    Hero,
    BossBattle,
    BattleOutcome,
    Phase,
    run_battle,
)

__all__ = [
    "Action",
    "PlayerCommand",
    "Hero",
    "BossBattle",
    "BattleOutcome",
    "Phase",
    "run_battle",
]
