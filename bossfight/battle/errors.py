"""
Battle exceptions.
"""


class BossFightError(Exception):
    """Base class for boss battle errors."""


class RulesTableError(BossFightError):
    """A phase rules table is malformed or incomplete (programming error)."""


class BattleOverError(BossFightError):
    """A round was requested after the battle reached a terminal state."""


class BattleStalledError(BossFightError):
    """An unattended battle exceeded its round limit."""

    def __init__(self, rounds: int):
        super().__init__(f"Battle did not finish within {rounds} rounds")
        self.rounds = rounds
