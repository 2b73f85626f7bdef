import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure arena/bossfight packages can be imported
sys.path.append(os.getcwd())

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.key'), \
         patch('pygame.quit'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)

        yield


class ScriptedRNG:
    """
    Deterministic RandomSource.

    randrange() replays the scripted rolls (repeating the last one),
    randint() returns the midpoint of the range.
    """

    def __init__(self, *rolls):
        self.rolls = list(rolls) or [0]
        self.randrange_calls = 0
        self.randint_calls = []

    def randrange(self, stop):
        index = min(self.randrange_calls, len(self.rolls) - 1)
        self.randrange_calls += 1
        return self.rolls[index]

    def randint(self, a, b):
        self.randint_calls.append((a, b))
        return (a + b) // 2


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from arena.core.events import EventBus
    return EventBus()

@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRNG instances."""
    return ScriptedRNG

@pytest.fixture
def hero():
    """Full-health hero (100/100)."""
    from bossfight.battle.actor import Hero
    return Hero()

@pytest.fixture
def ctx(hero):
    """Fresh battle context around the hero, boss at 200/200."""
    from bossfight.battle.context import BattleContext
    return BattleContext(hero)
