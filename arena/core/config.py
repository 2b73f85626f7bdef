"""
Battle configuration.

Balance constants for an encounter live here as
a validated pydantic model. A JSON file may override any subset:

    {"boss_max_hp": 300, "invalid_input_policy": "reprompt"}
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from arena.core.actions import InputAction

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration file cannot be used."""


class InvalidInputPolicy(str, Enum):
    """What the input collaborator does with unrecognized input."""
    DEFAULT_ACTION = "default"
    REPROMPT = "reprompt"


class BattleConfig(BaseModel):
    """
    Tunable settings for one boss encounter.

    Attributes:
        boss_max_hp: Boss starting and maximum HP
        player_max_hp: HP of a freshly created hero
        demo_strike_min: Lowest demo-mode strike roll (inclusive)
        demo_strike_max: Highest demo-mode strike roll (inclusive)
        invalid_input_policy: Fallback or re-prompt on unknown input
        default_action: Input used by the fallback policy
        max_rounds: Safety cap for unattended battles
        seed: Fixed RNG seed, None for a random battle
        log_level: Logging level name for the CLI
    """

    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    boss_max_hp: int = Field(default=200, gt=0)
    player_max_hp: int = Field(default=100, gt=0)
    demo_strike_min: int = Field(default=20, gt=0)
    demo_strike_max: int = Field(default=30, gt=0)
    invalid_input_policy: InvalidInputPolicy = InvalidInputPolicy.DEFAULT_ACTION
    default_action: InputAction = InputAction.ATTACK
    max_rounds: int = Field(default=500, gt=0)
    seed: Optional[int] = None
    log_level: str = "WARNING"

    @model_validator(mode='after')
    def _check_strike_range(self) -> BattleConfig:
        if self.demo_strike_min > self.demo_strike_max:
            raise ValueError(
                f"demo_strike_min ({self.demo_strike_min}) exceeds "
                f"demo_strike_max ({self.demo_strike_max})"
            )
        return self


def load_config(path: Path | str | None) -> BattleConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: File to read; None means built-in defaults

    Returns:
        Validated BattleConfig

    Raises:
        ConfigError: If the file is unreadable or fails validation
    """
    if path is None:
        return BattleConfig()

    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Config file not found, using defaults: {config_path}")
        return BattleConfig()

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    try:
        config = BattleConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    logger.debug(f"Loaded config from {config_path}")
    return config
