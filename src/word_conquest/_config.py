# Area: Shared
"""
word_conquest._config — Game configuration
==========================================

Settings model, grade table and loading/validation helpers.
Settings come from (lowest to highest priority): model defaults,
an optional JSON file, then environment variables.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationInvariantError

logger = logging.getLogger("word_conquest.config")

# Grade key -> display label and vocabulary size
GRADE_CONFIG: Dict[str, Dict[str, Any]] = {
    "grade1": {"name": "Primary 1", "vocabulary_size": 200},
    "grade2": {"name": "Primary 2", "vocabulary_size": 400},
    "grade3": {"name": "Primary 3", "vocabulary_size": 600},
    "grade4": {"name": "Primary 4", "vocabulary_size": 800},
    "grade5": {"name": "Primary 5", "vocabulary_size": 1000},
    "grade6": {"name": "Primary 6", "vocabulary_size": 1500},
    "grade7": {"name": "Junior 1", "vocabulary_size": 2000},
    "grade8": {"name": "Junior 2", "vocabulary_size": 2500},
    "grade9": {"name": "Junior 3", "vocabulary_size": 3500},
}

ENV_PREFIX = "WORD_CONQUEST_"

# Environment variable -> settings key
ENV_MAPPINGS = {
    f"{ENV_PREFIX}MAP_SIZE": "map_size",
    f"{ENV_PREFIX}MAX_ENERGY": "max_energy",
    f"{ENV_PREFIX}STARTING_ENERGY": "starting_energy",
    f"{ENV_PREFIX}QUIZ_TIME_BUDGET": "quiz_time_budget",
    f"{ENV_PREFIX}QUESTIONS_PER_QUIZ": "questions_per_quiz",
    f"{ENV_PREFIX}WIN_COIN_BONUS": "win_coin_bonus",
    f"{ENV_PREFIX}ENERGY_REGEN_INTERVAL": "energy_regen_interval_seconds",
    f"{ENV_PREFIX}DEFAULT_GRADE": "default_grade",
    f"{ENV_PREFIX}SEED": "seed",
    f"{ENV_PREFIX}QUESTION_BANK": "question_bank_path",
    f"{ENV_PREFIX}LOG_FILE": "log_file",
    f"{ENV_PREFIX}LOG_LEVEL": "log_level",
}


class GameSettings(BaseModel):
    """Tunable game constants. Immutable once built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    map_size: int = Field(default=50, ge=1)
    max_energy: int = Field(default=10, ge=1)
    starting_energy: int = Field(default=10, ge=0)
    quiz_time_budget: int = Field(default=100, ge=1)
    tick_interval_seconds: float = Field(default=1.0, gt=0)
    questions_per_quiz: int = Field(default=10, ge=1)
    win_coin_bonus: int = Field(default=20, ge=0)
    energy_regen_interval_seconds: float = Field(default=30.0, gt=0)
    energy_regen_amount: int = Field(default=1, ge=1)
    default_grade: str = "grade4"
    min_nickname_length: int = Field(default=2, ge=1)
    player_id: str = "player-1"
    default_player_name: str = "Player"
    seed: Optional[int] = None
    question_bank_path: Optional[str] = None
    log_file: str = "word_conquest.log"
    log_level: str = "INFO"


def validate_settings(values: Mapping[str, Any]) -> GameSettings:
    """
    Build settings from a plain mapping, enforcing cross-field rules.

    Raises:
        ConfigurationInvariantError: If a field is malformed or the
            combination of fields is inconsistent.
    """
    try:
        settings = GameSettings(**dict(values))
    except ValidationError as e:
        details = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationInvariantError("settings", details) from e

    problems: List[str] = []
    if settings.starting_energy > settings.max_energy:
        problems.append(
            f"starting_energy ({settings.starting_energy}) exceeds "
            f"max_energy ({settings.max_energy})"
        )
    if settings.default_grade not in GRADE_CONFIG:
        problems.append(f"default_grade '{settings.default_grade}' is not a known grade")
    if problems:
        raise ConfigurationInvariantError("settings", problems)
    return settings


def load_settings(
    config_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> GameSettings:
    """Load settings from file, then environment, then explicit overrides."""
    values: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                values.update(json.load(f))
            logger.debug(f"Loaded settings from {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    environ = os.environ if env is None else env
    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in environ:
            values[config_key] = environ[env_key]

    values.update({k: v for k, v in overrides.items() if v is not None})
    return validate_settings(values)


def is_known_grade(grade: str) -> bool:
    return grade in GRADE_CONFIG
