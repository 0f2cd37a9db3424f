"""
word_conquest — Vocabulary quiz territory game engine
=====================================================

Explore a square map with limited energy. Treasure cells start a timed
vocabulary quiz against a simulated opponent; winning the quiz claims
the territory and pays out coins.

Quick Start:
    from word_conquest import GameStore

    store = GameStore()
    store.set_nickname("Ada")
    store.start_game()
    store.explore_cell(3, 7)
    store.scheduler.run_due()   # call from the host loop

Interactive play:
    python -m word_conquest --nickname Ada
    python -m word_conquest --demo --seed 7

Type Definitions
----------------
Snapshot shapes are available for import:

    from word_conquest import GameSnapshot, QuizSnapshot, PlayerSnapshot
"""

from ._config import GRADE_CONFIG, GameSettings, load_settings, validate_settings
from ._map import CellContent, CellStatus, ContentType, MapCell, MapGrid
from ._quiz import (
    AnswerOutcome,
    DifficultyTier,
    JsonQuestionBank,
    NameGenerator,
    OpponentKind,
    OpponentStatus,
    ProgressRecord,
    Question,
    QuestionProvider,
    QuizEngine,
    QuizState,
    QuizStatus,
    StaticQuestionBank,
    Winner,
)
from ._shared import Scheduler, TimerHandle, setup_logging
from ._store import GameStore, PlayerState, ViewMode
from .errors import (
    WordConquestError,
    InsufficientResourceError,
    InvalidTransitionError,
    ConfigurationInvariantError,
)
from .types import (
    CellSnapshot,
    GameSnapshot,
    MapSnapshot,
    PlayerSnapshot,
    ProgressSnapshot,
    QuestionSnapshot,
    QuizSnapshot,
)

__all__ = [
    # Main classes
    "GameStore",
    "GameSettings",
    "QuizEngine",
    "Scheduler",
    "TimerHandle",
    # Configuration
    "GRADE_CONFIG",
    "load_settings",
    "validate_settings",
    "setup_logging",
    # Map
    "CellContent",
    "CellStatus",
    "ContentType",
    "MapCell",
    "MapGrid",
    # Quiz
    "AnswerOutcome",
    "DifficultyTier",
    "NameGenerator",
    "OpponentKind",
    "OpponentStatus",
    "ProgressRecord",
    "Question",
    "QuizState",
    "QuizStatus",
    "Winner",
    "QuestionProvider",
    "StaticQuestionBank",
    "JsonQuestionBank",
    # Store
    "PlayerState",
    "ViewMode",
    # Errors
    "WordConquestError",
    "InsufficientResourceError",
    "InvalidTransitionError",
    "ConfigurationInvariantError",
    # Snapshot types
    "CellSnapshot",
    "GameSnapshot",
    "MapSnapshot",
    "PlayerSnapshot",
    "ProgressSnapshot",
    "QuestionSnapshot",
    "QuizSnapshot",
]
__version__ = "1.0.0"
