# Area: Quiz
"""
Quiz package — single-encounter quiz engine and its collaborators.

This package handles:
- Quiz lifecycle and countdown (QuizEngine)
- Simulated opponent pacing
- Progress-scaled difficulty tiers
- Opponent name generation
- Question providers
"""

from .enums import AnswerOutcome, OpponentKind, OpponentStatus, QuizStatus, Winner
from .state import Question, QuizState
from .difficulty import (
    DifficultyTier,
    ProgressRecord,
    ProgressTracker,
    TIERS,
    TIER_ORDER,
    distribution,
    sample,
    validate_distribution_table,
)
from .identity import NameGenerator
from .question_bank import (
    JsonQuestionBank,
    QuestionProvider,
    StaticQuestionBank,
)
from .engine import QuizEngine

__all__ = [
    "AnswerOutcome",
    "OpponentKind",
    "OpponentStatus",
    "QuizStatus",
    "Winner",
    "Question",
    "QuizState",
    "DifficultyTier",
    "ProgressRecord",
    "ProgressTracker",
    "TIERS",
    "TIER_ORDER",
    "distribution",
    "sample",
    "validate_distribution_table",
    "NameGenerator",
    "JsonQuestionBank",
    "QuestionProvider",
    "StaticQuestionBank",
    "QuizEngine",
]
