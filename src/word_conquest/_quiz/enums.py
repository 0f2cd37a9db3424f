# Area: Quiz
"""
word_conquest._quiz.enums — Quiz enums
======================================

Statuses and outcomes of a single quiz encounter.

Quiz lifecycle:
WAITING (reserved, unused) -> ACTIVE (on start)
ACTIVE -> COMPLETED (player finishes, opponent finishes, or time runs out)
COMPLETED is terminal.
"""

from enum import Enum


class QuizStatus(Enum):
    WAITING   = "waiting"
    ACTIVE    = "active"
    COMPLETED = "completed"


class OpponentKind(Enum):
    HUMAN = "human"
    AI    = "ai"
    EMPTY = "empty"


class Winner(Enum):
    PLAYER   = "player"
    OPPONENT = "opponent"


class AnswerOutcome(Enum):
    """
    Result of submitting one answer (player or opponent).

    IGNORED: quiz absent or not active, nothing changed
    WRONG:   incorrect, the same question stays current
    CORRECT: progress advanced, quiz still active
    WON:     progress reached the question count, quiz completed
    """
    IGNORED = "ignored"
    WRONG   = "wrong"
    CORRECT = "correct"
    WON     = "won"


class OpponentStatus(Enum):
    """What the simulated opponent is visibly doing right now."""
    THINKING = "thinking"
    ANSWERED = "answered"
    WRONG    = "wrong"
