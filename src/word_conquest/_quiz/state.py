# Area: Quiz
"""
word_conquest._quiz.state — Quiz state
======================================

Tracks one quiz encounter: the fixed question sequence, the countdown,
both sides' progress and who won. The engine is the only writer.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from .enums import OpponentKind, OpponentStatus, QuizStatus, Winner

logger = logging.getLogger("word_conquest.quiz")


@dataclass(frozen=True)
class Question:
    """One vocabulary question. Supplied by a question provider."""
    id: str
    word: str
    options: Tuple[str, ...]
    correct_answer: int
    difficulty: str = "easy"

    def is_correct(self, index: int) -> bool:
        return index == self.correct_answer


@dataclass
class QuizState:
    """
    Full state of one quiz encounter.

    ``quiz_id`` identifies the encounter so delayed callbacks can tell
    whether the quiz they were scheduled for is still the live one.
    """
    quiz_id: int
    treasure_id: str
    questions: List[Question]
    max_time: int
    time_left: int
    current_question: int = 0
    player_progress: int = 0
    player_attempts: int = 0
    opponent_progress: int = 0
    opponent_kind: OpponentKind = OpponentKind.AI
    opponent_name: Optional[str] = None
    opponent_tier: Optional[str] = None
    status: QuizStatus = QuizStatus.ACTIVE
    winner: Optional[Winner] = None
    opponent_status: OpponentStatus = OpponentStatus.THINKING

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def is_active(self) -> bool:
        return self.status is QuizStatus.ACTIVE

    def current(self) -> Optional[Question]:
        if 0 <= self.current_question < len(self.questions):
            return self.questions[self.current_question]
        return None

    def accuracy(self) -> float:
        """Share of the player's answers that were correct."""
        if self.player_attempts == 0:
            return 0.0
        return self.player_progress / self.player_attempts

    def complete(self, winner: Winner) -> None:
        logger.info(
            f"[quiz {self.quiz_id}] {self.status.value} → completed "
            f"(winner: {winner.value}, {self.player_progress}-{self.opponent_progress}, "
            f"{self.time_left}s left)"
        )
        self.status = QuizStatus.COMPLETED
        self.winner = winner
