# Area: Quiz
"""
word_conquest._quiz.engine — Quiz engine
========================================

Owns the lifecycle of a single quiz encounter: question sequencing,
the one-second countdown, player answer scoring and the simulated
opponent. At most one quiz is live per engine; starting a new one
stops the previous one first.

The countdown handle is an instance field, cancelled on every terminal
transition and on ``stop()``.
"""

from __future__ import annotations

import itertools
import logging
import random
from typing import Callable, Optional, Sequence

from .._shared.scheduler import Scheduler, TimerHandle
from .difficulty import DifficultyTier
from .enums import AnswerOutcome, OpponentKind, QuizStatus, Winner
from .opponent import OpponentSimulator
from .state import Question, QuizState

logger = logging.getLogger("word_conquest.quiz")

QuizListener = Callable[[QuizState], None]


class QuizEngine:
    """
    State machine for one quiz at a time.

    Args:
        scheduler: Timer queue driving the countdown and the opponent.
        rng: Random source for the opponent simulation.
        time_budget: Seconds on the clock at quiz start.
        tick_interval: Seconds between countdown ticks.
        on_change: Called after timer-driven mutations (tick, opponent).
        on_complete: Called once when a quiz reaches COMPLETED.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        rng: Optional[random.Random] = None,
        time_budget: int = 100,
        tick_interval: float = 1.0,
        on_change: Optional[QuizListener] = None,
        on_complete: Optional[QuizListener] = None,
    ):
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self.time_budget = time_budget
        self.tick_interval = tick_interval
        self._on_change = on_change
        self._on_complete = on_complete

        self._state: Optional[QuizState] = None
        self._tier: Optional[DifficultyTier] = None
        self._tick_handle: Optional[TimerHandle] = None
        self._ids = itertools.count(1)
        self.opponent = OpponentSimulator(self, scheduler, self._rng)

    @property
    def state(self) -> Optional[QuizState]:
        return self._state

    @property
    def tier(self) -> Optional[DifficultyTier]:
        return self._tier

    @property
    def timer_running(self) -> bool:
        return self._tick_handle is not None and not self._tick_handle.cancelled

    def is_live(self, quiz_id: int) -> bool:
        """True while ``quiz_id`` is the current quiz and still active."""
        return (
            self._state is not None
            and self._state.quiz_id == quiz_id
            and self._state.is_active
        )

    # ── Lifecycle ────────────────────────────────────────────

    def start(
        self,
        treasure_id: str,
        questions: Sequence[Question],
        tier: DifficultyTier,
        opponent_name: str,
    ) -> QuizState:
        """Begin a new quiz and start the countdown and the opponent."""
        if not questions:
            raise ValueError("A quiz needs at least one question")
        self.stop()

        self._tier = tier
        self._state = QuizState(
            quiz_id=next(self._ids),
            treasure_id=treasure_id,
            questions=list(questions),
            max_time=self.time_budget,
            time_left=self.time_budget,
            opponent_kind=OpponentKind.AI,
            opponent_name=opponent_name,
            opponent_tier=tier.key,
            status=QuizStatus.ACTIVE,
        )
        logger.info(
            f"[quiz {self._state.quiz_id}] Started for {treasure_id}: "
            f"{len(questions)} questions, {self.time_budget}s, "
            f"vs {opponent_name} ({tier.key})"
        )
        self._tick_handle = self._scheduler.call_every(
            self.tick_interval, self.tick, label=f"quiz-{self._state.quiz_id}-tick"
        )
        self.opponent.take_turn(tier)
        return self._state

    def stop(self) -> None:
        """
        Cancel the countdown and every pending opponent turn and forget
        the quiz. Safe to call at any time.
        """
        self._cancel_timer()
        self.opponent.cancel_all()
        if self._state is not None:
            logger.debug(f"[quiz {self._state.quiz_id}] Stopped ({self._state.status.value})")
        self._state = None
        self._tier = None

    def tick(self) -> None:
        """One countdown step. Timeout is a loss for the player."""
        state = self._state
        if state is None or not state.is_active:
            self._cancel_timer()
            return

        state.time_left = max(0, state.time_left - 1)
        if state.time_left == 0:
            logger.info(f"[quiz {state.quiz_id}] Time is up")
            self._finish(Winner.OPPONENT)
        else:
            self.notify_changed()

    # ── Answers ──────────────────────────────────────────────

    def answer(self, index: int) -> AnswerOutcome:
        """
        Score the player's answer to the current question.

        A wrong answer changes nothing: the same question stays up and
        the player may retry while time remains.
        """
        state = self._state
        if state is None or not state.is_active:
            return AnswerOutcome.IGNORED

        question = state.current()
        state.player_attempts += 1
        if question is None or not question.is_correct(index):
            logger.debug(f"[quiz {state.quiz_id}] Wrong answer {index}")
            return AnswerOutcome.WRONG

        state.player_progress += 1
        if state.player_progress >= state.question_count:
            self._finish(Winner.PLAYER)
            return AnswerOutcome.WON

        state.current_question += 1
        logger.debug(
            f"[quiz {state.quiz_id}] Correct, now on question "
            f"{state.current_question + 1}/{state.question_count}"
        )
        # A new question on screen prompts the opponent to answer too
        self.opponent.take_turn()
        return AnswerOutcome.CORRECT

    def advance_opponent(self) -> AnswerOutcome:
        """Credit the opponent with one correct answer."""
        state = self._state
        if state is None or not state.is_active:
            return AnswerOutcome.IGNORED

        state.opponent_progress += 1
        if state.opponent_progress >= state.question_count:
            self._finish(Winner.OPPONENT)
            return AnswerOutcome.WON
        return AnswerOutcome.CORRECT

    def simulate_opponent_turn(self, tier: Optional[DifficultyTier] = None) -> Optional[TimerHandle]:
        """Schedule one independent opponent answer attempt."""
        return self.opponent.take_turn(tier)

    def accuracy(self) -> float:
        return self._state.accuracy() if self._state is not None else 0.0

    def notify_changed(self) -> None:
        if self._on_change is not None and self._state is not None:
            self._on_change(self._state)

    # ── Internal ─────────────────────────────────────────────

    def _finish(self, winner: Winner) -> None:
        self._cancel_timer()
        self.opponent.cancel_all()
        self._state.complete(winner)
        if self._on_complete is not None:
            self._on_complete(self._state)

    def _cancel_timer(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
