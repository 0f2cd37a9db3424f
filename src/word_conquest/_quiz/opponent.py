# Area: Quiz
"""
word_conquest._quiz.opponent — Simulated opponent pacing
========================================================

Plays the AI side of a quiz independently of the player. Each turn is
a one-shot timer whose delay and correctness come from the opponent's
difficulty tier:

- correct:   opponent progress +1; streak tiers may chain another turn
             after half their minimum reaction time (30% chance, only
             while below 70% of the questions)
- incorrect: a visible recovery pause (3s for beginners, 2s otherwise),
             then after half that again a 50% chance to try once more

A turn chain can leave several timers outstanding. Every callback
re-checks that the quiz it was scheduled for is still live and active
before touching state, and ``cancel_all()`` drops whatever is pending.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, List, Optional

from .._shared.scheduler import Scheduler, TimerHandle
from .difficulty import STREAK_TIERS, DifficultyTier
from .enums import AnswerOutcome, OpponentStatus

if TYPE_CHECKING:
    from .engine import QuizEngine

logger = logging.getLogger("word_conquest.opponent")

MIN_DELAY_MS = 500
STREAK_CHANCE = 0.3
STREAK_PROGRESS_CAP = 0.7
RESUME_CHANCE = 0.5
BEGINNER_RECOVERY_MS = 3000
DEFAULT_RECOVERY_MS = 2000


def reaction_delay_ms(tier: DifficultyTier, rng: random.Random) -> float:
    """Base reaction time plus jitter, never below MIN_DELAY_MS."""
    base = rng.uniform(tier.min_reaction_ms, tier.max_reaction_ms)
    jitter = rng.uniform(-tier.variance_ms, tier.variance_ms)
    return max(MIN_DELAY_MS, base + jitter)


def recovery_ms(tier: DifficultyTier) -> int:
    return BEGINNER_RECOVERY_MS if tier.key == "beginner" else DEFAULT_RECOVERY_MS


class OpponentSimulator:
    """Schedules and resolves the simulated opponent's answer attempts."""

    def __init__(self, engine: "QuizEngine", scheduler: Scheduler, rng: random.Random):
        self._engine = engine
        self._scheduler = scheduler
        self._rng = rng
        self._handles: List[TimerHandle] = []

    def pending(self) -> int:
        return sum(1 for h in self._handles if not h.cancelled)

    def take_turn(self, tier: Optional[DifficultyTier] = None) -> Optional[TimerHandle]:
        """
        Schedule one answer attempt for the live quiz.

        Returns:
            The timer handle, or None when no quiz is active.
        """
        state = self._engine.state
        if state is None or not state.is_active:
            return None
        tier = tier or self._engine.tier
        if tier is None:
            return None

        delay = reaction_delay_ms(tier, self._rng)
        correct = self._rng.random() < tier.accuracy
        quiz_id = state.quiz_id
        state.opponent_status = OpponentStatus.THINKING

        logger.debug(
            f"[quiz {quiz_id}] {tier.key} opponent answers in {delay:.0f}ms "
            f"({'correct' if correct else 'wrong'})"
        )
        return self._schedule(
            delay, lambda: self._resolve(quiz_id, tier, correct), "opponent-answer"
        )

    def cancel_all(self) -> None:
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()

    # ── Scheduled callbacks ──────────────────────────────────

    def _resolve(self, quiz_id: int, tier: DifficultyTier, correct: bool) -> None:
        if not self._engine.is_live(quiz_id):
            return
        state = self._engine.state

        if correct:
            state.opponent_status = OpponentStatus.ANSWERED
            outcome = self._engine.advance_opponent()
            if outcome is AnswerOutcome.CORRECT and tier.key in STREAK_TIERS:
                self._schedule(
                    tier.min_reaction_ms / 2,
                    lambda: self._maybe_streak(quiz_id, tier),
                    "opponent-streak",
                )
        else:
            state.opponent_status = OpponentStatus.WRONG
            pause = recovery_ms(tier)
            self._schedule(pause, lambda: self._recover(quiz_id, tier), "opponent-recover")

        # A winning answer has already been reported through on_complete
        if self._engine.is_live(quiz_id):
            self._engine.notify_changed()

    def _maybe_streak(self, quiz_id: int, tier: DifficultyTier) -> None:
        if not self._engine.is_live(quiz_id):
            return
        state = self._engine.state
        if (state.opponent_progress < state.question_count * STREAK_PROGRESS_CAP
                and self._rng.random() < STREAK_CHANCE):
            logger.debug(f"[quiz {quiz_id}] opponent on a streak")
            self.take_turn(tier)

    def _recover(self, quiz_id: int, tier: DifficultyTier) -> None:
        if not self._engine.is_live(quiz_id):
            return
        self._engine.state.opponent_status = OpponentStatus.THINKING
        self._schedule(
            recovery_ms(tier) / 2, lambda: self._resume(quiz_id, tier), "opponent-resume"
        )
        self._engine.notify_changed()

    def _resume(self, quiz_id: int, tier: DifficultyTier) -> None:
        if not self._engine.is_live(quiz_id):
            return
        if self._rng.random() < RESUME_CHANCE:
            self.take_turn(tier)
        else:
            logger.debug(f"[quiz {quiz_id}] opponent hesitates")

    def _schedule(self, delay_ms: float, callback, label: str) -> TimerHandle:
        self._handles = [h for h in self._handles if not h.cancelled]
        handle = self._scheduler.call_later(delay_ms / 1000.0, callback, label=label)
        self._handles.append(handle)
        return handle
