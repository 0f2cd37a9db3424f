# Area: Quiz
"""Tests for the simulated opponent — pacing, streaks, recovery, stale callbacks."""

import random
from unittest.mock import MagicMock

import pytest

from conftest import FakeClock, advance, make_questions
from word_conquest._quiz.difficulty import TIERS
from word_conquest._quiz.engine import QuizEngine
from word_conquest._quiz.enums import OpponentStatus, QuizStatus, Winner
from word_conquest._quiz.opponent import (
    MIN_DELAY_MS,
    reaction_delay_ms,
    recovery_ms,
)
from word_conquest._shared.scheduler import Scheduler


def scripted_rng(draw):
    """rng whose uniform() returns the lower bound and random() returns ``draw``."""
    rng = MagicMock(spec=random.Random)
    rng.uniform.side_effect = lambda a, b: a
    rng.random.return_value = draw
    return rng


def start(engine, tier="beginner", count=3):
    return engine.start("treasure-0-0", make_questions(count), TIERS[tier], "Opponent")


class TestReactionDelay:

    def test_floor_applies(self):
        # expert: 800 - 500 = 300ms, floored
        assert reaction_delay_ms(TIERS["expert"], scripted_rng(0.0)) == MIN_DELAY_MS

    def test_base_plus_jitter(self):
        rng = MagicMock(spec=random.Random)
        rng.uniform.side_effect = [5000, 1200]
        assert reaction_delay_ms(TIERS["beginner"], rng) == 6200

    @pytest.mark.parametrize("key", ["beginner", "intermediate", "advanced", "expert"])
    def test_delay_within_bounds(self, key):
        tier = TIERS[key]
        rng = random.Random(3)
        for _ in range(200):
            delay = reaction_delay_ms(tier, rng)
            assert MIN_DELAY_MS <= delay <= tier.max_reaction_ms + tier.variance_ms

    def test_recovery_pause(self):
        assert recovery_ms(TIERS["beginner"]) == 3000
        assert recovery_ms(TIERS["intermediate"]) == 2000
        assert recovery_ms(TIERS["expert"]) == 2000


class TestCorrectTurn:

    def test_correct_turn_advances_opponent(self, clock, scheduler):
        engine = QuizEngine(scheduler, rng=scripted_rng(0.0), time_budget=100)
        state = start(engine, "beginner")
        # beginner: 3000 - 2000 = 1000ms
        advance(clock, scheduler, 0.9)
        assert state.opponent_progress == 0
        assert state.opponent_status is OpponentStatus.THINKING
        advance(clock, scheduler, 0.2)
        assert state.opponent_progress == 1
        assert state.opponent_status is OpponentStatus.ANSWERED

    def test_beginner_never_streaks(self, clock, scheduler):
        engine = QuizEngine(scheduler, rng=scripted_rng(0.0), time_budget=100)
        state = start(engine, "beginner")
        advance(clock, scheduler, 20.0)
        assert state.opponent_progress == 1

    def test_expert_streak_can_win_outright(self, clock, scheduler):
        completed = []
        engine = QuizEngine(scheduler, rng=scripted_rng(0.0), time_budget=100,
                            on_complete=completed.append)
        state = start(engine, "expert", count=3)
        advance(clock, scheduler, 5.0)
        assert state.status is QuizStatus.COMPLETED
        assert state.winner is Winner.OPPONENT
        assert state.opponent_progress == 3
        assert completed == [state]
        assert engine.opponent.pending() == 0

    def test_streak_stops_at_seventy_percent(self, clock, scheduler):
        engine = QuizEngine(scheduler, rng=scripted_rng(0.0), time_budget=100)
        state = start(engine, "advanced", count=10)
        advance(clock, scheduler, 30.0)
        # Each answer may chain another while progress < 7
        assert state.opponent_progress == 7
        assert state.status is QuizStatus.ACTIVE


class TestWrongTurn:

    def test_wrong_then_recover_then_hesitate(self, clock, scheduler):
        engine = QuizEngine(scheduler, rng=scripted_rng(0.99), time_budget=100)
        state = start(engine, "beginner")

        advance(clock, scheduler, 1.0)
        assert state.opponent_status is OpponentStatus.WRONG
        assert state.opponent_progress == 0

        advance(clock, scheduler, 3.0)
        assert state.opponent_status is OpponentStatus.THINKING

        advance(clock, scheduler, 1.5)
        # 0.99 >= 50% resume chance: no further attempt
        assert engine.opponent.pending() == 0
        assert state.opponent_progress == 0

    def test_resume_schedules_another_attempt(self, clock, scheduler):
        rng = scripted_rng(0.99)
        engine = QuizEngine(scheduler, rng=rng, time_budget=100)
        state = start(engine, "intermediate")
        # intermediate: 2000 - 1500 = 500ms, wrong
        advance(clock, scheduler, 0.5)
        assert state.opponent_status is OpponentStatus.WRONG

        # 2000ms recovery, then 1000ms later the resume draw succeeds
        rng.random.return_value = 0.4
        advance(clock, scheduler, 3.0)
        assert engine.opponent.pending() == 1
        assert state.opponent_status is OpponentStatus.THINKING


class TestStaleCallbacks:
    """Delayed opponent work must never touch a dismissed or finished quiz."""

    def test_stop_cancels_pending_turns(self, clock, scheduler):
        engine = QuizEngine(scheduler, rng=scripted_rng(0.0), time_budget=100)
        state = start(engine, "beginner")
        assert engine.opponent.pending() == 1
        engine.stop()
        advance(clock, scheduler, 10.0)
        assert state.opponent_progress == 0
        assert engine.state is None

    def test_old_quiz_callback_ignored_by_new_quiz(self, clock, scheduler):
        engine = QuizEngine(scheduler, rng=scripted_rng(0.0), time_budget=100)
        old = start(engine, "beginner")
        new = start(engine, "beginner")
        engine.opponent._resolve(old.quiz_id, TIERS["beginner"], True)
        assert new.opponent_progress == 0
        assert old.opponent_progress == 0

    def test_player_win_drops_pending_turns(self, clock, scheduler):
        engine = QuizEngine(scheduler, rng=scripted_rng(0.0), time_budget=100)
        state = start(engine, "beginner", count=1)
        engine.answer(state.current().correct_answer)
        assert state.winner is Winner.PLAYER
        advance(clock, scheduler, 10.0)
        assert state.opponent_progress == 0
        assert state.winner is Winner.PLAYER
        assert engine.opponent.pending() == 0

    def test_no_turn_without_active_quiz(self, scheduler):
        engine = QuizEngine(scheduler, rng=scripted_rng(0.0))
        assert engine.simulate_opponent_turn(TIERS["expert"]) is None


class TestPollingRate:
    """The outcome must not depend on how often the host calls run_due."""

    def _play(self, poll_step):
        clock = FakeClock()
        scheduler = Scheduler(clock=clock)
        engine = QuizEngine(scheduler, rng=random.Random(7), time_budget=100)
        state = start(engine, "expert", count=10)
        if poll_step is None:
            clock.advance(100.0)
            scheduler.run_due()
        else:
            advance(clock, scheduler, 100.0, step=poll_step)
        return state

    def test_one_late_poll_matches_frequent_polling(self):
        often = self._play(0.1)
        once = self._play(None)
        assert once.opponent_progress == often.opponent_progress
        assert once.status is often.status
        assert once.winner is often.winner
        assert once.time_left == often.time_left
