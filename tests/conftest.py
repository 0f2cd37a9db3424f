# Area: Shared
"""Shared fixtures: a hand-driven clock and stores wired to it."""

import random

import pytest

from word_conquest._config import GameSettings
from word_conquest._quiz.state import Question
from word_conquest._quiz.question_bank import StaticQuestionBank
from word_conquest._shared.scheduler import Scheduler
from word_conquest._store.store import GameStore


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_questions(count: int = 3):
    return [
        Question(f"q{i}", f"word{i}", ("a", "b", "c", "d"), i % 4)
        for i in range(count)
    ]


def advance(clock: FakeClock, scheduler: Scheduler, seconds: float, step: float = 0.1) -> None:
    """Move time forward in small steps, firing timers as they come due."""
    start = clock.now
    steps = max(1, int(round(seconds / step)))
    for i in range(1, steps + 1):
        clock.now = start + seconds * i / steps
        scheduler.run_due()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock=clock)


@pytest.fixture
def settings():
    return GameSettings(map_size=6, seed=1234, log_file="")


@pytest.fixture
def store(settings, scheduler):
    return GameStore(
        settings=settings,
        question_provider=StaticQuestionBank(make_questions(3)),
        scheduler=scheduler,
        rng=random.Random(settings.seed),
    )


@pytest.fixture
def ready_store(store):
    """Store past setup with the map built."""
    store.set_nickname("Ada")
    assert store.start_game()
    return store
