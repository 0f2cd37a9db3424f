# Area: Store
"""
word_conquest._store.store — Game state container
=================================================

The single authoritative owner of the player, the map and the live
quiz. Every public method is one transition: subscribers are notified
once, after the whole transition has been applied, and never see a
half-updated store.

Rejected operations (not enough energy, cell already explored, no
active quiz) are logged and reported as False / AnswerOutcome.IGNORED;
they never raise.
"""

from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional

from .._config import GRADE_CONFIG, GameSettings
from .._map import grid as grid_model
from .._map.grid import CellStatus, MapGrid
from .._quiz.difficulty import ProgressRecord, ProgressTracker
from .._quiz.engine import QuizEngine
from .._quiz.enums import AnswerOutcome, Winner
from .._quiz.identity import NameGenerator
from .._quiz.question_bank import QuestionProvider, StaticQuestionBank
from .._quiz.state import QuizState
from .._shared.logging_config import log_engine_error
from .._shared.scheduler import Scheduler, TimerHandle
from ..errors import InsufficientResourceError, InvalidTransitionError
from ..types import GameSnapshot
from .player import PlayerState, ViewMode
from .snapshot import build_snapshot

logger = logging.getLogger("word_conquest.store")

Listener = Callable[[GameSnapshot], None]


class GameStore:
    """
    Game state container.

    Args:
        settings: Game constants.
        question_provider: Source of quiz questions; built-in set by default.
        scheduler: Timer queue; the host loop must call ``run_due()`` on it.
        rng: Random source shared by map generation, names, difficulty
            and the opponent. Defaults to ``Random(settings.seed)``.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        question_provider: Optional[QuestionProvider] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or GameSettings()
        self.questions = question_provider or StaticQuestionBank()
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random(self.settings.seed)

        self._names = NameGenerator(self.rng)
        self._progress = ProgressTracker()
        self._engine = QuizEngine(
            self.scheduler,
            rng=self.rng,
            time_budget=self.settings.quiz_time_budget,
            tick_interval=self.settings.tick_interval_seconds,
            on_change=self._on_quiz_change,
            on_complete=self._on_quiz_complete,
        )

        self._listeners: List[Listener] = []
        self._depth = 0
        self._dirty = False
        self._regen_handle: Optional[TimerHandle] = None

        self.player = self._default_player()
        self.grid: Optional[MapGrid] = None
        self.mode = ViewMode.SETUP

    # ── Queries ──────────────────────────────────────────────

    @property
    def quiz(self) -> Optional[QuizState]:
        return self._engine.state

    @property
    def engine(self) -> QuizEngine:
        return self._engine

    def snapshot(self, include_cells: bool = False) -> GameSnapshot:
        return build_snapshot(
            self.mode, self.player, self.grid, self.quiz,
            self._progress.snapshot(), include_cells=include_cells,
        )

    def get_player_progress(self) -> ProgressRecord:
        return self._progress.snapshot()

    def check_setup_complete(self) -> bool:
        return len(self.player.nickname.strip()) >= self.settings.min_nickname_length

    # ── Observers ────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Setup ────────────────────────────────────────────────

    def set_nickname(self, nickname: str) -> None:
        with self._transition():
            nickname = (nickname or "").strip()
            self.player.nickname = nickname
            self.player.name = nickname or self.settings.default_player_name
            self._dirty = True

    def set_identity(self, identity: Any) -> None:
        """Attach an already validated icon/emblem payload."""
        with self._transition():
            self.player.identity = identity
            self._dirty = True

    def set_grade(self, grade: str) -> bool:
        if grade not in GRADE_CONFIG:
            log_engine_error(InvalidTransitionError("grade", self.player.grade, f"set {grade}"),
                             level=logging.DEBUG)
            return False
        with self._transition():
            self.player.grade = grade
            self._dirty = True
        return True

    def start_game(self) -> bool:
        """Leave setup: build the map, start energy regen, go to home."""
        if not self.check_setup_complete():
            logger.warning("Nickname missing or too short, cannot start")
            return False
        with self._transition():
            self.initialize_map(self.settings.map_size)
            self.start_energy_regen()
            self._set_mode(ViewMode.HOME)
        return True

    # ── Map ──────────────────────────────────────────────────

    def initialize_map(self, size: Optional[int] = None) -> None:
        with self._transition():
            self.grid = grid_model.generate(size or self.settings.map_size, self.rng)
            self._set_mode(ViewMode.MAP)

    def explore_cell(self, row: int, col: int) -> bool:
        """
        Spend one energy to explore a cell.

        Treasure starts a quiz, replacing any quiz still on screen.
        Returns False without any change when the map is missing, the
        cell is off the map or already explored, or the player is out
        of energy.
        """
        if self.grid is None:
            logger.debug("explore_cell called before the map exists")
            return False
        if not self.grid.contains(row, col):
            log_engine_error(InvalidTransitionError(f"cell-{row}-{col}", "off-map", "explore"),
                             level=logging.DEBUG)
            return False

        cell = self.grid.cell(row, col)
        if cell.status is not CellStatus.UNEXPLORED:
            log_engine_error(InvalidTransitionError(cell.id, cell.status.value, "explore"),
                             level=logging.DEBUG)
            return False

        with self._transition():
            if not self.use_energy(1):
                return False
            content = grid_model.explore(self.grid, row, col)
            if content.is_treasure:
                self.start_quiz(content.treasure_id)
        return True

    # ── Quiz ─────────────────────────────────────────────────

    def start_quiz(self, treasure_id: str) -> QuizState:
        with self._transition():
            questions = self.questions.get_questions(
                self.player.grade, self.settings.questions_per_quiz
            )
            opponent_name = self._names.next()
            self._progress.sync_territory(self.player.territory)
            tier = self._progress.sample_tier(self.rng)
            state = self._engine.start(treasure_id, questions, tier, opponent_name)
            self._set_mode(ViewMode.QUIZ)
        return state

    def answer_question(self, index: int) -> AnswerOutcome:
        """
        Submit the player's answer. On the final correct answer the
        treasure's cells are claimed and the win bonus is credited.
        """
        with self._transition():
            outcome = self._engine.answer(index)
            if outcome is not AnswerOutcome.IGNORED:
                self._dirty = True
        return outcome

    def update_opponent_progress(self) -> AnswerOutcome:
        with self._transition():
            outcome = self._engine.advance_opponent()
            if outcome is not AnswerOutcome.IGNORED:
                self._dirty = True
        return outcome

    def return_to_map(self) -> None:
        with self._transition():
            self._engine.stop()
            self._set_mode(ViewMode.MAP)

    def record_quiz_result(self, won: bool, accuracy: float) -> ProgressRecord:
        with self._transition():
            record = self._progress.record(won, accuracy, territory=self.player.territory)
            self._dirty = True
        return record

    def _on_quiz_complete(self, quiz: QuizState) -> None:
        with self._transition():
            won = quiz.winner is Winner.PLAYER
            if won:
                if self.grid is not None:
                    grid_model.claim(self.grid, quiz.treasure_id, self.player.id)
                self.player.credit_win(self.settings.win_coin_bonus)
            self.record_quiz_result(won, quiz.accuracy())
            self._set_mode(ViewMode.RESULT)

    def _on_quiz_change(self, quiz: QuizState) -> None:
        with self._transition():
            self._dirty = True

    # ── Energy ───────────────────────────────────────────────

    def use_energy(self, amount: int) -> bool:
        try:
            with self._transition():
                self.player.spend_energy(amount)
                self._dirty = True
        except (InsufficientResourceError, ValueError) as e:
            log_engine_error(e, level=logging.DEBUG)
            return False
        return True

    def restore_energy(self, amount: int) -> int:
        """Add energy up to max. Returns the amount added, 0 when rejected."""
        try:
            with self._transition():
                added = self.player.restore_energy(amount)
                if added:
                    self._dirty = True
        except ValueError as e:
            log_engine_error(e, level=logging.DEBUG)
            return 0
        return added

    def start_energy_regen(self) -> None:
        """Restore energy on a fixed interval while below max."""
        self.stop_energy_regen()
        self._regen_handle = self.scheduler.call_every(
            self.settings.energy_regen_interval_seconds,
            self._regen_tick,
            label="energy-regen",
        )

    def stop_energy_regen(self) -> None:
        if self._regen_handle is not None:
            self._regen_handle.cancel()
            self._regen_handle = None

    def _regen_tick(self) -> None:
        if self.player.energy < self.player.max_energy:
            self.restore_energy(self.settings.energy_regen_amount)

    # ── Reset ────────────────────────────────────────────────

    def reset_game(self) -> None:
        with self._transition():
            self._engine.stop()
            self.stop_energy_regen()
            self.grid = None
            self._progress.reset()
            self._names.reset()
            self.player = self._default_player()
            self._set_mode(ViewMode.SETUP)

    # ── Internal ─────────────────────────────────────────────

    def _default_player(self) -> PlayerState:
        return PlayerState(
            id=self.settings.player_id,
            name=self.settings.default_player_name,
            energy=self.settings.starting_energy,
            max_energy=self.settings.max_energy,
            grade=self.settings.default_grade,
        )

    def _set_mode(self, mode: ViewMode) -> None:
        if mode is not self.mode:
            logger.info(f"Mode: {self.mode.value} → {mode.value}")
            self.mode = mode
        self._dirty = True

    @contextmanager
    def _transition(self) -> Iterator[None]:
        """
        Group mutations into one transition. Nested transitions join the
        outer one; listeners run once when the outermost one exits.
        """
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
        if self._depth == 0:
            self._flush()

    def _flush(self) -> None:
        if not self._dirty:
            return
        self._dirty = False
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception(f"Store listener {listener!r} failed")
