# Area: Shared
"""
word_conquest.runner — Host loops
=================================

The store does nothing on its own; something has to call
``scheduler.run_due()``. Two hosts ship here:

- GameRunner: reads text commands, catches timers up before each one
- DemoRunner: a scripted player explores and answers on its own while
  the loop polls the scheduler

Usage:
    store = GameStore(settings)
    GameRunner(store).run()
"""

import logging
import random
import time
from typing import Callable, Dict, List, Optional

from ._map.grid import CellStatus
from ._quiz.enums import AnswerOutcome
from ._shared.display import render_map, render_quiz, render_status
from ._store.player import ViewMode
from ._store.store import GameStore

logger = logging.getLogger("word_conquest.runner")

HELP_TEXT = """\
Commands:
  nickname NAME     set your nickname (setup)
  grade GRADE       choose a grade, e.g. grade4 (setup)
  start             leave setup and build the map
  explore R C       spend one energy to explore a cell
  answer N          answer the current question with option N
  map [R C]         show the map window starting at row R, col C
  status            show player and quiz status
  back              leave the quiz / result screen
  reset             start over
  help              show this text
  quit              exit"""


class GameRunner:
    """
    Interactive command loop.

    Args:
        store: The game store to drive.
        read: Line source, ``input`` by default.
        write: Output sink, ``print`` by default.
        use_color: Paint the map with ANSI colors.
    """

    def __init__(
        self,
        store: GameStore,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
        use_color: bool = False,
    ):
        self.store = store
        self._read = read
        self._write = write
        self.use_color = use_color
        self._running = False
        self._view_origin = (0, 0)
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "nickname": self._cmd_nickname,
            "grade": self._cmd_grade,
            "start": self._cmd_start,
            "explore": self._cmd_explore,
            "answer": self._cmd_answer,
            "map": self._cmd_map,
            "status": self._cmd_status,
            "back": self._cmd_back,
            "reset": self._cmd_reset,
            "help": self._cmd_help,
            "quit": self._cmd_quit,
        }

    # ── Main loop ─────────────────────────────────────────────

    def run(self) -> None:
        """Read commands until ``quit`` or end of input."""
        self._running = True
        self._write(HELP_TEXT)
        while self._running:
            try:
                line = self._read("> ")
            except (EOFError, KeyboardInterrupt):
                break
            self.handle(line)
        self.store.stop_energy_regen()
        logger.info("Runner stopped.")

    def handle(self, line: str) -> None:
        """Catch timers up, then run one command line."""
        fired = self.store.scheduler.run_due()
        if fired:
            logger.debug(f"Caught up {fired} timer(s)")

        parts = line.split()
        if not parts:
            return
        command = self._commands.get(parts[0].lower())
        if command is None:
            self._write(f"Unknown command: {parts[0]} (try 'help')")
            return
        try:
            command(parts[1:])
        except (ValueError, IndexError) as e:
            self._write(f"Bad arguments: {e}")

    # ── Commands ──────────────────────────────────────────────

    def _cmd_nickname(self, args: List[str]) -> None:
        self.store.set_nickname(" ".join(args))
        self._write(f"Nickname: {self.store.player.nickname or '(none)'}")

    def _cmd_grade(self, args: List[str]) -> None:
        if not args or not self.store.set_grade(args[0]):
            self._write("Unknown grade, use grade1 .. grade9")
            return
        self._write(f"Grade: {self.store.player.grade}")

    def _cmd_start(self, args: List[str]) -> None:
        if not self.store.start_game():
            self._write("Set a nickname of at least "
                        f"{self.store.settings.min_nickname_length} characters first")
            return
        self._cmd_map([])

    def _cmd_explore(self, args: List[str]) -> None:
        row, col = int(args[0]), int(args[1])
        if not self.store.explore_cell(row, col):
            self._write("Cannot explore there")
            return
        snap = self.store.snapshot()
        if snap["quiz"] is not None and snap["mode"] == ViewMode.QUIZ.value:
            self._write("Treasure! A challenger appears.")
            self._write(render_quiz(snap["quiz"], self.use_color))
        else:
            content = self.store.grid.cell(row, col).content
            self._write(f"Found: {content.type.value}"
                        + (f" ({content.value})" if content.value is not None else ""))

    def _cmd_answer(self, args: List[str]) -> None:
        outcome = self.store.answer_question(int(args[0]))
        messages = {
            AnswerOutcome.IGNORED: "No active quiz",
            AnswerOutcome.WRONG: "Wrong, try again",
            AnswerOutcome.CORRECT: "Correct!",
            AnswerOutcome.WON: "Correct! Territory claimed.",
        }
        self._write(messages[outcome])
        self._write(render_quiz(self.store.snapshot()["quiz"], self.use_color))

    def _cmd_map(self, args: List[str]) -> None:
        if len(args) >= 2:
            self._view_origin = (int(args[0]), int(args[1]))
        top, left = self._view_origin
        snap = self.store.snapshot(include_cells=True)
        self._write(render_map(snap, top, left, use_color=self.use_color))

    def _cmd_status(self, args: List[str]) -> None:
        snap = self.store.snapshot()
        self._write(render_status(snap, self.use_color))
        if snap["quiz"] is not None:
            self._write(render_quiz(snap["quiz"], self.use_color))

    def _cmd_back(self, args: List[str]) -> None:
        self.store.return_to_map()
        self._write(render_status(self.store.snapshot(), self.use_color))

    def _cmd_reset(self, args: List[str]) -> None:
        self.store.reset_game()
        self._write("Game reset, back to setup")

    def _cmd_help(self, args: List[str]) -> None:
        self._write(HELP_TEXT)

    def _cmd_quit(self, args: List[str]) -> None:
        self._running = False


class DemoRunner:
    """
    Autoplay: explores random cells and answers quiz questions with a
    fixed accuracy, pausing ``think_seconds`` (game time) per answer.

    Args:
        store: A store whose setup is already complete.
        accuracy: Probability that the scripted player answers correctly.
        think_seconds: Game-time pause before each answer.
        poll_interval: Wall-clock sleep between loop iterations.
        max_quizzes: Stop after this many finished quizzes.
        rng: Random source for the scripted player's choices.
    """

    def __init__(
        self,
        store: GameStore,
        accuracy: float = 0.8,
        think_seconds: float = 3.0,
        poll_interval: float = 0.05,
        max_quizzes: int = 5,
        rng: Optional[random.Random] = None,
        write: Callable[[str], None] = print,
    ):
        self.store = store
        self.accuracy = accuracy
        self.think_seconds = think_seconds
        self.poll_interval = poll_interval
        self.max_quizzes = max_quizzes
        self._rng = rng or random.Random()
        self._write = write
        self._running = False
        self._next_action_at = 0.0

    def run(self) -> None:
        """Play until ``max_quizzes`` quizzes finished. Ctrl+C stops early."""
        self._running = True
        logger.info("=" * 60)
        logger.info("  Word Conquest demo — Starting")
        logger.info(f"  Player:   {self.store.player.name} ({self.store.player.grade})")
        logger.info(f"  Accuracy: {self.accuracy:.0%}")
        logger.info(f"  Quizzes:  {self.max_quizzes}")
        logger.info("=" * 60)

        while self._running:
            try:
                self.store.scheduler.run_due()
                self.step()
                time.sleep(self.poll_interval)
            except KeyboardInterrupt:
                break

        self.store.stop_energy_regen()
        self._write(render_status(self.store.snapshot()))
        logger.info("Demo stopped.")

    def step(self) -> None:
        """Take at most one action if the think pause has elapsed."""
        if self.store.get_player_progress().total_quizzes >= self.max_quizzes:
            self._running = False
            return

        now = self.store.scheduler.now()
        if now < self._next_action_at:
            return
        self._next_action_at = now + self.think_seconds

        mode = self.store.mode
        if mode is ViewMode.QUIZ:
            self._answer()
        elif mode is ViewMode.RESULT:
            self._write(render_quiz(self.store.snapshot()["quiz"]))
            self.store.return_to_map()
        else:
            self._explore()

    def _answer(self) -> None:
        quiz = self.store.quiz
        question = quiz.current() if quiz is not None else None
        if question is None:
            return
        if self._rng.random() < self.accuracy:
            choice = question.correct_answer
        else:
            wrong = [i for i in range(len(question.options)) if i != question.correct_answer]
            choice = self._rng.choice(wrong) if wrong else question.correct_answer
        outcome = self.store.answer_question(choice)
        logger.debug(f"Demo answered {question.word!r} with {choice}: {outcome.value}")

    def _explore(self) -> None:
        if self.store.player.energy == 0:
            return
        grid = self.store.grid
        candidates = [c for c in grid.iter_cells() if c.status is CellStatus.UNEXPLORED]
        if not candidates:
            logger.info("Map fully explored")
            self._running = False
            return
        cell = self._rng.choice(candidates)
        self.store.explore_cell(cell.row, cell.col)
