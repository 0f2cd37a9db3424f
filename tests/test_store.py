# Area: Store
"""Tests for GameStore — setup, exploration, quiz outcomes, energy and observers."""

import random

import pytest

from conftest import advance
from word_conquest._map.grid import CellStatus
from word_conquest._quiz.enums import AnswerOutcome, QuizStatus, Winner
from word_conquest._store.player import ViewMode


def treasure_cell(store):
    return next(c for c in store.grid.iter_cells() if c.content.is_treasure)


def plain_cell(store):
    return next(c for c in store.grid.iter_cells() if not c.content.is_treasure)


def win_quiz(store):
    while store.quiz.is_active:
        store.answer_question(store.quiz.current().correct_answer)


class TestSetup:

    def test_initial_state(self, store):
        assert store.mode is ViewMode.SETUP
        assert store.grid is None
        assert store.quiz is None
        assert store.player.energy == 10
        assert store.player.max_energy == 10
        assert store.player.grade == "grade4"
        assert not store.check_setup_complete()

    def test_nickname_is_trimmed_and_checked(self, store):
        store.set_nickname("  A  ")
        assert store.player.nickname == "A"
        assert not store.check_setup_complete()
        store.set_nickname(" Ada ")
        assert store.player.nickname == "Ada"
        assert store.player.name == "Ada"
        assert store.check_setup_complete()

    def test_start_game_requires_nickname(self, store):
        assert store.start_game() is False
        assert store.mode is ViewMode.SETUP
        assert store.grid is None

    def test_start_game_builds_map(self, store, settings):
        store.set_nickname("Ada")
        assert store.start_game() is True
        assert store.mode is ViewMode.HOME
        assert store.grid.size == settings.map_size

    def test_set_grade(self, store):
        assert store.set_grade("grade7") is True
        assert store.player.grade == "grade7"
        assert store.set_grade("grade42") is False
        assert store.player.grade == "grade7"

    def test_identity_is_stored_opaque(self, store):
        emblem = {"icon": "dragon", "colors": ["red", "gold"]}
        store.set_identity(emblem)
        assert store.player.identity is emblem
        snap = store.snapshot()
        snap["player"]["identity"]["colors"].append("blue")
        assert emblem["colors"] == ["red", "gold"]


class TestExplore:

    def test_explore_spends_energy_and_reveals(self, ready_store):
        cell = plain_cell(ready_store)
        assert ready_store.explore_cell(cell.row, cell.col) is True
        assert ready_store.player.energy == 9
        assert cell.status is CellStatus.EXPLORED
        assert ready_store.quiz is None

    def test_explore_same_cell_twice(self, ready_store):
        cell = plain_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        assert ready_store.explore_cell(cell.row, cell.col) is False
        assert ready_store.player.energy == 9

    def test_explore_treasure_starts_quiz(self, ready_store):
        cell = treasure_cell(ready_store)
        assert ready_store.explore_cell(cell.row, cell.col) is True
        assert ready_store.mode is ViewMode.QUIZ
        quiz = ready_store.quiz
        assert quiz.treasure_id == cell.content.treasure_id
        assert quiz.status is QuizStatus.ACTIVE
        assert quiz.question_count == 3
        assert quiz.opponent_name
        assert quiz.opponent_tier in ("beginner", "intermediate", "advanced", "expert")

    def test_explore_without_energy_changes_nothing(self, ready_store):
        ready_store.use_energy(10)
        cell = plain_cell(ready_store)
        assert ready_store.explore_cell(cell.row, cell.col) is False
        assert cell.status is CellStatus.UNEXPLORED
        assert ready_store.player.energy == 0

    def test_explore_off_map(self, ready_store):
        assert ready_store.explore_cell(99, 0) is False
        assert ready_store.explore_cell(-1, -1) is False
        assert ready_store.player.energy == 10

    def test_explore_before_map(self, store):
        assert store.explore_cell(0, 0) is False
        assert store.player.energy == 10


class TestQuizOutcome:

    def test_player_win_claims_and_credits(self, ready_store):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        win_quiz(ready_store)

        assert ready_store.quiz.winner is Winner.PLAYER
        assert ready_store.player.territory == 1
        assert ready_store.player.coins == 20
        assert cell.status is CellStatus.OWNED
        assert cell.owner == "player-1"
        assert ready_store.mode is ViewMode.RESULT

        progress = ready_store.get_player_progress()
        assert progress.wins == 1
        assert progress.total_quizzes == 1
        assert progress.average_accuracy == pytest.approx(1.0)
        assert progress.territory == 1

    def test_wrong_answers_lower_recorded_accuracy(self, ready_store):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        question = ready_store.quiz.current()
        assert ready_store.answer_question((question.correct_answer + 1) % 4) is AnswerOutcome.WRONG
        win_quiz(ready_store)
        assert ready_store.get_player_progress().average_accuracy == pytest.approx(0.75)

    def test_timeout_loses(self, ready_store, clock, scheduler):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        quiz = ready_store.quiz
        # Keep the opponent out of it so only the clock decides
        ready_store.engine.opponent.cancel_all()
        advance(clock, scheduler, 100.0, step=1.0)

        assert quiz.winner is Winner.OPPONENT
        assert quiz.time_left == 0
        assert ready_store.player.territory == 0
        assert ready_store.player.coins == 0
        assert cell.status is CellStatus.EXPLORED
        progress = ready_store.get_player_progress()
        assert (progress.wins, progress.total_quizzes) == (0, 1)

    def test_opponent_win(self, ready_store):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        for _ in range(2):
            assert ready_store.update_opponent_progress() is AnswerOutcome.CORRECT
        assert ready_store.update_opponent_progress() is AnswerOutcome.WON
        assert ready_store.quiz.winner is Winner.OPPONENT
        assert ready_store.mode is ViewMode.RESULT
        assert ready_store.player.territory == 0

    def test_answers_ignored_after_completion(self, ready_store):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        win_quiz(ready_store)
        assert ready_store.answer_question(0) is AnswerOutcome.IGNORED
        assert ready_store.player.territory == 1

    def test_return_to_map_stops_everything(self, ready_store, clock, scheduler):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        ready_store.return_to_map()
        assert ready_store.quiz is None
        assert ready_store.mode is ViewMode.MAP
        # Only energy regen is left
        assert scheduler.pending() == 1

        advance(clock, scheduler, 200.0, step=0.5)
        assert ready_store.quiz is None
        assert ready_store.get_player_progress().total_quizzes == 0

    def test_win_without_map_still_credits(self, store):
        store.set_nickname("Ada")
        quiz = store.start_quiz("treasure-0-0")
        win_quiz(store)

        assert quiz.winner is Winner.PLAYER
        assert store.grid is None
        assert store.player.territory == 1
        assert store.player.coins == 20
        assert store.get_player_progress().wins == 1

    def test_record_quiz_result(self, ready_store):
        ready_store.record_quiz_result(True, 1.0)
        record = ready_store.record_quiz_result(False, 0.5)
        assert (record.wins, record.total_quizzes) == (1, 2)
        assert record.average_accuracy == pytest.approx(0.75)


class TestEnergy:

    def test_use_energy(self, ready_store):
        assert ready_store.use_energy(3) is True
        assert ready_store.player.energy == 7
        assert ready_store.use_energy(8) is False
        assert ready_store.player.energy == 7

    def test_restore_capped(self, ready_store):
        ready_store.use_energy(2)
        assert ready_store.restore_energy(5) == 2
        assert ready_store.player.energy == 10

    def test_energy_stays_in_bounds(self, ready_store):
        rng = random.Random(99)
        for _ in range(500):
            amount = rng.randint(0, 4)
            if rng.random() < 0.5:
                ready_store.use_energy(amount)
            else:
                ready_store.restore_energy(amount)
            assert 0 <= ready_store.player.energy <= ready_store.player.max_energy

    def test_negative_amounts_rejected_quietly(self, ready_store):
        notified = []
        ready_store.subscribe(notified.append)
        assert ready_store.use_energy(-1) is False
        assert ready_store.restore_energy(-1) == 0
        assert ready_store.player.energy == 10
        assert notified == []

    def test_regen_restores_one_per_interval(self, ready_store, clock, scheduler):
        ready_store.use_energy(5)
        advance(clock, scheduler, 30.0, step=1.0)
        assert ready_store.player.energy == 6
        advance(clock, scheduler, 60.0, step=1.0)
        assert ready_store.player.energy == 8

    def test_regen_never_exceeds_max(self, ready_store, clock, scheduler):
        ready_store.use_energy(1)
        advance(clock, scheduler, 300.0, step=5.0)
        assert ready_store.player.energy == 10

    def test_stop_energy_regen(self, ready_store, clock, scheduler):
        ready_store.use_energy(5)
        ready_store.stop_energy_regen()
        advance(clock, scheduler, 120.0, step=5.0)
        assert ready_store.player.energy == 5


class TestReset:

    def test_reset_restores_defaults(self, ready_store, scheduler):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        win_quiz(ready_store)

        ready_store.reset_game()

        assert ready_store.mode is ViewMode.SETUP
        assert ready_store.grid is None
        assert ready_store.quiz is None
        assert ready_store.player.energy == 10
        assert ready_store.player.territory == 0
        assert ready_store.player.coins == 0
        assert ready_store.player.nickname == ""
        assert ready_store.get_player_progress().total_quizzes == 0
        assert ready_store._names.issued == frozenset()
        assert scheduler.pending() == 0


class TestObservers:

    def test_one_notification_per_transition(self, ready_store):
        seen = []
        ready_store.subscribe(seen.append)
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        assert len(seen) == 1
        snap = seen[0]
        assert snap["mode"] == "quiz"
        assert snap["player"]["energy"] == 9
        assert snap["quiz"]["status"] == "active"

    def test_rejected_operation_does_not_notify(self, ready_store):
        seen = []
        ready_store.subscribe(seen.append)
        ready_store.explore_cell(99, 99)
        ready_store.answer_question(0)
        assert seen == []

    def test_winning_answer_notifies_once_with_final_state(self, ready_store):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        for _ in range(2):
            ready_store.answer_question(ready_store.quiz.current().correct_answer)
        seen = []
        ready_store.subscribe(seen.append)
        ready_store.answer_question(ready_store.quiz.current().correct_answer)
        assert len(seen) == 1
        assert seen[0]["mode"] == "result"
        assert seen[0]["player"]["territory"] == 1
        assert seen[0]["progress"]["wins"] == 1

    def test_tick_notifies(self, ready_store, clock, scheduler):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        ready_store.engine.opponent.cancel_all()
        seen = []
        ready_store.subscribe(seen.append)
        advance(clock, scheduler, 1.0)
        assert [s["quiz"]["time_left"] for s in seen] == [99]

    def test_unsubscribe(self, ready_store):
        seen = []
        unsubscribe = ready_store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        ready_store.use_energy(1)
        assert seen == []

    def test_failing_listener_does_not_break_store(self, ready_store):
        seen = []

        def broken(snapshot):
            raise RuntimeError("boom")

        ready_store.subscribe(broken)
        ready_store.subscribe(seen.append)
        assert ready_store.use_energy(1) is True
        assert len(seen) == 1
        assert ready_store.player.energy == 9


class TestSnapshot:

    def test_quiz_snapshot_hides_answer(self, ready_store):
        cell = treasure_cell(ready_store)
        ready_store.explore_cell(cell.row, cell.col)
        question = ready_store.snapshot()["quiz"]["question"]
        assert set(question) == {"id", "word", "options", "difficulty"}

    def test_map_summary(self, ready_store, settings):
        snap = ready_store.snapshot()
        assert snap["map"]["size"] == settings.map_size
        assert snap["map"]["status_counts"]["unexplored"] == settings.map_size ** 2
        assert snap["map"]["cells"] == []

    def test_cells_on_request(self, ready_store, settings):
        cells = ready_store.snapshot(include_cells=True)["map"]["cells"]
        assert len(cells) == settings.map_size
        assert cells[0][0]["id"] == "cell-0-0"

    def test_snapshot_is_detached(self, ready_store):
        snap = ready_store.snapshot(include_cells=True)
        snap["player"]["energy"] = 0
        snap["map"]["cells"][0][0]["status"] = "owned"
        assert ready_store.player.energy == 10
        assert ready_store.grid.cell(0, 0).status is CellStatus.UNEXPLORED
