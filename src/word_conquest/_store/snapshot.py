# Area: Store
"""
word_conquest._store.snapshot — Store snapshot builder
======================================================

Builds plain, serializable copies of the store's state for the
presentation layer and for subscribers.
"""

import copy
from typing import Optional

from .._map.grid import MapCell, MapGrid
from .._quiz.difficulty import ProgressRecord
from .._quiz.state import QuizState
from ..types import (
    CellSnapshot,
    GameSnapshot,
    MapSnapshot,
    PlayerSnapshot,
    ProgressSnapshot,
    QuizSnapshot,
)
from .player import PlayerState, ViewMode


def build_snapshot(
    mode: ViewMode,
    player: PlayerState,
    grid: Optional[MapGrid],
    quiz: Optional[QuizState],
    progress: ProgressRecord,
    include_cells: bool = False,
) -> GameSnapshot:
    """Build a full snapshot of the store."""
    return {
        "mode": mode.value,
        "player": _player_snapshot(player),
        "map": _map_snapshot(grid, include_cells),
        "quiz": _quiz_snapshot(quiz) if quiz is not None else None,
        "progress": _progress_snapshot(progress),
    }


def _player_snapshot(player: PlayerState) -> PlayerSnapshot:
    return {
        "id": player.id,
        "name": player.name,
        "nickname": player.nickname,
        "identity": copy.deepcopy(player.identity),
        "energy": player.energy,
        "max_energy": player.max_energy,
        "territory": player.territory,
        "coins": player.coins,
        "grade": player.grade,
    }


def _map_snapshot(grid: Optional[MapGrid], include_cells: bool) -> MapSnapshot:
    """Summarize the grid; cell detail only on request."""
    if grid is None:
        return {"size": 0, "status_counts": {}, "cells": []}
    return {
        "size": grid.size,
        "status_counts": {s.value: n for s, n in grid.count_by_status().items()},
        "cells": [[cell_snapshot(c) for c in row] for row in grid.rows()] if include_cells else [],
    }


def cell_snapshot(cell: MapCell) -> CellSnapshot:
    return {
        "id": cell.id,
        "row": cell.row,
        "col": cell.col,
        "status": cell.status.value,
        "content": cell.content.type.value,
        "value": cell.content.value,
        "treasure_id": cell.content.treasure_id,
        "owner": cell.owner,
    }


def _quiz_snapshot(quiz: QuizState) -> QuizSnapshot:
    question = quiz.current()
    return {
        "quiz_id": quiz.quiz_id,
        "treasure_id": quiz.treasure_id,
        "current_question": quiz.current_question,
        "question_count": quiz.question_count,
        "question": {
            "id": question.id,
            "word": question.word,
            "options": list(question.options),
            "difficulty": question.difficulty,
        } if question is not None else None,
        "time_left": quiz.time_left,
        "max_time": quiz.max_time,
        "player_progress": quiz.player_progress,
        "opponent_progress": quiz.opponent_progress,
        "opponent_kind": quiz.opponent_kind.value,
        "opponent_name": quiz.opponent_name,
        "opponent_tier": quiz.opponent_tier,
        "opponent_status": quiz.opponent_status.value,
        "status": quiz.status.value,
        "winner": quiz.winner.value if quiz.winner is not None else None,
    }


def _progress_snapshot(progress: ProgressRecord) -> ProgressSnapshot:
    return {
        "territory": progress.territory,
        "wins": progress.wins,
        "total_quizzes": progress.total_quizzes,
        "average_accuracy": progress.average_accuracy,
    }
