"""
word_conquest.types — TypedDict schemas for store snapshots
============================================================

This module documents the exact structure of the plain dictionaries
returned by ``GameStore.snapshot()`` and passed to subscribers.
Snapshots are deep copies; mutating them never affects the store.

    >>> GameSnapshot.__annotations__
    {'mode': str, 'player': PlayerSnapshot, 'map': MapSnapshot, ...}
"""

from typing import Any, Dict, List, Optional, TypedDict


class PlayerSnapshot(TypedDict):
    """The local player."""
    id: str                  # e.g., "player-1"
    name: str                # display name (nickname or default)
    nickname: str
    identity: Optional[Any]  # opaque icon/emblem payload
    energy: int
    max_energy: int
    territory: int
    coins: int
    grade: str               # e.g., "grade4"


class CellSnapshot(TypedDict):
    id: str                  # e.g., "cell-3-7"
    row: int
    col: int
    status: str              # unexplored | explored | owned | enemy
    content: str             # empty | treasure | item | coins
    value: Optional[int]
    treasure_id: Optional[str]
    owner: Optional[str]


class MapSnapshot(TypedDict):
    """Map summary.

    Fields
    ------
    size : int
        Side length, 0 before the map is initialized.
    status_counts : Dict[str, int]
        Number of cells per status.
    cells : List[List[CellSnapshot]]
        Row-major cells. Only filled when the snapshot is taken with
        ``include_cells=True``; large maps make this expensive.
    """
    size: int
    status_counts: Dict[str, int]
    cells: List[List[CellSnapshot]]


class QuestionSnapshot(TypedDict):
    id: str
    word: str
    options: List[str]
    difficulty: str


class QuizSnapshot(TypedDict):
    """The live quiz. The correct answer is deliberately not exposed."""
    quiz_id: int
    treasure_id: str
    current_question: int
    question_count: int
    question: Optional[QuestionSnapshot]
    time_left: int
    max_time: int
    player_progress: int
    opponent_progress: int
    opponent_kind: str       # human | ai | empty
    opponent_name: Optional[str]
    opponent_tier: Optional[str]
    opponent_status: str     # thinking | answered | wrong
    status: str              # waiting | active | completed
    winner: Optional[str]    # player | opponent


class ProgressSnapshot(TypedDict):
    territory: int
    wins: int
    total_quizzes: int
    average_accuracy: float


class GameSnapshot(TypedDict):
    """Everything a presentation layer needs to draw one frame."""
    mode: str                # setup | home | map | quiz | result
    player: PlayerSnapshot
    map: MapSnapshot
    quiz: Optional[QuizSnapshot]
    progress: ProgressSnapshot
