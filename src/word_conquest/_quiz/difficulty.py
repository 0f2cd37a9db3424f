# Area: Quiz
"""
word_conquest._quiz.difficulty — Progress-scaled opponent difficulty
====================================================================

Maps the player's progress (territory held, quizzes won) to a
probability distribution over four opponent tiers and samples one.
The progress aggregate itself lives here too; the store only reaches
it through ProgressTracker's query methods.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import ConfigurationInvariantError

logger = logging.getLogger("word_conquest.difficulty")

SUM_TOLERANCE = 1e-9


@dataclass(frozen=True)
class DifficultyTier:
    """
    Skill profile of a simulated opponent.

    Attributes:
        key: Stable identifier (beginner, intermediate, ...)
        label: Human-readable name
        accuracy: Probability that one answer attempt is correct
        min_reaction_ms: Fastest base reaction time
        max_reaction_ms: Slowest base reaction time
        variance_ms: Extra +/- jitter added to the base reaction time
        description: Short flavour text for the presentation layer
    """

    key: str
    label: str
    accuracy: float
    min_reaction_ms: int
    max_reaction_ms: int
    variance_ms: int
    description: str


TIER_ORDER: Tuple[str, ...] = ("beginner", "intermediate", "advanced", "expert")

TIERS: Dict[str, DifficultyTier] = {
    "beginner": DifficultyTier(
        key="beginner",
        label="Beginner",
        accuracy=0.45,
        min_reaction_ms=3000,
        max_reaction_ms=8000,
        variance_ms=2000,
        description="Just started learning, needs time to think",
    ),
    "intermediate": DifficultyTier(
        key="intermediate",
        label="Intermediate",
        accuracy=0.65,
        min_reaction_ms=2000,
        max_reaction_ms=6000,
        variance_ms=1500,
        description="Has the basics, answers at a moderate pace",
    ),
    "advanced": DifficultyTier(
        key="advanced",
        label="Advanced",
        accuracy=0.80,
        min_reaction_ms=1500,
        max_reaction_ms=4000,
        variance_ms=1000,
        description="Solid vocabulary, reacts quickly",
    ),
    "expert": DifficultyTier(
        key="expert",
        label="Expert",
        accuracy=0.92,
        min_reaction_ms=800,
        max_reaction_ms=2500,
        variance_ms=500,
        description="Vocabulary master, answers almost instantly",
    ),
}

# Tiers fast enough to answer in streaks
STREAK_TIERS = frozenset({"advanced", "expert"})


@dataclass(frozen=True)
class StageRow:
    """
    One row of the distribution table.

    The row matches when territory < max_territory OR wins < max_wins.
    A row with both bounds None always matches.
    """

    name: str
    max_territory: Optional[int]
    max_wins: Optional[int]
    weights: Dict[str, float]

    def matches(self, territory: int, wins: int) -> bool:
        if self.max_territory is None and self.max_wins is None:
            return True
        if self.max_territory is not None and territory < self.max_territory:
            return True
        return self.max_wins is not None and wins < self.max_wins


DISTRIBUTION_TABLE: Tuple[StageRow, ...] = (
    StageRow("novice", 3, 2,
             {"beginner": 0.75, "intermediate": 0.20, "advanced": 0.04, "expert": 0.01}),
    StageRow("developing", 8, 5,
             {"beginner": 0.50, "intermediate": 0.35, "advanced": 0.12, "expert": 0.03}),
    StageRow("skilled", 15, 12,
             {"beginner": 0.30, "intermediate": 0.45, "advanced": 0.20, "expert": 0.05}),
    StageRow("veteran", None, None,
             {"beginner": 0.20, "intermediate": 0.40, "advanced": 0.30, "expert": 0.10}),
)


@dataclass(frozen=True)
class ProgressRecord:
    """Snapshot of the player's cumulative quiz record."""
    territory: int = 0
    wins: int = 0
    total_quizzes: int = 0
    average_accuracy: float = 0.0


def validate_distribution_table(table: Sequence[StageRow]) -> None:
    """
    Check every row names exactly the known tiers and sums to 1.

    Raises:
        ConfigurationInvariantError: Listing every offending row.
    """
    problems: List[str] = []
    for row in table:
        if set(row.weights) != set(TIER_ORDER):
            problems.append(f"{row.name}: tiers {sorted(row.weights)} != {sorted(TIER_ORDER)}")
        total = sum(row.weights.values())
        if abs(total - 1.0) > SUM_TOLERANCE:
            problems.append(f"{row.name}: weights sum to {total!r}")
    if not table or table[-1].max_territory is not None or table[-1].max_wins is not None:
        problems.append("last row must be an unconditional fallback")
    if problems:
        raise ConfigurationInvariantError("difficulty_distribution", problems)


def select_row(progress: ProgressRecord) -> StageRow:
    """First row whose condition matches wins."""
    for row in DISTRIBUTION_TABLE:
        if row.matches(progress.territory, progress.wins):
            return row
    return DISTRIBUTION_TABLE[-1]


def distribution(progress: ProgressRecord) -> Dict[str, float]:
    """Probability of each tier for the given progress."""
    return dict(select_row(progress).weights)


def sample(progress: ProgressRecord, rng: Optional[random.Random] = None) -> str:
    """
    Draw a tier key for the given progress.

    Walks the cumulative distribution in TIER_ORDER and returns the
    first tier whose running sum exceeds the draw; beginner otherwise.
    """
    rng = rng or random.Random()
    weights = distribution(progress)
    draw = rng.random()
    cumulative = 0.0
    for key in TIER_ORDER:
        cumulative += weights[key]
        if draw < cumulative:
            return key
    return "beginner"


class ProgressTracker:
    """
    Running aggregate of quiz results used to scale difficulty.

    Accuracy is averaged incrementally:
        new_avg = (old_avg * (n - 1) + accuracy) / n
    """

    def __init__(self) -> None:
        self._territory = 0
        self._wins = 0
        self._total = 0
        self._average_accuracy = 0.0

    def record(self, won: bool, accuracy: float, territory: Optional[int] = None) -> ProgressRecord:
        accuracy = min(1.0, max(0.0, float(accuracy)))
        self._total += 1
        if won:
            self._wins += 1
        if territory is not None:
            self._territory = territory
        self._average_accuracy = (
            self._average_accuracy * (self._total - 1) + accuracy
        ) / self._total
        logger.debug(
            f"Progress: {self._wins}/{self._total} won, "
            f"avg accuracy {self._average_accuracy:.2f}, territory {self._territory}"
        )
        return self.snapshot()

    def sync_territory(self, territory: int) -> None:
        self._territory = territory

    def snapshot(self) -> ProgressRecord:
        return ProgressRecord(
            territory=self._territory,
            wins=self._wins,
            total_quizzes=self._total,
            average_accuracy=self._average_accuracy,
        )

    def sample_tier(self, rng: Optional[random.Random] = None) -> DifficultyTier:
        progress = self.snapshot()
        key = sample(progress, rng)
        logger.debug(f"Sampled tier '{key}' from stage '{select_row(progress).name}'")
        return TIERS[key]

    def reset(self) -> None:
        self._territory = 0
        self._wins = 0
        self._total = 0
        self._average_accuracy = 0.0


validate_distribution_table(DISTRIBUTION_TABLE)
