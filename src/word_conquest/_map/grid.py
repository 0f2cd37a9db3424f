# Area: Map
"""
word_conquest._map.grid — Map grid model
========================================

Generates the square exploration map and applies the two mutations the
game needs: exploring a single cell and claiming every cell that
belongs to a treasure. Cells are created once and mutated in place.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional

from ..errors import ConfigurationInvariantError, InvalidTransitionError

logger = logging.getLogger("word_conquest.grid")


class CellStatus(Enum):
    """Exploration status of a map cell."""
    UNEXPLORED = "unexplored"
    EXPLORED   = "explored"
    OWNED      = "owned"
    ENEMY      = "enemy"        # reserved for rival ownership


class ContentType(Enum):
    EMPTY    = "empty"
    TREASURE = "treasure"
    ITEM     = "item"
    COINS    = "coins"


# Cumulative upper bounds of the content draw, checked in order
CONTENT_THRESHOLDS = (
    (0.40, ContentType.TREASURE),
    (0.50, ContentType.ITEM),
    (0.60, ContentType.COINS),
)

ITEM_VALUE_RANGE = (1, 3)       # inclusive
COINS_VALUE_RANGE = (10, 59)    # inclusive


@dataclass(frozen=True)
class CellContent:
    """What a cell holds. Never changes after generation."""
    type: ContentType = ContentType.EMPTY
    value: Optional[int] = None
    treasure_id: Optional[str] = None

    @property
    def is_treasure(self) -> bool:
        return self.type is ContentType.TREASURE


@dataclass
class MapCell:
    row: int
    col: int
    content: CellContent
    status: CellStatus = CellStatus.UNEXPLORED
    owner: Optional[str] = None

    @property
    def id(self) -> str:
        return f"cell-{self.row}-{self.col}"


class MapGrid:
    """Row-major size × size matrix of cells."""

    def __init__(self, rows: List[List[MapCell]]):
        self._rows = rows

    @property
    def size(self) -> int:
        return len(self._rows)

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> MapCell:
        if not self.contains(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} grid")
        return self._rows[row][col]

    def iter_cells(self) -> Iterator[MapCell]:
        for row in self._rows:
            yield from row

    def rows(self) -> List[List[MapCell]]:
        return self._rows

    def count_by_status(self) -> Dict[CellStatus, int]:
        counts = Counter(c.status for c in self.iter_cells())
        return {status: counts.get(status, 0) for status in CellStatus}

    def count_by_content(self) -> Dict[ContentType, int]:
        counts = Counter(c.content.type for c in self.iter_cells())
        return {kind: counts.get(kind, 0) for kind in ContentType}


def _draw_content(row: int, col: int, rng: random.Random) -> CellContent:
    roll = rng.random()
    kind = ContentType.EMPTY
    for bound, candidate in CONTENT_THRESHOLDS:
        if roll < bound:
            kind = candidate
            break

    if kind is ContentType.TREASURE:
        return CellContent(kind, treasure_id=f"treasure-{row}-{col}")
    if kind is ContentType.ITEM:
        return CellContent(kind, value=rng.randint(*ITEM_VALUE_RANGE))
    if kind is ContentType.COINS:
        return CellContent(kind, value=rng.randint(*COINS_VALUE_RANGE))
    return CellContent()


def generate(size: int, rng: Optional[random.Random] = None) -> MapGrid:
    """
    Build a fresh grid with independently drawn cell content.

    Args:
        size: Side length of the square grid.
        rng: Random source; a seeded instance makes the grid reproducible.

    Returns:
        MapGrid with every cell unexplored.

    Raises:
        ConfigurationInvariantError: If size is not positive.
    """
    if size < 1:
        raise ConfigurationInvariantError("map_size", [f"size must be >= 1, got {size}"])
    rng = rng or random.Random()

    rows = [
        [MapCell(row=r, col=c, content=_draw_content(r, c, rng)) for c in range(size)]
        for r in range(size)
    ]
    grid = MapGrid(rows)
    logger.info(f"Generated {size}x{size} map")
    logger.debug(f"Content counts: { {k.value: v for k, v in grid.count_by_content().items()} }")
    return grid


def explore(grid: MapGrid, row: int, col: int) -> CellContent:
    """
    Mark an unexplored cell as explored and return what it holds.

    Raises:
        InvalidTransitionError: If the coordinates are off the map or the
            cell was already explored.
    """
    if not grid.contains(row, col):
        raise InvalidTransitionError(f"cell-{row}-{col}", "off-map", "explore")

    cell = grid.cell(row, col)
    if cell.status is not CellStatus.UNEXPLORED:
        raise InvalidTransitionError(cell.id, cell.status.value, "explore")

    cell.status = CellStatus.EXPLORED
    logger.debug(f"Explored {cell.id}: {cell.content.type.value}")
    return cell.content


def claim(grid: MapGrid, treasure_id: str, owner_id: str) -> int:
    """
    Mark every cell holding ``treasure_id`` as owned by ``owner_id``.

    Matching is by treasure id, not position, so a treasure spanning
    several cells is claimed in one call.

    Returns:
        Number of cells that changed hands.
    """
    claimed = 0
    for cell in grid.iter_cells():
        if cell.content.treasure_id != treasure_id:
            continue
        if cell.status is CellStatus.OWNED:
            continue
        cell.status = CellStatus.OWNED
        cell.owner = owner_id
        claimed += 1
    logger.info(f"Claimed {claimed} cell(s) for {treasure_id} → {owner_id}")
    return claimed
