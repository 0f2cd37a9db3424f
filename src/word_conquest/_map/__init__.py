# Area: Map
"""
Map package — grid generation and cell mutations.
"""

from .grid import (
    CellContent,
    CellStatus,
    ContentType,
    MapCell,
    MapGrid,
    claim,
    explore,
    generate,
)

__all__ = [
    "CellContent",
    "CellStatus",
    "ContentType",
    "MapCell",
    "MapGrid",
    "claim",
    "explore",
    "generate",
]
