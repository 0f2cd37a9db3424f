# Area: Store
"""
Store package — the authoritative game state container.

This package handles:
- Player economy (energy, coins, territory)
- Mode switching between setup, map, quiz and result views
- Atomic transitions and subscriber notification
- Read-only snapshots for the presentation layer
"""

from .player import PlayerState, ViewMode
from .snapshot import build_snapshot, cell_snapshot
from .store import GameStore

__all__ = [
    "GameStore",
    "PlayerState",
    "ViewMode",
    "build_snapshot",
    "cell_snapshot",
]
