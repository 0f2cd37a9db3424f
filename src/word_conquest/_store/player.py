# Area: Store
"""
word_conquest._store.player — Player economy
============================================

Holds the player's identity and economy (energy, coins, territory).
Spending raises InsufficientResourceError; the store turns that into
a False result.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
import logging

from ..errors import InsufficientResourceError

logger = logging.getLogger("word_conquest.player")


class ViewMode(Enum):
    """Top-level mode the presentation layer renders."""
    SETUP  = "setup"
    HOME   = "home"
    MAP    = "map"
    QUIZ   = "quiz"
    RESULT = "result"


@dataclass
class PlayerState:
    """
    The local player.

    ``identity`` is an opaque icon or emblem payload. It is validated by
    the caller and stored unchanged.
    """
    id: str
    name: str
    energy: int
    max_energy: int
    grade: str
    nickname: str = ""
    identity: Optional[Any] = None
    territory: int = 0
    coins: int = 0

    def spend_energy(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot spend a negative amount: {amount}")
        if self.energy < amount:
            raise InsufficientResourceError("energy", amount, self.energy)
        self.energy -= amount

    def restore_energy(self, amount: int) -> int:
        """Add energy up to max_energy. Returns the amount actually added."""
        if amount < 0:
            raise ValueError(f"Cannot restore a negative amount: {amount}")
        before = self.energy
        self.energy = min(self.energy + amount, self.max_energy)
        return self.energy - before

    def credit_win(self, coins: int) -> None:
        self.territory += 1
        self.coins += coins
        logger.info(f"{self.name}: territory {self.territory}, coins {self.coins}")
