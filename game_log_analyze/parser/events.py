"""
Event classes for combat log occurrences.
"""

from datetime import datetime
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GameLogEvent:
    """
    Base class for all observed game log events.

    Event kinds are defined as subclasses and carry their own payload
    in the data attribute.
    """

    timestamp: datetime
    data: Any


@dataclass(frozen=True)
class DamageDealtEvent(GameLogEvent):
    """
    Damage dealt by the player.

    Data:
        - timestamp: Time the damage was done
        - data: Amount of damage done (non-negative integer)
    """

    data: int

    @property
    def amount(self) -> int:
        """Amount of damage done."""
        return self.data
