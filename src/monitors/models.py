"""
Status data models.

Defines the normalized status results and history samples shared by the
classifier, the history buffer and the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class OnlineStatus:
    """A server that answered and looks playable."""

    players: int = 0
    max_players: int = 0
    version: str = "Unknown"
    description: str = "No description"
    ping: float = 0

    @property
    def online(self) -> bool:
        return True


@dataclass(frozen=True)
class OfflineStatus:
    """A server that is unreachable, stopped or sleeping."""

    reason: str

    @property
    def online(self) -> bool:
        return False


StatusResult = Union[OnlineStatus, OfflineStatus]


@dataclass
class HistorySample:
    """One hourly bucket of the player-count history."""

    count: int
    timestamp: datetime = field(default_factory=datetime.now)
