"""
Player-count history.

Keeps a short, hourly-bucketed series of player counts per server for the
chart renderer. Polls that land within the same hour overwrite the newest
bucket instead of appending.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from monitors.models import HistorySample


logger = logging.getLogger(__name__)


BUCKET_SIZE = timedelta(hours=1)


class PlayerHistory:
    """In-memory player history keyed by server key."""

    def __init__(self):
        self._series: dict[str, list[HistorySample]] = {}

    def record(
        self,
        server_key: str,
        count: int,
        capacity: int = 24,
        now: datetime | None = None,
    ) -> None:
        """
        Record a player count for a server.

        Args:
            server_key: Server identity
            count: Current player count
            capacity: Maximum number of samples kept
            now: Sample time (defaults to the current local time)
        """
        now = now or datetime.now()
        series = self._series.setdefault(server_key, [])

        if not series or now - series[-1].timestamp >= BUCKET_SIZE:
            series.append(HistorySample(count=count, timestamp=now))
            while len(series) > capacity:
                series.pop(0)
        else:
            series[-1].count = count

    def get(self, server_key: str) -> list[HistorySample]:
        """Return a snapshot of a server's samples, oldest first."""
        return [
            HistorySample(count=s.count, timestamp=s.timestamp)
            for s in self._series.get(server_key, [])
        ]

    def clear(self, server_key: str | None = None) -> None:
        """Drop the history of one server, or of all servers."""
        if server_key is None:
            self._series.clear()
        else:
            self._series.pop(server_key, None)

    def __len__(self) -> int:
        return len(self._series)
