"""
Status refresher - the polling loop.

Owns one APScheduler interval job per monitored server. Every job runs a
refresh cycle for its server:

1. Classify the server status
2. Record the player count (online only)
3. Render the player chart (when enabled)
4. Build the status message
5. Edit or create the Discord message

All per-server state (history, tracked messages, running cycles) lives on
this object and is keyed by ServerConfig.key.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Sequence

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from monitors.history import PlayerHistory
from monitors.models import HistorySample, OnlineStatus, StatusResult
from notifications.presenter import build_status_message
from notifications.publisher import MessagePublisher, PublishOutcome
from reports.chart import render_player_chart

if TYPE_CHECKING:
    from config import Config, ServerConfig
    from monitors.classifier import StatusClassifier


logger = logging.getLogger(__name__)


ChartRenderer = Callable[[Sequence[HistorySample], str], "bytes | None"]


class StatusRefresher:
    """
    Schedules and runs refresh cycles for every configured server.

    Jobs are independent: a slow server never delays another server's
    job. A cycle that is still running when its next run comes due is
    skipped rather than run concurrently.
    """

    def __init__(
        self,
        config: "Config",
        classifier: "StatusClassifier",
        publisher: MessagePublisher,
        history: PlayerHistory | None = None,
        chart_renderer: ChartRenderer = render_player_chart,
    ):
        """
        Initialize the refresher.

        Args:
            config: Application configuration (servers and embed settings)
            classifier: Status classifier
            publisher: Message publisher tracking one message per server
            history: Player history buffer
            chart_renderer: Function turning history into PNG bytes
        """
        self.config = config
        self.classifier = classifier
        self.publisher = publisher
        self.history = history or PlayerHistory()
        self.chart_renderer = chart_renderer
        self._scheduler: AsyncIOScheduler | None = None
        self._in_progress: set[str] = set()
        self._last_status: dict[str, StatusResult] = {}

    @property
    def servers(self) -> list["ServerConfig"]:
        return self.config.servers

    @property
    def running(self) -> bool:
        return bool(self._scheduler and self._scheduler.running)

    def scheduled_jobs(self) -> list[str]:
        """IDs (server keys) of the currently scheduled jobs."""
        if self._scheduler is None:
            return []
        return [job.id for job in self._scheduler.get_jobs()]

    def get_last_status(self, server_key: str) -> StatusResult | None:
        """Get the result of the most recent poll for a server."""
        return self._last_status.get(server_key)

    # =========================================================================
    # Scheduling
    # =========================================================================

    def start(self) -> None:
        """
        Schedule every server and start the scheduler.

        Each server refreshes immediately, then every update interval.
        Calling start() again re-arms all jobs without duplicating them.
        """
        if self._scheduler is None:
            self._scheduler = AsyncIOScheduler()

        self._schedule_all()

        if not self._scheduler.running:
            self._scheduler.start()
            logger.info(f"Refresh scheduler started with {len(self.servers)} servers")

    def reinitialize(self) -> None:
        """Drop every job and schedule all servers again."""
        logger.info("Reinitializing status updates")
        self.start()

    def stop(self) -> None:
        """
        Stop all jobs.

        Cycles already running are left to finish; history and tracked
        messages are kept for a later start().
        """
        if self._scheduler is None:
            return
        self._scheduler.remove_all_jobs()
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Refresh scheduler stopped")
        self._scheduler = None

    def _schedule_all(self) -> None:
        assert self._scheduler is not None
        self._scheduler.remove_all_jobs()

        for server in self.servers:
            self._scheduler.add_job(
                self.refresh_server,
                IntervalTrigger(seconds=server.update_interval_seconds),
                args=[server],
                id=server.key,
                name=server.name,
                next_run_time=datetime.now(),
                max_instances=1,
                coalesce=True,
                replace_existing=True,
            )
            logger.info(
                f"Initialized status updates for {server.name} ({server.address}:{server.port}) "
                f"every {server.update_interval_seconds:g}s"
            )

    # =========================================================================
    # Refresh cycle
    # =========================================================================

    async def refresh_server(self, server: "ServerConfig") -> PublishOutcome | None:
        """
        Run one refresh cycle for a server.

        Never raises, so a failing server cannot stop its job.

        Returns:
            PublishOutcome, or None if the cycle was skipped or crashed
        """
        if server.key in self._in_progress:
            logger.debug(f"Refresh for {server.name} still running, skipping")
            return None

        self._in_progress.add(server.key)
        try:
            return await self._run_cycle(server)
        except Exception as e:
            logger.error(f"Failed to update {server.name}: {e}", exc_info=True)
            return None
        finally:
            self._in_progress.discard(server.key)

    async def refresh_all(self) -> dict[str, PublishOutcome | None]:
        """Run one refresh cycle for every server concurrently."""
        outcomes = await asyncio.gather(*(self.refresh_server(s) for s in self.servers))
        return {server.key: outcome for server, outcome in zip(self.servers, outcomes)}

    async def _run_cycle(self, server: "ServerConfig") -> PublishOutcome:
        status = await self.classifier.classify(server.address, server.port)
        self._last_status[server.key] = status

        chart = None
        if isinstance(status, OnlineStatus):
            self.history.record(server.key, status.players, server.display.chart.history_hours)
            if server.display.chart_enabled:
                chart = await self._render_chart(server)

        payload = build_status_message(server, status, self.config.embed, chart=chart)
        outcome = await self.publisher.publish(server.key, server.channel_id, payload)

        if outcome.ok:
            logger.info(f"Updated status for {server.name}")
        return outcome

    async def _render_chart(self, server: "ServerConfig") -> bytes | None:
        """Render the player chart off the event loop; errors yield no chart."""
        samples = self.history.get(server.key)
        try:
            return await asyncio.to_thread(self.chart_renderer, samples, server.display.chart.color)
        except Exception as e:
            logger.error(f"Failed to generate player chart for {server.name}: {e}")
            return None
