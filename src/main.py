"""
Server Status Board - Main entry point.

This is the main application that:
1. Loads configuration
2. Creates the status API client and Discord transport
3. Schedules a refresh job per monitored server
4. Runs until stopped
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

# Import version from package root
try:
    from __init__ import __version__
except ImportError:
    __version__ = "1.0.0"  # Fallback

# Local imports
from config import load_config, setup_logging, Config
from monitors.classifier import StatusClassifier
from monitors.history import PlayerHistory
from monitors.services.mcstatus import McStatusClient
from notifications import DiscordProvider, MessagePublisher
from refresher import StatusRefresher


logger = logging.getLogger(__name__)


class StatusBoard:
    """
    Main application class.

    Wires the status client, classifier, publisher and refresher together.
    """

    def __init__(self, config: Config):
        self.config = config
        self._running = False
        self._stopped = False

        self.status_client = McStatusClient(
            base_url=config.status_api.base_url,
            timeout=config.status_api.timeout_seconds,
        )
        self.discord = DiscordProvider(token=config.discord_token)

        self.refresher = StatusRefresher(
            config=config,
            classifier=StatusClassifier(self.status_client),
            publisher=MessagePublisher(self.discord),
            history=PlayerHistory(),
        )

    async def start(self) -> None:
        """Start the status board."""
        logger.info("Starting Server Status Board...")
        self._running = True

        await self.discord.initialize()
        self.refresher.start()
        logger.info("Server Status Board is running. Press Ctrl+C to stop.")

        # Keep running until stopped
        while self._running:
            await asyncio.sleep(1)

    def request_stop(self) -> None:
        """Ask start() to return; the caller then runs stop()."""
        self._running = False

    async def stop(self) -> None:
        """Stop the status board gracefully. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True
        logger.info("Stopping Server Status Board...")
        self._running = False

        self.refresher.stop()

        # Close HTTP sessions
        await self.status_client.close()
        await self.discord.close()

        logger.info("Server Status Board stopped.")


async def main() -> None:
    """Main entry point."""
    # Load configuration
    try:
        config = load_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    setup_logging(config)

    logger.info("=" * 60)
    logger.info(f"Server Status Board v{__version__}")
    logger.info("=" * 60)
    for server in config.servers:
        chart = "chart" if server.display.chart_enabled else "no chart"
        logger.info(
            f"Server: {server.name} ({server.address}:{server.port}) -> channel {server.channel_id}, "
            f"every {server.update_interval_seconds:g}s, {chart}"
        )
    logger.info("=" * 60)

    board = StatusBoard(config)

    # Handle shutdown signals
    loop = asyncio.get_running_loop()

    def signal_handler(sig):
        logger.info(f"Received signal {sig}, shutting down...")
        board.request_stop()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    try:
        await board.start()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        await board.stop()


if __name__ == "__main__":
    asyncio.run(main())
