"""
mcstatus.io API client.

Fetches Java edition server status. Response fields used downstream:
online, players.online, players.max, version.name_clean, motd.clean, latency.
"""

from __future__ import annotations

import logging
from typing import Any

from monitors.services.base import BaseServiceClient, ServiceError


logger = logging.getLogger(__name__)

MCSTATUS_API_URL = "https://api.mcstatus.io/v2"


class McStatusClient(BaseServiceClient):
    """Client for the mcstatus.io v2 status API."""

    def __init__(
        self,
        base_url: str = MCSTATUS_API_URL,
        timeout: int = 10,
    ):
        super().__init__(base_url=base_url, timeout=timeout)

    async def get_java_status(self, host: str, port: int) -> dict[str, Any]:
        """
        Get the status of a Java edition server.

        Args:
            host: Server hostname or IP
            port: Server port

        Returns:
            Raw status payload

        Raises:
            ServiceError: If the request fails or the body is not an object
        """
        data = await self.get(f"/status/java/{host}:{port}")
        if not isinstance(data, dict):
            raise ServiceError(f"Unexpected response type: {type(data).__name__}")
        logger.debug(f"Status for {host}:{port}: online={data.get('online')}")
        return data
