"""
Base HTTP client for status APIs.

Provides common functionality for all API clients:
- Async HTTP requests with aiohttp
- Timeout handling
- Error translation into ServiceError
- Session management
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Raised when an API request fails or returns an unusable response."""

    def __init__(self, message: str, status: int | None = None):
        self.message = message
        self.status = status
        super().__init__(message)


class BaseServiceClient:
    """
    Base class for status API clients.

    Provides common HTTP functionality. Failures are raised as ServiceError
    so callers can report the reason.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 10,
    ):
        """
        Initialize the service client.

        Args:
            base_url: Base URL of the service API
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def name(self) -> str:
        """Service name for logging."""
        return self.__class__.__name__.replace("Client", "")

    def _get_headers(self) -> dict[str, str]:
        """
        Get HTTP headers for requests.

        Override in subclasses for service-specific headers.
        """
        return {}

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an HTTP request to the service.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (will be appended to base_url)
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            ServiceError: On network errors, timeouts, non-2xx responses
                or bodies that are not JSON
        """
        url = f"{self.base_url}{endpoint}"

        try:
            session = await self._get_session()

            async with session.request(
                method=method,
                url=url,
                headers=self._get_headers(),
                params=params,
            ) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    logger.debug(f"{self.name} API error {response.status}: {body[:200]}")
                    raise ServiceError(f"API returned {response.status}", status=response.status)
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise ServiceError(f"Malformed response: {e}", status=response.status) from e

        except asyncio.TimeoutError as e:
            raise ServiceError(f"Request timed out after {self.timeout.total}s") from e
        except aiohttp.ClientError as e:
            raise ServiceError(f"Network error: {e}") from e

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a GET request."""
        return await self._request("GET", endpoint, params=params)
