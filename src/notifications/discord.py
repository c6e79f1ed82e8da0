"""
Discord message transport.

Implements MessageTransport over the Discord REST API with a bot token.
Messages are sent as JSON, or as multipart form data when files
(the player chart) are attached.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

import aiohttp

from .base import (
    ChannelHandle,
    MessageHandle,
    MessagePayload,
    MessageTransport,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

VERSION = "1.0.0"

DISCORD_API_URL = "https://discord.com/api/v10"
USER_AGENT = f"DiscordBot (https://github.com/server-status-board, {VERSION})"


# Discord limits
MAX_FIELDS_PER_EMBED = 25
MAX_FIELD_NAME_LENGTH = 256
MAX_FIELD_VALUE_LENGTH = 1024
MAX_EMBED_TITLE_LENGTH = 256
MAX_FOOTER_LENGTH = 2048


# =============================================================================
# Embed builders
# =============================================================================

def build_embed(
    title: str,
    color: int,
    fields: list[dict[str, Any]] | None = None,
    footer: str | None = None,
    image_url: str | None = None,
    timestamp: datetime | bool = True,
) -> dict[str, Any]:
    """Build a Discord embed dictionary."""
    embed: dict[str, Any] = {
        "title": title[:MAX_EMBED_TITLE_LENGTH],
        "color": color,
    }

    if fields:
        embed["fields"] = [
            {
                "name": f["name"][:MAX_FIELD_NAME_LENGTH],
                "value": str(f["value"])[:MAX_FIELD_VALUE_LENGTH],
                "inline": f.get("inline", True),
            }
            for f in fields[:MAX_FIELDS_PER_EMBED]
        ]

    if footer:
        embed["footer"] = {"text": footer[:MAX_FOOTER_LENGTH]}

    if image_url:
        embed["image"] = {"url": image_url}

    if isinstance(timestamp, datetime):
        embed["timestamp"] = timestamp.astimezone(timezone.utc).isoformat()
    elif timestamp:
        embed["timestamp"] = datetime.now(timezone.utc).isoformat()

    return embed


def build_message_body(payload: MessagePayload) -> dict[str, Any]:
    """
    Build the JSON body for a create or edit request.

    The attachments list is always present so that an edit replaces
    (or removes) the chart from the previous version of the message.
    """
    return {
        "embeds": [payload.embed],
        "attachments": [
            {"id": index, "filename": f.filename}
            for index, f in enumerate(payload.files)
        ],
        "allowed_mentions": {"parse": []},
    }


# =============================================================================
# Discord Provider
# =============================================================================

class DiscordProvider(MessageTransport):
    """
    Discord bot REST transport.

    Resolves channels, posts status messages and edits them in place.
    """

    def __init__(
        self,
        token: str,
        timeout: int = 10,
        api_url: str = DISCORD_API_URL,
    ):
        """
        Initialize Discord provider.

        Args:
            token: Discord bot token
            timeout: Request timeout in seconds
            api_url: Base URL of the Discord REST API
        """
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def name(self) -> str:
        return "discord"

    async def initialize(self) -> None:
        """Create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers={
                    "Authorization": f"Bot {self.token}",
                    "User-Agent": USER_AGENT,
                },
            )

    async def close(self) -> None:
        """Close aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            await self.initialize()
        return self._session  # type: ignore

    def _build_request_data(self, payload: MessagePayload) -> dict[str, Any]:
        """Return request kwargs: plain JSON, or multipart when files are attached."""
        body = build_message_body(payload)
        if not payload.files:
            return {"json": body}

        form = aiohttp.FormData()
        form.add_field("payload_json", json.dumps(body), content_type="application/json")
        for index, attachment in enumerate(payload.files):
            form.add_field(
                f"files[{index}]",
                attachment.data,
                filename=attachment.filename,
                content_type=attachment.content_type,
            )
        return {"data": form}

    async def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs: Any,
    ) -> dict[str, Any] | None:
        """
        Make a Discord API request.

        Returns:
            Parsed JSON response or None on error
        """
        url = f"{self.api_url}{endpoint}"
        try:
            session = await self._get_session()
            async with session.request(method, url, **kwargs) as response:
                if 200 <= response.status < 300:
                    return await response.json()
                elif response.status == 429:
                    retry_after = response.headers.get("Retry-After", "?")
                    logger.warning(f"Discord rate limited on {method} {endpoint}, retry after: {retry_after}s")
                    return None
                elif response.status in (403, 404):
                    logger.debug(f"Discord {response.status} on {method} {endpoint}")
                    return None
                else:
                    body = await response.text()
                    logger.error(f"Discord error {response.status} on {method} {endpoint}: {body[:200]}")
                    return None
        except aiohttp.ClientError as e:
            logger.error(f"Discord network error: {e}")
            return None
        except Exception as e:
            logger.error(f"Discord unexpected error: {e}")
            return None

    async def fetch_channel(self, channel_id: str) -> ChannelHandle | None:
        """Look up a channel the bot can see."""
        data = await self._request("GET", f"/channels/{channel_id}")
        if data is None:
            return None
        return ChannelHandle(channel_id=str(data.get("id", channel_id)), name=data.get("name"))

    async def send_message(
        self,
        channel: ChannelHandle,
        payload: MessagePayload,
    ) -> MessageHandle | None:
        """Post a new message to a channel."""
        data = await self._request(
            "POST",
            f"/channels/{channel.channel_id}/messages",
            **self._build_request_data(payload),
        )
        if data is None or "id" not in data:
            return None
        logger.debug(f"Created message {data['id']} in channel {channel.channel_id}")
        return MessageHandle(channel_id=channel.channel_id, message_id=str(data["id"]))

    async def edit_message(
        self,
        message: MessageHandle,
        payload: MessagePayload,
    ) -> bool:
        """Edit an existing message in place."""
        data = await self._request(
            "PATCH",
            f"/channels/{message.channel_id}/messages/{message.message_id}",
            **self._build_request_data(payload),
        )
        return data is not None
