"""
Status message publisher.

Keeps one tracked message per server and decides, on every refresh,
whether to edit that message or create the first one.
"""

from __future__ import annotations

import logging
from enum import Enum

from .base import MessageHandle, MessagePayload, MessageTransport


logger = logging.getLogger(__name__)


class PublishOutcome(Enum):
    """Result of a single publish attempt."""

    CREATED = "created"
    EDITED = "edited"
    EDIT_FAILED = "edit_failed"
    CREATE_FAILED = "create_failed"
    CHANNEL_NOT_FOUND = "channel_not_found"

    @property
    def ok(self) -> bool:
        return self in (PublishOutcome.CREATED, PublishOutcome.EDITED)


class MessagePublisher:
    """
    Publishes status messages with edit-in-place semantics.

    - No tracked message: create one and track it
    - Tracked message: edit it; a failed edit keeps the old handle
    """

    def __init__(self, transport: MessageTransport):
        self.transport = transport
        self._messages: dict[str, MessageHandle] = {}

    def get_tracked(self, server_key: str) -> MessageHandle | None:
        """Get the tracked message for a server."""
        return self._messages.get(server_key)

    def forget(self, server_key: str) -> None:
        """Stop tracking a server's message; the next publish creates a new one."""
        self._messages.pop(server_key, None)

    async def publish(
        self,
        server_key: str,
        channel_id: str,
        payload: MessagePayload,
    ) -> PublishOutcome:
        """
        Publish a status message for a server.

        Args:
            server_key: Server identity
            channel_id: Destination channel
            payload: Message to send

        Returns:
            PublishOutcome describing what happened
        """
        channel = await self.transport.fetch_channel(channel_id)
        if channel is None:
            logger.error(f"Channel {channel_id} not found")
            return PublishOutcome.CHANNEL_NOT_FOUND

        existing = self._messages.get(server_key)
        if existing is not None:
            if await self.transport.edit_message(existing, payload):
                return PublishOutcome.EDITED
            logger.error(f"Failed to edit status message {existing.message_id} for {server_key}")
            return PublishOutcome.EDIT_FAILED

        handle = await self.transport.send_message(channel, payload)
        if handle is None:
            logger.error(f"Failed to create status message for {server_key} in channel {channel_id}")
            return PublishOutcome.CREATE_FAILED

        self._messages[server_key] = handle
        logger.debug(f"Tracking message {handle.message_id} for {server_key}")
        return PublishOutcome.CREATED
