"""
Base classes and interfaces for message transports.

The publisher only needs three things from a chat backend: look up a
channel, create a message and edit a message. Any backend implementing
MessageTransport can be used in place of Discord.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FileAttachment:
    """A file uploaded alongside a message."""
    filename: str
    data: bytes
    content_type: str = "image/png"

    @property
    def url(self) -> str:
        """Reference usable from inside an embed."""
        return f"attachment://{self.filename}"


@dataclass
class MessagePayload:
    """
    A status message ready to be sent or edited.

    Attributes:
        embed: Discord embed dictionary
        files: Attachments referenced by the embed
    """
    embed: dict[str, Any]
    files: list[FileAttachment] = field(default_factory=list)


@dataclass(frozen=True)
class ChannelHandle:
    """A channel messages can be posted to."""
    channel_id: str
    name: str | None = None


@dataclass(frozen=True)
class MessageHandle:
    """A previously published message that can be edited."""
    channel_id: str
    message_id: str


class MessageTransport(ABC):
    """
    Abstract base class for message transports.

    Methods report failure by returning None or False and logging the
    reason; they do not raise for API or network errors.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the transport name (e.g., 'discord')."""
        ...

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the transport (e.g., establish connections)."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (e.g., close connections)."""
        ...

    @abstractmethod
    async def fetch_channel(self, channel_id: str) -> ChannelHandle | None:
        """
        Resolve a channel by ID.

        Returns:
            ChannelHandle, or None if the channel cannot be used
        """
        ...

    @abstractmethod
    async def send_message(
        self,
        channel: ChannelHandle,
        payload: MessagePayload,
    ) -> MessageHandle | None:
        """
        Post a new message.

        Returns:
            Handle of the created message, or None on failure
        """
        ...

    @abstractmethod
    async def edit_message(
        self,
        message: MessageHandle,
        payload: MessagePayload,
    ) -> bool:
        """
        Replace the content of an existing message.

        Returns:
            True if edited successfully, False otherwise
        """
        ...

    async def __aenter__(self) -> "MessageTransport":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
