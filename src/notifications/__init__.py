"""
Status message delivery for Server Status Board.

This module provides the presentation builder, the edit-in-place
publisher and a pluggable transport (Discord by default).

Usage:
    from notifications import DiscordProvider, MessagePublisher, build_status_message

    publisher = MessagePublisher(DiscordProvider(token))
    payload = build_status_message(server, status, config.embed)
    await publisher.publish(server.key, server.channel_id, payload)
"""

from .base import (
    MessageTransport,
    MessagePayload,
    FileAttachment,
    ChannelHandle,
    MessageHandle,
)
from .discord import DiscordProvider, build_embed, build_message_body
from .presenter import build_status_message, CHART_FILENAME
from .publisher import MessagePublisher, PublishOutcome
from .utils import (
    format_players,
    format_ping,
    format_address,
    relative_timestamp,
)

__all__ = [
    # Base classes
    "MessageTransport",
    "MessagePayload",
    "FileAttachment",
    "ChannelHandle",
    "MessageHandle",
    # Discord
    "DiscordProvider",
    "build_embed",
    "build_message_body",
    # Presentation and publishing
    "build_status_message",
    "CHART_FILENAME",
    "MessagePublisher",
    "PublishOutcome",
    # Formatters
    "format_players",
    "format_ping",
    "format_address",
    "relative_timestamp",
]
