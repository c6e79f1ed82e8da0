"""
Status message presentation.

Maps a status result (and optional chart image) to the embed that is
posted or edited for a server. Pure: no I/O and no shared state.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from monitors.models import OnlineStatus, StatusResult
from .base import FileAttachment, MessagePayload
from .discord import build_embed
from .utils import format_address, format_ping, format_players, relative_timestamp

if TYPE_CHECKING:
    from config import EmbedConfig, ServerConfig


CHART_FILENAME = "player-chart.png"


def build_status_message(
    server: "ServerConfig",
    status: StatusResult,
    embed_config: "EmbedConfig",
    chart: bytes | None = None,
    now: datetime | None = None,
) -> MessagePayload:
    """
    Build the status message for one server.

    Args:
        server: Monitored server
        status: Result of the latest poll
        embed_config: Shared title, footer and colours
        chart: Rendered player chart, if any
        now: Time the message reflects (defaults to now)

    Returns:
        MessagePayload with the embed and any attachments
    """
    now = now or datetime.now()
    online = isinstance(status, OnlineStatus)

    fields = [
        {
            "name": "📡 Server",
            "value": f"{server.name} ({format_address(server.address, server.port)})",
            "inline": True,
        },
        {
            "name": "🔌 Status",
            "value": "✅ Online" if online else "❌ Offline",
            "inline": True,
        },
    ]

    files: list[FileAttachment] = []
    image_url = None

    if online:
        fields.extend([
            {"name": "👥 Players", "value": format_players(status.players, status.max_players), "inline": True},
            {"name": "🏷️ Version", "value": status.version, "inline": True},
            {"name": "📊 Ping", "value": format_ping(status.ping), "inline": True},
            {"name": "📝 MOTD", "value": status.description, "inline": False},
        ])

        if server.display.show_next_update:
            next_update = now + timedelta(milliseconds=server.update_interval_ms)
            fields.append({"name": "⏱️ Next Update", "value": relative_timestamp(next_update), "inline": True})

        if chart and server.display.chart_enabled:
            attachment = FileAttachment(filename=CHART_FILENAME, data=chart)
            files.append(attachment)
            image_url = attachment.url
    else:
        fields.append({"name": "❌ Error", "value": status.reason, "inline": False})

    embed = build_embed(
        title=embed_config.title,
        color=embed_config.online_color if online else embed_config.offline_color,
        fields=fields,
        footer=embed_config.footer,
        image_url=image_url,
        timestamp=now,
    )
    return MessagePayload(embed=embed, files=files)
