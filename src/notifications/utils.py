"""
Utility functions for formatting values in status messages.

These helpers are used by the presentation builder to format data
consistently across messages.
"""

from __future__ import annotations

from datetime import datetime


def format_players(players: int, max_players: int) -> str:
    """Format a player count as 'online/max'."""
    return f"{players}/{max_players}"


def format_ping(ping: float) -> str:
    """Format latency in milliseconds."""
    if isinstance(ping, float) and not ping.is_integer():
        return f"{ping:.1f}ms"
    return f"{int(ping)}ms"


def format_address(address: str, port: int) -> str:
    """Format a server address as host:port."""
    return f"{address}:{port}"


def relative_timestamp(moment: datetime) -> str:
    """
    Format a Discord relative timestamp, e.g. "<t:1700000000:R>".

    Discord renders it client-side as "in 5 minutes".
    """
    return f"<t:{int(moment.timestamp())}:R>"
