"""Shared fixtures and fakes for the test suite."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

import pytest

from config import ChartConfig, Config, DisplayConfig, EmbedConfig, ServerConfig
from monitors.models import HistorySample
from notifications.base import (
    ChannelHandle,
    MessageHandle,
    MessagePayload,
    MessageTransport,
)


def online_payload(**overrides: Any) -> dict[str, Any]:
    """A healthy mcstatus.io response."""
    data = {
        "online": True,
        "players": {"online": 5, "max": 20},
        "version": {"name_clean": "1.20.1"},
        "motd": {"clean": "Welcome"},
        "latency": 42,
    }
    data.update(overrides)
    return data


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def samples(*counts: int) -> list[HistorySample]:
    """Hourly history samples starting at 08:00."""
    start = datetime(2024, 5, 1, 8, 0)
    return [
        HistorySample(count=count, timestamp=start + timedelta(hours=i))
        for i, count in enumerate(counts)
    ]


class FakeStatusClient:
    """Stands in for McStatusClient."""

    def __init__(self, response: dict[str, Any] | Exception | None = None):
        self.response = response if response is not None else online_payload()
        self.calls: list[tuple[str, int]] = []

    async def get_java_status(self, host: str, port: int) -> dict[str, Any]:
        self.calls.append((host, port))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    async def close(self) -> None:
        pass


class FakeTransport(MessageTransport):
    """In-memory MessageTransport recording every call."""

    def __init__(self):
        self.channels: dict[str, ChannelHandle] = {}
        self.sent: list[tuple[ChannelHandle, MessagePayload]] = []
        self.edited: list[tuple[MessageHandle, MessagePayload]] = []
        self.fail_send = False
        self.fail_edit = False
        self._next_id = 1000

    def add_channel(self, channel_id: str) -> None:
        self.channels[channel_id] = ChannelHandle(channel_id=channel_id, name="status")

    @property
    def name(self) -> str:
        return "fake"

    async def initialize(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def fetch_channel(self, channel_id: str) -> ChannelHandle | None:
        return self.channels.get(channel_id)

    async def send_message(self, channel, payload):
        self.sent.append((channel, payload))
        if self.fail_send:
            return None
        self._next_id += 1
        return MessageHandle(channel_id=channel.channel_id, message_id=str(self._next_id))

    async def edit_message(self, message, payload):
        self.edited.append((message, payload))
        return not self.fail_edit


def make_server(
    name: str = "Survival",
    address: str = "play.example.com",
    port: int = 25565,
    channel_id: str = "100",
    update_interval_ms: int = 60000,
    display_type: str = "chart",
    chart_enabled: bool = True,
    show_next_update: bool = False,
    history_hours: int = 24,
) -> ServerConfig:
    return ServerConfig(
        name=name,
        address=address,
        port=port,
        channel_id=channel_id,
        update_interval_ms=update_interval_ms,
        display=DisplayConfig(
            type=display_type,
            show_next_update=show_next_update,
            chart=ChartConfig(enabled=chart_enabled, color="#3498db", history_hours=history_hours),
        ),
    )


@pytest.fixture
def server() -> ServerConfig:
    return make_server()


@pytest.fixture
def embed_config() -> EmbedConfig:
    return EmbedConfig()


@pytest.fixture
def transport() -> FakeTransport:
    fake = FakeTransport()
    fake.add_channel("100")
    fake.add_channel("200")
    return fake


@pytest.fixture
def app_config(server) -> Config:
    return Config(discord_token="token", servers=[server])
