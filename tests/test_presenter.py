"""Tests for status message presentation."""

from datetime import datetime

from conftest import make_server
from monitors.models import OfflineStatus, OnlineStatus
from notifications.presenter import CHART_FILENAME, build_status_message


NOW = datetime(2024, 5, 1, 12, 0, 0)
ONLINE = OnlineStatus(players=5, max_players=20, version="1.20.1", description="welcome", ping=42)


def field_map(payload):
    return {f["name"]: f["value"] for f in payload.embed["fields"]}


def test_online_message(server, embed_config):
    payload = build_status_message(server, ONLINE, embed_config, now=NOW)
    embed = payload.embed
    fields = field_map(payload)

    assert embed["title"] == "Minecraft Server Status"
    assert embed["color"] == 0x2ECC71
    assert embed["footer"] == {"text": "Server Status Bot"}
    assert "timestamp" in embed
    assert fields["📡 Server"] == "Survival (play.example.com:25565)"
    assert fields["🔌 Status"] == "✅ Online"
    assert fields["👥 Players"] == "5/20"
    assert fields["🏷️ Version"] == "1.20.1"
    assert fields["📊 Ping"] == "42ms"
    assert fields["📝 MOTD"] == "welcome"
    assert "⏱️ Next Update" not in fields
    assert "image" not in embed
    assert payload.files == []


def test_offline_message(server, embed_config):
    payload = build_status_message(server, OfflineStatus(reason="API returned 500"), embed_config, now=NOW)
    fields = field_map(payload)

    assert payload.embed["color"] == 0xE74C3C
    assert fields["🔌 Status"] == "❌ Offline"
    assert fields["❌ Error"] == "API returned 500"
    assert "👥 Players" not in fields
    assert len(fields) == 3


def test_next_update_countdown(embed_config):
    server = make_server(show_next_update=True, update_interval_ms=30000)
    payload = build_status_message(server, ONLINE, embed_config, now=NOW)

    expected = int(NOW.timestamp()) + 30
    assert field_map(payload)["⏱️ Next Update"] == f"<t:{expected}:R>"


def test_no_countdown_when_offline(embed_config):
    server = make_server(show_next_update=True)
    payload = build_status_message(server, OfflineStatus(reason="down"), embed_config, now=NOW)
    assert "⏱️ Next Update" not in field_map(payload)


def test_chart_is_attached(server, embed_config):
    payload = build_status_message(server, ONLINE, embed_config, chart=b"png-bytes", now=NOW)

    assert len(payload.files) == 1
    assert payload.files[0].filename == CHART_FILENAME
    assert payload.files[0].data == b"png-bytes"
    assert payload.embed["image"] == {"url": f"attachment://{CHART_FILENAME}"}


def test_chart_ignored_when_disabled(embed_config):
    for server in (make_server(chart_enabled=False), make_server(display_type="basic")):
        payload = build_status_message(server, ONLINE, embed_config, chart=b"png-bytes", now=NOW)
        assert payload.files == []
        assert "image" not in payload.embed


def test_custom_colors_and_text(server, embed_config):
    embed_config.title = "Our Servers"
    embed_config.footer = "Powered by us"
    embed_config.colors.online = "0x123456"

    payload = build_status_message(server, ONLINE, embed_config, now=NOW)

    assert payload.embed["title"] == "Our Servers"
    assert payload.embed["footer"] == {"text": "Powered by us"}
    assert payload.embed["color"] == 0x123456
