"""
Status classifier.

Turns a raw status API payload into an OnlineStatus or OfflineStatus.
Hosting providers that park idle servers (Aternos and similar) still answer
status queries, so a set of offline rules looks for the tell-tale MOTD and
version strings of a sleeping server.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Sequence

from monitors.models import OfflineStatus, OnlineStatus, StatusResult
from monitors.services.base import ServiceError

if TYPE_CHECKING:
    from monitors.services.mcstatus import McStatusClient


logger = logging.getLogger(__name__)


SLEEPING_REASON = "Server is offline or sleeping (Aternos)"


def motd_text(data: dict[str, Any]) -> str:
    """Return the clean MOTD as a single lower-cased string."""
    motd = data.get("motd")
    clean = motd.get("clean") if isinstance(motd, dict) else None
    if isinstance(clean, list):
        text = " ".join(str(line) for line in clean)
    elif isinstance(clean, str):
        text = clean
    else:
        text = ""
    return text.lower()


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class OfflineRule:
    """A named predicate that flags a payload as offline."""

    name: str
    check: Callable[[dict[str, Any], str], bool]

    def matches(self, data: dict[str, Any], motd: str) -> bool:
        return bool(self.check(data, motd))


DEFAULT_OFFLINE_RULES: tuple[OfflineRule, ...] = (
    OfflineRule("not_online", lambda data, motd: not data.get("online")),
    OfflineRule("motd_offline", lambda data, motd: "this server is offline" in motd),
    # Dormant servers on free hosts advertise an upgrade instead of a MOTD
    OfflineRule("motd_more_ram", lambda data, motd: "get this server more ram" in motd),
    OfflineRule(
        "version_offline",
        lambda data, motd: "offline" in str(_section(data, "version").get("name_clean") or "").lower(),
    ),
    OfflineRule("no_players", lambda data, motd: data.get("players") is None),
)


class StatusClassifier:
    """
    Classifies server status from the status API.

    classify() never raises: network errors, bad HTTP statuses and
    malformed payloads come back as OfflineStatus with the reason.
    """

    def __init__(
        self,
        client: "McStatusClient",
        rules: Sequence[OfflineRule] = DEFAULT_OFFLINE_RULES,
    ):
        """
        Args:
            client: Status API client
            rules: Offline rules; any match marks the server offline
        """
        self.client = client
        self.rules = tuple(rules)

    def matching_rule(self, data: dict[str, Any]) -> OfflineRule | None:
        """Return the first offline rule matching the payload, if any."""
        motd = motd_text(data)
        for rule in self.rules:
            if rule.matches(data, motd):
                return rule
        return None

    def interpret(self, data: dict[str, Any]) -> StatusResult:
        """Classify an already fetched payload."""
        rule = self.matching_rule(data)
        if rule is not None:
            logger.debug(f"Offline rule '{rule.name}' matched")
            return OfflineStatus(reason=SLEEPING_REASON)

        players = _section(data, "players")
        version = _section(data, "version")

        return OnlineStatus(
            players=players.get("online") or 0,
            max_players=players.get("max") or 0,
            version=version.get("name_clean") or "Unknown",
            description=motd_text(data) or "No description",
            ping=data.get("latency") or 0,
        )

    async def classify(self, address: str, port: int) -> StatusResult:
        """
        Query and classify one server.

        Args:
            address: Server hostname or IP
            port: Server port

        Returns:
            OnlineStatus or OfflineStatus
        """
        try:
            data = await self.client.get_java_status(address, port)
            return self.interpret(data)
        except ServiceError as e:
            logger.error(f"Failed to check status for {address}:{port} - {e.message}")
            return OfflineStatus(reason=e.message)
        except Exception as e:
            logger.error(f"Failed to check status for {address}:{port} - {e}")
            return OfflineStatus(reason=str(e) or e.__class__.__name__)
