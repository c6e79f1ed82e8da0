"""Status polling: API client, classification and player history."""

from monitors.models import OnlineStatus, OfflineStatus, StatusResult, HistorySample
from monitors.classifier import StatusClassifier, OfflineRule, DEFAULT_OFFLINE_RULES
from monitors.history import PlayerHistory

__all__ = [
    "OnlineStatus",
    "OfflineStatus",
    "StatusResult",
    "HistorySample",
    "StatusClassifier",
    "OfflineRule",
    "DEFAULT_OFFLINE_RULES",
    "PlayerHistory",
]
