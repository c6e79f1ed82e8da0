"""Image rendering for status messages."""

from reports.chart import render_player_chart

__all__ = ["render_player_chart"]
