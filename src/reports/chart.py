"""
Player-count chart rendering.

Draws the hourly player history as a PNG line chart for the status
message. Uses matplotlib's object-oriented API on the Agg canvas so a
chart can be rendered from a worker thread without touching pyplot state.
"""

from __future__ import annotations

import io
import logging
from typing import Sequence

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from monitors.models import HistorySample


logger = logging.getLogger(__name__)


CHART_WIDTH = 800
CHART_HEIGHT = 400
CHART_DPI = 100

BACKGROUND_COLOR = "#2F3136"
TEXT_COLOR = "#FFFFFF"
GRID_COLOR = "#555555"
FILL_ALPHA = 0x33 / 0xFF


def render_player_chart(
    history: Sequence[HistorySample],
    color: str = "#3498db",
) -> bytes | None:
    """
    Render a player-count line chart.

    Args:
        history: Samples, oldest first
        color: Line colour as a matplotlib colour string

    Returns:
        PNG bytes, or None when there are fewer than two samples
    """
    if len(history) < 2:
        return None

    labels = [sample.timestamp.strftime("%H:%M") for sample in history]
    counts = [sample.count for sample in history]
    positions = list(range(len(history)))

    fig = Figure(figsize=(CHART_WIDTH / CHART_DPI, CHART_HEIGHT / CHART_DPI), dpi=CHART_DPI)
    FigureCanvasAgg(fig)
    fig.patch.set_facecolor(BACKGROUND_COLOR)

    ax = fig.add_subplot(1, 1, 1)
    ax.set_facecolor(BACKGROUND_COLOR)
    ax.plot(positions, counts, color=color, linewidth=2, marker="o", markersize=4, label="Player Count")
    ax.fill_between(positions, counts, color=color, alpha=FILL_ALPHA)

    ax.set_title("Player Count History", color=TEXT_COLOR)
    ax.set_xticks(positions)
    ax.set_xticklabels(labels)
    ax.set_ylim(bottom=0, top=max(max(counts), 1) * 1.1)
    ax.tick_params(colors=TEXT_COLOR)
    ax.grid(True, color=GRID_COLOR)
    for spine in ax.spines.values():
        spine.set_color(GRID_COLOR)

    legend = ax.legend(loc="upper left", facecolor=BACKGROUND_COLOR, edgecolor=GRID_COLOR)
    for text in legend.get_texts():
        text.set_color(TEXT_COLOR)

    fig.tight_layout()

    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", facecolor=fig.get_facecolor(), metadata={"Software": None})
    logger.debug(f"Rendered player chart with {len(history)} samples")
    return buffer.getvalue()
