"""Tests for player chart rendering."""

from conftest import PNG_SIGNATURE, samples
from reports.chart import render_player_chart


def test_no_chart_for_fewer_than_two_samples():
    assert render_player_chart([]) is None
    assert render_player_chart(samples(4)) is None


def test_renders_png():
    image = render_player_chart(samples(1, 4, 2), "#ff8800")
    assert image
    assert image.startswith(PNG_SIGNATURE)


def test_all_zero_history_still_renders():
    image = render_player_chart(samples(0, 0))
    assert image.startswith(PNG_SIGNATURE)


def test_rendering_is_deterministic():
    history = samples(3, 5, 8, 2)
    assert render_player_chart(history) == render_player_chart(history)
