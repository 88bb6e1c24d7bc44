from __future__ import annotations

from pathlib import Path

import pytest

from svgcharts.config import DEFAULT_CONFIG_PATH, AppConfig, load_config


def test_defaults_without_file() -> None:
    config = load_config(None)
    assert config == AppConfig()
    rate = config.rate_chart
    assert (rate.plot.range_x, rate.plot.range_y) == (690, 370)
    assert rate.recession_end == "next_sample"
    bar = config.bar_chart.plot
    assert (bar.range_x, bar.range_y) == (700, 360)
    overlay = config.map_overlay.plot
    assert (overlay.range_x, overlay.range_y) == (790, 435)


def test_shipped_config() -> None:
    config = load_config(DEFAULT_CONFIG_PATH)
    assert config.rate_chart.recession_end == "next_sample"
    assert config.text.class_sizes["airport-hidden"] == 11
    assert config.map_overlay.arc_curvature == 1.5
    assert config.map_overlay.legend_y_ratio == 0.8
    assert config.bar_chart.y_domain == (0.0, 100.0)


def test_shipped_config_agrees_with_code_defaults() -> None:
    shipped = load_config(DEFAULT_CONFIG_PATH)
    assert shipped.rate_chart == AppConfig().rate_chart
    assert shipped.map_overlay == AppConfig().map_overlay


def test_partial_override_keeps_defaults(tmp_path: Path) -> None:
    path = tmp_path / "charts.yaml"
    path.write_text("rate_chart:\n  padding: {right: 50}\n  y_tick_count: 5\n")
    config = load_config(path)
    rate = config.rate_chart
    assert rate.plot.padding.right == 50
    assert rate.plot.padding.left == 20
    assert rate.plot.range_x == 730
    assert rate.y_tick_count == 5
    assert config.bar_chart == AppConfig().bar_chart


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "charts.yaml"
    path.write_text("")
    assert load_config(path) == AppConfig()


@pytest.mark.parametrize(
    "content",
    [
        "- not a mapping\n",
        "rate_chart: [1, 2]\n",
        "rate_chart:\n  recession_end: sometime\n",
        "rate_chart:\n  y_tick_count: 1\n",
        "bar_chart:\n  y_domain: [0]\n",
        "map_overlay:\n  radius_range: [1, big]\n",
    ],
)
def test_invalid_config(tmp_path: Path, content: str) -> None:
    path = tmp_path / "charts.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_config(path)
