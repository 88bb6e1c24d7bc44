from __future__ import annotations

import logging
from pathlib import Path

from chartcommon.svg_builder import SvgBuilder
from chartcommon.text_metrics import PillowTextMeasurer, TextMeasurer
from charts import bar_chart, rate_chart, us_map_overlay

from .config import REPO_ROOT, AppConfig
from .data import (
    AIRPORTS_FILE,
    BASE_MAP_FILE,
    RATES_FILE,
    fruit_scores,
    load_airports,
    load_base_map,
    load_rate_samples,
)
from .errors import ChartError
from .model import PlotArea

logger = logging.getLogger(__name__)

CHARTS = ("us_map_overlay", "rate_chart", "bar_chart")
DEFAULT_DATA_DIR = REPO_ROOT / "data"


def default_measurer(config: AppConfig) -> TextMeasurer:
    return PillowTextMeasurer(
        font_path=config.text.font_path,
        font_size=config.text.font_size,
        class_sizes=config.text.class_sizes,
    )


def _create_builder(plot: PlotArea, stylesheet: str) -> SvgBuilder:
    return SvgBuilder.create(
        width=plot.svg_width,
        height=plot.svg_height,
        origin=(plot.padding.left, plot.padding.top),
        stylesheet=stylesheet,
    )


def build_chart(
    chart: str,
    *,
    data_dir: Path = DEFAULT_DATA_DIR,
    config: AppConfig | None = None,
    measure: TextMeasurer | None = None,
) -> SvgBuilder:
    """Load the chart's data, lay it out and draw it; nothing is written to disk."""
    config = config or AppConfig()
    measure = measure or default_measurer(config)
    if chart == "us_map_overlay":
        airports = load_airports(data_dir / AIRPORTS_FILE)
        base_map = load_base_map(data_dir / BASE_MAP_FILE)
        builder = _create_builder(config.map_overlay.plot, us_map_overlay.STYLESHEET)
        us_map_overlay.render(builder, airports, base_map, config.map_overlay, measure)
        return builder
    if chart == "rate_chart":
        samples = load_rate_samples(data_dir / RATES_FILE)
        builder = _create_builder(config.rate_chart.plot, rate_chart.STYLESHEET)
        rate_chart.render(builder, samples, config.rate_chart, measure)
        return builder
    if chart == "bar_chart":
        builder = _create_builder(config.bar_chart.plot, bar_chart.STYLESHEET)
        bar_chart.render(builder, fruit_scores(), config.bar_chart, measure)
        return builder
    raise ChartError(
        code="E1105_CHART_UNKNOWN",
        message=f"Unknown chart '{chart}'.",
        hint=f"Use one of: {', '.join(CHARTS)}.",
    )


def render_chart_string(
    chart: str,
    *,
    data_dir: Path = DEFAULT_DATA_DIR,
    config: AppConfig | None = None,
    measure: TextMeasurer | None = None,
) -> str:
    return build_chart(chart, data_dir=data_dir, config=config, measure=measure).tostring()


def render_chart(
    chart: str,
    output_svg: Path,
    *,
    data_dir: Path = DEFAULT_DATA_DIR,
    config: AppConfig | None = None,
    measure: TextMeasurer | None = None,
) -> Path:
    builder = build_chart(chart, data_dir=data_dir, config=config, measure=measure)
    builder.save(output_svg)
    logger.info("Rendered %s to %s", chart, output_svg)
    return output_svg


def render_all(
    output_dir: Path,
    *,
    data_dir: Path = DEFAULT_DATA_DIR,
    config: AppConfig | None = None,
    measure: TextMeasurer | None = None,
) -> list[Path]:
    config = config or AppConfig()
    measure = measure or default_measurer(config)
    return [
        render_chart(
            chart,
            output_dir / f"{chart}.svg",
            data_dir=data_dir,
            config=config,
            measure=measure,
        )
        for chart in CHARTS
    ]
