from __future__ import annotations

import logging
from dataclasses import dataclass

import svgwrite

from chartcommon.svg_builder import SvgBuilder, fmt
from chartcommon.text_metrics import TextMeasurer
from svgcharts.axes import axis_bottom, axis_left
from svgcharts.config import BarChartConfig
from svgcharts.errors import ChartError
from svgcharts.model import FruitScore, PlotArea
from svgcharts.scales import BandScale, LinearScale

logger = logging.getLogger(__name__)

DASH_PATTERN_ID = "dashed-line"
LAST_YEAR_TICK_LENGTH = 6

STYLESHEET = """
#chartTitle { font: bold 18px sans-serif; text-anchor: middle; }
#yTitle { font: 14px sans-serif; text-anchor: middle; }
#footnote { font: 12px sans-serif; text-anchor: middle; fill: #555555; }
.yDashed line { stroke: url(#dashed-line); }
.yDashed text, .yDashed .domain { display: none; }
.bars rect { fill: #8fbc5a; }
.bars .Apple { fill: #d9534f; }
.bars .Banana { fill: #f0ad4e; }
.bars .Peach { fill: #f7a77c; }
.bars .Orange { fill: #ff8c1a; }
.bars .Lime { fill: #8fbc5a; }
.scoreToday text { font: bold 12px sans-serif; text-anchor: middle; }
.scoreLastYear line { stroke: #333333; stroke-width: 2px; }
.scoreLastYear text { font: italic 11px sans-serif; }
"""


@dataclass(frozen=True)
class BarScales:
    x: BandScale
    y: LinearScale


def make_scales(scores: list[FruitScore], plot: PlotArea, config: BarChartConfig) -> BarScales:
    return BarScales(
        x=BandScale([score.name for score in scores], [0, plot.range_x]),
        y=LinearScale(config.y_domain, [plot.range_y, 0]),
    )


def define_dashed_line(builder: SvgBuilder) -> None:
    """4x4 pattern, half light grey and half white, used as a dashed stroke."""
    drawing = builder.drawing
    pattern = drawing.pattern(
        id=DASH_PATTERN_ID, patternUnits="userSpaceOnUse", size=(4, 4)
    )
    pattern.add(drawing.rect(insert=(0, 0), size=(4, 4), fill="white"))
    pattern.add(drawing.rect(insert=(0, 0), size=(2, 4), fill="lightgrey"))
    drawing.defs.add(pattern)


def append_y_axis_dashed_lines(
    builder: SvgBuilder, group: svgwrite.container.Group, scales: BarScales, plot: PlotArea
) -> svgwrite.container.Group:
    """Horizontal dashed lines at the Y ticks, drawn as a second Y axis with full-width ticks."""
    return axis_left(
        builder,
        group,
        scales.y,
        css_class="yDashed",
        transform=f"translate({fmt(plot.range_x)},0)",
        tick_size=plot.range_x,
        show_labels=False,
    )


def append_x_axis(
    builder: SvgBuilder, group: svgwrite.container.Group, scales: BarScales, plot: PlotArea
) -> svgwrite.container.Group:
    return axis_bottom(
        builder,
        group,
        scales.x,
        css_class="xAxis",
        transform=f"translate(0,{fmt(plot.range_y)})",
    )


def append_y_axis(
    builder: SvgBuilder, group: svgwrite.container.Group, scales: BarScales
) -> svgwrite.container.Group:
    return axis_left(builder, group, scales.y, css_class="yAxis")


def bar_width(scales: BarScales, config: BarChartConfig) -> float:
    return scales.x.bandwidth * config.bar_width_ratio


def append_bars(
    builder: SvgBuilder,
    group: svgwrite.container.Group,
    scores: list[FruitScore],
    scales: BarScales,
    plot: PlotArea,
    config: BarChartConfig,
) -> svgwrite.container.Group:
    width = bar_width(scales, config)
    bars = builder.drawing.g(
        class_="bars",
        transform=f"translate({fmt(scales.x.bandwidth / 2 - width / 2)},0)",
    )
    for score in scores:
        top = scales.y(score.score_today)
        bars.add(
            builder.drawing.rect(
                insert=(fmt(scales.x(score.name)), fmt(top)),
                size=(fmt(width), fmt(plot.range_y - top)),
                class_=score.name,
            )
        )
    group.add(bars)
    return bars


def _score_text(value: float) -> str:
    return fmt(value)


def append_score_today(
    builder: SvgBuilder, group: svgwrite.container.Group, scores: list[FruitScore], scales: BarScales
) -> None:
    labels = builder.drawing.g(
        class_="scoreToday", transform=f"translate({fmt(scales.x.bandwidth / 2)},0)"
    )
    for score in scores:
        labels.add(
            builder.drawing.text(
                _score_text(score.score_today),
                insert=(fmt(scales.x(score.name)), fmt(scales.y(score.score_today) - 5)),
            )
        )
    group.add(labels)


def append_score_last_year(
    builder: SvgBuilder,
    group: svgwrite.container.Group,
    scores: list[FruitScore],
    scales: BarScales,
    config: BarChartConfig,
) -> None:
    """A short tick beside each bar at last year's score, with the score next to it."""
    width = bar_width(scales, config)
    marks = builder.drawing.g(
        class_="scoreLastYear",
        transform=f"translate({fmt(scales.x.bandwidth / 2 + width / 2)},0)",
    )
    for score in scores:
        x = scales.x(score.name)
        y = scales.y(score.score_last_year)
        marks.add(
            builder.drawing.line(
                start=(fmt(x), fmt(y)), end=(fmt(x + LAST_YEAR_TICK_LENGTH), fmt(y))
            )
        )
        marks.add(
            builder.drawing.text(
                _score_text(score.score_last_year), insert=(fmt(x + 8), fmt(y + 4))
            )
        )
    group.add(marks)


def append_chart_title(builder: SvgBuilder, plot: PlotArea, config: BarChartConfig) -> None:
    builder.drawing.add(
        builder.drawing.text(
            config.title,
            id="chartTitle",
            insert=(fmt(plot.svg_width / 2), fmt(plot.padding.top * 0.66)),
        )
    )


def append_y_axis_title(builder: SvgBuilder, plot: PlotArea, config: BarChartConfig) -> None:
    x = plot.padding.left / 3
    y = plot.padding.top + plot.range_y / 2
    builder.drawing.add(
        builder.drawing.text(
            config.y_title,
            id="yTitle",
            transform=f"translate({fmt(x)},{fmt(y)}) rotate(-90)",
        )
    )


def append_footnote(builder: SvgBuilder, plot: PlotArea, config: BarChartConfig) -> None:
    builder.drawing.add(
        builder.drawing.text(
            config.footnote,
            id="footnote",
            insert=(fmt(plot.svg_width / 2), fmt(plot.svg_height - plot.padding.bottom / 4)),
        )
    )


def render(
    builder: SvgBuilder,
    scores: list[FruitScore],
    config: BarChartConfig,
    measure: TextMeasurer,
) -> None:
    if not scores:
        raise ChartError(
            code="E2501_BAR_EMPTY",
            message="Bar chart needs at least one score.",
            hint="Provide at least one fruit score.",
        )
    plot = config.plot
    group = builder.padding_group
    scales = make_scales(scores, plot, config)
    define_dashed_line(builder)
    append_y_axis_dashed_lines(builder, group, scales, plot)
    append_x_axis(builder, group, scales, plot)
    append_y_axis(builder, group, scales)
    append_bars(builder, group, scores, scales, plot, config)
    append_score_today(builder, group, scores, scales)
    append_score_last_year(builder, group, scores, scales, config)
    append_chart_title(builder, plot, config)
    append_y_axis_title(builder, plot, config)
    append_footnote(builder, plot, config)
    logger.debug("Bar chart: %d bars", len(scores))
