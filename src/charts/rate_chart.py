from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
import svgwrite

from chartcommon.svg_builder import SvgBuilder, fmt
from chartcommon.text_metrics import TextMeasurer
from svgcharts.axes import axis_bottom, axis_right, tick_translations
from svgcharts.config import RateChartConfig
from svgcharts.errors import ChartError
from svgcharts.intervals import collapse_recession_periods
from svgcharts.legend import plate_legend
from svgcharts.model import PlotArea, RateSample
from svgcharts.scales import LinearScale, TimeScale, date_headroom, with_headroom

logger = logging.getLogger(__name__)

STYLESHEET = """
.background { fill: #f5f5f0; }
.background-border { fill: none; stroke: #999999; stroke-width: 1px; }
.grid line { stroke: #e0e0e0; stroke-width: 1px; }
.recession { fill: #c8c8c8; opacity: 0.6; }
.waveform path { fill: none; stroke: #1f4e9c; stroke-width: 1.5px; }
.legend text { font: 12px sans-serif; text-anchor: end; }
.legend-plate { fill: #ffffff; stroke: #999999; }
.legend-waveform { fill: #1f4e9c; }
.legend-recession { fill: #c8c8c8; }
"""


@dataclass(frozen=True)
class RateScales:
    x: TimeScale
    y: LinearScale


def make_scales(samples: list[RateSample], plot: PlotArea, config: RateChartConfig) -> RateScales:
    """Scales wider than the data by the configured headroom.

    X headroom keeps the waveform off the background border. Y headroom leaves
    room for the border overhang, so the Y ticks are set explicitly to avoid it.
    """
    min_date, max_date = date_headroom(
        samples[0].date,
        samples[-1].date,
        config.date_min_headroom_days,
        config.date_max_headroom_days,
    )
    rates = np.array([sample.rate for sample in samples], dtype=float)
    min_rate, max_rate = with_headroom(
        math.floor(100.0 * rates.min()) / 100.0,
        math.ceil(100.0 * rates.max()) / 100.0,
        config.rate_headroom,
    )
    return RateScales(
        x=TimeScale([min_date, max_date], [0, plot.range_x]),
        y=LinearScale([min_rate, max_rate], [plot.range_y, 0]),
    )


def y_tick_values(scales: RateScales, config: RateChartConfig) -> list[float]:
    low, high = scales.y.domain
    values = np.linspace(low + config.rate_headroom, high - config.rate_headroom, config.y_tick_count)
    return [float(value) for value in values]


def append_background(builder: SvgBuilder, group: svgwrite.container.Group, plot: PlotArea) -> None:
    group.add(
        builder.drawing.rect(
            insert=(0, 0), size=(fmt(plot.range_x), fmt(plot.range_y)), class_="background"
        )
    )


def append_x_axis(
    builder: SvgBuilder, group: svgwrite.container.Group, scales: RateScales, plot: PlotArea
) -> svgwrite.container.Group:
    return axis_bottom(
        builder,
        group,
        scales.x,
        css_class="xAxis",
        transform=f"translate(0,{fmt(plot.range_y)})",
    )


def append_y_axis(
    builder: SvgBuilder,
    group: svgwrite.container.Group,
    scales: RateScales,
    plot: PlotArea,
    config: RateChartConfig,
) -> svgwrite.container.Group:
    return axis_right(
        builder,
        group,
        scales.y,
        css_class="yAxis",
        transform=f"translate({fmt(plot.range_x)},0)",
        tick_values=y_tick_values(scales, config),
        tick_format=lambda value: f"{value:.2%}",
    )


def append_background_border_lines(
    builder: SvgBuilder, group: svgwrite.container.Group, plot: PlotArea
) -> None:
    """Top, left and bottom borders; the Y axis draws the right one.

    The top and bottom borders overhang into the right padding.
    """
    offset = 0.5
    right = plot.svg_width - plot.padding.left
    bottom = plot.range_y + offset
    group.add(
        builder.drawing.path(
            d=(
                f"M {fmt(right)},{fmt(offset)} "
                f"L {fmt(offset)},{fmt(offset)} "
                f"{fmt(offset)},{fmt(bottom)} "
                f"{fmt(right)},{fmt(bottom)}"
            ),
            class_="background-border",
        )
    )


def append_grid_lines(
    builder: SvgBuilder,
    group: svgwrite.container.Group,
    x_axis: svgwrite.container.Group,
    y_axis: svgwrite.container.Group,
    plot: PlotArea,
) -> svgwrite.container.Group:
    """Grid lines in line with the axis ticks.

    The first vertical line is skipped; it would sit a few pixels from the
    left border.
    """
    grid = builder.drawing.g(class_="grid")
    for _, y in tick_translations(y_axis):
        grid.add(builder.drawing.line(start=(0, fmt(y)), end=(fmt(plot.range_x), fmt(y))))
    for idx, (x, _) in enumerate(tick_translations(x_axis)):
        if idx == 0:
            continue
        grid.add(builder.drawing.line(start=(fmt(x), 0), end=(fmt(x), fmt(plot.range_y))))
    group.add(grid)
    return grid


def append_recession_bars(
    builder: SvgBuilder,
    group: svgwrite.container.Group,
    samples: list[RateSample],
    scales: RateScales,
    plot: PlotArea,
    config: RateChartConfig,
) -> int:
    periods = collapse_recession_periods(
        samples, half_open=config.recession_end == "next_sample"
    )
    for period in periods:
        x0 = scales.x(period.start_date)
        x1 = scales.x(period.end_date)
        group.add(
            builder.drawing.rect(
                insert=(fmt(x0), 0),
                size=(fmt(x1 - x0), fmt(plot.range_y)),
                class_="recession",
            )
        )
    return len(periods)


def waveform_path_d(samples: list[RateSample], scales: RateScales) -> str:
    xs = scales.x.map_many(sample.date for sample in samples)
    ys = scales.y.map_many(sample.rate for sample in samples)
    points = [f"{fmt(x)},{fmt(y)}" for x, y in zip(xs, ys)]
    return "M" + "L".join(points)


def append_rate_waveform(
    builder: SvgBuilder, group: svgwrite.container.Group, samples: list[RateSample], scales: RateScales
) -> None:
    waveform = builder.drawing.g(class_="waveform")
    waveform.add(builder.drawing.path(d=waveform_path_d(samples, scales)))
    group.add(waveform)


def append_legend(
    builder: SvgBuilder,
    group: svgwrite.container.Group,
    plot: PlotArea,
    config: RateChartConfig,
    measure: TextMeasurer,
) -> svgwrite.container.Group:
    """A light plate with one colour square and label per row, sized to the widest label."""
    labels = [
        ("legend-waveform", config.waveform_label),
        ("legend-recession", config.recession_label),
    ]
    max_width = max(measure(text, "legend") for _, text in labels)
    area = plate_legend(max_width, len(labels), config.legend)
    drawing = builder.drawing
    legend = drawing.g(
        class_="legend",
        transform=(
            f"translate({fmt(plot.range_x - area.plate_width - area.plate_margin)},"
            f"{fmt(area.plate_margin)})"
        ),
    )
    legend.add(
        drawing.rect(
            insert=(0, 0),
            size=(fmt(area.plate_width), fmt(area.plate_height)),
            class_="legend-plate",
        )
    )
    for row, (square_class, text) in zip(area.rows, labels):
        legend.add(
            drawing.rect(
                insert=(fmt(row.square_x), fmt(row.square_y)),
                size=(fmt(area.square_width), fmt(area.square_width)),
                class_=square_class,
            )
        )
        legend.add(drawing.text(text, insert=(fmt(row.text_x), fmt(row.text_y))))
    group.add(legend)
    return legend


def render(
    builder: SvgBuilder,
    samples: list[RateSample],
    config: RateChartConfig,
    measure: TextMeasurer,
) -> None:
    if not samples:
        raise ChartError(
            code="E2401_RATE_EMPTY",
            message="Rate chart needs at least one sample.",
            hint="Check that the rate CSV has data rows.",
        )
    plot = config.plot
    group = builder.padding_group
    scales = make_scales(samples, plot, config)
    append_background(builder, group, plot)
    x_axis = append_x_axis(builder, group, scales, plot)
    y_axis = append_y_axis(builder, group, scales, plot, config)
    append_grid_lines(builder, group, x_axis, y_axis, plot)
    recessions = append_recession_bars(builder, group, samples, scales, plot, config)
    append_background_border_lines(builder, group, plot)
    append_rate_waveform(builder, group, samples, scales)
    append_legend(builder, group, plot, config, measure)
    logger.debug("Rate chart: %d samples, %d recession periods", len(samples), recessions)
