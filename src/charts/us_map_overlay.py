from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass

import svgwrite

from chartcommon.svg_builder import SvgBuilder, fmt
from chartcommon.text_metrics import TextMeasurer
from svgcharts.arcs import route_arcs
from svgcharts.config import MapOverlayConfig
from svgcharts.legend import stacked_legend
from svgcharts.model import Airport, PlotArea, Point
from svgcharts.scales import LinearScale

logger = logging.getLogger(__name__)

LABEL_CLASS = "airport-hidden"

STYLESHEET = """
.chartTitle { font: bold 18px sans-serif; text-anchor: middle; }
.routes path { fill: none; stroke-width: 1px; opacity: 0.5; }
.routes path.eastward, .legend rect.eastward { stroke: #d62728; fill: none; }
.routes path.westward, .legend rect.westward { stroke: #1f77b4; fill: none; }
.legend rect.eastward { fill: #d62728; }
.legend rect.westward { fill: #1f77b4; }
.airport circle, .legend circle { fill: #333333; stroke: #ffffff; }
.airport .plate { fill: #ffffff; opacity: 0.8; }
.airport text { font: 11px sans-serif; text-anchor: middle; }
.legend text { font: 12px sans-serif; }
"""


@dataclass(frozen=True)
class MapScales:
    """r: circle radius from plane movements; x/y: equirectangular lon/lat."""

    r: LinearScale
    x: LinearScale
    y: LinearScale

    def project(self, airport: Airport) -> Point:
        return Point(x=self.x(airport.longitude), y=self.y(airport.latitude))


def make_scales(plot: PlotArea, config: MapOverlayConfig) -> MapScales:
    return MapScales(
        r=LinearScale(config.movements_domain, config.radius_range),
        x=LinearScale(config.longitude_domain, [0, plot.range_x]),
        y=LinearScale(config.latitude_domain, [plot.range_y, 0]),
    )


def append_map(
    builder: SvgBuilder, group: svgwrite.container.Group, base_map: ET.Element, plot: PlotArea
) -> None:
    """Base map stretched non-uniformly over the plot range."""
    builder.embed_svg(group, base_map, plot.range_x, plot.range_y)


def append_route_arcs(
    builder: SvgBuilder,
    group: svgwrite.container.Group,
    airports: list[Airport],
    scales: MapScales,
    config: MapOverlayConfig,
) -> int:
    """One arc per ordered pair of airports, classed by direction of travel."""
    routes = builder.drawing.g(class_="routes")
    points = [scales.project(airport) for airport in airports]
    count = 0
    for arc in route_arcs(points, config.arc_curvature):
        routes.add(builder.drawing.path(d=arc.path_d(), class_=arc.direction))
        count += 1
    group.add(routes)
    return count


def append_airport(
    builder: SvgBuilder,
    group: svgwrite.container.Group,
    airport: Airport,
    scales: MapScales,
    config: MapOverlayConfig,
    measure: TextMeasurer,
) -> svgwrite.container.Group:
    """Circle sized by movements, with the airport code on a light plate below it."""
    label = config.label
    center = scales.project(airport)
    radius = scales.r(airport.movements)
    text_width = measure(airport.code, LABEL_CLASS)
    drawing = builder.drawing
    airport_group = drawing.g(
        class_="airport", transform=f"translate({fmt(center.x)},{fmt(center.y)})"
    )
    airport_group.add(drawing.circle(center=(0, 0), r=fmt(radius)))
    airport_group.add(
        drawing.rect(
            insert=(fmt(-(text_width / 2 + label.plate_padding)), fmt(radius + label.plate_margin)),
            size=(
                fmt(text_width + 2 * label.plate_padding),
                fmt(label.font_offset + label.plate_padding),
            ),
            class_="plate",
        )
    )
    airport_group.add(drawing.text(airport.code, insert=(0, fmt(radius + label.font_offset))))
    group.add(airport_group)
    return airport_group


def append_chart_title(builder: SvgBuilder, plot: PlotArea, config: MapOverlayConfig) -> None:
    builder.drawing.add(
        builder.drawing.text(
            config.title,
            class_="chartTitle",
            insert=(fmt(plot.svg_width / 2), fmt(plot.padding.top * 0.66)),
        )
    )


def append_legend(builder: SvgBuilder, plot: PlotArea, config: MapOverlayConfig) -> svgwrite.container.Group:
    entries = [
        ("rect", "eastward", "Eastward route"),
        ("rect", "westward", "Westward route"),
        ("circle", None, "Airport (radius proportional to number of movements)"),
    ]
    style = config.legend
    drawing = builder.drawing
    legend = drawing.g(
        class_="legend",
        transform=f"translate({fmt(config.legend_x)},{fmt(config.legend_y_ratio * plot.svg_height)})",
    )
    for idx, (row, (shape, css_class, text)) in enumerate(
        zip(stacked_legend(len(entries), style), entries)
    ):
        extra = {"class_": css_class} if css_class else {}
        if shape == "circle":
            legend.add(
                drawing.circle(
                    center=(0, fmt(idx * style.row_spacing)), r=fmt(style.circle_radius), **extra
                )
            )
        else:
            legend.add(
                drawing.rect(
                    insert=(fmt(row.square_x), fmt(row.square_y)),
                    size=(fmt(style.square_width), fmt(style.square_width)),
                    **extra,
                )
            )
        legend.add(drawing.text(text, insert=(fmt(row.text_x), fmt(row.text_y))))
    builder.drawing.add(legend)
    return legend


def render(
    builder: SvgBuilder,
    airports: list[Airport],
    base_map: ET.Element,
    config: MapOverlayConfig,
    measure: TextMeasurer,
) -> None:
    plot = config.plot
    group = builder.padding_group
    append_map(builder, group, base_map, plot)
    scales = make_scales(plot, config)
    routes = append_route_arcs(builder, group, airports, scales, config)
    for airport in airports:
        append_airport(builder, group, airport, scales, config, measure)
    append_chart_title(builder, plot, config)
    append_legend(builder, plot, config)
    logger.debug("Map overlay: %d airports, %d routes", len(airports), routes)
