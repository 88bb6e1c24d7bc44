from __future__ import annotations

import re
from typing import Any, Callable, Sequence

import svgwrite

from chartcommon.svg_builder import SvgBuilder, fmt

from .errors import ChartError
from .scales import BandScale

TICK_SIZE = 6
TICK_PADDING = 3
TICK_OFFSET = 0.5
AXIS_FONT_SIZE = 10
AXIS_FONT_FAMILY = "sans-serif"

TRANSLATE_RE = re.compile(r"^translate\((.*),(.*)\)$")


def extract_translation(transform: str) -> tuple[float, float]:
    """Parse a plain 'translate(x,y)' transform into (x, y)."""
    match = TRANSLATE_RE.match(transform or "")
    if not match:
        raise ChartError(
            code="E3001_TRANSFORM_PARSE",
            message=f"Don't know how to parse transform: '{transform}'",
            hint="Only translate(x,y) transforms are supported on axis ticks.",
        )
    try:
        return float(match.group(1)), float(match.group(2))
    except ValueError as exc:
        raise ChartError(
            code="E3001_TRANSFORM_PARSE",
            message=f"Don't know how to parse transform: '{transform}'",
            hint="translate() arguments must be plain numbers.",
        ) from exc


def tick_translations(axis_group: svgwrite.container.Group) -> list[tuple[float, float]]:
    """Positions of the ticks drawn into an axis group, in drawing order."""
    return [
        extract_translation(element.attribs.get("transform", ""))
        for element in axis_group.elements
        if getattr(element, "attribs", {}).get("class") == "tick"
    ]


def _tick_position(scale: Any, value: Any) -> float:
    if isinstance(scale, BandScale):
        return scale(value) + scale.bandwidth / 2
    return scale(value)


def _axis(
    builder: SvgBuilder,
    parent: svgwrite.container.Group,
    scale: Any,
    orient: str,
    *,
    css_class: str,
    transform: str | None,
    tick_values: Sequence[Any] | None,
    tick_format: Callable[[Any], str] | None,
    tick_size: float,
    tick_count: int,
    show_labels: bool,
) -> svgwrite.container.Group:
    drawing = builder.drawing
    vertical = orient in {"left", "right"}
    k = -1 if orient == "left" else 1
    anchor = {"left": "end", "right": "start"}.get(orient, "middle")
    group_kwargs: dict[str, Any] = {
        "class_": css_class,
        "fill": "none",
        "font_size": AXIS_FONT_SIZE,
        "font_family": AXIS_FONT_FAMILY,
        "text_anchor": anchor,
    }
    if transform:
        group_kwargs["transform"] = transform
    group = drawing.g(**group_kwargs)

    r0, r1 = scale.range
    outer = fmt(k * tick_size)
    o = TICK_OFFSET
    if vertical:
        domain_d = f"M{outer},{fmt(r0 + o)}H{fmt(o)}V{fmt(r1 + o)}H{outer}"
    else:
        domain_d = f"M{fmt(r0 + o)},{outer}V{fmt(o)}H{fmt(r1 + o)}V{outer}"
    group.add(drawing.path(d=domain_d, class_="domain", stroke="currentColor"))

    values = list(tick_values) if tick_values is not None else scale.ticks(tick_count)
    formatter = tick_format or scale.tick_format(tick_count)
    spacing = max(tick_size, 0) + TICK_PADDING
    for value in values:
        position = fmt(_tick_position(scale, value) + o)
        if vertical:
            tick_transform = f"translate(0,{position})"
        else:
            tick_transform = f"translate({position},0)"
        tick = drawing.g(class_="tick", opacity=1, transform=tick_transform)
        if vertical:
            tick.add(drawing.line(start=(0, 0), end=(fmt(k * tick_size), 0), stroke="currentColor"))
        else:
            tick.add(drawing.line(start=(0, 0), end=(0, fmt(k * tick_size)), stroke="currentColor"))
        if show_labels:
            if vertical:
                label = drawing.text(
                    formatter(value), insert=(fmt(k * spacing), 0), fill="currentColor", dy=["0.32em"]
                )
            else:
                label = drawing.text(
                    formatter(value), insert=(0, fmt(k * spacing)), fill="currentColor", dy=["0.71em"]
                )
            tick.add(label)
        group.add(tick)
    parent.add(group)
    return group


def axis_bottom(
    builder: SvgBuilder,
    parent: svgwrite.container.Group,
    scale: Any,
    *,
    css_class: str = "xAxis",
    transform: str | None = None,
    tick_values: Sequence[Any] | None = None,
    tick_format: Callable[[Any], str] | None = None,
    tick_size: float = TICK_SIZE,
    tick_count: int = 10,
    show_labels: bool = True,
) -> svgwrite.container.Group:
    return _axis(
        builder,
        parent,
        scale,
        "bottom",
        css_class=css_class,
        transform=transform,
        tick_values=tick_values,
        tick_format=tick_format,
        tick_size=tick_size,
        tick_count=tick_count,
        show_labels=show_labels,
    )


def axis_left(
    builder: SvgBuilder,
    parent: svgwrite.container.Group,
    scale: Any,
    *,
    css_class: str = "yAxis",
    transform: str | None = None,
    tick_values: Sequence[Any] | None = None,
    tick_format: Callable[[Any], str] | None = None,
    tick_size: float = TICK_SIZE,
    tick_count: int = 10,
    show_labels: bool = True,
) -> svgwrite.container.Group:
    return _axis(
        builder,
        parent,
        scale,
        "left",
        css_class=css_class,
        transform=transform,
        tick_values=tick_values,
        tick_format=tick_format,
        tick_size=tick_size,
        tick_count=tick_count,
        show_labels=show_labels,
    )


def axis_right(
    builder: SvgBuilder,
    parent: svgwrite.container.Group,
    scale: Any,
    *,
    css_class: str = "yAxis",
    transform: str | None = None,
    tick_values: Sequence[Any] | None = None,
    tick_format: Callable[[Any], str] | None = None,
    tick_size: float = TICK_SIZE,
    tick_count: int = 10,
    show_labels: bool = True,
) -> svgwrite.container.Group:
    return _axis(
        builder,
        parent,
        scale,
        "right",
        css_class=css_class,
        transform=transform,
        tick_values=tick_values,
        tick_format=tick_format,
        tick_size=tick_size,
        tick_count=tick_count,
        show_labels=show_labels,
    )
