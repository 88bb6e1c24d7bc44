from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .legend import PlateLegendStyle, StackedLegendStyle
from .model import Padding, PlotArea

REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = REPO_ROOT / "config" / "charts.v1.yaml"
RECESSION_END_POLICIES = ("last_flagged", "next_sample")


@dataclass(frozen=True)
class TextConfig:
    font_path: str | None = None
    font_size: float = 12
    class_sizes: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class AirportLabelConfig:
    font_offset: float = 16
    plate_margin: float = 3
    plate_padding: float = 1


@dataclass(frozen=True)
class MapOverlayConfig:
    plot: PlotArea = PlotArea.from_svg(800, 500, Padding(top=60, right=5, bottom=5, left=5))
    # Cape Flattery, WA to Lubec, ME; Key West, FL to Angle Township, MN
    longitude_domain: tuple[float, float] = (-124.711776, -67.0999376)
    latitude_domain: tuple[float, float] = (24.5646815, 49.3782021)
    movements_domain: tuple[float, float] = (100000, 1000000)
    radius_range: tuple[float, float] = (1, 10)
    arc_curvature: float = 1.5
    label: AirportLabelConfig = AirportLabelConfig()
    legend: StackedLegendStyle = StackedLegendStyle()
    legend_x: float = 20
    legend_y_ratio: float = 0.8
    title: str = "Air routes among airports with highest plane movements (2015)"


@dataclass(frozen=True)
class RateChartConfig:
    plot: PlotArea = PlotArea.from_svg(800, 420, Padding(top=10, right=90, bottom=40, left=20))
    rate_headroom: float = 0.005
    date_min_headroom_days: int = 14
    date_max_headroom_days: int = 7
    y_tick_count: int = 7
    recession_end: str = "next_sample"
    legend: PlateLegendStyle = PlateLegendStyle()
    waveform_label: str = "10 Year Treasury Rate"
    recession_label: str = "Recession"


@dataclass(frozen=True)
class BarChartConfig:
    plot: PlotArea = PlotArea.from_svg(800, 500, Padding(top=70, right=30, bottom=70, left=70))
    y_domain: tuple[float, float] = (0, 100)
    bar_width_ratio: float = 0.2
    title: str = "Carbo-Hydroxyl-Frutinoid Concentrations"
    y_title: str = "Concentration %"
    footnote: str = "Bold score represents today's value.  Italic score represents last year's value."


@dataclass(frozen=True)
class AppConfig:
    text: TextConfig = TextConfig()
    map_overlay: MapOverlayConfig = MapOverlayConfig()
    rate_chart: RateChartConfig = RateChartConfig()
    bar_chart: BarChartConfig = BarChartConfig()


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of YAML: {path}")
    return data


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {}) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Expected mapping for '{key}'.")
    return value


def _pair(value: Any, default: tuple[float, float], key: str) -> tuple[float, float]:
    if value is None:
        return default
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"'{key}' must be a two-item list.")
    try:
        return float(value[0]), float(value[1])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{key}' values must be numeric: {exc}") from exc


def _plot(data: dict[str, Any], default: PlotArea) -> PlotArea:
    svg = _section(data, "svg")
    padding = _section(data, "padding")
    base = default.padding
    return PlotArea.from_svg(
        float(svg.get("width", default.svg_width)),
        float(svg.get("height", default.svg_height)),
        Padding(
            top=float(padding.get("top", base.top)),
            right=float(padding.get("right", base.right)),
            bottom=float(padding.get("bottom", base.bottom)),
            left=float(padding.get("left", base.left)),
        ),
    )


def _plate_legend(data: dict[str, Any], default: PlateLegendStyle) -> PlateLegendStyle:
    return PlateLegendStyle(
        plate_margin=float(data.get("plate_margin", default.plate_margin)),
        square_margin=float(data.get("square_margin", default.square_margin)),
        square_width=float(data.get("square_width", default.square_width)),
        font_offset=float(data.get("font_offset", default.font_offset)),
    )


def _stacked_legend(data: dict[str, Any], default: StackedLegendStyle) -> StackedLegendStyle:
    return StackedLegendStyle(
        row_spacing=float(data.get("row_spacing", default.row_spacing)),
        square_width=float(data.get("square_width", default.square_width)),
        circle_radius=float(data.get("circle_radius", default.circle_radius)),
        text_offset_x=float(data.get("text_offset_x", default.text_offset_x)),
        text_offset_y=float(data.get("text_offset_y", default.text_offset_y)),
    )


def _text_config(data: dict[str, Any]) -> TextConfig:
    default = TextConfig()
    class_sizes = _section(data, "class_sizes")
    font_path = data.get("font_path", default.font_path)
    return TextConfig(
        font_path=str(font_path) if font_path else None,
        font_size=float(data.get("font_size", default.font_size)),
        class_sizes={str(key): float(value) for key, value in class_sizes.items()},
    )


def _map_overlay_config(data: dict[str, Any]) -> MapOverlayConfig:
    default = MapOverlayConfig()
    label = _section(data, "label")
    legend = _section(data, "legend")
    return MapOverlayConfig(
        plot=_plot(data, default.plot),
        longitude_domain=_pair(data.get("longitude_domain"), default.longitude_domain, "longitude_domain"),
        latitude_domain=_pair(data.get("latitude_domain"), default.latitude_domain, "latitude_domain"),
        movements_domain=_pair(data.get("movements_domain"), default.movements_domain, "movements_domain"),
        radius_range=_pair(data.get("radius_range"), default.radius_range, "radius_range"),
        arc_curvature=float(data.get("arc_curvature", default.arc_curvature)),
        label=AirportLabelConfig(
            font_offset=float(label.get("font_offset", default.label.font_offset)),
            plate_margin=float(label.get("plate_margin", default.label.plate_margin)),
            plate_padding=float(label.get("plate_padding", default.label.plate_padding)),
        ),
        legend=_stacked_legend(legend, default.legend),
        legend_x=float(legend.get("x", default.legend_x)),
        legend_y_ratio=float(legend.get("y_ratio", default.legend_y_ratio)),
        title=str(data.get("title", default.title)),
    )


def _rate_chart_config(data: dict[str, Any]) -> RateChartConfig:
    default = RateChartConfig()
    headroom = _section(data, "headroom")
    recession_end = str(data.get("recession_end", default.recession_end))
    if recession_end not in RECESSION_END_POLICIES:
        raise ValueError(
            f"recession_end must be one of {', '.join(RECESSION_END_POLICIES)}, got '{recession_end}'."
        )
    y_tick_count = int(data.get("y_tick_count", default.y_tick_count))
    if y_tick_count < 2:
        raise ValueError("y_tick_count must be at least 2.")
    return RateChartConfig(
        plot=_plot(data, default.plot),
        rate_headroom=float(headroom.get("rate", default.rate_headroom)),
        date_min_headroom_days=int(headroom.get("date_min_days", default.date_min_headroom_days)),
        date_max_headroom_days=int(headroom.get("date_max_days", default.date_max_headroom_days)),
        y_tick_count=y_tick_count,
        recession_end=recession_end,
        legend=_plate_legend(_section(data, "legend"), default.legend),
        waveform_label=str(data.get("waveform_label", default.waveform_label)),
        recession_label=str(data.get("recession_label", default.recession_label)),
    )


def _bar_chart_config(data: dict[str, Any]) -> BarChartConfig:
    default = BarChartConfig()
    return BarChartConfig(
        plot=_plot(data, default.plot),
        y_domain=_pair(data.get("y_domain"), default.y_domain, "y_domain"),
        bar_width_ratio=float(data.get("bar_width_ratio", default.bar_width_ratio)),
        title=str(data.get("title", default.title)),
        y_title=str(data.get("y_title", default.y_title)),
        footnote=str(data.get("footnote", default.footnote)),
    )


def load_config(path: Path | None = None) -> AppConfig:
    """Load chart settings; keys missing from the YAML keep their defaults."""
    if path is None:
        return AppConfig()
    data = _load_yaml(path)
    return AppConfig(
        text=_text_config(_section(data, "text")),
        map_overlay=_map_overlay_config(_section(data, "map_overlay")),
        rate_chart=_rate_chart_config(_section(data, "rate_chart")),
        bar_chart=_bar_chart_config(_section(data, "bar_chart")),
    )
