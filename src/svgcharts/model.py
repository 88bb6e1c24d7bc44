from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Padding:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class PlotArea:
    """Pixel geometry of one chart: the full SVG and the padded drawing range."""

    svg_width: float
    svg_height: float
    padding: Padding
    range_x: float
    range_y: float

    @classmethod
    def from_svg(cls, width: float, height: float, padding: Padding) -> "PlotArea":
        return cls(
            svg_width=width,
            svg_height=height,
            padding=padding,
            range_x=width - padding.left - padding.right,
            range_y=height - padding.top - padding.bottom,
        )


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Airport:
    code: str
    latitude: float
    longitude: float
    movements: int


@dataclass(frozen=True)
class RateSample:
    date: date
    rate: float
    is_recession: bool


@dataclass(frozen=True)
class FruitScore:
    name: str
    score_today: float
    score_last_year: float


@dataclass(frozen=True)
class RecessionPeriod:
    start_date: date
    end_date: date
