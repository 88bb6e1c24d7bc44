from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from chartcommon.svg_builder import fmt

from .model import Point

DEFAULT_CURVATURE = 1.5
EASTWARD = "eastward"
WESTWARD = "westward"


@dataclass(frozen=True)
class RouteArc:
    start: Point
    end: Point
    radius: float
    rotation: float = 0
    large_arc: int = 0
    sweep: int = 1
    direction: str = EASTWARD

    @property
    def is_degenerate(self) -> bool:
        return self.radius == 0

    def path_d(self) -> str:
        head = f"M {fmt(self.start.x)},{fmt(self.start.y)} "
        if self.is_degenerate:
            return head + f"L {fmt(self.end.x)},{fmt(self.end.y)}"
        return head + (
            f"A {fmt(self.radius)} {fmt(self.radius)} "
            f"{fmt(self.rotation)} {self.large_arc} {self.sweep} "
            f"{fmt(self.end.x)} {fmt(self.end.y)}"
        )


def route_arc(departure: Point, arrival: Point, curvature: float = DEFAULT_CURVATURE) -> RouteArc:
    """Circular minor arc from departure to arrival.

    A higher curvature multiplier gives a larger radius, i.e. a flatter arc.
    The sweep flag is fixed, so eastward arcs bow below the chord and westward
    arcs bow above it; direction only selects the styling class.
    """
    delta_x = arrival.x - departure.x
    return RouteArc(
        start=departure,
        end=arrival,
        radius=abs(delta_x) * curvature,
        direction=EASTWARD if departure.x < arrival.x else WESTWARD,
    )


def route_arcs(points: Sequence[Point], curvature: float = DEFAULT_CURVATURE) -> Iterator[RouteArc]:
    """Arcs for every ordered pair of distinct points."""
    for i, departure in enumerate(points):
        for j, arrival in enumerate(points):
            if i != j:
                yield route_arc(departure, arrival, curvature)
