"""Chart renderers."""

from .bar_chart import render as render_bar_chart
from .rate_chart import render as render_rate_chart
from .us_map_overlay import render as render_us_map_overlay

__all__ = [
    "render_bar_chart",
    "render_rate_chart",
    "render_us_map_overlay",
]
