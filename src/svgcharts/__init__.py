"""svgcharts library package."""

from .errors import ChartError
from .intervals import collapse_flagged_runs, collapse_recession_periods
from .renderer import CHARTS, build_chart, render_all, render_chart, render_chart_string

__all__ = [
    "CHARTS",
    "ChartError",
    "build_chart",
    "collapse_flagged_runs",
    "collapse_recession_periods",
    "render_all",
    "render_chart",
    "render_chart_string",
]
