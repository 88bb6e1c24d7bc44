from __future__ import annotations

from pathlib import Path

import pytest

from svgcharts.renderer import CHARTS, render_chart


@pytest.mark.parametrize("chart", CHARTS)
def test_svg_output_is_deterministic(tmp_path: Path, chart: str) -> None:
    output_a = tmp_path / "out_a.svg"
    output_b = tmp_path / "out_b.svg"

    render_chart(chart, output_a)
    render_chart(chart, output_b)

    assert output_a.read_bytes() == output_b.read_bytes()
