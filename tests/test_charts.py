from __future__ import annotations

import shutil
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path

import pytest

from chartcommon.svg_builder import local_name
from charts import rate_chart
from svgcharts.config import AppConfig, RateChartConfig
from svgcharts.data import AIRPORTS_FILE, BASE_MAP_FILE, RATES_FILE, load_rate_samples
from svgcharts.errors import ChartError
from svgcharts.renderer import build_chart, render_chart_string

ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = ROOT / "data"


def fake_measure(text: str, style_class: str = "") -> float:
    return 7.0 * len(text)


def _render(chart: str, config: AppConfig | None = None, data_dir: Path = DATA_DIR) -> ET.Element:
    return ET.fromstring(
        render_chart_string(chart, data_dir=data_dir, config=config, measure=fake_measure)
    )


def _find(root: ET.Element, tag: str, css_class: str | None = None) -> list[ET.Element]:
    return [
        element
        for element in root.iter()
        if local_name(element.tag) == tag
        and (css_class is None or element.get("class") == css_class)
    ]


def test_bar_chart_structure() -> None:
    root = _render("bar_chart")
    (bars,) = _find(root, "g", "bars")
    rects = _find(bars, "rect")
    assert [rect.get("class") for rect in rects] == ["Apple", "Banana", "Peach", "Orange", "Lime"]
    assert {rect.get("width") for rect in rects} == {"28"}
    # Banana scores 90 on a 360px tall plot: 36px from the top, 324px tall.
    assert rects[1].get("y") == "36"
    assert rects[1].get("height") == "324"
    (dashed,) = _find(root, "g", "yDashed")
    assert len(_find(dashed, "g", "tick")) == 11
    assert not _find(dashed, "text")
    patterns = _find(root, "pattern")
    assert [pattern.get("id") for pattern in patterns] == ["dashed-line"]
    ids = {element.get("id") for element in root.iter()}
    assert {"chartTitle", "yTitle", "footnote"} <= ids


def test_bar_chart_score_labels() -> None:
    root = _render("bar_chart")
    (today,) = _find(root, "g", "scoreToday")
    assert [text.text for text in _find(today, "text")] == ["62", "90", "43", "65", "88"]
    (last_year,) = _find(root, "g", "scoreLastYear")
    assert len(_find(last_year, "line")) == 5
    assert [text.text for text in _find(last_year, "text")] == ["25", "71", "59", "43", "63"]


def test_rate_chart_structure() -> None:
    root = _render("rate_chart")
    assert len(_find(root, "rect", "recession")) == 1
    (plate,) = _find(root, "rect", "legend-plate")
    assert plate.get("width") == "177"
    assert plate.get("height") == "35"
    (y_axis,) = _find(root, "g", "yAxis")
    labels = [text.text for text in _find(y_axis, "text")]
    assert len(labels) == 7
    assert all(label.endswith("%") for label in labels)
    (x_axis,) = _find(root, "g", "xAxis")
    assert [text.text for text in _find(x_axis, "text")] == [str(year) for year in range(2005, 2013)]
    (grid,) = _find(root, "g", "grid")
    assert len(_find(grid, "line")) == 7 + 7
    (waveform,) = _find(root, "g", "waveform")
    (path,) = _find(waveform, "path")
    assert path.get("d").startswith("M")
    assert path.get("d").count("L") == 95


def _recession_width(config: AppConfig) -> float:
    (rect,) = _find(_render("rate_chart", config), "rect", "recession")
    return float(rect.get("width"))


def test_rate_chart_recession_end_policy() -> None:
    def width(policy: str) -> float:
        return _recession_width(AppConfig(rate_chart=RateChartConfig(recession_end=policy)))

    # One extra month of shading under the half-open policy.
    assert width("next_sample") > width("last_flagged")
    assert _recession_width(AppConfig()) == width("next_sample")


def test_default_recession_band_ends_on_first_unflagged_month() -> None:
    config = AppConfig()
    samples = load_rate_samples(DATA_DIR / RATES_FILE)
    scales = rate_chart.make_scales(samples, config.rate_chart.plot, config.rate_chart)
    expected = scales.x(date(2009, 7, 1)) - scales.x(date(2007, 12, 1))
    assert _recession_width(config) == pytest.approx(expected, abs=1e-3)


def test_rate_chart_empty_csv(tmp_path: Path) -> None:
    (tmp_path / RATES_FILE).write_text("Date,10YTR,IsRecession\n")
    with pytest.raises(ChartError) as exc_info:
        build_chart("rate_chart", data_dir=tmp_path, measure=fake_measure)
    assert exc_info.value.code == "E2401_RATE_EMPTY"


def test_map_overlay_structure() -> None:
    root = _render("us_map_overlay")
    (routes,) = _find(root, "g", "routes")
    paths = _find(routes, "path")
    assert len(paths) == 90
    assert sum(path.get("class") == "eastward" for path in paths) == 45
    assert sum(path.get("class") == "westward" for path in paths) == 45
    assert all(" A " in path.get("d") for path in paths)
    airports = _find(root, "g", "airport")
    assert len(airports) == 10
    assert [_find(group, "text")[0].text for group in airports][:3] == ["ATL", "ORD", "DFW"]
    embedded = [element for element in _find(root, "svg") if element.get("viewBox")]
    assert embedded[0].get("viewBox") == "0 0 1000 430"
    (legend,) = _find(root, "g", "legend")
    assert len(_find(legend, "text")) == 3
    assert legend.get("transform") == "translate(20,400)"


def test_airport_label_plate_fits_measured_text() -> None:
    root = _render("us_map_overlay")
    atl = _find(root, "g", "airport")[0]
    (plate,) = _find(atl, "rect", "plate")
    assert plate.get("width") == "23"
    assert plate.get("x") == "-11.5"


def test_map_overlay_missing_base_map(tmp_path: Path) -> None:
    shutil.copy(DATA_DIR / AIRPORTS_FILE, tmp_path / AIRPORTS_FILE)
    with pytest.raises(ChartError) as exc_info:
        build_chart("us_map_overlay", data_dir=tmp_path, measure=fake_measure)
    assert exc_info.value.code == "E1201_ASSET_MISSING"
    assert not (tmp_path / BASE_MAP_FILE).exists()


def test_unknown_chart() -> None:
    with pytest.raises(ChartError) as exc_info:
        build_chart("pie_chart", measure=fake_measure)
    assert exc_info.value.code == "E1105_CHART_UNKNOWN"
