from __future__ import annotations

from chartcommon.text_metrics import PillowTextMeasurer


def test_empty_text_has_no_width() -> None:
    assert PillowTextMeasurer()("") == 0.0


def test_longer_text_is_wider() -> None:
    measure = PillowTextMeasurer()
    assert measure("Recession") > measure("Rec") > 0


def test_class_size_applies() -> None:
    measure = PillowTextMeasurer(font_size=10, class_sizes={"legend": 20})
    assert measure("10 Year Treasury Rate", "legend") > measure("10 Year Treasury Rate")


def test_measurement_is_deterministic() -> None:
    assert PillowTextMeasurer()("ATL", "airport-hidden") == PillowTextMeasurer()("ATL", "airport-hidden")


def test_missing_font_path_falls_back() -> None:
    measure = PillowTextMeasurer(font_path="/nonexistent/font.ttf")
    assert measure("ORD") > 0
