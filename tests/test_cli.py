from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from svgcharts.cli import app
from svgcharts.renderer import CHARTS

runner = CliRunner()


def test_list_prints_chart_ids() -> None:
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert result.stdout.split() == list(CHARTS)


def test_render_writes_svg(tmp_path: Path) -> None:
    output = tmp_path / "bar.svg"
    result = runner.invoke(app, ["render", "bar_chart", "--out", str(output)])
    assert result.exit_code == 0, result.output
    assert output.read_text().startswith("<?xml")
    assert str(output) in result.stdout


def test_render_unknown_chart_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["render", "pie_chart", "--out", str(tmp_path / "pie.svg")])
    assert result.exit_code == 1
    assert "E1105_CHART_UNKNOWN" in result.output
    assert not (tmp_path / "pie.svg").exists()


def test_render_reports_missing_data(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["render", "rate_chart", "--out", str(tmp_path / "rate.svg"), "--data-dir", str(tmp_path)],
    )
    assert result.exit_code == 1
    assert "E1101_DATA_MISSING" in result.output


def test_render_all_with_config(tmp_path: Path) -> None:
    config = tmp_path / "charts.yaml"
    config.write_text("rate_chart:\n  recession_end: last_flagged\n")
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["render-all", str(out_dir), "--config", str(config)])
    assert result.exit_code == 0, result.output
    assert sorted(path.name for path in out_dir.iterdir()) == sorted(f"{chart}.svg" for chart in CHARTS)


def test_render_reports_non_finite_rate(tmp_path: Path) -> None:
    (tmp_path / "rate-data.csv").write_text("Date,10YTR,IsRecession\n2005-01-01,nan,0\n")
    result = runner.invoke(
        app,
        ["render", "rate_chart", "--out", str(tmp_path / "rate.svg"), "--data-dir", str(tmp_path)],
    )
    assert result.exit_code == 1
    assert "E1103_DATA_FIELD" in result.output
    assert "E1199_UNEXPECTED" not in result.output
