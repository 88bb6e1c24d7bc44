from __future__ import annotations

from pathlib import Path

import typer

from .config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from .errors import ChartError
from .logging import configure_logging
from .renderer import CHARTS, DEFAULT_DATA_DIR, render_all, render_chart

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Render the static SVG charts.",
)


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is None:
        return load_config(DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.is_file() else None)
    return load_config(config_path)


def _fail(exc: ChartError) -> None:
    typer.echo(f"ERROR {exc.code}: {exc.message}", err=True)
    typer.echo(f"HINT: {exc.hint}", err=True)
    raise typer.Exit(code=1)


@app.command("render")
def render(
    chart: str = typer.Argument(..., help=f"Chart id: {', '.join(CHARTS)}."),
    output_svg: Path = typer.Option(
        ...,
        "--out",
        "-o",
        dir_okay=False,
        help="Output SVG path.",
    ),
    data_dir: Path = typer.Option(
        DEFAULT_DATA_DIR,
        "--data-dir",
        file_okay=False,
        help="Directory holding the chart datasets and base map.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Chart settings YAML.",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
) -> None:
    """Render one chart to an SVG file."""
    configure_logging(log_level)
    try:
        render_chart(
            chart, output_svg, data_dir=data_dir, config=_load_app_config(config_path)
        )
    except ChartError as exc:
        _fail(exc)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"ERROR E1199_UNEXPECTED: {exc}", err=True)
        typer.echo("HINT: Check the data directory and config content.", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(output_svg))


@app.command("render-all")
def render_all_command(
    output_dir: Path = typer.Argument(..., file_okay=False, help="Directory for the SVG files."),
    data_dir: Path = typer.Option(
        DEFAULT_DATA_DIR,
        "--data-dir",
        file_okay=False,
        help="Directory holding the chart datasets and base map.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Chart settings YAML.",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
) -> None:
    """Render every chart into OUTPUT_DIR."""
    configure_logging(log_level)
    try:
        written = render_all(output_dir, data_dir=data_dir, config=_load_app_config(config_path))
    except ChartError as exc:
        _fail(exc)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"ERROR E1199_UNEXPECTED: {exc}", err=True)
        typer.echo("HINT: Check the data directory and config content.", err=True)
        raise typer.Exit(code=1)
    for path in written:
        typer.echo(str(path))


@app.command("list")
def list_charts() -> None:
    """List the chart ids."""
    for chart in CHARTS:
        typer.echo(chart)


if __name__ == "__main__":
    app(prog_name="svgcharts")
