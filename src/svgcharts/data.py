from __future__ import annotations

import csv
import json
import logging
import math
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path
from typing import Any

from .errors import ChartError
from .model import Airport, FruitScore, RateSample

logger = logging.getLogger(__name__)

AIRPORTS_FILE = "us-map-overlay.json"
RATES_FILE = "rate-data.csv"
BASE_MAP_FILE = "Blank_Map_Equirectangular_United_States_48.svg"

RATE_COLUMNS = ("Date", "10YTR", "IsRecession")


def _require_file(path: Path) -> None:
    if not path.is_file():
        raise ChartError(
            code="E1101_DATA_MISSING",
            message=f"Data file not found: {path}",
            hint="Check --data-dir or place the dataset next to the other chart data.",
        )


def _number(record: dict[str, Any], key: str, source: Path) -> float:
    try:
        value = float(record[key])
    except KeyError as exc:
        raise ChartError(
            code="E1103_DATA_FIELD",
            message=f"{source.name}: record missing field {exc}.",
            hint=f"Provide '{key}' for every record.",
        ) from exc
    except (TypeError, ValueError) as exc:
        raise ChartError(
            code="E1103_DATA_FIELD",
            message=f"{source.name}: field '{key}' must be numeric, got {record[key]!r}.",
            hint=f"Use plain numbers for '{key}'.",
        ) from exc
    if not math.isfinite(value):
        raise ChartError(
            code="E1103_DATA_FIELD",
            message=f"{source.name}: field '{key}' must be finite, got {record[key]!r}.",
            hint=f"Replace NaN or infinite values in '{key}' with real numbers.",
        )
    return value


def load_airports(path: Path) -> list[Airport]:
    """Airport records: [{code, latitude, longitude, movements2015}, ...]."""
    _require_file(path)
    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ChartError(
            code="E1102_DATA_INVALID",
            message=f"Failed to parse airport JSON: {exc}",
            hint="Ensure the airport file is a valid JSON array.",
        ) from exc
    if not isinstance(raw, list):
        raise ChartError(
            code="E1102_DATA_INVALID",
            message="Airport JSON must contain an array at the top level.",
            hint="Wrap airport records in a JSON array.",
        )
    airports: list[Airport] = []
    for record in raw:
        if not isinstance(record, dict) or not record.get("code"):
            raise ChartError(
                code="E1103_DATA_FIELD",
                message=f"{path.name}: each airport must be an object with a code.",
                hint="Use {code, latitude, longitude, movements2015} records.",
            )
        airports.append(
            Airport(
                code=str(record["code"]),
                latitude=_number(record, "latitude", path),
                longitude=_number(record, "longitude", path),
                movements=int(_number(record, "movements2015", path)),
            )
        )
    logger.debug("Loaded %d airports from %s", len(airports), path)
    return airports


def _parse_date(value: str, source: Path) -> date:
    try:
        year, month, day = (int(part) for part in value.strip().split("-"))
        return date(year, month, day)
    except (AttributeError, ValueError) as exc:
        raise ChartError(
            code="E1103_DATA_FIELD",
            message=f"{source.name}: invalid date {value!r}.",
            hint="Dates must use the YYYY-MM-DD format.",
        ) from exc


def load_rate_samples(path: Path) -> list[RateSample]:
    """Rate CSV rows in file order; '5' in the 10YTR column means 5.00 %."""
    _require_file(path)
    with path.open(newline="") as handle:
        reader = csv.DictReader(handle)
        missing = [column for column in RATE_COLUMNS if column not in (reader.fieldnames or [])]
        if missing:
            raise ChartError(
                code="E1102_DATA_INVALID",
                message=f"{path.name}: missing columns {', '.join(missing)}.",
                hint="The rate CSV header must be Date,10YTR,IsRecession.",
            )
        samples = [
            RateSample(
                date=_parse_date(row["Date"], path),
                rate=_number(row, "10YTR", path) / 100.0,
                is_recession=int(_number(row, "IsRecession", path)) == 1,
            )
            for row in reader
        ]
    logger.debug("Loaded %d rate samples from %s", len(samples), path)
    return samples


def fruit_scores() -> list[FruitScore]:
    return [
        FruitScore(name="Apple", score_today=62, score_last_year=25),
        FruitScore(name="Banana", score_today=90, score_last_year=71),
        FruitScore(name="Peach", score_today=43, score_last_year=59),
        FruitScore(name="Orange", score_today=65, score_last_year=43),
        FruitScore(name="Lime", score_today=88, score_last_year=63),
    ]


def load_base_map(path: Path) -> ET.Element:
    """Parse the base map document; it must declare numeric width and height."""
    if not path.is_file():
        raise ChartError(
            code="E1201_ASSET_MISSING",
            message=f"Base map not found: {path}",
            hint="Place the equirectangular US map SVG in the data directory.",
        )
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise ChartError(
            code="E1202_ASSET_INVALID",
            message=f"Failed to parse base map SVG: {exc}",
            hint="Ensure the base map is well-formed SVG.",
        ) from exc
    for attr in ("width", "height"):
        try:
            float(root.get(attr, ""))
        except ValueError as exc:
            raise ChartError(
                code="E1203_ASSET_SIZE",
                message=f"Base map {attr} must be a plain number, got {root.get(attr)!r}.",
                hint="Set explicit unitless width and height on the map's root element.",
            ) from exc
    return root
