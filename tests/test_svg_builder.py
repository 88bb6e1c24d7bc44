from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from chartcommon.svg_builder import SvgBuilder, fmt, local_name, strip_foreign

ROOT = Path(__file__).resolve().parents[1]
BASE_MAP = ROOT / "data" / "Blank_Map_Equirectangular_United_States_48.svg"


@pytest.mark.parametrize(
    "value, expected",
    [(1, "1"), (2.5, "2.5"), (1 / 3, "0.333"), (-0.0001, "0"), (690.0, "690"), (-12.3456, "-12.346")],
)
def test_fmt(value: float, expected: str) -> None:
    assert fmt(value) == expected


def test_create_sets_size_and_padding_group() -> None:
    builder = SvgBuilder.create(800, 420, origin=(20, 10), stylesheet=".a { fill: red; }")
    root = ET.fromstring(builder.tostring())
    assert root.get("width") == "800px"
    assert root.get("height") == "420px"
    groups = [child for child in root if local_name(child.tag) == "g"]
    assert groups[0].get("transform") == "translate(20,10)"
    styles = [el for el in root.iter() if local_name(el.tag) == "style"]
    assert styles and ".a { fill: red; }" in styles[0].text


def test_strip_foreign_drops_editor_metadata() -> None:
    document = ET.fromstring(
        '<svg xmlns="http://www.w3.org/2000/svg" '
        'xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape" '
        'width="10" height="5" inkscape:version="1.0">'
        '<inkscape:grid/><rect width="1" height="1"/></svg>'
    )
    clean = strip_foreign(document)
    assert clean.tag == "svg"
    assert set(clean.attrib) == {"width", "height"}
    assert [child.tag for child in clean] == ["rect"]


def test_embed_svg_stretches_document() -> None:
    builder = SvgBuilder.create(800, 500)
    document = ET.parse(BASE_MAP).getroot()
    builder.embed_svg(builder.padding_group, document, 790, 435)
    output = builder.tostring()
    assert "ns0:" not in output
    root = ET.fromstring(output)
    embedded = [el for el in root.iter() if local_name(el.tag) == "svg"][1]
    assert embedded.get("viewBox") == "0 0 1000 430"
    assert embedded.get("width") == "790"
    assert embedded.get("height") == "435"
    assert embedded.get("preserveAspectRatio") == "none"
    assert embedded.get("version") is None
    assert any(local_name(el.tag) == "polygon" for el in embedded.iter())


def test_save_creates_parent_directories(tmp_path: Path) -> None:
    builder = SvgBuilder.create(10, 10)
    target = tmp_path / "nested" / "out.svg"
    builder.save(target)
    assert target.read_text().startswith("<?xml")
