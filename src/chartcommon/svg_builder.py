from __future__ import annotations

import copy
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

import svgwrite

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

DEFAULT_FONT_FAMILY = "Arial, sans-serif"


def fmt(value: float) -> str:
    """Compact, deterministic number formatting for hand-built path data."""
    rounded = round(float(value), 3)
    if rounded == 0:
        rounded = 0.0
    return f"{rounded:.3f}".rstrip("0").rstrip(".")


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _namespace(tag: str) -> str | None:
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None


def strip_foreign(element: ET.Element) -> ET.Element:
    """Copy an SVG subtree with plain tag names, dropping non-SVG nodes and attributes."""
    clean = ET.Element(local_name(element.tag))
    for key, value in element.attrib.items():
        namespace = _namespace(key)
        if namespace is None:
            clean.set(key, value)
        elif namespace == XLINK_NS:
            clean.set(f"xlink:{local_name(key)}", value)
    clean.text = element.text
    clean.tail = element.tail
    for child in element:
        if not isinstance(child.tag, str):
            continue
        if _namespace(child.tag) not in {None, SVG_NS}:
            continue
        clean.append(strip_foreign(child))
    return clean


class ImportedElement:
    """Parsed XML subtree that svgwrite containers can hold as a child."""

    def __init__(self, element: ET.Element) -> None:
        self.element = element
        self.elementname = local_name(element.tag)

    def get_xml(self) -> ET.Element:
        return copy.deepcopy(self.element)


@dataclass
class SvgBuilder:
    drawing: svgwrite.Drawing
    padding_group: svgwrite.container.Group
    width: float
    height: float

    @classmethod
    def create(
        cls,
        width: float,
        height: float,
        origin: tuple[float, float] = (0, 0),
        stylesheet: str | None = None,
    ) -> "SvgBuilder":
        drawing = svgwrite.Drawing(
            size=(f"{fmt(width)}px", f"{fmt(height)}px"), profile="full"
        )
        if stylesheet:
            drawing.embed_stylesheet(stylesheet)
        padding_group = drawing.g(
            transform=f"translate({fmt(origin[0])},{fmt(origin[1])})"
        )
        drawing.add(padding_group)
        return cls(
            drawing=drawing,
            padding_group=padding_group,
            width=float(width),
            height=float(height),
        )

    def embed_svg(
        self,
        parent: svgwrite.container.Group,
        document: ET.Element,
        width: float,
        height: float,
    ) -> ImportedElement:
        """Append an external SVG document stretched non-uniformly to width x height.

        The document must carry numeric width/height attributes; they become
        its viewBox.
        """
        clean = strip_foreign(document)
        orig_width = clean.get("width")
        orig_height = clean.get("height")
        clean.set("width", fmt(width))
        clean.set("height", fmt(height))
        clean.set("viewBox", f"0 0 {orig_width} {orig_height}")
        clean.set("preserveAspectRatio", "none")
        for attr in ("x", "y", "version"):
            clean.attrib.pop(attr, None)
        imported = ImportedElement(clean)
        parent.add(imported)
        return imported

    def tostring(self) -> str:
        return self.drawing.tostring()

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.drawing.saveas(str(path))
