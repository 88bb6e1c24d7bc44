from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping

from PIL import ImageFont

# measure(text, style_class) -> rendered width in pixels
TextMeasurer = Callable[[str, str], float]

DEFAULT_FONT_CANDIDATES = (
    "DejaVuSans.ttf",
    "Arial.ttf",
    "LiberationSans-Regular.ttf",
)


class PillowTextMeasurer:
    """Measures label widths with Pillow instead of a live rendering surface."""

    def __init__(
        self,
        font_path: Path | str | None = None,
        font_size: float = 12,
        class_sizes: Mapping[str, float] | None = None,
    ) -> None:
        self.font_path = str(font_path) if font_path else None
        self.font_size = float(font_size)
        self.class_sizes = dict(class_sizes or {})
        self._fonts: dict[float, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def _load_font(self, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        candidates = [self.font_path] if self.font_path else list(DEFAULT_FONT_CANDIDATES)
        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                continue
        return ImageFont.load_default(size=size)

    def font_for(self, style_class: str = "") -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        size = float(self.class_sizes.get(style_class, self.font_size))
        font = self._fonts.get(size)
        if font is None:
            font = self._load_font(size)
            self._fonts[size] = font
        return font

    def __call__(self, text: str, style_class: str = "") -> float:
        if not text:
            return 0.0
        return float(self.font_for(style_class).getlength(text))
