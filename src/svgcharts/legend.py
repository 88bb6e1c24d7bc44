from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlateLegendStyle:
    plate_margin: float = 10
    square_margin: float = 5
    square_width: float = 10
    font_offset: float = 9


@dataclass(frozen=True)
class StackedLegendStyle:
    row_spacing: float = 18
    square_width: float = 10
    circle_radius: float = 5
    text_offset_x: float = 10
    text_offset_y: float = 4


@dataclass(frozen=True)
class LegendRow:
    square_x: float
    square_y: float
    text_x: float
    text_y: float


@dataclass(frozen=True)
class LegendArea:
    plate_width: float
    plate_height: float
    plate_margin: float
    square_x: float
    square_width: float
    square_margin: float
    rows: list[LegendRow]


def plate_legend(max_label_width: float, rows: int, style: PlateLegendStyle) -> LegendArea:
    """Size a legend plate to the widest label and lay out its rows.

    Each row is a colour square at the right edge of the plate with its label
    ending one square margin to the left of it.
    """
    plate_width = (
        style.plate_margin + max_label_width + 2 * style.square_margin + style.square_width
    )
    plate_height = (rows + 1) * style.square_margin + rows * style.square_width
    square_x = plate_width - style.square_width - style.square_margin
    layout = [
        LegendRow(
            square_x=square_x,
            square_y=(row + 1) * style.square_margin + row * style.square_width,
            text_x=square_x - style.square_margin,
            text_y=(row + 1) * style.square_margin + style.font_offset + row * style.square_width,
        )
        for row in range(rows)
    ]
    return LegendArea(
        plate_width=plate_width,
        plate_height=plate_height,
        plate_margin=style.plate_margin,
        square_x=square_x,
        square_width=style.square_width,
        square_margin=style.square_margin,
        rows=layout,
    )


def stacked_legend(rows: int, style: StackedLegendStyle) -> list[LegendRow]:
    """Rows on a fixed spacing; markers are centred on x=0 of each row."""
    return [
        LegendRow(
            square_x=-style.square_width / 2,
            square_y=-style.square_width / 2 + row * style.row_spacing,
            text_x=style.text_offset_x,
            text_y=style.text_offset_y + row * style.row_spacing,
        )
        for row in range(rows)
    ]
