"""High-level cell styles and their conversion to stored style elements."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal

from sheetcraft import elements
from sheetcraft import xf as xf_records

HELVETICA = "Helvetica"
BASKERVILLE = "Baskerville Old Face"
TIMES_NEW_ROMAN = "Times New Roman"
BODONI = "Bodoni MT"
GILL_SANS = "Gill Sans MT"
COURIER = "Courier"

RGB_LIGHT_GREEN = "FFC6EFCE"
RGB_DARK_GREEN = "FF006100"
RGB_LIGHT_RED = "FFFFC7CE"
RGB_DARK_RED = "FF9C0006"
RGB_WHITE = "FFFFFFFF"
RGB_BLACK = "00000000"

SOLID_CELL_FILL = "solid"


@dataclass
class Border:
    left: str = ""
    left_color: str = ""
    right: str = ""
    right_color: str = ""
    top: str = ""
    top_color: str = ""
    bottom: str = ""
    bottom_color: str = ""


@dataclass
class Fill:
    pattern_type: str = ""
    bg_color: str = ""
    fg_color: str = ""


@dataclass
class Font:
    size: float = 0.0
    name: str = ""
    family: int = 0
    charset: int = 0
    color: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False


@dataclass
class Alignment:
    horizontal: str = ""
    indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False


def _format_float(value: float) -> str:
    """Shortest decimal form without an exponent, e.g. 12.0 -> '12'."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" and value == 0 and math.copysign(1, value) > 0 else text


@dataclass
class Style:
    """The border, fill, font and alignment applied to a cell."""

    border: Border = field(default_factory=Border)
    fill: Fill = field(default_factory=Fill)
    font: Font = field(default_factory=Font)
    apply_border: bool = False
    apply_fill: bool = False
    apply_font: bool = False
    apply_alignment: bool = False
    alignment: Alignment = field(default_factory=Alignment)
    named_style_index: int | None = None

    def make_xlsx_style_elements(
        self,
    ) -> tuple[elements.Font, elements.Fill, elements.Border, xf_records.Xf]:
        """Return the stored font, fill, border and xf records for this style."""
        font = elements.Font(
            sz=elements.Val(_format_float(self.font.size)),
            name=elements.Val(self.font.name),
            family=elements.Val(str(self.font.family)),
            charset=elements.Val(str(self.font.charset)),
            color=elements.Color(rgb=self.font.color),
            b=elements.Val() if self.font.bold else None,
            i=elements.Val() if self.font.italic else None,
            u=elements.Val() if self.font.underline else None,
            strike=elements.Val() if self.font.strike else None,
        )
        fill = elements.Fill(
            pattern_fill=elements.PatternFill(
                pattern_type=self.fill.pattern_type,
                fg_color=elements.Color(rgb=self.fill.fg_color),
                bg_color=elements.Color(rgb=self.fill.bg_color),
            )
        )
        border = elements.Border(
            left=elements.Line(self.border.left, elements.Color(rgb=self.border.left_color)),
            right=elements.Line(self.border.right, elements.Color(rgb=self.border.right_color)),
            top=elements.Line(self.border.top, elements.Color(rgb=self.border.top_color)),
            bottom=elements.Line(
                self.border.bottom, elements.Color(rgb=self.border.bottom_color)
            ),
        )
        cell_xf = xf_records.Xf(
            apply_border=self.apply_border,
            apply_fill=self.apply_fill,
            apply_font=self.apply_font,
            apply_alignment=self.apply_alignment,
            xf_id=self.named_style_index,
        )
        return font, fill, border, cell_xf


@dataclass
class _FontDefaults:
    size: float = 12.0
    name: str = "Verdana"


_font_defaults = _FontDefaults()


def set_default_font(size: float, name: str) -> None:
    """Change the font that default_font() and new_style() use."""
    _font_defaults.size = size
    _font_defaults.name = name


def default_font() -> Font:
    return Font(size=_font_defaults.size, name=_font_defaults.name)


def default_fill() -> Fill:
    return Fill(pattern_type="none")


def default_border() -> Border:
    return Border(left="none", right="none", top="none", bottom="none")


def default_alignment() -> Alignment:
    return Alignment(horizontal="general", vertical="bottom")


def new_style() -> Style:
    """Return a style initialised with the default font, fill, border and alignment."""
    return Style(
        alignment=default_alignment(),
        border=default_border(),
        fill=default_fill(),
        font=default_font(),
    )