"""The styles part of a workbook: stored fonts, fills, borders, formats and records."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from sheetcraft.elements import (
    Border,
    Borders,
    Color,
    Colors,
    Fill,
    Fills,
    Font,
    Fonts,
    Line,
    NumFmt,
    NumFmts,
    PatternFill,
    Val,
)
from sheetcraft.style import Style
from sheetcraft.theme import Theme
from sheetcraft.xf import CellStyles, CellStyleXfs, CellXfs, Xf

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
_NAMESPACE = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"

DEFAULT_THEME = 1

# Built-in number formats all have an id below 164.
BUILTIN_NUM_FMTS_COUNT = 163

BUILTIN_NUM_FMT: dict[int, str] = {
    0: "general",
    1: "0",
    2: "0.00",
    3: "#,##0",
    4: "#,##0.00",
    9: "0%",
    10: "0.00%",
    11: "0.00e+00",
    12: "# ?/?",
    13: "# ??/??",
    14: "mm-dd-yy",
    15: "d-mmm-yy",
    16: "d-mmm",
    17: "mmm-yy",
    18: "h:mm am/pm",
    19: "h:mm:ss am/pm",
    20: "h:mm",
    21: "h:mm:ss",
    22: "m/d/yy h:mm",
    37: "#,##0 ;(#,##0)",
    38: "#,##0 ;[red](#,##0)",
    39: "#,##0.00;(#,##0.00)",
    40: "#,##0.00;[red](#,##0.00)",
    41: '_(* #,##0_);_(* \\(#,##0\\);_(* "-"_);_(@_)',
    42: '_("$"* #,##0_);_("$* \\(#,##0\\);_("$"* "-"_);_(@_)',
    43: '_(* #,##0.00_);_(* \\(#,##0.00\\);_(* "-"??_);_(@_)',
    44: '_("$"* #,##0.00_);_("$"* \\(#,##0.00\\);_("$"* "-"??_);_(@_)',
    45: "mm:ss",
    46: "[h]:mm:ss",
    47: "mmss.0",
    48: "##0.0e+0",
    49: "@",
}

BUILTIN_NUM_FMT_INV: dict[str, int] = {code: id_ for id_, code in BUILTIN_NUM_FMT.items()}

NUM_FMT_COLOR_CODES = (
    "[red]", "[black]", "[green]", "[white]",
    "[blue]", "[magenta]", "[yellow]", "[cyan]",
)


def builtin_number_format(num_fmt_id: int) -> str:
    """Return the code of a built-in number format, or an empty string."""
    return BUILTIN_NUM_FMT.get(num_fmt_id, "")


def _is_general(format_code: str) -> bool:
    return format_code.casefold() == "general"


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _is_set(flag: Val | None) -> bool:
    return flag is not None and flag.val != "0"


@dataclass
class StyleSheet:
    """All stored style definitions of a workbook."""

    theme: Theme | None = None
    fonts: Fonts = field(default_factory=Fonts)
    fills: Fills = field(default_factory=Fills)
    borders: Borders = field(default_factory=Borders)
    colors: Colors | None = None
    cell_styles: CellStyles | None = None
    cell_style_xfs: CellStyleXfs | None = None
    cell_xfs: CellXfs = field(default_factory=CellXfs)
    num_fmts: NumFmts | None = None
    dxfs_count: int = 0
    _style_cache: dict[int, Style] = field(default_factory=dict, init=False, repr=False)
    _num_fmt_ref_table: dict[int, NumFmt] | None = field(
        default=None, init=False, repr=False
    )
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )

    def reset(self) -> None:
        """Replace the contents with the minimal set of definitions Excel expects."""
        self.fonts = Fonts()
        self.fills = Fills()
        self.borders = Borders()
        self.add_font(
            Font(
                sz=Val("11"),
                family=Val("2"),
                color=Color(theme=DEFAULT_THEME),
                name=Val("Arial"),
                scheme=Val("minor"),
            )
        )
        self.add_fill(Fill(PatternFill(pattern_type="none")))
        self.add_fill(Fill(PatternFill(pattern_type="gray125")))
        self.add_border(Border(Line(), Line(), Line(), Line()))
        self.cell_style_xfs = CellStyleXfs(count=1, xf=[Xf()])
        self.cell_xfs = CellXfs(count=1, xf=[Xf()])
        self.num_fmts = NumFmts()
        with self._lock:
            self._num_fmt_ref_table = None

    def populate_style_from_xf(self, style: Style, xf: Xf) -> None:
        """Fill in a style from a formatting record and the definitions it refers to."""
        style.apply_border = xf.apply_border
        style.apply_fill = xf.apply_fill
        style.apply_font = xf.apply_font
        style.apply_alignment = xf.apply_alignment

        if 0 <= xf.border_id < self.borders.count:
            border = self.borders.border[xf.border_id]
            style.border.left = border.left.style
            style.border.left_color = border.left.color.rgb
            style.border.right = border.right.style
            style.border.right_color = border.right.color.rgb
            style.border.top = border.top.style
            style.border.top_color = border.top.color.rgb
            style.border.bottom = border.bottom.style
            style.border.bottom_color = border.bottom.color.rgb

        if 0 <= xf.fill_id < self.fills.count:
            pattern = self.fills.fill[xf.fill_id].pattern_fill
            style.fill.pattern_type = pattern.pattern_type
            style.fill.fg_color = self.argb_value(pattern.fg_color)
            style.fill.bg_color = self.argb_value(pattern.bg_color)

        if 0 <= xf.font_id < self.fonts.count:
            font = self.fonts.font[xf.font_id]
            style.font.size = _parse_float(font.sz.val)
            style.font.name = font.name.val
            style.font.family = _parse_int(font.family.val)
            style.font.charset = _parse_int(font.charset.val)
            style.font.color = self.argb_value(font.color)
            if _is_set(font.b):
                style.font.bold = True
            if _is_set(font.i):
                style.font.italic = True
            if _is_set(font.u):
                style.font.underline = True
            if _is_set(font.strike):
                style.font.strike = True

        alignment = xf.alignment
        if alignment.horizontal:
            style.alignment.horizontal = alignment.horizontal
        if alignment.vertical:
            style.alignment.vertical = alignment.vertical
        style.alignment.shrink_to_fit = alignment.shrink_to_fit
        style.alignment.wrap_text = alignment.wrap_text
        style.alignment.text_rotation = alignment.text_rotation
        if alignment.indent != 0:
            style.alignment.indent = alignment.indent

    def get_style(self, style_index: int) -> Style:
        """Return the style of a cell formatting record; valid indexes are cached."""
        with self._lock:
            cached = self._style_cache.get(style_index)
        if cached is not None:
            return cached

        style = Style()
        count = self.cell_xfs.count
        if 0 <= style_index < count:
            xf = self.cell_xfs.xf[style_index]
            self.populate_style_from_xf(style, xf)
            named = self.cell_style_xfs
            if xf.xf_id is not None and named is not None and 0 <= xf.xf_id < len(named.xf):
                style.named_style_index = xf.xf_id
                named_xf = named.xf[xf.xf_id]
                style.apply_border = style.apply_border or named_xf.apply_border
                style.apply_fill = style.apply_fill or named_xf.apply_fill
                style.apply_font = style.apply_font or named_xf.apply_font
                style.apply_alignment = style.apply_alignment or named_xf.apply_alignment
            if xf.alignment.vertical:
                style.alignment.vertical = xf.alignment.vertical
            style.alignment.wrap_text = xf.alignment.wrap_text
            style.alignment.text_rotation = xf.alignment.text_rotation
            with self._lock:
                self._style_cache[style_index] = style
        return style

    def argb_value(self, color: Color) -> str:
        """Resolve a colour to ARGB through the theme or the indexed palette."""
        if color.theme is not None and self.theme is not None:
            return self.theme.theme_color(color.theme, color.tint)
        if color.indexed is not None and self.colors is not None:
            return self.colors.indexed_color(color.indexed)
        return color.rgb

    def number_format(self, style_index: int) -> str:
        """Return the number format code used by a cell formatting record."""
        code = "general"
        if 0 <= style_index < self.cell_xfs.count and self.cell_xfs.xf:
            xf = self.cell_xfs.xf[style_index]
            builtin = builtin_number_format(xf.num_fmt_id)
            if builtin:
                code = builtin
            else:
                with self._lock:
                    table = self._num_fmt_ref_table
                    if table is not None:
                        code = table.get(xf.num_fmt_id, NumFmt()).format_code
        return code

    def add_font(self, font: Font) -> int:
        """Store a font unless an equal one exists; return its index."""
        if not font.name.val:
            return 0
        for index, existing in enumerate(self.fonts.font):
            if existing.equals(font):
                return index
        self.fonts.font.append(font)
        index = self.fonts.count
        self.fonts.count += 1
        return index

    def add_fill(self, fill: Fill) -> int:
        for index, existing in enumerate(self.fills.fill):
            if existing.equals(fill):
                return index
        self.fills.fill.append(fill)
        index = self.fills.count
        self.fills.count += 1
        return index

    def add_border(self, border: Border) -> int:
        for index, existing in enumerate(self.borders.border):
            if existing.equals(border):
                return index
        self.borders.border.append(border)
        index = self.borders.count
        self.borders.count += 1
        return index

    def add_cell_style_xf(self, xf: Xf) -> int:
        if self.cell_style_xfs is None:
            self.cell_style_xfs = CellStyleXfs()
        for index, existing in enumerate(self.cell_style_xfs.xf):
            if existing.equals(xf):
                return index
        self.cell_style_xfs.xf.append(xf)
        index = self.cell_style_xfs.count
        self.cell_style_xfs.count += 1
        return index

    def add_cell_xf(self, xf: Xf) -> int:
        for index, existing in enumerate(self.cell_xfs.xf):
            if existing.equals(xf):
                return index
        self.cell_xfs.xf.append(xf)
        index = self.cell_xfs.count
        self.cell_xfs.count += 1
        return index

    def new_num_fmt(self, format_code: str) -> NumFmt:
        """Return the number format for a code, registering a custom id if needed."""
        if _is_general(format_code):
            return NumFmt(0, "general")
        builtin_id = BUILTIN_NUM_FMT_INV.get(format_code)
        if builtin_id is not None:
            return NumFmt(builtin_id, format_code)
        if self.num_fmts is not None:
            for num_fmt in self.num_fmts.num_fmt:
                if num_fmt.format_code == format_code:
                    return num_fmt
        num_fmt_id = BUILTIN_NUM_FMTS_COUNT + 1
        with self._lock:
            table = self._num_fmt_ref_table or {}
            while num_fmt_id in table:
                num_fmt_id += 1
        self.add_num_fmt(NumFmt(num_fmt_id, format_code))
        return NumFmt(num_fmt_id, format_code)

    def add_num_fmt(self, num_fmt: NumFmt) -> None:
        """Register a custom number format; built-in ids and known ids are ignored."""
        if num_fmt.num_fmt_id <= BUILTIN_NUM_FMTS_COUNT:
            return
        with self._lock:
            if self._num_fmt_ref_table is None:
                self._num_fmt_ref_table = {}
            if num_fmt.num_fmt_id in self._num_fmt_ref_table:
                return
            if self.num_fmts is None:
                self.num_fmts = NumFmts()
            self.num_fmts.num_fmt.append(num_fmt)
            self._num_fmt_ref_table[num_fmt.num_fmt_id] = num_fmt
            self.num_fmts.count += 1

    def marshal(self) -> str:
        """Return the styles document as XML text."""
        parts = [XML_HEADER, f'<styleSheet xmlns="{_NAMESPACE}">']
        if self.num_fmts is not None:
            parts.append(self.num_fmts.marshal())
        font_map: dict[int, int] = {}
        parts.append(self.fonts.marshal(font_map))
        fill_map: dict[int, int] = {}
        parts.append(self.fills.marshal(fill_map))
        border_map: dict[int, int] = {}
        parts.append(self.borders.marshal(border_map))
        if self.cell_style_xfs is not None:
            parts.append(self.cell_style_xfs.marshal(border_map, fill_map, font_map))
        parts.append(self.cell_xfs.marshal(border_map, fill_map, font_map))
        if self.cell_styles is not None:
            parts.append(self.cell_styles.marshal())
        parts.append("</styleSheet>")
        return "".join(parts)