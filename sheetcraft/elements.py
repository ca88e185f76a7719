"""Low-level style elements of a spreadsheet styles part and their XML form."""

from __future__ import annotations

from dataclasses import dataclass, field

INDEXED_COLORS: tuple[str, ...] = (
    "FF000000", "FFFFFFFF", "FFFF0000", "FF00FF00", "FF0000FF", "FFFFFF00",
    "FFFF00FF", "FF00FFFF", "FF000000", "FFFFFFFF", "FFFF0000", "FF00FF00",
    "FF0000FF", "FFFFFF00", "FFFF00FF", "FF00FFFF", "FF800000", "FF008000",
    "FF000080", "FF808000", "FF800080", "FF008080", "FFC0C0C0", "FF808080",
    "FF9999FF", "FF993366", "FFFFFFCC", "FFCCFFFF", "FF660066", "FFFF8080",
    "FF0066CC", "FFCCCCFF", "FF000080", "FFFF00FF", "FFFFFF00", "FF00FFFF",
    "FF800080", "FF800000", "FF008080", "FF0000FF", "FF00CCFF", "FFCCFFFF",
    "FFCCFFCC", "FFFFFF99", "FF99CCFF", "FFFF99CC", "FFCC99FF", "FFFFCC99",
    "FF3366FF", "FF33CCCC", "FF99CC00", "FFFFCC00", "FFFF9900", "FFFF6600",
    "FF666699", "FF969696", "FF003366", "FF339966", "FF003300", "FF333300",
    "FF993300", "FF993366", "FF333399", "FF333333",
)

_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


def _is_xml_char(ch: str) -> bool:
    code = ord(ch)
    return (
        code in (0x09, 0x0A, 0x0D)
        or 0x20 <= code <= 0xD7FF
        or 0xE000 <= code <= 0xFFFD
        or 0x10000 <= code <= 0x10FFFF
    )


def escape_text(text: str) -> str:
    """Escape text for use in XML, replacing characters XML cannot carry."""
    return "".join(
        _ESCAPES.get(ch, ch) if _is_xml_char(ch) else "\uFFFD" for ch in text
    )


@dataclass
class NumFmt:
    """A custom number format: its id and format code."""

    num_fmt_id: int = 0
    format_code: str = ""

    def marshal(self) -> str:
        return (
            f'<numFmt numFmtId="{self.num_fmt_id}" '
            f'formatCode="{escape_text(self.format_code)}"/>'
        )


@dataclass
class NumFmts:
    """The collection of custom number formats."""

    count: int = 0
    num_fmt: list[NumFmt] = field(default_factory=list)

    def marshal(self) -> str:
        if self.count <= 0:
            return ""
        body = "".join(num_fmt.marshal() for num_fmt in self.num_fmt)
        return f'<numFmts count="{self.count}">{body}</numFmts>'


@dataclass
class Val:
    """An element carrying a single string value."""

    val: str = ""

    def equals(self, other: Val) -> bool:
        return self.val == other.val


@dataclass
class Color:
    """A colour given as RGB, theme index with tint, or palette index."""

    rgb: str = ""
    theme: int | None = None
    tint: float = 0.0
    indexed: int | None = None

    def equals(self, other: Color) -> bool:
        """Colours are considered equal when their RGB values match."""
        return self.rgb == other.rgb


@dataclass
class PatternFill:
    pattern_type: str = ""
    fg_color: Color = field(default_factory=Color)
    bg_color: Color = field(default_factory=Color)

    def equals(self, other: PatternFill) -> bool:
        return (
            self.pattern_type == other.pattern_type
            and self.fg_color.equals(other.fg_color)
            and self.bg_color.equals(other.bg_color)
        )

    def marshal(self) -> str:
        parts = []
        if self.fg_color.rgb:
            parts.append(f'<fgColor rgb="{self.fg_color.rgb}"/>')
        if self.bg_color.rgb:
            parts.append(f'<bgColor rgb="{self.bg_color.rgb}"/>')
        head = f'<patternFill patternType="{self.pattern_type}"'
        if not parts:
            return head + "/>"
        return head + ">" + "".join(parts) + "</patternFill>"


@dataclass
class Fill:
    pattern_fill: PatternFill = field(default_factory=PatternFill)

    def equals(self, other: Fill) -> bool:
        return self.pattern_fill.equals(other.pattern_fill)

    def marshal(self) -> str:
        """Return the fill element, or an empty string when it has no pattern."""
        if not self.pattern_fill.pattern_type:
            return ""
        return f"<fill>{self.pattern_fill.marshal()}</fill>"


@dataclass
class Fills:
    count: int = 0
    fill: list[Fill] = field(default_factory=list)

    def add_fill(self, fill: Fill) -> None:
        self.fill.append(fill)
        self.count += 1

    def marshal(self, output_map: dict[int, int]) -> str:
        """Return the fills element; output_map receives stored -> emitted positions."""
        parts = []
        for index, fill in enumerate(self.fill):
            xml = fill.marshal()
            if xml:
                output_map[index] = len(parts)
                parts.append(xml)
        if not parts:
            return ""
        return f'<fills count="{len(parts)}">{"".join(parts)}</fills>'


@dataclass
class Line:
    style: str = ""
    color: Color = field(default_factory=Color)

    def equals(self, other: Line) -> bool:
        return self.style == other.style and self.color.equals(other.color)

    def marshal(self, name: str) -> str:
        if not self.style:
            return f"<{name}/>"
        color = f'<color rgb="{self.color.rgb}"/>' if self.color.rgb else ""
        return f'<{name} style="{self.style}">{color}</{name}>'


@dataclass
class Border:
    left: Line = field(default_factory=Line)
    right: Line = field(default_factory=Line)
    top: Line = field(default_factory=Line)
    bottom: Line = field(default_factory=Line)

    def equals(self, other: Border) -> bool:
        return (
            self.left.equals(other.left)
            and self.right.equals(other.right)
            and self.top.equals(other.top)
            and self.bottom.equals(other.bottom)
        )

    def marshal(self) -> str:
        # Empty sides are always written: Excel needs the full set of elements.
        return (
            "<border>"
            + self.left.marshal("left")
            + self.right.marshal("right")
            + self.top.marshal("top")
            + self.bottom.marshal("bottom")
            + "</border>"
        )


@dataclass
class Borders:
    count: int = 0
    border: list[Border] = field(default_factory=list)

    def add_border(self, border: Border) -> None:
        self.border.append(border)
        self.count += 1

    def marshal(self, output_map: dict[int, int]) -> str:
        """Return the borders element; output_map receives stored -> emitted positions."""
        parts = []
        for index, border in enumerate(self.border):
            xml = border.marshal()
            if xml:
                output_map[index] = len(parts)
                parts.append(xml)
        if not parts:
            return ""
        return f'<borders count="{len(parts)}">{"".join(parts)}</borders>'


@dataclass
class Font:
    sz: Val = field(default_factory=Val)
    name: Val = field(default_factory=Val)
    family: Val = field(default_factory=Val)
    charset: Val = field(default_factory=Val)
    color: Color = field(default_factory=Color)
    b: Val | None = None
    i: Val | None = None
    u: Val | None = None
    scheme: Val | None = None
    strike: Val | None = None

    def equals(self, other: Font) -> bool:
        if (self.b is None) != (other.b is None):
            return False
        if (self.i is None) != (other.i is None):
            return False
        if (self.u is None) != (other.u is None):
            return False
        return (
            self.sz.equals(other.sz)
            and self.name.equals(other.name)
            and self.family.equals(other.family)
            and self.charset.equals(other.charset)
            and self.color.equals(other.color)
        )

    def marshal(self) -> str:
        parts = ["<font>"]
        if self.sz.val:
            parts.append(f'<sz val="{self.sz.val}"/>')
        if self.name.val:
            parts.append(f'<name val="{self.name.val}"/>')
        if self.family.val:
            parts.append(f'<family val="{self.family.val}"/>')
        if self.charset.val:
            parts.append(f'<charset val="{self.charset.val}"/>')
        if self.color.rgb:
            parts.append(f'<color rgb="{self.color.rgb}"/>')
        if self.color.theme is not None:
            parts.append(f'<color theme="{self.color.theme}" />')
        if self.scheme is not None and self.scheme.val:
            parts.append(f'<scheme val="{self.scheme.val}"/>')
        if self.b is not None:
            parts.append("<b/>")
        if self.i is not None:
            parts.append("<i/>")
        if self.u is not None:
            parts.append("<u/>")
        if self.strike is not None:
            parts.append("<strike/>")
        parts.append("</font>")
        return "".join(parts)


@dataclass
class Fonts:
    count: int = 0
    font: list[Font] = field(default_factory=list)

    def add_font(self, font: Font) -> None:
        self.font.append(font)
        self.count += 1

    def marshal(self, output_map: dict[int, int]) -> str:
        """Return the fonts element; output_map receives stored -> emitted positions."""
        parts = []
        for index, font in enumerate(self.font):
            xml = font.marshal()
            if xml:
                output_map[index] = len(parts)
                parts.append(xml)
        if not parts:
            return ""
        return f'<fonts count="{self.count}">{"".join(parts)}</fonts>'


@dataclass
class RgbColor:
    rgb: str = ""


@dataclass
class Colors:
    """The colours section: a custom indexed palette and recently used colours."""

    indexed_colors: list[RgbColor] | None = None
    mru_colors: list[Color] | None = None

    def indexed_color(self, index: int) -> str:
        """Return the RGB of a 1-based palette index."""
        if index < 1:
            raise IndexError(f"indexed colour out of range: {index}")
        if self.indexed_colors is not None:
            return self.indexed_colors[index - 1].rgb
        return INDEXED_COLORS[index - 1]