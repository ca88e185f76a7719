"""The shared strings part: plain and rich-text string items."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from sheetcraft.elements import Color, Val, escape_text

_NAMESPACE = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"

_TRUE_WORDS = frozenset({"true", "1"})
_FALSE_WORDS = frozenset({"false", "0"})

_BOOL_PROPS = ("b", "i", "strike", "outline", "shadow", "condense", "extend")


def need_preserve(text: str) -> bool:
    """Tell whether a text needs xml:space="preserve" to keep its whitespace."""
    if not text:
        return False
    for ch in (text[0], text[-1]):
        code = ord(ch)
        if code <= 32 and code not in (9, 13):
            return True
    return "\n" in text


def parse_bool_prop(value: str | None) -> bool:
    """Read the val attribute of a boolean property; a missing value means true."""
    if value is None or value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise ValueError(f'"{value}" is not a valid boolean value')


def _escape_chardata(text: str) -> str:
    # Line feeds stay literal in character data; other specials are escaped.
    return "\n".join(escape_text(part) for part in text.split("\n"))


def text_element(text: str) -> str:
    """Return a t element holding text, marked to preserve whitespace if needed."""
    attr = ' xml:space="preserve"' if need_preserve(text) else ""
    return f"<t{attr}>{_escape_chardata(text)}</t>"


def _format_number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    return next((child for child in element if _local(child.tag) == name), None)


def _parse_int(text: str | None) -> int:
    text = (text or "").strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"invalid integer value: {text!r}") from None


def _parse_float(text: str | None) -> float:
    text = (text or "").strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"invalid number value: {text!r}") from None


def _val_element(name: str, val: str) -> str:
    attr = f' val="{escape_text(val)}"' if val else ""
    return f"<{name}{attr}></{name}>"


def _color_element(color: Color) -> str:
    attrs = []
    if color.rgb:
        attrs.append(f'rgb="{escape_text(color.rgb)}"')
    if color.theme is not None:
        attrs.append(f'theme="{color.theme}"')
    if color.tint:
        attrs.append(f'tint="{_format_number(color.tint)}"')
    if color.indexed is not None:
        attrs.append(f'indexed="{color.indexed}"')
    joined = "".join(" " + attr for attr in attrs)
    return f"<color{joined}></color>"


def _parse_color(element: ET.Element) -> Color:
    theme = element.get("theme")
    indexed = element.get("indexed")
    return Color(
        rgb=element.get("rgb", ""),
        theme=_parse_int(theme) if theme is not None else None,
        tint=_parse_float(element.get("tint")),
        indexed=_parse_int(indexed) if indexed is not None else None,
    )


@dataclass
class RunProperties:
    """Formatting of one run of rich text."""

    r_font: Val | None = None
    charset: int | None = None
    family: int | None = None
    b: bool = False
    i: bool = False
    strike: bool = False
    outline: bool = False
    shadow: bool = False
    condense: bool = False
    extend: bool = False
    color: Color | None = None
    sz: float | None = None
    u: Val | None = None
    vert_align: Val | None = None
    scheme: Val | None = None

    def to_xml(self) -> str:
        parts = ["<rPr>"]
        if self.r_font is not None:
            parts.append(_val_element("rFont", self.r_font.val))
        if self.charset is not None:
            parts.append(f'<charset val="{self.charset}"></charset>')
        if self.family is not None:
            parts.append(f'<family val="{self.family}"></family>')
        for name in _BOOL_PROPS:
            if getattr(self, name):
                parts.append(f"<{name}></{name}>")
        if self.color is not None:
            parts.append(_color_element(self.color))
        if self.sz is not None:
            parts.append(f'<sz val="{_format_number(self.sz)}"></sz>')
        if self.u is not None:
            parts.append(_val_element("u", self.u.val))
        if self.vert_align is not None:
            parts.append(_val_element("vertAlign", self.vert_align.val))
        if self.scheme is not None:
            parts.append(_val_element("scheme", self.scheme.val))
        parts.append("</rPr>")
        return "".join(parts)

    @classmethod
    def _from_element(cls, element: ET.Element) -> RunProperties:
        props = cls()
        for child in element:
            name = _local(child.tag)
            if name == "rFont":
                props.r_font = Val(child.get("val", ""))
            elif name == "charset":
                props.charset = _parse_int(child.get("val"))
            elif name == "family":
                props.family = _parse_int(child.get("val"))
            elif name in _BOOL_PROPS:
                setattr(props, name, parse_bool_prop(child.get("val")))
            elif name == "color":
                props.color = _parse_color(child)
            elif name == "sz":
                props.sz = _parse_float(child.get("val"))
            elif name == "u":
                props.u = Val(child.get("val", ""))
            elif name == "vertAlign":
                props.vert_align = Val(child.get("val", ""))
            elif name == "scheme":
                props.scheme = Val(child.get("val", ""))
        return props


@dataclass
class RichRun:
    """A run of rich text with optional formatting."""

    r_pr: RunProperties | None = None
    t: str = ""

    def to_xml(self) -> str:
        props = self.r_pr.to_xml() if self.r_pr is not None else ""
        return f"<r>{props}{text_element(self.t)}</r>"


@dataclass
class StringItem:
    """One shared string: plain text, rich text runs, or both."""

    t: str | None = None
    r: list[RichRun] | None = None

    def to_xml(self) -> str:
        parts = ["<si>"]
        if self.t is not None:
            parts.append(text_element(self.t))
        parts.extend(run.to_xml() for run in self.r or ())
        parts.append("</si>")
        return "".join(parts)

    @classmethod
    def _from_element(cls, element: ET.Element) -> StringItem:
        t_element = _child(element, "t")
        runs = [
            RichRun(
                r_pr=(
                    RunProperties._from_element(props)
                    if (props := _child(run, "rPr")) is not None
                    else None
                ),
                t=(text.text or "") if (text := _child(run, "t")) is not None else "",
            )
            for run in _children(element, "r")
        ]
        return cls(
            t=(t_element.text or "") if t_element is not None else None,
            r=runs or None,
        )


@dataclass
class SharedStrings:
    """The table of strings shared by all cells of a workbook."""

    count: int = 0
    unique_count: int = 0
    items: list[StringItem] = field(default_factory=list)

    @classmethod
    def from_xml(cls, data: str | bytes) -> SharedStrings:
        """Parse a shared strings document."""
        root = ET.fromstring(data.lstrip())
        if _local(root.tag) != "sst":
            raise ValueError(f"expected an sst element, found {_local(root.tag)!r}")
        return cls(
            count=_parse_int(root.get("count")),
            unique_count=_parse_int(root.get("uniqueCount")),
            items=[StringItem._from_element(si) for si in _children(root, "si")],
        )