"""Theme colour schemes and the resolution of theme colour references."""

from __future__ import annotations

import colorsys
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

_SCHEME_ORDER = (
    "lt1",
    "dk1",
    "lt2",
    "dk2",
    "accent1",
    "accent2",
    "accent3",
    "accent4",
    "accent5",
    "accent6",
    "hlink",
    "folHlink",
)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    return next((c for c in element if _local(c.tag) == name), None)


@dataclass
class SysClr:
    """A system colour with the RGB value it last had."""

    val: str = ""
    last_clr: str = ""


@dataclass
class SrgbClr:
    """An explicit RGB colour."""

    val: str = ""


@dataclass
class ClrSchemeEl:
    """One entry of a colour scheme, such as dk1 or accent3."""

    name: str = ""
    sys_clr: SysClr | None = None
    srgb_clr: SrgbClr | None = None

    @property
    def rgb(self) -> str:
        if self.sys_clr is not None:
            return self.sys_clr.last_clr
        if self.srgb_clr is not None:
            return self.srgb_clr.val
        raise ValueError(f"colour scheme entry {self.name!r} has no colour")


def parse_color_scheme(data: str | bytes) -> list[ClrSchemeEl]:
    """Return the colour scheme entries of a theme document, in document order."""
    root = ET.fromstring(data.lstrip())
    theme_elements = _child(root, "themeElements")
    if theme_elements is None:
        return []
    scheme = _child(theme_elements, "clrScheme")
    if scheme is None:
        return []
    entries = []
    for element in scheme:
        entry = ClrSchemeEl(name=_local(element.tag))
        sys_clr = _child(element, "sysClr")
        if sys_clr is not None:
            entry.sys_clr = SysClr(
                val=sys_clr.get("val", ""), last_clr=sys_clr.get("lastClr", "")
            )
        srgb_clr = _child(element, "srgbClr")
        if srgb_clr is not None:
            entry.srgb_clr = SrgbClr(val=srgb_clr.get("val", ""))
        entries.append(entry)
    return entries


def _hex_byte(text: str) -> int:
    try:
        return int(text, 16)
    except ValueError:
        return 0


@dataclass
class Theme:
    """The twelve theme colours, in the order cells refer to them."""

    colors: list[str] = field(default_factory=list)

    @classmethod
    def from_scheme(cls, elements: list[ClrSchemeEl]) -> Theme:
        by_name = {entry.name: entry.rgb for entry in elements}
        return cls([by_name.get(name, "") for name in _SCHEME_ORDER])

    @classmethod
    def from_xml(cls, data: str | bytes) -> Theme:
        return cls.from_scheme(parse_color_scheme(data))

    def theme_color(self, index: int, tint: float) -> str:
        """Return the ARGB value of a theme colour, lightened or darkened by tint."""
        if not 0 <= index < len(self.colors):
            raise IndexError(f"theme colour index out of range: {index}")
        base = self.colors[index]
        if tint == 0:
            return "FF" + base
        red, green, blue = (_hex_byte(base[i : i + 2]) for i in (0, 2, 4))
        hue, lightness, saturation = colorsys.rgb_to_hls(
            red / 255, green / 255, blue / 255
        )
        if tint < 0:
            lightness *= 1 + tint
        else:
            lightness = lightness * (1 - tint) + (1 - (1 - tint))
        channels = colorsys.hls_to_rgb(hue, lightness, saturation)
        out = [min(255, max(0, round(c * 255))) for c in channels]
        return "FF{:02X}{:02X}{:02X}".format(*out)