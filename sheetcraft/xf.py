"""Cell formatting records (xf), their alignment and named cell styles."""

from __future__ import annotations

from dataclasses import dataclass, field

from sheetcraft.elements import escape_text


@dataclass
class Alignment:
    """Alignment settings stored inside a formatting record."""

    horizontal: str = ""
    indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False

    def equals(self, other: Alignment) -> bool:
        return (
            self.horizontal == other.horizontal
            and self.indent == other.indent
            and self.shrink_to_fit == other.shrink_to_fit
            and self.text_rotation == other.text_rotation
            and self.vertical == other.vertical
            and self.wrap_text == other.wrap_text
        )

    def marshal(self) -> str:
        """Return the alignment element; empty directions become general/bottom."""
        horizontal = self.horizontal or "general"
        vertical = self.vertical or "bottom"
        return (
            f'<alignment horizontal="{horizontal}" indent="{self.indent}" '
            f'shrinkToFit="{int(bool(self.shrink_to_fit))}" '
            f'textRotation="{self.text_rotation}" vertical="{vertical}" '
            f'wrapText="{int(bool(self.wrap_text))}"/>'
        )


@dataclass
class Xf:
    """A formatting record referring to a font, fill, border and number format."""

    apply_alignment: bool = False
    apply_border: bool = False
    apply_font: bool = False
    apply_fill: bool = False
    apply_number_format: bool = False
    apply_protection: bool = False
    border_id: int = 0
    fill_id: int = 0
    font_id: int = 0
    num_fmt_id: int = 0
    xf_id: int | None = None
    alignment: Alignment = field(default_factory=Alignment)

    def equals(self, other: Xf) -> bool:
        """Compare records; the apply-number-format flag is not considered."""
        return (
            self.apply_alignment == other.apply_alignment
            and self.apply_border == other.apply_border
            and self.apply_font == other.apply_font
            and self.apply_fill == other.apply_fill
            and self.apply_protection == other.apply_protection
            and self.border_id == other.border_id
            and self.fill_id == other.fill_id
            and self.font_id == other.font_id
            and self.num_fmt_id == other.num_fmt_id
            and self.xf_id == other.xf_id
            and self.alignment.equals(other.alignment)
        )

    def marshal(
        self,
        border_map: dict[int, int],
        fill_map: dict[int, int],
        font_map: dict[int, int],
    ) -> str:
        """Return the xf element, translating ids through the emitted-position maps."""
        flags = {
            "applyAlignment": self.apply_alignment,
            "applyBorder": self.apply_border,
            "applyFont": self.apply_font,
            "applyFill": self.apply_fill,
            "applyNumberFormat": self.apply_number_format,
            "applyProtection": self.apply_protection,
        }
        parts = [f'{name}="{int(bool(value))}"' for name, value in flags.items()]
        parts.append(f'borderId="{border_map.get(self.border_id, 0)}"')
        parts.append(f'fillId="{fill_map.get(self.fill_id, 0)}"')
        parts.append(f'fontId="{font_map.get(self.font_id, 0)}"')
        parts.append(f'numFmtId="{self.num_fmt_id}"')
        if self.xf_id is not None:
            parts.append(f'xfId="{self.xf_id}"')
        return "<xf " + " ".join(parts) + ">" + self.alignment.marshal() + "</xf>"


def _marshal_xfs(
    tag: str,
    count: int,
    xfs: list[Xf],
    border_map: dict[int, int],
    fill_map: dict[int, int],
    font_map: dict[int, int],
) -> str:
    if count <= 0:
        return ""
    body = "".join(xf.marshal(border_map, fill_map, font_map) for xf in xfs)
    return f'<{tag} count="{count}">{body}</{tag}>'


@dataclass
class CellStyleXfs:
    """The formatting records of named cell styles."""

    count: int = 0
    xf: list[Xf] = field(default_factory=list)

    def add_xf(self, xf: Xf) -> None:
        self.xf.append(xf)
        self.count += 1

    def marshal(
        self,
        border_map: dict[int, int],
        fill_map: dict[int, int],
        font_map: dict[int, int],
    ) -> str:
        return _marshal_xfs(
            "cellStyleXfs", self.count, self.xf, border_map, fill_map, font_map
        )


@dataclass
class CellXfs:
    """The formatting records referenced by cells."""

    count: int = 0
    xf: list[Xf] = field(default_factory=list)

    def add_xf(self, xf: Xf) -> None:
        self.xf.append(xf)
        self.count += 1

    def marshal(
        self,
        border_map: dict[int, int],
        fill_map: dict[int, int],
        font_map: dict[int, int],
    ) -> str:
        return _marshal_xfs(
            "cellXfs", self.count, self.xf, border_map, fill_map, font_map
        )


@dataclass
class CellStyle:
    """A named cell style."""

    name: str = ""
    xf_id: int = 0
    built_in_id: int | None = None
    custom_built_in: bool | None = None
    hidden: bool | None = None
    i_level: bool | None = None

    def marshal(self) -> str:
        attrs = []
        if self.built_in_id is not None:
            attrs.append(f'builtInId="{self.built_in_id}"')
        optional_flags = {
            "customBuiltIn": self.custom_built_in,
            "hidden": self.hidden,
            "iLevel": self.i_level,
        }
        attrs.extend(
            f'{name}="{str(bool(value)).lower()}"'
            for name, value in optional_flags.items()
            if value is not None
        )
        attrs.append(f'name="{escape_text(self.name)}"')
        attrs.append(f'xfId="{self.xf_id}"')
        return f"<cellStyle {' '.join(attrs)}></cellStyle>"


@dataclass
class CellStyles:
    """The collection of named cell styles."""

    count: int = 0
    cell_style: list[CellStyle] = field(default_factory=list)

    def marshal(self) -> str:
        if self.count <= 0:
            return ""
        body = "".join(style.marshal() for style in self.cell_style)
        return f'<cellStyles count="{self.count}">{body}</cellStyles>'