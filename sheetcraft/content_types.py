"""The content types part, which maps package parts to their media types."""

from __future__ import annotations

from dataclasses import dataclass, field

from sheetcraft.elements import escape_text

NAMESPACE = "http://schemas.openxmlformats.org/package/2006/content-types"

RELATIONSHIPS_TYPE = "application/vnd.openxmlformats-package.relationships+xml"


@dataclass
class Override:
    """The content type of one named part."""

    part_name: str = ""
    content_type: str = ""

    def _to_xml(self) -> str:
        return (
            f'<Override PartName="{escape_text(self.part_name)}" '
            f'ContentType="{escape_text(self.content_type)}"></Override>'
        )


@dataclass
class Default:
    """The content type of every part with a given extension."""

    extension: str = ""
    content_type: str = ""

    def _to_xml(self) -> str:
        return (
            f'<Default Extension="{escape_text(self.extension)}" '
            f'ContentType="{escape_text(self.content_type)}"></Default>'
        )


@dataclass
class ContentTypes:
    """The list of part overrides and extension defaults of a package."""

    overrides: list[Override] = field(default_factory=list)
    defaults: list[Default] = field(default_factory=list)

    def to_xml(self) -> str:
        """Return the Types element as XML text, without a declaration."""
        body = "".join(o._to_xml() for o in self.overrides) + "".join(
            d._to_xml() for d in self.defaults
        )
        return f'<Types xmlns="{NAMESPACE}">{body}</Types>'


def make_default_content_types() -> ContentTypes:
    """Return the content types of the parts every workbook package contains."""
    return ContentTypes(
        overrides=[
            Override("/_rels/.rels", RELATIONSHIPS_TYPE),
            Override(
                "/docProps/app.xml",
                "application/vnd.openxmlformats-officedocument.extended-properties+xml",
            ),
            Override(
                "/docProps/core.xml",
                "application/vnd.openxmlformats-package.core-properties+xml",
            ),
            Override("/xl/_rels/workbook.xml.rels", RELATIONSHIPS_TYPE),
            Override(
                "/xl/sharedStrings.xml",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sharedStrings+xml",
            ),
            Override(
                "/xl/styles.xml",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.styles+xml",
            ),
            Override(
                "/xl/workbook.xml",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml",
            ),
            Override(
                "/xl/theme/theme1.xml",
                "application/vnd.openxmlformats-officedocument.theme+xml",
            ),
        ],
        defaults=[
            Default("rels", RELATIONSHIPS_TYPE),
            Default("xml", "application/xml"),
        ],
    )