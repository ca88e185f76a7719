"""The workbook part: sheet list, views, defined names and calculation settings."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TypeVar

from sheetcraft.elements import escape_text

NAMESPACE = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
RELATIONSHIPS_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
)

SHEET_STATE_VISIBLE = "visible"
SHEET_STATE_HIDDEN = "hidden"
SHEET_STATE_VERY_HIDDEN = "veryHidden"

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_T = TypeVar("_T")


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    return next((c for c in element if _local(c.tag) == name), None)


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [c for c in element if _local(c.tag) == name]


def _int(element: ET.Element, name: str) -> int:
    text = element.get(name, "").strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"invalid integer for {name}: {text!r}") from None


def _float(element: ET.Element, name: str) -> float:
    text = element.get(name, "").strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"invalid number for {name}: {text!r}") from None


def _bool(element: ET.Element, name: str) -> bool:
    text = element.get(name, "").strip()
    if not text:
        return False
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean for {name}: {text!r}")


def _format_number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _optional(name: str, value: object) -> tuple[str, str] | None:
    """Return an attribute pair unless the value is empty, zero or false."""
    if not value:
        return None
    if isinstance(value, bool):
        return name, "true"
    if isinstance(value, float):
        return name, _format_number(value)
    return name, str(value)


def _element(tag: str, attrs: list[tuple[str, str] | None], body: str = "") -> str:
    text = "".join(
        f' {name}="{escape_text(value)}"' for pair in attrs if pair for name, value in [pair]
    )
    return f"<{tag}{text}>{body}</{tag}>"


@dataclass
class FileVersion:
    app_name: str = ""
    last_edited: str = ""
    lowest_edited: str = ""
    rup_build: str = ""

    def _to_xml(self) -> str:
        return _element(
            "fileVersion",
            [
                _optional("appName", self.app_name),
                _optional("lastEdited", self.last_edited),
                _optional("lowestEdited", self.lowest_edited),
                _optional("rupBuild", self.rup_build),
            ],
        )

    @classmethod
    def _from_element(cls, element: ET.Element) -> FileVersion:
        return cls(
            app_name=element.get("appName", ""),
            last_edited=element.get("lastEdited", ""),
            lowest_edited=element.get("lowestEdited", ""),
            rup_build=element.get("rupBuild", ""),
        )


@dataclass
class WorkbookPr:
    default_theme_version: str = ""
    backup_file: bool = False
    show_objects: str = ""
    date1904: bool = False

    def _to_xml(self) -> str:
        return _element(
            "workbookPr",
            [
                _optional("defaultThemeVersion", self.default_theme_version),
                _optional("backupFile", self.backup_file),
                _optional("showObjects", self.show_objects),
                ("date1904", "true" if self.date1904 else "false"),
            ],
        )

    @classmethod
    def _from_element(cls, element: ET.Element) -> WorkbookPr:
        return cls(
            default_theme_version=element.get("defaultThemeVersion", ""),
            backup_file=_bool(element, "backupFile"),
            show_objects=element.get("showObjects", ""),
            date1904=_bool(element, "date1904"),
        )


@dataclass
class WorkbookView:
    active_tab: int = 0
    first_sheet: int = 0
    show_horizontal_scroll: bool = False
    show_vertical_scroll: bool = False
    show_sheet_tabs: bool = False
    tab_ratio: int = 0
    window_height: int = 0
    window_width: int = 0
    x_window: str = ""
    y_window: str = ""

    def _to_xml(self) -> str:
        return _element(
            "workbookView",
            [
                _optional("activeTab", self.active_tab),
                _optional("firstSheet", self.first_sheet),
                _optional("showHorizontalScroll", self.show_horizontal_scroll),
                _optional("showVerticalScroll", self.show_vertical_scroll),
                _optional("showSheetTabs", self.show_sheet_tabs),
                _optional("tabRatio", self.tab_ratio),
                _optional("windowHeight", self.window_height),
                _optional("windowWidth", self.window_width),
                _optional("xWindow", self.x_window),
                _optional("yWindow", self.y_window),
            ],
        )

    @classmethod
    def _from_element(cls, element: ET.Element) -> WorkbookView:
        return cls(
            active_tab=_int(element, "activeTab"),
            first_sheet=_int(element, "firstSheet"),
            show_horizontal_scroll=_bool(element, "showHorizontalScroll"),
            show_vertical_scroll=_bool(element, "showVerticalScroll"),
            show_sheet_tabs=_bool(element, "showSheetTabs"),
            tab_ratio=_int(element, "tabRatio"),
            window_height=_int(element, "windowHeight"),
            window_width=_int(element, "windowWidth"),
            x_window=element.get("xWindow", ""),
            y_window=element.get("yWindow", ""),
        )


@dataclass
class SheetEntry:
    """A sheet listed in the workbook, with its relationship id and visibility."""

    name: str = ""
    sheet_id: str = ""
    id: str = ""
    state: str = ""

    def _to_xml(self) -> str:
        attrs = [_optional("name", self.name), _optional("sheetId", self.sheet_id)]
        if self.id:
            attrs.append(("xmlns:relationships", RELATIONSHIPS_NAMESPACE))
            attrs.append(("relationships:id", self.id))
        attrs.append(_optional("state", self.state))
        return _element("sheet", attrs)

    @classmethod
    def _from_element(cls, element: ET.Element) -> SheetEntry:
        return cls(
            name=element.get("name", ""),
            sheet_id=element.get("sheetId", ""),
            id=element.get(f"{{{RELATIONSHIPS_NAMESPACE}}}id", ""),
            state=element.get("state", ""),
        )


@dataclass
class DefinedName:
    """A named range or formula."""

    data: str = ""
    name: str = ""
    comment: str = ""
    custom_menu: str = ""
    description: str = ""
    help: str = ""
    shortcut_key: str = ""
    status_bar: str = ""
    local_sheet_id: int = 0
    function_group_id: int = 0
    function: bool = False
    hidden: bool = False
    vb_procedure: bool = False
    publish_to_server: bool = False
    workbook_parameter: bool = False
    xlm: bool = False

    def _to_xml(self) -> str:
        body = "\n".join(escape_text(part) for part in self.data.split("\n"))
        return _element(
            "definedName",
            [
                ("name", self.name),
                _optional("comment", self.comment),
                _optional("customMenu", self.custom_menu),
                _optional("description", self.description),
                _optional("help", self.help),
                _optional("shortcutKey", self.shortcut_key),
                _optional("statusBar", self.status_bar),
                _optional("localSheetId", self.local_sheet_id),
                _optional("functionGroupId", self.function_group_id),
                _optional("function", self.function),
                _optional("hidden", self.hidden),
                _optional("vbProcedure", self.vb_procedure),
                _optional("publishToServer", self.publish_to_server),
                _optional("workbookParameter", self.workbook_parameter),
                _optional("xml", self.xlm),
            ],
            body,
        )

    @classmethod
    def _from_element(cls, element: ET.Element) -> DefinedName:
        return cls(
            data="".join(element.itertext()),
            name=element.get("name", ""),
            comment=element.get("comment", ""),
            custom_menu=element.get("customMenu", ""),
            description=element.get("description", ""),
            help=element.get("help", ""),
            shortcut_key=element.get("shortcutKey", ""),
            status_bar=element.get("statusBar", ""),
            local_sheet_id=_int(element, "localSheetId"),
            function_group_id=_int(element, "functionGroupId"),
            function=_bool(element, "function"),
            hidden=_bool(element, "hidden"),
            vb_procedure=_bool(element, "vbProcedure"),
            publish_to_server=_bool(element, "publishToServer"),
            workbook_parameter=_bool(element, "workbookParameter"),
            xlm=_bool(element, "xml"),
        )


@dataclass
class CalcPr:
    calc_id: str = ""
    iterate_count: int = 0
    ref_mode: str = ""
    iterate: bool = False
    iterate_delta: float = 0.0

    def _to_xml(self) -> str:
        return _element(
            "calcPr",
            [
                _optional("calcId", self.calc_id),
                _optional("iterateCount", self.iterate_count),
                _optional("refMode", self.ref_mode),
                _optional("iterate", self.iterate),
                _optional("iterateDelta", float(self.iterate_delta)),
            ],
        )

    @classmethod
    def _from_element(cls, element: ET.Element) -> CalcPr:
        return cls(
            calc_id=element.get("calcId", ""),
            iterate_count=_int(element, "iterateCount"),
            ref_mode=element.get("refMode", ""),
            iterate=_bool(element, "iterate"),
            iterate_delta=_float(element, "iterateDelta"),
        )


def _parse_optional(root: ET.Element, name: str, kind: type[_T]) -> _T:
    element = _child(root, name)
    return kind() if element is None else kind._from_element(element)  # type: ignore[attr-defined]


def _parse_list(root: ET.Element, group: str, item: str, kind: type[_T]) -> list[_T]:
    container = _child(root, group)
    if container is None:
        return []
    return [kind._from_element(e) for e in _children(container, item)]  # type: ignore[attr-defined]


@dataclass
class Workbook:
    """The workbook document describing the sheets of a spreadsheet."""

    file_version: FileVersion = field(default_factory=FileVersion)
    workbook_pr: WorkbookPr = field(default_factory=WorkbookPr)
    book_views: list[WorkbookView] = field(default_factory=list)
    sheets: list[SheetEntry] = field(default_factory=list)
    defined_names: list[DefinedName] = field(default_factory=list)
    calc_pr: CalcPr = field(default_factory=CalcPr)

    @classmethod
    def from_xml(cls, data: str | bytes) -> Workbook:
        """Parse a workbook document."""
        root = ET.fromstring(data.lstrip())
        if _local(root.tag) != "workbook":
            raise ValueError(f"expected a workbook element, found {_local(root.tag)!r}")
        return cls(
            file_version=_parse_optional(root, "fileVersion", FileVersion),
            workbook_pr=_parse_optional(root, "workbookPr", WorkbookPr),
            book_views=_parse_list(root, "bookViews", "workbookView", WorkbookView),
            sheets=_parse_list(root, "sheets", "sheet", SheetEntry),
            defined_names=_parse_list(root, "definedNames", "definedName", DefinedName),
            calc_pr=_parse_optional(root, "calcPr", CalcPr),
        )

    def to_xml(self) -> str:
        """Return the workbook element as XML text, without a declaration."""
        return "".join(
            [
                f'<workbook xmlns="{NAMESPACE}">',
                self.file_version._to_xml(),
                self.workbook_pr._to_xml(),
                "<workbookProtection></workbookProtection>",
                "<bookViews>",
                *(view._to_xml() for view in self.book_views),
                "</bookViews>",
                "<sheets>",
                *(sheet._to_xml() for sheet in self.sheets),
                "</sheets>",
                "<definedNames>",
                *(name._to_xml() for name in self.defined_names),
                "</definedNames>",
                self.calc_pr._to_xml(),
                "</workbook>",
            ]
        )


def worksheet_file_for_sheet(
    sheet: SheetEntry,
    worksheets: Mapping[str, _T],
    sheet_xml_map: Mapping[str, str],
) -> _T | None:
    """Find the worksheet part belonging to a sheet entry, or None."""
    sheet_name = sheet_xml_map.get(sheet.id)
    if sheet_name is None:
        sheet_name = f"sheet{sheet.sheet_id}" if sheet.sheet_id else f"sheet{sheet.id}"
    return worksheets.get(sheet_name)