"""Building blocks for the XML parts of XLSX spreadsheet files."""

__version__ = "0.1.0"

__all__ = [
    "content_types",
    "elements",
    "shared_strings",
    "style",
    "stylesheet",
    "theme",
    "workbook",
    "xf",
]