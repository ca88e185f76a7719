# sheetcraft

Building blocks for the XML parts inside an XLSX workbook: style sheets,
themes, shared strings, the workbook part and content types. It has no
dependencies beyond the standard library.

## Install

```
pip install sheetcraft
```

For running the tests:

```
pip install "sheetcraft[test]"
pytest
```

## What is inside

- `sheetcraft.style`: the `Style` object with its `Border`, `Fill`, `Font`
  and `Alignment`. `Style.make_xlsx_style_elements()` turns a style into the
  stored font, fill, border and `Xf` records. The helpers `new_style()`,
  `default_font()`, `default_fill()`, `default_border()` and
  `default_alignment()` give the defaults; `set_default_font(size, name)`
  changes the font they use (Verdana 12 to begin with). Constants such as
  `HELVETICA`, `RGB_LIGHT_GREEN` and `SOLID_CELL_FILL` name common values.
- `sheetcraft.elements`: the low-level style elements: `NumFmt`, `NumFmts`,
  `Val`, `Color`, `PatternFill`, `Fill`, `Fills`, `Line`, `Border`,
  `Borders`, `Font`, `Fonts`, `RgbColor` and `Colors`. Most have `equals`
  and `marshal`; `Colors.indexed_color(index)` looks up a 1-based palette
  index in a custom palette or the standard one.
- `sheetcraft.xf`: the cell formatting records `Xf`, `CellXfs`,
  `CellStyleXfs` and their `Alignment`, and the named styles `CellStyle`
  and `CellStyles`.
- `sheetcraft.stylesheet`: `StyleSheet` gathers fonts, fills, borders,
  formatting records and number formats. `reset()` fills it with the minimal
  definitions Excel expects; the `add_*` methods store an element unless an
  equal one exists and return its index; `new_num_fmt(code)` returns a
  built-in format or registers a custom one from id 164 on;
  `get_style(index)` and `number_format(index)` read a formatting record
  back; `argb_value(color)` resolves theme and indexed colours; `marshal()`
  writes the `styles.xml` text. `builtin_number_format(id)` looks up a
  built-in format code.
- `sheetcraft.theme`: `Theme.from_xml(data)` reads the colour scheme of a
  theme part, and `theme_color(index, tint)` resolves a theme colour to
  ARGB, lightening or darkening it by the tint. `parse_color_scheme(data)`
  returns the raw scheme entries.
- `sheetcraft.shared_strings`: `SharedStrings.from_xml(data)` reads
  `sharedStrings.xml`, rich text runs and their `RunProperties` included.
  `StringItem.to_xml()`, `RichRun.to_xml()` and `RunProperties.to_xml()`
  write entries back; `text_element(text)` adds `xml:space="preserve"`
  when `need_preserve(text)` says the whitespace would otherwise be lost.
- `sheetcraft.workbook`: `Workbook.from_xml(data)` and `Workbook.to_xml()`
  handle `workbook.xml` with its file version, properties, views, sheets,
  defined names and calculation settings. `worksheet_file_for_sheet(sheet,
  worksheets, sheet_xml_map)` finds the worksheet part of a sheet entry.
- `sheetcraft.content_types`: `make_default_content_types()` builds the
  content types every workbook package lists, and `ContentTypes.to_xml()`
  writes `[Content_Types].xml`.

## Example

```python
from sheetcraft.style import new_style
from sheetcraft.stylesheet import StyleSheet

styles = StyleSheet()
styles.reset()

style = new_style()
style.font.bold = True
font, fill, border, xf = style.make_xlsx_style_elements()
xf.font_id = styles.add_font(font)
xf.fill_id = styles.add_fill(fill)
xf.border_id = styles.add_border(border)
index = styles.add_cell_xf(xf)

print(styles.marshal())
```

## What it does not do

sheetcraft works on the XML text of individual parts. It does not open or
save `.xlsx` archives, has no model of sheets, rows or cells, does not read
or write worksheet parts, and supplies no ready-made theme or document
property parts: assembling a complete workbook file is left to the caller.