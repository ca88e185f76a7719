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
from sheetcraft.stylesheet import StyleSheet, builtin_number_format
from sheetcraft.theme import Theme
from sheetcraft.xf import Alignment, CellStyle, CellStyles, CellStyleXfs, CellXfs, Xf

HEAD = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<styleSheet xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main">'
)


def test_marshal_empty():
    assert StyleSheet().marshal() == HEAD + "</styleSheet>"


def test_marshal_with_font():
    styles = StyleSheet()
    font = Font(sz=Val("10"), name=Val("Andale Mono"), b=Val(), i=Val(), u=Val(), strike=Val())
    styles.fonts = Fonts(count=1, font=[font])
    expected = (
        HEAD + '<fonts count="1"><font><sz val="10"/><name val="Andale Mono"/>'
        "<b/><i/><u/><strike/></font></fonts></styleSheet>"
    )
    assert styles.marshal() == expected


def test_marshal_with_fill():
    styles = StyleSheet()
    pattern = PatternFill("solid", Color(rgb="#FFFFFF"), Color(rgb="#000000"))
    styles.fills = Fills(count=1, fill=[Fill(pattern)])
    expected = (
        HEAD + '<fills count="1"><fill><patternFill patternType="solid">'
        '<fgColor rgb="#FFFFFF"/><bgColor rgb="#000000"/></patternFill></fill></fills>'
        "</styleSheet>"
    )
    assert styles.marshal() == expected


def test_marshal_with_border():
    styles = StyleSheet()
    border = Border(left=Line(style="solid"))
    styles.borders = Borders(count=1, border=[border])
    expected = (
        HEAD + '<borders count="1"><border><left style="solid"></left>'
        "<right/><top/><bottom/></border></borders></styleSheet>"
    )
    assert styles.marshal() == expected


def _aligned_xf(apply_number_format: bool) -> Xf:
    return Xf(
        apply_alignment=True,
        apply_border=True,
        apply_font=True,
        apply_fill=True,
        apply_number_format=apply_number_format,
        apply_protection=True,
        alignment=Alignment("left", 1, True, 0, "middle", False),
    )


def test_marshal_with_cell_style_xf():
    styles = StyleSheet()
    styles.cell_style_xfs = CellStyleXfs(count=1, xf=[_aligned_xf(False)])
    expected = (
        HEAD + '<cellStyleXfs count="1"><xf applyAlignment="1" applyBorder="1" '
        'applyFont="1" applyFill="1" applyNumberFormat="0" applyProtection="1" '
        'borderId="0" fillId="0" fontId="0" numFmtId="0"><alignment horizontal="left" '
        'indent="1" shrinkToFit="1" textRotation="0" vertical="middle" wrapText="0"/>'
        "</xf></cellStyleXfs></styleSheet>"
    )
    assert styles.marshal() == expected


def test_marshal_with_cell_style():
    styles = StyleSheet()
    styles.cell_styles = CellStyles(
        count=1, cell_style=[CellStyle(name="Bob", built_in_id=31, xf_id=0)]
    )
    expected = (
        HEAD + '<cellStyles count="1"><cellStyle builtInId="31" name="Bob" xfId="0">'
        "</cellStyle></cellStyles></styleSheet>"
    )
    assert styles.marshal() == expected


def test_marshal_with_cell_xf():
    styles = StyleSheet()
    styles.cell_xfs = CellXfs(count=1, xf=[_aligned_xf(True)])
    expected = (
        HEAD + '<cellXfs count="1"><xf applyAlignment="1" applyBorder="1" '
        'applyFont="1" applyFill="1" applyNumberFormat="1" applyProtection="1" '
        'borderId="0" fillId="0" fontId="0" numFmtId="0"><alignment horizontal="left" '
        'indent="1" shrinkToFit="1" textRotation="0" vertical="middle" wrapText="0"/>'
        "</xf></cellXfs></styleSheet>"
    )
    assert styles.marshal() == expected


def test_marshal_with_num_fmt():
    styles = StyleSheet()
    styles.num_fmts = NumFmts()
    styles.add_num_fmt(NumFmt(164, "GENERAL"))
    expected = (
        HEAD + '<numFmts count="1"><numFmt numFmtId="164" formatCode="GENERAL"/>'
        "</numFmts></styleSheet>"
    )
    assert styles.marshal() == expected


def test_new_num_fmt():
    styles = StyleSheet()
    styles.num_fmts = NumFmts()
    assert styles.new_num_fmt("0") == NumFmt(1, "0")
    assert styles.new_num_fmt("0.00e+00") == NumFmt(11, "0.00e+00")
    assert styles.new_num_fmt("mm-dd-yy") == NumFmt(14, "mm-dd-yy")
    assert styles.new_num_fmt("hh:mm:ss") == NumFmt(164, "hh:mm:ss")
    assert len(styles.num_fmts.num_fmt) == 1


def test_new_num_fmt_general_and_reuse():
    styles = StyleSheet()
    assert styles.new_num_fmt("General") == NumFmt(0, "general")
    first = styles.new_num_fmt("yyyy")
    second = styles.new_num_fmt("dd/mm")
    assert first == NumFmt(164, "yyyy")
    assert second == NumFmt(165, "dd/mm")
    assert styles.new_num_fmt("yyyy") == first


def test_add_num_fmt():
    styles = StyleSheet()
    styles.num_fmts = NumFmts()
    styles.add_num_fmt(NumFmt(1, "0"))
    assert styles.num_fmts.count == 0
    styles.add_num_fmt(NumFmt(14, "mm-dd-yy"))
    assert styles.num_fmts.count == 0
    styles.add_num_fmt(NumFmt(164, "hh:mm:ss"))
    assert styles.num_fmts.count == 1
    styles.add_num_fmt(NumFmt(165, "yyyy/mm/dd"))
    assert styles.num_fmts.count == 2
    styles.add_num_fmt(NumFmt(165, "yyyy/mm/dd"))
    assert styles.num_fmts.count == 2


def test_get_style_no_named_index():
    assert StyleSheet().get_style(0).named_style_index is None


def test_get_style_named_index():
    styles = StyleSheet()
    named = CellStyleXfs()
    named.add_xf(Xf(xf_id=20))
    styles.cell_style_xfs = named
    styles.cell_xfs.add_xf(Xf(xf_id=0))
    assert styles.get_style(0).named_style_index == 0


def test_get_style_named_style_wins():
    styles = StyleSheet()
    named = CellStyleXfs()
    named.add_xf(Xf(xf_id=20, apply_border=True, apply_font=False))
    styles.cell_style_xfs = named
    styles.cell_xfs.add_xf(Xf(xf_id=0, apply_border=False, apply_font=True))
    style = styles.get_style(0)
    assert style.named_style_index == 0
    assert style.apply_border is True
    assert style.apply_font is True


def test_get_style_is_cached():
    styles = StyleSheet()
    styles.cell_xfs.add_xf(Xf())
    first = styles.get_style(0)
    assert first.apply_fill is False
    first.apply_fill = True
    assert styles.get_style(0).apply_fill is True


def test_populate_apply_flags():
    styles = StyleSheet()
    style = Style()
    styles.populate_style_from_xf(
        style, Xf(apply_border=True, apply_fill=True, apply_font=True, apply_alignment=True)
    )
    assert (style.apply_border, style.apply_fill, style.apply_font, style.apply_alignment) == (
        True, True, True, True,
    )
    styles.populate_style_from_xf(style, Xf())
    assert (style.apply_border, style.apply_fill, style.apply_font, style.apply_alignment) == (
        False, False, False, False,
    )


def test_populate_border():
    styles = StyleSheet()
    line = Line(style="fake", color=Color(rgb="00aaff"))
    borders = Borders()
    borders.add_border(Border(line, line, line, line))
    styles.borders = borders
    style = Style()
    styles.populate_style_from_xf(style, Xf(apply_border=True, border_id=0))
    assert style.border.left == "fake"
    assert style.border.left_color == "00aaff"
    assert style.border.right == "fake"
    assert style.border.right_color == "00aaff"
    assert style.border.top == "fake"
    assert style.border.top_color == "00aaff"
    assert style.border.bottom == "fake"
    assert style.border.bottom_color == "00aaff"


def test_populate_fill():
    styles = StyleSheet()
    fills = Fills()
    fills.add_fill(Fill(PatternFill("fake", Color(rgb="00aaff"), Color(rgb="ffaa00"))))
    styles.fills = fills
    style = Style()
    styles.populate_style_from_xf(style, Xf(apply_fill=True, fill_id=0))
    assert style.fill.pattern_type == "fake"
    assert style.fill.fg_color == "00aaff"
    assert style.fill.bg_color == "ffaa00"


def test_populate_font():
    styles = StyleSheet()
    fonts = Fonts()
    fonts.add_font(
        Font(
            sz=Val("10"),
            name=Val("0"),
            family=Val("2"),
            charset=Val("10"),
            color=Color(rgb="00aaff"),
            b=Val("1"),
            i=Val("1"),
            u=Val("1"),
            strike=Val("1"),
        )
    )
    styles.fonts = fonts
    style = Style()
    styles.populate_style_from_xf(style, Xf(apply_font=True, font_id=0))
    assert style.font.size == 10.0
    assert style.font.name == "0"
    assert style.font.family == 2
    assert style.font.charset == 10
    assert style.font.color == "00aaff"
    assert style.font.bold and style.font.italic
    assert style.font.underline and style.font.strike


def test_populate_alignment():
    styles = StyleSheet()
    style = Style()
    alignment = Alignment("left", 10, True, 80, "top", True)
    styles.populate_style_from_xf(style, Xf(apply_alignment=True, alignment=alignment))
    assert style.alignment.horizontal == "left"
    assert style.alignment.indent == 10
    assert style.alignment.shrink_to_fit is True
    assert style.alignment.text_rotation == 80
    assert style.alignment.vertical == "top"
    assert style.alignment.wrap_text is True


def test_argb_value_sources():
    theme = Theme(colors=["FFFFFF", "000000"])
    styles = StyleSheet(theme=theme, colors=Colors())
    assert styles.argb_value(Color(theme=0)) == "FFFFFFFF"
    assert styles.argb_value(Color(indexed=3)) == "FFFF0000"
    assert styles.argb_value(Color(rgb="FF123456")) == "FF123456"
    assert StyleSheet().argb_value(Color(rgb="AB", theme=0)) == "AB"


def test_number_format():
    styles = StyleSheet()
    assert styles.number_format(0) == "general"
    styles.cell_xfs.add_xf(Xf(num_fmt_id=14))
    styles.cell_xfs.add_xf(Xf(num_fmt_id=164))
    styles.cell_xfs.add_xf(Xf(num_fmt_id=200))
    assert styles.number_format(0) == "mm-dd-yy"
    assert styles.number_format(1) == "general"
    styles.add_num_fmt(NumFmt(164, "yyyy"))
    assert styles.number_format(1) == "yyyy"
    assert styles.number_format(2) == ""


def test_builtin_number_format():
    assert builtin_number_format(49) == "@"
    assert builtin_number_format(5) == ""


def test_reset_defaults():
    styles = StyleSheet()
    styles.reset()
    assert styles.fonts.count == 1
    assert styles.fonts.font[0].name.val == "Arial"
    assert [f.pattern_fill.pattern_type for f in styles.fills.fill] == ["none", "gray125"]
    assert styles.borders.count == 1
    assert styles.cell_xfs.count == 1
    assert styles.cell_style_xfs.count == 1
    assert styles.num_fmts.count == 0


def test_add_font_dedup_and_unnamed():
    styles = StyleSheet()
    assert styles.add_font(Font()) == 0
    assert styles.fonts.count == 0
    assert styles.add_font(Font(name=Val("Arial"))) == 0
    assert styles.add_font(Font(name=Val("Courier"))) == 1
    assert styles.add_font(Font(name=Val("Arial"))) == 0
    assert styles.fonts.count == 2


def test_add_fill_border_and_xfs_dedup():
    styles = StyleSheet()
    assert styles.add_fill(Fill(PatternFill("solid"))) == 0
    assert styles.add_fill(Fill(PatternFill("solid"))) == 0
    assert styles.add_border(Border()) == 0
    assert styles.add_border(Border(left=Line("thin"))) == 1
    assert styles.add_cell_xf(Xf(font_id=2)) == 0
    assert styles.add_cell_xf(Xf(font_id=2)) == 0
    assert styles.add_cell_style_xf(Xf()) == 0
    assert styles.add_cell_style_xf(Xf(fill_id=1)) == 1
    assert styles.cell_style_xfs.count == 2