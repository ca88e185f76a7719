from sheetcraft.xf import (
    Alignment,
    CellStyle,
    CellStyles,
    CellStyleXfs,
    CellXfs,
    Xf,
)


def _sample_xf(apply_number_format=False):
    return Xf(
        apply_alignment=True,
        apply_border=True,
        apply_font=True,
        apply_fill=True,
        apply_number_format=apply_number_format,
        apply_protection=True,
        alignment=Alignment(
            horizontal="left",
            indent=1,
            shrink_to_fit=True,
            text_rotation=0,
            vertical="middle",
            wrap_text=False,
        ),
    )


def test_cell_style_xfs_marshal():
    xfs = CellStyleXfs()
    xfs.add_xf(_sample_xf())
    expected = (
        '<cellStyleXfs count="1"><xf applyAlignment="1" applyBorder="1" '
        'applyFont="1" applyFill="1" applyNumberFormat="0" applyProtection="1" '
        'borderId="0" fillId="0" fontId="0" numFmtId="0"><alignment '
        'horizontal="left" indent="1" shrinkToFit="1" textRotation="0" '
        'vertical="middle" wrapText="0"/></xf></cellStyleXfs>'
    )
    assert xfs.marshal({}, {}, {}) == expected


def test_cell_xfs_marshal():
    xfs = CellXfs(count=1, xf=[_sample_xf(apply_number_format=True)])
    expected = (
        '<cellXfs count="1"><xf applyAlignment="1" applyBorder="1" '
        'applyFont="1" applyFill="1" applyNumberFormat="1" applyProtection="1" '
        'borderId="0" fillId="0" fontId="0" numFmtId="0"><alignment '
        'horizontal="left" indent="1" shrinkToFit="1" textRotation="0" '
        'vertical="middle" wrapText="0"/></xf></cellXfs>'
    )
    assert xfs.marshal({}, {}, {}) == expected


def test_empty_xfs_marshal_to_nothing():
    assert CellXfs().marshal({}, {}, {}) == ""
    assert CellStyleXfs().marshal({}, {}, {}) == ""


def test_xf_marshal_maps_ids_and_xf_id():
    xf = Xf(border_id=2, fill_id=3, font_id=4, num_fmt_id=164, xf_id=7)
    result = xf.marshal({2: 1}, {3: 0}, {4: 2})
    assert 'borderId="1" fillId="0" fontId="2" numFmtId="164" xfId="7">' in result
    assert result.endswith("</xf>")


def test_alignment_marshal_defaults():
    assert Alignment().marshal() == (
        '<alignment horizontal="general" indent="0" shrinkToFit="0" '
        'textRotation="0" vertical="bottom" wrapText="0"/>'
    )


def test_alignment_equals():
    a = Alignment(horizontal="left", wrap_text=True)
    b = Alignment(horizontal="left", wrap_text=True)
    assert a.equals(b)
    b.wrap_text = False
    assert not a.equals(b)


def test_cell_style_marshal():
    styles = CellStyles(count=1, cell_style=[CellStyle(name="Bob", built_in_id=31, xf_id=0)])
    assert styles.marshal() == (
        '<cellStyles count="1"><cellStyle builtInId="31" name="Bob" xfId="0">'
        "</cellStyle></cellStyles>"
    )


def test_cell_style_marshal_booleans():
    style = CellStyle(name="A&B", hidden=True, custom_built_in=False)
    assert style.marshal() == (
        '<cellStyle customBuiltIn="false" hidden="true" name="A&amp;B" xfId="0">'
        "</cellStyle>"
    )


def test_xf_equals():
    def make():
        return Xf(
            apply_alignment=True,
            apply_border=True,
            apply_font=True,
            apply_fill=True,
            apply_protection=True,
        )

    xf_a = make()
    xf_b = make()
    assert xf_a.equals(xf_b)
    for name, changed in [
        ("apply_alignment", False),
        ("apply_border", False),
        ("apply_font", False),
        ("apply_fill", False),
        ("apply_protection", False),
        ("border_id", 1),
        ("fill_id", 1),
        ("font_id", 1),
        ("num_fmt_id", 1),
    ]:
        original = getattr(xf_b, name)
        setattr(xf_b, name, changed)
        assert not xf_a.equals(xf_b), name
        setattr(xf_b, name, original)
    assert xf_a.equals(xf_b)

    xf_a.xf_id = 1
    assert not xf_a.equals(xf_b)
    xf_b.xf_id = 1
    assert xf_a.equals(xf_b)
    xf_b.xf_id = 2
    assert not xf_a.equals(xf_b)