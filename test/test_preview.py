from fontconv.preview import debug_chars, glyph_lines, pixels_used


def test_glyph_lines(space_and_a):
    lines = glyph_lines(space_and_a, space_and_a.glyphs[65])
    assert len(lines) == 8
    assert lines[0] == "······"
    assert lines[1] == "█████·"


def test_pixels_used(space_and_a):
    assert pixels_used(space_and_a) == [0, 5, 5, 5, 5, 5, 5, 0]


def test_debug_chars_reports_missing(space_and_a, capsys):
    debug_chars(space_and_a, "AB")
    out = capsys.readouterr().out
    assert "'A' (U+0041) x=1..6 y=1..6 advance=7:" in out
    assert "'B' (U+0042): NOT FOUND" in out


def test_glyph_lines_use_grey_shades_at_2bpp(make_font):
    font = make_font({65: ["", " 3210"]}, bpp=2)
    lines = glyph_lines(font, font.glyphs[65])
    assert lines[1] == "█▓▒░"
