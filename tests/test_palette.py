import pytest

from icetkit.palette import (
    Color,
    build_table,
    format_asm_table,
    load_palette,
    main,
    nearest_atari_color,
    xterm_rgb,
)


def _sample_palette():
    # 128 distinct colours spread over hue (high nibble) and luminance (low bits)
    return [Color((i * 37) % 256, (i * 91) % 256, (i * 2) % 256) for i in range(128)]


def _write_palette(path, colors256):
    path.write_bytes(bytes(component for c in colors256 for component in c))


def test_xterm_standard_colors():
    assert xterm_rgb(8) == Color(127, 127, 127)
    assert xterm_rgb(7) == Color(229, 229, 229)
    assert xterm_rgb(4) == Color(0, 0, 238)
    assert xterm_rgb(12) == Color(92, 92, 255)


def test_xterm_cube_corners():
    assert xterm_rgb(16) == Color(0, 0, 0)
    assert xterm_rgb(231) == Color(255, 255, 255)


def test_xterm_gray_ramp_is_gray_and_increasing():
    grays = [xterm_rgb(code) for code in range(232, 256)]
    assert all(c.r == c.g == c.b for c in grays)
    assert grays == sorted(grays)
    assert grays[0] == Color(8, 8, 8)


@pytest.mark.parametrize("code", [-1, 256])
def test_xterm_out_of_range(code):
    with pytest.raises(ValueError):
        xterm_rgb(code)


def test_nearest_exact_match_returns_shifted_index():
    palette = _sample_palette()
    for index in (0, 1, 37, 127):
        assert nearest_atari_color(palette, palette[index]) == index << 1


def test_nearest_prefers_first_on_tie():
    c = Color(10, 20, 30)
    assert nearest_atari_color([c, c], c) == 0


def test_nearest_empty_palette():
    with pytest.raises(ValueError):
        nearest_atari_color([], Color(0, 0, 0))


def test_build_table_invariants():
    table = build_table(_sample_palette())
    assert len(table) == 256
    assert all(value % 2 == 0 and 0 <= value <= 254 for value in table)
    assert all(0 < value <= 0x0F for value in table[232:])


def test_load_palette_takes_even_entries(tmp_path):
    colors = [Color(i, 255 - i, (i * 3) % 256) for i in range(256)]
    path = tmp_path / "p.pal"
    _write_palette(path, colors)
    palette = load_palette(path)
    assert len(palette) == 128
    assert palette == colors[::2]


def test_load_palette_short_file(tmp_path):
    path = tmp_path / "short.pal"
    path.write_bytes(bytes(100))
    with pytest.raises(ValueError):
        load_palette(path)


def test_format_asm_table_layout():
    text = format_asm_table([0] * 256)
    lines = text.splitlines()
    assert lines[0] == "xterm_index_to_atari"
    assert len(lines) == 17
    assert all(line.startswith("\t.byte $00") for line in lines[1:])
    assert lines[1].count("$") == 16


def test_format_asm_table_wrong_length():
    with pytest.raises(ValueError):
        format_asm_table([0] * 10)


def test_main_prints_report(tmp_path, capsys):
    path = tmp_path / "p.pal"
    _write_palette(path, [Color(i, i, i) for i in range(256)])
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "colors 16-231 are a 6x6x6 color cube" in out
    assert "Copy and paste into vt2.asm:" in out
    assert "xterm_index_to_atari" in out
    assert "  0: 00 00 00 --> 00" in out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.pal")]) == 1
    assert "can't open file" in capsys.readouterr().out