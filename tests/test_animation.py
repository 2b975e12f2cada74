import io

import pytest

from icetkit.animation import (
    FUJI_LOGO,
    GHOST_SHAPES,
    PACMAN_SHAPES_RIGHT,
    Terminal,
    flip_bits,
    logo_rows,
    main,
    run_demo,
)


@pytest.fixture
def term():
    return Terminal(io.BytesIO())


def output(term):
    return term.stream.getvalue()


def test_send_code_args_joins_with_semicolons(term):
    term.send_code_args([1, 2, 3], "m")
    assert output(term) == b"\x1b[1;2;3m"


def test_send_code_args_empty(term):
    term.reset_scroll_margins()
    assert output(term) == b"\x1b[r"


def test_arguments_are_bytes(term):
    term.sgr([48, 9, 0x10E])
    assert output(term) == b"\x1b[48;9;14m"


def test_set_position_sends_row_first(term):
    term.set_position(5, 7)
    assert output(term) == b"\x1b[7;5H"


def test_scroll_margins_defaults(term):
    term.set_scroll_margins()
    assert output(term) == b"\x1b[1;24r"


def test_clear_commands(term):
    term.clear_screen()
    term.clear_line()
    assert output(term) == b"\x1b[2J\x1b[2K"


def test_vdelay_without_count(term):
    term.vdelay()
    assert output(term) == b"\x1b[1/t"


def test_vdelay_with_count(term):
    term.vdelay(60)
    assert output(term) == b"\x1b[1;60/t"


def test_blit_bold_order(term):
    term.blit_bold(3, 4)
    assert output(term) == b"\x1b[2;4;3;1;1/t"


def test_underlay_colors(term):
    term.set_underlay_colors(1, 10, [2, 4])
    assert output(term) == b"\x1b[3;10;1;2;4/t"


def test_scroll_commands(term):
    term.set_scroll_lock(1)
    term.colors_vert_scroll_down(1, 0, 1, 0)
    term.colors_vert_scroll_up()
    assert output(term) == b"\x1b[4;1/t\x1b[5;1;0;1;0/t\x1b[6;1;1;1;0/t"


def test_screen_colors(term):
    term.set_screen_colors([0, 10, 2])
    assert output(term) == b"\x1b[10;0;10;2/t"


def test_pm_control_optional_parts(term):
    term.set_pm_control(1, 124)
    term.set_pm_control(0, 0, 0, 0xFA)
    assert output(term) == b"\x1b[11;1;124/t\x1b[11;0;0;0;250/t"


def test_pm_fill_defaults(term):
    term.pm_fill(2)
    assert output(term) == b"\x1b[13;2;0;128;0/t"


def test_pm_shape_and_move(term):
    term.set_pm_shape(0, 46, [56, 108])
    term.pm_vert_move(1, 103, 102, 10)
    assert output(term) == b"\x1b[14;0;46;56;108/t\x1b[15;1;103;102;10/t"


def test_line_size_and_reset(term):
    term.set_line_size(6)
    term.reset()
    assert output(term) == b"\x1b#6\x1bc"


def test_centered_large_text_repeat(term):
    term.write_centered_large_text(10, "Hi.", True)
    assert output(term) == b"\x1b[10;19HHi.\x1b[11;19HHi."


def test_centered_text(term):
    term.write_centered_text(12, "abcd")
    assert output(term) == b"\x1b[12;38Habcd"


def test_unfade_and_fade_are_mirrored():
    up = Terminal(io.BytesIO())
    down = Terminal(io.BytesIO())
    up.unfade(10, 11)
    down.fade(10, 11)
    up_parts = output(up).split(b"\x1b[1;2/t")
    down_parts = output(down).split(b"\x1b[1;2/t")
    assert len(up_parts) == 8
    assert up_parts[:-1] == down_parts[-2::-1]
    assert up_parts[0] == b"\x1b[3;10;1;" + b";".join([b"0"] * 10) + b"/t"


@pytest.mark.parametrize("value", [0, 1, 56, 108, 254, 255])
def test_flip_bits_round_trip(value):
    assert flip_bits(flip_bits(value)) == value


def test_flip_bits_single_bit():
    assert flip_bits(1) == 128
    assert flip_bits(0x0F) == 0xF0


def test_flip_bits_rejects_out_of_range():
    with pytest.raises(ValueError):
        flip_bits(256)


def test_logo_rows_shape():
    rows = logo_rows(FUJI_LOGO)
    assert len(rows) == len(FUJI_LOGO) // 2
    width = len(FUJI_LOGO[0])
    for offset, text in rows:
        assert offset + len(text) <= width
        assert set(text) <= {0x20, 219, 220, 223}
        assert text[:1] != b" " and text[-1:] != b" "


def test_logo_rows_first_row():
    offset, text = logo_rows(FUJI_LOGO)[0]
    assert offset == FUJI_LOGO[0].index("X")
    assert text == FUJI_LOGO[0].strip().replace("X", "\xdb").encode("latin-1")


def test_logo_rows_half_blocks():
    rows = logo_rows(["X X", "XX "])
    assert rows == [(0, bytes([219, 220, 223]))]


def test_shapes_mirror_with_flip_bits():
    assert all(len(shape) == len(GHOST_SHAPES[0]) for shape in GHOST_SHAPES)
    assert PACMAN_SHAPES_RIGHT[1] == PACMAN_SHAPES_RIGHT[3]
    mirrored = [flip_bits(v) for v in PACMAN_SHAPES_RIGHT[1]]
    assert mirrored == [28, 54, 127, 7, 127, 62, 28]


def test_run_demo_start_and_end(term):
    run_demo(term)
    data = output(term)
    assert data.startswith(b"\x1bc\x1b[10;0;10;2/t")
    assert data.endswith(b"That's all, folks!\x1b[24;1H")
    assert b"Power Without the Price" in data
    assert data.count(b"\x1bc") == 2


def test_main_writes_file(tmp_path):
    target = tmp_path / "demo.bin"
    assert main(["-o", str(target)]) == 0
    expected = Terminal(io.BytesIO())
    run_demo(expected)
    assert target.read_bytes() == output(expected)