"""Escape-sequence animation demo for the terminal's private graphics extensions."""

from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, Iterable, Sequence

ESC = b"\x1b"

FUJI_LOGO = (
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                 XXXX XXXXXXXX XXXX                 ",
    "                XXXXX XXXXXXXX XXXXX                ",
    "                XXXXX XXXXXXXX XXXXX                ",
    "                XXXXX XXXXXXXX XXXXX                ",
    "                XXXXX XXXXXXXX XXXXX                ",
    "               XXXXXX XXXXXXXX XXXXXX               ",
    "               XXXXXX XXXXXXXX XXXXXX               ",
    "              XXXXXX  XXXXXXXX  XXXXXX              ",
    "              XXXXXX  XXXXXXXX  XXXXXX              ",
    "             XXXXXXX  XXXXXXXX  XXXXXXX             ",
    "             XXXXXX   XXXXXXXX   XXXXXX             ",
    "            XXXXXXX   XXXXXXXX   XXXXXXX            ",
    "           XXXXXXXX   XXXXXXXX   XXXXXXXX           ",
    "          XXXXXXXX    XXXXXXXX    XXXXXXXX          ",
    "         XXXXXXXXX    XXXXXXXX    XXXXXXXXX         ",
    "        XXXXXXXXX     XXXXXXXX     XXXXXXXXX        ",
    "      XXXXXXXXXX      XXXXXXXX      XXXXXXXXXX      ",
    "   XXXXXXXXXXXXX      XXXXXXXX      XXXXXXXXXXXXX   ",
    "XXXXXXXXXXXXXXX       XXXXXXXX       XXXXXXXXXXXXXXX",
    "XXXXXXXXXXXXXX        XXXXXXXX        XXXXXXXXXXXXXX",
    "XXXXXXXXXXXXX         XXXXXXXX         XXXXXXXXXXXXX",
    "XXXXXXXXXXX           XXXXXXXX           XXXXXXXXXXX",
    "XXXXXXXXX             XXXXXXXX             XXXXXXXXX",
    "XXXXXX                XXXXXXXX                XXXXXX",
)

# Block characters for (upper half set, lower half set) combinations.
_BLOCK_CHARS = (0x20, 223, 220, 219)

PACMAN_SHAPES_RIGHT = (
    (56, 108, 254, 254, 254, 124, 56),
    (56, 108, 254, 224, 254, 124, 56),
    (56, 108, 224, 192, 224, 126, 56),
    (56, 108, 254, 224, 254, 124, 56),
)

# Ghost also moves vertically, hence the leading and trailing zeros.
GHOST_SHAPES = (
    (0, 60, 126, 153, 187, 255, 255, 255, 170, 0),
    (0, 60, 126, 187, 153, 255, 255, 255, 85, 0),
    (0, 60, 126, 221, 153, 255, 255, 255, 170, 0),
    (0, 60, 126, 153, 221, 255, 255, 255, 85, 0),
)

PACMAN_COLOR = 0xFA
GHOST_NORMAL_COLOR = 0xCC
GHOST_WEAK_COLOR = 0x78
LEFT_EDGE_PM = 48


def flip_bits(value: int) -> int:
    """Reverse the order of the eight bits of a byte."""
    if not 0 <= value <= 255:
        raise ValueError(f"{value} is not a byte value")
    return int(f"{value:08b}"[::-1], 2)


def logo_rows(logo: Sequence[str]) -> list[tuple[int, bytes]]:
    """Merge pairs of logo lines into half-block rows.

    Each row is returned as (column of first non-blank character, row bytes
    with leading and trailing blanks removed).
    """
    pairs = zip(logo[0::2], logo[1::2])
    rows = []
    for upper, lower in pairs:
        merged = bytes(
            _BLOCK_CHARS[(top != " ") | ((bottom != " ") << 1)]
            for top, bottom in zip(upper, lower)
        )
        stripped = merged.lstrip(b" ")
        offset = len(merged) - len(stripped)
        rows.append((offset, stripped.rstrip(b" ")))
    return rows


class Terminal:
    """Writes control sequences for the terminal to a binary stream."""

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout.buffer

    def _write(self, data: bytes | str) -> None:
        if isinstance(data, str):
            data = data.encode("latin-1")
        self.stream.write(data)

    def send_code_args(self, args: Iterable[int], code: str) -> None:
        """Send ESC [ followed by byte-sized arguments and a final code."""
        params = ";".join(str(int(arg) & 0xFF) for arg in args)
        self._write(ESC + b"[" + params.encode("ascii") + code.encode("ascii"))

    def sgr(self, args: Iterable[int] = ()) -> None:
        self.send_code_args(args, "m")

    def set_position(self, x: int, y: int) -> None:
        self.send_code_args((y, x), "H")

    def set_scroll_margins(self, top: int = 1, bottom: int = 24) -> None:
        self.send_code_args((top, bottom), "r")

    def reset_scroll_margins(self) -> None:
        self.send_code_args((), "r")

    def clear_screen(self) -> None:
        self.send_code_args((2,), "J")

    def clear_line(self) -> None:
        self.send_code_args((2,), "K")

    def send_private(self, args: Iterable[int]) -> None:
        """Send one of the terminal's private graphics commands."""
        self.send_code_args(args, "/t")

    def vdelay(self, delay: int = 0) -> None:
        """Ask the terminal to wait for vertical blanks (one if delay is 0)."""
        self.send_private((1,) if not delay else (1, delay))

    def blit_bold(self, x: int, y: int, x2: int = 1, y2: int = 1) -> None:
        self.send_private((2, y, x, y2, x2))

    def set_underlay_colors(self, pm_color: int, y: int, colors: Iterable[int]) -> None:
        self.send_private((3, y, pm_color, *colors))

    def set_scroll_lock(self, value: int) -> None:
        self.send_private((4, value))

    def colors_vert_scroll_down(self, num_lines: int = 1, scroll_bitmap: int = 1,
                                scroll_colors: int = 1, rotate: int = 0) -> None:
        self.send_private((5, num_lines, scroll_bitmap, scroll_colors, rotate))

    def colors_vert_scroll_up(self, num_lines: int = 1, scroll_bitmap: int = 1,
                              scroll_colors: int = 1, rotate: int = 0) -> None:
        self.send_private((6, num_lines, scroll_bitmap, scroll_colors, rotate))

    def set_screen_colors(self, colors: Iterable[int]) -> None:
        self.send_private((10, *colors))

    def set_pm_control(self, pnum: int, horiz: int, width: int | None = None,
                       color: int | None = None) -> None:
        args = [11, pnum, horiz]
        if width is not None:
            args.append(width)
        if color is not None:
            args.append(color)
        self.send_private(args)

    def pm_fill(self, pnum: int, start: int = 0, size: int = 128, data: int = 0) -> None:
        self.send_private((13, pnum, start, size, data))

    def set_pm_shape(self, pnum: int, start: int, shape: Iterable[int]) -> None:
        self.send_private((14, pnum, start, *shape))

    def pm_vert_move(self, pnum: int, src: int, dst: int, size: int) -> None:
        self.send_private((15, pnum, src, dst, size))

    def set_line_size(self, size: int) -> None:
        self._write(ESC + b"#" + str(size).encode("ascii"))

    def reset(self) -> None:
        self._write(ESC + b"c")

    def write_centered_large_text(self, line: int, msg: str, repeat: bool = False) -> None:
        """Write text centred on a double-width line, optionally on the next line too."""
        x = 20 - len(msg) // 2
        self.set_position(x, line)
        self._write(msg)
        if repeat:
            self.set_position(x, line + 1)
            self._write(msg)

    def write_centered_text(self, line: int, msg: str) -> None:
        x = 40 - len(msg) // 2
        self.set_position(x, line)
        self._write(msg)

    def _fade_levels(self, first_row: int, last_row: int, levels: Iterable[int]) -> None:
        count = 5 * (last_row - first_row + 1)
        for level in levels:
            self.set_underlay_colors(1, first_row, [level] * count)
            self.vdelay(2)

    def unfade(self, first_row: int, last_row: int) -> None:
        """Brighten the underlay colours of a row range from black."""
        self._fade_levels(first_row, last_row, range(0, 13, 2))

    def fade(self, first_row: int, last_row: int) -> None:
        """Darken the underlay colours of a row range to black."""
        self._fade_levels(first_row, last_row, range(12, -1, -2))


def _titles(term: Terminal) -> None:
    top = 10
    term.set_position(1, top)
    term.set_line_size(3)
    term.set_position(1, top + 1)
    term.set_line_size(4)
    term.sgr((48, 9, 0))
    term.write_centered_large_text(top, "Hi.", True)
    term.vdelay(60)
    term.unfade(top, top + 1)
    term.vdelay(60 * 3)
    term.fade(top, top + 1)
    term.write_centered_large_text(top, "Getting things ready for you.", True)
    term.unfade(top, top + 1)
    term.vdelay(60 * 3)
    term.fade(top, top + 1)
    term.write_centered_large_text(top, "This might take a few minutes.", True)
    term.write_centered_text(top + 2, "Don't turn off your PC")
    term.unfade(top, top + 2)
    term.vdelay(60 * 3)
    term.fade(top, top + 2)
    # clearing the whole screen would flash the text, so clear the lines instead
    for row in range(top, top + 3):
        term.set_position(1, row)
        term.clear_line()
    term.sgr()
    term.clear_screen()


def _rainbow_logo(term: Terminal) -> None:
    rows = logo_rows(FUJI_LOGO)
    width = len(FUJI_LOGO[0])
    height = len(rows)
    left = (80 - width) // 2
    top = 2
    slogan_row = top + height + 2

    term.sgr((38, 9, 0))
    for y, (offset, text) in enumerate(rows):
        term.set_position(left + offset + 1, top + y)
        term._write(text)

    term.set_position(1, slogan_row)
    term.set_line_size(6)
    term.write_centered_large_text(slogan_row, "Power Without the Price", False)
    term.unfade(slogan_row, slogan_row)

    term.set_scroll_margins(top, top + height - 1)
    for color in range(0, 0x10F, 2):
        term.vdelay(5)
        term.sgr((48, 9, color))
        term.colors_vert_scroll_down(1, 0, 1, 0)
    for color in range(0xC, -1, -2):
        term.vdelay(5)
        term.sgr((48, 9, color))
        term.colors_vert_scroll_down(1, 0, 1, 0)
    for _ in range(height):
        term.vdelay(5)
        term.colors_vert_scroll_down(1, 0, 1, 0)

    term.fade(slogan_row, slogan_row)
    term.reset_scroll_margins()


def _pac_person(term: Terminal) -> None:
    term.set_screen_colors((0, 0, 0))
    term.vdelay()
    for pnum in range(8):
        term.set_pm_control(pnum, 0)
    for pnum in range(5):
        term.pm_fill(pnum)
    term.sgr((0, 7))
    term.clear_screen()

    for row in range(1, 25):
        term.set_position(1, row)
        term.set_line_size(6)
        term.clear_line()

    heading_row = 2
    term.set_position(1, heading_row)
    term.write_centered_large_text(heading_row, "The Obligatory Pac Person Demo", False)

    term._write(b"\x0e")  # select graphics character set
    graph_top = 8
    term.set_position(1, graph_top)
    term._write("o" * 40)
    term.set_position(40, graph_top + 1)
    term._write("~")
    term.set_position(1, graph_top + 2)
    term._write("q" * 18 + "k  l" + "q" * 18)
    for row in range(graph_top + 3, 25):
        term.set_position(19, row)
        term._write("x  x")
    term._write(b"\x0f")  # back to normal character set

    for level in range(0, 11, 2):
        term.set_screen_colors((level, 0, 2))
        term.vdelay(2)

    pacman_right = [list(shape) for shape in PACMAN_SHAPES_RIGHT]
    pacman_left = [[flip_bits(byte) for byte in shape] for shape in PACMAN_SHAPES_RIGHT]
    ghosts = [list(shape) for shape in GHOST_SHAPES]

    term.set_pm_control(0, 0, 0, PACMAN_COLOR)
    pacman_shape = 0
    term.set_pm_control(1, 0, 0, GHOST_NORMAL_COLOR)
    ghost_shape = 0

    frame = 0
    pacman_y = 46
    ghost_final_y = 44
    ghost_x = 76
    ghost_y = 103
    term.set_pm_control(1, ghost_x + LEFT_EDGE_PM)
    appear_time = 32
    ghost_settled = False

    for i in range(160 - 7 + 1):
        if frame % 5 == 0:
            term.set_pm_shape(0, pacman_y, pacman_right[pacman_shape % 4])
            pacman_shape += 1
        term.set_pm_control(0, i + LEFT_EDGE_PM)
        if i >= appear_time and (i == appear_time or frame % 16 == 0):
            term.set_pm_shape(1, ghost_y, ghosts[ghost_shape % 4])
            ghost_shape += 1
            if i == appear_time:
                ghost_y -= 1
        if i > appear_time:
            if frame % 16 != 0 and not ghost_settled:
                term.pm_vert_move(1, ghost_y + 1, ghost_y, len(ghosts[0]))
                if ghost_y == ghost_final_y:
                    ghost_settled = True
            if ghost_y > ghost_final_y:
                ghost_y -= 1
        if ghost_settled:
            term.set_pm_control(1, ghost_x + LEFT_EDGE_PM)
            ghost_x += 1
        term.vdelay(2)
        frame += 1

    term.set_position(40, graph_top + 1)
    term._write(" ")
    term.set_pm_control(1, ghost_x + LEFT_EDGE_PM, 0, GHOST_WEAK_COLOR)
    term.set_pm_shape(0, pacman_y, pacman_left[(pacman_shape - 1) % 4])

    i = 160 - 9
    while i >= 0:
        if frame % 5 == 0:
            term.set_pm_shape(0, pacman_y, pacman_left[pacman_shape % 4])
            pacman_shape += 1
        if frame % 16 == 0:
            term.set_pm_shape(1, ghost_y, ghosts[ghost_shape % 4])
            ghost_shape += 1
        if frame % 25 == 0:
            i -= 1  # pacman moves a little faster than the ghost
        term.set_pm_control(0, i + LEFT_EDGE_PM)
        ghost_x -= 1
        term.set_pm_control(1, ghost_x + LEFT_EDGE_PM)
        term.vdelay(2)
        frame += 1
        if ghost_x <= 0:
            break
        i -= 1

    for pnum in range(8):
        term.set_pm_control(pnum, 0)
    for level in range(10, -1, -2):
        term.set_screen_colors((level, 0, 2))
        term.vdelay(2)
    term.set_screen_colors((0, 0, 0))
    term.vdelay(60)
    term.clear_screen()


def run_demo(terminal: Terminal) -> None:
    """Play the whole animation on the given terminal."""
    terminal.reset()
    terminal.set_screen_colors((0, 10, 2))
    _titles(terminal)
    _rainbow_logo(terminal)
    _pac_person(terminal)
    terminal.reset()
    row = 7
    terminal.set_position(1, row)
    terminal.set_line_size(6)
    terminal.write_centered_large_text(row, "That's all, folks!", False)
    terminal.set_position(1, 24)


def main(argv: Sequence[str] | None = None) -> int:
    """Write the animation's control stream to standard output or a file."""
    parser = argparse.ArgumentParser(description="Generate the terminal animation demo.")
    parser.add_argument("-o", "--output", help="write the stream to this file")
    args = parser.parse_args(argv)
    if args.output:
        with open(args.output, "wb") as handle:
            run_demo(Terminal(handle))
    else:
        run_demo(Terminal(sys.stdout.buffer))
        sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())