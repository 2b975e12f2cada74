"""Build the xterm-index to Atari colour table from an exported palette."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import NamedTuple, Sequence, Union

PALETTE_ENTRIES = 256
PALETTE_BYTES = PALETTE_ENTRIES * 3
CUBE_START = 16
GRAY_START = 232
DEFAULT_PALETTE = "altirra_palette.pal"


class Color(NamedTuple):
    """An RGB colour with 8-bit components."""

    r: int
    g: int
    b: int


def load_palette(path: Union[str, "os.PathLike[str]"]) -> list[Color]:
    """Read a 256-entry RGB palette file and keep the 128 colours usable outside GTIA modes."""
    data = Path(path).read_bytes()
    if len(data) < PALETTE_BYTES:
        raise ValueError(f"palette file {path} holds fewer than {PALETTE_ENTRIES} colours")
    return [Color(*data[offset:offset + 3]) for offset in range(0, PALETTE_BYTES, 6)]


def xterm_rgb(code: int) -> Color:
    """Return the RGB value of an xterm 256-colour index."""
    if not 0 <= code <= 255:
        raise ValueError(f"xterm colour index {code} out of range")
    if code < CUBE_START:
        if code == 8:
            return Color(127, 127, 127)
        level = 255 if code > 8 else 229 if code == 7 else 205
        r = level if code & 1 else 92 if code == 12 else 0
        g = level if code & 2 else 92 if code == 12 else 0
        b = 238 if code == 4 else level if code & 4 else 0
        return Color(r, g, b)
    if code < GRAY_START:
        red, rest = divmod(code - CUBE_START, 36)
        green, blue = divmod(rest, 6)
        return Color(*(v * 40 + 55 if v else 0 for v in (red, green, blue)))
    level = (code - GRAY_START) * 10 + 8
    return Color(level, level, level)


def _distance(a: Color, b: Color) -> int:
    return (a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2


def nearest_atari_color(palette: Sequence[Color], color: Color) -> int:
    """Return the Atari colour value (index shifted left by one) nearest to the given colour."""
    if not palette:
        raise ValueError("palette is empty")
    index = min(range(len(palette)), key=lambda i: _distance(palette[i], color))
    return index << 1


def build_table(palette: Sequence[Color]) -> list[int]:
    """Map every xterm colour index to an Atari colour value."""
    table = []
    for code in range(256):
        value = nearest_atari_color(palette, xterm_rgb(code))
        if code >= GRAY_START:
            # keep the grayscale ramp gray and never black
            if value & 0xF0:
                value &= 0x0F
            if value == 0:
                value = 0x02
        table.append(value)
    return table


def format_asm_table(table: Sequence[int]) -> str:
    """Render the table as assembler byte directives."""
    if len(table) != 256:
        raise ValueError(f"table must have 256 entries, got {len(table)}")
    rows = (
        "\t.byte " + ", ".join(f"${value:02x}" for value in table[start:start + 16])
        for start in range(0, 256, 16)
    )
    return "xterm_index_to_atari\n" + "\n".join(rows) + "\n"


def _report_lines(palette: Sequence[Color], table: Sequence[int]):
    for code, value in enumerate(table):
        if code == CUBE_START:
            yield "colors 16-231 are a 6x6x6 color cube"
        elif code == GRAY_START:
            yield "colors 232-255 are a grayscale ramp, intentionally leaving out black and white"
        rgb = xterm_rgb(code)
        atari = palette[value >> 1]
        yield (
            f"{code:3d}: {rgb.r:02X} {rgb.g:02X} {rgb.b:02X}"
            f" --> {value:02x} ({atari.r:02x} {atari.g:02x} {atari.b:02x})"
        )


def main(argv: Sequence[str] | None = None) -> int:
    """Print the colour mapping report and the assembler table."""
    parser = argparse.ArgumentParser(
        description="Map xterm colour indexes to Atari colour values."
    )
    parser.add_argument("palette", nargs="?", default=DEFAULT_PALETTE,
                        help="256-entry RGB palette file")
    args = parser.parse_args(argv)

    try:
        palette = load_palette(args.palette)
    except OSError:
        print("can't open file")
        return 1
    except ValueError:
        print("can't read file")
        return 1

    table = build_table(palette)
    for line in _report_lines(palette, table):
        print(line)
    print("\nCopy and paste into vt2.asm:\n")
    print(format_asm_table(table))
    return 0


if __name__ == "__main__":
    sys.exit(main())