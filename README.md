# icetkit

Companion tools for the Ice-T terminal emulator.

## Installation

```
pip install icetkit
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install "icetkit[test]"
pytest
```

## Modules

### `icetkit.config`

This module reads and writes `ICET.DAT` configuration files.

- `read_config(path)` reads a file and returns an `IcetConfig`.
- `write_config(config, path)` writes a configuration to a file.
- `parse_config(data)` and `serialize_config(config)` do the same conversion on `bytes`.

`IcetConfig` is a dataclass with these fields:

- The byte-sized terminal settings: `baudrate`, `stopbits`, `localecho`, `click` and the rest. Each defaults to the terminal's own default.
- `dialer`: twenty `DialerEntry` records, each with a `name` and a `number`.
- `macro_keys`: twelve key assignments. Each is `0`-`9`, `A`-`Z`, or `""` for none.
- `reserved`: four bytes.
- `macros`: twelve macro strings.

Every operation raises `ValueError` in these cases:

- The data is the wrong size.
- A setting does not fit in a byte.
- A string is longer than its slot.
- A macro key is not one of the allowed characters.

### `icetkit.zmodem`

This module holds the ZMODEM protocol constants. They come as plain names and as enums: `FrameType`, `FrameIndicator`, `SubpacketEnd` and `ReceiverCapability` (an `IntFlag`).

It also has helpers for the four data bytes of a header, which follow the frame type:

- `pack_position(position)` and `unpack_position(header)` convert a 32-bit little-endian file position.
- `pack_flags(f0, f1, f2, f3)` and `unpack_flags(header)` convert the flag bytes in header order, `ZF3` first and `ZF0` last.

### `icetkit.palette`

This module builds the table that maps xterm 256-colour indices to Atari colour values.

- `load_palette(path)` reads a 256-entry RGB palette file. It keeps the 128 even entries as `Color` tuples.
- `xterm_rgb(code)` gives the RGB value of an xterm index.
- `nearest_atari_color(palette, color)` returns the nearest palette entry by RGB distance. The result is the entry's index shifted left by one.
- `build_table(palette)` maps all 256 indices. Indices 232-255 are forced to non-black grays.
- `format_asm_table(table)` renders the table as `.byte` lines under the label `xterm_index_to_atari`.

### `icetkit.animation`

`Terminal` writes control sequences to a binary stream. The default stream is standard output. It covers:

- cursor positioning
- SGR
- scroll margins
- screen and line clearing
- line size
- reset
- the terminal's private `ESC [ ... /t` commands: vertical-blank delays, underlay colours, colour scrolling, screen colours, and player/missile control, fill, shape and vertical move

It also has `fade` and `unfade` helpers, and centred text writers.

The module also has these functions:

- `flip_bits(value)` reverses the bits of a byte.
- `logo_rows(logo)` merges pairs of text lines into half-block character rows.
- `run_demo(terminal)` writes the whole animation: titles, a rainbow logo and a player/missile chase.

### `icetkit.tcp2con`

This module connects one TCP client at a time to the standard input and output of a child process. Standard error is merged into the output.

- `parse_args(argv)` returns `Options`. It raises `UsageError` when no command is given.
- `welcome_message(command_line)` builds the greeting sent to a client when it connects.
- `run_session(conn, command_line)` runs one session.
- `serve(options)` listens for clients and runs a session for each connection.

## Commands

### `icet-palette`

`icet-palette` prints a report of the mapping and the assembler table. The palette file defaults to `altirra_palette.pal`:

```
icet-palette altirra_palette.pal
```

### `icet-animation`

`icet-animation` writes the demo stream to standard output. With `-o FILE` it writes the stream to a file instead:

```
icet-animation -o demo.vt
```

### `tcp2con`

`tcp2con` serves a console program over TCP. It takes these options, which must come before the command:

- `-p=PORT` sets the port. The default is 9001.
- `-o` exits after one session.
- `-a` listens on all interfaces and accepts clients other than localhost.
- `-v` prints the version and exits.

```
tcp2con -p=9001 -o /usr/bin/python3 -i
```

The first word of the command must be an existing file.

A session ends when the process exits or when the client disconnects. The process is then terminated if it is still running.

## Limitations

`icetkit.zmodem` provides constants and header byte helpers only. It does not send or receive files.