"""Reading and writing the ICET.DAT terminal configuration file."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass, field
from typing import Union

NAME_SIZE = 40
NUMBER_SIZE = 40
DIALER_ENTRIES = 20
MACRO_COUNT = 12
MACRO_SIZE = 64
RESERVED_SIZE = 4

MACRO_KEYS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_SETTINGS = (
    "baudrate",
    "stopbits",
    "localecho",
    "click",
    "curssiz",
    "finescrol",
    "boldallw",
    "autowrap",
    "delchr",
    "bckgrnd",
    "bckcolr",
    "eoltrns",
    "ansiflt",
    "ueltrns",
    "ansibbs",
    "eitbit",
    "fastr",
    "flowctrl",
    "eolchar",
    "ascdelay",
)

CONFIG_SIZE = (
    len(_SETTINGS)
    + DIALER_ENTRIES * (NAME_SIZE + NUMBER_SIZE)
    + MACRO_COUNT
    + RESERVED_SIZE
    + MACRO_COUNT * MACRO_SIZE
)

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class DialerEntry:
    """A stored autodial entry."""

    name: str = ""
    number: str = ""


def _empty_dialer() -> list[DialerEntry]:
    return [DialerEntry() for _ in range(DIALER_ENTRIES)]


def _empty_macros() -> list[str]:
    return [""] * MACRO_COUNT


@dataclass
class IcetConfig:
    """Terminal settings, dialer entries and macros as stored in ICET.DAT."""

    baudrate: int = 15
    stopbits: int = 0
    localecho: int = 0
    click: int = 2
    curssiz: int = 6
    finescrol: int = 0
    boldallw: int = 1
    autowrap: int = 1
    delchr: int = 0
    bckgrnd: int = 0
    bckcolr: int = 0
    eoltrns: int = 0
    ansiflt: int = 0
    ueltrns: int = 3
    ansibbs: int = 0
    eitbit: int = 1
    fastr: int = 2
    flowctrl: int = 1
    eolchar: int = 0
    ascdelay: int = 2
    dialer: list[DialerEntry] = field(default_factory=_empty_dialer)
    macro_keys: list[str] = field(default_factory=_empty_macros)
    reserved: bytes = bytes(RESERVED_SIZE)
    macros: list[str] = field(default_factory=_empty_macros)


def _decode_padded(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def _encode_padded(text: str, size: int, what: str) -> bytes:
    try:
        raw = text.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{what} holds characters that cannot be stored") from exc
    if len(raw) > size:
        raise ValueError(f"{what} is longer than {size} bytes")
    return raw.ljust(size, b"\0")


def _check_macro_key(key: str) -> str:
    if key == "" or (len(key) == 1 and key in MACRO_KEYS):
        return key
    raise ValueError(f"invalid macro key assignment {key!r}")


def parse_config(data: bytes) -> IcetConfig:
    """Decode the bytes of an ICET.DAT file."""
    if len(data) != CONFIG_SIZE:
        raise ValueError(f"configuration must be {CONFIG_SIZE} bytes, got {len(data)}")
    stream = io.BytesIO(data)
    settings = dict(zip(_SETTINGS, stream.read(len(_SETTINGS))))
    dialer = [
        DialerEntry(
            name=_decode_padded(stream.read(NAME_SIZE)),
            number=_decode_padded(stream.read(NUMBER_SIZE)),
        )
        for _ in range(DIALER_ENTRIES)
    ]
    macro_keys = [
        _check_macro_key("" if byte == 0 else chr(byte))
        for byte in stream.read(MACRO_COUNT)
    ]
    reserved = stream.read(RESERVED_SIZE)
    macros = [_decode_padded(stream.read(MACRO_SIZE)) for _ in range(MACRO_COUNT)]
    return IcetConfig(
        **settings,
        dialer=dialer,
        macro_keys=macro_keys,
        reserved=reserved,
        macros=macros,
    )


def serialize_config(config: IcetConfig) -> bytes:
    """Encode a configuration into the ICET.DAT byte layout."""
    out = bytearray()
    for name in _SETTINGS:
        value = getattr(config, name)
        if not isinstance(value, int) or not 0 <= value <= 255:
            raise ValueError(f"{name} must be a byte value, got {value!r}")
        out.append(value)

    if len(config.dialer) != DIALER_ENTRIES:
        raise ValueError(f"dialer must hold {DIALER_ENTRIES} entries")
    for number, entry in enumerate(config.dialer, 1):
        out += _encode_padded(entry.name, NAME_SIZE, f"dialer entry {number} name")
        out += _encode_padded(entry.number, NUMBER_SIZE, f"dialer entry {number} number")

    if len(config.macro_keys) != MACRO_COUNT:
        raise ValueError(f"macro_keys must hold {MACRO_COUNT} entries")
    for key in config.macro_keys:
        out += _check_macro_key(key).encode("ascii") or b"\0"

    if len(config.reserved) != RESERVED_SIZE:
        raise ValueError(f"reserved must be {RESERVED_SIZE} bytes")
    out += config.reserved

    if len(config.macros) != MACRO_COUNT:
        raise ValueError(f"macros must hold {MACRO_COUNT} entries")
    for number, macro in enumerate(config.macros, 1):
        out += _encode_padded(macro, MACRO_SIZE, f"macro {number}")

    return bytes(out)


def read_config(path: PathLike) -> IcetConfig:
    """Read and decode an ICET.DAT file."""
    with open(path, "rb") as handle:
        return parse_config(handle.read())


def write_config(config: IcetConfig, path: PathLike) -> None:
    """Encode a configuration and write it to a file."""
    data = serialize_config(config)
    with open(path, "wb") as handle:
        handle.write(data)