"""ZMODEM protocol constants and header field helpers."""

from __future__ import annotations

from enum import IntEnum, IntFlag

# ASCII control characters
SOH = 0x01
STX = 0x02
EOT = 0x04
ENQ = 0x05
ACK = 0x06
LF = 0x0A
CR = 0x0D
XON = 0x11
XOFF = 0x13
NAK = 0x15
CAN = 0x18

ZMAXHLEN = 0x10
ZMAXSPLEN = 0x400

ZPAD = 0x2A
ZDLE = 0x18
ZDLEE = 0x58
ZRESC = 0x7E

ZRUB0 = 0x6C
ZRUB1 = 0x6D

# Byte positions within a header array (type followed by four data bytes)
FTYPE = 0
ZF0 = 4
ZF1 = 3
ZF2 = 2
ZF3 = 1
ZP0 = 1
ZP1 = 2
ZP2 = 3
ZP3 = 4

ZF1_CANVHDR = 0x01

# ZSINIT sender capability
ZF0_TESCCTL = 0x40
ZF0_TESC8 = 0x80
ZATTNLEN = 0x20
ALTCOFF = ZF1

# ZFILE conversion options (ZF0)
ZF0_ZCBIN = 1
ZF0_ZCNL = 2
ZF0_ZCRESUM = 3

# ZFILE management options (ZF1)
ZF1_ZMSKNOLOC = 0x80
ZF1_ZMMASK = 0x1F
ZF1_ZMNEWL = 1
ZF1_ZMCRC = 2
ZF1_ZMAPND = 3
ZF1_ZMCLOB = 4
ZF1_ZMNEW = 5
ZF1_ZMDIFF = 6
ZF1_ZMPROT = 7
ZF1_ZMCHNG = 8

# ZFILE transport options (ZF2)
ZF2_ZTNOR = 0
ZF2_ZTLZW = 1
ZF2_ZTRLE = 3

# ZFILE extended options (ZF3)
ZF3_ZCANVHDR = 0x01
ZF3_ZRWOVR = 0x04
ZF3_ZXSPARS = 0x40

# ZCOMMAND
ZF0_ZCACK1 = 0x01

_DATA_LEN = 4


class FrameType(IntEnum):
    """ZMODEM frame types."""

    ZRQINIT = 0x00
    ZRINIT = 0x01
    ZSINIT = 0x02
    ZACK = 0x03
    ZFILE = 0x04
    ZSKIP = 0x05
    ZNAK = 0x06
    ZABORT = 0x07
    ZFIN = 0x08
    ZRPOS = 0x09
    ZDATA = 0x0A
    ZEOF = 0x0B
    ZFERR = 0x0C
    ZCRC = 0x0D
    ZCHALLENGE = 0x0E
    ZCOMPL = 0x0F
    ZCAN = 0x10
    ZFREECNT = 0x11
    ZCOMMAND = 0x12
    ZSTDERR = 0x13


class FrameIndicator(IntEnum):
    """Characters that follow ZPAD ZDLE and select the header encoding."""

    ZBIN = 0x41
    ZHEX = 0x42
    ZBIN32 = 0x43
    ZBINR32 = 0x44
    ZVBIN = 0x61
    ZVHEX = 0x62
    ZVBIN32 = 0x63
    ZVBINR32 = 0x64


class SubpacketEnd(IntEnum):
    """ZDLE sequences that end a data subpacket."""

    ZCRCE = 0x68
    ZCRCG = 0x69
    ZCRCQ = 0x6A
    ZCRCW = 0x6B


class ReceiverCapability(IntFlag):
    """Receiver capability flags carried in ZF0 of a ZRINIT frame."""

    CANFDX = 0x01
    CANOVIO = 0x02
    CANBRK = 0x04
    CANCRY = 0x08
    CANLZW = 0x10
    CANFC32 = 0x20
    ESCCTL = 0x40
    ESC8 = 0x80


def _check_data(header: bytes) -> bytes:
    data = bytes(header)
    if len(data) != _DATA_LEN:
        raise ValueError(f"header data must be {_DATA_LEN} bytes, got {len(data)}")
    return data


def pack_position(position: int) -> bytes:
    """Encode a file position as the four header bytes that follow the frame type."""
    if not 0 <= position <= 0xFFFFFFFF:
        raise ValueError(f"position {position} does not fit in 32 bits")
    return position.to_bytes(_DATA_LEN, "little")


def unpack_position(header: bytes) -> int:
    """Decode a file position from the four header bytes that follow the frame type."""
    data = _check_data(header)
    return int.from_bytes(data, "little")


def pack_flags(f0: int, f1: int, f2: int, f3: int) -> bytes:
    """Encode the four flag bytes in their header order (ZF3 first, ZF0 last)."""
    out = bytearray(_DATA_LEN)
    for index, value in ((ZF0, f0), (ZF1, f1), (ZF2, f2), (ZF3, f3)):
        if not 0 <= int(value) <= 255:
            raise ValueError(f"flag value {value} is not a byte")
        out[index - 1] = int(value)
    return bytes(out)


def unpack_flags(header: bytes) -> tuple[int, int, int, int]:
    """Decode the four header bytes into (ZF0, ZF1, ZF2, ZF3)."""
    data = _check_data(header)
    return data[ZF0 - 1], data[ZF1 - 1], data[ZF2 - 1], data[ZF3 - 1]