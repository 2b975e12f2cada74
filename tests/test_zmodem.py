import pytest

from icetkit.zmodem import (
    ZF0,
    ZF3,
    ZP0,
    ZP3,
    FrameIndicator,
    FrameType,
    ReceiverCapability,
    SubpacketEnd,
    pack_flags,
    pack_position,
    unpack_flags,
    unpack_position,
)


def test_frame_type_values():
    assert FrameType(0x0A) is FrameType.ZDATA
    assert FrameType(0x13) is FrameType.ZSTDERR


def test_frame_indicator_values():
    assert FrameIndicator(0x42) is FrameIndicator.ZHEX
    assert FrameIndicator(0x64) is FrameIndicator.ZVBINR32


def test_subpacket_end_values():
    assert SubpacketEnd(0x6B) is SubpacketEnd.ZCRCW


def test_receiver_capability_combines():
    caps = ReceiverCapability(0x21)
    assert ReceiverCapability.CANFDX in caps
    assert ReceiverCapability.CANFC32 in caps
    assert ReceiverCapability.ESC8 not in caps


def test_position_low_byte_first():
    data = pack_position(0x12345678)
    assert data[ZP0 - 1] == 0x78
    assert data[ZP3 - 1] == 0x12


@pytest.mark.parametrize("position", [0, 1, 255, 256, 65535, 0xDEADBEEF, 0xFFFFFFFF])
def test_position_round_trip(position):
    assert unpack_position(pack_position(position)) == position


@pytest.mark.parametrize("position", [-1, 0x100000000])
def test_position_out_of_range(position):
    with pytest.raises(ValueError):
        pack_position(position)


def test_unpack_position_wrong_length():
    with pytest.raises(ValueError):
        unpack_position(b"\x00\x01\x02")


def test_flags_placement():
    data = pack_flags(0x23, 0, 0, 0x04)
    assert data[ZF0 - 1] == 0x23
    assert data[ZF3 - 1] == 0x04


@pytest.mark.parametrize("flags", [(0, 0, 0, 0), (1, 2, 3, 4), (255, 128, 7, 64)])
def test_flags_round_trip(flags):
    assert unpack_flags(pack_flags(*flags)) == flags


def test_flags_out_of_range():
    with pytest.raises(ValueError):
        pack_flags(256, 0, 0, 0)


def test_unpack_flags_wrong_length():
    with pytest.raises(ValueError):
        unpack_flags(b"\x00" * 5)