from __future__ import annotations

import math

import pytest

from catenadec.core import codec
from catenadec.core.cursor import ByteCursor
from catenadec.core.errors import BufferUnderrun


def _cursor(hex_payload: str) -> ByteCursor:
    return ByteCursor(bytes.fromhex(hex_payload))


def test_integers_are_big_endian() -> None:
    cursor = _cursor("1234 010203 00000e10 ff")
    assert codec.read_u16(cursor) == 0x1234
    assert codec.read_u24(cursor) == 0x010203
    assert codec.read_u32(cursor) == 3600
    assert codec.read_u8(cursor) == 0xFF
    assert cursor.offset == 10
    assert cursor.remaining == 0


def test_read_u32_does_not_go_negative() -> None:
    assert codec.read_u32(_cursor("ffffffff")) == 0xFFFFFFFF


@pytest.mark.parametrize(
    ("payload", "expected"),
    [("0000", 0), ("7fff", 32767), ("ffff", -1), ("8000", -32768), ("1780", 6016)],
)
def test_read_i16_sign_extends(payload: str, expected: int) -> None:
    assert codec.read_i16(_cursor(payload)) == expected


def test_fixed_voltage_is_q4_12() -> None:
    cursor = _cursor("1800 f800 4000")
    assert codec.read_fixed_voltage(cursor) == 1.5
    assert codec.read_fixed_voltage(cursor) == -0.5
    assert codec.read_fixed_voltage(cursor) == 4.0


def test_uflt16() -> None:
    assert codec.read_uflt16(_cursor("f800")) == 0.5
    assert codec.read_uflt16(_cursor("0000")) == 0.0
    assert codec.read_uflt16(_cursor("0fff")) == pytest.approx(4095 / 4096 * 2**-15)
    assert codec.read_uflt16(_cursor("ffff")) < 1.0


def test_sflt16_values() -> None:
    assert codec.read_sflt16(_cursor("7c00")) == 0.5
    assert codec.read_sflt16(_cursor("fc00")) == -0.5
    assert codec.read_sflt16(_cursor("0801")) == pytest.approx(2**-11 * 2**-14)


def test_sflt16_negative_zero() -> None:
    value = codec.read_sflt16(_cursor("8000"))
    assert value == 0.0
    assert math.copysign(1.0, value) == -1.0


def test_sflt24_normalized() -> None:
    assert codec.read_sflt24(_cursor("3f0000")) == 1.0
    assert codec.read_sflt24(_cursor("459000")) == 100.0
    assert codec.read_sflt24(_cursor("c59000")) == -100.0
    assert codec.read_lux(_cursor("459000")) == 100.0


def test_sflt24_specials() -> None:
    assert codec.read_sflt24(_cursor("7f0000")) == math.inf
    assert codec.read_sflt24(_cursor("ff0000")) == -math.inf
    assert math.isnan(codec.read_sflt24(_cursor("7f0001")))
    assert math.isnan(codec.read_sflt24(_cursor("ff8000")))


def test_sflt24_denormal_is_below_smallest_normal() -> None:
    smallest_normal = codec.read_sflt24(_cursor("010000"))
    denormal = codec.read_sflt24(_cursor("000001"))
    largest_denormal = codec.read_sflt24(_cursor("00ffff"))

    assert smallest_normal == 2.0**-62
    assert denormal == 2.0**-78
    assert 0 < denormal < smallest_normal
    assert 0 < largest_denormal < smallest_normal


def test_sflt24_zero_and_negative_zero() -> None:
    assert codec.read_sflt24(_cursor("000000")) == 0.0
    negative = codec.read_sflt24(_cursor("800000"))
    assert negative == 0.0
    assert math.copysign(1.0, negative) == -1.0


def test_underrun_raises_and_keeps_offset() -> None:
    cursor = _cursor("01")
    with pytest.raises(BufferUnderrun) as excinfo:
        codec.read_u16(cursor)
    assert excinfo.value.offset == 0
    assert excinfo.value.needed == 2
    assert excinfo.value.available == 1
    assert cursor.offset == 0


def test_cursor_rejects_out_of_range_start() -> None:
    with pytest.raises(ValueError):
        ByteCursor(b"\x01", offset=2)
