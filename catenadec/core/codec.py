"""Numeric field readers for the compact sensor encodings.

Every reader consumes a fixed number of bytes from a `ByteCursor`, advances
it, and raises `BufferUnderrun` when the payload is too short. Multi-byte
integers are big-endian.
"""

from __future__ import annotations

import math

from catenadec.core.cursor import ByteCursor


def read_u8(cursor: ByteCursor) -> int:
    return cursor.take(1)[0]


def read_u16(cursor: ByteCursor) -> int:
    return int.from_bytes(cursor.take(2), "big")


def read_i16(cursor: ByteCursor) -> int:
    raw = read_u16(cursor)
    if raw & 0x8000:
        raw -= 0x10000
    return raw


def read_u24(cursor: ByteCursor) -> int:
    return int.from_bytes(cursor.take(3), "big")


def read_u32(cursor: ByteCursor) -> int:
    return int.from_bytes(cursor.take(4), "big")


def read_fixed_voltage(cursor: ByteCursor) -> float:
    """Signed Q4.12 fixed point, in volts."""
    return read_i16(cursor) / 4096.0


def read_uflt16(cursor: ByteCursor) -> float:
    """Unsigned 16-bit float: 4-bit exponent, 12-bit mantissa, no specials.

    The result is always in [0, 1).
    """
    raw = read_u16(cursor)
    exponent = raw >> 12
    mantissa = (raw & 0xFFF) / 4096.0
    return math.ldexp(mantissa, exponent - 15)


def read_sflt16(cursor: ByteCursor) -> float:
    """Signed 16-bit float: sign bit, 4-bit exponent, 11-bit mantissa.

    0x8000 is negative zero.
    """
    raw = read_u16(cursor)
    if raw == 0x8000:
        return -0.0

    sign = -1.0 if raw & 0x8000 else 1.0
    exponent = (raw >> 11) & 0xF
    mantissa = (raw & 0x7FF) / 2048.0
    return sign * math.ldexp(mantissa, exponent - 15)


def read_sflt24(cursor: ByteCursor) -> float:
    """Signed 24-bit float with an explicit leading mantissa bit.

    Bit 23 is the sign, bits 22..16 a 7-bit exponent biased by 63, and bits
    15..0 the mantissa. Exponent 0x7F encodes infinity (mantissa 0) or NaN.
    Exponent 0 is denormal: no implicit one, scaled as exponent 1.
    """
    raw = read_u24(cursor)
    negative = bool(raw & 0x800000)
    exponent = (raw & 0x7F0000) >> 16
    mantissa = raw & 0x00FFFF

    if exponent == 0x7F:
        if mantissa == 0:
            return -math.inf if negative else math.inf
        return math.nan
    if exponent != 0:
        mantissa += 0x010000
    else:
        exponent = 1

    # [1, 2) when normalized, [0, 1) for denormals
    value = math.ldexp(mantissa / 0x010000, exponent - 63)
    return -value if negative else value


def read_lux(cursor: ByteCursor) -> float:
    """Illuminance in lux, carried as an Sflt24."""
    return read_sflt24(cursor)
