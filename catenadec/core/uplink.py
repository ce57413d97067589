"""Bitmap-driven decoder for format 0x50 uplinks (ports 1 and 4)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from catenadec.core.codec import read_fixed_voltage, read_i16, read_lux, read_u8, read_uflt16
from catenadec.core.cursor import ByteCursor
from catenadec.core.errors import UnsupportedFormat
from catenadec.core.model import FORMAT_0X50, UplinkField, UplinkRecord


def _read_voltages(cursor: ByteCursor) -> dict[str, Any]:
    return {
        "v_bat": read_fixed_voltage(cursor),
        "v_bus": read_fixed_voltage(cursor),
        "v_sys": read_fixed_voltage(cursor),
    }


def _read_version(cursor: ByteCursor) -> dict[str, Any]:
    major, minor, patch, local = cursor.take(4)
    return {"version": f"{major}.{minor}.{patch}.{local}"}


def _read_boot(cursor: ByteCursor) -> dict[str, Any]:
    return {"boot": read_u8(cursor)}


def _read_environment(cursor: ByteCursor) -> dict[str, Any]:
    t = read_i16(cursor)
    rh = read_uflt16(cursor) * 100 / 65535.0
    return {"t": t, "rh": rh}


def _read_lux(cursor: ByteCursor) -> dict[str, Any]:
    return {"lux": read_lux(cursor)}


def _read_tap(cursor: ByteCursor) -> dict[str, Any]:
    return {"tap": read_u8(cursor)}


# Wire order: fields follow each other in ascending bit order.
_FIELD_READERS: tuple[tuple[UplinkField, Callable[[ByteCursor], dict[str, Any]]], ...] = (
    (UplinkField.VOLTAGES, _read_voltages),
    (UplinkField.VERSION, _read_version),
    (UplinkField.BOOT, _read_boot),
    (UplinkField.ENVIRONMENT, _read_environment),
    (UplinkField.LUX, _read_lux),
    (UplinkField.TAP, _read_tap),
)


def read_uplink(cursor: ByteCursor, *, format_tag: int = FORMAT_0X50) -> UplinkRecord:
    """Decode a format tag, a bitmap, and the fields the bitmap selects.

    Bits above the highest known field are ignored, as are bytes left over
    after the last selected field.
    """
    found = cursor.peek()
    if found != format_tag:
        raise UnsupportedFormat(found, format_tag)
    cursor.take(1)

    flags = read_u8(cursor)
    fields: dict[str, Any] = {}
    for bit, reader in _FIELD_READERS:
        if flags & bit:
            fields.update(reader(cursor))
    return UplinkRecord(**fields)


def decode_uplink(payload: bytes, *, format_tag: int = FORMAT_0X50) -> UplinkRecord:
    return read_uplink(ByteCursor(payload), format_tag=format_tag)
