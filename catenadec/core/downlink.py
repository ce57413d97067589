"""Decoder for port 3 responses to downlink commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from catenadec.core.codec import read_u8, read_u16, read_u32
from catenadec.core.cursor import ByteCursor
from catenadec.core.errors import UnrecognizedCommand
from catenadec.core.model import Command, ResponseRecord, Status

DEFAULT_MODEL = 5230
REVISION_NOT_FOUND = "Not Found"

_REVISIONS = ("A", "B", "C", "D", "E")


def _read_status(cursor: ByteCursor) -> Status | None:
    raw = read_u8(cursor)
    try:
        return Status(raw)
    except ValueError:
        return None


def _read_nothing(cursor: ByteCursor, default_model: int) -> dict[str, Any]:
    return {}


def _read_status_only(cursor: ByteCursor, default_model: int) -> dict[str, Any]:
    return {"status": _read_status(cursor)}


def _read_device_version(cursor: ByteCursor, default_model: int) -> dict[str, Any]:
    status = _read_status(cursor)
    major, minor, patch, local = cursor.take(4)
    model = read_u16(cursor)
    revision = read_u8(cursor)

    fields: dict[str, Any] = {
        "status": status,
        "app_version": f"V{major}.{minor}.{patch}.{local}",
    }
    if model == 0:
        # firmware that predates the model query reports zero
        fields["model"] = default_model
        fields["rev"] = REVISION_NOT_FOUND
    else:
        fields["model"] = model
        if revision < len(_REVISIONS):
            fields["rev"] = _REVISIONS[revision]
    return fields


def _read_uplink_interval(cursor: ByteCursor, default_model: int) -> dict[str, Any]:
    status = _read_status(cursor)
    return {"status": status, "uplink_interval": read_u32(cursor)}


_RESPONSE_READERS: dict[Command, Callable[[ByteCursor, int], dict[str, Any]]] = {
    Command.APPLICATION: _read_nothing,
    Command.RESET: _read_nothing,
    Command.DEVICE_VERSION: _read_device_version,
    Command.APPEUI_SET: _read_status_only,
    Command.APPKEY_SET: _read_status_only,
    Command.REJOIN: _read_status_only,
    Command.UPLINK_INTERVAL: _read_uplink_interval,
}


def read_response(cursor: ByteCursor, *, default_model: int = DEFAULT_MODEL) -> ResponseRecord:
    raw = read_u8(cursor)
    try:
        command = Command(raw)
    except ValueError:
        raise UnrecognizedCommand(raw) from None

    fields = _RESPONSE_READERS[command](cursor, default_model)
    return ResponseRecord(command=command, **fields)


def decode_response(payload: bytes, *, default_model: int = DEFAULT_MODEL) -> ResponseRecord:
    return read_response(ByteCursor(payload), default_model=default_model)
