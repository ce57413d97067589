from __future__ import annotations

import pytest

from catenadec.core.downlink import decode_response
from catenadec.core.errors import BufferUnderrun, UnrecognizedCommand
from catenadec.core.model import Command, Status


def _decode(hex_payload: str) -> dict:
    return decode_response(bytes.fromhex(hex_payload)).to_dict()


def test_device_version_without_model_uses_default() -> None:
    assert _decode("03 00 01020304 0000 05") == {
        "ResponseType": "Device Version",
        "Response": "Success",
        "AppVersion": "V1.2.3.4",
        "Model": 5230,
        "Rev": "Not Found",
    }


def test_device_version_with_model_and_revision() -> None:
    decoded = _decode("03 00 01020304 146e 02")
    assert decoded["Model"] == 5230
    assert decoded["Rev"] == "C"


@pytest.mark.parametrize(("revision", "letter"), [(0, "A"), (1, "B"), (3, "D"), (4, "E")])
def test_revision_letters(revision: int, letter: str) -> None:
    payload = bytes.fromhex("03000102030414 6f") + bytes([revision])
    assert decode_response(payload).rev == letter


def test_unmapped_revision_is_absent() -> None:
    decoded = _decode("03 02 01000000 146f 09")
    assert decoded["Model"] == 5231
    assert decoded["Response"] == "Failure"
    assert "Rev" not in decoded


def test_default_model_is_configurable() -> None:
    record = decode_response(bytes.fromhex("03000102030400000a"), default_model=5231)
    assert record.model == 5231
    assert record.rev == "Not Found"


def test_uplink_interval() -> None:
    record = decode_response(bytes.fromhex("07 00 00000e10"))
    assert record.command is Command.UPLINK_INTERVAL
    assert record.status is Status.SUCCESS
    assert record.to_dict() == {
        "ResponseType": "Uplink Interval",
        "Response": "Success",
        "UplinkInterval": 3600,
    }


@pytest.mark.parametrize(
    ("payload", "response_type", "response"),
    [
        ("0400", "AppEUI Set", "Success"),
        ("0501", "AppKey set", "Invalid Length"),
        ("0602", "Rejoin", "Failure"),
    ],
)
def test_status_only_commands(payload: str, response_type: str, response: str) -> None:
    assert _decode(payload) == {"ResponseType": response_type, "Response": response}


def test_unknown_status_is_absent() -> None:
    record = decode_response(bytes.fromhex("0405"))
    assert record.status is None
    assert record.to_dict() == {"ResponseType": "AppEUI Set"}


@pytest.mark.parametrize("payload", ["01", "02", "01ffff"])
def test_commands_without_payload(payload: str) -> None:
    assert _decode(payload) == {}


@pytest.mark.parametrize("command", [0x00, 0x08, 0x50, 0xFF])
def test_unknown_command(command: int) -> None:
    with pytest.raises(UnrecognizedCommand) as excinfo:
        decode_response(bytes([command, 0x00]))
    assert excinfo.value.command == command


@pytest.mark.parametrize("payload", ["", "07", "0700000e", "0300010203", "0300010203041400", "04"])
def test_short_payload_underruns(payload: str) -> None:
    with pytest.raises(BufferUnderrun):
        decode_response(bytes.fromhex(payload))
