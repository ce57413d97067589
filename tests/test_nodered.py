from __future__ import annotations

import pytest

from catenadec.core.errors import EnvelopeError
from catenadec.envelope.nodered import NodeRedAdapter

_PAYLOAD = bytes.fromhex("50081780f800")


@pytest.mark.parametrize(
    "payload",
    [
        _PAYLOAD,
        bytearray(_PAYLOAD),
        list(_PAYLOAD),
        {"type": "Buffer", "data": list(_PAYLOAD)},
        "UAgXgPgA",
    ],
)
def test_extract_payload_forms(payload) -> None:
    inbound = NodeRedAdapter().extract({"payload": payload, "port": 1})
    assert inbound.payload == _PAYLOAD
    assert inbound.port == 1


def test_payload_raw_takes_precedence() -> None:
    message = {"payload_raw": "UAgXgPgA", "payload": {"already": "decoded"}, "port": 4}
    inbound = NodeRedAdapter().extract(message)
    assert inbound.payload == _PAYLOAD
    assert inbound.port == 4


@pytest.mark.parametrize(
    "message",
    [
        {"port": 1},
        {"payload": list(_PAYLOAD)},
        {"payload": list(_PAYLOAD), "port": "1"},
        {"payload": list(_PAYLOAD), "port": True},
        {"payload": [0x50, 300], "port": 1},
        {"payload": "not base64!", "port": 1},
        {"payload": 42, "port": 1},
    ],
)
def test_extract_rejects_bad_messages(message) -> None:
    with pytest.raises(EnvelopeError):
        NodeRedAdapter().extract(message)


def test_attach_replaces_payload_without_mutating_inbound() -> None:
    message = {"payload": list(_PAYLOAD), "port": 1, "topic": "sensors/5230"}
    outbound = NodeRedAdapter().attach(message, {"boot": 1}, {"nodeType": "Catena 5230"})

    assert outbound == {
        "payload": {"boot": 1},
        "port": 1,
        "topic": "sensors/5230",
        "local": {"nodeType": "Catena 5230"},
    }
    assert message["payload"] == list(_PAYLOAD)
    assert "local" not in message
