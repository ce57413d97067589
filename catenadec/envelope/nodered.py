"""Node-RED / The Things Network message envelopes."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from typing import Any

from catenadec.core.errors import EnvelopeError
from catenadec.core.model import InboundPayload


def _coerce_bytes(value: Any, *, key: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, Mapping) and value.get("type") == "Buffer":
        value = value.get("data")
    if isinstance(value, list):
        try:
            return bytes(value)
        except (TypeError, ValueError) as exc:
            raise EnvelopeError(f"Message '{key}' is not a list of byte values: {exc}") from exc
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise EnvelopeError(f"Message '{key}' is not valid base64: {exc}") from exc
    raise EnvelopeError(f"Message '{key}' has unsupported type {type(value).__name__}")


class NodeRedAdapter:
    """Reads `payload_raw` (already decoded upstream) or `payload`, plus `port`."""

    def extract(self, message: Mapping[str, Any]) -> InboundPayload:
        if "payload_raw" in message:
            key = "payload_raw"
        elif "payload" in message:
            key = "payload"
        else:
            raise EnvelopeError("Message has neither 'payload_raw' nor 'payload'")

        port = message.get("port")
        if isinstance(port, bool) or not isinstance(port, int):
            raise EnvelopeError(f"Message 'port' must be an integer, got {port!r}")

        return InboundPayload(payload=_coerce_bytes(message[key], key=key), port=port)

    def attach(
        self,
        message: Mapping[str, Any],
        decoded: dict[str, Any],
        metadata: Mapping[str, str],
    ) -> dict[str, Any]:
        outbound = dict(message)
        outbound["payload"] = decoded
        outbound["local"] = dict(metadata)
        return outbound
