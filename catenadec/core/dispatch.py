"""Port-based selection between the uplink and downlink-response decoders."""

from __future__ import annotations

import logging

from catenadec.core.cursor import ByteCursor
from catenadec.core.downlink import read_response
from catenadec.core.errors import DecodeError, InvalidPayload, UnsupportedChannel, UnsupportedFormat
from catenadec.core.model import DecodeResult, DecoderSettings, Record
from catenadec.core.uplink import read_uplink

LOGGER = logging.getLogger(__name__)

DEFAULT_SETTINGS = DecoderSettings()


def _as_bytes(payload: bytes | bytearray | list[int]) -> bytes:
    try:
        return bytes(payload)
    except (TypeError, ValueError) as exc:
        raise InvalidPayload(f"Payload is not a sequence of byte values: {exc}") from exc


def _decode_record(
    port: int,
    payload: bytes | bytearray | list[int],
    settings: DecoderSettings,
) -> Record:
    cursor = ByteCursor(_as_bytes(payload))
    if port == settings.response_port:
        return read_response(cursor, default_model=settings.default_model)

    if port not in settings.uplink_ports:
        raise UnsupportedChannel(port)

    if cursor.peek() != settings.format_tag:
        raise UnsupportedFormat(cursor.peek(), settings.format_tag)
    return read_uplink(cursor, format_tag=settings.format_tag)


def decode(
    port: int,
    payload: bytes | bytearray | list[int],
    *,
    settings: DecoderSettings = DEFAULT_SETTINGS,
) -> DecodeResult:
    """Decode one payload received on `port`.

    Never raises for a malformed payload; the error is returned in the result
    and no partial record is kept.
    """
    try:
        record = _decode_record(port, payload, settings)
    except DecodeError as exc:
        LOGGER.debug("Decode failed on port %s: %s", port, exc)
        return DecodeResult(port=port, error=exc)
    return DecodeResult(port=port, record=record)
