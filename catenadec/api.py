"""Stable public API for building tooling on top of catenadec.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from catenadec.core.errors import (
    BufferUnderrun,
    CatenadecError,
    ConfigLoadError,
    ConfigValidationError,
    DecodeError,
    EnvelopeError,
    InvalidPayload,
    UnrecognizedCommand,
    UnsupportedChannel,
    UnsupportedFormat,
)
from catenadec.core.metrics import dew_point, heat_index, heat_index_celsius
from catenadec.core.model import (
    Command,
    DecodeResult,
    DecoderSettings,
    HeatIndexLimits,
    ResponseRecord,
    Status,
    UplinkField,
    UplinkRecord,
)
from catenadec.core.service import DecoderService
from catenadec.envelope.base import EnvelopeAdapter
from catenadec.envelope.nodered import NodeRedAdapter

__all__ = [
    "CatenadecError",
    "DecodeError",
    "UnsupportedFormat",
    "UnsupportedChannel",
    "UnrecognizedCommand",
    "BufferUnderrun",
    "ConfigLoadError",
    "ConfigValidationError",
    "EnvelopeError",
    "InvalidPayload",
    "Command",
    "DecodeResult",
    "DecoderSettings",
    "HeatIndexLimits",
    "ResponseRecord",
    "Status",
    "UplinkField",
    "UplinkRecord",
    "EnvelopeAdapter",
    "NodeRedAdapter",
    "dew_point",
    "heat_index",
    "heat_index_celsius",
    "Client",
]


class Client:
    """Public client for decoding sensor payloads.

    A `Client` loads configuration once and then decodes raw payloads or whole
    message envelopes. Decode failures come back as `DecodeResult.error`
    rather than as exceptions.
    """

    def __init__(
        self,
        *,
        adapter: EnvelopeAdapter | None = None,
        settings: DecoderSettings | None = None,
    ) -> None:
        self._service = DecoderService(adapter=adapter, settings=settings)

    @property
    def settings(self) -> DecoderSettings:
        return self._service.settings

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def decode(self, port: int, payload: bytes) -> DecodeResult:
        return self._service.decode(port, payload)

    def decode_hex(self, port: int, payload: str) -> DecodeResult:
        try:
            data = bytes.fromhex(payload.replace(" ", ""))
        except ValueError as exc:
            return DecodeResult(port=port, error=InvalidPayload(f"Payload is not a hex string: {exc}"))
        return self._service.decode(port, data)

    def decode_message(self, message: Mapping[str, Any]) -> dict[str, Any] | None:
        return self._service.process_message(message)

    def dew_point(self, t: float, rh: float) -> float:
        return dew_point(t, rh)

    def heat_index(self, t: float, rh: float) -> float | None:
        return heat_index(t, rh, self.settings.heat_index)

    def heat_index_celsius(self, t: float, rh: float) -> float | None:
        return heat_index_celsius(t, rh, self.settings.heat_index)
