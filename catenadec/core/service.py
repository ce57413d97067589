"""Service layer used by CLI, public API, and message-bus integrations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from catenadec.core.config_loader import load_settings
from catenadec.core.dispatch import decode
from catenadec.core.metrics import celsius_to_fahrenheit, dew_point, heat_index_celsius
from catenadec.core.model import DecodeResult, DecoderSettings, UplinkRecord
from catenadec.envelope.base import EnvelopeAdapter
from catenadec.envelope.nodered import NodeRedAdapter

LOGGER = logging.getLogger(__name__)


class DecoderService:
    def __init__(
        self,
        *,
        adapter: EnvelopeAdapter | None = None,
        settings: DecoderSettings | None = None,
    ) -> None:
        self.load_warnings: tuple[str, ...] = ()
        if settings is None:
            loaded = load_settings()
            settings = loaded.settings
            self.load_warnings = loaded.warnings
        self.settings = settings
        self.adapter = adapter or NodeRedAdapter()

    def decode(self, port: int, payload: bytes) -> DecodeResult:
        return decode(port, payload, settings=self.settings)

    def decode_to_dict(
        self,
        port: int,
        payload: bytes,
        *,
        derived: bool | None = None,
    ) -> dict[str, Any] | None:
        result = self.decode(port, payload)
        if not result.ok:
            return None
        return self.render(result, derived=derived)

    def render(self, result: DecodeResult, *, derived: bool | None = None) -> dict[str, Any] | None:
        decoded = result.to_dict()
        if decoded is None:
            return None
        if derived is None:
            derived = self.settings.derived_metrics
        if derived and isinstance(result.record, UplinkRecord):
            decoded.update(self.derived_metrics(result.record))
        return decoded

    def derived_metrics(self, record: UplinkRecord) -> dict[str, float]:
        if record.t is None or record.rh is None:
            return {}

        temp_c = record.t / 256
        metrics = {
            "tempC": temp_c,
            "tDewC": dew_point(temp_c, record.rh),
        }
        t_heat = heat_index_celsius(
            celsius_to_fahrenheit(temp_c),
            record.rh,
            self.settings.heat_index,
        )
        if t_heat is not None:
            metrics["tHeatIndexC"] = t_heat
        return metrics

    def process_message(self, message: Mapping[str, Any]) -> dict[str, Any] | None:
        """Decode an inbound envelope; returns the outbound one or None on failure."""
        inbound = self.adapter.extract(message)
        result = self.decode(inbound.port, inbound.payload)
        if not result.ok:
            LOGGER.error("%s (%s)", self.failure_summary(inbound.port, inbound.payload), result.error)
            return None
        return self.adapter.attach(message, self.render(result) or {}, self.settings.node)

    def failure_summary(self, port: int, payload: bytes) -> str:
        ports = "/".join(str(p) for p in self.settings.uplink_ports)
        summary = f"not port {ports}/fmt 0x{self.settings.format_tag:02x}! port={port}"
        if port == self.settings.response_port:
            return summary
        if payload:
            return f"{summary} fmt={payload[0]}"
        return f"{summary} <no fmt byte>"
